from dbg_console.history import HistoryList, HistoryView, dedup


class TestDedup:
    def test_collapses_consecutive_runs(self):
        assert list(dedup(["3", "3", "2", "2", "2", "1"])) == ["3", "2", "1"]

    def test_keeps_separated_duplicates(self):
        assert list(dedup(["a", "b", "a"])) == ["a", "b", "a"]

    def test_empty(self):
        assert list(dedup([])) == []


class TestHistoryList:
    def test_push_is_newest_first(self):
        h = HistoryList()
        h.push("first")
        h.push("second")
        assert h[0] == "second"
        assert h[1] == "first"
        assert len(h) == 2

    def test_duplicates_kept(self):
        h = HistoryList()
        h.push("x")
        h.push("x")
        assert len(h) == 2

    def test_clear(self):
        h = HistoryList(["a", "b"])
        h.clear()
        assert len(h) == 0
        assert not h

    def test_equality(self):
        assert HistoryList(["a", "b"]) == HistoryList(["a", "b"])
        assert HistoryList(["a", "b"]) != HistoryList(["b", "a"])


class TestHistoryView:
    def test_view_is_restartable(self):
        view = HistoryList(["b", "a"]).view()
        assert list(view) == ["b", "a"]
        assert list(view) == ["b", "a"]

    def test_view_is_a_snapshot(self):
        h = HistoryList(["a"])
        view = h.view()
        h.push("b")
        h.clear()
        assert list(view) == ["a"]

    def test_deduped_view(self):
        view = HistoryView(["3", "3", "2", "1", "1"]).deduped()
        assert list(view) == ["3", "2", "1"]
        assert len(view) == 3
        assert list(view) == ["3", "2", "1"]

    def test_len_and_bool(self):
        assert len(HistoryView(["a", "a"])) == 2
        assert not HistoryView()
        assert HistoryView(["a"])

    def test_repr(self):
        assert repr(HistoryView(["a"])) == "HistoryView(['a'])"
