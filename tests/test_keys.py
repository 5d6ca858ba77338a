import curses

from dbg_console.console import ConsoleState, DisabledConsole
from dbg_console.constants import VALID_CHARS
from dbg_console.config import Config, load_config
from dbg_console.keys import handle_key, key_handler


def _shown_console(*entries):
    console = ConsoleState()
    for e in entries:
        console.set_entry(e)
        console.confirm()
    console.show()
    return console


class TestHiddenConsole:
    def test_keys_ignored_while_hidden(self):
        console = ConsoleState()
        console.set_entry("x")
        console.confirm()
        assert not handle_key(console, ord("a"))
        assert not handle_key(console, curses.KEY_UP)
        assert not handle_key(console, "b")
        assert console.entry() == ""

    def test_disabled_console(self):
        console = DisabledConsole()
        console.show()
        assert not handle_key(console, ord("a"))


class TestCharacters:
    def test_typing_key_codes(self):
        console = _shown_console()
        for c in "ls -la":
            assert handle_key(console, ord(c))
        assert console.entry() == "ls -la"

    def test_typing_wide_chars(self):
        console = _shown_console()
        for c in "echo 'hi'":
            assert handle_key(console, c)
        assert console.entry() == "echo 'hi'"

    def test_rejects_chars_outside_allow_list(self):
        console = _shown_console()
        assert not handle_key(console, ord("!"))
        assert not handle_key(console, "é")
        assert not handle_key(console, 10)
        assert console.entry() == ""

    def test_custom_allow_list(self):
        console = _shown_console()
        assert handle_key(console, ord("!"), valid_chars="!?")
        assert not handle_key(console, ord("a"), valid_chars="!?")
        assert console.entry() == "!"

    def test_default_allow_list(self):
        for c in "azAZ09 ._-\"'/\\~":
            assert c in VALID_CHARS

    def test_only_single_characters_accepted(self):
        console = _shown_console()
        assert not handle_key(console, "")
        assert not handle_key(console, "ab")
        assert not handle_key(console, VALID_CHARS)
        assert console.entry() == ""

    def test_no_input_ignored(self):
        console = _shown_console()
        assert not handle_key(console, -1)

    def test_unmapped_special_key(self):
        console = _shown_console()
        assert not handle_key(console, curses.KEY_LEFT)
        assert console.entry() == ""


class TestSpecialKeys:
    def test_backspace_variants(self):
        console = _shown_console()
        console.receive_text("abcde")
        assert handle_key(console, curses.KEY_BACKSPACE)
        assert handle_key(console, 127)
        assert handle_key(console, 8)
        assert handle_key(console, "\x7f")
        assert console.entry() == "a"

    def test_arrows_skip_duplicates(self):
        console = _shown_console("one", "two", "two")
        assert handle_key(console, curses.KEY_UP)
        assert console.entry() == "two"
        handle_key(console, curses.KEY_UP)
        assert console.entry() == "one"
        handle_key(console, curses.KEY_DOWN)
        assert console.entry() == "two"
        handle_key(console, curses.KEY_DOWN)
        assert console.entry() == ""

    def test_edit_recalled_entry(self):
        console = _shown_console("say hi")
        handle_key(console, curses.KEY_UP)
        handle_key(console, curses.KEY_BACKSPACE)
        handle_key(console, ord("o"))
        assert console.entry() == "say ho"
        assert list(console.history()) == ["say hi"]


class TestKeyHandlerFromConfig:
    def test_config_allow_list_controls_accepted_keys(self, tmp_path):
        path = tmp_path / "console.yml"
        path.write_text('keys:\n  valid_chars: "0123456789+"\n', encoding="utf-8")
        console = _shown_console()
        on_key = key_handler(console, load_config(str(path)))

        assert on_key(ord("4"))
        assert on_key("+")
        assert not on_key(ord("a"))
        assert not on_key(" ")
        assert console.entry() == "4+"

    def test_special_keys_still_work(self, tmp_path):
        path = tmp_path / "console.yml"
        path.write_text('keys:\n  valid_chars: "x"\n', encoding="utf-8")
        console = _shown_console("older")
        on_key = key_handler(console, load_config(str(path)))
        assert on_key(curses.KEY_UP)
        assert console.entry() == "older"
        assert on_key(curses.KEY_BACKSPACE)
        assert console.entry() == "olde"

    def test_hidden_console_ignores_handler(self):
        console = ConsoleState()
        on_key = key_handler(console, Config())
        assert not on_key(ord("a"))
