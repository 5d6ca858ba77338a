import time

from dbg_console.constants import DEFAULT_LOG_PATH
from dbg_console.types import ts_str


class DebugLogger:
    """Optional log file recording console events (confirms, clears, visibility)."""

    def __init__(self, path: str = DEFAULT_LOG_PATH):
        self.enabled = False
        self.path = path
        self._fh = None

    def start(self, path: str | None = None):
        if path is not None:
            self.path = path
        self._fh = open(self.path, "a", encoding="utf-8")
        self.enabled = True
        sep = f"\n{'='*60}\n  Session started: {time.strftime('%Y-%m-%d %H:%M:%S')}\n{'='*60}\n"
        self._fh.write(sep)
        self._fh.flush()

    def stop(self):
        self.enabled = False
        if self._fh:
            self._fh.close()
        self._fh = None

    def toggle(self) -> bool:
        if self.enabled:
            self.stop()
        else:
            self.start()
        return self.enabled

    def log_event(self, kind: str, detail: str = ""):
        if not self.enabled or not self._fh:
            return
        # Entries may hold anything the user typed; keep one event per line
        detail = detail.replace("\r", "\\r").replace("\n", "\\n")
        self._fh.write(f"{ts_str(time.time())} {kind:>8} | {detail}\n")
        self._fh.flush()
