"""
Lightweight logger used across the project.
Level names are coloured with colorama.
"""
from __future__ import annotations
import sys
from datetime import datetime, timezone
from typing import Literal, Any

from colorama import Fore, Style, just_fix_windows_console

Level = Literal["DEBUG","INFO","WARN","ERROR"]

just_fix_windows_console()
COLORS = {
    "DEBUG": Fore.BLUE,
    "INFO": Fore.GREEN,
    "WARN": Fore.YELLOW,
    "ERROR": Fore.RED,
}
RESET = Style.RESET_ALL
LEVELS = ("DEBUG","INFO","WARN","ERROR")

class Logger:
    _order = {"DEBUG":10,"INFO":20,"WARN":30,"ERROR":40}

    def __init__(self, level: Level = "INFO"):
        self.threshold = self._order[level]

    def set_level(self, level: Level):
        self.threshold = self._order.get(level, 20)

    def enabled(self, lvl: Level) -> bool:
        return self._order[lvl] >= self.threshold

    def _emit(self, lvl: Level, msg: str, **extra: Any):
        if not self.enabled(lvl):
            return
        ts = datetime.now(timezone.utc).isoformat(timespec="seconds")
        extras = ""
        if extra:
            kv = " ".join(f"{k}={v}" for k,v in extra.items())
            extras = " " + kv
        color = COLORS[lvl]
        sys.stdout.write(f"{color}{ts} [{lvl}] {msg}{extras}{RESET}\n")

    def debug(self, msg: str, **kw): self._emit("DEBUG", msg, **kw)
    def info(self, msg: str, **kw): self._emit("INFO", msg, **kw)
    def warn(self, msg: str, **kw): self._emit("WARN", msg, **kw)
    def error(self, msg: str, **kw): self._emit("ERROR", msg, **kw)

logger = Logger("INFO")
