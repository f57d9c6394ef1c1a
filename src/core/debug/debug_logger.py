"""
debug_logger.py
---------------
Console logger for the loading screen runtime.

Every line is tagged with the time, the calling component and a kind
(SYSTEM, STATE, ACTION, TRACE, WARN, FAIL). Output is filtered per
category and by verbosity through LoggerConfig.
"""

import sys
from datetime import datetime


# ===========================================================
# Logger Configuration
# ===========================================================

class LoggerConfig:
    """Which categories print, and how verbose they are."""

    ENABLE_LOGGING = True
    LOG_LEVEL = "INFO"  # NONE, ERROR, WARN, INFO, VERBOSE

    CATEGORIES = {
        # Host runtime
        "system": True,
        "display": True,
        "timing": False,
        "level": True,

        # Loading screen
        "loading_screen": True,
        "presenter": True,

        # Services
        "settings": True,
        "loading": False,
        "event_manager": False,
        "render": False,
    }


class Colors:
    RESET = "\033[0m"
    WHITE = "\033[97m"
    GREEN = "\033[92m"
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    BLUE = "\033[94m"
    YELLOW = "\033[93m"
    RED = "\033[91m"


# ===========================================================
# Debug Logger
# ===========================================================

class DebugLogger:
    """Static logger, no instances needed."""

    LINE_LENGTH = 59
    VERBOSITY = ("NONE", "ERROR", "WARN", "INFO", "VERBOSE")

    # kind -> (color, minimum LOG_LEVEL that prints it)
    KINDS = {
        "SYSTEM": (Colors.MAGENTA, "INFO"),
        "STATE": (Colors.CYAN, "INFO"),
        "ACTION": (Colors.GREEN, "INFO"),
        "TRACE": (Colors.BLUE, "VERBOSE"),
        "WARN": (Colors.YELLOW, "WARN"),
        "FAIL": (Colors.RED, "ERROR"),
    }

    STATUS_COLORS = {
        "OK": Colors.GREEN,
        "LOADING": Colors.CYAN,
        "SKIPPED": Colors.YELLOW,
        "FAIL": Colors.RED,
    }

    @staticmethod
    def _enabled(category: str, required_level: str) -> bool:
        if not LoggerConfig.ENABLE_LOGGING:
            return False
        if not LoggerConfig.CATEGORIES.get(category, False):
            return False
        order = DebugLogger.VERBOSITY
        configured = LoggerConfig.LOG_LEVEL if LoggerConfig.LOG_LEVEL in order else "INFO"
        return order.index(required_level) <= order.index(configured)

    @staticmethod
    def _source() -> str:
        """Name of the class (or CamelCased module) that called the public method."""
        try:
            frame = sys._getframe(3)
        except ValueError:
            return "Unknown"

        owner = frame.f_locals.get("self")
        if owner is not None:
            return type(owner).__name__
        cls = frame.f_locals.get("cls")
        if isinstance(cls, type):
            return cls.__name__

        module = frame.f_code.co_filename.replace("\\", "/").rsplit("/", 1)[-1][:-3]
        return "".join(part.capitalize() for part in module.split("_"))

    @staticmethod
    def _emit(kind: str, msg: str, category: str):
        color, required = DebugLogger.KINDS[kind]
        if not DebugLogger._enabled(category, required):
            return
        stamp = datetime.now().strftime("%H:%M:%S")
        print(f"{color}[{stamp}] [{DebugLogger._source()}][{kind}] {msg}{Colors.RESET}")

    # ===========================================================
    # Public Log Methods
    # ===========================================================

    @staticmethod
    def system(msg: str, category: str = "system"):
        DebugLogger._emit("SYSTEM", msg, category)

    @staticmethod
    def state(msg: str, category: str = "system"):
        """State changes, e.g. loading screen shown/hidden."""
        DebugLogger._emit("STATE", msg, category)

    @staticmethod
    def action(msg: str, category: str = "system"):
        DebugLogger._emit("ACTION", msg, category)

    @staticmethod
    def trace(msg: str, category: str = "loading_screen"):
        """Only printed with LOG_LEVEL = VERBOSE."""
        DebugLogger._emit("TRACE", msg, category)

    @staticmethod
    def warn(msg: str, category: str = "system"):
        DebugLogger._emit("WARN", msg, category)

    @staticmethod
    def fail(msg: str, category: str = "system"):
        DebugLogger._emit("FAIL", msg, category)

    # ===========================================================
    # Startup Report
    # ===========================================================

    @staticmethod
    def section(title: str):
        """Header separating startup phases."""
        if not LoggerConfig.ENABLE_LOGGING:
            return
        rule = "─" * DebugLogger.LINE_LENGTH
        print(f"\n{Colors.WHITE}{rule}\n{f'[{title}]'.center(DebugLogger.LINE_LENGTH)}{Colors.RESET}\n")

    @staticmethod
    def init_entry(module: str, status: str = "OK"):
        """
        One dotted line per initialized component:

            > LoadingScreenController ............... [OK]
        """
        if not LoggerConfig.ENABLE_LOGGING:
            return
        label = f"> {module}"
        tag = f"[{status}]"
        padding = " " * max(30 - len(label), 1)
        dots = "." * max(DebugLogger.LINE_LENGTH - len(label) - len(padding) - len(tag) - 1, 1)
        color = DebugLogger.STATUS_COLORS.get(status.upper(), Colors.WHITE)
        print(f"{Colors.WHITE}{label}{padding}{dots} {color}{tag}{Colors.RESET}")

    @staticmethod
    def init_sub(detail: str, level: int = 1):
        """Indented detail under the previous init_entry."""
        if not LoggerConfig.ENABLE_LOGGING:
            return
        print(f"{' ' * (level * 4)}• {Colors.WHITE}{detail}{Colors.RESET}")
