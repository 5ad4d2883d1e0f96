"""Colored workflow logger: ANSI-colored console logging for screen workflows.

Each multi-step screen operation (load, upload, write, delete, flag toggle)
is logged with a color per stage so a submit can be traced end to end in
the terminal.

Color scheme:
    🔵 Blue    Load / refetch
    🟣 Magenta Asset upload
    🟢 Green   Store writes
    🟡 Yellow  Deletes
    🟠 Cyan    Featured flags
    🔴 Red     Errors
"""

import logging
import time
from contextlib import contextmanager
from typing import Any


# ── ANSI Color Codes ─────────────────────────────────────────────────

class _Colors:
    """ANSI escape codes for terminal colors."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    GRAY = "\033[90m"


# ── Workflow Stage Definitions ───────────────────────────────────────

class WorkflowStage:
    """Predefined workflow stages with colors and icons."""

    LOAD = ("LOAD", _Colors.BLUE, "📋")
    UPLOAD = ("UPLOAD", _Colors.MAGENTA, "🖼️")
    WRITE = ("WRITE", _Colors.GREEN, "💾")
    DELETE = ("DELETE", _Colors.YELLOW, "🗑️")
    FLAG = ("FLAG", _Colors.CYAN, "⭐")
    ERROR = ("ERROR", _Colors.RED, "❌")


# ── WorkflowLogger ───────────────────────────────────────────────────

class WorkflowLogger:
    """Color-coded logger for entity manager workflows.

    Usage:
        log = WorkflowLogger("EntityManagerWorkflow")
        with log.timed_step(WorkflowStage.UPLOAD, "Uploading banner.png"):
            url = await uploader.upload(...)
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)

    def step_start(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        label, color, icon = stage
        formatted = (
            f"{color}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{color}{message}{_Colors.RESET}"
        )
        self._logger.info(formatted + self._details(kwargs))

    def step_complete(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        label, color, icon = stage
        formatted = (
            f"{color}{icon} [{label}]{_Colors.RESET} "
            f"{_Colors.GREEN}✓ {message}{_Colors.RESET}"
        )
        self._logger.info(formatted + self._details(kwargs))

    def step_error(self, stage: tuple[str, str, str], message: str, error: Exception | None = None) -> None:
        label, _, icon = stage
        formatted = (
            f"{_Colors.RED}{_Colors.BOLD}❌ [{label}]{_Colors.RESET} "
            f"{_Colors.RED}{message}{_Colors.RESET}"
        )
        if error:
            formatted += f" {_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        self._logger.error(formatted)

    def detail(self, message: str, **kwargs: Any) -> None:
        """Log additional detail (gray/dimmed)."""
        formatted = f"   {_Colors.GRAY}├─ {message}{_Colors.RESET}"
        self._logger.info(formatted + self._details(kwargs))

    @contextmanager
    def timed_step(self, stage: tuple[str, str, str], message: str, **kwargs: Any):
        """Log start and end of a step with elapsed time; errors are logged and re-raised."""
        self.step_start(stage, message, **kwargs)
        start = time.perf_counter()
        try:
            yield
        except Exception as e:
            elapsed = time.perf_counter() - start
            self.step_error(stage, f"{message} failed after {elapsed:.2f}s", error=e)
            raise
        else:
            elapsed = time.perf_counter() - start
            self.step_complete(stage, f"{message} ({elapsed:.2f}s)")

    @staticmethod
    def _details(kwargs: dict[str, Any]) -> str:
        if not kwargs:
            return ""
        details = " | ".join(f"{k}={v}" for k, v in kwargs.items())
        return f" {_Colors.GRAY}({details}){_Colors.RESET}"
