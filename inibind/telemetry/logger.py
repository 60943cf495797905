"""Structured bind logging utilities.

Responsibilities:
- Emit concise, deterministic event logs for one bind run.
- Route events through `loguru`; the package logger stays disabled until a
  caller (such as the CLI) opts in with `configure_cli_logging`.
"""

from __future__ import annotations

import sys
from typing import TextIO

from loguru import logger as _loguru_logger

_PACKAGE_NAME = "inibind"


def _sanitize_context_value(value: object) -> str:
    """Convert context values into stable, shell-safe tokens."""

    raw = str(value).strip()
    if not raw:
        return "none"
    return "".join(
        character if character.isalnum() or character in {"-", "_", ".", ":", "/"} else "_"
        for character in raw
    )


def _format_context(context: dict[str, object]) -> str:
    """Serialize context key/value pairs in deterministic key order."""

    if not context:
        return ""
    tokens = [
        f"{key}={_sanitize_context_value(context[key])}"
        for key in sorted(context.keys())
    ]
    return " " + " ".join(tokens)


def configure_cli_logging(level: str, sink: TextIO | None = None) -> None:
    """Enable package logs and replace loguru sinks with one plain-text sink."""

    _loguru_logger.enable(_PACKAGE_NAME)
    _loguru_logger.remove()
    _loguru_logger.add(sink or sys.stderr, format="{message}", level=level, colorize=False)


class BindLogger:
    """Emit deterministic event logs for section/key binding activity."""

    def _emit(self, level: str, event: str, **context: object) -> None:
        """Emit one structured bind log line."""

        line = f"[bind] level={level} event={event}{_format_context(context)}"
        _loguru_logger.log(level, line)

    def log_load_start(self, source: str) -> None:
        """Emit a load-start event."""

        self._emit("INFO", "start", source=source)

    def log_load_complete(self, source: str, applied: int, skipped: int) -> None:
        """Emit a load-complete event with applied/skipped assignment counts."""

        self._emit("INFO", "complete", source=source, applied=applied, skipped=skipped)

    def log_load_failure(self, source: str, error_type: str, line: int | None) -> None:
        """Emit a load-failure event without the offending value."""

        self._emit(
            "ERROR",
            "failure",
            source=source,
            error_type=error_type,
            line=line if line is not None else "none",
        )

    def log_section_skipped(self, section: str, line: int) -> None:
        """Emit an event for a section the target does not declare."""

        self._emit("DEBUG", "section_skipped", section=section, line=line)

    def log_key_skipped(self, key: str, line: int, reason: str) -> None:
        """Emit an event for an assignment that was not bound."""

        self._emit("DEBUG", "key_skipped", key=key, line=line, reason=reason)
