"""
Logging for codex-1up — two channels, configured from ``main.cli``.

Diagnostics
    ``logging.getLogger(__name__)`` records from the installer layers:
    probe results, registry lookups, commands run and why a step was
    skipped.  They go to stderr so ``--json`` output on stdout stays
    parseable.  Level: ``--debug`` / ``--verbose`` / ``--quiet``, then
    ``CODEXUP_LOG_LEVEL``, then WARNING.  ``CODEXUP_LOG_FILE`` adds a
    file copy, at ``CODEXUP_LOG_FILE_LEVEL`` if set.

Install transcript
    Every line ``ConsoleLogger`` shows the user during ``install`` is also
    written to ``~/.codex-1up/logs/install-<timestamp>.log`` through the
    ``codexup.transcript`` logger (``attach_transcript``).  The transcript
    is kept apart from diagnostics: it never reaches stderr and is not
    filtered by the diagnostic level.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

# ── Formats ─────────────────────────────────────────────────────

# Default: the bare message, e.g. "registry lookup failed: timed out"
_FMT_PLAIN = "%(message)s"

# --verbose: which installer layer said it
_FMT_LAYER = "%(asctime)s [%(name)s] %(message)s"
_DATEFMT_CLOCK = "%H:%M:%S"

# --debug and CODEXUP_LOG_FILE: source location too
_FMT_SOURCE = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d: %(message)s"
_DATEFMT_FULL = "%Y-%m-%d %H:%M:%S"

# Transcript lines carry the installer verb as the level
_FMT_TRANSCRIPT = "%(asctime)s %(levelname)-5s %(message)s"

TRANSCRIPT_LOGGER = "codexup.transcript"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Route diagnostic records to stderr and, optionally, a file.

    Safe to call more than once: existing root handlers are replaced, so
    repeated ``CliRunner`` invocations do not stack handlers.

    Args:
        level: Level name for stderr; unknown names mean WARNING.
        log_file: ``CODEXUP_LOG_FILE``, if set.
        log_file_level: ``CODEXUP_LOG_FILE_LEVEL``; defaults to ``level``.
    """
    console_level = _parse_level(level)

    if console_level <= logging.DEBUG:
        console_fmt = logging.Formatter(_FMT_SOURCE, datefmt=_DATEFMT_CLOCK)
    elif console_level <= logging.INFO:
        console_fmt = logging.Formatter(_FMT_LAYER, datefmt=_DATEFMT_CLOCK)
    else:
        console_fmt = logging.Formatter(_FMT_PLAIN)

    stderr = logging.StreamHandler(sys.stderr)
    stderr.setLevel(console_level)
    stderr.setFormatter(console_fmt)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(stderr)
    root_level = console_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        root_level = min(root_level, file_level)

        to_file = logging.FileHandler(log_file, encoding="utf-8")
        to_file.setLevel(file_level)
        to_file.setFormatter(logging.Formatter(_FMT_SOURCE, datefmt=_DATEFMT_FULL))
        root.addHandler(to_file)

    # Root passes everything the most verbose handler wants.
    root.setLevel(root_level)

    # A broken log file must not abort an install.
    logging.raiseExceptions = False


def attach_transcript(log_file: Path) -> logging.Handler:
    """Start writing the install transcript to ``log_file``.

    Returns:
        The attached handler (pass it to ``detach_transcript`` when done).
    """
    log_file.parent.mkdir(parents=True, exist_ok=True)
    transcript = logging.getLogger(TRANSCRIPT_LOGGER)
    transcript.propagate = False
    transcript.setLevel(logging.DEBUG)

    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(_FMT_TRANSCRIPT, datefmt=_DATEFMT_FULL))
    transcript.addHandler(handler)
    return handler


def detach_transcript(handler: logging.Handler) -> None:
    """Stop the transcript and close its file."""
    transcript = logging.getLogger(TRANSCRIPT_LOGGER)
    transcript.removeHandler(handler)
    handler.close()


def _parse_level(level: str | None) -> int:
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
