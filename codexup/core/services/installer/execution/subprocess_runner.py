"""
L4 Execution — Core subprocess runner.

The single place where ``subprocess.run`` is called.  ``run_command``
is for mutating commands (honours dry-run, raises on failure);
``run_capture`` is for read-only probes (never raises).
"""

from __future__ import annotations

import json
import logging
import os
import re
import subprocess
import time
from typing import Any

from codexup.core.observability.reporter import NULL_LOGGER, InstallLogger
from codexup.core.services.installer.data.constants import PROBE_TIMEOUT_S
from codexup.core.services.installer.errors import NonZeroExitError, SpawnError

logger = logging.getLogger(__name__)

_NEEDS_QUOTING_RE = re.compile(r"[\s\"']")


def format_command(program: str, args: list[str] | tuple[str, ...] = ()) -> str:
    """Render a command for display: whitespace/quote-bearing args double-quoted."""
    parts = [program]
    for arg in args:
        parts.append(json.dumps(arg) if _NEEDS_QUOTING_RE.search(arg) else arg)
    return " ".join(parts)


def run_command(
    program: str,
    args: list[str] | tuple[str, ...] = (),
    *,
    dry_run: bool = False,
    log: InstallLogger = NULL_LOGGER,
    capture: bool = False,
    timeout: float | None = None,
    env_overrides: dict[str, str] | None = None,
    cwd: str | None = None,
) -> subprocess.CompletedProcess[str] | None:
    """Run a mutating command, or describe it under dry-run.

    Args:
        program: Executable name or path.
        args: Argument vector (never joined into a shell string).
        dry_run: Log ``[dry-run] <cmd>`` instead of running.
        log: Installer logger receiving the dry-run line.
        capture: Capture stdout/stderr instead of streaming to the terminal.
        timeout: Seconds before the process is killed.
        env_overrides: Extra environment variables.
        cwd: Working directory.

    Returns:
        The completed process, or ``None`` under dry-run.

    Raises:
        SpawnError: The program is missing or cannot be executed
            (also raised on timeout).
        NonZeroExitError: The program exited non-zero.
    """
    cmd = [program, *args]
    if dry_run:
        log.log(f"[dry-run] {format_command(program, args)}")
        return None

    env = None
    if env_overrides:
        env = os.environ.copy()
        env.update(env_overrides)

    logger.debug("exec: %s", format_command(program, args))
    start = time.monotonic()
    try:
        result = subprocess.run(
            cmd,
            capture_output=capture,
            text=True,
            timeout=timeout,
            env=env,
            cwd=cwd,
        )
    except FileNotFoundError as e:
        raise SpawnError(f"Command not found: {program}", command=cmd) from e
    except PermissionError as e:
        raise SpawnError(f"Cannot execute {program}: {e}", command=cmd) from e
    except subprocess.TimeoutExpired as e:
        raise SpawnError(f"Command timed out ({timeout}s): {program}", command=cmd) from e

    elapsed_ms = int((time.monotonic() - start) * 1000)
    logger.debug("exit %d in %dms: %s", result.returncode, elapsed_ms, program)
    if result.returncode != 0:
        raise NonZeroExitError(result.returncode, command=cmd)
    return result


def run_capture(cmd: list[str], *, timeout: float = PROBE_TIMEOUT_S) -> dict[str, Any]:
    """Run a read-only probe and capture its output.

    Returns:
        ``{"ok": True, "code": 0, "stdout": "...", "stderr": "..."}`` on
        success; on failure ``ok`` is False and ``error`` describes why
        (``timed_out`` is set when the timeout fired).
    """
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        logger.debug("probe timed out (%ss): %s", timeout, cmd)
        return {
            "ok": False, "code": None, "stdout": "", "stderr": "",
            "error": f"Command timed out ({timeout}s)", "timed_out": True,
        }
    except OSError as e:
        logger.debug("probe failed to start: %s: %s", cmd, e)
        return {
            "ok": False, "code": None, "stdout": "", "stderr": "",
            "error": str(e), "timed_out": False,
        }

    ok = result.returncode == 0
    return {
        "ok": ok,
        "code": result.returncode,
        "stdout": result.stdout or "",
        "stderr": result.stderr or "",
        "error": "" if ok else f"Command failed (exit {result.returncode})",
        "timed_out": False,
    }
