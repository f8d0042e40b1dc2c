"""
L1 Domain — Backup path naming (pure).

Backups sit next to the original: ``PATH.backup.YYYY-MM-DDTHH-MM-SS``.
Resolution is one second; two backups of the same path within the same
second share a name.
"""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

BACKUP_MARKER = ".backup."


def backup_timestamp(now: datetime | None = None) -> str:
    """UTC timestamp safe for file names, e.g. ``2026-01-21T00-00-00``."""
    moment = (now or datetime.now(UTC)).astimezone(UTC)
    return moment.strftime("%Y-%m-%dT%H-%M-%S")


def backup_path_for(path: Path | str, now: datetime | None = None) -> Path:
    """Return the backup location for ``path``.  No I/O."""
    return Path(f"{path}{BACKUP_MARKER}{backup_timestamp(now)}")
