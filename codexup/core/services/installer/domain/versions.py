"""
L1 Domain — Version parsing and comparison (pure).

No I/O, no subprocess.
"""

from __future__ import annotations

import re

_SEMVER_TRIPLE_RE = re.compile(r"(\d+)\.(\d+)\.(\d+)")
_SEMVER_TOKEN_RE = re.compile(r"(\d+\.\d+\.\d+(?:[-+][0-9A-Za-z.-]+)?)")


def extract_version(output: str) -> str | None:
    """Pull the first semver-shaped token out of ``--version`` output.

    ``"codex-cli 0.63.0"`` → ``"0.63.0"``; pre-release/build suffixes are
    kept (``"1.0.0-beta.1"``).
    """
    match = _SEMVER_TOKEN_RE.search(output or "")
    return match.group(1) if match else None


def parse_semver(version: str) -> tuple[int, int, int] | None:
    """First ``major.minor.patch`` integer triple in ``version``, or None.

    Anything after the triple (pre-release, build metadata) is ignored.
    """
    match = _SEMVER_TRIPLE_RE.search(version or "")
    if not match:
        return None
    return int(match.group(1)), int(match.group(2)), int(match.group(3))


def is_newer(latest: str, current: str) -> bool:
    """Whether ``latest`` should be offered as an update over ``current``.

    Component-wise comparison of the numeric triples.  When either side
    does not parse, any difference counts as newer: a crude fallback
    that can flag a merely *different* tag as an update.
    """
    latest_parts = parse_semver(latest)
    current_parts = parse_semver(current)
    if latest_parts is None or current_parts is None:
        return latest != current
    return latest_parts > current_parts
