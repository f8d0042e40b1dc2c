"""
L1 Domain — Targeted edits of ``~/.codex/config.toml`` (pure).

The config file is edited as a list of lines, never parsed and
re-serialized: every line an edit does not touch is kept byte-for-byte
(comments, blank lines, unrelated tables, CRLF endings).

Canonical locations enforced by ``patch_notify_config``:

- hook paths live in ONE root-scope ``notify = [...]`` array;
- the notifications flag lives ONLY under the ``[tui]`` table.

Older releases wrote ``notify`` and ``tui.notifications`` into
``[profiles.<name>.features]`` tables, and some users have a bare root
``notifications = ...``.  Those entries are removed on every pass; the
canonical form is then updated or inserted fresh.

No I/O, no subprocess.  Both patches are idempotent:
``patch(patch(text)) == patch(text)``.
"""

from __future__ import annotations

import json
import re

# ── Line patterns ───────────────────────────────────────────────

# [table] and [[array.of.tables]] headers, optional trailing comment
_TABLE_RE = re.compile(r"^\s*\[\[?\s*([^\[\]]+?)\s*\]\]?\s*(#.*)?$")
_NOTIFY_RE = re.compile(r"^\s*notify\s*=\s*\[")
_DOTTED_TUI_NOTIFICATIONS_RE = re.compile(r"^\s*tui\.notifications\s*=")
_DOTTED_TUI_RE = re.compile(r"^\s*tui\.\s*(.+)$")
_ARRAY_VALUE_RE = re.compile(r"^[^=\"']*=\s*\[")
_BARE_NOTIFICATIONS_RE = re.compile(r"^\s*notifications\s*=")
_PROFILE_RE = re.compile(r"^\s*profile\s*=")
_FEATURES_TABLE_RE = re.compile(r"^profiles\.[^.]+\.features$")
_BLANK_OR_COMMENT_RE = re.compile(r"^\s*(#.*)?$")

TUI_TABLE = "tui"
NOTIFICATIONS_TRUE = "notifications = true"


# ── Line helpers ────────────────────────────────────────────────

def _split(text: str) -> tuple[list[str], bool]:
    """Split into lines; report whether the text ended with a newline.

    An empty document counts as newline-terminated so freshly created
    files end with ``\\n``.
    """
    if not text:
        return [], True
    lines = text.split("\n")
    trailing_newline = lines[-1] == ""
    if trailing_newline:
        lines.pop()
    return lines, trailing_newline


def _join(lines: list[str], trailing_newline: bool) -> str:
    out = "\n".join(lines)
    if trailing_newline and lines:
        out += "\n"
    return out


def table_name(line: str) -> str | None:
    """Return the table name if ``line`` is a table header, else None."""
    m = _TABLE_RE.match(line)
    return m.group(1) if m else None


def _top_insert_index(lines: list[str]) -> int:
    """First line after the leading run of blank lines and comments.

    Anything inserted here is root scope: no table header can precede it.
    """
    idx = 0
    while idx < len(lines) and _BLANK_OR_COMMENT_RE.match(lines[idx]):
        idx += 1
    return idx


def _unquoted_index(line: str, target: str, start: int = 0) -> int | None:
    """Index of ``target`` in ``line`` outside quoted strings.

    Scanning stops at a ``#`` comment, so ``target == "#"`` finds where
    the comment starts.  Basic strings honour backslash escapes; literal
    strings do not.
    """
    quote = ""
    i = start
    while i < len(line):
        ch = line[i]
        if quote:
            if quote == '"' and ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = ""
        elif ch == target:
            return i
        elif ch == "#":
            return None
        elif ch in "\"'":
            quote = ch
        i += 1
    return None


def _array_end(lines: list[str], start: int) -> int:
    """Index of the line closing the array opened on ``lines[start]``.

    Unterminated arrays are treated as single-line so nothing beyond
    ``start`` is ever touched.
    """
    opener = lines[start].index("[")
    if _unquoted_index(lines[start], "]", opener + 1) is not None:
        return start
    for j in range(start + 1, len(lines)):
        if _unquoted_index(lines[j], "]") is not None:
            return j
    return start


def _find_table(lines: list[str], name: str) -> int | None:
    for i, line in enumerate(lines):
        if table_name(line) == name:
            return i
    return None


def _first_table(lines: list[str]) -> int | None:
    for i, line in enumerate(lines):
        if table_name(line) is not None:
            return i
    return None


# ── Notify hook ─────────────────────────────────────────────────

def _purge_misplaced(lines: list[str]) -> int | None:
    """Scan pass: drop misplaced entries, find the root notify array.

    Mutates ``lines`` in place.  Removes ``notify`` arrays and dotted
    ``tui.notifications`` inside ``[profiles.<name>.features]`` tables,
    and bare ``notifications`` at root scope.

    Returns:
        Index of the first root-scope ``notify = [`` line, or None.
    """
    current_table = ""
    root_notify: int | None = None
    i = 0
    while i < len(lines):
        line = lines[i]
        name = table_name(line)
        if name is not None:
            current_table = name
            i += 1
            continue

        in_features = bool(_FEATURES_TABLE_RE.match(current_table))

        if _NOTIFY_RE.match(line):
            end = _array_end(lines, i)
            if in_features:
                del lines[i:end + 1]
                continue
            if current_table == "" and root_notify is None:
                root_notify = i
            i = end + 1
            continue

        if in_features and _DOTTED_TUI_NOTIFICATIONS_RE.match(line):
            del lines[i]
            continue

        if current_table == "" and _BARE_NOTIFICATIONS_RE.match(line):
            del lines[i]
            continue

        i += 1
    return root_notify


def _string_forms(value: str) -> tuple[str, ...]:
    """TOML spellings of ``value``: basic string, plus literal when legal."""
    if "'" in value or "\n" in value:
        return (json.dumps(value),)
    return (json.dumps(value), f"'{value}'")


def _code_and_comment(line: str, start: int = 0) -> tuple[str, str]:
    """Split ``line`` at its trailing ``#`` comment (quotes respected)."""
    hash_at = _unquoted_index(line, "#", start)
    if hash_at is None:
        return line, ""
    return line[:hash_at], line[hash_at:]


def _append_to_array(lines: list[str], start: int, value: str) -> bool:
    """Append ``value`` to the string array starting at ``lines[start]``.

    Returns:
        True if the array changed.  False if the value was already present
        or the array never closes.
    """
    end = _array_end(lines, start)
    opener = lines[start].index("[") + 1
    forms = _string_forms(value)
    quoted = forms[0]

    if end == start:
        line = lines[start]
        close = _unquoted_index(line, "]", opener)
        if close is None:
            # Unterminated array: leave the malformed line alone.
            return False
        items = line[opener:close].strip()
        if any(form in items for form in forms):
            return False
        sep = ", " if items and not items.endswith(",") else ""
        lines[start] = f"{line[:opener]}{items}{sep}{quoted}{line[close:]}"
        return True

    body = [_code_and_comment(lines[start], opener)[0][opener:]]
    body += [_code_and_comment(line)[0] for line in lines[start + 1:end + 1]]
    if any(form in part for part in body for form in forms):
        return False

    closing = lines[end]
    close = _unquoted_index(closing, "]")
    before = closing[:close].rstrip()
    if before.strip():
        # Last item shares the closing line: `"b"]`
        sep = "" if before.endswith(",") else ", "
        lines[end] = f"{before}{sep}{quoted}{closing[close:]}"
        return True

    # Closing bracket on its own line: add an item line above it.
    indent = "  "
    for k in range(end - 1, start - 1, -1):
        offset = opener if k == start else 0
        code, comment = _code_and_comment(lines[k], offset)
        if code[offset:].strip():
            item = code.rstrip()
            if not item.endswith(","):
                gap = code[len(item):] if comment else ""
                lines[k] = f"{item},{gap}{comment}"
            if k != start:
                indent = lines[k][: len(lines[k]) - len(lines[k].lstrip())]
            break
    lines.insert(end, f"{indent}{quoted},")
    return True


def _fold_root_dotted_tui(lines: list[str]) -> list[str]:
    """Pop root-scope ``tui.<key> = ...`` entries, re-keyed for ``[tui]``.

    A document may not both use dotted ``tui.*`` keys and declare a
    ``[tui]`` table, so they move under the header being added.  Dotted
    ``tui.notifications`` is dropped; the canonical flag replaces it.
    """
    moved: list[str] = []
    i = 0
    while i < len(lines):
        if table_name(lines[i]) is not None:
            break
        m = _DOTTED_TUI_RE.match(lines[i])
        if m is None:
            i += 1
            continue
        end = _array_end(lines, i) if _ARRAY_VALUE_RE.match(lines[i]) else i
        if not _DOTTED_TUI_NOTIFICATIONS_RE.match(lines[i]):
            moved.append(m.group(1))
            moved.extend(lines[i + 1:end + 1])
        del lines[i:end + 1]
    return moved


def _ensure_tui_notifications(lines: list[str]) -> None:
    """Make ``[tui]`` contain exactly ``notifications = true``."""
    tui = _find_table(lines, TUI_TABLE)
    if tui is not None:
        for j in range(tui + 1, len(lines)):
            if table_name(lines[j]) is not None:
                break
            if _BARE_NOTIFICATIONS_RE.match(lines[j]):
                if "[" in lines[j]:
                    # notifications = [ ...event list spanning lines... ]
                    del lines[j + 1:_array_end(lines, j) + 1]
                if lines[j].strip() != NOTIFICATIONS_TRUE:
                    lines[j] = NOTIFICATIONS_TRUE
                return
        lines.insert(tui + 1, NOTIFICATIONS_TRUE)
        return

    # New [tui] table goes after the root keys, so no root key is
    # swallowed into it.
    folded = _fold_root_dotted_tui(lines)
    first = _first_table(lines)
    if first is not None:
        block = ["[tui]", NOTIFICATIONS_TRUE, *folded, ""]
        if first > 0 and lines[first - 1].strip():
            block.insert(0, "")
        lines[first:first] = block
    else:
        block = ["[tui]", NOTIFICATIONS_TRUE, *folded]
        if lines and lines[-1].strip():
            block.insert(0, "")
        lines.extend(block)


def _final_sweep(lines: list[str]) -> list[str]:
    """Cleanup pass: drop every dotted ``tui.notifications`` and every
    bare ``notifications`` outside ``[tui]``."""
    cleaned: list[str] = []
    current_table = ""
    for line in lines:
        name = table_name(line)
        if name is not None:
            current_table = name
            cleaned.append(line)
            continue
        if _DOTTED_TUI_NOTIFICATIONS_RE.match(line):
            continue
        if _BARE_NOTIFICATIONS_RE.match(line) and current_table != TUI_TABLE:
            continue
        cleaned.append(line)
    return cleaned


def patch_notify_config(text: str, hook_path: str) -> str:
    """Register ``hook_path`` as a notify hook and enable TUI notifications.

    Args:
        text: Current config document (empty string for a new file).
        hook_path: Absolute path of the notify script.

    Returns:
        The patched document.  Equal to ``text`` when nothing had to change.
    """
    lines, trailing_newline = _split(text)
    quoted = json.dumps(str(hook_path))

    root_notify = _purge_misplaced(lines)

    if root_notify is not None:
        _append_to_array(lines, root_notify, str(hook_path))
    else:
        lines.insert(_top_insert_index(lines), f"notify = [{quoted}]")

    _ensure_tui_notifications(lines)
    lines = _final_sweep(lines)
    return _join(lines, trailing_newline)


def notify_config_satisfied(text: str, hook_path: str) -> bool:
    """True when ``text`` already has the canonical notify configuration."""
    return patch_notify_config(text, hook_path) == text


# ── Active profile ──────────────────────────────────────────────

def set_root_profile(text: str, name: str) -> str:
    """Set the root ``profile = "<name>"`` key.

    Replaces the first root-scope ``profile =`` line, or inserts one at
    the top of the document (after leading comments/blank lines).
    """
    lines, trailing_newline = _split(text)
    wanted = f"profile = {json.dumps(name)}"

    for i, line in enumerate(lines):
        if table_name(line) is not None:
            break  # root scope ends at the first table header
        if _PROFILE_RE.match(line):
            if line.strip() != wanted:
                lines[i] = wanted
            return _join(lines, trailing_newline)

    lines.insert(_top_insert_index(lines), wanted)
    return _join(lines, trailing_newline)
