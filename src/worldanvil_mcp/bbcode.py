"""
Markdown to World Anvil BBCode conversion.

World Anvil stores article, note and secret bodies as BBCode. Tools accept
Markdown from callers and run it through convert() before anything is sent
upstream.

Conversion happens in two stages:
- Inline substitutions: ordered regex rewrites that need no cross-line state
  (code, headers, emphasis, links, rules, quotes)
- Block wrapping: forward line scans that wrap runs of list items and table
  rows, first lists and then tables

The rewrite order is part of the contract. Code is handled before headers,
headers before emphasis, so that reordering never changes existing output.
"""

import re
from collections.abc import Mapping
from typing import Any


# ---------------------------------------------------------------------------
# Inline substitution rules, applied top to bottom
# ---------------------------------------------------------------------------

# Fenced code: ```lang\n...``` (language hint and the newline after it dropped)
_FENCED_CODE_RE = re.compile(r"```\w*\n?([\s\S]*?)```", re.ASCII)
_INLINE_CODE_RE = re.compile(r"`([^`\n]+)`")

# Longest marker first so "####" never reaches the "#" rule
_HEADER_RULES = [
    (re.compile(r"^#### (.+)$", re.MULTILINE), r"[h4]\1[/h4]"),
    (re.compile(r"^### (.+)$", re.MULTILINE), r"[h3]\1[/h3]"),
    (re.compile(r"^## (.+)$", re.MULTILINE), r"[h2]\1[/h2]"),
    (re.compile(r"^# (.+)$", re.MULTILINE), r"[h1]\1[/h1]"),
]

_BOLD_RULES = [
    (re.compile(r"\*\*([^*]+)\*\*"), r"[b]\1[/b]"),
    (re.compile(r"__([^_]+)__"), r"[b]\1[/b]"),
]

# Markers touching an ASCII word character on the outside (snake_case, 2*3*4) are literal
_ITALIC_RULES = [
    (re.compile(r"(?<!\w)\*([^*]+)\*(?!\w)", re.ASCII), r"[i]\1[/i]"),
    (re.compile(r"(?<!\w)_([^_]+)_(?!\w)", re.ASCII), r"[i]\1[/i]"),
]

_STRIKE_RE = re.compile(r"~~([^~]+)~~")
_LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
_RULE_RE = re.compile(r"^[-*_]{3,}$", re.MULTILINE)
_QUOTE_RE = re.compile(r"^> (.+)$", re.MULTILINE)
_ADJACENT_QUOTES = "[/quote]\n[quote]"

_INLINE_RULES: list[tuple[re.Pattern[str], str]] = [
    (_FENCED_CODE_RE, r"[code]\1[/code]"),
    (_INLINE_CODE_RE, r"[code]\1[/code]"),
    *_HEADER_RULES,
    *_BOLD_RULES,
    *_ITALIC_RULES,
    (_STRIKE_RE, r"[s]\1[/s]"),
    (_LINK_RE, r"[url=\2]\1[/url]"),
    (_RULE_RE, "[hr]"),
    (_QUOTE_RE, r"[quote]\1[/quote]"),
]


# ---------------------------------------------------------------------------
# Block line classification
# ---------------------------------------------------------------------------

_UNORDERED_ITEM_RE = re.compile(r"[-*] (.+)")
_ORDERED_ITEM_RE = re.compile(r"\d+\. (.+)", re.ASCII)
_TABLE_ROW_RE = re.compile(r"\|(.+)\|")
_TABLE_SEPARATOR_RE = re.compile(r"\|[-:\s|]+\|")

_LIST_TAGS = {
    "ul": ("[ul]", "[/ul]"),
    "ol": ("[ol]", "[/ol]"),
}


def substitute_inline(text: str) -> str:
    """Apply every inline rewrite rule in order.

    Later rules may still match markup characters left inside tag bodies
    produced by earlier rules; that is accepted, not corrected.
    """
    for pattern, replacement in _INLINE_RULES:
        text = pattern.sub(replacement, text)
    # Consecutive quoted lines form one block
    return text.replace(_ADJACENT_QUOTES, "\n")


def _classify_list_item(line: str) -> tuple[str | None, str]:
    """Return (list type, item content) for a line, or (None, line)."""
    match = _UNORDERED_ITEM_RE.fullmatch(line)
    if match:
        return "ul", match.group(1)
    match = _ORDERED_ITEM_RE.fullmatch(line)
    if match:
        return "ol", match.group(1)
    return None, line


def wrap_lists(text: str) -> str:
    """Wrap runs of list item lines in [ul]/[ol] blocks.

    A change of list type inside a run closes the open list and opens a new
    one. A list still open at the end of the text is closed on the last line.
    """
    output: list[str] = []
    open_type: str | None = None

    for line in text.split("\n"):
        item_type, content = _classify_list_item(line)

        if item_type is None:
            if open_type is not None:
                output.append(_LIST_TAGS[open_type][1])
                open_type = None
            output.append(line)
            continue

        if item_type != open_type:
            if open_type is not None:
                output.append(_LIST_TAGS[open_type][1])
            output.append(_LIST_TAGS[item_type][0])
            open_type = item_type
        output.append(f"[li]{content}[/li]")

    if open_type is not None:
        output.append(_LIST_TAGS[open_type][1])

    return "\n".join(output)


def _split_cells(line: str) -> list[str]:
    """Split a pipe-delimited row into trimmed cell values."""
    return [cell.strip() for cell in line[1:-1].split("|")]


def _render_row(cells: list[str], cell_tag: str) -> str:
    return "[tr]" + "".join(f"[{cell_tag}]{cell}[/{cell_tag}]" for cell in cells) + "[/tr]"


def wrap_tables(text: str) -> str:
    """Wrap runs of pipe-delimited rows in [table] blocks.

    Only the first row of a run becomes a header row. Separator rows
    (|---|:--:|) produce no output. A run that opens on a separator has no
    header row at all.
    """
    output: list[str] = []
    in_table = False

    for line in text.split("\n"):
        is_row = _TABLE_ROW_RE.fullmatch(line) is not None
        is_separator = _TABLE_SEPARATOR_RE.fullmatch(line) is not None

        if not is_row:
            if in_table:
                output.append("[/table]")
                in_table = False
            output.append(line)
            continue

        if not in_table:
            in_table = True
            output.append("[table]")
            if not is_separator:
                output.append(_render_row(_split_cells(line), "th"))
        elif not is_separator:
            output.append(_render_row(_split_cells(line), "td"))

    if in_table:
        output.append("[/table]")

    return "\n".join(output)


def convert(text: Any) -> Any:
    """Convert Markdown text to World Anvil BBCode.

    Non-string values (including None) are returned unchanged, as is the
    empty string.

    Example:
        >>> convert("Use `code` here")
        'Use [code]code[/code] here'
        >>> convert("[text](https://example.com)")
        '[url=https://example.com]text[/url]'
    """
    if not isinstance(text, str) or not text:
        return text
    return wrap_tables(wrap_lists(substitute_inline(text)))


def convert_fields(data: Any) -> Any:
    """Convert every string value of a mapping to BBCode.

    Returns a new dict with the same keys in the same order. Non-string
    values are shared with the input, never copied or converted. Anything
    that is not a mapping is returned unchanged.
    """
    if not isinstance(data, Mapping):
        return data
    return {
        key: convert(value) if isinstance(value, str) else value
        for key, value in data.items()
    }


__all__ = [
    "convert",
    "convert_fields",
    "substitute_inline",
    "wrap_lists",
    "wrap_tables",
]
