"""
Turns uploaded text into a ParsedTable.

- JSON: top-level array of objects, or every array of objects found by a
  depth-first walk of the document (headers merged, rows concatenated)
- anything else: CSV with quote-aware comma splitting

Row sampling is capped so analysis cost does not grow with file size.
"""

import json
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from pipeline.errors import FormatError
from pipeline.vocabulary import MAX_JSON_DEPTH, MAX_JSON_NESTING, MAX_SAMPLE_ROWS


@dataclass(frozen=True)
class ParsedTable:
    headers: Tuple[str, ...]
    records: Tuple[Dict[str, str], ...]
    sample_rows: Tuple[str, ...]
    raw_text: str
    file_type: str


def parse_content(
    text: str,
    extension: str,
    max_rows: int = MAX_SAMPLE_ROWS,
    max_depth: int = MAX_JSON_DEPTH
) -> ParsedTable:
    if extension == "json":
        return parse_json(text, max_rows=max_rows, max_depth=max_depth)
    return parse_csv(text, max_rows=max_rows)


# ---------------- CSV ----------------
def split_csv_line(line: str) -> List[str]:
    """
    Split one CSV line on commas that sit outside double quotes.
    A quote preceded by a backslash is kept literally and does not
    open or close a quoted section.
    """
    fields = []
    current = []
    in_quotes = False

    for ch in line:
        if ch == '"':
            if current and current[-1] == "\\":
                current[-1] = '"'
            else:
                in_quotes = not in_quotes
        elif ch == "," and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(ch)

    fields.append("".join(current).strip())
    return fields


def parse_csv(text: str, max_rows: int = MAX_SAMPLE_ROWS) -> ParsedTable:
    lines = [line.strip() for line in text.split("\n")]
    lines = [line for line in lines if line]

    headers: List[str] = []
    records = []
    sample_rows = []

    # a header row with no data behind it carries no table
    if len(lines) > 1:
        headers = [h.lower() for h in split_csv_line(lines[0])]

        for line in lines[1:max_rows + 1]:
            values = split_csv_line(line)
            row = {}
            for i, header in enumerate(headers):
                row[header] = values[i] if i < len(values) else ""
            records.append(row)
            sample_rows.append(" ".join(row.values()))

    return ParsedTable(
        headers=tuple(headers),
        records=tuple(records),
        sample_rows=tuple(sample_rows),
        raw_text=text.lower(),
        file_type="CSV"
    )


# ---------------- JSON ----------------
def _text_of(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def _row_text(item: Any) -> str:
    if isinstance(item, dict):
        return " ".join(_text_of(v) for v in item.values())
    if isinstance(item, list):
        return " ".join(_text_of(v) for v in item)
    return _text_of(item)


def _is_object_array(node: Any) -> bool:
    return isinstance(node, list) and len(node) > 0 and isinstance(node[0], dict)


def _collect_object_arrays(root: Any, max_depth: int) -> List[list]:
    """
    Depth-first, document order. An array of objects is collected as a whole
    and not descended into; other arrays and objects are walked.
    """
    found = []
    stack = [(root, 0)]

    while stack:
        node, depth = stack.pop()
        if _is_object_array(node):
            found.append(node)
            continue
        if depth >= max_depth:
            continue
        if isinstance(node, dict):
            children = list(node.values())
        elif isinstance(node, list):
            children = node
        else:
            continue
        # reversed so the first child is popped first
        for child in reversed(children):
            stack.append((child, depth + 1))

    return found


_JSON_TOKEN = re.compile(r'"(?:[^"\\]|\\.)*"|[\[\]{}]')


def json_nesting_depth(text: str) -> int:
    """Deepest array/object nesting, ignoring brackets inside strings."""
    depth = deepest = 0
    for m in _JSON_TOKEN.finditer(text):
        token = m.group()
        if token in ("[", "{"):
            depth += 1
            deepest = max(deepest, depth)
        elif token in ("]", "}"):
            depth -= 1
    return deepest


def _reject_constant(name: str):
    # NaN / Infinity / -Infinity are not JSON
    raise ValueError(f"invalid constant {name}")


def parse_json(
    text: str,
    max_rows: int = MAX_SAMPLE_ROWS,
    max_depth: int = MAX_JSON_DEPTH
) -> ParsedTable:
    nesting = json_nesting_depth(text)
    if nesting > MAX_JSON_NESTING:
        raise FormatError(
            f"Invalid JSON format: nesting depth {nesting} exceeds {MAX_JSON_NESTING}"
        )

    try:
        data = json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        raise FormatError(f"Invalid JSON format: {e}") from e

    headers: Dict[str, None] = {}
    records = []
    sample_rows = []

    for array in _collect_object_arrays(data, max_depth):
        for key in array[0]:
            headers.setdefault(str(key).lower(), None)
        for item in array[:max_rows]:
            if isinstance(item, dict):
                records.append({str(k).lower(): _text_of(v) for k, v in item.items()})
            sample_rows.append(_row_text(item))

    return ParsedTable(
        headers=tuple(headers),
        records=tuple(records),
        sample_rows=tuple(sample_rows),
        raw_text=text.lower(),
        file_type="JSON"
    )
