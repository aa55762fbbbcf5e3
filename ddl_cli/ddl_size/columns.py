"""Column definition line parsing.

A column line looks like ``[Price] [decimal](18, 2) NULL,``: the first bracket
pair is the column name, the next bracket pair the data type, and an optional
parenthesised group directly after the type the declared size. Anything else
(closing parenthesis, constraints, blank lines) is rejected so the scanner can
tell where the column block ends.
"""

from __future__ import annotations

import re

from .types import ColumnDef, ColumnLineResult, ColumnRejection

MAX_SIZE = 8000
UNPARSEABLE_SIZE = 1

_INT_RE = re.compile(r"^\s*[+-]?\d+\s*$")


class _LineTokenizer:
    """Left-to-right cursor over a single DDL line."""

    def __init__(self, line: str) -> None:
        self.line = line
        self.pos = 0

    def skip_whitespace(self) -> None:
        while self.pos < len(self.line) and self.line[self.pos].isspace():
            self.pos += 1

    def peek(self) -> str:
        return self.line[self.pos] if self.pos < len(self.line) else ""

    def seek(self, char: str) -> bool:
        """Advance to the next ``char``; return False if there is none."""
        index = self.line.find(char, self.pos)
        if index == -1:
            return False
        self.pos = index
        return True

    def enclosed(self, opener: str, closer: str) -> str | None:
        """Consume ``opener ... closer`` at the cursor and return the inner text."""
        if self.peek() != opener:
            return None
        end = self.line.find(closer, self.pos + 1)
        if end == -1:
            return None
        content = self.line[self.pos + 1 : end]
        self.pos = end + 1
        return content


def parse_column_line(line: str) -> ColumnLineResult:
    """Parse one line of a ``CREATE TABLE`` body into a column definition."""

    tokens = _LineTokenizer(line)
    tokens.skip_whitespace()
    if not tokens.peek():
        return ColumnLineResult(rejection=ColumnRejection.BLANK)
    if tokens.peek() != "[":
        return ColumnLineResult(rejection=ColumnRejection.NO_LEADING_BRACKET)

    name = tokens.enclosed("[", "]")
    if name is None:
        return ColumnLineResult(rejection=ColumnRejection.UNTERMINATED_NAME)

    if not tokens.seek("["):
        return ColumnLineResult(rejection=ColumnRejection.MISSING_TYPE)
    data_type = tokens.enclosed("[", "]")
    if data_type is None:
        return ColumnLineResult(rejection=ColumnRejection.UNTERMINATED_TYPE)

    tokens.skip_whitespace()
    if tokens.peek() != "(":
        return ColumnLineResult(column=ColumnDef(name=name, data_type=data_type, size=0))

    raw_size = tokens.enclosed("(", ")")
    if raw_size is None:
        return ColumnLineResult(rejection=ColumnRejection.UNTERMINATED_SIZE)

    size = parse_size(raw_size)
    if size is None:
        warning = (
            f"Issue parsing size for column [{name}] type [{data_type}]! "
            f"Found [{raw_size}], using {UNPARSEABLE_SIZE}"
        )
        return ColumnLineResult(
            column=ColumnDef(name=name, data_type=data_type, size=UNPARSEABLE_SIZE),
            size_warning=warning,
        )
    return ColumnLineResult(column=ColumnDef(name=name, data_type=data_type, size=size))


def parse_size(raw: str) -> int | None:
    """Return the declared size from a size specifier, or None if unreadable.

    ``max`` maps to 8000 and ``p,s`` pairs yield the precision ``p``.
    """

    if _INT_RE.match(raw):
        return int(raw)
    if raw == "max":
        return MAX_SIZE
    first = raw.split(",")[0]
    if _INT_RE.match(first):
        return int(first)
    return None
