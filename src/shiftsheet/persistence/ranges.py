"""A1-notation range addressing for spreadsheet stores."""

from __future__ import annotations

import re
from dataclasses import dataclass

_PLAIN_SHEET = re.compile(r"^[A-Za-z0-9_]+$")
_RANGE = re.compile(
    r"^(?:'(?P<quoted>(?:[^']|'')+)'|(?P<plain>[^!]+))!"
    r"(?P<c1>[A-Z]*)(?P<r1>\d*)(?::(?P<c2>[A-Z]*)(?P<r2>\d*))?$"
)


def column_letter(index: int) -> str:
    """0 -> A, 25 -> Z, 26 -> AA."""
    letters = ""
    index += 1
    while index:
        index, rem = divmod(index - 1, 26)
        letters = chr(ord("A") + rem) + letters
    return letters


def column_index(letters: str) -> int:
    """A -> 0, Z -> 25, AA -> 26."""
    index = 0
    for ch in letters:
        index = index * 26 + (ord(ch) - ord("A") + 1)
    return index - 1


@dataclass(frozen=True)
class SheetRange:
    """A rectangular window on one sheet.

    Rows are 1-based, columns 0-based. ``None`` leaves that edge open:
    no columns means whole rows, no end row means "to the last row".
    """

    sheet: str
    start_row: int | None = None
    end_row: int | None = None
    first_col: int | None = None
    last_col: int | None = None

    def a1(self) -> str:
        name = self.sheet if _PLAIN_SHEET.match(self.sheet) else "'" + self.sheet.replace("'", "''") + "'"
        if self.first_col is None:
            start = self.start_row or 1
            return f"{name}!{start}:{self.end_row or start}"
        start_cell = f"{column_letter(self.first_col)}{self.start_row or ''}"
        if self.last_col is None:
            return f"{name}!{start_cell}"
        end_cell = f"{column_letter(self.last_col)}{self.end_row or ''}"
        return f"{name}!{start_cell}:{end_cell}"

    def __str__(self) -> str:
        return self.a1()

    @classmethod
    def parse(cls, spec: str) -> SheetRange:
        match = _RANGE.match(spec.strip())
        if match is None:
            raise ValueError(f"Unsupported A1 range: {spec!r}")
        sheet = match["quoted"].replace("''", "'") if match["quoted"] else match["plain"]
        c1, r1, c2, r2 = match["c1"], match["r1"], match["c2"], match["r2"]
        if c2 is None and r2 is None:  # single anchor cell, e.g. A1
            return cls(sheet=sheet, start_row=int(r1) if r1 else None,
                       first_col=column_index(c1) if c1 else None)
        return cls(
            sheet=sheet,
            start_row=int(r1) if r1 else None,
            end_row=int(r2) if r2 else None,
            first_col=column_index(c1) if c1 else None,
            last_col=column_index(c2) if c2 else None,
        )
