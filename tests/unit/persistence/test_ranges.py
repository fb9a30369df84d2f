"""Unit tests for A1 range addressing."""

from __future__ import annotations

import pytest

from shiftsheet.persistence.ranges import SheetRange, column_index, column_letter


@pytest.mark.parametrize("index, letters", [(0, "A"), (13, "N"), (25, "Z"), (26, "AA"), (27, "AB"), (701, "ZZ"), (702, "AAA")])
def test_column_letters(index, letters):
    assert column_letter(index) == letters
    assert column_index(letters) == index


class TestA1:
    @pytest.mark.parametrize("rng, expected", [
        (SheetRange("Export", start_row=1, end_row=1), "Export!1:1"),
        (SheetRange("Export", start_row=1, first_col=0), "Export!A1"),
        (SheetRange("Export", start_row=2, first_col=0, last_col=13), "Export!A2:N"),
        (SheetRange("Export", start_row=2, end_row=10, first_col=0, last_col=13), "Export!A2:N10"),
        (SheetRange("Export", first_col=0, last_col=13), "Export!A:N"),
        (SheetRange("My Sheet", start_row=1, first_col=0), "'My Sheet'!A1"),
        (SheetRange("O'Brien", start_row=1, first_col=0), "'O''Brien'!A1"),
    ])
    def test_render(self, rng, expected):
        assert rng.a1() == expected
        assert str(rng) == expected

    @pytest.mark.parametrize("spec", [
        "Export!1:1", "Export!A1", "Export!A2:N", "Export!A2:N10", "Export!A:N",
        "'My Sheet'!A1", "'O''Brien'!A2:N",
    ])
    def test_parse_round_trip(self, spec):
        assert SheetRange.parse(spec).a1() == spec

    def test_parse_fields(self):
        assert SheetRange.parse("'My Sheet'!B3:D") == SheetRange("My Sheet", start_row=3, first_col=1, last_col=3)

    @pytest.mark.parametrize("spec", ["A1:B2", "Export!a1", "Export!A1:B2:C3"])
    def test_parse_rejects_unsupported(self, spec):
        with pytest.raises(ValueError):
            SheetRange.parse(spec)
