from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal

import pytest

from product_import.reader.csv_reader import overflow_column
from product_import.validation.schema import (
    MSG_BLANK,
    MSG_MISSING,
    MSG_NOT_CHOICE,
    MSG_NOT_INTEGER,
    MSG_NOT_NUMBER,
    MSG_UNEXPECTED,
    SchemaValidator,
    build_candidate,
    parse_price,
    parse_stock,
)

"""Unit tests for structural validation and type coercion boundaries."""

NOW = datetime(2024, 3, 1, 12, 0, 0, tzinfo=UTC)


def _row(**overrides: str | None) -> dict[str, str]:
    row = {
        "Product Name": "TV",
        "Product Description": "32” Tv",
        "Product Code": "P0001",
        "Stock": "10",
        "Cost in GBP": "399.99",
        "Discontinued": "",
    }
    for key, value in overrides.items():
        col = key.replace("_", " ")
        if value is None:
            row.pop(col, None)
        else:
            row[col] = value
    return row


def _messages(row: dict[str, str], **kwargs) -> list[str]:
    return [str(v) for v in SchemaValidator(**kwargs).validate(row)]


def test_valid_row_has_no_violations():
    assert SchemaValidator().validate(_row()) == []


@pytest.mark.parametrize("col", ["Product Name", "Product Description", "Product Code"])
def test_required_column_missing(col):
    row = _row()
    del row[col]
    assert _messages(row) == [f"{col}: {MSG_MISSING}"]


@pytest.mark.parametrize("value", ["", "   "])
def test_required_column_blank(value):
    assert _messages(_row(Product_Name=value)) == [f"Product Name: {MSG_BLANK}"]


class TestStock:
    @pytest.mark.parametrize("value", [None, "", "0", "15", " 7 "])
    def test_accepted(self, value):
        assert SchemaValidator().validate(_row(Stock=value)) == []

    @pytest.mark.parametrize("value", ["-1", "1.5", "abc", "1e3"])
    def test_rejected(self, value):
        assert _messages(_row(Stock=value)) == [f"Stock: {MSG_NOT_INTEGER}"]

    def test_coercion(self):
        assert parse_stock(None) == 0
        assert parse_stock("") == 0
        assert parse_stock("0") == 0
        assert parse_stock(" 12 ") == 12


class TestCost:
    @pytest.mark.parametrize("value", [None, "", "0", "5", "1000.01", "0.5"])
    def test_accepted(self, value):
        assert SchemaValidator().validate(_row(Cost_in_GBP=value)) == []

    @pytest.mark.parametrize("value", ["-0.01", "abc", "NaN", "Infinity", "$4.33"])
    def test_rejected(self, value):
        assert _messages(_row(Cost_in_GBP=value)) == [f"Cost in GBP: {MSG_NOT_NUMBER}"]

    def test_coercion(self):
        assert parse_price(None) is None
        assert parse_price("") is None
        assert parse_price("0") == Decimal("0")
        assert parse_price("4.33") == Decimal("4.33")


class TestDiscontinued:
    @pytest.mark.parametrize("value", [None, "", "yes"])
    def test_accepted(self, value):
        assert SchemaValidator().validate(_row(Discontinued=value)) == []

    @pytest.mark.parametrize("value", ["Yes", "no", "y", "true"])
    def test_rejected(self, value):
        assert _messages(_row(Discontinued=value)) == [f"Discontinued: {MSG_NOT_CHOICE}"]


def test_violations_reported_in_column_order():
    row = _row(Product_Name="", Stock="-5", Cost_in_GBP="x", Discontinued="no")
    del row["Product Code"]
    sources = [v.source for v in SchemaValidator().validate(row)]
    assert sources == ["Product Name", "Product Code", "Stock", "Cost in GBP", "Discontinued"]


def test_extra_column_rejected_by_default():
    row = _row()
    row["Colour"] = "red"
    assert _messages(row) == [f"Colour: {MSG_UNEXPECTED}"]


def test_extra_column_allowed_when_configured():
    row = _row()
    row["Colour"] = "red"
    assert SchemaValidator(allow_extra_columns=True).validate(row) == []


def test_build_candidate_types():
    candidate = build_candidate(_row(Stock="", Cost_in_GBP=""), NOW)
    assert candidate.name == "TV"
    assert candidate.code == "P0001"
    assert candidate.stock == 0
    assert candidate.price is None
    assert candidate.discontinued is False
    assert candidate.discontinued_at is None
    assert candidate.added_at == NOW


def test_build_candidate_discontinued_uses_processing_time():
    candidate = build_candidate(_row(Discontinued="yes"), NOW)
    assert candidate.discontinued is True
    assert candidate.discontinued_at == NOW


def test_overflow_field_rejected_even_when_extra_columns_allowed():
    row = _row()
    row[overflow_column(7)] = "surplus"
    expected = [f"<field 7>: {MSG_UNEXPECTED}"]
    assert _messages(row) == expected
    assert _messages(row, allow_extra_columns=True) == expected


def test_short_line_reports_missing_fields():
    row = {"Product Name": "TV", "Product Description": "desc"}
    assert _messages(row) == [f"Product Code: {MSG_MISSING}"]
