"""Unit tests for company field resolution and manual-edit coercion."""

import math

import pytest

from funding_advisor.domain.company_fields import (
    MISSING,
    coerce_manual_value,
    parse_change_log,
    resolve_column,
    values_equal,
)


class TestResolveColumn:
    def test_guess_aliases(self):
        assert resolve_column("funding_need_type_guess") == "funding_need_type"
        assert resolve_column("funding_need_min_eur_guess") == "funding_need_min_eur"
        assert resolve_column("funding_need_max_eur_guess") == "funding_need_max_eur"
        assert resolve_column("funding_need_summary_guess") == "funding_need_summary"

    def test_editable_columns_pass_through(self):
        assert resolve_column("name") == "name"
        assert resolve_column("tags") == "tags"
        assert resolve_column("revenue_eur") == "revenue_eur"

    def test_unknown_and_protected_keys(self):
        assert resolve_column("summary") is None
        assert resolve_column("id") is None
        assert resolve_column("manual_change_log") is None
        assert resolve_column("created_at") is None


class TestCoerceNumeric:
    def test_missing_is_skipped(self):
        result = coerce_manual_value("employee_count", MISSING)
        assert result.persist is False
        assert result.error is None

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_blank_clears(self, raw):
        result = coerce_manual_value("revenue_eur", raw)
        assert result.persist is True
        assert result.value is None

    def test_integral_string_becomes_int(self):
        result = coerce_manual_value("employee_count", " 12 ")
        assert result.value == 12
        assert isinstance(result.value, int)

    def test_fractional_string(self):
        assert coerce_manual_value("revenue_eur", "1250000.5").value == 1250000.5

    def test_number_passes_through(self):
        assert coerce_manual_value("funding_need_min_eur", 250000).value == 250000

    @pytest.mark.parametrize(
        "raw",
        ["twelve", "12abc", "nan", "inf", "1_000", "0x10", "1e", True, False, [1], {"a": 1}, math.inf],
    )
    def test_invalid_values(self, raw):
        result = coerce_manual_value("employee_count", raw)
        assert result.persist is False
        assert result.error == "Invalid numeric value for employee_count"

    def test_exponent_notation(self):
        assert coerce_manual_value("revenue_eur", "2.5e6").value == 2500000


class TestCoerceText:
    def test_trimmed(self):
        assert coerce_manual_value("city", "  Espoo ").value == "Espoo"

    def test_numbers_render_as_text(self):
        assert coerce_manual_value("industry_code", 12.0).value == "12"
        assert coerce_manual_value("industry_code", 26110).value == "26110"
        assert coerce_manual_value("industry_code", 1.5).value == "1.5"

    def test_booleans_render_as_text(self):
        assert coerce_manual_value("tags", True).value == "true"
        assert coerce_manual_value("tags", False).value == "false"

    @pytest.mark.parametrize("raw", [["a"], {"a": 1}])
    def test_containers_rejected(self, raw):
        result = coerce_manual_value("description", raw)
        assert result.persist is False
        assert result.error == "Invalid value for description"

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_required_column_cannot_be_cleared(self, raw):
        result = coerce_manual_value("name", raw)
        assert result.persist is False
        assert result.error == "name cannot be empty"

    def test_required_column_accepts_text(self):
        assert coerce_manual_value("name", " Acme Oyj ").value == "Acme Oyj"


class TestValuesEqual:
    def test_null_aware(self):
        assert values_equal(None, None)
        assert not values_equal(None, 0)
        assert not values_equal("", None)

    def test_numeric_equality(self):
        assert values_equal(12, 12.0)
        assert not values_equal(12, 13)


class TestParseChangeLog:
    def test_empty(self):
        assert parse_change_log(None) == []
        assert parse_change_log("") == []

    def test_valid(self):
        raw = '[{"column": "city", "from": null, "to": "Espoo", "changedAt": "2025-01-01T00:00:00.000Z"}]'
        assert parse_change_log(raw)[0]["to"] == "Espoo"

    def test_corrupt_reads_as_empty(self):
        assert parse_change_log("{not json") == []

    def test_non_list_reads_as_empty(self):
        assert parse_change_log('{"column": "city"}') == []
