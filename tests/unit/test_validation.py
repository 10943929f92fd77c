"""Unit tests for book field validation."""

from datetime import date

import pytest

from app.services.validation import (
    GENRE_SUGGESTIONS,
    ErrorKind,
    Rule,
    as_int,
    error_message,
    validate_book,
    validate_field,
)


def _kind(field: str, value) -> ErrorKind | None:
    error = validate_field(field, value)
    return error.kind if error else None


class TestFieldRules:
    """Tests for per-field rules."""

    def test_empty_title_is_required_not_too_short(self):
        """Test the first failing rule decides the error."""
        error = validate_field("title", "")
        assert error.kind == ErrorKind.REQUIRED
        assert error.message == "This field is required"

    def test_missing_title(self):
        """Test a missing value is required."""
        assert _kind("title", None) == ErrorKind.REQUIRED

    def test_short_title(self):
        """Test a one-character title is too short."""
        error = validate_field("title", "A")
        assert error.kind == ErrorKind.TOO_SHORT
        assert error.message == "Minimum 2 characters required"

    def test_author(self):
        """Test author rules."""
        assert _kind("author", "") == ErrorKind.REQUIRED
        assert _kind("author", "X") == ErrorKind.TOO_SHORT
        assert _kind("author", "Eco") is None

    def test_description_length_nine(self):
        """Test a nine-character description is too short."""
        error = validate_field("description", "x" * 9)
        assert error.kind == ErrorKind.TOO_SHORT
        assert error.message == "Minimum 10 characters required"
        assert validate_field("description", "x" * 10) is None

    def test_year_required(self):
        """Test an empty year is required."""
        assert _kind("year", "") == ErrorKind.REQUIRED

    def test_year_not_integer(self):
        """Test a non-numeric year falls back to invalid."""
        error = validate_field("year", "nineteen")
        assert error.kind == ErrorKind.INVALID
        assert error.message == "Invalid value"
        assert _kind("year", 1999.5) == ErrorKind.INVALID

    def test_year_below_min(self):
        """Test years before 1000 are rejected."""
        error = validate_field("year", 999)
        assert error.kind == ErrorKind.BELOW_MIN
        assert error.message == "Minimum value: 1000"
        assert validate_field("year", 1000) is None

    def test_year_above_max(self):
        """Test a future year is rejected."""
        error = validate_field("year", 3000)
        assert error.kind == ErrorKind.ABOVE_MAX
        assert error.message == f"Maximum value: {date.today().year}"

    def test_year_current_is_valid(self):
        """Test the current year is the upper bound."""
        this_year = date.today().year
        assert validate_field("year", this_year) is None
        assert _kind("year", this_year + 1) == ErrorKind.ABOVE_MAX

    def test_year_as_string(self):
        """Test form input strings are accepted."""
        assert validate_field("year", "1954") is None
        assert _kind("year", "0999") == ErrorKind.BELOW_MIN

    def test_genre_open_ended(self):
        """Test any non-empty genre is valid, suggested or not."""
        assert "Saggistica" not in GENRE_SUGGESTIONS
        assert validate_field("genre", "Saggistica") is None
        assert _kind("genre", "") == ErrorKind.REQUIRED

    def test_unconstrained_fields(self):
        """Test availability and cover URL accept anything."""
        assert validate_field("available", None) is None
        assert validate_field("cover_url", "not a url") is None
        assert validate_field("cover_url", None) is None


class TestRule:
    """Tests for Rule and messages."""

    def test_callable_threshold_evaluated_each_check(self):
        """Test a callable threshold is read when the rule runs."""
        limits = iter([5, 1])
        rule = Rule(ErrorKind.BELOW_MIN, lambda value, limit: value >= limit, lambda: next(limits))
        assert rule.check(3).kind == ErrorKind.BELOW_MIN
        assert rule.check(3) is None

    def test_unknown_kind_message(self):
        """Test kinds without a template use the generic message."""
        assert error_message(ErrorKind.INVALID) == "Invalid value"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(12, 12), ("12", 12), (" 7 ", 7), (3.0, 3), (True, None), ("x", None), (None, None)],
    )
    def test_as_int(self, value, expected):
        """Test form value integer coercion."""
        assert as_int(value) == expected


class TestValidateBook:
    """Tests for validate_book."""

    def test_valid_book(self, book_form):
        """Test a complete form is valid and converts to store input."""
        result = validate_book(book_form)
        assert result.is_valid
        assert result.errors == {}

        data = result.to_book_create()
        assert data.year == 1980
        assert data.available is True
        assert data.cover_url is None

    def test_available_defaults_true(self, book_form):
        """Test a missing availability means available."""
        del book_form["available"]
        assert validate_book(book_form).to_book_create().available is True

    def test_available_false(self, book_form):
        """Test availability can be switched off."""
        book_form["available"] = False
        assert validate_book(book_form).to_book_create().available is False

    def test_collects_errors_per_field(self, book_form):
        """Test each failing field reports its own error."""
        book_form.update(title="", year="3000", description="too short")
        result = validate_book(book_form)

        assert not result.is_valid
        assert set(result.errors) == {"title", "year", "description"}
        assert result.errors["title"].kind == ErrorKind.REQUIRED
        assert result.errors["year"].kind == ErrorKind.ABOVE_MAX
        assert result.errors["description"].kind == ErrorKind.TOO_SHORT

    def test_empty_form(self):
        """Test an empty form fails every required field."""
        result = validate_book({})
        assert set(result.errors) == {"title", "author", "year", "genre", "description"}
        assert all(e.kind == ErrorKind.REQUIRED for e in result.errors.values())

    def test_invalid_result_cannot_build_input(self):
        """Test converting an invalid result raises."""
        with pytest.raises(ValueError):
            validate_book({}).to_book_create()
