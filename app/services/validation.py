"""Field validation for book entry and edit forms.

Each field maps to an ordered list of rules. Rules are checked in order and
the first one that fails decides the field's error; later rules are not
evaluated. A book is valid when every field passes.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any

from app.models.book import BookCreate

# Advisory only: any non-empty genre is accepted.
GENRE_SUGGESTIONS = [
    "Fantasy",
    "Distopia",
    "Favola",
    "Romanzo",
    "Giallo",
    "Thriller",
    "Fantascienza",
    "Horror",
]


class ErrorKind(str, Enum):
    """Why a field failed validation."""

    REQUIRED = "required"
    TOO_SHORT = "too_short"
    BELOW_MIN = "below_min"
    ABOVE_MAX = "above_max"
    INVALID = "invalid"  # Fallback when no more specific kind applies


MESSAGES = {
    ErrorKind.REQUIRED: "This field is required",
    ErrorKind.TOO_SHORT: "Minimum {limit} characters required",
    ErrorKind.BELOW_MIN: "Minimum value: {limit}",
    ErrorKind.ABOVE_MAX: "Maximum value: {limit}",
}


def error_message(kind: ErrorKind, limit: int | None = None) -> str:
    """Human-readable message for an error kind and its rule threshold."""
    template = MESSAGES.get(kind)
    if template is None:
        return "Invalid value"
    return template.format(limit=limit)


@dataclass(frozen=True)
class FieldError:
    """A failed rule for a single field."""

    kind: ErrorKind
    message: str


@dataclass(frozen=True)
class Rule:
    """A predicate over a field value, tagged with the error it reports.

    ``threshold`` may be a callable so limits such as the current year are
    computed when the rule runs rather than when the table is built.
    """

    kind: ErrorKind
    predicate: Callable[[Any, int | None], bool]
    threshold: int | Callable[[], int] | None = None

    def limit(self) -> int | None:
        if callable(self.threshold):
            return self.threshold()
        return self.threshold

    def check(self, value: Any) -> FieldError | None:
        limit = self.limit()
        if self.predicate(value, limit):
            return None
        return FieldError(kind=self.kind, message=error_message(self.kind, limit))


def as_int(value: Any) -> int | None:
    """Interpret form input as an integer, or None if it isn't one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def current_year() -> int:
    return date.today().year


def required() -> Rule:
    return Rule(ErrorKind.REQUIRED, lambda value, _: value is not None and value != "")


def min_length(length: int) -> Rule:
    return Rule(ErrorKind.TOO_SHORT, lambda value, limit: len(str(value)) >= limit, length)


def integer() -> Rule:
    return Rule(ErrorKind.INVALID, lambda value, _: as_int(value) is not None)


def min_value(minimum: int | Callable[[], int]) -> Rule:
    return Rule(ErrorKind.BELOW_MIN, lambda value, limit: as_int(value) >= limit, minimum)


def max_value(maximum: int | Callable[[], int]) -> Rule:
    return Rule(ErrorKind.ABOVE_MAX, lambda value, limit: as_int(value) <= limit, maximum)


FIELD_RULES: dict[str, list[Rule]] = {
    "title": [required(), min_length(2)],
    "author": [required(), min_length(2)],
    "year": [required(), integer(), min_value(1000), max_value(current_year)],
    "genre": [required()],
    "description": [required(), min_length(10)],
    "available": [],
    "cover_url": [],
}


def validate_field(name: str, value: Any) -> FieldError | None:
    """Check one field against its rules, stopping at the first failure."""
    for rule in FIELD_RULES.get(name, []):
        error = rule.check(value)
        if error is not None:
            return error
    return None


def as_bool(value: Any, default: bool = True) -> bool:
    """Interpret form input as a boolean."""
    if value is None or value == "":
        return default
    if isinstance(value, str):
        return value.lower() in ("true", "1", "yes", "on")
    return bool(value)


@dataclass
class ValidationResult:
    """Outcome of validating a full set of book fields."""

    values: dict[str, Any]
    errors: dict[str, FieldError] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def to_book_create(self) -> BookCreate:
        """Build the store input from validated values.

        Raises:
            ValueError: If the fields did not pass validation.
        """
        if not self.is_valid:
            raise ValueError(f"Invalid fields: {', '.join(sorted(self.errors))}")

        return BookCreate(
            title=self.values["title"],
            author=self.values["author"],
            year=as_int(self.values["year"]),
            genre=self.values["genre"],
            description=self.values["description"],
            available=as_bool(self.values.get("available")),
            cover_url=self.values.get("cover_url") or None,
        )


def validate_book(fields: Mapping[str, Any]) -> ValidationResult:
    """Validate every field of a book entry."""
    result = ValidationResult(values=dict(fields))
    for name in FIELD_RULES:
        error = validate_field(name, fields.get(name))
        if error is not None:
            result.errors[name] = error
    return result
