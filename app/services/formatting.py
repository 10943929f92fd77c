"""Presentation helpers for catalog listings."""

import re
from dataclasses import dataclass


def split_matches(text: str, term: str) -> list[str]:
    """Split ``text`` around case-insensitive occurrences of ``term``.

    Odd-indexed parts are the matches, with their original casing. The term is
    matched literally. Empty text or an empty term gives a single part.
    """
    if not term or not text:
        return [text]
    return re.split(f"({re.escape(term)})", text, flags=re.IGNORECASE)


def highlight(text: str, term: str, tag: str = "mark") -> str:
    """Wrap every case-insensitive occurrence of ``term`` in ``text`` with ``<tag>``.

    The term is matched literally and matched text keeps its original casing.
    Empty text or an empty term returns the text unchanged.
    """
    if not term or not text:
        return text

    return "".join(
        f"<{tag}>{part}</{tag}>" if i % 2 else part
        for i, part in enumerate(split_matches(text, term))
    )


@dataclass(frozen=True)
class AvailabilityStyle:
    """Styling applied to a book card depending on availability."""

    css_class: str
    border_left: str
    background_color: str

    @property
    def inline(self) -> str:
        return f"border-left: {self.border_left}; background-color: {self.background_color};"


AVAILABLE_STYLE = AvailabilityStyle(
    css_class="available",
    border_left="4px solid #10b981",
    background_color="#f0fdf4",
)
UNAVAILABLE_STYLE = AvailabilityStyle(
    css_class="unavailable",
    border_left="4px solid #ef4444",
    background_color="#fef2f2",
)


def availability_style(available: bool) -> AvailabilityStyle:
    return AVAILABLE_STYLE if available else UNAVAILABLE_STYLE
