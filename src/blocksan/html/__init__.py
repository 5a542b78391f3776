"""Default HTML cleaning primitive."""
from __future__ import annotations

from blocksan.html.cleaner import (
    CleanerOptions,
    CleanHTML,
    ForcedAttributeFilter,
    HtmlCleaner,
    default_cleaner,
)

__all__ = [
    "CleanHTML",
    "CleanerOptions",
    "ForcedAttributeFilter",
    "HtmlCleaner",
    "default_cleaner",
]
