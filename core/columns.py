# =============================================================================
# core/columns.py  —  Which column is the "value" and which is the "category"
# =============================================================================
#
# Upstream column names are not fixed ("값", "비율 값", "value", ...), so
# columns are picked by substring markers rather than by position.
# =============================================================================

from dataclasses import dataclass
from typing import Sequence

from core.settings import DEFAULT_CATEGORY_MARKERS, DEFAULT_VALUE_MARKERS, Settings


@dataclass(frozen=True)
class ColumnMatcher:
    """Substring predicate for value and category columns."""

    value_markers: tuple[str, ...] = DEFAULT_VALUE_MARKERS
    category_markers: tuple[str, ...] = DEFAULT_CATEGORY_MARKERS

    @classmethod
    def from_settings(cls, settings: Settings) -> "ColumnMatcher":
        return cls(
            value_markers=tuple(settings.value_markers),
            category_markers=tuple(settings.category_markers),
        )

    def is_value_column(self, name: str) -> bool:
        return any(marker in name for marker in self.value_markers)

    def is_category_column(self, name: str) -> bool:
        return any(marker in name for marker in self.category_markers)

    def value_indexes(self, column_names: Sequence[str]) -> set[int]:
        """Every column rendered as a percentage in the data table."""
        return {i for i, name in enumerate(column_names) if self.is_value_column(name)}

    def value_index(self, column_names: Sequence[str]) -> int:
        """First value column, or -1."""
        for i, name in enumerate(column_names):
            if self.is_value_column(name):
                return i
        return -1

    def category_index(self, column_names: Sequence[str]) -> int:
        """First category column, or -1."""
        for i, name in enumerate(column_names):
            if self.is_category_column(name):
                return i
        return -1


DEFAULT_COLUMNS = ColumnMatcher()
