from __future__ import annotations

from core.columns import DEFAULT_COLUMNS, ColumnMatcher
from core.settings import Settings


def test_default_markers_match_korean_and_english_names() -> None:
    assert DEFAULT_COLUMNS.value_index(["연도", "MBTI 유형", "비율 값"]) == 2
    assert DEFAULT_COLUMNS.category_index(["연도", "MBTI 유형", "비율 값"]) == 1
    assert DEFAULT_COLUMNS.value_index(["time", "type", "value"]) == 2
    assert DEFAULT_COLUMNS.category_index(["time", "type", "value"]) == 1


def test_missing_columns_return_minus_one() -> None:
    assert DEFAULT_COLUMNS.value_index(["a", "b"]) == -1
    assert DEFAULT_COLUMNS.category_index([]) == -1
    assert DEFAULT_COLUMNS.value_indexes(["a", "b"]) == set()


def test_value_indexes_returns_every_match() -> None:
    assert DEFAULT_COLUMNS.value_indexes(["value", "x", "old value"]) == {0, 2}


def test_from_settings() -> None:
    settings = Settings(value_markers=("pct",), category_markers=("group",))
    columns = ColumnMatcher.from_settings(settings)
    assert columns.value_index(["group", "pct"]) == 1
    assert columns.category_index(["group", "pct"]) == 0
    assert columns.value_index(["value"]) == -1
