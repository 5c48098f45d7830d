# =============================================================================
# core/formatting.py  —  GraphRecord → Markdown
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns a GraphRecord into the Markdown text the tools return.  Two views:
#
#     render_detailed(record)
#         heading, description, basic info table, data source table,
#         full data table, statistics table
#
#     render_summary(record, include_details)
#         heading, fixed info block, description, best/worst/total insight,
#         then either the detailed view (below a "---") or a one-line hint
#
# NUMBERS:
#   Cells are parsed one at a time; anything that is not a float stays text
#   and is left out of every statistic.  Values in a value column are ratios,
#   shown as value × 100 with one decimal and a "%" suffix.
#
# Every function here is pure: same record in, same text out.
# =============================================================================

import math
import re
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Optional

from core.columns import DEFAULT_COLUMNS, ColumnMatcher
from core.models import GraphInsight, GraphRecord, GraphStatistics

_TAG_RE = re.compile(r"<[^>]*>")
_STRAY_CHARS_RE = re.compile("[\ufeff\u200b]")
_ONE_DECIMAL = Decimal("0.1")
_WIDE_CONTEXT = Context(prec=400)   # any finite float fits

DETAILS_SEPARATOR = "\n---\n\n"
DETAILS_HINT = "\n*`includeDetails: true` 옵션을 사용하면 전체 데이터 테이블을 볼 수 있습니다.*\n"


# =============================================================================
# Cell helpers
# =============================================================================
def parse_number(cell: object) -> Optional[float]:
    """Best-effort float parse.  None for text, blanks, NaN and infinities."""
    if cell is None:
        return None
    text = str(cell).strip()
    if "_" in text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def format_percent(value: float) -> str:
    """value × 100 to one decimal; exact halves round away from zero."""
    percent = value * 100
    if not math.isfinite(percent):
        return f"{percent}%"
    if percent == 0:
        percent = 0.0   # drop the sign of -0.0
    scaled = Decimal(percent).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP, context=_WIDE_CONTEXT)
    return f"{scaled}%"


def clean_description(text: str) -> str:
    """Strip inline HTML tags, decode &quot; and drop BOM / zero-width leftovers."""
    if not text:
        return ""
    cleaned = _TAG_RE.sub("", text)
    cleaned = cleaned.replace("&quot;", '"')
    cleaned = _STRAY_CHARS_RE.sub("", cleaned)
    return cleaned.strip()


def _numeric_cells(record: GraphRecord, index: int) -> list[tuple[int, float]]:
    """(row index, value) for every row with a numeric cell at `index`."""
    found = []
    for row_index, row in enumerate(record.rows):
        if index < len(row):
            value = parse_number(row[index])
            if value is not None:
                found.append((row_index, value))
    return found


# =============================================================================
# Derived values
# =============================================================================
def compute_statistics(
    record: GraphRecord, columns: ColumnMatcher = DEFAULT_COLUMNS
) -> Optional[GraphStatistics]:
    """Sum, mean, max, min and count over the first value column.

    Returns None when there is no value column or it holds no numbers.
    """
    index = columns.value_index(record.column_names)
    if index == -1:
        return None
    values = [value for _, value in _numeric_cells(record, index)]
    if not values:
        return None
    total = sum(values)
    return GraphStatistics(
        total=total,
        mean=total / len(values),
        maximum=max(values),
        minimum=min(values),
        count=len(values),
    )


def _row_label(row: list[str], category_index: int) -> str:
    if category_index != -1:
        return row[category_index] if category_index < len(row) else "-"
    return row[1] if len(row) > 1 else "-"


def find_insight(
    record: GraphRecord, columns: ColumnMatcher = DEFAULT_COLUMNS
) -> Optional[GraphInsight]:
    """Best and worst rows of the first value column, plus the total.

    Rows are scanned in their original order and the first row reaching the
    extreme wins a tie.
    """
    index = columns.value_index(record.column_names)
    if index == -1:
        return None
    cells = _numeric_cells(record, index)
    if not cells:
        return None

    best_row, best_value = cells[0]
    worst_row, worst_value = cells[0]
    for row_index, value in cells[1:]:
        if value > best_value:
            best_row, best_value = row_index, value
        if value < worst_value:
            worst_row, worst_value = row_index, value

    category_index = columns.category_index(record.column_names)
    return GraphInsight(
        best_label=_row_label(record.rows[best_row], category_index),
        best_value=best_value,
        worst_label=_row_label(record.rows[worst_row], category_index),
        worst_value=worst_value,
        total=sum(value for _, value in cells),
    )


# =============================================================================
# Detailed view
# =============================================================================
def _format_cell(cell: str, is_value_column: bool) -> str:
    if is_value_column:
        value = parse_number(cell)
        if value is not None:
            return format_percent(value)
    return cell


def _data_table(record: GraphRecord, columns: ColumnMatcher) -> str:
    names = record.column_names
    value_columns = columns.value_indexes(names)

    lines = [
        f"| {' | '.join(names)} |",
        f"| {' | '.join('------' for _ in names)} |",
    ]
    for row in record.rows:
        if len(row) != len(names):
            continue
        cells = [_format_cell(cell, i in value_columns) for i, cell in enumerate(row)]
        lines.append(f"| {' | '.join(cells)} |")
    return "\n".join(lines) + "\n"


def render_detailed(record: GraphRecord, *, columns: ColumnMatcher = DEFAULT_COLUMNS) -> str:
    """Full Markdown view of a graph: metadata, data table and statistics."""
    parts = [f"# {record.name}\n\n"]

    description = clean_description(record.description)
    if description:
        parts.append(f"**설명**: {description}\n\n")

    parts.append(
        "## 📊 기본 정보\n\n"
        "| 항목 | 값 |\n"
        "|------|----|\n"
        f"| Graph ID | {record.id} |\n"
        f"| 단위 구분 | {record.unit_category} |\n"
        f"| 단위명 | {record.unit_label} |\n"
        f"| 등록자 | {record.registrant} |\n"
        f"| 등록시간 | {record.registered_at} |\n"
        f"| 데이터 건수 | {record.row_count}건 |\n"
    )

    sources = [
        ("데이터 소스", record.source_url),
        ("데이터 기관", record.organization_url),
        ("링크", record.link_url),
    ]
    if any(url for _, url in sources):
        parts.append("\n## 🔗 데이터 출처\n\n| 구분 | URL |\n|------|-----|\n")
        parts.extend(f"| {label} | {url} |\n" for label, url in sources if url)

    if record.rows and record.column_names:
        parts.append("\n## 📈 데이터 테이블\n\n")
        parts.append(_data_table(record, columns))

    stats = compute_statistics(record, columns)
    if stats is not None:
        parts.append(
            "\n## 📊 통계 분석\n\n"
            "| 통계 항목 | 값 |\n"
            "|-----------|----|\n"
            f"| 총합 | {format_percent(stats.total)} |\n"
            f"| 평균 | {format_percent(stats.mean)} |\n"
            f"| 최댓값 | {format_percent(stats.maximum)} |\n"
            f"| 최솟값 | {format_percent(stats.minimum)} |\n"
            f"| 데이터 개수 | {stats.count}개 |\n"
        )

    return "".join(parts)


# =============================================================================
# Summary view
# =============================================================================
def render_summary_block(record: GraphRecord, *, columns: ColumnMatcher = DEFAULT_COLUMNS) -> str:
    """The summary without the trailing details / hint."""
    parts = [
        f"# {record.name} - 요약\n\n",
        f"📊 **Graph ID**: {record.id}\n",
        f"📊 **데이터 건수**: {record.row_count}건\n",
        f"📊 **단위**: {record.unit_category} ({record.unit_label})\n",
        f"📅 **등록일**: {record.registered_at}\n\n",
    ]

    description = clean_description(record.description)
    if description:
        parts.append(f"**설명**: {description}\n\n")

    insight = find_insight(record, columns)
    if insight is not None:
        parts.append(
            "## 🔍 핵심 인사이트\n\n"
            f"🏆 **최고**: {insight.best_label} ({format_percent(insight.best_value)})\n"
            f"📉 **최저**: {insight.worst_label} ({format_percent(insight.worst_value)})\n"
            f"📊 **총합**: {format_percent(insight.total)}\n\n"
        )

    return "".join(parts)


def render_summary(
    record: GraphRecord,
    include_details: bool = False,
    *,
    columns: ColumnMatcher = DEFAULT_COLUMNS,
) -> str:
    """Short Markdown view; with include_details the detailed view follows."""
    summary = render_summary_block(record, columns=columns)
    if include_details:
        return summary + DETAILS_SEPARATOR + render_detailed(record, columns=columns)
    return summary + DETAILS_HINT
