# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses define the shape of every piece of information that flows
# from the fetcher to the formatter.  They carry no behavior.
#
# Nothing here outlives a single tool call: a GraphRecord is built from one
# HTTP response, rendered, and dropped.
# =============================================================================

from dataclasses import dataclass, field
from typing import Any

SUCCESS_STATUS = "OK"


# -----------------------------------------------------------------------------
# GraphRecord — one exported graph from Pythagraph RED
# -----------------------------------------------------------------------------
# Despite the name this is a flat table, not a node/edge graph:
# column_names is the header and every entry of rows is one line of cells.
# rows[i][j] belongs to column_names[j] whenever len(rows[i]) matches.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class GraphRecord:
    """A graph export as returned by the upstream API."""

    id: str                                 # graphId, echoed back as-is
    name: str                               # graphNm
    description: str = ""                   # graphDet, may hold inline HTML
    unit_category: str = ""                 # unitDivNm
    unit_label: str = ""                    # unitNm
    source_url: str = ""                    # dataSrc
    organization_url: str = ""              # dataOrg
    link_url: str = ""                      # link
    registrant: str = ""                    # regUser
    registered_at: str = ""                 # regTime, opaque text
    column_names: list[str] = field(default_factory=list)
    rows: list[list[str]] = field(default_factory=list)
    alt_column_names: list[str] = field(default_factory=list)   # cols2
    regions: list[Any] = field(default_factory=list)           # regionList
    status: str = SUCCESS_STATUS            # the "message" discriminator

    @property
    def row_count(self) -> int:
        return len(self.rows)


# -----------------------------------------------------------------------------
# GraphStatistics — numbers behind the detailed view's statistics table
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class GraphStatistics:
    """Aggregates over the numeric cells of the value column."""

    total: float
    mean: float
    maximum: float
    minimum: float
    count: int


# -----------------------------------------------------------------------------
# GraphInsight — the summary view's best / worst / total lines
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class GraphInsight:
    """Extremes of the value column, labelled by their category cell."""

    best_label: str
    best_value: float
    worst_label: str
    worst_value: float
    total: float
