# =============================================================================
# core/graph_api.py  —  Pythagraph RED Fetcher
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   One HTTP GET against the export endpoint, one JSON body, one GraphRecord.
#
#       GET <api_url>?graphId=<id>
#       Accept: application/json
#       User-Agent: <settings.user_agent>
#
#   The body is checked against the expected shape (a pydantic model of the
#   wire format) and then against its "message" field, which must be "OK".
#   Anything else becomes a FetchError whose text is safe to show to a caller.
#
#   No retries, no caching, no pagination.  The request timeout comes from
#   Settings.timeout_seconds.
# =============================================================================

import logging
from typing import Any, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from core.models import SUCCESS_STATUS, GraphRecord
from core.settings import Settings

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """The graph could not be retrieved or the upstream reported a failure."""

    def __init__(self, detail: str):
        super().__init__(f"Failed to fetch graph data: {detail}")
        self.detail = detail


# -----------------------------------------------------------------------------
# Wire format
# -----------------------------------------------------------------------------
# Field names mirror the upstream JSON.  Display strings may be missing or
# null; they collapse to "".  Cells arrive as strings in practice but numbers
# and nulls are tolerated and turned into text.
# -----------------------------------------------------------------------------
class _GraphPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    graphId: str = ""
    graphNm: str = ""
    graphDet: str = ""
    unitDivNm: str = ""
    unitNm: str = ""
    link: str = ""
    dataSrc: str = ""
    dataOrg: str = ""
    regUser: str = ""
    regTime: str = ""
    cols: list[str] = Field(default_factory=list)
    cols2: list[str] = Field(default_factory=list)
    graphData: list[list[str]] = Field(default_factory=list)
    regionList: list[Any] = Field(default_factory=list)
    message: str

    @field_validator(
        "graphId", "graphNm", "graphDet", "unitDivNm", "unitNm", "link",
        "dataSrc", "dataOrg", "regUser", "regTime",
        mode="before",
    )
    @classmethod
    def _text_or_empty(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("cols", "cols2", "regionList", mode="before")
    @classmethod
    def _list_or_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("graphData", mode="before")
    @classmethod
    def _cells_as_text(cls, value: Any) -> Any:
        if value is None:
            return []
        if not isinstance(value, list):
            return value
        return [
            [_cell_text(cell) for cell in row] if isinstance(row, list) else row
            for row in value
        ]

    def to_record(self) -> GraphRecord:
        return GraphRecord(
            id=self.graphId,
            name=self.graphNm,
            description=self.graphDet,
            unit_category=self.unitDivNm,
            unit_label=self.unitNm,
            source_url=self.dataSrc,
            organization_url=self.dataOrg,
            link_url=self.link,
            registrant=self.regUser,
            registered_at=self.regTime,
            column_names=list(self.cols),
            rows=[list(row) for row in self.graphData],
            alt_column_names=list(self.cols2),
            regions=list(self.regionList),
            status=self.message,
        )


def _cell_text(cell: Any) -> Any:
    if cell is None:
        return ""
    if isinstance(cell, bool):
        return "true" if cell else "false"
    if isinstance(cell, (int, float)):
        return str(cell)
    return cell


def parse_graph_payload(payload: Any) -> GraphRecord:
    """Validate a decoded JSON body and turn it into a GraphRecord.

    Raises:
        FetchError: if the body has the wrong shape or its status is not "OK".
    """
    if not isinstance(payload, dict):
        raise FetchError(f"Unexpected response body: expected a JSON object, got {type(payload).__name__}")
    try:
        parsed = _GraphPayload.model_validate(payload)
    except ValidationError as exc:
        raise FetchError(f"Unexpected response body: {exc}") from exc

    if parsed.message != SUCCESS_STATUS:
        raise FetchError(f"API Error: {parsed.message}")
    return parsed.to_record()


def _request_headers(settings: Settings) -> dict[str, str]:
    return {
        "Accept": "application/json",
        "User-Agent": settings.user_agent,
    }


def build_client(
    settings: Settings,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Create the AsyncClient used for upstream calls.

    Headers are set per request in _fetch so injected clients send them too.
    `transport` is only set by tests (httpx.MockTransport).
    """
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.timeout_seconds),
        transport=transport,
    )


async def fetch_graph(
    graph_id: str,
    *,
    settings: Settings,
    client: Optional[httpx.AsyncClient] = None,
) -> GraphRecord:
    """Fetch one graph export and return it as a GraphRecord.

    Args:
        graph_id: The graph identifier, passed through untouched (URL-encoded).
        settings: Endpoint, headers and timeout.
        client: Shared client from the server context.  When omitted a
            short-lived client is opened for this call only.

    Raises:
        FetchError: transport failure, non-2xx status, unparsable or
            malformed body, or an upstream status other than "OK".
    """
    if client is None:
        async with build_client(settings) as own_client:
            return await _fetch(own_client, graph_id, settings)
    return await _fetch(client, graph_id, settings)


async def _fetch(client: httpx.AsyncClient, graph_id: str, settings: Settings) -> GraphRecord:
    logger.debug("GET %s graphId=%s", settings.api_url, graph_id)
    try:
        response = await client.get(
            settings.api_url,
            params={"graphId": graph_id},
            headers=_request_headers(settings),
        )
    except httpx.TimeoutException as exc:
        logger.warning("Timed out fetching graph %s: %s", graph_id, exc)
        limit = settings.timeout_seconds
        raise FetchError(
            f"Request timed out after {limit:g} seconds" if limit else f"Request timed out: {exc}"
        ) from exc
    except httpx.HTTPError as exc:
        logger.warning("Transport error fetching graph %s: %s", graph_id, exc)
        raise FetchError(f"{type(exc).__name__}: {exc}") from exc

    if not response.is_success:
        logger.warning("Graph %s returned HTTP %s", graph_id, response.status_code)
        raise FetchError(f"HTTP {response.status_code}: {response.reason_phrase}")

    try:
        payload = response.json()
    except ValueError as exc:
        raise FetchError(f"Invalid JSON in response body: {exc}") from exc

    record = parse_graph_payload(payload)
    logger.debug("Graph %s: %d columns, %d rows", record.id, len(record.column_names), record.row_count)
    return record
