from __future__ import annotations

from typing import Any

import pytest

from core.models import GraphRecord


def make_payload(**overrides: Any) -> dict[str, Any]:
    """An upstream export body in the shape the API returns it."""
    payload: dict[str, Any] = {
        "graphId": "G81a9c",
        "graphNm": "MBTI 유형별 비율",
        "graphDet": "<p>성인 응답자의 &quot;MBTI&quot; 분포</p>\ufeff",
        "unitDivNm": "비율",
        "unitNm": "%",
        "link": "https://example.org/graph/G81a9c",
        "dataSrc": "https://example.org/source",
        "dataOrg": "",
        "regUser": "analyst",
        "regTime": "2024-05-01 10:00:00",
        "cols": ["time", "type", "value"],
        "cols2": [],
        "graphData": [
            ["15", "ENFP", "0.126"],
            ["08", "INFP", "0.134"],
            ["04", "INFJ", "0.063"],
        ],
        "regionList": [],
        "message": "OK",
    }
    payload.update(overrides)
    return payload


def make_record(**overrides: Any) -> GraphRecord:
    fields: dict[str, Any] = {
        "id": "G81a9c",
        "name": "MBTI 유형별 비율",
        "description": "<p>성인 응답자의 &quot;MBTI&quot; 분포</p>\ufeff",
        "unit_category": "비율",
        "unit_label": "%",
        "source_url": "https://example.org/source",
        "link_url": "https://example.org/graph/G81a9c",
        "registrant": "analyst",
        "registered_at": "2024-05-01 10:00:00",
        "column_names": ["time", "type", "value"],
        "rows": [
            ["15", "ENFP", "0.126"],
            ["08", "INFP", "0.134"],
            ["04", "INFJ", "0.063"],
        ],
    }
    fields.update(overrides)
    return GraphRecord(**fields)


@pytest.fixture
def record() -> GraphRecord:
    return make_record()


@pytest.fixture
def payload() -> dict[str, Any]:
    return make_payload()
