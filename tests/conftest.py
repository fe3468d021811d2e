"""Shared test fixtures for the milestoneproxy test suite."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from milestoneproxy.config import Settings


@pytest.fixture()
def settings(tmp_path) -> Settings:
    """Settings with Monday.com configured and a throwaway static dir."""
    return Settings(
        server={"static_dir": str(tmp_path / "public")},
        monday={"api_key": "test-key", "board_id": "1234567890"},
    )


FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture()
def strategy_pdf() -> bytes:
    """One-page PDF with two lines of Helvetica text."""
    return (FIXTURES / "strategy.pdf").read_bytes()


@pytest.fixture()
def board_payload() -> dict:
    """A board query response with one fully populated item and one sparse item."""
    return {
        "data": {
            "boards": [
                {
                    "items_page": {
                        "items": [
                            {
                                "id": "1",
                                "name": "Digital Front Door",
                                "column_values": [
                                    {"id": "long_text_mkp52kd7", "text": "Patient portal rollout"},
                                    {"id": "date4", "text": "2024-03-07"},
                                    {"id": "dropdown_mkp5e1h0", "text": "Digital"},
                                ],
                                "subitems": [
                                    {
                                        "id": "11",
                                        "name": "Discovery",
                                        "column_values": [
                                            {"id": "person", "text": "Ada Lovelace", "value": None},
                                            {
                                                "id": "multiple_person_mkr3784v",
                                                "text": "Grace Hopper",
                                                "value": None,
                                            },
                                            {
                                                "id": "timerange_mkpca05e",
                                                "text": "2024-01-01 - 2024-02-15",
                                                "value": json.dumps(
                                                    {"from": "2024-01-01", "to": "2024-02-15"}
                                                ),
                                            },
                                            {"id": "status", "text": "Done", "value": None},
                                        ],
                                    }
                                ],
                            },
                            {
                                "id": "2",
                                "name": "Data Platform",
                                "column_values": [],
                                "subitems": None,
                            },
                        ]
                    }
                }
            ]
        }
    }
