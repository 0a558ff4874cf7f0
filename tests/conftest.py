"""Shared ad-server payload fixtures."""

from typing import Any

import pytest

from addesk.ingestion import parse_campaign, parse_report
from addesk.models.adserver import Campaign, DailyCampaignReport


def stats(impressions: int = 0, clicks: int = 0, views: int = 0) -> dict[str, Any]:
    """DayStats payload with the pass-through counters filled in."""
    return {
        "requests": impressions * 2,
        "impressions": impressions,
        "impressions_unique": impressions // 2,
        "views": views,
        "clicks": clicks,
        "clicks_unique": clicks,
        "conversions": 0,
        "amount": 0.0,
    }


@pytest.fixture
def campaign_payload() -> dict[str, Any]:
    """Campaign with a 900-unit total cap and a closed period."""
    return {
        "id": 42,
        "name": "Campanha Verão",
        "advertiser": {"id": 7, "name": "Acme", "email": "midia@acme.com"},
        "status": {"id": 1, "name": "Active"},
        "runstatus": {"id": 2, "name": "Running"},
        "pricemodel": {"id": 1, "name": "CPM"},
        "created_at": "2024-02-20T10:00:00Z",
        "limits": {
            "start_at": "2024-03-01",
            "finish_at": "2024-03-31T23:59:59",
            "budget": None,
            "additional": {"type": 1, "limit_total": 900, "limit_daily": 0},
        },
        "ads": [{"id": 1, "name": "Banner 300x250"}],
    }


@pytest.fixture
def daily_report_payload() -> dict[str, Any]:
    """Three sites; days out of order, a zone named only on its second day,
    a zone never named, a zone without id, null stats and a site without days.

    Expected rollups:
        Portal A: 300 imps / 6 clicks / 30 views; zones Banner A (250/5/25)
            and Rodapé (50/1/5)
        Portal B: 300 imps / 3 clicks / 30 views; no zones
        Portal C: all zero
        Daily: 03-01 -> 400/40, 03-02 -> 200/20, 03-03 -> 0/0
    """
    return {
        "campaign_id": 42,
        "dateBegin": "2024-03-01",
        "dateEnd": "2024-03-31",
        "sites": [
            {
                "site_id": 1,
                "site_name": "Portal A",
                "days": [
                    {
                        "date": "2024-03-02",
                        "stats": stats(200, 4, 20),
                        "zones": [
                            {
                                "zone_id": 5,
                                "zone_name": "Banner A",
                                "stats": stats(150, 3, 15),
                                "ads": [{"ad_id": 1, "stats": stats(150, 3, 15)}],
                            },
                            {
                                "zone_id": 7,
                                "zone_name": "Rodapé",
                                "stats": stats(50, 1, 5),
                                "ads": [],
                            },
                        ],
                    },
                    {
                        "date": "2024-03-01",
                        "stats": stats(100, 2, 10),
                        "zones": [
                            {
                                "zone_id": 5,
                                "zone_name": None,
                                "stats": stats(100, 2, 10),
                                "ads": [],
                            },
                        ],
                    },
                ],
            },
            {
                "site_id": 2,
                "site_name": "Portal B",
                "days": [
                    {
                        "date": "2024-03-01",
                        "stats": stats(300, 3, 30),
                        "zones": [
                            {
                                "zone_id": 9,
                                "zone_name": None,
                                "stats": stats(300, 3, 30),
                                "ads": [],
                            },
                        ],
                    },
                    {
                        "date": "2024-03-03",
                        "stats": None,
                        "zones": [
                            {
                                "zone_id": None,
                                "zone_name": "Sem ID",
                                "stats": stats(10, 1, 1),
                                "ads": [],
                            },
                        ],
                    },
                ],
            },
            {"site_id": 3, "site_name": "Portal C", "days": []},
        ],
    }


@pytest.fixture
def flat_report_payload() -> dict[str, Any]:
    return {
        "sites": [
            {
                "site_id": 1,
                "site_name": "Portal A",
                "impressions": 1000,
                "clicks": 20,
                "views": 300,
                "viewables": 700,
            },
            {
                "site_id": 2,
                "site_name": "Portal B",
                "impressions": 500,
                "clicks": 5,
                "views": 0,
                "viewables": 250,
                "contracted": 1000,
                "delivered": 480,
            },
        ]
    }


@pytest.fixture
def campaign(campaign_payload: dict[str, Any]) -> Campaign:
    return parse_campaign(campaign_payload)


@pytest.fixture
def daily_report(daily_report_payload: dict[str, Any]) -> DailyCampaignReport:
    return parse_report(daily_report_payload)
