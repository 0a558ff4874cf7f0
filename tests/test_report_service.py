"""Tests for the report service."""

import json
import logging
from datetime import date
from typing import Any

import pytest

from addesk.exceptions import (
    CampaignMismatchError,
    CampaignNotFoundError,
    PayloadValidationError,
)
from addesk.models.adserver import Campaign
from addesk.models.settings import ReportSettings
from addesk.services.report_service import ReportService


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def service() -> ReportService:
    """Service with the bundled settings file."""
    return ReportService()


# =============================================================================
# CAMPAIGN RESOLUTION
# =============================================================================


class TestFindCampaign:
    """Tests for find_campaign()."""

    def test_from_payloads(
        self, service: ReportService, campaign_payload: dict[str, Any]
    ) -> None:
        other = {**campaign_payload, "id": 7, "name": "Outra"}
        campaign = service.find_campaign([other, campaign_payload], campaign_id=42)
        assert isinstance(campaign, Campaign)
        assert campaign.name == "Campanha Verão"

    def test_from_models(self, service: ReportService, campaign: Campaign) -> None:
        assert service.find_campaign([campaign], campaign_id=42) is campaign

    def test_malformed_neighbour_ignored(
        self, service: ReportService, campaign_payload: dict[str, Any]
    ) -> None:
        """Only the matching entry is validated."""
        broken = {**campaign_payload, "id": 99, "advertiser": None}
        campaign = service.find_campaign([broken, campaign_payload], campaign_id=42)
        assert campaign.id == 42

    def test_malformed_match_raises(
        self, service: ReportService, campaign_payload: dict[str, Any]
    ) -> None:
        broken = {**campaign_payload, "advertiser": None}
        with pytest.raises(PayloadValidationError, match="campaign"):
            service.find_campaign([broken], campaign_id=42)

    def test_not_found_lists_raw_ids(
        self, service: ReportService, campaign_payload: dict[str, Any]
    ) -> None:
        broken = {"id": 7}
        with pytest.raises(CampaignNotFoundError) as exc_info:
            service.find_campaign([campaign_payload, broken], campaign_id=99)
        assert exc_info.value.available_ids == [42, 7]

    def test_not_found(self, service: ReportService, campaign: Campaign) -> None:
        with pytest.raises(CampaignNotFoundError, match="Campaign ID 99 not found") as exc_info:
            service.find_campaign([campaign], campaign_id=99)
        assert exc_info.value.available_ids == [42]


class TestReportWindow:
    """Tests for report_window()."""

    def test_created_to_finish(self, service: ReportService, campaign: Campaign) -> None:
        assert service.report_window(campaign) == ("2024-02-20", "2024-03-31")

    def test_open_campaign_runs_to_today(
        self, service: ReportService, campaign_payload: dict[str, Any]
    ) -> None:
        campaign_payload["limits"]["finish_at"] = None
        campaign = service.find_campaign([campaign_payload], campaign_id=42)
        window = service.report_window(campaign, today=date(2024, 5, 1))
        assert window == ("2024-02-20", "2024-05-01")


# =============================================================================
# DASHBOARD GENERATION
# =============================================================================


class TestGenerateDashboard:
    """Tests for generate_dashboard()."""

    def test_daily_payloads(
        self,
        service: ReportService,
        campaign_payload: dict[str, Any],
        daily_report_payload: dict[str, Any],
    ) -> None:
        dashboard = service.generate_dashboard(campaign_payload, daily_report_payload)
        assert len(dashboard.structure) == 3
        assert dashboard.chart_data is not None
        assert len(dashboard.chart_data) == 3

    def test_flat_payload(
        self,
        service: ReportService,
        campaign: Campaign,
        flat_report_payload: dict[str, Any],
    ) -> None:
        """Flat reports carry no campaign id, so no mismatch check applies."""
        dashboard = service.generate_dashboard(campaign, flat_report_payload)
        assert dashboard.chart_data is None
        assert [item.viewables for item in dashboard.structure] == [700, 250]

    def test_mismatched_campaign(
        self,
        service: ReportService,
        campaign: Campaign,
        daily_report_payload: dict[str, Any],
    ) -> None:
        daily_report_payload["campaign_id"] = 99
        with pytest.raises(CampaignMismatchError) as exc_info:
            service.generate_dashboard(campaign, daily_report_payload)
        assert exc_info.value.report_campaign_id == 99

    def test_invalid_payload(self, service: ReportService, campaign: Campaign) -> None:
        with pytest.raises(PayloadValidationError):
            service.generate_dashboard(
                campaign, {"campaign_id": 42, "dateBegin": "x", "dateEnd": "y"}
            )

    @pytest.mark.parametrize("payload", [{"sites": [1]}, [{"site_id": 1}]])
    def test_malformed_report_shape(
        self, service: ReportService, campaign: Campaign, payload: Any
    ) -> None:
        with pytest.raises(PayloadValidationError):
            service.generate_dashboard(campaign, payload)

    def test_uses_service_settings(
        self,
        campaign: Campaign,
        daily_report_payload: dict[str, Any],
    ) -> None:
        service = ReportService(settings=ReportSettings(empty_period="n/d"))
        campaign = campaign.model_copy(
            update={"limits": campaign.limits.model_copy(update={"start_at": None})}
        )
        dashboard = service.generate_dashboard(campaign, daily_report_payload)
        assert dashboard.campaign.period == "n/d"

    def test_logs_build(
        self,
        service: ReportService,
        campaign: Campaign,
        daily_report_payload: dict[str, Any],
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        with caplog.at_level(logging.INFO, logger="addesk"):
            service.generate_dashboard(campaign, daily_report_payload)
        assert "Built dashboard for campaign 42" in caplog.text


# =============================================================================
# OUTPUTS
# =============================================================================


class TestOutputs:
    """Tests for totals, export rows and the summary dict."""

    @pytest.fixture
    def summary(
        self,
        service: ReportService,
        campaign: Campaign,
        daily_report_payload: dict[str, Any],
    ) -> dict[str, Any]:
        dashboard = service.generate_dashboard(campaign, daily_report_payload)
        return service.generate_summary_dict(dashboard)

    def test_summary_is_json_serializable(self, summary: dict[str, Any]) -> None:
        assert json.loads(json.dumps(summary)) == summary

    def test_summary_shape(self, summary: dict[str, Any]) -> None:
        assert set(summary) == {"campaign", "structure", "chartData", "totals", "cards"}
        assert summary["campaign"]["auditStatus"] == {"percentage": 0, "verifier": "—"}
        assert summary["chartData"][0] == {"date": "01 mar", "delivery": 400, "viewability": 40}

    def test_structure_children_only_when_present(self, summary: dict[str, Any]) -> None:
        portal_a, portal_b, _ = summary["structure"]
        assert [child["name"] for child in portal_a["children"]] == ["Banner A", "Rodapé"]
        assert "children" not in portal_b

    def test_totals(self, summary: dict[str, Any]) -> None:
        assert summary["totals"]["impressions"] == 600
        assert summary["totals"]["ctr"] == pytest.approx(1.5)
        assert summary["totals"]["pacing"] == 100

    def test_export_rows(
        self,
        service: ReportService,
        campaign: Campaign,
        daily_report_payload: dict[str, Any],
    ) -> None:
        dashboard = service.generate_dashboard(campaign, daily_report_payload)
        rows = service.export_rows(dashboard, vehicle="Portal A")
        assert rows[1]["Veículo"] == "  └ Banner A"
        assert service.export_filename("Portal A", "csv") == "relatorio_portal_a.csv"
