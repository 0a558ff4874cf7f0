"""Report service - resolves campaigns, builds dashboards and export rows."""

import logging
from datetime import date
from pathlib import Path
from typing import Any

from ..analytics import (
    build_dashboard_data,
    build_flat_dashboard_data,
    compute_totals,
    parse_day,
)
from ..exceptions import CampaignMismatchError, CampaignNotFoundError
from ..export import build_export_rows, build_metric_cards, export_filename
from ..ingestion import load_settings, parse_campaign, parse_report
from ..models.adserver import (
    Campaign,
    CampaignReport,
    DailyCampaignReport,
    FlatCampaignReport,
)
from ..models.dashboard import DashboardData, Totals
from ..models.settings import ReportSettings

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = Path(__file__).parent.parent / "config" / "report_settings.yaml"


class ReportService:
    """Service for turning fetched ad-server payloads into dashboard data.

    Fetching is done elsewhere. The service resolves the campaign, derives
    the report window, checks the report belongs to the campaign and hands
    both to the matching builder.

    Usage:
        service = ReportService()
        campaign = service.find_campaign(campaigns, campaign_id=42)
        date_begin, date_end = service.report_window(campaign)
        # ... fetch the report for that window ...
        dashboard = service.generate_dashboard(campaign, report_payload)
        summary = service.generate_summary_dict(dashboard)
    """

    def __init__(
        self,
        settings_path: Path | None = None,
        settings: ReportSettings | None = None,
    ):
        """Initialize service with report settings.

        Args:
            settings_path: Path to report_settings.yaml. Defaults to bundled config.
            settings: Ready-made settings; takes precedence over settings_path.
        """
        if settings is not None:
            self.settings = settings
        else:
            self.settings = load_settings(settings_path or DEFAULT_SETTINGS_PATH)

    def find_campaign(
        self,
        campaigns: list[Campaign] | list[dict[str, Any]],
        campaign_id: int,
    ) -> Campaign:
        """Pick a campaign out of an already-fetched list.

        Only the matching entry is validated, so malformed neighbours in the
        list do not block the lookup.

        Raises:
            CampaignNotFoundError: If no campaign has ``campaign_id``
            PayloadValidationError: If the matching campaign is malformed
        """
        available_ids = []
        for c in campaigns:
            raw_id = c.id if isinstance(c, Campaign) else c.get("id")
            if raw_id == campaign_id:
                return c if isinstance(c, Campaign) else parse_campaign(c)
            available_ids.append(raw_id)
        raise CampaignNotFoundError(campaign_id, available_ids)

    def report_window(
        self,
        campaign: Campaign,
        today: date | None = None,
    ) -> tuple[str, str]:
        """Date range to request the report for.

        Runs from the campaign's creation date to its finish date, or to
        today when the campaign has no finish date.

        Returns:
            (dateBegin, dateEnd) as ISO dates
        """
        begin = parse_day(campaign.created_at)
        if campaign.limits.finish_at:
            end = parse_day(campaign.limits.finish_at)
        else:
            end = today or date.today()
        return begin.isoformat(), end.isoformat()

    def generate_dashboard(
        self,
        campaign: Campaign | dict[str, Any],
        report: CampaignReport | dict[str, Any],
    ) -> DashboardData:
        """Build dashboard data for a campaign and its report.

        Args:
            campaign: Campaign model or raw campaign payload
            report: Report model or raw report payload, either shape

        Returns:
            DashboardData from the builder matching the report shape

        Raises:
            PayloadValidationError: If a raw payload does not match its model
            CampaignMismatchError: If the report names a different campaign
        """
        if not isinstance(campaign, Campaign):
            campaign = parse_campaign(campaign)
        if not isinstance(report, (DailyCampaignReport, FlatCampaignReport)):
            report = parse_report(report)

        if report.campaign_id is not None and report.campaign_id != campaign.id:
            raise CampaignMismatchError(campaign.id, report.campaign_id)

        if isinstance(report, DailyCampaignReport):
            dashboard = build_dashboard_data(campaign, report, self.settings)
        else:
            dashboard = build_flat_dashboard_data(campaign, report, self.settings)

        logger.info(
            "Built dashboard for campaign %s: %d vehicle(s), %d chart point(s)",
            campaign.id,
            len(dashboard.structure),
            len(dashboard.chart_data or []),
        )
        return dashboard

    def compute_totals(self, dashboard: DashboardData) -> Totals:
        return compute_totals(dashboard.structure)

    def export_rows(
        self,
        dashboard: DashboardData,
        vehicle: str | None = None,
    ) -> list[dict[str, Any]]:
        """Rows for the general report, or for one vehicle by name."""
        return build_export_rows(
            dashboard.structure,
            vehicle=vehicle,
            child_prefix=self.settings.child_prefix,
        )

    def export_filename(self, vehicle: str | None, extension: str) -> str:
        return export_filename(vehicle, extension)

    def generate_summary_dict(self, dashboard: DashboardData) -> dict[str, Any]:
        """Convert dashboard data to a JSON-serializable dictionary.

        Adds the consolidated totals and the formatted summary cards to the
        dashboard payload.
        """
        totals = self.compute_totals(dashboard)
        return {
            **dashboard.to_dict(),
            "totals": totals.to_dict(),
            "cards": [
                card.to_dict()
                for card in build_metric_cards(totals, self.settings.number_format)
            ],
        }
