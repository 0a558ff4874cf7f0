"""Report builders - campaign report payloads into dashboard data.

Two variants share the DashboardData output:

- ``build_dashboard_data`` for the day-granular report (sites -> days -> zones)
- ``build_flat_dashboard_data`` for the per-site totals report

Both are pure functions over already-validated models. Checking that the
report belongs to the campaign is left to the caller.
"""

import logging
from dataclasses import dataclass
from datetime import date

import polars as pl

from ..models.adserver import (
    Campaign,
    DailyCampaignReport,
    DayStats,
    FlatCampaignReport,
    FlatReportSite,
    ReportDay,
    ReportSite,
)
from ..models.dashboard import (
    AuditStatus,
    CampaignHeader,
    DailyPoint,
    DashboardData,
    StructureItem,
)
from ..models.settings import ReportSettings
from .aggregator import pacing, percentage, round_half_up

logger = logging.getLogger(__name__)

DAILY_SCHEMA = {"date": pl.Date, "delivery": pl.Int64, "viewability": pl.Int64}


@dataclass
class _Counters:
    """Running impressions/clicks/views for one site or zone."""

    impressions: int = 0
    clicks: int = 0
    views: int = 0

    def add(self, stats: DayStats | None) -> None:
        if stats is None:
            return
        self.impressions += stats.impressions
        self.clicks += stats.clicks
        self.views += stats.views


# =============================================================================
# HEADER
# =============================================================================


def parse_day(value: str) -> date:
    """Calendar date of an ISO date or datetime string."""
    return date.fromisoformat(value[:10])


def format_period(
    start_at: str | None,
    finish_at: str | None,
    placeholder: str = "—",
) -> str:
    """Format the campaign period as ``DD/MM/YYYY - DD/MM/YYYY``.

    Open-ended campaigns get the placeholder, never a partial range.
    """
    if not start_at or not finish_at:
        return placeholder
    start = parse_day(start_at)
    finish = parse_day(finish_at)
    return f"{start:%d/%m/%Y} - {finish:%d/%m/%Y}"


def build_header(campaign: Campaign, settings: ReportSettings) -> CampaignHeader:
    """Campaign display header. Agency and client both show the advertiser."""
    return CampaignHeader(
        title=settings.title_template.format(name=campaign.name, id=campaign.id),
        period=format_period(
            campaign.limits.start_at,
            campaign.limits.finish_at,
            settings.empty_period,
        ),
        agency=campaign.advertiser.name,
        client=campaign.advertiser.name,
        audit_status=AuditStatus(
            percentage=settings.audit_percentage,
            verifier=settings.audit_verifier,
        ),
    )


# =============================================================================
# STRUCTURE
# =============================================================================


def split_contracted(limit_total: int | None, site_count: int) -> int | None:
    """Equal share of the campaign cap per site.

    Returns:
        round(limit_total / site_count), or None when there is no cap or no
        site to split it across.
    """
    if limit_total is None or site_count == 0:
        return None
    return round_half_up(limit_total / site_count)


def _leaf(
    name: str,
    contracted: int,
    delivered: int,
    impressions: int,
    clicks: int,
    views: int,
    viewables: int = 0,
    children: tuple[StructureItem, ...] = (),
) -> StructureItem:
    return StructureItem(
        name=name,
        contracted=contracted,
        delivered=delivered,
        pacing=pacing(delivered, contracted),
        impressions=impressions,
        viewables=viewables,
        va=percentage(viewables, impressions),
        clicks=clicks,
        ctr=percentage(clicks, impressions),
        views=views,
        vtr=percentage(views, impressions),
        children=children,
    )


def discover_zones(days: list[ReportDay]) -> tuple[StructureItem, ...]:
    """Placement nodes for every zone named on at least one day.

    Zones are joined across days by ``zone_id``. The name is the first
    non-null one in date order; counters cover every day the id appears,
    named or not. Per-zone viewables are not reported, so va stays 0 and
    contracted is 0.

    Args:
        days: Site days, in any order

    Returns:
        Zone nodes in order of first appearance.
    """
    names: dict[int, str] = {}
    counters: dict[int, _Counters] = {}

    for day in sorted(days, key=lambda d: d.date):
        for zone in day.zones:
            if zone.zone_id is None:
                continue
            counters.setdefault(zone.zone_id, _Counters()).add(zone.stats)
            if zone.zone_name is not None and zone.zone_id not in names:
                names[zone.zone_id] = zone.zone_name

    return tuple(
        _leaf(
            name=names[zone_id],
            contracted=0,
            delivered=totals.impressions,
            impressions=totals.impressions,
            clicks=totals.clicks,
            views=totals.views,
        )
        for zone_id, totals in counters.items()
        if zone_id in names
    )


def build_site_item(site: ReportSite, contracted: int | None) -> StructureItem:
    """Vehicle node for one site with its placements as children.

    Site counters come from the site's own day stats. Without a contracted
    share the site's delivery stands in, which reads as "no target set".
    """
    totals = _Counters()
    for day in site.days:
        totals.add(day.stats)

    children = discover_zones(site.days)
    logger.debug(
        "Site %s (%s): %d day(s), %d zone(s)",
        site.site_id,
        site.site_name,
        len(site.days),
        len(children),
    )

    return _leaf(
        name=site.site_name,
        contracted=totals.impressions if contracted is None else contracted,
        delivered=totals.impressions,
        impressions=totals.impressions,
        clicks=totals.clicks,
        views=totals.views,
        children=children,
    )


# =============================================================================
# DAILY SERIES
# =============================================================================


def chart_label(day: date, month_abbreviations: tuple[str, ...]) -> str:
    """Short axis label, e.g. ``05 mar``."""
    return f"{day.day:02d} {month_abbreviations[day.month - 1]}"


def build_daily_series(
    report: DailyCampaignReport,
    settings: ReportSettings,
) -> list[DailyPoint]:
    """Delivery (impressions) and views per calendar date across all sites.

    Returns:
        One point per date present in the report, ascending by date.
    """
    rows = [
        {
            "date": day.date,
            "delivery": day.stats.impressions if day.stats else 0,
            "viewability": day.stats.views if day.stats else 0,
        }
        for site in report.sites
        for day in site.days
    ]
    daily = (
        pl.DataFrame(rows, schema=DAILY_SCHEMA)
        .group_by("date")
        .agg(pl.col("delivery").sum(), pl.col("viewability").sum())
        .sort("date")
    )

    return [
        DailyPoint(
            day=row["date"],
            label=chart_label(row["date"], settings.month_abbreviations),
            delivery=row["delivery"],
            viewability=row["viewability"],
        )
        for row in daily.to_dicts()
    ]


# =============================================================================
# BUILDERS
# =============================================================================


def build_dashboard_data(
    campaign: Campaign,
    report: DailyCampaignReport,
    settings: ReportSettings | None = None,
) -> DashboardData:
    """Build dashboard data from a day-granular report.

    Args:
        campaign: Campaign metadata
        report: Report fetched for the same campaign
        settings: Display constants (defaults to ReportSettings())

    Returns:
        DashboardData with one vehicle per site, its zones as placements,
        and the daily delivery series.
    """
    settings = settings or ReportSettings()
    share = split_contracted(campaign.limit_total, len(report.sites))

    structure = [build_site_item(site, share) for site in report.sites]

    return DashboardData(
        campaign=build_header(campaign, settings),
        structure=structure,
        chart_data=build_daily_series(report, settings),
    )


def build_flat_site_item(site: FlatReportSite, contracted: int | None) -> StructureItem:
    """Leaf node for one site of the flat report.

    Explicit contracted/delivered values on the site win over the policy.
    """
    delivered = site.impressions if site.delivered is None else site.delivered
    if site.contracted is not None:
        contracted = site.contracted
    elif contracted is None:
        contracted = delivered

    return _leaf(
        name=site.site_name,
        contracted=contracted,
        delivered=delivered,
        impressions=site.impressions,
        clicks=site.clicks,
        views=site.views,
        viewables=site.viewables,
    )


def build_flat_dashboard_data(
    campaign: Campaign,
    report: FlatCampaignReport,
    settings: ReportSettings | None = None,
) -> DashboardData:
    """Build dashboard data from the per-site totals report.

    Every site becomes one leaf vehicle. There is no daily series.
    """
    settings = settings or ReportSettings()
    share = split_contracted(campaign.limit_total, len(report.sites))

    return DashboardData(
        campaign=build_header(campaign, settings),
        structure=[build_flat_site_item(site, share) for site in report.sites],
        chart_data=None,
    )
