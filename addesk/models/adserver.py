"""Pydantic models for ad-server API payloads.

Field names follow the backend's JSON. Fields the report engine never reads
(status, pricing, counters) are not modelled and are ignored on parse.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AdServerModel(BaseModel):
    """Common config: immutable, unknown backend fields ignored."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


# =============================================================================
# CAMPAIGN
# =============================================================================


class Advertiser(AdServerModel):
    name: str
    id: Optional[int] = None
    email: Optional[str] = None


class AdditionalLimits(AdServerModel):
    """Delivery caps. ``limit_total`` is the campaign-wide unit target."""

    limit_total: Optional[int] = None
    limit_daily: Optional[int] = None
    type: Optional[int] = None


class CampaignLimits(AdServerModel):
    # ISO date or datetime strings; either bound may be open
    start_at: Optional[str] = None
    finish_at: Optional[str] = None
    additional: Optional[AdditionalLimits] = None


class Campaign(AdServerModel):
    """Campaign metadata as returned by ``GET /campaigns``."""

    id: int
    name: str
    advertiser: Advertiser
    created_at: str
    limits: CampaignLimits = Field(default_factory=CampaignLimits)

    @property
    def limit_total(self) -> int | None:
        """Total delivery cap, or None when the campaign sets no positive cap."""
        additional = self.limits.additional
        if additional is None or not additional.limit_total:
            return None
        return additional.limit_total


# =============================================================================
# DAY-GRANULAR REPORT
# =============================================================================


class DayStats(AdServerModel):
    """Counters for one scope (campaign/site/zone/ad) on one day.

    Only impressions, clicks and views feed the report. Unique counters are
    kept apart and never summed into their totals.
    """

    requests: int = 0
    impressions: int = 0
    impressions_unique: int = 0
    views: int = 0
    clicks: int = 0
    clicks_unique: int = 0
    conversions: int = 0
    amount: float = 0.0


class ReportAd(AdServerModel):
    ad_id: Optional[int] = None
    ad_name: Optional[str] = None
    stats: Optional[DayStats] = None


class ReportZone(AdServerModel):
    zone_id: Optional[int] = None
    zone_name: Optional[str] = None  # null on days without traffic
    stats: Optional[DayStats] = None
    ads: list[ReportAd] = Field(default_factory=list)


class ReportDay(AdServerModel):
    date: date
    stats: Optional[DayStats] = None
    zones: list[ReportZone] = Field(default_factory=list)


class ReportSite(AdServerModel):
    site_id: int
    site_name: str
    days: list[ReportDay] = Field(default_factory=list)


class DailyCampaignReport(AdServerModel):
    """Report from ``GET /campaigns/{id}/report``, one entry per site per day."""

    campaign_id: int
    date_begin: date = Field(alias="dateBegin")
    date_end: date = Field(alias="dateEnd")
    sites: list[ReportSite] = Field(default_factory=list)


# =============================================================================
# FLAT REPORT
# =============================================================================


class FlatReportSite(AdServerModel):
    """Lifetime totals for one site, no day or zone breakdown."""

    site_id: int
    site_name: str
    impressions: int = 0
    clicks: int = 0
    views: int = 0
    viewables: int = 0
    contracted: Optional[int] = None
    delivered: Optional[int] = None


class FlatCampaignReport(AdServerModel):
    campaign_id: Optional[int] = None
    date_begin: Optional[date] = Field(default=None, alias="dateBegin")
    date_end: Optional[date] = Field(default=None, alias="dateEnd")
    sites: list[FlatReportSite] = Field(default_factory=list)


CampaignReport = DailyCampaignReport | FlatCampaignReport
