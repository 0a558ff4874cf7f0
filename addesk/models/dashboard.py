"""Dashboard data model - the display-ready output of the report builders."""

from dataclasses import dataclass, field
from datetime import date
from typing import Any


@dataclass(frozen=True)
class StructureItem:
    """One node of the campaign structure.

    A node with children is a vehicle (site) and its children are placements
    (zones). Percentages are stored as percent values (5.0 = 5%).
    """

    name: str
    contracted: int = 0
    delivered: int = 0
    pacing: int = 0  # round(delivered / contracted * 100)
    impressions: int = 0
    viewables: int = 0
    va: float = 0.0  # viewables / impressions * 100
    clicks: int = 0
    ctr: float = 0.0  # clicks / impressions * 100
    views: int = 0
    vtr: float = 0.0  # views / impressions * 100
    children: tuple["StructureItem", ...] = ()

    @property
    def has_children(self) -> bool:
        return len(self.children) > 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict. ``children`` only when present."""
        data: dict[str, Any] = {
            "name": self.name,
            "contracted": self.contracted,
            "delivered": self.delivered,
            "pacing": self.pacing,
            "impressions": self.impressions,
            "viewables": self.viewables,
            "va": self.va,
            "clicks": self.clicks,
            "ctr": self.ctr,
            "views": self.views,
            "vtr": self.vtr,
        }
        if self.has_children:
            data["children"] = [child.to_dict() for child in self.children]
        return data


@dataclass(frozen=True)
class Totals:
    """Consolidated totals across the top-level vehicles."""

    contracted: int
    delivered: int
    impressions: int
    viewables: int
    clicks: int
    views: int
    pacing: int
    viewability: float
    ctr: float
    vtr: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "contracted": self.contracted,
            "delivered": self.delivered,
            "impressions": self.impressions,
            "viewables": self.viewables,
            "clicks": self.clicks,
            "views": self.views,
            "pacing": self.pacing,
            "viewability": self.viewability,
            "ctr": self.ctr,
            "vtr": self.vtr,
        }


@dataclass(frozen=True)
class DailyPoint:
    """Delivery for one calendar day across all sites."""

    day: date
    label: str  # short day/month form shown on the chart axis
    delivery: int  # sum of impressions
    viewability: int  # sum of views

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.label,
            "delivery": self.delivery,
            "viewability": self.viewability,
        }


@dataclass(frozen=True)
class AuditStatus:
    percentage: int
    verifier: str


@dataclass(frozen=True)
class CampaignHeader:
    """Campaign display header."""

    title: str
    period: str
    agency: str
    client: str
    audit_status: AuditStatus

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "period": self.period,
            "agency": self.agency,
            "client": self.client,
            "auditStatus": {
                "percentage": self.audit_status.percentage,
                "verifier": self.audit_status.verifier,
            },
        }


@dataclass(frozen=True)
class DashboardData:
    """Everything the dashboard renders for one campaign.

    ``chart_data`` is None when the report shape has no day granularity.
    """

    campaign: CampaignHeader
    structure: list[StructureItem] = field(default_factory=list)
    chart_data: list[DailyPoint] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON shape consumed by the presentation layer."""
        data: dict[str, Any] = {
            "campaign": self.campaign.to_dict(),
            "structure": [item.to_dict() for item in self.structure],
        }
        if self.chart_data is not None:
            data["chartData"] = [point.to_dict() for point in self.chart_data]
        return data
