"""Number formatting at the presentation boundary.

The report core returns raw numbers; text rendering happens here, with the
separators passed in explicitly rather than taken from the process locale.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from ..models.dashboard import Totals
from ..models.settings import NumberFormat


def to_fixed(value: float, decimals: int) -> str:
    """Fixed-point text with a '.' decimal point.

    Rounds the exact binary value of ``value``, so 1.005 gives "1.00" while
    exact ties such as 2.5 round away from zero.
    """
    quantum = Decimal(1).scaleb(-decimals)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def format_number(
    n: int | float,
    decimals: int = 0,
    number_format: NumberFormat | None = None,
) -> str:
    """Format number with grouped thousands, e.g. 1.234.567 for pt-BR."""
    number_format = number_format or NumberFormat()
    text = f"{Decimal(to_fixed(n, decimals)):,.{decimals}f}"
    return (
        text.replace(",", "\0")
        .replace(".", number_format.decimal_separator)
        .replace("\0", number_format.thousands_separator)
    )


def format_pct(
    n: float | None,
    decimals: int = 2,
    number_format: NumberFormat | None = None,
) -> str:
    """Format percentage."""
    if n is None:
        return "N/A"
    return f"{format_number(n, decimals, number_format)}%"


@dataclass(frozen=True)
class MetricCard:
    """One summary card: a headline value with an optional secondary rate."""

    title: str
    value: str
    badge: str | None = None
    badge_value: str | None = None
    progress: int | None = None  # bar fill, 0-100

    def to_dict(self) -> dict[str, str | int | None]:
        return {
            "title": self.title,
            "value": self.value,
            "badge": self.badge,
            "badgeValue": self.badge_value,
            "progress": self.progress,
        }


def build_metric_cards(
    totals: Totals,
    number_format: NumberFormat | None = None,
) -> list[MetricCard]:
    """The dashboard's six summary cards, in display order."""
    fmt = number_format or NumberFormat()
    return [
        MetricCard(
            title="Contratado",
            value=format_number(totals.contracted, number_format=fmt),
            badge="Pacing",
            badge_value=f"{totals.pacing}%",
            progress=min(totals.pacing, 100),
        ),
        MetricCard(title="Entregue", value=format_number(totals.delivered, number_format=fmt)),
        MetricCard(title="Impressões", value=format_number(totals.impressions, number_format=fmt)),
        MetricCard(
            title="Visualizações",
            value=format_number(totals.views, number_format=fmt),
            badge="VTR",
            badge_value=format_pct(totals.vtr, 2, fmt),
        ),
        MetricCard(
            title="Cliques",
            value=format_number(totals.clicks, number_format=fmt),
            badge="CTR",
            badge_value=format_pct(totals.ctr, 2, fmt),
        ),
        MetricCard(
            title="Viewability (VA%)",
            value=format_pct(totals.viewability, 1, fmt),
        ),
    ]
