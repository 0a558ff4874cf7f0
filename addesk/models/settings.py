"""Report settings - display constants loaded from ``config/report_settings.yaml``."""

from dataclasses import dataclass
from typing import Any

MONTH_ABBREVIATIONS = (
    "jan", "fev", "mar", "abr", "mai", "jun",
    "jul", "ago", "set", "out", "nov", "dez",
)


@dataclass(frozen=True)
class NumberFormat:
    """Separators used when numbers are rendered as text.

    Defaults match pt-BR (1.234.567,89).
    """

    thousands_separator: str = "."
    decimal_separator: str = ","


@dataclass(frozen=True)
class ReportSettings:
    """Display constants for the dashboard and its exports.

    Builders receive an instance explicitly; nothing here is global state.
    """

    title_template: str = "{name} - ID {id}"
    empty_period: str = "—"
    audit_percentage: int = 0
    audit_verifier: str = "—"
    month_abbreviations: tuple[str, ...] = MONTH_ABBREVIATIONS
    child_prefix: str = "  └ "
    number_format: NumberFormat = NumberFormat()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ReportSettings":
        """Build settings from the parsed YAML mapping.

        Missing keys keep their defaults.
        """
        dashboard = data.get("dashboard") or {}
        audit = dashboard.get("audit_status") or {}
        export = data.get("export") or {}
        number_format = data.get("number_format") or {}
        defaults = cls()

        months = tuple(dashboard.get("month_abbreviations") or defaults.month_abbreviations)
        if len(months) != 12:
            raise ValueError(f"month_abbreviations needs 12 entries, got {len(months)}")

        return cls(
            title_template=dashboard.get("title_template", defaults.title_template),
            empty_period=dashboard.get("empty_period", defaults.empty_period),
            audit_percentage=int(audit.get("percentage", defaults.audit_percentage)),
            audit_verifier=audit.get("verifier", defaults.audit_verifier),
            month_abbreviations=months,
            child_prefix=export.get("child_prefix", defaults.child_prefix),
            number_format=NumberFormat(
                thousands_separator=number_format.get(
                    "thousands_separator", defaults.number_format.thousands_separator
                ),
                decimal_separator=number_format.get(
                    "decimal_separator", defaults.number_format.decimal_separator
                ),
            ),
        )
