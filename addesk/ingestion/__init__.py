from .loader import (
    is_daily_report,
    load_json,
    load_settings,
    parse_campaign,
    parse_campaigns,
    parse_report,
)

__all__ = [
    "is_daily_report",
    "load_json",
    "load_settings",
    "parse_campaign",
    "parse_campaigns",
    "parse_report",
]
