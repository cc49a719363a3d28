# core/formatters.py

# all pure utilities & date helpers
# must never import from models!

import datetime
from typing import Any

# === generic text formatters ===


def format_banner_text(title: str, width: int = 40) -> str:
    line = "=" * width
    centered_title = f"{title:^{width}}"

    return f"{line}\n{centered_title}\n{line}"


def format_list_with_and(items: list[Any]) -> str:
    items = [str(item) for item in items]

    if not items:
        return ""

    if len(items) == 1:
        return items[0]

    if len(items) == 2:
        return " and ".join(items)

    return ", ".join(items[:-1]) + ", and " + items[-1]


def truncate(text: str, width: int) -> str:
    return text if len(text) <= width else text[: width - 1] + "…"


# === date formatters ===


def parse_iso_date(date_str: str) -> datetime.date | None:
    try:
        return datetime.date.fromisoformat(date_str.strip()[:10])
    except (AttributeError, ValueError):
        return None


def format_lesson_date_short(date_str: str) -> str:
    """Formats an ISO lesson date as `09/01`; unparseable dates are shown as received."""
    lesson_date = parse_iso_date(date_str)
    return lesson_date.strftime("%m/%d") if lesson_date else date_str


def format_lesson_date_long(date_str: str) -> str:
    lesson_date = parse_iso_date(date_str)
    return lesson_date.strftime("%A, %B %d, %Y") if lesson_date else date_str
