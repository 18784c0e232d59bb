from datetime import datetime
from dateutil import parser as date_parser


def format_date(value: datetime | str | None) -> str:
    """Format a timestamp or date string for display in emails."""
    if not value:
        return "Unknown date"
    if isinstance(value, str):
        try:
            value = date_parser.parse(value, fuzzy=True)
        except (ValueError, OverflowError, TypeError):
            return value[:10]
    return value.strftime("%B %d, %Y")


def print_summary(title: str, stats: dict[str, int]) -> None:
    """Print processing summary."""
    print(f"\n{'=' * 60}")
    print(f"[{datetime.now()}] {title}")
    print(f"{'=' * 60}")
    for key, value in stats.items():
        print(f"{key.capitalize() + ':':<10}{value}")
    print(f"{'=' * 60}\n")
