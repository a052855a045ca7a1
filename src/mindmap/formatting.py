"""Display formatting for labels and tooltips (Australian conventions)."""

import html
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation


def escape(value):
    """HTML-escape a value for a tooltip fragment."""
    return html.escape(str(value), quote=True)


def format_aud(amount):
    """Format an amount as whole Australian dollars, e.g. 12345.6 -> "$12,346"."""
    try:
        value = Decimal(str(amount or 0)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return str(amount)
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,}"


def parse_date(value):
    """Parse an ISO date or timestamp; None when it can't be read."""
    if not value:
        return None
    text = str(value).strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    try:
        return datetime.strptime(text[:10], "%Y-%m-%d").date()
    except ValueError:
        return None


def format_date(value):
    """Format a date as DD/MM/YYYY, falling back to the raw text."""
    parsed = parse_date(value)
    if parsed is None:
        return str(value)
    return parsed.strftime("%d/%m/%Y")


def format_percentage(value):
    """85.0 -> "85", 85.5 -> "85.5"."""
    return f"{float(value):g}"
