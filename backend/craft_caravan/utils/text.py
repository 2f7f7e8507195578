import html
from datetime import date, datetime

CURRENCY_SYMBOLS = {"EUR": "€", "USD": "$"}


def sanitize_html(value: str | None) -> str:
    """Escape markup characters so the value renders literally as text."""
    if value is None:
        return ""
    return html.escape(str(value), quote=True)


def _parse_date(value: str | date) -> date:
    if isinstance(value, date):
        return value
    # Supabase returns ISO-8601, sometimes with a trailing Z
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def format_currency(amount: float, currency: str = "EUR") -> str:
    symbol = CURRENCY_SYMBOLS.get(currency.upper())
    if symbol:
        return f"{symbol}{amount:,.2f}"
    return f"{amount:,.2f} {currency.upper()}"


def format_date(value: str | date) -> str:
    """Long form, e.g. ``June 5, 2024``."""
    d = _parse_date(value)
    return f"{d:%B} {d.day}, {d.year}"


def format_short_date(value: str | date) -> str:
    """Month/day/year with two-digit month and day, e.g. ``06/05/2024``."""
    d = _parse_date(value)
    return f"{d:%m/%d/%Y}"
