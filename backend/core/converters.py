"""Parsing of raw form input and display formatting helpers."""
from datetime import datetime
from typing import Any, Optional, Union


def parse_number(raw: Any) -> float:
    """Parse a user-entered number. Anything unparseable becomes 0."""
    if raw is None or isinstance(raw, bool):
        return 0.0
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        try:
            value = float(str(raw).strip())
        except (TypeError, ValueError):
            return 0.0
    # NaN and infinities are not meaningful quantities or prices
    if value != value or value in (float("inf"), float("-inf")):
        return 0.0
    return value


def parse_date_time(raw: Optional[Union[str, datetime]]) -> datetime:
    """Accept a datetime-local / ISO-8601 string or a datetime; empty means now."""
    if isinstance(raw, datetime):
        return raw
    text = (raw or "").strip()
    if not text:
        return datetime.now()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def format_transaction_date(dt: datetime) -> str:
    # e.g. "3 June 2025"
    return f"{dt.day} {dt.strftime('%B')} {dt.year}"


def format_transaction_time(dt: datetime) -> str:
    # e.g. "2:44 PM"
    hour = dt.hour % 12 or 12
    return f"{hour}:{dt.minute:02d} {'AM' if dt.hour < 12 else 'PM'}"


def format_created_at(dt: Optional[datetime] = None) -> str:
    return (dt or datetime.now()).isoformat()


def format_last_updated(dt: Optional[datetime] = None) -> str:
    return (dt or datetime.now()).date().isoformat()


def _plain_number(amount: float) -> str:
    if float(amount).is_integer():
        return str(int(amount))
    return repr(float(amount))


def format_nepali_currency(amount: float) -> str:
    """Format an amount in Nepali Rupees, e.g. ``रु 1,234.5``."""
    whole, _, decimals = _plain_number(abs(amount)).partition(".")
    if len(whole) > 3:
        whole = f"{int(whole):,}"
    formatted = f"{whole}.{decimals}" if decimals else whole
    sign = "-" if amount < 0 else ""
    return f"{sign}रु {formatted}"


def _indian_grouping(num: float) -> str:
    whole, _, decimals = f"{abs(num):.3f}".rstrip("0").rstrip(".").partition(".")
    if len(whole) > 3:
        head, tail = whole[:-3], whole[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        whole = ",".join(groups + [tail])
    sign = "-" if num < 0 else ""
    return f"{sign}{whole}.{decimals}" if decimals else f"{sign}{whole}"


def format_indian_number(num: float) -> str:
    """Abbreviate large numbers with the Indian system (Lakh, Crore)."""
    if num >= 10_000_000:
        return f"{num / 10_000_000:.2f} Crore"
    if num >= 100_000:
        return f"{num / 100_000:.2f} Lakh"
    return _indian_grouping(num)
