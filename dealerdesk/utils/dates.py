from datetime import date, datetime
from typing import Any, Optional

from dateutil import parser as date_parser


def parse_date(value: Any) -> Optional[date]:
    """Lenient date parsing for stored ISO strings; None when unparseable."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date_parser.parse(str(value)).date()
    except (ValueError, OverflowError):
        return None
