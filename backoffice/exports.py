import csv
import io
from datetime import date, datetime
from typing import Iterable, Optional

from dateutil import parser as date_parser

from common.tables import get_field

SUBSCRIBER_CSV_HEADERS = ["Email", "Subscribed Date"]


def format_short_date(value) -> str:
    """M/D/YYYY without zero padding, example: 3/7/2024"""
    if value in (None, ""):
        return ""
    if not isinstance(value, (date, datetime)):
        value = date_parser.isoparse(str(value))
    return f"{value.month}/{value.day}/{value.year}"


def subscribers_csv(subscribers: Iterable) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(SUBSCRIBER_CSV_HEADERS)
    for subscriber in subscribers:
        writer.writerow([get_field(subscriber, "email"), format_short_date(get_field(subscriber, "created_at"))])
    return buffer.getvalue()


def subscribers_csv_filename(today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"newsletter_subscribers_{today.isoformat()}.csv"
