"""Invoice number series: ``DE/<serial>/<yy>-<yy+1>``, e.g. ``DE/36/25-26``."""
import re
from collections.abc import Iterable
from datetime import date

SERIES_PREFIX = "DE"
_SERIAL_RE = re.compile(rf"^{SERIES_PREFIX}/(\d+)/")


def parse_serial(invoice_number: str | None) -> int | None:
    if not invoice_number:
        return None
    match = _SERIAL_RE.match(invoice_number)
    return int(match.group(1)) if match else None


def year_suffix(today: date) -> str:
    yy = today.year % 100
    return f"{yy:02d}-{(yy + 1) % 100:02d}"


def next_invoice_number(existing: Iterable[str | None], today: date | None = None) -> str:
    """Next number in the series: highest existing serial + 1, or 1 for an empty book.

    Numbers outside the series are ignored.
    """
    today = today or date.today()
    serials = [s for s in (parse_serial(n) for n in existing) if s is not None]
    serial = max(serials, default=0) + 1
    return f"{SERIES_PREFIX}/{serial}/{year_suffix(today)}"
