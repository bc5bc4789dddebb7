"""Display helpers shared by invoice templates and server-rendered pages."""
import html
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

TWO_PLACES = Decimal("0.01")

ERROR_MESSAGE_CLASS = "text-sm text-destructive mt-1"
GENERAL_ERROR_CLASS = "bg-destructive/10 border border-destructive/20 rounded-md p-3 mb-4"


# ─── Currency ───

def _group_indian(digits: str) -> str:
    """Indian grouping: last three digits, then pairs (12,34,567)."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_currency(value) -> str:
    """Format an amount with two decimals and Indian digit grouping, no symbol.

    format_currency(1234567.891) -> "12,34,567.89"
    """
    try:
        amount = Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"Not an amount: {value!r}") from exc
    if not amount.is_finite():
        raise ValueError(f"Not a finite amount: {value!r}")

    amount = amount.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    integer, fraction = f"{abs(amount):.2f}".split(".")
    return f"{sign}{_group_indian(integer)}.{fraction}"


# ─── Error messages ───

def _classes(*parts: str | None) -> str:
    return " ".join(p for p in parts if p)


def _paragraph(error: str, classes: str) -> str:
    return f'<p class="{classes}">{html.escape(error)}</p>'


def render_error_message(error: str | None, css_class: str | None = None) -> str:
    """Inline error paragraph, or an empty string when there is no error."""
    if not error:
        return ""
    return _paragraph(error, _classes(ERROR_MESSAGE_CLASS, css_class))


def render_general_error(error: str | None, css_class: str | None = None) -> str:
    """Boxed form-level error wrapping the inline message."""
    if not error:
        return ""
    inner = _paragraph(error, ERROR_MESSAGE_CLASS.replace("mt-1", "mt-0"))
    return f'<div class="{_classes(GENERAL_ERROR_CLASS, css_class)}">{inner}</div>'
