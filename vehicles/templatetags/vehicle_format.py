# vehicles/templatetags/vehicle_format.py
from decimal import Decimal, InvalidOperation

from django import template

register = template.Library()


def _pt_br_thousands(text: str) -> str:
    # "80,000.00" -> "80.000,00"
    return text.replace(",", "_").replace(".", ",").replace("_", ".")


@register.filter
def brl(value):
    """Preço em reais: 80000 -> "R$ 80.000,00"."""
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        return ""
    return f"R$ {_pt_br_thousands(f'{amount:,.2f}')}"


@register.filter
def km(value):
    try:
        distance = int(value)
    except (TypeError, ValueError):
        return ""
    return f"{_pt_br_thousands(f'{distance:,}')} km"
