"""Display helpers shared by the data access layer and the dashboard views."""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from math import ceil
from typing import Iterable, List, Tuple, Union

CENTS = Decimal("0.01")
PAGER_ELLIPSIS = "..."
Y_AXIS_STEP = 1000


def cents_to_units(amount: int | Decimal | None) -> Decimal:
    """Convert minor currency units into major units (125000 -> 1250)."""

    return Decimal(amount or 0) / Decimal(100)


def format_currency(amount: int | Decimal | str | None) -> str:
    """Format an amount in cents as a US dollar string such as ``$1,250.00``."""

    value = cents_to_units(Decimal(str(amount)) if amount is not None else None)
    value = value.quantize(CENTS, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def generate_pagination(current_page: int, total_pages: int) -> List[Union[int, str]]:
    """Return the page links shown by the pager, collapsing gaps to ``...``."""

    if total_pages <= 7:
        return list(range(1, total_pages + 1))

    if current_page <= 3:
        return [1, 2, 3, PAGER_ELLIPSIS, total_pages - 1, total_pages]

    if current_page >= total_pages - 2:
        return [1, 2, PAGER_ELLIPSIS, total_pages - 2, total_pages - 1, total_pages]

    return [
        1,
        PAGER_ELLIPSIS,
        current_page - 1,
        current_page,
        current_page + 1,
        PAGER_ELLIPSIS,
        total_pages,
    ]


def generate_y_axis(revenue: Iterable[int]) -> Tuple[List[str], int]:
    """Build revenue chart labels in thousands, from the top label down to zero."""

    highest = max(revenue, default=0)
    top_label = ceil(highest / Y_AXIS_STEP) * Y_AXIS_STEP if highest > 0 else 0
    labels = [
        f"${value // Y_AXIS_STEP}K"
        for value in range(top_label, -1, -Y_AXIS_STEP)
    ]
    return labels, top_label
