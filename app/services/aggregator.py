"""
Order totals and summaries.

Pure functions over already-loaded data. Items need ``price_cents`` and
``modifiers`` (each with ``id`` and ``price_adjustment_cents``); order items
need ``menu_item``, ``modifiers`` and ``special_instructions``.
"""

from collections import Counter
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Iterable, List, Sequence

NO_ITEMS = "No items"

_CENT = Decimal("0.01")


@dataclass
class CartLine:
    """A menu item and the ids of its selected modifiers"""
    item: Any
    selected_modifier_ids: List[Any] = field(default_factory=list)


def line_total(item, selected_modifier_ids: Iterable) -> int:
    """Item price plus adjustments of its modifiers that were selected.

    Ids that are not modifiers of ``item`` contribute nothing.
    """
    selected = set(selected_modifier_ids)
    return item.price_cents + sum(
        modifier.price_adjustment_cents
        for modifier in item.modifiers
        if modifier.id in selected
    )


def order_total(cart_lines: Iterable[CartLine]) -> int:
    return sum(line_total(line.item, line.selected_modifier_ids) for line in cart_lines)


def format_price(cents: int) -> str:
    """1250 -> '12.50'"""
    return str((Decimal(cents) / 100).quantize(_CENT, rounding=ROUND_HALF_UP))


def cart_lines_for_order(order) -> List[CartLine]:
    """Express a placed order's items as cart lines"""
    return [
        CartLine(
            item=order_item.menu_item,
            selected_modifier_ids=[modifier.id for modifier in order_item.modifiers],
        )
        for order_item in order.items
    ]


def item_label(order_item) -> str:
    """Identity of a line: item name, modifiers as selected, instructions"""
    label = order_item.menu_item.name
    modifier_names = [modifier.name for modifier in order_item.modifiers]
    if modifier_names:
        label += f" ({', '.join(modifier_names)})"
    if order_item.special_instructions:
        label += f" - {order_item.special_instructions}"
    return label


def summarize_items(order_items: Sequence) -> str:
    """Collapse identical lines into counts, in first-seen order.

    >>> summarize_items([])
    'No items'
    """
    if not order_items:
        return NO_ITEMS
    if len(order_items) == 1:
        return f"1 x {item_label(order_items[0])}"

    # Counter keeps first-insertion order
    counts = Counter(item_label(order_item) for order_item in order_items)
    return ", ".join(f"{count} × {label}" for label, count in counts.items())
