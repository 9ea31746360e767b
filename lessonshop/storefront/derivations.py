"""
Pure derivations of the storefront views.

Every function takes explicit snapshots (lessons, cart lines, filters,
form) and returns a freshly computed value. Nothing here mutates its
inputs or keeps state between calls.
"""

import unicodedata
from typing import Any, Dict, Iterable, List, Sequence, Tuple

from ..models.cart import CartLine, CartSummaryEntry
from ..models.filters import NUMERIC_SORT_FIELDS, FilterState
from ..models.lesson import Lesson, Number
from ..models.order import CustomerForm
from ..validation.customer_validator import CustomerValidator


_customer_validator = CustomerValidator()


def collation_key(text: str) -> Tuple[str, str, str]:
    """
    Sort key comparing text the way a human-language collation does.

    Letters compare first without accents or case, then accents break
    ties, then case (lowercase before uppercase). The key does not
    depend on the process locale.

    Examples:
        >>> sorted(["biology", "Chemistry", "art"], key=collation_key)
        ['art', 'biology', 'Chemistry']
    """
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(c for c in decomposed if not unicodedata.combining(c))
    return base.casefold(), decomposed.casefold(), text.swapcase()


def _sort_value(lesson: Lesson, field: str) -> Any:
    if field in NUMERIC_SORT_FIELDS:
        return lesson.get(field) or 0
    return collation_key(str(lesson.get(field, "")))


def displayed_lessons(lessons: Sequence[Lesson], filters: FilterState) -> List[Lesson]:
    """
    Filter and sort the catalog for display.

    Steps, in order:
    1. Price range, inclusive on both ends
    2. Exact location match when a location is selected
    3. Stock: "available" keeps spaces > 0, "soldout" keeps spaces == 0
    4. Stable sort by the sort key's field and direction

    Args:
        lessons: Catalog snapshot
        filters: Current filter state

    Returns:
        New list of lessons; the snapshot is not modified
    """
    result = [
        lesson for lesson in lessons
        if filters.min_price <= lesson["price"] <= filters.max_price
    ]

    if filters.location_filter:
        result = [
            lesson for lesson in result
            if lesson.get("location") == filters.location_filter
        ]

    if filters.filter_key == "available":
        result = [lesson for lesson in result if lesson["spaces"] > 0]
    elif filters.filter_key == "soldout":
        result = [lesson for lesson in result if lesson["spaces"] == 0]

    field, ascending = filters.sort_spec()
    # sorted() is stable in both directions, so ties keep catalog order
    return sorted(
        result,
        key=lambda lesson: _sort_value(lesson, field),
        reverse=not ascending
    )


def location_options(lessons: Iterable[Lesson]) -> List[str]:
    """Distinct non-empty locations, in first-seen order."""
    seen: Dict[str, None] = {}
    for lesson in lessons:
        location = lesson.get("location")
        if location:
            seen.setdefault(location, None)
    return list(seen)


def cart_summary(cart: Iterable[CartLine], lessons: Iterable[Lesson]) -> List[CartSummaryEntry]:
    """
    Group cart lines per lesson.

    Entries appear in the order their lesson was first added.
    ``can_increase`` reflects the current catalog snapshot: True only
    if the lesson is still listed and has spaces left.

    Args:
        cart: Cart lines, one per unit
        lessons: Current catalog snapshot

    Returns:
        Summary entries with quantities
    """
    entries: Dict[str, CartSummaryEntry] = {}
    for line in cart:
        entry = entries.get(line.lesson_id)
        if entry is None:
            entry = CartSummaryEntry(
                lesson_id=line.lesson_id,
                subject=line.subject,
                location=line.location,
                price=line.price,
            )
            entries[line.lesson_id] = entry
        entry.qty += 1

    spaces_by_id: Dict[str, int] = {}
    for lesson in lessons:
        spaces_by_id.setdefault(lesson["id"], lesson["spaces"])

    for entry in entries.values():
        entry.can_increase = spaces_by_id.get(entry.lesson_id, 0) > 0

    return list(entries.values())


def cart_total(cart: Iterable[CartLine]) -> Number:
    """Sum of unit prices over all cart lines."""
    return sum(line.price for line in cart)


def cart_count(cart: Sequence[CartLine]) -> int:
    """Number of units in the cart."""
    return len(cart)


def valid_customer(form: CustomerForm) -> bool:
    """
    Check whether the checkout form allows submitting an order.

    Name must be letters and spaces, phone digits, spaces, "+" or "-",
    and address non-empty; all after trimming. E-mail is not checked.
    """
    return _customer_validator.validate(form).is_valid
