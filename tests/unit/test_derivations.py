"""
Unit tests for the view derivations.
"""

import copy

import pytest

from lessonshop.models.cart import CartLine
from lessonshop.models.filters import FilterState
from lessonshop.models.order import CustomerForm
from lessonshop.storefront import derivations


def _ids(lessons):
    return [lesson["id"] for lesson in lessons]


def _line(lesson_id, price=10, subject="Math", location="London"):
    return CartLine(lesson_id=lesson_id, subject=subject, location=location, price=price)


class TestDisplayedLessons:
    """Test cases for displayed_lessons."""

    def test_default_filters_sort_by_subject(self, sample_lessons):
        """Test default state shows everything sorted by subject ascending."""
        result = derivations.displayed_lessons(sample_lessons, FilterState())

        assert [l["subject"] for l in result] == ["Art", "English", "Math", "Music", "Science"]

    def test_price_range_is_inclusive(self, sample_lessons):
        """Test price bounds keep lessons priced exactly at the bounds."""
        filters = FilterState(min_price=80, max_price=120)

        result = derivations.displayed_lessons(sample_lessons, filters)

        assert sorted(_ids(result)) == ["1", "2", "3", "4"]
        assert all(80 <= l["price"] <= 120 for l in result)

    def test_location_filter(self, sample_lessons):
        """Test location filter keeps exact matches only."""
        filters = FilterState(location_filter="London")

        result = derivations.displayed_lessons(sample_lessons, filters)

        assert _ids(result) == ["3", "1"]

    def test_available_filter(self, sample_lessons):
        """Test 'available' keeps lessons with spaces left."""
        result = derivations.displayed_lessons(
            sample_lessons, FilterState(filter_key="available")
        )

        assert result
        assert all(l["spaces"] > 0 for l in result)

    def test_soldout_filter(self, sample_lessons):
        """Test 'soldout' keeps lessons without spaces."""
        result = derivations.displayed_lessons(
            sample_lessons, FilterState(filter_key="soldout")
        )

        assert sorted(_ids(result)) == ["2", "5"]
        assert all(l["spaces"] == 0 for l in result)

    def test_price_ascending(self, sample_lessons):
        """Test price-asc is non-decreasing."""
        result = derivations.displayed_lessons(
            sample_lessons, FilterState(sort_key="price-asc")
        )
        prices = [l["price"] for l in result]

        assert prices == sorted(prices)

    def test_spaces_descending(self, sample_lessons):
        """Test spaces-desc is non-increasing."""
        result = derivations.displayed_lessons(
            sample_lessons, FilterState(sort_key="spaces-desc")
        )
        spaces = [l["spaces"] for l in result]

        assert spaces == sorted(spaces, reverse=True)

    def test_ties_keep_catalog_order(self, sample_lessons):
        """Test equal prices keep their catalog order in both directions."""
        asc = derivations.displayed_lessons(sample_lessons, FilterState(sort_key="price-asc"))
        desc = derivations.displayed_lessons(sample_lessons, FilterState(sort_key="price-desc"))

        assert _ids(asc)[:2] == ["2", "4"]
        assert _ids(desc)[-2:] == ["2", "4"]

    def test_unknown_direction_sorts_descending(self, sample_lessons):
        """Test any direction other than 'asc' sorts descending."""
        result = derivations.displayed_lessons(
            sample_lessons, FilterState(sort_key="subject-down")
        )

        assert [l["subject"] for l in result][0] == "Science"

    def test_subject_sort_ignores_case(self):
        """Test mixed-case subjects sort alphabetically, not uppercase first."""
        lessons = [
            {"id": "b", "subject": "biology", "location": "", "price": 1, "spaces": 1},
            {"id": "c", "subject": "Chemistry", "location": "", "price": 1, "spaces": 1},
            {"id": "a", "subject": "art", "location": "", "price": 1, "spaces": 1},
        ]

        asc = derivations.displayed_lessons(lessons, FilterState())
        desc = derivations.displayed_lessons(lessons, FilterState(sort_key="subject-desc"))

        assert [l["subject"] for l in asc] == ["art", "biology", "Chemistry"]
        assert [l["subject"] for l in desc] == ["Chemistry", "biology", "art"]

    def test_location_sort_accents_and_case(self):
        """Test accents and case only break ties between equal letters."""
        lessons = [
            {"id": str(i), "subject": "Art", "location": location, "price": 1, "spaces": 1}
            for i, location in enumerate(["Zurich", "\u00c9vry", "evry", "Evry", "avignon"])
        ]

        result = derivations.displayed_lessons(lessons, FilterState(sort_key="location-asc"))

        assert [l["location"] for l in result] == ["avignon", "evry", "Evry", "\u00c9vry", "Zurich"]

    def test_filters_compose(self, sample_lessons):
        """Test price, location and stock filters apply together."""
        filters = FilterState(
            min_price=0,
            max_price=110,
            location_filter="London",
            filter_key="available"
        )

        assert _ids(derivations.displayed_lessons(sample_lessons, filters)) == ["1"]

    def test_does_not_mutate_input(self, sample_lessons):
        """Test the catalog snapshot is left untouched."""
        before = copy.deepcopy(sample_lessons)

        derivations.displayed_lessons(sample_lessons, FilterState(sort_key="price-desc"))

        assert sample_lessons == before


class TestLocationOptions:
    """Test cases for location_options."""

    def test_distinct_non_empty_first_seen(self, sample_lessons):
        """Test locations are unique, non-empty and in first-seen order."""
        assert derivations.location_options(sample_lessons) == ["London", "Oxford", "York"]

    def test_empty_catalog(self):
        """Test an empty catalog has no locations."""
        assert derivations.location_options([]) == []


class TestCartSummary:
    """Test cases for cart_summary, cart_total and cart_count."""

    def test_groups_in_first_seen_order(self, sample_lessons):
        """Test quantities are counted per lesson in first-added order."""
        cart = [_line("3"), _line("1"), _line("3"), _line("3")]

        summary = derivations.cart_summary(cart, sample_lessons)

        assert [(e.lesson_id, e.qty) for e in summary] == [("3", 3), ("1", 1)]

    def test_qty_matches_line_count(self, sample_lessons):
        """Test every summary qty equals its number of cart lines."""
        cart = [_line("1"), _line("4"), _line("1")]

        for entry in derivations.cart_summary(cart, sample_lessons):
            assert entry.qty == sum(1 for l in cart if l.lesson_id == entry.lesson_id)

    def test_can_increase_reflects_current_catalog(self, sample_lessons):
        """Test can_increase uses the catalog at computation time."""
        cart = [_line("1"), _line("2"), _line("missing")]

        summary = {e.lesson_id: e for e in derivations.cart_summary(cart, sample_lessons)}

        assert summary["1"].can_increase is True
        assert summary["2"].can_increase is False
        assert summary["missing"].can_increase is False

        sample_lessons[0]["spaces"] = 0
        summary = {e.lesson_id: e for e in derivations.cart_summary(cart, sample_lessons)}
        assert summary["1"].can_increase is False

    def test_entry_totals_and_export_row(self, sample_lessons):
        """Test an entry prices all its units and exports its fields."""
        entry = derivations.cart_summary([_line("1", price=100), _line("1", price=100)], sample_lessons)[0]

        assert entry.line_total == 200
        assert entry.to_dict() == {
            "lesson_id": "1",
            "subject": "Math",
            "location": "London",
            "price": 100,
            "qty": 2,
            "can_increase": True,
        }

    def test_cart_total_sums_lines(self):
        """Test total is the sum of line prices."""
        cart = [_line("1", price=100), _line("1", price=100), _line("3", price=12.5)]

        assert derivations.cart_total(cart) == 212.5
        assert derivations.cart_count(cart) == 3

    def test_empty_cart(self, sample_lessons):
        """Test empty cart derivations."""
        assert derivations.cart_summary([], sample_lessons) == []
        assert derivations.cart_total([]) == 0
        assert derivations.cart_count([]) == 0


class TestValidCustomer:
    """Test cases for valid_customer."""

    @pytest.fixture
    def form(self):
        return CustomerForm(name="John Smith", phone="+1 555-1234", address="1 Main St")

    def test_valid_form(self, form):
        assert derivations.valid_customer(form)

    def test_name_with_digits_rejected(self, form):
        form.name = "John123"
        assert not derivations.valid_customer(form)

    def test_phone_with_letters_rejected(self, form):
        form.phone = "abc"
        assert not derivations.valid_customer(form)

    def test_empty_address_rejected(self, form):
        form.address = "   "
        assert not derivations.valid_customer(form)

    def test_blank_name_rejected(self, form):
        form.name = "  "
        assert not derivations.valid_customer(form)

    def test_email_ignored(self, form):
        """Test a malformed e-mail does not make the form invalid."""
        form.email = "not-an-email"
        assert derivations.valid_customer(form)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
