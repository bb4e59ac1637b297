"""
Tests for currency and badge formatting.
"""

from flask import render_template_string

from salon_app.formatting import format_currency, badge_label


class TestFormatCurrency:
    def test_whole_amount(self):
        assert format_currency(25) == "$25.00"

    def test_thousands_separator(self):
        assert format_currency(1234.5) == "$1,234.50"

    def test_millions(self):
        assert format_currency(1234567.891) == "$1,234,567.89"

    def test_negative_amount(self):
        assert format_currency(-5) == "-$5.00"

    def test_rounds_to_cents(self):
        assert format_currency(0.125) in ("$0.12", "$0.13")
        assert format_currency(19.999) == "$20.00"

    def test_none_is_zero(self):
        assert format_currency(None) == "$0.00"

    def test_tiny_negative_is_not_signed(self):
        assert format_currency(-0.001) == "$0.00"

    def test_jinja_filter(self, app):
        with app.test_request_context():
            assert render_template_string("{{ 1500 | currency }}") == "$1,500.00"


class TestBadgeLabel:
    def test_under_cap(self):
        assert badge_label(3, 9) == "3"

    def test_at_cap(self):
        assert badge_label(9, 9) == "9"

    def test_over_cap(self):
        assert badge_label(10, 9) == "9+"
        assert badge_label(150, 99) == "99+"
