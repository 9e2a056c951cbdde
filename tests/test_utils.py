from datetime import date, datetime
from decimal import Decimal

import pytest

from utils import (
    clean_text_for_display,
    days_between,
    format_currency,
    generate_id,
    round_currency,
    round_shares,
    sanitize_filename,
    try_parse_date,
    try_parse_float,
    try_parse_int,
    validate_menu_choice,
)


@pytest.mark.parametrize("amount, expected", [
    (21.625, Decimal("21.63")),
    (0.125, Decimal("0.13")),
    (2.675, Decimal("2.68")),
    (10, Decimal("10.00")),
])
def test_round_currency_half_up(amount, expected):
    assert round_currency(amount) == expected


def test_round_shares_only_at_display():
    shares = {"a": 10 / 3, "b": 20 / 3}
    assert round_shares(shares) == {"a": Decimal("3.33"), "b": Decimal("6.67")}


@pytest.mark.parametrize("amount, currency, expected", [
    (21.625, "USD", "$21.63"),
    (-4.5, "EUR", "-€4.50"),
    (12, "BGN", "12.00 лв"),
    (3, "CHF", "3.00 CHF"),
    ("12", "USD", "0.00"),
])
def test_format_currency(amount, currency, expected):
    assert format_currency(amount, currency) == expected


def test_parsers():
    assert try_parse_float(" 12,5 ") == 12.5
    assert try_parse_float("") is None
    assert try_parse_float("nan") is None
    assert try_parse_float(None) is None
    assert try_parse_int(" 3 ") == 3
    assert try_parse_int("3.5") is None
    assert try_parse_date("2023-10-15") == date(2023, 10, 15)
    assert try_parse_date("15.10.2023") is None


def test_days_between():
    assert days_between(date(2023, 9, 22), date(2023, 9, 25)) == 3
    assert days_between(date(2023, 9, 25), date(2023, 9, 22)) == 3
    assert days_between(datetime(2023, 9, 22, 14), datetime(2023, 9, 23, 16)) == 2


def test_validate_menu_choice():
    assert validate_menu_choice(" 2 ", ["1", "2"]) == "2"
    assert validate_menu_choice("9", ["1", "2"]) is None
    assert validate_menu_choice(None, ["1"]) is None


def test_generate_id_is_unique():
    ids = {generate_id() for _ in range(50)}
    assert len(ids) == 50
    assert all(i.startswith("bill_") for i in ids)


def test_sanitize_filename():
    assert sanitize_filename('Dinner: "Olive/Garden".json') == 'Dinner_OliveGarden.json'
    assert sanitize_filename('???') == 'unnamed_file'


def test_clean_text_for_display():
    assert clean_text_for_display("  Pad   Thai \x00 ") == "Pad Thai"
    assert clean_text_for_display("x" * 10, max_length=8) == "xxxxx..."
