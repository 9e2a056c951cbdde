import logging
import math

import pytest

from data_models import LineItem
from exceptions import InvalidInputError, InvalidLineItemError
from split_calculator import (
    compute_even_split,
    compute_itemized_split,
    compute_subtotal,
    involved_participants,
    split_totals_match,
    summarize_bill,
)


def test_even_split_four_people():
    result = compute_even_split(100, ["a", "b", "c", "d"])
    assert result == {"a": 25, "b": 25, "c": 25, "d": 25}
    assert sum(result.values()) == 100


def test_even_split_keeps_order_and_collapses_duplicates():
    result = compute_even_split(90, ["c", "a", "c", "b"])
    assert list(result) == ["c", "a", "b"]
    assert result["a"] == 30


def test_even_split_zero_participants_fails():
    with pytest.raises(InvalidInputError):
        compute_even_split(50, [])


@pytest.mark.parametrize("total", [-1, "50", None, float("nan"), float("inf"), True])
def test_even_split_rejects_bad_total(total):
    with pytest.raises(InvalidInputError):
        compute_even_split(total, ["a"])


def test_even_split_rejects_plain_string_of_ids():
    with pytest.raises(InvalidInputError):
        compute_even_split(10, "abc")


def test_itemized_single_item_four_people():
    items = [LineItem(id="1", price=86.50, assigned_to=("me", "friend1", "friend2", "friend3"))]
    result = compute_itemized_split(items, [])
    assert result == {"me": 21.625, "friend1": 21.625, "friend2": 21.625, "friend3": 21.625}


def test_itemized_with_surcharge():
    items = [
        LineItem(id="1", price=60, assigned_to=("a",)),
        LineItem(id="2", price=40, assigned_to=("b",)),
    ]
    result = compute_itemized_split(items, [10])
    assert result == {"a": 66, "b": 44}
    assert sum(result.values()) == 110


def test_proportional_surcharge_distribution():
    items = [
        LineItem(id="1", price=30, assigned_to=("a",)),
        LineItem(id="2", price=70, assigned_to=("b",)),
    ]
    result = compute_itemized_split(items, [10])
    assert result["a"] - 30 == pytest.approx(3)
    assert result["b"] - 70 == pytest.approx(7)


def test_single_assignee_gets_full_price():
    items = [
        LineItem(id="1", price=12.5, assigned_to=("a",)),
        LineItem(id="2", price=9, assigned_to=("b", "c")),
    ]
    result = compute_itemized_split(items)
    assert result["a"] == 12.5
    assert result["b"] == result["c"] == 4.5


def test_conservation_of_totals():
    items = [
        LineItem(id="1", price=19.99, assigned_to=("a", "b", "c")),
        LineItem(id="2", price=7.33, assigned_to=("b",)),
        LineItem(id="3", price=0.01, assigned_to=("c", "a")),
        LineItem(id="4", price=101.7, assigned_to=("d", "a", "b")),
    ]
    surcharges = [3.21, 10, 0.5]
    result = compute_itemized_split(items, surcharges)
    expected = sum(item.price for item in items) + sum(surcharges)
    assert sum(result.values()) == pytest.approx(expected, abs=1e-9)
    assert split_totals_match(result, expected, 1e-9)


def test_unassigned_item_is_excluded_but_counted_in_subtotal():
    items = [
        LineItem(id="1", price=20, assigned_to=("a",)),
        LineItem(id="2", price=15, assigned_to=()),
    ]
    result = compute_itemized_split(items, [])
    assert result == {"a": 20}
    assert compute_subtotal(items) == 35


def test_zero_price_items_do_not_enumerate_participants():
    items = [
        LineItem(id="1", price=0, assigned_to=("a",)),
        LineItem(id="2", price=10, assigned_to=("b",)),
    ]
    assert compute_itemized_split(items, [5]) == {"b": 15}


def test_result_order_is_first_appearance():
    items = [
        LineItem(id="1", price=5, assigned_to=("c", "a")),
        LineItem(id="2", price=5, assigned_to=("b", "a")),
    ]
    assert list(compute_itemized_split(items)) == ["c", "a", "b"]


def test_duplicate_assignee_counts_once():
    items = [LineItem(id="1", price=10, assigned_to=("a", "a", "b"))]
    assert compute_itemized_split(items) == {"a": 5, "b": 5}


def test_surcharge_dropped_when_nobody_involved(caplog):
    items = [LineItem(id="1", price=25, assigned_to=())]
    with caplog.at_level(logging.WARNING, logger="split_calculator"):
        result = compute_itemized_split(items, [4, 1])
    assert result == {}
    assert "not distributed" in caplog.text


def test_summary_reports_undistributed_amounts():
    items = [
        LineItem(id="1", price=25, assigned_to=()),
        LineItem(id="2", price=0, assigned_to=("a",)),
    ]
    summary = summarize_bill(items, [4, 1])
    assert summary.shares == {}
    assert summary.subtotal == 25
    assert summary.surcharge_total == 5
    assert summary.unassigned_total == 25
    assert summary.undistributed_surcharge == 5
    assert summary.total == 30


def test_summary_distributed_total_matches_when_everything_assigned():
    items = [
        LineItem(id="1", price=60, assigned_to=("a",)),
        LineItem(id="2", price=40, assigned_to=("a", "b")),
    ]
    summary = summarize_bill(items, [10])
    assert summary.unassigned_total == 0
    assert summary.undistributed_surcharge == 0
    assert summary.distributed_total == pytest.approx(summary.total)


def test_negative_price_names_item():
    items = [
        LineItem(id="ok", price=3, assigned_to=("a",)),
        LineItem(id="bad-item", price=-5, assigned_to=("a",)),
    ]
    with pytest.raises(InvalidLineItemError) as excinfo:
        compute_itemized_split(items, [])
    assert excinfo.value.item_id == "bad-item"
    assert "bad-item" in str(excinfo.value)


@pytest.mark.parametrize("price", [None, "12", float("nan"), False])
def test_missing_or_non_numeric_price_rejected(price):
    items = [LineItem(id="x1", price=price, assigned_to=("a",))]
    with pytest.raises(InvalidLineItemError) as excinfo:
        compute_itemized_split(items)
    assert excinfo.value.item_id == "x1"


def test_unassigned_item_with_bad_price_is_still_rejected():
    items = [LineItem(id="u", price=-1, assigned_to=())]
    with pytest.raises(InvalidLineItemError):
        compute_itemized_split(items)


def test_string_assignee_is_rejected():
    items = [LineItem(id="1", price=10, assigned_to="alice")]
    with pytest.raises(InvalidLineItemError) as excinfo:
        compute_itemized_split(items)
    assert excinfo.value.item_id == "1"

    with pytest.raises(InvalidLineItemError):
        summarize_bill(items, [2])


def test_negative_surcharge_rejected():
    items = [LineItem(id="1", price=10, assigned_to=("a",))]
    with pytest.raises(InvalidInputError):
        compute_itemized_split(items, [-2])


def test_results_are_never_rounded():
    items = [LineItem(id="1", price=10, assigned_to=("a", "b", "c"))]
    result = compute_itemized_split(items)
    assert result["a"] == 10 / 3
    assert not math.isclose(result["a"], 3.33, abs_tol=1e-6)


def test_involved_participants_order():
    items = [
        LineItem(id="1", price=1, assigned_to=("x", "y")),
        LineItem(id="2", price=1, assigned_to=("z", "x")),
    ]
    assert involved_participants(items) == ["x", "y", "z"]


def test_line_item_assignees_become_tuple():
    item = LineItem(id="1", price=5, assigned_to=["a", "b"])
    assert item.assigned_to == ("a", "b")


def test_ticket_item_price():
    ticket = LineItem.from_ticket("t1", "Standard Ticket", 3, 12.5, ["a"])
    assert ticket.price == 37.5
    assert ticket.quantity == 3
    assert ticket.unit_price == 12.5
