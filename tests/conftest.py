from datetime import date

import pytest

from data_models import Bill, LineItem


@pytest.fixture
def dinner_bill():
    """Restaurant bill with shared and individual items plus tax and tip"""
    return Bill(
        title="Dinner at Olive Garden",
        category="food",
        items=[
            LineItem(id="1", name="Pasta", price=60.0, assigned_to=("me",)),
            LineItem(id="2", name="Salad", price=40.0, assigned_to=("friend1",)),
            LineItem(id="3", name="Wine", price=30.0, assigned_to=("me", "friend1", "friend2")),
        ],
        tax=8.0,
        tip=5.0,
        payer="me",
        currency="USD",
        created=date(2023, 10, 15),
    )


@pytest.fixture
def cabin_bill():
    return Bill(
        title="Weekend Cabin",
        category="accommodation",
        items=[LineItem(id="1", name="Weekend Cabin", price=210.0)],
        participants=["me", "friend1", "friend2"],
        check_in=date(2023, 9, 22),
        check_out=date(2023, 9, 24),
        created=date(2023, 9, 25),
    )


@pytest.fixture
def dinner_form():
    """Raw form state as typed by the user"""
    return {
        'category': 'food',
        'title': 'Thai Restaurant',
        'items': [
            {'name': 'Pad Thai', 'price': '12,50', 'assigned_to': ['me']},
            {'name': 'Curry', 'price': '14', 'assigned_to': ['friend1', 'friend2']},
        ],
        'tax': '2.65',
        'tip': '',
    }
