"""
Bill form parsing for Splitshare
Turns raw form state (strings typed by the user, or values read from a
bill file) into validated bills. Everything rejected here is reported with
a message meant for the user; the split calculator only ever sees bills
that passed through this module.
"""

import json
import math
from dataclasses import asdict
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List

from config import CURRENCY_DEFAULT
from constants import (
    CATEGORIES,
    CATEGORY_ACCOMMODATION,
    CATEGORY_ENTERTAINMENT,
    CATEGORY_FOOD,
    CATEGORY_SPORTS,
    SELF_ID,
    SURCHARGE_FIELDS,
)
from data_models import Bill, LineItem
from exceptions import FormValidationError
from utils import clean_text_for_display, try_parse_date, try_parse_float, try_parse_int

TITLE_MESSAGES = {
    CATEGORY_FOOD: "Please enter the restaurant name",
    CATEGORY_ACCOMMODATION: "Please enter the accommodation name",
    CATEGORY_ENTERTAINMENT: "Please enter the event name",
    CATEGORY_SPORTS: "Please enter the sport name",
}


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_amount(value: Any, field: str, label: str) -> float:
    """Required non-negative amount"""
    if _is_blank(value):
        raise FormValidationError(f"Please enter the {label}", field=field)

    if isinstance(value, bool):
        amount = None
    elif isinstance(value, (int, float, Decimal)):
        amount = float(value)
    else:
        amount = try_parse_float(str(value))

    if amount is None or not math.isfinite(amount):
        raise FormValidationError(f"The {label} must be a number", field=field)
    if amount < 0:
        raise FormValidationError(f"The {label} cannot be negative", field=field)
    return amount


def parse_optional_amount(value: Any, field: str, label: str) -> float:
    """Optional amount such as tax or tip, blank means zero"""
    if _is_blank(value):
        return 0.0
    return parse_amount(value, field, label)


def parse_quantity(value: Any, field: str) -> int:
    if _is_blank(value):
        raise FormValidationError("Please enter the quantity", field=field)
    if isinstance(value, int) and not isinstance(value, bool):
        quantity = value
    else:
        quantity = try_parse_int(str(value))
    if quantity is None or quantity < 1:
        raise FormValidationError("The quantity must be a whole number of at least 1", field=field)
    return quantity


def parse_date(value: Any, field: str, label: str) -> date:
    if isinstance(value, date):
        return value
    parsed = try_parse_date(value) if isinstance(value, str) else None
    if parsed is None:
        raise FormValidationError(f"The {label} must be a date (YYYY-MM-DD)", field=field)
    return parsed


def parse_participants(values: Any, field: str = 'participants') -> List[str]:
    """Participant ids in the given order, blanks and duplicates removed"""
    if values is None:
        return []
    if isinstance(values, str):
        values = values.split(',')
    if not isinstance(values, (list, tuple)) or \
            not all(value is None or isinstance(value, (str, int)) for value in values):
        raise FormValidationError("People must be given as a list of names", field=field)
    people = [str(value).strip() for value in values if not _is_blank(value)]
    return list(dict.fromkeys(people))


def _parse_item(raw: Dict[str, Any], index: int, category: str) -> LineItem:
    field = f"items[{index}]"
    if not isinstance(raw, dict):
        raise FormValidationError(f"Item {index + 1} must have a name and a price", field=field)

    item_id = str(raw.get('id') or index + 1)
    name = clean_text_for_display(raw.get('name') or '')
    if not name:
        raise FormValidationError(f"Please enter a name for item {index + 1}", field=f"{field}.name")

    assigned_to = parse_participants(raw.get('assigned_to'), f"{field}.assigned_to")

    if category == CATEGORY_ENTERTAINMENT:
        quantity = parse_quantity(raw.get('quantity', 1), f"{field}.quantity")
        unit_price = parse_amount(
            raw.get('unit_price', raw.get('price')), f"{field}.unit_price", f"price of {name}"
        )
        item = LineItem.from_ticket(item_id, name, quantity, unit_price, assigned_to)
    else:
        price = parse_amount(raw.get('price'), f"{field}.price", f"price of {name}")
        item = LineItem(id=item_id, price=price, assigned_to=assigned_to, name=name)

    if category in (CATEGORY_FOOD, CATEGORY_ENTERTAINMENT) and not item.assigned_to:
        raise FormValidationError(
            f"Please assign {name} to at least one person", field=f"{field}.assigned_to"
        )
    return item


def parse_bill(form: Dict[str, Any]) -> Bill:
    """Validate raw bill form state and build a Bill"""
    if not isinstance(form, dict):
        raise FormValidationError("A bill must be an object with a title and items", field='bill')

    category = form.get('category') or CATEGORY_FOOD
    if isinstance(category, str):
        category = category.strip().lower()
    if category not in CATEGORIES:
        raise FormValidationError(
            f"Unknown category {category!r}, pick one of {', '.join(CATEGORIES)}", field='category'
        )

    title = clean_text_for_display(form.get('title') or '')
    if not title:
        raise FormValidationError(TITLE_MESSAGES[category], field='title')

    raw_items = form.get('items') or []
    if category == CATEGORY_ACCOMMODATION and not raw_items:
        raw_items = [{'id': '1', 'name': title, 'price': form.get('price')}]
    if not isinstance(raw_items, list):
        raise FormValidationError("The items of a bill must be a list", field='items')
    if not raw_items:
        raise FormValidationError("Please add at least one item", field='items')

    items = [_parse_item(raw, index, category) for index, raw in enumerate(raw_items)]

    participants = parse_participants(form.get('participants'))
    if category in (CATEGORY_ACCOMMODATION, CATEGORY_SPORTS) and not participants:
        raise FormValidationError("Please select at least one person", field='participants')

    surcharges = {
        name: parse_optional_amount(form.get(name), name, name)
        for name in SURCHARGE_FIELDS[category]
    }

    bill = Bill(
        title=title,
        category=category,
        items=items,
        participants=participants,
        payer=str(form.get('payer') or SELF_ID),
        currency=str(form.get('currency') or CURRENCY_DEFAULT).upper(),
        id=str(form.get('id') or ''),
        **surcharges,
    )

    if not _is_blank(form.get('date')):
        bill.created = parse_date(form.get('date'), 'date', 'bill date')

    if category == CATEGORY_ACCOMMODATION:
        bill.check_in = parse_date(form.get('check_in') or bill.created, 'check_in', 'check-in date')
        bill.check_out = parse_date(form.get('check_out') or bill.check_in, 'check_out', 'check-out date')
        if bill.check_out < bill.check_in:
            raise FormValidationError("Check-out date cannot be before check-in date", field='check_out')

    return bill


def bill_to_dict(bill: Bill) -> Dict[str, Any]:
    """Convert Bill to a dictionary that parse_bill accepts back"""
    items = []
    for item in bill.items:
        data = asdict(item)
        data['assigned_to'] = list(item.assigned_to)
        if item.unit_price is None:
            data.pop('unit_price')
            data.pop('quantity')
        items.append(data)

    data = {
        'id': bill.id,
        'title': bill.title,
        'category': bill.category,
        'currency': bill.currency,
        'payer': bill.payer,
        'participants': list(bill.participants),
        'items': items,
        'date': bill.created.isoformat(),
    }
    for name in SURCHARGE_FIELDS[bill.category]:
        data[name] = getattr(bill, name)
    if bill.check_in is not None:
        data['check_in'] = bill.check_in.isoformat()
    if bill.check_out is not None:
        data['check_out'] = bill.check_out.isoformat()
    return data


def read_bill_file(path) -> Any:
    """
    Load the form state stored in a bill file. Exported files wrap the
    bill next to its split analysis, only the bill part is returned.
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            form = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise FormValidationError(f"Not a valid bill file: {e}", field='file') from None

    if isinstance(form, dict) and isinstance(form.get('bill'), dict):
        form = form['bill']
    return form


def parse_bills(forms: List[Dict[str, Any]]) -> List[Bill]:
    return [parse_bill(form) for form in forms]
