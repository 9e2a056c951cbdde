"""
CLI Interface module for Splitshare
Command-line interface for entering bills and splitting them
"""

import json
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from analytics import category_shares, monthly_spending, total_spent
from bill_form import bill_to_dict, parse_bill, parse_bills, read_bill_file
from bill_splitter import BillSplitter
from config import CURRENCY_DEFAULT, EXPORT_DIR
from constants import (
    CATEGORIES,
    CATEGORY_ACCOMMODATION,
    CATEGORY_ENTERTAINMENT,
    DEFAULT_FRIENDS,
    ITEMIZED_CATEGORIES,
    SELF_ID,
    SURCHARGE_FIELDS,
)
from data_models import Bill, Friend
from exceptions import FormValidationError
from utils import (
    ensure_directory_exists,
    format_currency,
    generate_id,
    round_currency,
    round_shares,
    sanitize_filename,
    try_parse_float,
    validate_menu_choice,
)


def split_analysis(bill: Bill) -> Dict[str, Any]:
    """Split, settlements and per-person breakdown of a bill, rounded for display"""
    splitter = BillSplitter(bill)
    summary = splitter.summarize()
    settlements = splitter.optimize_settlements()

    breakdown = {}
    for person, data in splitter.person_breakdown().items():
        breakdown[person] = {
            'items': [
                {**entry, 'person_share': float(round_currency(entry['person_share']))}
                for entry in data['items']
            ],
            'subtotal_from_items': float(round_currency(data['subtotal_from_items'])),
            'surcharge_share': float(round_currency(data['surcharge_share'])),
            'total': float(round_currency(data['total'])),
        }

    analysis = {
        'subtotal': float(round_currency(summary.subtotal)),
        'surcharge_total': float(round_currency(summary.surcharge_total)),
        'total': float(round_currency(summary.total)),
        'individual_shares': {
            person: float(amount) for person, amount in round_shares(summary.shares).items()
        },
        'unassigned_total': float(round_currency(summary.unassigned_total)),
        'undistributed_surcharge': float(round_currency(summary.undistributed_surcharge)),
        'settlements': [asdict(s) for s in settlements],
        'transactions_needed': len(settlements),
        'detailed_breakdown': breakdown,
    }
    if bill.category == CATEGORY_ACCOMMODATION:
        analysis['nights'] = splitter.nights()
        per_night = splitter.per_night_per_person()
        analysis['per_night_per_person'] = (
            float(round_currency(per_night)) if per_night is not None else None
        )
    return analysis


def print_split(bill: Bill, names: Optional[Dict[str, str]] = None):
    """Print the split of a bill and the payments that settle it"""
    names = names or {}
    analysis = split_analysis(bill)
    currency = bill.currency

    print("\n" + "="*50)
    print(f"🧾 {bill.title} ({bill.category})")
    print("="*50)
    for item in bill.items:
        if item.assigned_to:
            assigned = ', '.join(names.get(p, p) for p in item.assigned_to)
        else:
            assigned = 'Unassigned' if bill.category in ITEMIZED_CATEGORIES else 'Everyone'
        if item.unit_price is not None:
            label = f"{item.name} {item.quantity}x {format_currency(item.unit_price, currency)}"
        else:
            label = item.name
        print(f"  {label[:32]:32} {format_currency(item.price, currency):>12} [{assigned}]")

    print("-"*50)
    print(f"{'SUBTOTAL:':36} {format_currency(analysis['subtotal'], currency):>12}")
    for name in SURCHARGE_FIELDS[bill.category]:
        amount = getattr(bill, name)
        if amount > 0:
            print(f"{name.upper() + ':':36} {format_currency(amount, currency):>12}")
    print(f"{'TOTAL:':36} {format_currency(analysis['total'], currency):>12}")

    if 'nights' in analysis:
        print(f"Nights:           {analysis['nights']}")
        if analysis['per_night_per_person'] is not None:
            print(f"Per night/person: {format_currency(analysis['per_night_per_person'], currency)}")

    print("\n" + "-"*50)
    print("💰 INDIVIDUAL SHARES")
    print("-"*50)
    for person, amount in analysis['individual_shares'].items():
        print(f"{names.get(person, person):20} : {format_currency(amount, currency):>12}")

    if analysis['unassigned_total'] > 0:
        print(f"\n⚠ {format_currency(analysis['unassigned_total'], currency)} of items is not assigned to anyone")
    if analysis['undistributed_surcharge'] > 0:
        print(f"⚠ {format_currency(analysis['undistributed_surcharge'], currency)} of surcharges could not be distributed")

    print("\n" + "-"*50)
    print("💸 SETTLEMENTS")
    print("-"*50)
    if not analysis['settlements']:
        print("🎉 Nothing to settle!")
    for s in analysis['settlements']:
        print(f"{names.get(s['from_person'], s['from_person']):15} → "
              f"{names.get(s['to_person'], s['to_person']):15} : {format_currency(s['amount'], currency)}")

    return analysis


def print_report(bills: List[Bill], person: Optional[str] = None,
                 currency: str = CURRENCY_DEFAULT, names: Optional[Dict[str, str]] = None):
    """Print spending per category and per month over a history of bills"""
    names = names or {}
    by_category = category_shares(bills, person)
    by_month = monthly_spending(bills, person)

    print("\n" + "="*50)
    print("📊 SPENDING REPORT" + (f" - {names.get(person, person)}" if person else ""))
    print("="*50)
    print(f"Bills: {len(bills)}")

    print("\n" + "-"*50)
    print("BY CATEGORY")
    print("-"*50)
    for row in by_category.itertuples(index=False):
        print(f"{row.category.capitalize():20} : {format_currency(float(row.amount), currency):>12}"
              f" {float(row.percent):5.1f}%")

    print("\n" + "-"*50)
    print("BY MONTH")
    print("-"*50)
    for row in by_month.itertuples(index=False):
        print(f"{row.month:20} : {format_currency(float(row.amount), currency):>12}")

    print("-"*50)
    print(f"{'TOTAL:':22} {format_currency(total_spent(bills, person), currency):>12}")
    return by_category


def export_bill(bill: Bill, directory: str = EXPORT_DIR) -> Path:
    """Write a bill and its split analysis to a JSON file"""
    data = {
        'export_info': {
            'timestamp': datetime.now().isoformat(),
            'version': '1.0',
            'currency': bill.currency,
        },
        'bill': bill_to_dict(bill),
        'split_analysis': split_analysis(bill),
    }

    filename = sanitize_filename(
        f"splitshare_{bill.title}_{datetime.now().strftime('%Y%m%d_%H%M%S')}.json"
    )
    path = ensure_directory_exists(directory) / filename
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
    return path


class SplitshareCLI:
    """Command-line interface for Splitshare"""

    def __init__(self, currency: str = CURRENCY_DEFAULT):
        self.friends: Dict[str, Friend] = {
            person_id: Friend(person_id, name) for person_id, name in DEFAULT_FRIENDS
        }
        self.currency = currency
        self.form: Dict[str, Any] = {}
        self.bill: Optional[Bill] = None

    @property
    def people(self) -> List[str]:
        return list(self.friends)

    @property
    def names(self) -> Dict[str, str]:
        return {person: friend.display_name for person, friend in self.friends.items()}

    @property
    def category(self) -> Optional[str]:
        return self.form.get('category')

    def display_banner(self):
        """Display application banner"""
        print("\n" + "="*60)
        print("🍽️  SPLITSHARE - Bill Splitter")
        print("Food, accommodation, entertainment & sports")
        print("="*60)

    def _choose(self, prompt: str, options: List[str]) -> Optional[int]:
        for i, option in enumerate(options, 1):
            print(f"{i}. {option}")
        choice = validate_menu_choice(input(prompt).strip(), [str(i) for i in range(1, len(options) + 1)])
        return int(choice) - 1 if choice else None

    def _choose_people(self) -> List[str]:
        people = self.people
        for i, person in enumerate(people, 1):
            print(f"{i}. {self.friends[person].display_name}")
        selections = input("Enter person numbers (comma-separated, empty for everyone): ").strip()
        if not selections:
            return people.copy()
        chosen = []
        for part in selections.split(','):
            choice = validate_menu_choice(part, [str(i) for i in range(1, len(people) + 1)])
            if choice is None:
                print(f"Invalid selection: {part.strip()}")
                continue
            person = people[int(choice) - 1]
            if person not in chosen:
                chosen.append(person)
        return chosen

    def new_bill(self):
        """Start a new bill of a chosen category"""
        print("\nCategory:")
        index = self._choose("Choice: ", [c.capitalize() for c in CATEGORIES])
        if index is None:
            print("⚠ Invalid category")
            return

        category = CATEGORIES[index]
        self.form = {
            'id': generate_id(),
            'category': category,
            'title': input("Title: ").strip(),
            'currency': self.currency,
            'payer': SELF_ID,
            'items': [],
            'participants': [],
        }
        if category == CATEGORY_ACCOMMODATION:
            self.form['check_in'] = input("Check-in date (YYYY-MM-DD): ").strip()
            self.form['check_out'] = input("Check-out date (YYYY-MM-DD): ").strip()
        self.bill = None
        print(f"✓ Started {category} bill")

    def manage_people(self):
        """Manage people for bill splitting"""
        print("\n" + "="*50)
        print("👥 PEOPLE MANAGEMENT")
        print("="*50)

        while True:
            print(f"\nCurrent people: {', '.join(self.names.values()) if self.friends else 'None'}")
            print("\n1. Add person")
            print("2. Remove person")
            print("3. Done")

            choice = validate_menu_choice(input("\nChoice: "), ['1', '2', '3']) or ''
            print("-"*50)

            if choice == '1':
                name = input("Enter name: ").strip()
                if not name:
                    continue
                person_id = f"friend{len(self.friends)}"
                while person_id in self.friends:
                    person_id += "_"
                self.friends[person_id] = Friend(person_id, name)
                print(f"✓ Added {name}")
            elif choice == '2':
                removable = [p for p in self.people if p != SELF_ID]
                if not removable:
                    print("⚠ Nobody to remove")
                    continue
                index = self._choose("Select person number to remove: ",
                                     [self.friends[p].display_name for p in removable])
                if index is None:
                    print("Invalid selection")
                    continue
                removed = removable[index]
                print(f"✓ Removed {self.friends.pop(removed).display_name}")
            elif choice == '3':
                break

    def add_item(self):
        """Add one item to the current bill"""
        if not self.form:
            print("\n⚠ Start a new bill first")
            return

        item = {'id': str(len(self.form['items']) + 1), 'name': input("Item name: ").strip()}
        if self.category == CATEGORY_ENTERTAINMENT:
            item['quantity'] = input("Quantity: ").strip()
            item['unit_price'] = input("Price per ticket: ").strip()
        else:
            item['price'] = input("Price: ").strip()
        item['assigned_to'] = []
        self.form['items'].append(item)
        self.bill = None
        print(f"✓ Added {item['name'] or 'item'}")

    def assign_items(self):
        """Assign items to people, or pick who shares the bill"""
        if not self.form:
            print("\n⚠ Start a new bill first")
            return

        if self.category not in ITEMIZED_CATEGORIES:
            print("\nWho shares this bill?")
            self.form['participants'] = self._choose_people()
            print(f"✓ Split between {', '.join(self.names[p] for p in self.form['participants'])}")
            self.bill = None
            return

        if not self.form['items']:
            print("\n⚠ No items to assign")
            return

        print("\n" + "="*50)
        print("🔍 ITEM ASSIGNMENT")
        print("="*50)

        for item in self.form['items']:
            print(f"\n{item['name']}")
            assigned = [self.names.get(p, p) for p in item['assigned_to']]
            print(f"Assigned to: {', '.join(assigned) if assigned else 'None'}")
            item['assigned_to'] = self._choose_people()
        self.bill = None

    def add_surcharges(self):
        """Add tax, tip or additional expenses"""
        if not self.form:
            print("\n⚠ Start a new bill first")
            return

        fields = SURCHARGE_FIELDS[self.category]
        if not fields:
            print(f"\n⚠ {self.category.capitalize()} bills have no extra charges")
            return

        for name in fields:
            raw = input(f"Enter {name} amount: ").strip()
            value = try_parse_float(raw) if raw else 0.0
            if value is None or value < 0:
                print(f"Invalid {name} amount")
                continue
            self.form[name] = raw
        self.bill = None

    def calculate_split(self) -> Optional[Dict[str, Any]]:
        """Validate the bill and display the split"""
        if not self.form:
            print("\n⚠ Start a new bill first")
            return None

        try:
            self.bill = parse_bill(self.form)
        except FormValidationError as e:
            print(f"\n⚠ {e}")
            return None

        return print_split(self.bill, self.names)

    def export_results(self) -> Optional[Path]:
        """Export the bill and its split to JSON"""
        if self.bill is None and self.calculate_split() is None:
            return None

        try:
            path = export_bill(self.bill)
        except OSError as e:
            print(f"\nExport failed: {e}")
            return None

        print(f"\n✅ Bill exported to {path}")
        return path

    def spending_report(self, directory: str = EXPORT_DIR):
        """Report spending over the bills exported so far"""
        forms = []
        for path in sorted(Path(directory).glob("splitshare_*.json")):
            try:
                forms.append(read_bill_file(path))
            except (FormValidationError, OSError) as e:
                print(f"⚠ Skipping {path.name}: {e}")

        try:
            bills = parse_bills(forms)
        except FormValidationError as e:
            print(f"\n⚠ {e}")
            return None
        if not bills:
            print(f"\n⚠ No exported bills found in {directory}")
            return None

        print("\nReport for:")
        index = self._choose("Choice (empty for the whole group): ", ['Everyone'] + list(self.names.values()))
        person = self.people[index - 1] if index else None
        return print_report(bills, person, self.currency, self.names)

    def run(self):
        """Run the CLI application"""
        self.display_banner()

        actions = {
            '1': self.new_bill,
            '2': self.manage_people,
            '3': self.add_item,
            '4': self.assign_items,
            '5': self.add_surcharges,
            '6': self.calculate_split,
            '7': self.export_results,
            '8': self.spending_report,
        }

        while True:
            print("\n" + "="*50)
            print("MAIN MENU")
            print("="*50)
            print("1. New bill")
            print("2. Manage people")
            print("3. Add item")
            print("4. Assign items / pick people")
            print("5. Add tax, tip or extra expenses")
            print("6. Calculate split")
            print("7. Export results")
            print("8. Spending report")
            print("9. Exit")

            choice = validate_menu_choice(input("\nChoice: "), list(actions) + ['9'])
            if choice == '9':
                print("\n👋 Thank you for using Splitshare!")
                break
            if choice is None:
                print("⚠ Invalid choice")
                continue
            actions[choice]()
