"""
Spending analytics for Splitshare
Aggregates a history of bills by category and by month
"""

from typing import List, Optional

import pandas as pd

from bill_splitter import BillSplitter
from constants import CATEGORIES
from data_models import Bill

BILL_COLUMNS = ['id', 'title', 'category', 'date', 'participants', 'total', 'amount']


def bills_frame(bills: List[Bill], person: Optional[str] = None) -> pd.DataFrame:
    """
    One row per bill. 'amount' is the bill total, or the share of
    `person` when given.
    """
    rows = []
    for bill in bills:
        splitter = BillSplitter(bill)
        if person is None:
            amount = bill.total
        else:
            amount = splitter.calculate_shares().get(person, 0.0)
        rows.append({
            'id': bill.id,
            'title': bill.title,
            'category': bill.category,
            'date': pd.Timestamp(bill.created),
            'participants': len(splitter.people),
            'total': bill.total,
            'amount': amount,
        })
    return pd.DataFrame(rows, columns=BILL_COLUMNS)


def spending_by_category(bills: List[Bill], person: Optional[str] = None) -> pd.DataFrame:
    """Amount spent per category, largest first, every category listed"""
    df = bills_frame(bills, person)
    totals = df.groupby('category')['amount'].sum()
    totals = totals.reindex(CATEGORIES, fill_value=0.0).astype(float)
    result = totals.rename_axis('category').reset_index()
    return result.sort_values('amount', ascending=False, kind='stable').reset_index(drop=True)


def monthly_spending(bills: List[Bill], person: Optional[str] = None) -> pd.DataFrame:
    """Amount spent per calendar month, oldest first"""
    df = bills_frame(bills, person)
    if df.empty:
        return pd.DataFrame(columns=['month', 'amount'])

    df['month'] = df['date'].dt.to_period('M').astype(str)
    result = df.groupby('month', as_index=False)['amount'].sum()
    return result.sort_values('month').reset_index(drop=True)


def total_spent(bills: List[Bill], person: Optional[str] = None) -> float:
    if not bills:
        return 0.0
    return float(bills_frame(bills, person)['amount'].sum())


def category_shares(bills: List[Bill], person: Optional[str] = None) -> pd.DataFrame:
    """Spending per category with its percentage of the overall amount"""
    result = spending_by_category(bills, person)
    overall = result['amount'].sum()
    result['percent'] = result['amount'] / overall * 100 if overall > 0 else 0.0
    return result
