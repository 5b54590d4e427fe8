"""Data analytics API for ledger reporting.

This module converts a :class:`~TransactionLedger.core.ledger.TransactionList` into pandas frames
for presentation layers and reports. The frames are snapshots; the ledger keeps ownership of its
transactions.
"""
import logging
from typing import List

import pandas as pd

from ..core.ledger import TransactionList

TRANSACTION_DATA_COLUMNS: List[str] = ['timestamp', 'type', 'amount', 'fee', 'percentage', 'cost']
TYPE_SUMMARY_COLUMNS: List[str] = ['type', 'count', 'total_cost']
DAILY_TOTAL_COLUMNS: List[str] = ['date', 'count', 'total_cost']


def to_dataframe(ledger: TransactionList) -> pd.DataFrame:
    """Return one row per transaction in ascending timestamp order.

    Charge columns that do not apply to a variant are left as NaN.

    Args:
        ledger (TransactionList): The ledger to export.

    Returns:
        pd.DataFrame: Columns are :data:`TRANSACTION_DATA_COLUMNS`.
    """
    rows = []
    for t in ledger:
        rows.append({
            'timestamp': t.get_date_time(),
            'type': t.type,
            'amount': getattr(t, 'amount', None),
            'fee': getattr(t, 'fee', None),
            'percentage': getattr(t, 'percentage', None),
            'cost': t.compute_cost(),
        })

    df = pd.DataFrame(rows, columns=TRANSACTION_DATA_COLUMNS)
    df = df.astype({'amount': float, 'fee': float, 'percentage': float, 'cost': float})
    logging.debug(f'Exported {len(df)} transaction(s) to a DataFrame')
    return df


def get_type_summary(ledger: TransactionList) -> pd.DataFrame:
    """Return the number of transactions and their total cost per type.

    Rows are sorted by count, highest first. Types with equal counts keep the order in
    which they first appear in the ledger.

    Args:
        ledger (TransactionList): The ledger to summarize.

    Returns:
        pd.DataFrame: Columns are :data:`TYPE_SUMMARY_COLUMNS`.
    """
    df = to_dataframe(ledger)
    if df.empty:
        return pd.DataFrame(columns=TYPE_SUMMARY_COLUMNS)

    summary = (
        df.groupby('type', sort=False)
        .agg(count=('cost', 'size'), total_cost=('cost', 'sum'))
        .reset_index()
    )
    summary = summary.sort_values('count', ascending=False, kind='stable').reset_index(drop=True)
    return summary[TYPE_SUMMARY_COLUMNS]


def get_daily_totals(ledger: TransactionList) -> pd.DataFrame:
    """Return the number of transactions and their total cost per calendar date.

    Args:
        ledger (TransactionList): The ledger to summarize.

    Returns:
        pd.DataFrame: Columns are :data:`DAILY_TOTAL_COLUMNS`, sorted by date.
    """
    df = to_dataframe(ledger)
    if df.empty:
        return pd.DataFrame(columns=DAILY_TOTAL_COLUMNS)

    df['date'] = df['timestamp'].map(lambda ts: ts.date())
    totals = (
        df.groupby('date', sort=True)
        .agg(count=('cost', 'size'), total_cost=('cost', 'sum'))
        .reset_index()
    )
    return totals[DAILY_TOTAL_COLUMNS]
