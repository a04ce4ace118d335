#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
ماژول دفتر هزینه: ثبت، فیلتر و جمع هزینه‌ها.
"""

from expense_tracker.accounting.ledger import (
    Ledger, FilterCriteria, FilterType, filter_expenses, calculate_total
)

__all__ = [
    'Ledger',
    'FilterCriteria',
    'FilterType',
    'filter_expenses',
    'calculate_total',
]
