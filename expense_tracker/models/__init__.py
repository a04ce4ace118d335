#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
پکیج مدل‌های داده دفتر هزینه.
"""

from expense_tracker.models.expense import Expense, Category, ExpenseDraft, default_categories

__all__ = [
    'Expense',
    'Category',
    'ExpenseDraft',
    'default_categories',
]
