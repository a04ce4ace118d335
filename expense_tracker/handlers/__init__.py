#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
کنترلرهای صفحه.
"""

from expense_tracker.handlers.expense_screen import ExpenseScreen, ExpenseRow

__all__ = ['ExpenseScreen', 'ExpenseRow']
