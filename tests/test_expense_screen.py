#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
تست‌های کنترلر صفحه هزینه‌ها

این ماژول رفتار فرم (حالت ویرایش، پیام‌های خطا) و سطرهای نمایشی را بررسی می‌کند.
"""

import os
import sys
import json
import unittest
from unittest.mock import AsyncMock, patch

# افزودن مسیر ریشه پروژه به sys.path برای واردسازی ماژول‌ها
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from expense_tracker.accounting.ledger import FilterType, EXPENSES_KEY
from expense_tracker.core.storage import MemoryStore, StorageError
from expense_tracker.handlers.expense_screen import ExpenseScreen
from expense_tracker.models.expense import Expense


STORED_EXPENSES = [
    {'id': '1', 'amount': 5000, 'description': 'ناهار', 'category': 'food', 'date': '2024-03-21'},
    {'id': '2', 'amount': 12500, 'description': '', 'category': 'custom', 'date': '2024-03-19'},
    {'id': '3', 'amount': 'not-a-number', 'description': '', 'category': 'food', 'date': '2024-03-19'},
]


class TestExpenseScreen(unittest.IsolatedAsyncioTestCase):
    """
    تست کنترلر صفحه با زبان فارسی
    """

    async def asyncSetUp(self):
        self.store = MemoryStore({EXPENSES_KEY: json.dumps(STORED_EXPENSES, ensure_ascii=False)})
        self.screen = ExpenseScreen(self.store, language='fa')
        self.assertTrue(await self.screen.start())

    def fill_form(self, amount='۲۰۰۰', category='transport', date='2024-03-22', description=''):
        self.screen.set_amount(amount)
        self.screen.select_category(category)
        self.screen.select_date(date)
        self.screen.set_description(description)

    async def test_start_loads_valid_expenses(self):
        self.assertEqual([e.id for e in self.screen.filtered_expenses], ['1', '2'])
        self.assertEqual(self.screen.total, 17500)
        self.assertEqual(self.screen.error_message, '')

    async def test_start_failure_shows_message_and_keeps_defaults(self):
        store = MemoryStore()
        store.get = AsyncMock(side_effect=StorageError('disk error', EXPENSES_KEY, 'get'))
        screen = ExpenseScreen(store, language='fa')

        with patch('expense_tracker.handlers.expense_screen.log_exception') as mock_log:
            self.assertFalse(await screen.start())

        mock_log.assert_called_once()
        self.assertEqual(screen.error_message, 'خطا در بارگذاری اطلاعات')
        self.assertEqual(len(screen.categories), 4)

    async def test_save_new_expense_resets_form(self):
        self.fill_form(description='تاکسی')

        self.assertTrue(await self.screen.save_expense())

        self.assertEqual(self.screen.expenses[0].amount, 2000)
        self.assertEqual(self.screen.expenses[0].description, 'تاکسی')
        self.assertEqual(self.screen.draft.amount, '')
        self.assertEqual(self.screen.draft.category, '')
        self.assertEqual(len(self.screen.filtered_expenses), 3)

    async def test_missing_fields_message(self):
        self.screen.set_amount('100')

        self.assertFalse(await self.screen.save_expense())

        self.assertEqual(self.screen.error_message, 'لطفاً تمام فیلدهای ضروری را پر کنید')
        self.assertFalse(self.screen.amount_error)
        self.assertEqual(len(self.screen.expenses), 2)

    async def test_invalid_amount_message_and_flag(self):
        self.fill_form(amount='0')

        self.assertFalse(await self.screen.save_expense())

        self.assertEqual(self.screen.error_message, 'لطفاً یک مبلغ معتبر وارد کنید')
        self.assertTrue(self.screen.amount_error)

        # تایپ دوباره خطا را پاک می‌کند
        self.screen.set_amount('1')
        self.assertEqual(self.screen.error_message, '')
        self.assertFalse(self.screen.amount_error)

    async def test_oversized_amount_keeps_screen_usable(self):
        self.fill_form(amount='9' * 400)

        self.assertFalse(await self.screen.save_expense())
        self.assertEqual(self.screen.error_message, 'لطفاً یک مبلغ معتبر وارد کنید')
        self.assertTrue(self.screen.amount_error)
        self.assertEqual(self.screen.formatted_total, '۱۷٬۵۰۰ تومان')

        # قالب‌بندی فیلد مبلغ هنگام خروج نیز خطا نمی‌دهد
        self.screen.format_amount_input()
        self.assertTrue(self.screen.draft.amount.startswith('۹۹۹٬'))

        restarted = ExpenseScreen(self.store, language='fa')
        self.assertTrue(await restarted.start())
        self.assertEqual(len(restarted.expenses), 2)

    async def test_start_skips_oversized_stored_amount(self):
        records = STORED_EXPENSES + [
            {'id': '4', 'amount': 10 ** 400, 'description': '', 'category': 'food', 'date': '2024-03-19'},
        ]
        screen = ExpenseScreen(MemoryStore({EXPENSES_KEY: json.dumps(records)}), language='fa')

        self.assertTrue(await screen.start())
        self.assertEqual([e.id for e in screen.expenses], ['1', '2'])
        self.assertEqual(screen.formatted_total, '۱۷٬۵۰۰ تومان')

    async def test_edit_state_machine(self):
        expense = self.screen.ledger.find_expense('2')
        self.screen.start_edit(expense)

        self.assertTrue(self.screen.is_editing)
        self.assertEqual(self.screen.draft.amount, '۱۲٬۵۰۰')
        self.assertEqual(self.screen.draft.category, 'custom')

        self.screen.select_category('bills')
        self.assertTrue(await self.screen.save_expense())

        self.assertFalse(self.screen.is_editing)
        edited = self.screen.ledger.find_expense('2')
        self.assertEqual(edited, Expense(id='2', amount=12500, description='', category='bills', date='2024-03-19'))
        self.assertEqual([e.id for e in self.screen.expenses], ['1', '2'])

    async def test_cancel_edit_returns_to_create_mode(self):
        self.screen.start_edit(self.screen.ledger.find_expense('1'))
        self.screen.cancel_edit()

        self.assertIsNone(self.screen.editing_id)
        self.assertEqual(self.screen.draft.amount, '')

    async def test_save_failure_keeps_edit_state_and_shows_message(self):
        self.store.set = AsyncMock(side_effect=StorageError('disk full', EXPENSES_KEY, 'set'))
        self.fill_form()

        with patch('expense_tracker.handlers.expense_screen.log_exception'):
            self.assertFalse(await self.screen.save_expense())

        self.assertEqual(self.screen.error_message, 'خطا در ذخیره هزینه')
        self.assertEqual(len(self.screen.expenses), 3)
        self.assertEqual(self.screen.draft.amount, '۲۰۰۰')

    async def test_delete_expense(self):
        self.assertTrue(await self.screen.delete_expense('1'))
        self.assertEqual([e.id for e in self.screen.filtered_expenses], ['2'])

        self.assertTrue(await self.screen.delete_expense('missing'))
        self.assertEqual(len(self.screen.expenses), 1)

    async def test_delete_failure_message(self):
        self.store.set = AsyncMock(side_effect=StorageError('disk full', EXPENSES_KEY, 'set'))

        with patch('expense_tracker.handlers.expense_screen.log_exception'):
            self.assertFalse(await self.screen.delete_expense('1'))

        self.assertEqual(self.screen.error_message, 'خطا در حذف هزینه')

    async def test_add_category(self):
        self.screen.new_category = 'Gym Membership'
        self.assertTrue(await self.screen.add_category())

        self.assertEqual(self.screen.categories[-1].value, 'gym_membership')
        self.assertEqual(self.screen.new_category, '')

    async def test_add_empty_category_message(self):
        self.screen.new_category = '  '
        self.assertFalse(await self.screen.add_category())
        self.assertEqual(self.screen.error_message, 'لطفاً نام دسته‌بندی را وارد کنید')

    async def test_format_amount_input(self):
        self.screen.set_amount('1500000')
        self.screen.format_amount_input()
        self.assertEqual(self.screen.draft.amount, '۱٬۵۰۰٬۰۰۰')

        self.screen.set_amount('abc')
        self.screen.format_amount_input()
        self.assertEqual(self.screen.draft.amount, 'abc')

    async def test_month_year_filter(self):
        self.screen.filter_type = FilterType.MONTH_YEAR
        self.screen.filter_month = '1'
        self.screen.filter_year = '1403'

        self.assertEqual([e.id for e in self.screen.apply_filter()], ['1'])
        self.assertEqual(self.screen.total, 5000)
        self.assertEqual(self.screen.formatted_total, '۵٬۰۰۰ تومان')

    async def test_date_range_and_category_filter(self):
        self.screen.filter_start_date = '2024-03-01'
        self.screen.filter_end_date = '2024-03-31'
        self.screen.filter_category = 'custom'

        self.assertEqual([e.id for e in self.screen.apply_filter()], ['2'])

    async def test_rows(self):
        rows = self.screen.rows()

        self.assertEqual(rows[0].category_label, 'غذا')
        self.assertEqual(rows[0].amount, '۵٬۰۰۰ تومان')
        self.assertEqual(rows[0].jalali_date, '1403/01/02')
        self.assertEqual(rows[0].description, 'ناهار')

        # دسته‌بندی ناشناخته با کلید خودش و توضیح خالی با «نامشخص» نمایش داده می‌شود
        self.assertEqual(rows[1].category_label, 'custom')
        self.assertEqual(rows[1].description, 'نامشخص')
        self.assertEqual(rows[1].as_text(), 'custom | ۱۲٬۵۰۰ تومان | نامشخص | 1402/12/29')

    async def test_rows_keep_unconvertible_dates(self):
        self.screen.filtered_expenses = [Expense(id='x', amount=1, description='', category='food', date='someday')]
        self.assertEqual(self.screen.rows()[0].jalali_date, 'someday')


class TestExpenseScreenEnglish(unittest.IsolatedAsyncioTestCase):

    async def test_english_messages_and_numbers(self):
        screen = ExpenseScreen(MemoryStore(), language='en')
        await screen.start()

        self.assertFalse(await screen.save_expense())
        self.assertEqual(screen.error_message, 'Please fill in all required fields')

        screen.set_amount('2500')
        screen.select_category('food')
        screen.select_date('2024-01-10')
        self.assertTrue(await screen.save_expense())
        self.assertEqual(screen.formatted_total, '2,500 Toman')
        self.assertEqual(screen.rows()[0].category_label, 'Food')


if __name__ == '__main__':
    unittest.main()
