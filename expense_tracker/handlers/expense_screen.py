#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
کنترلر صفحه هزینه‌ها.

این ماژول وضعیت فرم ثبت هزینه (پیش‌نویس، حالت ویرایش، پیام خطا)
و فیلترهای لیست را نگه می‌دارد و هر اقدام کاربر را به دفتر هزینه
منتقل می‌کند. همه خطاها همین‌جا، در محل اقدام کاربر، مدیریت می‌شوند.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Union

from expense_tracker.accounting.ledger import FilterCriteria, FilterType, Ledger, calculate_total, filter_expenses
from expense_tracker.core.storage import KeyValueStore, StorageError
from expense_tracker.models.expense import Category, Expense, ExpenseDraft
from expense_tracker.utils.jalali import gregorian_to_jalali
from expense_tracker.utils.localization import format_amount_text, format_number, get_message, translate_error
from expense_tracker.utils.logger import log_exception
from expense_tracker.utils.validators import ValidationError

logger = logging.getLogger(__name__)


@dataclass
class ExpenseRow:
    """
    یک سطر آماده نمایش در لیست هزینه‌ها
    """
    id: str
    category_label: str
    amount: str
    description: str
    jalali_date: str

    def as_text(self) -> str:
        return f"{self.category_label} | {self.amount} | {self.description} | {self.jalali_date}"


class ExpenseScreen:
    """
    کنترلر صفحه ثبت و مشاهده هزینه‌ها.

    editing_id برابر None یعنی حالت ثبت جدید؛ در غیر این صورت فرم
    هزینه با همان شناسه را ویرایش می‌کند.
    """

    def __init__(self, store: KeyValueStore, language: Optional[str] = None):
        """
        مقداردهی اولیه صفحه.

        پارامترها:
            store: ذخیره‌ساز کلید-مقدار
            language: زبان پیام‌ها و قالب‌بندی (اختیاری)
        """
        self.store = store
        self.language = language
        self.ledger = Ledger(store, language)

        self.draft = ExpenseDraft()
        self.editing_id: Optional[str] = None
        self.error_message = ''
        self.amount_error = False
        self.new_category = ''

        self.filter_type = FilterType.DATE_RANGE
        self.filter_start_date = ''
        self.filter_end_date = ''
        self.filter_month: Union[int, str] = ''
        self.filter_year: Union[int, str] = ''
        self.filter_category = ''
        self.filtered_expenses: List[Expense] = []

    # ------------------------------------------------------------------
    # چرخه عمر

    async def start(self) -> bool:
        """
        بارگذاری داده‌ها در شروع جلسه.

        بازگشت:
            bool: True در صورت موفقیت؛ در صورت شکست، پیام خطا تنظیم
            می‌شود و صفحه با دسته‌بندی‌های پیش‌فرض قابل استفاده می‌ماند.
        """
        try:
            await self.ledger.load()
        except StorageError as e:
            log_exception(e, "خطا در بارگذاری داده‌ها")
            self.error_message = translate_error('load_data', self.language)
            return False

        self.filtered_expenses = list(self.ledger.expenses)
        return True

    @property
    def expenses(self) -> List[Expense]:
        return self.ledger.expenses

    @property
    def categories(self) -> List[Category]:
        return self.ledger.categories

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    def _clear_error(self) -> None:
        self.error_message = ''
        self.amount_error = False

    def _show_validation_error(self, error: ValidationError) -> None:
        logger.debug(f"ورودی نامعتبر: {error}")
        self.error_message = translate_error(error.message_key, self.language)
        self.amount_error = error.message_key == 'invalid_amount'

    # ------------------------------------------------------------------
    # فرم

    def set_amount(self, text: str) -> None:
        self.draft.amount = text
        self._clear_error()

    def format_amount_input(self) -> None:
        """قالب‌بندی مبلغ وارد شده هنگام خروج از فیلد."""
        self.draft.amount = format_amount_text(self.draft.amount, self.language)

    def set_description(self, text: str) -> None:
        self.draft.description = text

    def select_category(self, value: str) -> None:
        self.draft.category = value
        self.error_message = ''

    def select_date(self, date: str) -> None:
        self.draft.date = date
        self.error_message = ''

    def _reset_draft(self) -> None:
        self.draft = ExpenseDraft()
        self._clear_error()

    def start_edit(self, expense: Expense) -> None:
        """
        ورود به حالت ویرایش و پر کردن فرم با مقادیر هزینه.
        """
        self.editing_id = expense.id
        self.draft = ExpenseDraft.from_expense(
            expense,
            amount_text=format_amount_text(str(expense.amount), self.language)
        )
        self._clear_error()

    def cancel_edit(self) -> None:
        self.editing_id = None
        self._reset_draft()

    async def save_expense(self) -> bool:
        """
        ثبت یا به‌روزرسانی هزینه بر اساس مقادیر فرم.

        بازگشت:
            bool: True اگر هزینه در حافظه و ذخیره‌ساز ثبت شد
        """
        try:
            await self.ledger.save_expense(self.draft, self.editing_id)
        except ValidationError as e:
            self._show_validation_error(e)
            return False
        except StorageError as e:
            log_exception(e, "خطا در ذخیره هزینه")
            self.error_message = translate_error('save_expense', self.language)
            return False

        self.editing_id = None
        self._reset_draft()
        self.filtered_expenses = list(self.ledger.expenses)
        return True

    async def delete_expense(self, expense_id: str) -> bool:
        try:
            await self.ledger.delete_expense(expense_id)
        except StorageError as e:
            log_exception(e, "خطا در حذف هزینه", {'expense_id': expense_id})
            self.error_message = translate_error('delete_expense', self.language)
            return False

        self.filtered_expenses = list(self.ledger.expenses)
        return True

    async def add_category(self) -> bool:
        try:
            await self.ledger.add_category(self.new_category)
        except ValidationError as e:
            self._show_validation_error(e)
            return False
        except StorageError as e:
            log_exception(e, "خطا در ذخیره دسته‌بندی")
            self.error_message = translate_error('save_category', self.language)
            return False

        self.new_category = ''
        self.error_message = ''
        return True

    # ------------------------------------------------------------------
    # فیلتر و نمایش

    def filter_criteria(self) -> FilterCriteria:
        return FilterCriteria(
            type=self.filter_type,
            start_date=self.filter_start_date or None,
            end_date=self.filter_end_date or None,
            month=self.filter_month or None,
            year=self.filter_year or None,
            category=self.filter_category or None,
        )

    def apply_filter(self) -> List[Expense]:
        self.filtered_expenses = filter_expenses(self.ledger.expenses, self.filter_criteria())
        return self.filtered_expenses

    @property
    def total(self) -> Union[int, float]:
        return calculate_total(self.filtered_expenses)

    @property
    def formatted_total(self) -> str:
        currency = get_message('label.currency', self.language)
        return f"{format_number(self.total, self.language)} {currency}"

    def _category_label(self, value: str) -> str:
        category = self.ledger.find_category(value)
        return category.label if category else value

    def rows(self) -> List[ExpenseRow]:
        """
        تبدیل هزینه‌های فیلتر شده به سطرهای آماده نمایش.
        """
        currency = get_message('label.currency', self.language)
        unknown = get_message('label.unknown_description', self.language)

        rows = []
        for expense in self.filtered_expenses:
            try:
                jalali_date = gregorian_to_jalali(expense.date)
            except ValueError:
                jalali_date = expense.date

            rows.append(ExpenseRow(
                id=expense.id,
                category_label=self._category_label(expense.category),
                amount=f"{format_number(expense.amount, self.language)} {currency}",
                description=expense.description or unknown,
                jalali_date=jalali_date,
            ))

        return rows
