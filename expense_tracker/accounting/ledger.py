#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
ماژول دفتر هزینه برای مدیریت هزینه‌ها و دسته‌بندی‌ها.
این ماژول امکان ثبت، ویرایش، حذف، فیلتر و جمع‌زدن هزینه‌ها را فراهم می‌کند
و هر تغییر را با بازنویسی کامل مجموعه در ذخیره‌ساز ماندگار می‌کند.
"""

import json
import logging
from enum import Enum
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Tuple, Union

from expense_tracker.core.storage import KeyValueStore
from expense_tracker.models.expense import Category, Expense, ExpenseDraft, default_categories
from expense_tracker.utils.jalali import jalali_year_month, normalize_digits
from expense_tracker.utils.timezone_utils import generate_time_id, parse_calendar_date
from expense_tracker.utils.validators import parse_amount, validate_category_label, validate_required

logger = logging.getLogger('accounting.ledger')

EXPENSES_KEY = 'expenses'
CATEGORIES_KEY = 'categories'


class FilterType(Enum):
    """
    حالت‌های فیلتر هزینه‌ها
    """
    DATE_RANGE = 'dateRange'    # بازه تاریخ میلادی
    MONTH_YEAR = 'monthYear'    # ماه و سال جلالی


@dataclass
class FilterCriteria:
    """
    معیارهای فیلتر؛ فقط یکی از دو حالت اصلی در هر بار اعمال می‌شود
    و فیلتر دسته‌بندی با هر دو ترکیب می‌شود.
    """
    type: FilterType = FilterType.DATE_RANGE
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    month: Optional[Union[int, str]] = None
    year: Optional[Union[int, str]] = None
    category: Optional[str] = None


def _as_int(value: Union[int, str]) -> Optional[int]:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    try:
        return int(normalize_digits(value).strip())
    except (TypeError, ValueError):
        return None


def _in_date_range(expense: Expense, start: Optional[Any], end: Optional[Any]) -> bool:
    expense_date = parse_calendar_date(expense.date)
    if expense_date is None or start is None or end is None:
        return False
    return start <= expense_date <= end


def _in_jalali_month(expense: Expense, year: Optional[int], month: Optional[int]) -> bool:
    if year is None or month is None:
        return False
    try:
        jy, jm = jalali_year_month(expense.date)
    except ValueError:
        logger.debug(f"تاریخ هزینه {expense.id} قابل تبدیل به جلالی نیست: {expense.date!r}")
        return False
    return jy == year and jm == month


def filter_expenses(expenses: Iterable[Expense], criteria: Optional[FilterCriteria] = None) -> List[Expense]:
    """
    فیلتر هزینه‌ها بر اساس معیارهای داده شده

    حالت بازه تاریخ فقط وقتی اعمال می‌شود که هر دو مرز مشخص باشند و
    حالت ماه/سال فقط وقتی که هر دو مقدار مشخص باشند. لیست ورودی تغییر
    نمی‌کند و همیشه لیست جدیدی برگردانده می‌شود.

    Args:
        expenses: هزینه‌ها
        criteria: معیارهای فیلتر (None یعنی بدون فیلتر)

    Returns:
        List[Expense]: هزینه‌های مطابق
    """
    filtered = list(expenses)

    if criteria is None:
        return filtered

    if criteria.type == FilterType.DATE_RANGE and criteria.start_date and criteria.end_date:
        start = parse_calendar_date(criteria.start_date)
        end = parse_calendar_date(criteria.end_date)
        filtered = [expense for expense in filtered if _in_date_range(expense, start, end)]

    if criteria.type == FilterType.MONTH_YEAR and criteria.month and criteria.year:
        year = _as_int(criteria.year)
        month = _as_int(criteria.month)
        filtered = [expense for expense in filtered if _in_jalali_month(expense, year, month)]

    if criteria.category:
        filtered = [expense for expense in filtered if expense.category == criteria.category]

    return filtered


def calculate_total(expenses: Iterable[Expense]) -> Union[int, float]:
    """
    جمع مبلغ هزینه‌ها؛ برای لیست خالی صفر است.
    """
    return sum((expense.amount for expense in expenses), 0)


class Ledger:
    """
    کلاس دفتر هزینه برای مدیریت هزینه‌ها و دسته‌بندی‌ها

    نمونه این کلاس مالک لیست‌های درون حافظه در طول یک جلسه است.
    حافظه همیشه مرجع است: اگر نوشتن در ذخیره‌ساز شکست بخورد، تغییر
    در حافظه باقی می‌ماند و StorageError به فراخواننده می‌رسد.
    """

    def __init__(self, store: KeyValueStore, language: Optional[str] = None):
        """
        مقداردهی اولیه دفتر هزینه

        Args:
            store: ذخیره‌ساز کلید-مقدار
            language: زبان نام دسته‌بندی‌های پیش‌فرض (اختیاری)
        """
        self.store = store
        self.language = language
        self.expenses: List[Expense] = []
        self.categories: List[Category] = default_categories(language)

    @classmethod
    async def open(cls, store: KeyValueStore, language: Optional[str] = None) -> 'Ledger':
        """
        ساخت دفتر و بارگذاری داده‌ها از ذخیره‌ساز

        Raises:
            StorageError: اگر خواندن از ذخیره‌ساز شکست بخورد
        """
        ledger = cls(store, language)
        await ledger.load()
        return ledger

    async def _read_list(self, key: str) -> Optional[list]:
        raw = await self.store.get(key)
        if raw is None:
            return None

        try:
            data = json.loads(raw)
        except (TypeError, ValueError) as e:
            logger.warning(f"داده ذخیره شده برای کلید '{key}' JSON معتبر نیست و نادیده گرفته شد: {e}")
            return None

        if not isinstance(data, list):
            logger.warning(f"داده ذخیره شده برای کلید '{key}' آرایه نیست و نادیده گرفته شد")
            return None

        return data

    async def load(self) -> Tuple[List[Expense], List[Category]]:
        """
        بارگذاری هزینه‌ها و دسته‌بندی‌ها از ذخیره‌ساز

        رکوردهای بدون مبلغ معتبر کنار گذاشته می‌شوند و فقط تعداد آن‌ها
        در لاگ ثبت می‌شود. داده خراب (JSON نامعتبر یا غیر آرایه) مانند
        کلید ناموجود در نظر گرفته می‌شود.

        Returns:
            Tuple[List[Expense], List[Category]]: هزینه‌ها و دسته‌بندی‌ها

        Raises:
            StorageError: اگر خواندن از ذخیره‌ساز شکست بخورد
        """
        stored_expenses = await self._read_list(EXPENSES_KEY)
        stored_categories = await self._read_list(CATEGORIES_KEY)

        expenses = []
        if stored_expenses is not None:
            for record in stored_expenses:
                expense = Expense.from_dict(record)
                if expense is not None:
                    expenses.append(expense)

            dropped = len(stored_expenses) - len(expenses)
            if dropped:
                logger.warning(f"{dropped} رکورد هزینه با مبلغ نامعتبر کنار گذاشته شد")

        if stored_categories is not None:
            categories = [c for c in (Category.from_dict(item) for item in stored_categories) if c is not None]
        else:
            categories = default_categories(self.language)

        self.expenses = expenses
        self.categories = categories

        logger.info(f"{len(expenses)} هزینه و {len(categories)} دسته‌بندی بارگذاری شد")
        return list(self.expenses), list(self.categories)

    async def _persist_expenses(self) -> None:
        payload = json.dumps([expense.to_dict() for expense in self.expenses], ensure_ascii=False)
        await self.store.set(EXPENSES_KEY, payload)

    async def _persist_categories(self) -> None:
        payload = json.dumps([category.to_dict() for category in self.categories], ensure_ascii=False)
        await self.store.set(CATEGORIES_KEY, payload)

    async def add_category(self, label: str) -> List[Category]:
        """
        افزودن دسته‌بندی جدید

        Args:
            label: نام دسته‌بندی

        Returns:
            List[Category]: لیست به‌روز شده دسته‌بندی‌ها

        Raises:
            ValidationError: اگر نام خالی باشد
            StorageError: اگر ذخیره‌سازی شکست بخورد
        """
        validate_category_label(label)
        category = Category.from_label(label)

        self.categories = self.categories + [category]
        await self._persist_categories()

        logger.info(f"دسته‌بندی جدید اضافه شد: {category.value}")
        return list(self.categories)

    async def save_expense(self, draft: ExpenseDraft, editing_id: Optional[str] = None) -> List[Expense]:
        """
        ثبت هزینه جدید یا به‌روزرسانی هزینه در حال ویرایش

        Args:
            draft: مقادیر خام فرم
            editing_id: شناسه هزینه در حال ویرایش (None برای ثبت جدید)

        Returns:
            List[Expense]: لیست به‌روز شده هزینه‌ها (جدیدترین در ابتدا)

        Raises:
            ValidationError: اگر فیلدهای ضروری خالی یا مبلغ نامعتبر باشد
            StorageError: اگر ذخیره‌سازی شکست بخورد
        """
        validate_required(amount=draft.amount, category=draft.category, date=draft.date)
        amount = parse_amount(draft.amount)

        if editing_id:
            expense = Expense(
                id=editing_id,
                amount=amount,
                description=draft.description or '',
                category=draft.category,
                date=draft.date,
            )
            if self.find_expense(editing_id) is None:
                logger.warning(f"هزینه در حال ویرایش یافت نشد: {editing_id}")
            self.expenses = [expense if item.id == editing_id else item for item in self.expenses]
            logger.info(f"هزینه {editing_id} به‌روزرسانی شد")
        else:
            expense = Expense(
                id=generate_time_id(item.id for item in self.expenses),
                amount=amount,
                description=draft.description or '',
                category=draft.category,
                date=draft.date,
            )
            self.expenses = [expense] + self.expenses
            logger.info(f"هزینه جدید ثبت شد: {expense.id}")

        await self._persist_expenses()
        return list(self.expenses)

    async def delete_expense(self, expense_id: str) -> List[Expense]:
        """
        حذف هزینه با شناسه آن؛ شناسه ناموجود خطا ایجاد نمی‌کند.

        Raises:
            StorageError: اگر ذخیره‌سازی شکست بخورد
        """
        self.expenses = [expense for expense in self.expenses if expense.id != expense_id]
        await self._persist_expenses()

        logger.info(f"هزینه {expense_id} حذف شد")
        return list(self.expenses)

    def find_expense(self, expense_id: str) -> Optional[Expense]:
        for expense in self.expenses:
            if expense.id == expense_id:
                return expense
        return None

    def find_category(self, value: str) -> Optional[Category]:
        for category in self.categories:
            if category.value == value:
                return category
        return None

    def filter(self, criteria: Optional[FilterCriteria] = None) -> List[Expense]:
        return filter_expenses(self.expenses, criteria)

    def total(self, expenses: Optional[Iterable[Expense]] = None) -> Union[int, float]:
        return calculate_total(self.expenses if expenses is None else expenses)
