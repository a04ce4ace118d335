#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
این ماژول شامل مدل‌های داده دفتر هزینه است: هزینه، دسته‌بندی و پیش‌نویس فرم.
"""

import re
import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional, Union

from expense_tracker.utils.localization import get_message
from expense_tracker.utils.validators import coerce_stored_amount

logger = logging.getLogger('models.expense')

# کلیدهای دسته‌بندی‌های پیش‌فرض به ترتیب نمایش
DEFAULT_CATEGORY_VALUES = ['food', 'transport', 'entertainment', 'bills']

_WHITESPACE_RUN = re.compile(r'\s+')


def category_value_from_label(label: str) -> str:
    """
    ساخت کلید دسته‌بندی از نام آن: حروف کوچک و جایگزینی هر دنباله
    فاصله با زیرخط.
    """
    return _WHITESPACE_RUN.sub('_', label.lower())


@dataclass
class Expense:
    """
    کلاس نماینده یک هزینه ثبت شده
    """
    id: str
    amount: Union[int, float]
    description: str
    category: str
    date: str  # میلادی، YYYY-MM-DD

    def to_dict(self) -> Dict[str, Any]:
        """
        تبدیل هزینه به دیکشنری با نام فیلدهای ذخیره‌سازی

        Returns:
            Dict[str, Any]: دیکشنری حاوی اطلاعات هزینه
        """
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Any) -> Optional['Expense']:
        """
        ساخت هزینه از رکورد ذخیره شده

        رکوردهایی که شیء نیستند یا مبلغ معتبر ندارند کنار گذاشته می‌شوند.

        Args:
            data: رکورد خوانده شده از JSON

        Returns:
            Optional[Expense]: هزینه یا None برای رکورد نامعتبر
        """
        if not isinstance(data, dict):
            return None

        amount = coerce_stored_amount(data.get('amount'))
        if amount is None:
            return None

        expense_id = data.get('id')
        return cls(
            id='' if expense_id is None else str(expense_id),
            amount=amount,
            description=data.get('description') or '',
            category=data.get('category') or '',
            date=data.get('date') or '',
        )


@dataclass
class Category:
    """
    کلاس نماینده یک دسته‌بندی هزینه
    """
    label: str
    value: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)

    @classmethod
    def from_label(cls, label: str) -> 'Category':
        """
        ساخت دسته‌بندی جدید از نام وارد شده توسط کاربر

        کلید از نام اصلی ساخته می‌شود و نام ذخیره شده بدون فاصله‌های
        ابتدا و انتهاست.
        """
        return cls(label=label.strip(), value=category_value_from_label(label))

    @classmethod
    def from_dict(cls, data: Any) -> Optional['Category']:
        if not isinstance(data, dict):
            return None

        label = data.get('label')
        value = data.get('value')
        if not isinstance(label, str) or not isinstance(value, str):
            return None

        return cls(label=label, value=value)


@dataclass
class ExpenseDraft:
    """
    مقادیر خام فرم ثبت هزینه
    """
    amount: str = ''
    description: str = ''
    category: str = ''
    date: str = ''

    @classmethod
    def from_expense(cls, expense: Expense, amount_text: Optional[str] = None) -> 'ExpenseDraft':
        return cls(
            amount=amount_text if amount_text is not None else str(expense.amount),
            description=expense.description or '',
            category=expense.category,
            date=expense.date,
        )


def default_categories(language: Optional[str] = None) -> List[Category]:
    """
    دسته‌بندی‌های پیش‌فرض با نام‌هایی به زبان نمایش

    Args:
        language: کد زبان (اختیاری)

    Returns:
        List[Category]: غذا، حمل و نقل، سرگرمی و صورتحساب
    """
    return [
        Category(label=get_message(f"category.{value}", language), value=value)
        for value in DEFAULT_CATEGORY_VALUES
    ]
