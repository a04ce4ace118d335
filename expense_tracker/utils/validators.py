#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
ماژول اعتبارسنجی‌ها

این ماژول شامل توابع اعتبارسنجی ورودی‌های فرم هزینه است:
فیلدهای ضروری، مبلغ و نام دسته‌بندی.
"""

import math
from typing import Any, Dict, Optional

from expense_tracker.utils.jalali import normalize_digits, WESTERN_DIGITS
from expense_tracker.utils.logger import get_logger

logger = get_logger(__name__)


class ValidationError(Exception):
    """
    خطای ورودی نامعتبر کاربر.

    message_key کلید پیام در فایل‌های ترجمه (بدون پیشوند error.) است.
    """

    def __init__(self, message_key: str, message: Optional[str] = None):
        self.message_key = message_key
        self.message = message or message_key
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"ValidationError[{self.message_key}]: {self.message}"


def validate_required(**fields: Any) -> Dict[str, Any]:
    """
    بررسی پر بودن فیلدهای ضروری

    :param fields: نام و مقدار فیلدها
    :return: همان فیلدها در صورت معتبر بودن
    :raises ValidationError: اگر یکی از فیلدها خالی باشد
    """
    missing = [name for name, value in fields.items() if not value]
    if missing:
        raise ValidationError('required_fields', f"فیلدهای ضروری خالی هستند: {', '.join(missing)}")
    return fields


def parse_amount(amount_text: str) -> int:
    """
    تبدیل متن مبلغ به عدد

    ارقام فارسی به لاتین تبدیل و سپس همه کاراکترهای غیر رقمی
    (جداکننده هزارگان، واحد پول و ...) حذف می‌شوند.

    :param amount_text: متن مبلغ وارد شده
    :return: مبلغ مثبت
    :raises ValidationError: اگر مبلغ عدد نباشد، متناهی نباشد یا بزرگتر از صفر نباشد
    """
    digits = ''.join(ch for ch in normalize_digits(amount_text) if ch in WESTERN_DIGITS)

    if not digits:
        raise ValidationError('invalid_amount', f"مبلغ عدد نیست: {amount_text!r}")

    # مبلغ باید در محدوده float باشد تا قالب‌بندی و بارگذاری دوباره ممکن باشد
    if not math.isfinite(float(digits)):
        raise ValidationError('invalid_amount', f"مبلغ بیش از حد بزرگ است: {amount_text[:20]!r}...")

    amount = int(digits)
    if amount <= 0:
        raise ValidationError('invalid_amount', f"مبلغ باید بزرگتر از صفر باشد: {amount_text!r}")

    return amount


def coerce_stored_amount(value: Any) -> Optional[float]:
    """
    بررسی مبلغ ذخیره شده یک رکورد

    مبلغ‌های عددی و رشته‌های عددی پذیرفته می‌شوند. مقدار خالی، صفر،
    بولی، غیر عددی و نامتناهی نامعتبر است.

    :param value: مقدار فیلد amount
    :return: مبلغ عددی یا None اگر نامعتبر باشد
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        text = normalize_digits(value).strip()
        try:
            number = float(text)
        except ValueError:
            return None
        if number.is_integer():
            number = int(number)
    else:
        return None

    try:
        if not math.isfinite(number) or number == 0:
            return None
    except OverflowError:
        # عدد صحیح خارج از محدوده float
        return None

    return number


def validate_category_label(label: Optional[str]) -> str:
    """
    اعتبارسنجی نام دسته‌بندی

    :param label: نام وارد شده
    :return: نام بدون فاصله‌های ابتدا و انتها
    :raises ValidationError: اگر نام خالی باشد
    """
    if not label or not label.strip():
        raise ValidationError('empty_category', "نام دسته‌بندی خالی است")
    return label.strip()
