#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
ماژول مدیریت منطقه زمانی.

این ماژول زمان فعلی را با منطقه زمانی تنظیم شده برمی‌گرداند، رشته‌های
تاریخ را به لحظه تقویمی تبدیل می‌کند و شناسه‌های زمان‌محور می‌سازد.
"""

import logging
import datetime
from typing import Iterable, Optional

import pytz
from dateutil import parser as date_parser

from expense_tracker.utils.jalali import normalize_digits

logger = logging.getLogger(__name__)

# منطقه زمانی پیش‌فرض (تهران)
DEFAULT_TIMEZONE = 'Asia/Tehran'

# منطقه زمانی تنظیم شده
current_timezone = DEFAULT_TIMEZONE

# قالب‌هایی که پیش از dateutil امتحان می‌شوند
_DATE_FORMATS = [
    '%Y-%m-%d',
    '%Y/%m/%d',
    '%Y-%m-%d %H:%M:%S',
    '%Y/%m/%d %H:%M:%S',
    '%Y-%m-%dT%H:%M:%S',
]


def setup_timezone(timezone: str = DEFAULT_TIMEZONE) -> None:
    """
    تنظیم منطقه زمانی برنامه.

    پارامترها:
        timezone: منطقه زمانی (مثلاً 'Asia/Tehran')

    استثناها:
        ValueError: اگر منطقه زمانی نامعتبر باشد
    """
    global current_timezone

    try:
        pytz.timezone(timezone)
    except pytz.exceptions.UnknownTimeZoneError:
        logger.error(f"منطقه زمانی '{timezone}' نامعتبر است. استفاده از پیش‌فرض: {DEFAULT_TIMEZONE}")
        current_timezone = DEFAULT_TIMEZONE
        raise ValueError(f"منطقه زمانی '{timezone}' نامعتبر است.")

    current_timezone = timezone
    logger.info(f"منطقه زمانی به '{timezone}' تنظیم شد.")


def get_current_timezone() -> str:
    """
    دریافت منطقه زمانی فعلی.

    بازگشت:
        str: منطقه زمانی فعلی
    """
    return current_timezone


def now() -> datetime.datetime:
    """
    دریافت زمان فعلی با منطقه زمانی.

    بازگشت:
        datetime.datetime: زمان فعلی با منطقه زمانی
    """
    return datetime.datetime.now(pytz.timezone(current_timezone))


def parse_calendar_date(date_str: str) -> Optional[datetime.datetime]:
    """
    تبدیل رشته تاریخ به لحظه تقویمی بدون منطقه زمانی.

    قالب‌های رایج (YYYY-MM-DD و YYYY/MM/DD) مستقیماً و بقیه با dateutil
    تجزیه می‌شوند. ارقام فارسی پیش از تجزیه به لاتین تبدیل می‌شوند.

    پارامترها:
        date_str: رشته تاریخ

    بازگشت:
        Optional[datetime.datetime]: لحظه تقویمی یا None اگر رشته قابل تجزیه نباشد
    """
    if not date_str or not isinstance(date_str, str):
        return None

    text = normalize_digits(date_str).strip()

    for fmt in _DATE_FORMATS:
        try:
            return datetime.datetime.strptime(text, fmt)
        except ValueError:
            continue

    try:
        parsed = date_parser.parse(text)
    except (ValueError, OverflowError):
        logger.debug(f"عدم موفقیت در پارس رشته تاریخ: {date_str}")
        return None

    # لحظه‌های دارای منطقه زمانی به زمان محلی تنظیم شده برده می‌شوند
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(pytz.timezone(current_timezone)).replace(tzinfo=None)

    return parsed


def generate_time_id(existing_ids: Iterable[str] = ()) -> str:
    """
    ساخت شناسه یکتا بر اساس زمان فعلی (میلی‌ثانیه).

    اگر شناسه ساخته شده قبلاً استفاده شده باشد، یک واحد افزایش می‌یابد
    تا شناسه آزاد پیدا شود.

    پارامترها:
        existing_ids: شناسه‌های موجود

    بازگشت:
        str: شناسه جدید
    """
    taken = set(existing_ids)
    candidate = int(now().timestamp() * 1000)

    while str(candidate) in taken:
        candidate += 1

    return str(candidate)
