#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
ماژول تبدیل تقویم.

تبدیل تاریخ میلادی به جلالی (شمسی) و یکسان‌سازی ارقام فارسی و عربی
به ارقام لاتین. همه توابع این ماژول خالص هستند و ورودی/خروجی ندارند.
"""

import re
import datetime
from typing import Tuple

PERSIAN_DIGITS = '۰۱۲۳۴۵۶۷۸۹'
ARABIC_DIGITS = '٠١٢٣٤٥٦٧٨٩'
WESTERN_DIGITS = '0123456789'

_DIGIT_TABLE = str.maketrans(PERSIAN_DIGITS + ARABIC_DIGITS, WESTERN_DIGITS * 2)

# روزهای سپری شده از ابتدای سال میلادی تا ابتدای هر ماه (سال غیرکبیسه)
_G_DAYS_IN_MONTH = [0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334]

_DATE_PATTERN = re.compile(r'^\s*(\d+)\s*[-/]\s*(\d+)\s*[-/]\s*(\d+)')


def normalize_digits(text) -> str:
    """
    جایگزینی ارقام فارسی (۰ تا ۹) و عربی با ارقام لاتین.

    سایر کاراکترها دست‌نخورده باقی می‌مانند و اجرای دوباره تابع
    نتیجه را تغییر نمی‌دهد.

    پارامترها:
        text: متن ورودی

    بازگشت:
        str: متن با ارقام لاتین
    """
    if text is None:
        return ''
    return str(text).translate(_DIGIT_TABLE)


def gregorian_to_jalali_parts(gy: int, gm: int, gd: int) -> Tuple[int, int, int]:
    """
    تبدیل تاریخ میلادی به جلالی (شمسی).

    الگوریتم بر پایه چرخه‌های ۳۳ ساله است. سال‌های میلادی تا ۱۶۰۰
    با مبدأ ۶۲۱ و سال‌های بعد از آن با مبدأ ۱۶۰۰ محاسبه می‌شوند.

    پارامترها:
        gy: سال میلادی
        gm: ماه میلادی
        gd: روز میلادی

    بازگشت:
        Tuple[int, int, int]: (سال، ماه، روز) جلالی
    """
    if gy > 1600:
        jy = 979
        gy -= 1600
    else:
        jy = 0
        gy -= 621

    gy2 = gy + 1 if gm > 2 else gy
    days = (365 * gy) + ((gy2 + 3) // 4) - ((gy2 + 99) // 100) + ((gy2 + 399) // 400) - 80 + gd + _G_DAYS_IN_MONTH[gm - 1]
    jy += 33 * (days // 12053)
    days %= 12053
    jy += 4 * (days // 1461)
    days %= 1461

    if days > 365:
        jy += (days - 1) // 365
        days = (days - 1) % 365

    if days < 186:
        jm = 1 + (days // 31)
        jd = 1 + (days % 31)
    else:
        jm = 7 + ((days - 186) // 30)
        jd = 1 + ((days - 186) % 30)

    return (jy, jm, jd)


def _split_date(date_str: str) -> Tuple[int, int, int]:
    """
    جدا کردن اجزای رشته تاریخ و نرمال‌سازی ماه و روز خارج از محدوده.

    ماه ۱۳ به ژانویه سال بعد و روز ۳۰ فوریه به اول مارس منتقل می‌شود.

    استثناها:
        ValueError: اگر رشته قالب سال/ماه/روز نداشته باشد
    """
    match = _DATE_PATTERN.match(normalize_digits(date_str))
    if not match:
        raise ValueError(f"قالب تاریخ نامعتبر است: {date_str!r}")

    year, month, day = (int(part) for part in match.groups())

    extra_years, month_index = divmod(month - 1, 12)
    try:
        first_of_month = datetime.date(year + extra_years, month_index + 1, 1)
        normalized = first_of_month + datetime.timedelta(days=day - 1)
    except (ValueError, OverflowError) as e:
        raise ValueError(f"تاریخ خارج از محدوده است: {date_str!r}") from e

    return normalized.year, normalized.month, normalized.day


def gregorian_to_jalali(date_str: str) -> str:
    """
    تبدیل رشته تاریخ میلادی به رشته تاریخ جلالی.

    ورودی به صورت YYYY/MM/DD یا YYYY-MM-DD است و خروجی به صورت
    jYYYY/jMM/jDD با ماه و روز دو رقمی.

    پارامترها:
        date_str: تاریخ میلادی

    بازگشت:
        str: تاریخ جلالی

    استثناها:
        ValueError: اگر تاریخ قابل تجزیه نباشد
    """
    if not isinstance(date_str, str):
        raise ValueError(f"تاریخ باید رشته باشد: {date_str!r}")

    jy, jm, jd = gregorian_to_jalali_parts(*_split_date(date_str))
    return f"{jy}/{jm:02d}/{jd:02d}"


def jalali_year_month(date_str: str) -> Tuple[int, int]:
    """
    دریافت سال و ماه جلالی یک تاریخ میلادی.

    استثناها:
        ValueError: اگر تاریخ قابل تجزیه نباشد
    """
    year, month, _ = gregorian_to_jalali(date_str).split('/')
    return int(year), int(month)
