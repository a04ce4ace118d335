#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
ماژول مدیریت چندزبانگی.

این ماژول پیام‌های فارسی و انگلیسی برنامه را از فایل‌های
locales/<زبان>/messages.json بارگذاری می‌کند و اعداد را برای نمایش
با ارقام فارسی قالب‌بندی می‌کند.
"""

import os
import json
import logging
import threading
from typing import Dict, Optional

from expense_tracker.utils.jalali import normalize_digits, PERSIAN_DIGITS, WESTERN_DIGITS

logger = logging.getLogger(__name__)

DEFAULT_LOCALES_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'locales')

# جداکننده هزارگان و ممیز فارسی
PERSIAN_THOUSANDS_SEPARATOR = '٬'
PERSIAN_DECIMAL_SEPARATOR = '٫'

_TO_PERSIAN_TABLE = str.maketrans(
    WESTERN_DIGITS + ',.',
    PERSIAN_DIGITS + PERSIAN_THOUSANDS_SEPARATOR + PERSIAN_DECIMAL_SEPARATOR
)


class Localization:
    """
    کلاس مدیریت چندزبانگی برنامه.
    این کلاس به صورت سینگلتون پیاده‌سازی شده است.
    """

    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        with cls._lock:
            if cls._instance is None:
                cls._instance = super(Localization, cls).__new__(cls)
                cls._instance._initialized = False
            return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self.messages: Dict[str, Dict[str, str]] = {}
        self.default_language = 'fa'
        self.available_languages = []
        self.locales_dir = None

        self._initialized = True

    def load_languages(self, locales_dir: str = DEFAULT_LOCALES_DIR) -> None:
        """
        بارگذاری فایل‌های ترجمه از دایرکتوری.

        پارامترها:
            locales_dir: مسیر دایرکتوری حاوی فایل‌های ترجمه
        """
        if not os.path.exists(locales_dir):
            logger.error(f"دایرکتوری '{locales_dir}' یافت نشد!")
            return

        available_languages = []
        for lang_dir in sorted(os.listdir(locales_dir)):
            msg_file = os.path.join(locales_dir, lang_dir, 'messages.json')
            if os.path.isfile(msg_file):
                available_languages.append(lang_dir)

        self.available_languages = available_languages
        self.locales_dir = locales_dir
        logger.debug(f"زبان‌های یافت شده: {', '.join(available_languages)}")

        for lang in available_languages:
            self._load_language(locales_dir, lang)

    def _load_language(self, locales_dir: str, language: str) -> None:
        msg_file = os.path.join(locales_dir, language, 'messages.json')

        try:
            with open(msg_file, 'r', encoding='utf-8') as f:
                messages = json.load(f)

            self.messages[language] = messages
            logger.debug(f"فایل پیام‌های زبان '{language}' با {len(messages)} پیام بارگذاری شد.")

        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"خطا در بارگذاری فایل پیام‌های زبان '{language}': {str(e)}")

    def ensure_loaded(self) -> None:
        """بارگذاری پیام‌های پیش‌فرض بسته اگر هنوز چیزی بارگذاری نشده باشد."""
        if not self.messages:
            self.load_languages(DEFAULT_LOCALES_DIR)

    def set_default_language(self, language: str) -> None:
        """
        تنظیم زبان پیش‌فرض.

        پارامترها:
            language: کد زبان

        استثناها:
            ValueError: اگر زبان در دسترس نباشد.
        """
        self.ensure_loaded()
        if language not in self.available_languages:
            raise ValueError(f"زبان '{language}' در دسترس نیست!")

        self.default_language = language
        logger.info(f"زبان پیش‌فرض به '{language}' تغییر یافت.")

    def get_message(self, key: str, language: Optional[str] = None) -> str:
        """
        دریافت پیام ترجمه شده.

        پارامترها:
            key: کلید پیام
            language: کد زبان (اگر None باشد، از زبان پیش‌فرض استفاده می‌شود)

        بازگشت:
            str: پیام ترجمه شده یا کلید اصلی در صورت عدم وجود ترجمه
        """
        self.ensure_loaded()
        lang = language or self.default_language

        if lang not in self.messages:
            logger.warning(f"زبان '{lang}' یافت نشد. استفاده از زبان پیش‌فرض '{self.default_language}'.")
            lang = self.default_language

        if key in self.messages.get(lang, {}):
            return self.messages[lang][key]

        if key in self.messages.get(self.default_language, {}):
            return self.messages[self.default_language][key]

        logger.warning(f"پیام با کلید '{key}' در زبان '{lang}' یافت نشد.")
        return key


# رابط‌های عمومی ماژول
_localization = Localization()


def load_languages(locales_dir: str = DEFAULT_LOCALES_DIR) -> None:
    _localization.load_languages(locales_dir)


def set_language(language: str) -> None:
    """
    تنظیم زبان پیش‌فرض برنامه.

    پارامترها:
        language: کد زبان
    """
    _localization.set_default_language(language)


def get_language() -> str:
    return _localization.default_language


def get_message(key: str, language: Optional[str] = None, **kwargs) -> str:
    """
    دریافت پیام ترجمه شده.

    پارامترها:
        key: کلید پیام
        language: کد زبان (اگر None باشد، از زبان پیش‌فرض استفاده می‌شود)
        **kwargs: پارامترهای جایگزینی در رشته

    بازگشت:
        str: پیام ترجمه شده یا کلید اصلی در صورت عدم وجود ترجمه
    """
    message = _localization.get_message(key, language)

    if kwargs:
        try:
            return message.format(**kwargs)
        except KeyError as e:
            logger.error(f"خطا در جایگزینی پارامتر‌ها در پیام '{key}': {str(e)}")

    return message


def translate_error(error_key: str, language: Optional[str] = None, **kwargs) -> str:
    """
    ترجمه خطا با کلید مشخص

    پارامترها:
        error_key: کلید خطا (بدون پیشوند error.)
        language: کد زبان (اختیاری)

    بازگشت:
        str: متن خطای ترجمه شده
    """
    return get_message(f"error.{error_key}", language, **kwargs)


def format_number(number: float, language: Optional[str] = None, max_decimal_places: int = 3) -> str:
    """
    فرمت‌بندی عدد با جداکننده هزارگان بر اساس زبان انتخابی.

    صفرهای انتهایی بخش اعشار حذف می‌شوند؛ برای فارسی ارقام و جداکننده‌ها
    فارسی هستند (۲۵۰٫۵ و ۱۲٬۵۰۰).

    پارامترها:
        number: عدد مورد نظر برای فرمت‌بندی
        language: کد زبان (اختیاری)
        max_decimal_places: حداکثر تعداد اعشار

    بازگشت:
        str: عدد فرمت‌بندی شده
    """
    if isinstance(number, int):
        # اعداد صحیح بدون تبدیل به float قالب‌بندی می‌شوند
        formatted = f"{number:,}"
    else:
        formatted = f"{number:,.{max_decimal_places}f}"
        if '.' in formatted:
            formatted = formatted.rstrip('0').rstrip('.')

    if (language or get_language()) == 'fa':
        return formatted.translate(_TO_PERSIAN_TABLE)

    return formatted


def format_amount_text(text: str, language: Optional[str] = None) -> str:
    """
    قالب‌بندی متن مبلغ وارد شده در فرم.

    همه کاراکترهای غیر رقمی حذف و عدد باقی‌مانده قالب‌بندی می‌شود.
    اگر متن رقمی نداشته باشد، خود متن برگردانده می‌شود.

    پارامترها:
        text: متن ورودی کاربر
        language: کد زبان (اختیاری)

    بازگشت:
        str: مبلغ قالب‌بندی شده
    """
    if not text:
        return ''

    digits = ''.join(ch for ch in normalize_digits(text) if ch in WESTERN_DIGITS)
    if not digits:
        return text

    return format_number(int(digits), language)
