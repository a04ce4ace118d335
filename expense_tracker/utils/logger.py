#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
ماژول تنظیم سیستم لاگ‌گیری.

این ماژول لاگ‌های دفتر هزینه را در کنسول و در صورت نیاز در فایل
با قابلیت چرخش ثبت می‌کند.
"""

import os
import logging
import traceback
from logging.handlers import RotatingFileHandler
from typing import Optional

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'


def setup_logger(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    تنظیم و پیکربندی سیستم لاگ‌گیری.

    پارامترها:
        level: سطح لاگ‌گیری (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: مسیر فایل لاگ (اختیاری)
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # حذف هندلرهای قبلی برای جلوگیری از تکرار
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    log_format = logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(log_format)
    root_logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # حداکثر ۱۰ مگابایت
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setFormatter(log_format)
        root_logger.addHandler(file_handler)

    # کتابخانه‌های خارجی فقط هشدارها را ثبت کنند
    for logger_name in ['asyncio', 'dateutil']:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.info(f"سیستم لاگ‌گیری با سطح {logging.getLevelName(level)} راه‌اندازی شد.")
    if log_file:
        logger.info(f"لاگ‌ها در فایل {log_file} ذخیره می‌شوند.")


def get_logger(name: str) -> logging.Logger:
    """
    دریافت یک شیء Logger با نام مشخص شده.

    پارامترها:
        name: نام لاگر (معمولاً نام ماژول)

    بازگشت:
        logging.Logger: شیء لاگر
    """
    return logging.getLogger(name)


def log_exception(exception: Exception, message: str = None, extra_info: dict = None) -> None:
    """
    ثبت اطلاعات خطا در سیستم لاگ

    پارامترها:
        exception: شیء خطا
        message: پیام اختیاری برای توضیح بیشتر
        extra_info: اطلاعات اضافی مرتبط با خطا
    """
    logger = get_logger(__name__)

    if message:
        logger.error(message)

    logger.error(f"خطا: {type(exception).__name__} - {str(exception)}")

    details = ''.join(traceback.format_exception(type(exception), exception, exception.__traceback__))
    logger.error("جزئیات خطا:\n" + details)

    if extra_info:
        logger.error(f"اطلاعات اضافی: {extra_info}")


def level_from_name(name: Optional[str], default: int = logging.INFO) -> int:
    """تبدیل نام سطح لاگ (مثلاً 'DEBUG') به مقدار عددی آن."""
    if not name:
        return default
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else default
