#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
پکیج تست‌های برنامه

این پکیج شامل تست‌های اجزای دفتر هزینه‌های شخصی است:
- تست تبدیل تاریخ میلادی به جلالی
- تست اعتبارسنجی ورودی‌ها
- تست ذخیره‌سازها
- تست دفتر هزینه و فیلترها
- تست کنترلر صفحه و گزارش خط فرمان
"""

import os
import sys

# افزودن مسیر ریشه پروژه به sys.path برای واردسازی ماژول‌ها
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

__all__ = [
    'test_config',
    'test_expense_screen',
    'test_jalali',
    'test_ledger',
    'test_localization',
    'test_main',
    'test_storage',
    'test_timezone_utils',
    'test_validators',
    'run_tests'
]
