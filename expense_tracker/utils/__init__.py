#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
ماژول توابع کمکی (utils)

تبدیل تقویم، منطقه زمانی، اعتبارسنجی، چندزبانگی و لاگ‌گیری.
"""

from expense_tracker.utils.jalali import (
    normalize_digits, gregorian_to_jalali, gregorian_to_jalali_parts, jalali_year_month
)

from expense_tracker.utils.logger import get_logger, setup_logger, log_exception

from expense_tracker.utils.validators import (
    ValidationError, validate_required, parse_amount, validate_category_label
)

__all__ = [
    # jalali.py
    'normalize_digits', 'gregorian_to_jalali', 'gregorian_to_jalali_parts', 'jalali_year_month',

    # logger.py
    'get_logger', 'setup_logger', 'log_exception',

    # validators.py
    'ValidationError', 'validate_required', 'parse_amount', 'validate_category_label',
]
