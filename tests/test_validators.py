#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
تست‌های اعتبارسنجی ورودی‌های فرم هزینه
"""

import os
import sys
import unittest

# افزودن مسیر ریشه پروژه به sys.path برای واردسازی ماژول‌ها
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from expense_tracker.utils.validators import (
    ValidationError,
    validate_required,
    parse_amount,
    coerce_stored_amount,
    validate_category_label
)


class TestParseAmount(unittest.TestCase):
    """
    تست تبدیل متن مبلغ به عدد
    """

    def test_persian_digits(self):
        self.assertEqual(parse_amount('۵۰۰۰'), 5000)

    def test_thousands_separators_are_stripped(self):
        self.assertEqual(parse_amount('۱۲٬۵۰۰'), 12500)
        self.assertEqual(parse_amount('12,500 تومان'), 12500)

    def test_zero_is_invalid(self):
        with self.assertRaises(ValidationError) as context:
            parse_amount('0')
        self.assertEqual(context.exception.message_key, 'invalid_amount')

    def test_amount_beyond_float_range_is_invalid(self):
        for text in ['9' * 400, '۹' * 5000]:
            with self.assertRaises(ValidationError) as context:
                parse_amount(text)
            self.assertEqual(context.exception.message_key, 'invalid_amount')

    def test_large_finite_amount_is_kept(self):
        self.assertEqual(parse_amount('9' * 300), int('9' * 300))

    def test_no_digits_is_invalid(self):
        for text in ['abc', '', '---']:
            with self.assertRaises(ValidationError) as context:
                parse_amount(text)
            self.assertEqual(context.exception.message_key, 'invalid_amount')


class TestValidateRequired(unittest.TestCase):

    def test_all_present(self):
        fields = validate_required(amount='100', category='food', date='2024-01-01')
        self.assertEqual(fields['category'], 'food')

    def test_missing_field(self):
        with self.assertRaises(ValidationError) as context:
            validate_required(amount='100', category='', date='2024-01-01')
        self.assertEqual(context.exception.message_key, 'required_fields')
        self.assertIn('category', context.exception.message)


class TestCoerceStoredAmount(unittest.TestCase):
    """
    تست بررسی مبلغ رکوردهای ذخیره شده
    """

    def test_numbers_pass_through(self):
        self.assertEqual(coerce_stored_amount(100), 100)
        self.assertEqual(coerce_stored_amount(250.5), 250.5)

    def test_numeric_strings_are_converted(self):
        self.assertEqual(coerce_stored_amount('1500'), 1500)
        self.assertEqual(coerce_stored_amount('12.5'), 12.5)

    def test_invalid_values(self):
        for value in [None, 'not-a-number', '', 0, '0', True, float('nan'), float('inf'), [], {}]:
            self.assertIsNone(coerce_stored_amount(value), value)

    def test_integers_beyond_float_range(self):
        self.assertIsNone(coerce_stored_amount(10 ** 400))
        self.assertIsNone(coerce_stored_amount('9' * 400))
        self.assertIsNone(coerce_stored_amount(-10 ** 400))


class TestValidateCategoryLabel(unittest.TestCase):

    def test_label_is_trimmed(self):
        self.assertEqual(validate_category_label('  خرید  '), 'خرید')

    def test_empty_label(self):
        for label in ['', '   ', None]:
            with self.assertRaises(ValidationError) as context:
                validate_category_label(label)
            self.assertEqual(context.exception.message_key, 'empty_category')


if __name__ == '__main__':
    unittest.main()
