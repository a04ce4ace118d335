#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
دفتر هزینه‌های شخصی.

ثبت، ویرایش و حذف هزینه‌ها، ذخیره در ذخیره‌ساز کلید-مقدار و فیلتر
بر اساس بازه تاریخ میلادی یا ماه و سال جلالی.
"""

__version__ = '1.0.0'
