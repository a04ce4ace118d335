#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
پکیج هسته: تنظیمات و ذخیره‌سازی.
"""

from expense_tracker.core.config import Config, load_config
from expense_tracker.core.storage import KeyValueStore, MemoryStore, JsonFileStore, StorageError

__all__ = [
    'Config',
    'load_config',
    'KeyValueStore',
    'MemoryStore',
    'JsonFileStore',
    'StorageError',
]
