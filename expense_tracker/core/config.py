#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
ماژول مدیریت تنظیمات.

این ماژول مسئول بارگذاری تنظیمات از فایل .env و متغیرهای محیطی است.
"""

import os
import logging
from typing import Any

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# تنظیمات پیش‌فرض
DEFAULT_CONFIG = {
    'STORAGE_PATH': 'data/expenses.json',
    'LOG_LEVEL': 'INFO',
    'LOG_FILE': None,
    'DEFAULT_LANGUAGE': 'fa',
    'TIMEZONE': 'Asia/Tehran',
    'LOCALES_DIR': None,  # None یعنی فایل‌های ترجمه داخل بسته
}

ENV_KEYS = list(DEFAULT_CONFIG)


class Config:
    """
    کلاس مدیریت تنظیمات برنامه.
    مقادیر پیش‌فرض با فایل .env و سپس متغیرهای محیطی جایگزین می‌شوند.
    """
    _instance = None

    def __new__(cls, env_path: str = '.env'):
        """
        الگوی Singleton برای اطمینان از وجود تنها یک نمونه از تنظیمات

        Args:
            env_path: مسیر فایل .env
        """
        if cls._instance is None:
            cls._instance = super(Config, cls).__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, env_path: str = '.env'):
        if self._initialized:
            return

        self._config = DEFAULT_CONFIG.copy()
        self._env_path = env_path

        self._load_env_variables()

        self._initialized = True
        logger.debug("کلاس Config با موفقیت مقداردهی شد.")

    @classmethod
    def reset(cls) -> None:
        """
        حذف نمونه فعلی تا فراخوانی بعدی تنظیمات را دوباره بارگذاری کند.
        """
        cls._instance = None

    def _load_env_variables(self) -> None:
        """
        بارگذاری متغیرهای محیطی از فایل .env
        """
        if os.path.exists(self._env_path):
            load_dotenv(self._env_path)
            logger.info(f"فایل .env از مسیر {self._env_path} بارگذاری شد.")
        else:
            logger.debug(f"فایل .env در مسیر {self._env_path} یافت نشد.")

        for key in ENV_KEYS:
            value = os.getenv(key)
            if value is not None and value != '':
                self._config[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """
        دریافت مقدار یک تنظیم خاص با پشتیبانی از مقدار پیش‌فرض

        Args:
            key: کلید مورد نظر
            default: مقدار پیش‌فرض در صورت عدم وجود یا خالی بودن کلید

        Returns:
            Any: مقدار تنظیم یا مقدار پیش‌فرض
        """
        value = self._config.get(key)
        return default if value is None else value


def load_config(env_path: str = '.env') -> Config:
    """
    بارگذاری تنظیمات برنامه

    Args:
        env_path: مسیر فایل .env

    Returns:
        Config: نمونه تنظیمات
    """
    return Config(env_path)
