#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
ماژول ذخیره‌سازی کلید-مقدار.

دفتر هزینه داده‌های خود را به صورت رشته‌های JSON زیر کلیدهای ثابت
در یک ذخیره‌ساز کلید-مقدار ناهمگام نگه می‌دارد. این ماژول قرارداد
ذخیره‌ساز و دو پیاده‌سازی حافظه‌ای و فایلی آن را فراهم می‌کند.
"""

import os
import json
import asyncio
import logging
import tempfile
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """
    خطای خواندن یا نوشتن در ذخیره‌ساز.
    """

    def __init__(self, message: str, key: Optional[str] = None, operation: Optional[str] = None):
        """
        مقداردهی اولیه خطای ذخیره‌ساز.

        پارامترها:
            message: پیام خطا
            key: کلیدی که عملیات روی آن انجام می‌شد (اختیاری)
            operation: نوع عملیات (get یا set)
        """
        self.message = message
        self.key = key
        self.operation = operation

        super().__init__(self.message)

    def __str__(self) -> str:
        result = f"StorageError: {self.message}"

        if self.operation or self.key:
            result += f" ({self.operation or '?'} {self.key or ''})".rstrip()

        return result


class KeyValueStore:
    """
    کلاس پایه ذخیره‌ساز کلید-مقدار ناهمگام.
    """

    async def get(self, key: str) -> Optional[str]:
        """
        خواندن مقدار یک کلید.

        بازگشت:
            Optional[str]: مقدار ذخیره شده یا None اگر کلید وجود نداشته باشد

        استثناها:
            StorageError: در صورت شکست خواندن
        """
        raise NotImplementedError("این متد باید در کلاس‌های فرزند پیاده‌سازی شود")

    async def set(self, key: str, value: str) -> None:
        """
        نوشتن مقدار یک کلید.

        استثناها:
            StorageError: در صورت شکست نوشتن
        """
        raise NotImplementedError("این متد باید در کلاس‌های فرزند پیاده‌سازی شود")


class MemoryStore(KeyValueStore):
    """
    ذخیره‌ساز درون حافظه، برای تست‌ها و اجرای بدون دیسک.
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise StorageError("مقدار باید رشته باشد", key, 'set')
        self.data[key] = value


class JsonFileStore(KeyValueStore):
    """
    ذخیره‌ساز مبتنی بر یک فایل JSON.

    همه کلیدها در یک شیء JSON به شکل {کلید: مقدار رشته‌ای} نگهداری
    می‌شوند. خواندن و نوشتن فایل در executor پیش‌فرض حلقه رویداد انجام
    می‌شود و نوشتن‌ها با یک قفل ناهمگام پشت سر هم اجرا می‌شوند.
    """

    def __init__(self, file_path: str):
        """
        مقداردهی اولیه ذخیره‌ساز فایلی.

        پارامترها:
            file_path: مسیر فایل JSON
        """
        self.file_path = file_path
        self._lock = asyncio.Lock()

        logger.info(f"ذخیره‌ساز فایلی در مسیر '{file_path}' آماده شد.")

    def _read_all(self) -> Dict[str, str]:
        if not os.path.exists(self.file_path):
            return {}

        with open(self.file_path, 'r', encoding='utf-8') as f:
            content = f.read()

        if not content.strip():
            return {}

        data = json.loads(content)
        if not isinstance(data, dict):
            raise ValueError("محتوای فایل ذخیره‌ساز یک شیء JSON نیست")

        return data

    def _write_all(self, data: Dict[str, str]) -> None:
        directory = os.path.dirname(os.path.abspath(self.file_path))
        os.makedirs(directory, exist_ok=True)

        # نوشتن در فایل موقت و جایگزینی اتمیک
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix='.store-', suffix='.tmp')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.file_path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def _set_sync(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    async def get(self, key: str) -> Optional[str]:
        loop = asyncio.get_running_loop()
        try:
            data = await loop.run_in_executor(None, self._read_all)
        except (OSError, ValueError) as e:
            logger.error(f"خطا در خواندن کلید '{key}' از {self.file_path}: {e}")
            raise StorageError(f"خواندن از ذخیره‌ساز ناموفق بود: {e}", key, 'get') from e

        value = data.get(key)
        if value is not None and not isinstance(value, str):
            # مقادیر غیر رشته‌ای (ویرایش دستی فایل) به JSON برگردانده می‌شوند
            value = json.dumps(value, ensure_ascii=False)

        return value

    async def set(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise StorageError("مقدار باید رشته باشد", key, 'set')

        loop = asyncio.get_running_loop()
        async with self._lock:
            try:
                await loop.run_in_executor(None, self._set_sync, key, value)
            except (OSError, ValueError) as e:
                logger.error(f"خطا در نوشتن کلید '{key}' در {self.file_path}: {e}")
                raise StorageError(f"نوشتن در ذخیره‌ساز ناموفق بود: {e}", key, 'set') from e

        logger.debug(f"کلید '{key}' در {self.file_path} ذخیره شد.")
