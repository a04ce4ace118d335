#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
فایل اصلی برنامه.

راه‌اندازی تنظیمات، لاگ، منطقه زمانی و ذخیره‌ساز و ساخت صفحه هزینه‌ها.
اجرای مستقیم، گزارش متنی هزینه‌های فیلتر شده را چاپ می‌کند.
"""

import sys
import asyncio
import logging
import argparse
from typing import List, Optional

from expense_tracker.accounting.ledger import FilterType
from expense_tracker.core.config import load_config
from expense_tracker.core.storage import JsonFileStore
from expense_tracker.handlers.expense_screen import ExpenseScreen
from expense_tracker.utils.localization import get_message, load_languages, set_language, DEFAULT_LOCALES_DIR
from expense_tracker.utils.logger import level_from_name, setup_logger
from expense_tracker.utils.timezone_utils import setup_timezone

logger = logging.getLogger(__name__)


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    تجزیه آرگومان‌های خط فرمان

    بازگشت:
        argparse.Namespace: آرگومان‌های تجزیه شده
    """
    parser = argparse.ArgumentParser(description='گزارش هزینه‌های شخصی')

    parser.add_argument('--config', type=str, default='.env', help='مسیر فایل تنظیمات')
    parser.add_argument('--storage', type=str, default=None, help='مسیر فایل ذخیره‌سازی')
    parser.add_argument('--log', type=str, default=None, help='مسیر فایل لاگ')
    parser.add_argument('--debug', action='store_true', help='فعال‌سازی حالت دیباگ')
    parser.add_argument('--from', dest='start_date', type=str, default=None, help='ابتدای بازه (YYYY-MM-DD)')
    parser.add_argument('--to', dest='end_date', type=str, default=None, help='انتهای بازه (YYYY-MM-DD)')
    parser.add_argument('--month', type=str, default=None, help='ماه جلالی')
    parser.add_argument('--year', type=str, default=None, help='سال جلالی')
    parser.add_argument('--category', type=str, default=None, help='کلید دسته‌بندی')

    return parser.parse_args(argv)


async def bootstrap(env_path: str = '.env', storage_path: Optional[str] = None,
                    log_file: Optional[str] = None, debug: bool = False) -> ExpenseScreen:
    """
    راه‌اندازی اجزای برنامه و بارگذاری صفحه هزینه‌ها

    پارامترها:
        env_path: مسیر فایل .env
        storage_path: مسیر فایل ذخیره‌سازی (جایگزین تنظیمات)
        log_file: مسیر فایل لاگ (جایگزین تنظیمات)
        debug: فعال‌سازی سطح DEBUG

    بازگشت:
        ExpenseScreen: صفحه آماده استفاده
    """
    config = load_config(env_path)

    level = logging.DEBUG if debug else level_from_name(config.get('LOG_LEVEL'))
    setup_logger(level, log_file or config.get('LOG_FILE'))

    try:
        setup_timezone(config.get('TIMEZONE'))
    except ValueError:
        logger.warning("منطقه زمانی پیش‌فرض استفاده می‌شود.")

    load_languages(config.get('LOCALES_DIR', DEFAULT_LOCALES_DIR))
    language = config.get('DEFAULT_LANGUAGE', 'fa')
    try:
        set_language(language)
    except ValueError:
        logger.warning(f"زبان '{language}' در دسترس نیست.")
        language = None

    store = JsonFileStore(storage_path or config.get('STORAGE_PATH'))
    screen = ExpenseScreen(store, language)
    await screen.start()

    return screen


async def run_report(args: argparse.Namespace) -> int:
    screen = await bootstrap(args.config, args.storage, args.log, args.debug)
    if screen.error_message:
        print(screen.error_message, file=sys.stderr)
        return 1

    if args.month or args.year:
        screen.filter_type = FilterType.MONTH_YEAR
        screen.filter_month = args.month or ''
        screen.filter_year = args.year or ''
    else:
        screen.filter_type = FilterType.DATE_RANGE
        screen.filter_start_date = args.start_date or ''
        screen.filter_end_date = args.end_date or ''
    screen.filter_category = args.category or ''
    screen.apply_filter()

    rows = screen.rows()
    if not rows:
        print(get_message('label.empty_list', screen.language))
    for row in rows:
        print(row.as_text())

    print(f"{get_message('label.total', screen.language)}: {screen.formatted_total}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    تابع اصلی برنامه
    """
    args = parse_arguments(argv)
    return asyncio.run(run_report(args))


if __name__ == "__main__":
    sys.exit(main())
