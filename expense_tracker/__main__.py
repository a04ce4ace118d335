#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
اجرای گزارش هزینه‌ها با python -m expense_tracker
"""

import sys

from expense_tracker.main import main

sys.exit(main())
