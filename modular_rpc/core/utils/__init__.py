#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Utility exports for modular-rpc core.

Author: Silan Hu (silan.hu@u.nus.edu)
"""

from .logger import ModernLogger, resolve_log_level
from .exceptions import *  # noqa: F401,F403
from .exceptions import ExceptionFormatter, ExceptionTranslator
from .async_helpers import AsyncExecutionHelper

format_exception_summary = ExceptionFormatter.format_exception_summary

__all__ = [
    "ModernLogger",
    "resolve_log_level",
    "AsyncExecutionHelper",
    "ExceptionFormatter",
    "ExceptionTranslator",
    "format_exception_summary",
]
