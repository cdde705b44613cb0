#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Rich-backed logger used as a mixin base across modular-rpc.

Author: Silan Hu (silan.hu@u.nus.edu)
"""

import logging
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def resolve_log_level(level: Union[str, int]) -> int:
    """
    Map a level name (case-insensitive) or numeric level to a logging level.
    """
    if isinstance(level, int):
        return level
    try:
        return _LEVELS[str(level).strip().lower()]
    except KeyError:
        raise ValueError("Unknown log level: {0}".format(level)) from None


class ModernLogger(logging.Logger):
    """
    Logger with a rich console handler.

    Classes inherit from it and call ``ModernLogger.__init__`` so they can log
    with ``self.info(...)`` / ``self.warning(...)`` directly.
    """

    def __init__(
        self,
        name: str = "modular_rpc",
        level: Union[str, int] = "info",
        console: Optional[Console] = None,
    ) -> None:
        logging.Logger.__init__(self, name, resolve_log_level(level))
        self.console = console or Console(stderr=True)
        handler = RichHandler(
            console=self.console,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        self.addHandler(handler)
        self.propagate = False
