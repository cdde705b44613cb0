#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Starlette server exposing the example functions on ``POST /rpc``.

Run with ``uv run uvicorn examples.starlette_server:app``, then::

    curl -X POST localhost:8000/rpc -d '{"name": "add", "args": [2, 3]}'

Author: Silan Hu (silan.hu@u.nus.edu)
"""

from starlette.applications import Starlette
from starlette.routing import Route

from modular_rpc import modular

from .functions import FUNCTIONS

app = Starlette(routes=[Route("/rpc", modular(FUNCTIONS, adapter="starlette"), methods=["POST"])])
