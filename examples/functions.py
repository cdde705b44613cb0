#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Functions shared by the example servers.

Author: Silan Hu (silan.hu@u.nus.edu)
"""

import asyncio

from modular_rpc import context


def add(x, y):
    return x + y


async def slow_greeting(name):
    await asyncio.sleep(0.1)
    return {"hi": name}


@context(lambda ctx: [ctx.host, ctx.headers.get("user-agent")])
def whoami(host, user_agent):
    return {"host": host, "user_agent": user_agent}


FUNCTIONS = {
    "add": add,
    "slow_greeting": slow_greeting,
    "whoami": whoami,
}
