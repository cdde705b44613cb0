#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Standard-library WSGI server exposing a single function.

With one registered function the call envelope needs no name::

    curl -X POST localhost:8080 -d '{"args": [2, 3]}'

Author: Silan Hu (silan.hu@u.nus.edu)
"""

from wsgiref.simple_server import make_server

from modular_rpc import modular


def add(x, y):
    return x + y


application = modular({"add": add}, adapter="wsgi")


if __name__ == "__main__":
    with make_server("", 8080, application) as server:
        server.serve_forever()
