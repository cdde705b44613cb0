#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Flask server exposing the example functions on ``/rpc``.

GET requests call through the query string::

    curl 'localhost:5000/rpc?name=add&args=%5B2,3%5D'

Author: Silan Hu (silan.hu@u.nus.edu)
"""

from flask import Flask

from modular_rpc import create_config, modular

from .functions import FUNCTIONS

app = Flask(__name__)
app.add_url_rule(
    "/rpc",
    endpoint="rpc",
    view_func=modular(FUNCTIONS, adapter="flask", config=create_config(log_level="info")),
    methods=["GET", "POST"],
)


if __name__ == "__main__":
    app.run(port=5000)
