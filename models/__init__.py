""" The `models` contains ladder and market data as data-types.

The contents of this module are meant to aid in the interactions between both the `core` and `strategies` modules.
"""
from models.level import Level, reserved
from models.ticker import Ticker
