""" Abstracts core infrastructure of interacting with trading platforms.

Encapsulates the ability to query tickers and balances, and to place and cancel orders. `Exchange` is the only
interface the ladder engine depends on; `core.exchanges` holds one implementation per platform.
"""
from core.exchange import Exchange
from core.exchanges import connect, EXCHANGES
