""" Stores specialized `Exchange` implementations for various trading platforms.

All files contain classes which are inherited from `Exchange`. Use `connect()` to build one by platform name.
"""
from typing import Dict, Type

from core.exchange import Exchange
from core.exchanges.PoloniexExchange import PoloniexExchange
from core.exchanges.BittrexExchange import BittrexExchange
from core.exchanges.VertpigExchange import VertpigExchange

EXCHANGES: Dict[str, Type[Exchange]] = {
    'poloniex': PoloniexExchange,
    'bittrex': BittrexExchange,
    'vertpig': VertpigExchange,
}


def connect(name: str, api_key: str, api_secret: str, **kwargs) -> Exchange:
    """ Build the `Exchange` for platform `name`.

    Args:
        name:
            Platform name, case insensitive. One of the keys of `EXCHANGES`.
        kwargs:
            Passed down to the exchange (eg: `timeout`).

    Raises:
        ValueError: if `name` is not a supported platform.
    """
    try:
        _cls = EXCHANGES[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown exchange '{name}'. Expected one of: {', '.join(EXCHANGES)}") from None
    return _cls(api_key, api_secret, **kwargs)
