""" Read the bot configuration and build one `Book` per configured market.

The configuration is a YAML file:

    exchange: poloniex
    apikey: "..."
    secret: "..."
    period: 30
    timeout: 10
    markets:
      - {market: BTC_VTC, high: 0.0002, low: 0.0001, start: 0.00015, interval: 0.01, quantity: 0.001}

`period` (seconds between ticks) and `timeout` (seconds to wait on an HTTP request) are optional.
"""
from dataclasses import dataclass, fields
from typing import Any, List, Mapping, Tuple

from yaml import safe_load

from core import connect, Exchange
from misc import CONFIG_F
from strategies import Book

DEFAULT_PERIOD = 30.0
DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class MarketConfig:
    market: str
    high: float
    low: float
    start: float
    interval: float
    quantity: float

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'MarketConfig':
        values = {}
        for f in fields(cls):
            value = _require(data, f.name)
            values[f.name] = str(value) if f.type is str else _number(f.name, value)
        return cls(**values)


@dataclass(frozen=True)
class VenueConfig:
    exchange: str
    apikey: str
    secret: str
    markets: Tuple[MarketConfig, ...]
    period: float = DEFAULT_PERIOD
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'VenueConfig':
        if not isinstance(data, Mapping):
            raise ValueError("Configuration must be a mapping")

        markets = _require(data, 'markets')
        if not isinstance(markets, list):
            raise ValueError("'markets' must be a list")

        return cls(exchange=str(_require(data, 'exchange')),
                   apikey=str(_require(data, 'apikey')),
                   secret=str(_require(data, 'secret')),
                   markets=tuple(MarketConfig.from_dict(i) for i in markets),
                   period=_number('period', data.get('period', DEFAULT_PERIOD)),
                   timeout=_number('timeout', data.get('timeout', DEFAULT_TIMEOUT)))

    def connect(self) -> Exchange:
        return connect(self.exchange, self.apikey, self.secret, timeout=self.timeout)


def _require(data: Mapping[str, Any], key: str) -> Any:
    if not isinstance(data, Mapping) or data.get(key) is None:
        raise ValueError(f"Missing configuration key '{key}'")
    return data[key]


def _number(key: str, value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Configuration key '{key}' must be a number. Got {value!r}") from None


def read(fn: str = CONFIG_F) -> VenueConfig:
    with open(fn, 'r') as f:
        return VenueConfig.from_dict(safe_load(f))


def load(fn: str = CONFIG_F, **kwargs) -> Tuple[VenueConfig, List[Book]]:
    """ Read configuration file `fn` and build the exchange and every book.

    Args:
        fn:
            Path of the configuration file.
        kwargs:
            Passed down to `Book.__init__()` (eg: `root`).

    Raises:
        ValueError: if the configuration is invalid.
        OSError: if `fn` cannot be read.
    """
    conf = read(fn)
    exchange = conf.connect()

    books = []
    for m in conf.markets:
        books.append(Book(m.market, m.high, m.low, m.start, m.interval, m.quantity, exchange, **kwargs))
    return conf, books
