from abc import ABC, abstractmethod
from typing import List, Tuple

from models import Ticker
from primitives import Side


class Exchange(ABC):
    """ Core infrastructure encapsulating exchange functionality.

    Abstracts the ability to interact with one venue by placing, cancelling and querying orders. `Book` only ever
    talks to this interface and never inspects which venue it is bound to.

    Notes:
        Every method either returns a value or raises. Venue-reported failures are raised as `ExchangeError`,
        transport failures as `requests.RequestException`.
    """
    name: str
    separator: str = '-'
    """ Character separating currency and asset in market symbols (eg: `BTC-VTC`). """

    @abstractmethod
    def place_order(self, side: Side, market: str, quantity: float, rate: float) -> str:
        """ Place a maker-only limit order.

        An order that would trade immediately must not be accepted; `PostOnlyFailed` is raised instead.

        Returns:
            Id of the newly placed order. Ids are unique to every order.
        """
        pass

    @abstractmethod
    def get_orders(self, market: str) -> List[str]:
        """ Ids of the orders currently open in `market`. """
        pass

    @abstractmethod
    def cancel_order(self, uid: str) -> None:
        pass

    @abstractmethod
    def get_ticker(self, market: str) -> Ticker:
        pass

    @abstractmethod
    def get_balance(self, asset: str) -> float:
        """ Available balance of `asset`, excluding funds reserved by open orders.

        Returns `0.0` when the venue does not report `asset` at all.
        """
        pass

    def split_market(self, market: str) -> Tuple[str, str]:
        """ Split a market symbol into its traded asset and the currency it is priced in.

        Symbols are written currency first (eg: `BTC-VTC` trades VTC priced in BTC). Symbols without `separator`
        are assumed to be written asset first with a three letter asset (eg: `VTCBTC`).

        Returns:
            Tuple of (asset, currency).
        """
        if self.separator in market:
            currency, asset = market.split(self.separator, 1)
            return asset, currency
        return market[:3], market[3:]
