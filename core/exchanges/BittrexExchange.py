from typing import List

from core.api_proto import format_number, parsing
from core.exchange import Exchange
from core.proto.bittrex import BittrexProto
from models import Ticker
from primitives import PostOnlyFailed, Side


class BittrexExchange(BittrexProto, Exchange):
    """ `Exchange` backed by the Bittrex v1.1 API.

    Market symbols are written `CURRENCY-ASSET` (eg: `BTC-LTC`).

    Notes:
        v1.1 limit orders have no post-only option. Before an order is sent, it is checked against the current
        ticker and refused locally if it would cross the book. The check is subject to the ticker moving between
        both requests.
    """
    _ORDER_ID_FIELD = 'OrderUuid'

    def get_ticker(self, market: str) -> Ticker:
        result = self.request("/public/getticker", {'market': market})
        with parsing('getticker'):
            return Ticker(float(result['Bid']), float(result['Ask']), float(result['Last']))

    def get_orders(self, market: str) -> List[str]:
        result = self.request("/market/getopenorders", {'market': market}, private=True)
        with parsing('getopenorders'):
            return [str(i[self._ORDER_ID_FIELD]) for i in result]

    def place_order(self, side: Side, market: str, quantity: float, rate: float) -> str:
        self._check_post_only(side, market, rate)

        endpoint = "/market/buylimit" if side == Side.BUY else "/market/selllimit"
        result = self.request(endpoint, self._order_params(market, quantity, rate), private=True)
        with parsing(endpoint):
            return str(result['uuid'])

    def cancel_order(self, uid: str) -> None:
        self.request("/market/cancel", {'uuid': uid}, private=True)

    def get_balance(self, asset: str) -> float:
        result = self.request("/account/getbalances", private=True)
        with parsing('getbalances'):
            for balance in result:
                if balance['Currency'] == asset:
                    return float(balance['Available'] or 0)
        return 0.0

    def _order_params(self, market: str, quantity: float, rate: float) -> dict:
        return {'market': market, 'quantity': format_number(quantity), 'rate': format_number(rate)}

    def _check_post_only(self, side: Side, market: str, rate: float) -> None:
        ticker = self.get_ticker(market)
        if side == Side.BUY and rate >= ticker.ask:
            raise PostOnlyFailed(f"Buy at {rate} would trade against ask {ticker.ask}")
        if side == Side.SELL and rate <= ticker.bid:
            raise PostOnlyFailed(f"Sell at {rate} would trade against bid {ticker.bid}")
