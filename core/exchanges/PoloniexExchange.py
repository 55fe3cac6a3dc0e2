from typing import List

from core.api_proto import format_number, parsing
from core.exchange import Exchange
from core.proto.poloniex import PoloniexProto
from models import Ticker
from primitives import ExchangeError, ReasonCode, Side


class PoloniexExchange(PoloniexProto, Exchange):
    """ `Exchange` backed by the Poloniex public and trading APIs.

    Market symbols are written `CURRENCY_ASSET` (eg: `BTC_VTC`).
    """
    separator = '_'

    def get_ticker(self, market: str) -> Ticker:
        """ Fetch the ticker of `market`.

        Notes:
            `returnTicker` returns every market at once and quotes all numbers as strings.
        """
        body = self.get("/public", params={'command': 'returnTicker'}).json()
        with parsing('returnTicker'):
            entry = body.get(market)
            if entry is None:
                raise ExchangeError(f"Unknown market {market}", ReasonCode.PARSE_ERROR)
            return Ticker(float(entry['highestBid']), float(entry['lowestAsk']), float(entry['last']))

    def get_orders(self, market: str) -> List[str]:
        body = self.post('returnOpenOrders', {'currencyPair': market})
        with parsing('returnOpenOrders'):
            return [str(i['orderNumber']) for i in body]

    def place_order(self, side: Side, market: str, quantity: float, rate: float) -> str:
        data = {
            'currencyPair': market,
            'rate': format_number(rate),
            'amount': format_number(quantity),
            'postOnly': 1,
        }
        command = 'buy' if side == Side.BUY else 'sell'

        body = self.post(command, data)
        with parsing(command):
            return str(body['orderNumber'])

    def cancel_order(self, uid: str) -> None:
        self.post('cancelOrder', {'orderNumber': uid})

    def get_balance(self, asset: str) -> float:
        body = self.post('returnBalances')
        with parsing('returnBalances'):
            return float(body.get(asset, 0))
