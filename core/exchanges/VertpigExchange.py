from core.api_proto import format_number
from core.exchanges.BittrexExchange import BittrexExchange
from primitives import Side


class VertpigExchange(BittrexExchange):
    """ `Exchange` backed by the Vertpig API, a clone of Bittrex v1.1.

    Differs from Bittrex in that numbers are quoted as strings, open orders are keyed `OrderUUID`, and limit
    orders accept `postonly=1` so crossing orders are refused by the venue itself.
    """
    name = 'vertpig'
    BASE_URL = "https://www.vertpig.com/api/v1.1"
    _ORDER_ID_FIELD = 'OrderUUID'

    def _order_params(self, market: str, quantity: float, rate: float) -> dict:
        params = super()._order_params(market, quantity, rate)
        params['postonly'] = 1
        return params

    def _check_post_only(self, side: Side, market: str, rate: float) -> None:
        pass
