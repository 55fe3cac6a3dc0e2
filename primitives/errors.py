""" Exceptions raised by exchange adapters and the ladder engine.

Transport failures (`requests.RequestException`) and undecodable bodies (`ValueError`) are never wrapped; they
propagate as-is. Everything the venue itself reports is an `ExchangeError`.
"""
from primitives.reason_codes import ReasonCode


class ExchangeError(Exception):
    """ Error reported by a venue, or a response that could not be interpreted.

    Attributes:
        reason:
            `ReasonCode` classifying the failure.
    """
    def __init__(self, message: str, reason: ReasonCode = ReasonCode.MARKET_REJECTED):
        super().__init__(message)
        self.reason = reason


class PostOnlyFailed(ExchangeError):
    """ A maker order was refused because it would have traded immediately. """
    def __init__(self, message: str):
        super().__init__(message, ReasonCode.POST_ONLY_FAILED)


class InsufficientBalance(ExchangeError):
    """ Available balance does not cover the orders a `Book` wants to place.

    Not retryable until balances change externally.
    """
    def __init__(self, kind: str, asset: str, wanted: float, have: float):
        msg = f"Not enough {kind} to place orders. Wanted: {asset}{wanted:f}, Have: {asset}{have:f}"
        super().__init__(msg, ReasonCode.INSUFFICIENT_BALANCE)
        self.kind = kind
        self.asset = asset
        self.wanted = wanted
        self.have = have
