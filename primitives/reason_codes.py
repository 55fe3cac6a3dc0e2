from enum import IntEnum


class ReasonCode(IntEnum):
    """ Classifies why an exchange interaction did not succeed.

    Attached to every `ExchangeError`. Like the errors themselves, a reason code is always falsy.
    """
    UNKNOWN = 0
    INSUFFICIENT_BALANCE = 1
    MARKET_REJECTED = 2
    POST_ONLY_FAILED = 3
    PARSE_ERROR = 4

    def __bool__(self):
        return False
