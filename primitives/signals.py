from enum import IntEnum, unique


@unique
class Side(IntEnum):
    """ Enumerates order types as buy/sell

    Used to characterize a ladder level in a binary fashion. Values are persisted as plain integers.
    """
    BUY = 1
    SELL = -1
