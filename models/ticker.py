from dataclasses import dataclass


@dataclass
class Ticker:
    """ Current top of book for a market.

    `bid` is the highest buy price, `ask` is the lowest sell price and `last` is the price of the last trade.
    """
    bid: float
    ask: float
    last: float

    @property
    def mid(self) -> float:
        return (self.ask + self.bid) / 2
