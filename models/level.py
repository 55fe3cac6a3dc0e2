""" Ladder rung model and helpers for viewing a ladder as a table.

Notes:
    Levels live in a plain list on `Book` because their position in that list is their address. Whenever the ladder
    is analysed as a whole, the list is converted into a `DataFrame` via `Level.container()`, so columns always match
    the dataclass fields.
"""
from dataclasses import asdict, dataclass, fields
from typing import Iterable, Tuple

import pandas as pd

from primitives import Side


@dataclass
class Level:
    """ One rung of a ladder.

    Attributes:
        id:
            Order id on the exchange. Empty while the level is not resting on the book.
        side:
            Side the level is quoted on when placed.
        quantity:
            Amount of asset, sized so that `quantity * rate` is the same for every level.
        rate:
            Price in currency per unit of asset.
        filled:
            Level is believed to have executed (its order is absent from the exchange) and awaits replacement.
        middle:
            Level is the midpoint marker. The midpoint is never placed.
    """
    id: str
    side: Side
    quantity: float
    rate: float
    filled: bool = False
    middle: bool = False

    @property
    def cost(self) -> float:
        return self.quantity * self.rate

    def to_dict(self) -> dict:
        data = asdict(self)
        data['side'] = int(self.side)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> 'Level':
        return cls(str(data['id'] or ''), Side(data['side']), float(data['quantity']), float(data['rate']),
                   bool(data['filled']), bool(data['middle']))

    @classmethod
    def container(cls, levels: Iterable['Level'] = ()) -> pd.DataFrame:
        """ Produce a `DataFrame` with one row per level and dataclass attributes as columns. """
        return pd.DataFrame([asdict(i) for i in levels], columns=[i.name for i in fields(cls)])


def reserved(levels: Iterable[Level]) -> Tuple[float, float]:
    """ Total currency committed by buy levels and total asset committed by sell levels.

    The midpoint is never counted.

    Returns:
        Tuple of (currency, asset).
    """
    df = Level.container(levels)
    df = df[~df['middle'].astype(bool)]
    buys = df['side'] == Side.BUY

    currency = (df.loc[buys, 'quantity'] * df.loc[buys, 'rate']).sum()
    asset = df.loc[~buys, 'quantity'].sum()
    return float(currency), float(asset)
