import logging
import math
from pathlib import Path
import threading
from typing import List, Set

import requests
import yaml

from core.exchange import Exchange
from models import Level, reserved
from primitives import ExchangeError, InsufficientBalance, Side, StoredObject

logger = logging.getLogger(__name__)

# tolerance, in fractions of a step, for float error when stepping through rates
_EPSILON = 1e-9


class Book(StoredObject):
    """ Constant interval market maker for a single market.

    Maintains a ladder of limit orders spaced `interval * start` apart, from `high` down to `low`. One rung of the
    ladder, the midpoint, is never placed: every rung above it is quoted as a sell and every rung below it as a buy.
    Each rung is sized so that it is worth the same `quantity` of currency.

    The ladder is reconciled against the exchange by `tick()`:

        -   Rungs whose order is no longer open on the exchange are flagged as `filled`.
        -   When any rung became filled (and this is not the first tick), the midpoint is moved next to the filled
            rungs and filled rungs are flipped to the side of the midpoint they are now on.
        -   If balances cover every filled rung, each filled rung is placed again. Otherwise nothing is placed.
        -   The complete ladder is saved, whatever the outcome.

    Notes:
        `levels` is sorted by decreasing rate when built and is never re-sorted: indexes into it are how the midpoint
        is addressed.
    """
    __name__: str = 'Book'
    sequences = {'levels': Level}

    def __init__(self, market: str, high: float, low: float, start: float, interval: float, quantity: float,
                 exchange: Exchange, load: bool = True, **kwargs):
        """
        Args:
            market:
                Market symbol, as understood by `exchange`.
            high:
                Rate of the highest rung.
            low:
                Lowest rate a rung may have.
            start:
                Reference rate. Spacing between rungs is `interval * start` and the first rung at or below `start`
                becomes the initial midpoint.
            interval:
                Spacing between rungs as a fraction of `start`.
            quantity:
                Value of each rung, in currency.
            exchange:
                Platform to trade on.
            load:
                Flag to disable restoring a previously saved ladder for `market`.
            kwargs:
                Keyword Args that are passed to `StoredObject.__init__()`

        Raises:
            ValueError: if no valid ladder can be built from the given bounds.
        """
        super().__init__(exclude=('root',), **kwargs)
        self.market = market
        self.exchange = exchange
        self._lock = threading.Lock()
        self._reset(high, low, start, interval, quantity)

        restored = False
        if load:
            try:
                restored = self.load()
            except (OSError, yaml.YAMLError, AssertionError, KeyError, TypeError, ValueError) as e:
                logger.error("Could not restore book for %s, building a new one: %r", market, e)
                self._reset(high, low, start, interval, quantity)

        if restored:
            logger.info("Restored book for %s from %s", market, self._instance_dir)

        currency, asset = reserved(self.levels)
        logger.info("Market: %s, Currency: %f, Asset: %f, # orders: %d", market, currency, asset, len(self.levels))

    def _reset(self, high: float, low: float, start: float, interval: float, quantity: float) -> None:
        self.high = float(high)
        self.low = float(low)
        self.start = float(start)
        self.interval = float(interval)
        self.quantity = float(quantity)
        self.first_run = True
        self.levels: List[Level] = self.build(self.high, self.low, self.start, self.interval, self.quantity)

    @staticmethod
    def build(high: float, low: float, start: float, interval: float, quantity: float) -> List[Level]:
        """ Build a fresh ladder.

        Rungs are placed at `high`, `high - step`, `high - 2*step`, ... down to `low` where `step` is
        `interval * start`. The first rung at or below `start` is the midpoint, rungs before it are sells and rungs
        after it are buys. No rung has been placed yet, so every id is empty.

        Raises:
            ValueError: when `step` or `low` are not positive, or when `start` does not select a midpoint.

        Returns:
            Rungs by decreasing rate.
        """
        step = interval * start
        if step <= 0:
            raise ValueError(f"Spacing must be positive. Got interval={interval}, start={start}")
        if low <= 0 or high < low:
            raise ValueError(f"Invalid bounds: high={high}, low={low}")
        if not low <= start <= high:
            raise ValueError(f"start={start} is outside of [{low}, {high}]")

        count = int(math.floor((high - low) / step + _EPSILON))

        levels = []
        middle_found = False
        for i in range(count + 1):
            rate = high - i * step
            if middle_found:
                levels.append(Level('', Side.BUY, quantity / rate, rate))
            elif rate <= start + step * _EPSILON:
                levels.append(Level('', Side.SELL, quantity / rate, rate, middle=True))
                middle_found = True
            else:
                levels.append(Level('', Side.SELL, quantity / rate, rate))

        if not middle_found:
            raise ValueError(f"No rung between {high} and {low} is at or below start={start}")
        return levels

    @property
    def id(self) -> str:
        return f"book_{self.market}"

    @property
    def _instance_dir(self) -> Path:
        return Path(self.root, self.id)

    @property
    def middle(self) -> int:
        """ Index of the midpoint in `levels`. """
        for i, level in enumerate(self.levels):
            if level.middle:
                return i
        return 0

    def tick(self) -> None:
        """ Reconcile the ladder with the exchange.

        The ladder is saved on the way out, even when the cycle is aborted by an error. A tick that starts while
        another tick of the same book is still running does nothing.

        Raises:
            InsufficientBalance: when balances do not cover the rungs that need placing. Nothing was placed.
            ExchangeError: when the venue refused to report open orders, the ticker or balances.
            requests.RequestException: on transport failure.
        """
        if not self._lock.acquire(blocking=False):
            logger.warning("%s: previous tick still running. Skipping.", self.market)
            return

        try:
            self._tick()
            self.first_run = False
        finally:
            self._persist()
            self._lock.release()

    def _tick(self) -> None:
        open_orders = set(self.exchange.get_orders(self.market))

        filled = self._detect_fills(open_orders)
        if filled and not self.first_run:
            ticker = self.exchange.get_ticker(self.market)
            logger.info("%s: current price: %f", self.market, ticker.mid)

            orig = self.middle
            middle = self._relocate_middle()
            logger.info("%s: old middle: %d, new middle: %d", self.market, orig, middle)

            self._reassign_sides(middle)

        self._check_balance()
        self._place_filled()

    def _detect_fills(self, open_orders: Set[str]) -> int:
        """ Flag every rung whose order is not open anymore.

        A rung that was never placed has no id and is therefore always flagged. The id of a filled rung is cleared.

        Returns:
            Number of rungs that became filled.
        """
        count = 0
        for level in self.levels:
            if level.middle or level.id in open_orders:
                continue
            if not level.filled:
                level.filled = True
                count += 1
                logger.info("%s: filled %s at %f", self.market, level.side.name, level.rate)
            level.id = ''
        return count

    def _relocate_middle(self) -> int:
        """ Move the midpoint next to the filled rungs.

        Levels are scanned from the highest rate. The midpoint moves to the first filled rung above the current
        midpoint, or to the first filled rung followed by an unfilled rung, whichever comes first. When no rung
        matches, the midpoint does not move.

        Returns:
            Index of the new midpoint.
        """
        orig = self.middle
        self.levels[orig].middle = False

        middle = orig
        for i, level in enumerate(self.levels):
            if not level.filled:
                continue
            if i < orig or (i + 1 < len(self.levels) and not self.levels[i + 1].filled):
                middle = i
                break

        self.levels[middle].middle = True
        return middle

    def _reassign_sides(self, middle: int) -> None:
        """ Filled rungs at or above the midpoint become sells, filled rungs below it become buys. """
        for i, level in enumerate(self.levels):
            if level.filled and not level.middle:
                level.side = Side.SELL if i <= middle else Side.BUY

    @property
    def pending(self) -> List[Level]:
        """ Rungs waiting to be placed. """
        return [level for level in self.levels if level.filled and not level.middle]

    def _check_balance(self) -> None:
        """ Raise `InsufficientBalance` unless available balances cover every pending rung. """
        req_currency, req_asset = reserved(self.pending)
        asset, currency = self.exchange.split_market(self.market)

        asset_bal = self.exchange.get_balance(asset)
        if asset_bal < req_asset:
            raise InsufficientBalance('asset', asset, req_asset, asset_bal)

        currency_bal = self.exchange.get_balance(currency)
        if currency_bal < req_currency:
            raise InsufficientBalance('currency', currency, req_currency, currency_bal)

    def _place_filled(self) -> None:
        """ Place every pending rung. A rung that fails to place stays pending for the next tick. """
        for level in self.pending:
            try:
                uid = self.exchange.place_order(level.side, self.market, level.quantity, level.rate)
            except (ExchangeError, requests.RequestException) as e:
                logger.error("%s: could not place %s at %f: %r", self.market, level.side.name, level.rate, e)
                continue

            level.filled = False
            level.id = uid
            logger.info("%s: placed order: %s", self.market, level)

    def cancel_all(self) -> None:
        """ Cancel every resting order of the ladder.

        Cancelled rungs become pending without moving the midpoint, so the next tick places them again on the same
        side. Rungs that fail to cancel keep their id. The ladder is saved afterwards.
        """
        with self._lock:
            try:
                for level in self.levels:
                    if not level.id:
                        continue
                    try:
                        self.exchange.cancel_order(level.id)
                    except (ExchangeError, requests.RequestException) as e:
                        logger.error("%s: could not cancel %s: %r", self.market, level.id, e)
                        continue
                    logger.info("%s: cancelled %s", self.market, level.id)
                    level.id = ''
                    level.filled = True
            finally:
                self._persist()

    def _persist(self) -> None:
        try:
            self.save()
        except (OSError, yaml.YAMLError) as e:
            logger.error("%s: could not save book: %r", self.market, e)
