""" run.py
Main file which loads every configured `Book`, sets up logging, and runs scheduler.
"""
import argparse
from datetime import datetime
import logging
import signal
import sys
from typing import List

from apscheduler.schedulers.blocking import BlockingScheduler
import requests
import yaml

import config
from misc import CONFIG_F, LOG_FN, VERSION
from primitives import ExchangeError
from strategies import Book


def run_tick(book: Book) -> None:
    """ Scheduler job: one reconciliation cycle of `book`. Failures are logged and retried on the next cycle. """
    try:
        book.tick()
    except (ExchangeError, requests.RequestException) as e:
        logging.error("%s: %s", book.market, e)


def schedule(scheduler: BlockingScheduler, books: List[Book], period: float) -> None:
    """ Add one independent job per book. A job never overlaps with itself. """
    for book in books:
        scheduler.add_job(run_tick, 'interval', args=(book,), seconds=period, id=book.id, name=book.market,
                          max_instances=1, coalesce=True, next_run_time=datetime.now())


def _terminate(signum, frame):
    raise SystemExit(0)


def main(argv: List[str] = None) -> int:
    parser = argparse.ArgumentParser(description="Constant interval market maker")
    parser.add_argument('config', nargs='?', default=CONFIG_F, help="path of the configuration file")
    parser.add_argument('--log', default=LOG_FN, help="path of the log file")
    parser.add_argument('--cancel', action='store_true', help="cancel every ladder order and exit")
    args = parser.parse_args(argv)

    logging.basicConfig(filename=args.log, level=logging.INFO,
                        format='%(asctime)s|%(levelname)s|%(message)s', datefmt='%m/%d/%Y %H:%M:%S')
    logging.getLogger('apscheduler').setLevel(logging.ERROR)
    logging.info("mmbot v%s", VERSION)

    try:
        conf, books = config.load(args.config)
    except (OSError, ValueError, yaml.YAMLError) as e:
        logging.error("Could not load configuration from %s: %s", args.config, e)
        return 1

    if args.cancel:
        for book in books:
            book.cancel_all()
        return 0

    scheduler = BlockingScheduler()
    schedule(scheduler, books, conf.period)
    signal.signal(signal.SIGTERM, _terminate)
    try:
        logging.info("Starting %d book(s) on %s every %ss", len(books), conf.exchange, conf.period)
        scheduler.start()
    except (KeyboardInterrupt, SystemExit):
        logging.info("Shutting Down")
        scheduler.shutdown()
    return 0


def cli() -> None:
    sys.exit(main())


if __name__ == '__main__':
    cli()
