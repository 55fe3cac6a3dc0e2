""" Strategies encapsulate the computational and qualitative infrastructure.

    A strategy decides which orders should rest on an exchange and reconciles them with what the exchange reports.
    `Book` is a constant interval market maker: one instance manages the ladder of a single market.
"""
from strategies.book import Book
