from abc import ABC
from contextlib import contextmanager
from decimal import Decimal
import hashlib
import hmac
import time

import requests

from primitives import ExchangeError, PostOnlyFailed, ReasonCode


@contextmanager
def parsing(what: str):
    """ Re-raise field access and conversion errors on a decoded body as `ExchangeError`. """
    try:
        yield
    except (AttributeError, KeyError, IndexError, TypeError, ValueError) as e:
        raise ExchangeError(f"Malformed {what} response: {e!r}", ReasonCode.PARSE_ERROR) from e


def format_number(value: float) -> str:
    """ Render a float in positional notation (eg: `1e-05` becomes `0.00001`). """
    return format(Decimal(repr(float(value))), 'f')


def venue_error(message: str) -> ExchangeError:
    """ Convert an error message reported by a venue into the matching exception. """
    normalized = message.upper().replace('-', '_').replace(' ', '_')
    if 'POST_ONLY' in normalized:
        return PostOnlyFailed(message)
    return ExchangeError(message)


class APIPrototype(ABC):
    """ Provide a common interface to interact with platform API's.

    Credentials and the HTTP session belong to the instance, so several accounts on the same platform can be used
    side by side.

    Members:
        name:
            name of API/Platform.
        BASE_URL:
            URL to which to send endpoint requests. Used for generating API URLs.
        timeout:
            Seconds to wait for a response before `requests.Timeout` is raised.
    """

    name: str
    BASE_URL: str

    def __init__(self, api_key: str, api_secret: str, *args, timeout: float = 10,
                 session: requests.Session = None, **kwargs):
        super(APIPrototype, self).__init__()
        self.api_key = api_key
        self.api_secret = api_secret.encode()
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()

    @staticmethod
    def _nonce() -> int:
        return time.time_ns()

    def sign(self, message: str) -> str:
        """ Hex encoded HMAC-SHA512 of `message` keyed with the API secret. """
        return hmac.new(self.api_secret, message.encode(), hashlib.sha512).hexdigest()

    def get(self, endpoint: str, **kwargs) -> requests.Response:
        """ Encapsulate and send an unsigned HTTP GET request to `endpoint`.

        Args:
            endpoint:
                Endpoint URL for request. Appended to `BASE_URL`.
            kwargs:
                Gets passed to `requests.Session.get()`
        """
        return self.session.get(self.BASE_URL + endpoint, timeout=self.timeout, **kwargs)

    def send(self, request: requests.PreparedRequest) -> requests.Response:
        return self.session.send(request, timeout=self.timeout)
