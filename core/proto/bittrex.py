from typing import Any

import requests

from core.api_proto import APIPrototype, venue_error
from primitives import ExchangeError, ReasonCode


class BittrexProto(APIPrototype):
    """ Prototype common interface for the Bittrex v1.1 API and its clones.

    Notes:
        Every call is a GET request. Private calls carry `apikey` and `nonce` query parameters and the complete
        request URL is signed into the `apisign` header. Responses are wrapped in a `{success, message, result}`
        envelope.

    References:
        https://bittrex.github.io/api/v1-1
    """

    name = 'bittrex'
    BASE_URL = "https://bittrex.com/api/v1.1"

    def request(self, endpoint: str, params: dict = None, private: bool = False) -> Any:
        """ Send a request and unwrap the response envelope.

        Raises:
            ExchangeError: when `success` is not set, or the body is not an envelope.

        Returns:
            Contents of `result`.
        """
        _params = {}
        if private:
            _params.update({'apikey': self.api_key, 'nonce': self._nonce()})
        if params:
            _params.update(params)

        request = requests.Request('GET', self.BASE_URL + endpoint, params=_params).prepare()
        if private:
            request.headers['apisign'] = self.sign(request.url)

        body = self.send(request).json()
        if not isinstance(body, dict):
            raise ExchangeError(f"Unexpected response from {endpoint}: {body!r}", ReasonCode.PARSE_ERROR)
        if body.get('success') is not True:
            raise venue_error(str(body.get('message') or 'request failed'))
        return body.get('result')
