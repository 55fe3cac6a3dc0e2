from typing import Any

import requests

from core.api_proto import APIPrototype, venue_error


class PoloniexProto(APIPrototype):
    """ Prototype common interface for the Poloniex API.

    Notes:
        Private commands are form encoded POST requests to `/tradingApi`. The body is signed and the signature sent
        alongside the API key in the `Sign` and `Key` headers. Failures are reported as an `error` key in the
        response body.

    References:
        https://docs.poloniex.com/#http-api
    """

    name = 'poloniex'
    BASE_URL = "https://poloniex.com"

    def post(self, command: str, data: dict = None) -> Any:
        """ Sign and deliver a trading API command.

        Args:
            command:
                Trading API command (eg: `returnBalances`).
            data:
                Remaining parameters of the command.

        Raises:
            ExchangeError: when the response carries an `error`.

        Returns:
            Decoded JSON body.
        """
        payload = {'nonce': self._nonce(), 'command': command}
        if data:
            payload.update(data)

        request = requests.Request('POST', self.BASE_URL + "/tradingApi", data=payload).prepare()
        request.headers['Key'] = self.api_key
        request.headers['Sign'] = self.sign(request.body)
        request.headers['Accept'] = 'application/json'

        body = self.send(request).json()
        if isinstance(body, dict) and body.get('error'):
            raise venue_error(str(body['error']))
        return body
