""" Signing and transport for each supported platform API. """
from core.proto.poloniex import PoloniexProto
from core.proto.bittrex import BittrexProto
