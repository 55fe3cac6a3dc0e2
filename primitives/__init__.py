from primitives.signals import Side
from primitives.reason_codes import ReasonCode
from primitives.errors import ExchangeError, PostOnlyFailed, InsufficientBalance
from primitives.StoredObject import StoredObject
