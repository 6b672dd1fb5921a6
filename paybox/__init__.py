"""
Transporte HTTP para Paybox System.
"""

from paybox.base import HmacConfig, RequestLike, TransportLike
from paybox.endpoint import EndpointConfig
from paybox.request import PayboxRequest
from paybox.transport import ACCEPTED_STATUS_CODES, PaymentTransport
from paybox.utils.exceptions import (
    ConfigurationError,
    PayboxError,
    TransportError,
    ValidationError,
)

__all__ = [
    "ACCEPTED_STATUS_CODES",
    "ConfigurationError",
    "EndpointConfig",
    "HmacConfig",
    "PayboxError",
    "PayboxRequest",
    "PaymentTransport",
    "RequestLike",
    "TransportError",
    "TransportLike",
    "ValidationError",
]
