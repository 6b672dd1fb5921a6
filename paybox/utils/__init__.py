"""
Utilidades del transporte Paybox.
"""

from paybox.utils.exceptions import (
    ConfigurationError,
    PayboxError,
    TransportError,
    ValidationError,
)
from paybox.utils.hmac_utils import (
    build_signed_message,
    generate_hmac,
    is_supported_hash,
    normalize_hash_name,
    verify_hmac,
)

__all__ = [
    # Errores
    "PayboxError",
    "ConfigurationError",
    "ValidationError",
    "TransportError",
    # HMAC
    "build_signed_message",
    "generate_hmac",
    "is_supported_hash",
    "normalize_hash_name",
    "verify_hmac",
]
