"""
Utilidades para firmas HMAC de requests Paybox.

Paybox entrega la clave secreta en hexadecimal: se decodifica a bytes
antes de firmar y la firma se envía en hexadecimal en mayúsculas.
"""

import binascii
import hashlib
import hmac
from typing import Mapping

import structlog

from paybox.utils.exceptions import ConfigurationError


logger = structlog.get_logger(__name__)


def _available_hashes() -> frozenset[str]:
    # shake_* no tiene digest_size fijo y hmac no lo admite
    return frozenset(
        name.lower()
        for name in hashlib.algorithms_available
        if not name.lower().startswith("shake")
    )


def is_supported_hash(name: str | None) -> bool:
    """Indica si el algoritmo es soportado por hashlib."""
    if not name:
        return False
    return name.lower() in _available_hashes()


def normalize_hash_name(name: str | None) -> str:
    """
    Normaliza el nombre del algoritmo al formato de hashlib.
    
    Raises:
        ConfigurationError: Si el algoritmo no está disponible
    """
    if not is_supported_hash(name):
        raise ConfigurationError(
            f"Unsupported HMAC hash algorithm: {name!r}. "
            f"Available: {sorted(_available_hashes())}"
        )
    return name.lower()


def build_signed_message(fields: Mapping[str, str]) -> str:
    """
    Construye el mensaje a firmar: "CLAVE=valor&CLAVE=valor".
    
    Respeta el orden del mapping y NO codifica los valores: Paybox
    firma la cadena cruda.
    """
    return "&".join(f"{key}={value}" for key, value in fields.items())


def generate_hmac(message: str, secret: str, hash_name: str) -> str:
    """
    Genera la firma HMAC de un mensaje.
    
    Args:
        message: Mensaje a firmar
        secret: Clave secreta en hexadecimal
        hash_name: Algoritmo de hashlib (sha512, sha256, ...)
        
    Returns:
        Firma hexadecimal en mayúsculas
        
    Raises:
        ConfigurationError: Si la clave no es hexadecimal o el algoritmo
            no está soportado
    """
    algorithm = normalize_hash_name(hash_name)
    
    try:
        key = binascii.unhexlify(secret)
    except (binascii.Error, ValueError) as e:
        raise ConfigurationError(
            f"HMAC secret must be an hexadecimal key: {e}"
        ) from e
    
    return hmac.new(
        key,
        message.encode("utf-8"),
        algorithm,
    ).hexdigest().upper()


def verify_hmac(
    message: str,
    signature: str,
    secret: str,
    hash_name: str,
) -> bool:
    """
    Verifica una firma HMAC.
    
    La comparación es en tiempo constante e ignora mayúsculas/minúsculas
    del hexadecimal.
    """
    expected = generate_hmac(message, secret, hash_name)
    match = hmac.compare_digest(expected, signature.upper())
    
    logger.debug(
        "HMAC verification",
        message_length=len(message),
        hash=hash_name,
        match=match,
    )
    
    return match
