"""
Factory para obtener el transporte Paybox configurado.
"""

from functools import lru_cache
from urllib.parse import urlparse

import structlog

from paybox.config import Settings, get_settings
from paybox.transport import PaymentTransport


logger = structlog.get_logger(__name__)


def build_transport(settings: Settings) -> PaymentTransport:
    """
    Construye un PaymentTransport a partir de los settings.
    
    Raises:
        ConfigurationError: Si la configuración HMAC es inválida
    """
    return PaymentTransport(
        endpoint=settings.PAYBOX_ENDPOINT,
        hmac=settings.hmac_config,
        timeout=settings.PAYBOX_TIMEOUT_SECONDS,
    )


@lru_cache()
def get_transport() -> PaymentTransport:
    """
    Retorna el transporte configurado. La instancia es cacheada.
    
    Nunca registra el secret: solo el host del endpoint y el flag HMAC.
    """
    settings = get_settings()
    transport = build_transport(settings)
    
    logger.info(
        "Paybox transport initialized",
        endpoint_host=urlparse(settings.PAYBOX_ENDPOINT).netloc or None,
        hmac_enabled=transport.is_hmac_enabled,
    )
    
    return transport
