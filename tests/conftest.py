"""
Configuración de tests y fixtures compartidos.
"""

from datetime import datetime, timezone
from typing import Callable

import httpx
import pytest

from paybox.request import PayboxRequest


TEST_ENDPOINT = "https://preprod-tpeweb.paybox.com/cgi/MYchoix_pagepaiement.cgi"

# Clave hexadecimal de pruebas (formato entregado por Paybox)
TEST_SECRET = "0123456789ABCDEF0123456789ABCDEF0123456789ABCDEF0123456789ABCDEF"

FIXED_NOW = datetime(2024, 3, 15, 10, 30, 0, tzinfo=timezone.utc)


class RecordingTransport(httpx.MockTransport):
    """MockTransport que registra los requests enviados y su cierre."""
    
    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: list[httpx.Request] = []
        self.closed = False
        
        def recording_handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)
        
        super().__init__(recording_handler)
    
    def close(self) -> None:
        self.closed = True


@pytest.fixture
def make_transport() -> Callable[..., RecordingTransport]:
    """Crea un RecordingTransport con status y cuerpo fijos o un handler propio."""
    
    def _make(
        status_code: int = 200,
        text: str = "OK",
        handler: Callable[[httpx.Request], httpx.Response] | None = None,
    ) -> RecordingTransport:
        if handler is None:
            handler = lambda request: httpx.Response(status_code, text=text)
        return RecordingTransport(handler)
    
    return _make


@pytest.fixture
def sample_parameters() -> dict[str, str]:
    """Parámetros de ejemplo de Paybox System."""
    return {
        "PBX_SITE": "1999888",
        "PBX_RANG": "32",
        "PBX_IDENTIFIANT": "110647233",
        "PBX_TOTAL": "1000",
        "PBX_DEVISE": "978",
        "PBX_CMD": "order-42",
        "PBX_PORTEUR": "test@example.com",
        "PBX_RETOUR": "Mt:M;Ref:R;Auto:A;Erreur:E",
    }


@pytest.fixture
def paybox_request(sample_parameters) -> PayboxRequest:
    """Request válido con reloj fijo."""
    return PayboxRequest(sample_parameters, now=lambda: FIXED_NOW)


@pytest.fixture
def endpoint() -> str:
    return TEST_ENDPOINT


@pytest.fixture
def secret() -> str:
    return TEST_SECRET


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW
