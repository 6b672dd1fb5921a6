"""
Transporte HTTP hacia Paybox.
Envía un request (firmado con HMAC si está habilitado) en un único POST
de formulario y retorna el cuerpo crudo de la respuesta.
"""

from typing import Any, Mapping
from urllib.parse import urlencode

import structlog

try:
    import httpx
except ImportError:  # pragma: no cover - depende del entorno
    httpx = None

from paybox.base import HmacConfig, RequestLike
from paybox.endpoint import EndpointConfig
from paybox.utils.exceptions import ConfigurationError, TransportError
from paybox.utils.hmac_utils import is_supported_hash


logger = structlog.get_logger(__name__)

# 0 se acepta: algunos clientes lo reportan sin fallo cuando hubo cuerpo
ACCEPTED_STATUS_CODES = frozenset({0, 200, 201, 204})

# Mismo valor por defecto que httpx.Client
DEFAULT_TIMEOUT_SECONDS = 5.0

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def detect_encoding(content: bytes) -> str:
    """
    Codificación para respuestas sin charset en Content-Type.
    
    UTF-8 si el cuerpo es UTF-8 válido; si no, ISO-8859-1, que decodifica
    cualquier byte sin pérdida.
    """
    try:
        content.decode("utf-8")
    except UnicodeDecodeError:
        return "iso-8859-1"
    return "utf-8"


class PaymentTransport:
    """
    Transporte síncrono basado en httpx.
    
    Sin estado entre llamadas: cada `submit` abre su propio cliente HTTP
    y lo cierra siempre, haya éxito o error.
    """
    
    def __init__(
        self,
        endpoint: EndpointConfig | str | None = "",
        hmac: HmacConfig | Mapping[str, Any] | None = None,
        *,
        timeout: "float | httpx.Timeout" = DEFAULT_TIMEOUT_SECONDS,
        http_transport: "httpx.BaseTransport | None" = None,
    ):
        """
        Inicializa el transporte.
        
        Args:
            endpoint: URL de Paybox (puede estar vacía hasta el primer submit)
            hmac: {"enabled": bool, "hash": str, "secret": str}
            timeout: Timeout del cliente HTTP
            http_transport: Transporte httpx alternativo (ej: MockTransport)
            
        Raises:
            ConfigurationError: Si httpx no está disponible o si HMAC está
                habilitado sin secret o con un algoritmo no soportado
        """
        if httpx is None:
            raise ConfigurationError(
                "httpx is not available. Install it first."
            )
        
        hmac_config = HmacConfig.coerce(hmac)
        
        if hmac_config.enabled and not hmac_config.secret:
            raise ConfigurationError(
                "HMAC is enabled but you need to give a secret key."
            )
        
        if hmac_config.enabled and not is_supported_hash(hmac_config.hash):
            raise ConfigurationError(
                f"HMAC is enabled with an unsupported hash algorithm: "
                f"{hmac_config.hash!r}"
            )
        
        self._endpoint = EndpointConfig.coerce(endpoint)
        self._is_hmac_enabled = hmac_config.enabled
        self._hash = hmac_config.hash
        self._secret = hmac_config.secret
        self._timeout = timeout
        self._http_transport = http_transport
    
    @property
    def endpoint(self) -> EndpointConfig:
        return self._endpoint
    
    @property
    def is_hmac_enabled(self) -> bool:
        return self._is_hmac_enabled
    
    @property
    def hash(self) -> str:
        return self._hash
    
    @property
    def secret(self) -> str:
        return self._secret
    
    def submit(self, request: RequestLike) -> str:
        """
        Envía el request a Paybox.
        
        Args:
            request: Request que entrega sus campos validados
            
        Returns:
            Cuerpo de la respuesta, sin modificar
            
        Raises:
            ConfigurationError: Si el endpoint no está definido o es inválido
            ValidationError: Propagado sin cambios desde el request
            TransportError: Fallo de red o código HTTP no aceptado
        """
        url = self._require_url()
        
        if self._is_hmac_enabled:
            fields = request.fields_with_hmac(self._secret, self._hash)
        else:
            fields = request.fields()
        
        body = urlencode(list(fields.items()))
        
        logger.debug(
            "Submitting Paybox request",
            endpoint=url,
            fields=list(fields.keys()),
            hmac_enabled=self._is_hmac_enabled,
        )
        
        try:
            with httpx.Client(
                timeout=self._timeout,
                transport=self._http_transport,
                default_encoding=detect_encoding,
            ) as client:
                response = client.post(
                    url,
                    content=body.encode("utf-8"),
                    headers={"Content-Type": FORM_CONTENT_TYPE},
                )
                status_code = response.status_code
                text = response.text
                reason = response.reason_phrase
        except httpx.RequestError as e:
            raise TransportError(
                native_code=type(e).__name__,
                native_message=str(e),
                status_code=0,
            ) from e
        
        logger.debug(
            "Paybox response received",
            endpoint=url,
            status_code=status_code,
        )
        
        if status_code not in ACCEPTED_STATUS_CODES:
            raise TransportError(
                native_code=None,
                native_message=reason,
                status_code=status_code,
            )
        
        return text
    
    def _require_url(self) -> str:
        """
        Retorna el endpoint validado.
        
        Raises:
            ConfigurationError: Si está vacío, mal formado o sin esquema/host
        """
        url = self._endpoint.require()
        
        try:
            parsed = httpx.URL(url)
        except httpx.InvalidURL as e:
            raise ConfigurationError(f"Invalid Paybox endpoint {url!r}: {e}") from e
        
        if not parsed.scheme or not parsed.host:
            raise ConfigurationError(
                f"Invalid Paybox endpoint {url!r}: scheme and host are required"
            )
        
        return url
