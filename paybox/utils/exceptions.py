"""
Excepciones del transporte Paybox.
"""


class PayboxError(Exception):
    """Error base del transporte Paybox."""
    
    def __init__(self, message: str, code: str = "PAYBOX_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ConfigurationError(PayboxError):
    """Configuración ausente o inválida (endpoint, HMAC, cliente HTTP)."""
    
    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="CONFIGURATION_ERROR",
        )


class ValidationError(PayboxError):
    """El request no tiene los campos requeridos o alguno es inválido."""
    
    def __init__(self, message: str, missing: tuple[str, ...] = ()):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
        )
        self.missing = tuple(missing)


class TransportError(PayboxError):
    """
    Fallo de red o código HTTP fuera de los aceptados.
    
    Conserva el código y el mensaje nativos del cliente HTTP junto con
    el código HTTP observado.
    """
    
    def __init__(
        self,
        native_code: str | int | None,
        native_message: str | None,
        status_code: int,
    ):
        super().__init__(
            message=(
                f"HTTP call failed (native error {native_code}): "
                f"{native_message or ''} (HTTP code: {status_code})"
            ),
            code="TRANSPORT_ERROR",
        )
        self.native_code = native_code
        self.native_message = native_message
        self.status_code = status_code
