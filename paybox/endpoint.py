"""
Endpoint de Paybox como objeto de valor.
"""

from dataclasses import dataclass

from paybox.utils.exceptions import ConfigurationError


@dataclass(frozen=True)
class EndpointConfig:
    """
    URL de destino de las llamadas a Paybox.
    
    Puede crearse vacía, pero debe estar definida antes de la primera
    llamada: `require()` es el único acceso validado.
    """
    
    url: str = ""
    
    @property
    def is_set(self) -> bool:
        return bool(self.url and self.url.strip())
    
    def require(self) -> str:
        """
        Retorna la URL del endpoint.
        
        Raises:
            ConfigurationError: Si el endpoint no está definido
        """
        if not self.is_set:
            raise ConfigurationError(
                "Paybox endpoint not set. Configure PAYBOX_ENDPOINT first."
            )
        return self.url
    
    @classmethod
    def coerce(cls, value: "EndpointConfig | str | None") -> "EndpointConfig":
        """Acepta un EndpointConfig, una URL o None."""
        if isinstance(value, EndpointConfig):
            return value
        return cls(url=value or "")
