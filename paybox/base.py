"""
Contratos del transporte Paybox.

Interfaces estructurales (Protocol): cualquier objeto con los métodos
adecuados sirve, sin herencia.
"""

from typing import Any, Mapping, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, ValidationError

from paybox.utils.exceptions import ConfigurationError


class HmacConfig(BaseModel):
    """Configuración de la autenticación HMAC."""
    
    model_config = ConfigDict(frozen=True)
    
    enabled: bool = False
    hash: str = "sha512"
    secret: str = ""
    
    @classmethod
    def coerce(
        cls,
        value: "HmacConfig | Mapping[str, Any] | None",
    ) -> "HmacConfig":
        """
        Acepta un HmacConfig, un dict {"enabled", "hash", "secret"} o None.
        
        Las claves ausentes o nulas toman el valor por defecto. Con HMAC
        deshabilitado, un hash o secret de tipo inválido se ignora.
        
        Raises:
            ConfigurationError: Si HMAC está habilitado y la configuración
                no es válida
        """
        if isinstance(value, HmacConfig):
            return value
        if value is None:
            return cls()
        data = {k: v for k, v in value.items() if v is not None}
        
        try:
            return cls(**data)
        except ValidationError as e:
            try:
                disabled = cls(enabled=data.get("enabled", False))
            except ValidationError:
                disabled = None
            if disabled is not None and not disabled.enabled:
                return disabled
            raise ConfigurationError(f"Invalid HMAC configuration: {e}") from e


@runtime_checkable
class RequestLike(Protocol):
    """Request capaz de entregar sus campos validados, con o sin HMAC."""
    
    def fields(self) -> Mapping[str, str]:
        ...
    
    def fields_with_hmac(self, secret: str, hash: str) -> Mapping[str, str]:
        ...


@runtime_checkable
class TransportLike(Protocol):
    """Transporte que envía un request y retorna el cuerpo de la respuesta."""
    
    def submit(self, request: RequestLike) -> str:
        ...
