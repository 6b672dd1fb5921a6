"""
Configuración del transporte Paybox.
Carga variables de entorno y define settings globales.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import Literal

from paybox.base import HmacConfig


class Settings(BaseSettings):
    """Configuración principal del transporte."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )
    
    # Aplicación
    APP_NAME: str = "Paybox Transport"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"
    LOG_LEVEL: str = "INFO"
    
    # Endpoint de Paybox (vacío hasta configurarlo)
    PAYBOX_ENDPOINT: str = ""
    
    # HMAC: la clave secreta es la clave hexadecimal entregada por Paybox
    PAYBOX_HMAC_ENABLED: bool = False
    PAYBOX_HMAC_HASH: str = "sha512"
    PAYBOX_HMAC_SECRET: str = ""
    
    # Timeout del cliente HTTP
    PAYBOX_TIMEOUT_SECONDS: float = 5.0
    
    @property
    def hmac_config(self) -> HmacConfig:
        return HmacConfig(
            enabled=self.PAYBOX_HMAC_ENABLED,
            hash=self.PAYBOX_HMAC_HASH,
            secret=self.PAYBOX_HMAC_SECRET,
        )


@lru_cache()
def get_settings() -> Settings:
    """Retorna instancia cacheada de settings."""
    return Settings()
