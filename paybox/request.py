"""
Request de Paybox System.
Construye y valida el conjunto ordenado de campos PBX_* a enviar.
"""

import re
from datetime import datetime, timezone
from typing import Any, Callable, Mapping

import structlog

from paybox.utils.exceptions import ValidationError
from paybox.utils.hmac_utils import (
    build_signed_message,
    generate_hmac,
    normalize_hash_name,
)


logger = structlog.get_logger(__name__)

PARAMETER_NAME_PATTERN = re.compile(r"^PBX_[A-Z0-9_]+$")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PayboxRequest:
    """
    Conjunto de parámetros de una llamada a Paybox System.
    
    El orden de inserción se conserva: la firma HMAC depende de él.
    """
    
    REQUIRED_FIELDS: tuple[str, ...] = (
        "PBX_SITE",
        "PBX_RANG",
        "PBX_IDENTIFIANT",
        "PBX_TOTAL",
        "PBX_DEVISE",
        "PBX_CMD",
        "PBX_PORTEUR",
        "PBX_RETOUR",
    )
    
    def __init__(
        self,
        parameters: Mapping[str, Any] | None = None,
        now: Callable[[], datetime] = _utc_now,
    ):
        self._parameters: dict[str, str] = {}
        self._now = now
        
        if parameters:
            self.set_parameters(parameters)
    
    @property
    def parameters(self) -> dict[str, str]:
        """Copia de los parámetros actuales."""
        return dict(self._parameters)
    
    def set_parameter(self, name: str, value: Any) -> "PayboxRequest":
        """
        Define un parámetro. Un valor None lo elimina.
        
        Raises:
            ValidationError: Si el nombre no es un parámetro PBX_* válido
        """
        key = str(name).strip().upper()
        
        if not PARAMETER_NAME_PATTERN.match(key):
            raise ValidationError(f"Invalid Paybox parameter name: {name!r}")
        
        if value is None:
            self._parameters.pop(key, None)
        else:
            self._parameters[key] = str(value)
        
        return self
    
    def set_parameters(self, parameters: Mapping[str, Any]) -> "PayboxRequest":
        for name, value in parameters.items():
            self.set_parameter(name, value)
        return self
    
    def get_parameter(self, name: str, default: str | None = None) -> str | None:
        return self._parameters.get(name.upper(), default)
    
    def fields(self) -> dict[str, str]:
        """
        Valida los campos requeridos y retorna los parámetros en orden.
        
        Raises:
            ValidationError: Si falta algún campo requerido
        """
        self._check_required()
        return dict(self._parameters)
    
    def fields_with_hmac(self, secret: str, hash: str) -> dict[str, str]:
        """
        Valida los campos y los retorna firmados.
        
        Añade PBX_HASH y PBX_TIME (si no está definido) y, por último,
        PBX_HMAC calculado sobre todos los campos anteriores. El request
        no se modifica.
        
        Args:
            secret: Clave secreta hexadecimal entregada por Paybox
            hash: Algoritmo de hash (sha512, sha256, ...)
            
        Returns:
            Campos firmados, con PBX_HMAC al final
        """
        self._check_required()
        algorithm = normalize_hash_name(hash)
        
        fields = {
            key: value
            for key, value in self._parameters.items()
            if key not in ("PBX_HASH", "PBX_HMAC")
        }
        fields["PBX_HASH"] = algorithm.upper()
        fields.setdefault("PBX_TIME", self._now().isoformat(timespec="seconds"))
        
        fields["PBX_HMAC"] = generate_hmac(
            build_signed_message(fields),
            secret,
            algorithm,
        )
        
        logger.debug(
            "Paybox request signed",
            hash=fields["PBX_HASH"],
            field_count=len(fields),
        )
        
        return fields
    
    def _check_required(self) -> None:
        missing = tuple(
            name
            for name in self.REQUIRED_FIELDS
            if not self._parameters.get(name, "").strip()
        )
        
        if missing:
            raise ValidationError(
                f"Missing required Paybox parameters: {', '.join(missing)}",
                missing=missing,
            )
