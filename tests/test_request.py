"""
Tests para PayboxRequest.
"""

import pytest

from paybox.base import RequestLike
from paybox.request import PayboxRequest
from paybox.utils.exceptions import ConfigurationError, ValidationError
from paybox.utils.hmac_utils import build_signed_message, verify_hmac


class TestPayboxRequestParameters:
    """Tests de manejo de parámetros."""
    
    def test_names_are_uppercased_and_values_stringified(self):
        """Los nombres pasan a mayúsculas y los valores a str."""
        request = PayboxRequest().set_parameter("pbx_total", 1000)
        
        assert request.get_parameter("PBX_TOTAL") == "1000"
    
    def test_none_removes_parameter(self, paybox_request):
        """Un valor None elimina el parámetro."""
        paybox_request.set_parameter("PBX_CMD", None)
        
        assert paybox_request.get_parameter("PBX_CMD") is None
    
    @pytest.mark.parametrize("name", ["SITE", "PBX_", "pbx-site", ""])
    def test_invalid_parameter_name(self, name):
        """Solo se aceptan nombres PBX_*."""
        with pytest.raises(ValidationError, match="Invalid Paybox parameter name"):
            PayboxRequest().set_parameter(name, "x")
    
    def test_parameters_returns_copy(self, paybox_request):
        """Modificar la copia no afecta al request."""
        params = paybox_request.parameters
        params["PBX_TOTAL"] = "1"
        
        assert paybox_request.get_parameter("PBX_TOTAL") == "1000"
    
    def test_satisfies_request_protocol(self, paybox_request):
        """PayboxRequest cumple la interfaz estructural."""
        assert isinstance(paybox_request, RequestLike)


class TestPayboxRequestFields:
    """Tests de validación y obtención de campos."""
    
    def test_fields_preserve_insertion_order(self, paybox_request, sample_parameters):
        """Los campos se retornan en orden de inserción."""
        assert list(paybox_request.fields()) == list(sample_parameters)
    
    def test_missing_required_fields(self):
        """Faltan campos requeridos: se listan todos."""
        request = PayboxRequest({"PBX_SITE": "1999888", "PBX_RANG": " "})
        
        with pytest.raises(ValidationError) as exc_info:
            request.fields()
        
        error = exc_info.value
        assert "PBX_RANG" in error.missing
        assert "PBX_SITE" not in error.missing
        assert error.missing[0] == "PBX_RANG"
        assert error.code == "VALIDATION_ERROR"
    
    def test_fields_with_hmac_validates_first(self, secret):
        """La firma también valida los campos requeridos."""
        with pytest.raises(ValidationError):
            PayboxRequest().fields_with_hmac(secret, "sha512")


class TestPayboxRequestHmac:
    """Tests de la firma HMAC."""
    
    def test_signed_fields_layout(self, paybox_request, sample_parameters, secret):
        """PBX_HASH y PBX_TIME se añaden y PBX_HMAC va al final."""
        fields = paybox_request.fields_with_hmac(secret, "sha512")
        
        assert list(fields)[: len(sample_parameters)] == list(sample_parameters)
        assert list(fields)[-3:] == ["PBX_HASH", "PBX_TIME", "PBX_HMAC"]
        assert fields["PBX_HASH"] == "SHA512"
        assert fields["PBX_TIME"] == "2024-03-15T10:30:00+00:00"
    
    def test_signature_is_valid(self, paybox_request, secret):
        """La firma se verifica sobre los campos que la preceden."""
        fields = paybox_request.fields_with_hmac(secret, "sha256")
        signature = fields.pop("PBX_HMAC")
        
        assert signature == signature.upper()
        assert len(signature) == 64
        assert verify_hmac(build_signed_message(fields), signature, secret, "sha256")
    
    def test_signature_is_deterministic(self, paybox_request, secret):
        """Con el mismo reloj la firma no cambia."""
        first = paybox_request.fields_with_hmac(secret, "sha512")
        second = paybox_request.fields_with_hmac(secret, "sha512")
        
        assert first == second
    
    def test_existing_time_is_kept(self, paybox_request, secret):
        """Un PBX_TIME definido por el llamador se respeta."""
        paybox_request.set_parameter("PBX_TIME", "2020-01-01T00:00:00+00:00")
        
        fields = paybox_request.fields_with_hmac(secret, "sha512")
        
        assert fields["PBX_TIME"] == "2020-01-01T00:00:00+00:00"
    
    def test_stale_hmac_is_replaced(self, paybox_request, secret):
        """Un PBX_HMAC previo se descarta antes de firmar."""
        paybox_request.set_parameter("PBX_HMAC", "STALE")
        
        fields = paybox_request.fields_with_hmac(secret, "sha512")
        
        assert fields["PBX_HMAC"] != "STALE"
        assert list(fields)[-1] == "PBX_HMAC"
    
    def test_request_not_mutated(self, paybox_request, secret):
        """Firmar no modifica los parámetros del request."""
        before = paybox_request.parameters
        
        paybox_request.fields_with_hmac(secret, "sha512")
        
        assert paybox_request.parameters == before
    
    def test_non_hex_secret_fails(self, paybox_request):
        """Una clave no hexadecimal es un error de configuración."""
        with pytest.raises(ConfigurationError, match="hexadecimal"):
            paybox_request.fields_with_hmac("not-hex", "sha512")
