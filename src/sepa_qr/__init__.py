from .errors import EncodingError, InvalidConfiguration, InvalidField, SepaQrError, ValidationError
from .qr_encoder import ErrorCorrectionLevel, QrEncoder
from .sepa_qr import SepaQr, build_lines, validate_sepa_values
from pydantic_models.data.payment_fields import CharacterSet, PaymentFields

__all__ = [
    "CharacterSet",
    "EncodingError",
    "ErrorCorrectionLevel",
    "InvalidConfiguration",
    "InvalidField",
    "PaymentFields",
    "QrEncoder",
    "SepaQr",
    "SepaQrError",
    "ValidationError",
    "build_lines",
    "validate_sepa_values",
]
