from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, List, Optional, Union

from loguru import logger

from pydantic_models.data.payment_fields import AmountInput, CharacterSet, PaymentFields

from .errors import InvalidConfiguration, ValidationError
from .qr_encoder import ErrorCorrectionLevel, QrEncoder
from .utils import format_2f, to_decimal

if TYPE_CHECKING:
    from .config import Config

MIN_AMOUNT = to_decimal("0.01")
MAX_AMOUNT = to_decimal("999999999.99")


def _fail(message: str) -> None:
    logger.error(message)
    raise ValidationError(message)


def _check_single_line(value: str, label: str) -> None:
    if "\n" in value or "\r" in value:
        _fail(f"{label} cannot contain line breaks")


def validate_sepa_values(fields: PaymentFields) -> None:
    """
    Prüft die zusammengeführten Felder gegen die Vorgaben des EPC-Standards.
    Die Reihenfolge der Prüfungen ist fest, es wird immer der erste Verstoß gemeldet.

    Args:
        fields (PaymentFields): Felder, bei denen fehlende Texte bereits "" sind.

    Raises:
        ValidationError: Beim ersten verletzten Feld.
    """
    # Kopfzeilen, falls ein PaymentFields-Datensatz direkt übergeben wurde
    if fields.service_tag != "BCD":
        _fail("Invalid service tag")
    if isinstance(fields.version, bool) or fields.version not in (1, 2):
        _fail("Invalid version")
    try:
        CharacterSet(fields.character_set)
    except ValueError:
        _fail("Invalid character set")
    if fields.identification != "SCT":
        _fail("Invalid identification code")

    if fields.version == 1 and not fields.bic:
        _fail("Missing BIC of the beneficiary bank")

    if fields.bic:
        if len(fields.bic) < 8:
            _fail("BIC of the beneficiary bank cannot be shorter than 8 characters")
        if len(fields.bic) > 11:
            _fail("BIC of the beneficiary bank cannot be longer than 11 characters")
        _check_single_line(fields.bic, "BIC of the beneficiary bank")

    if not fields.name:
        _fail("Missing name of the beneficiary")
    if len(fields.name) > 70:
        _fail("Name of the beneficiary cannot be longer than 70 characters")
    _check_single_line(fields.name, "Name of the beneficiary")

    if not fields.iban:
        _fail("Missing account number of the beneficiary")
    if len(fields.iban) > 34:
        _fail("Account number of the beneficiary cannot be longer than 34 characters")
    _check_single_line(fields.iban, "Account number of the beneficiary")

    try:
        amount = to_decimal(fields.amount)
    except ValueError as e:
        logger.error(f"Betrag nicht lesbar: {e}")
        raise ValidationError(f"Amount of the credit transfer is not a valid number: {fields.amount!r}") from e
    if amount is not None:
        if amount < MIN_AMOUNT:
            _fail("Amount of the credit transfer cannot be smaller than 0.01 Euro")
        if amount > MAX_AMOUNT:
            _fail("Amount of the credit transfer cannot be higher than 999999999.99 Euro")

    _check_single_line(fields.purpose, "Purpose of the credit transfer")

    if fields.remittance_reference and len(fields.remittance_reference) > 35:
        _fail("Structured remittance information cannot be longer than 35 characters")
    _check_single_line(fields.remittance_reference, "Structured remittance information")

    if fields.remittance_text and len(fields.remittance_text) > 140:
        _fail("Unstructured remittance information cannot be longer than 140 characters")

    if fields.information and len(fields.information) > 70:
        _fail("Beneficiary to originator information cannot be longer than 70 characters")
    _check_single_line(fields.information, "Beneficiary to originator information")


def build_lines(fields: PaymentFields) -> List[str]:
    """
    Serialisiert bereits validierte Felder in die elf Zeilen des Payloads.
    remittance_text wird nicht ausgegeben, ein fehlender Betrag erscheint als EUR0.00.
    """
    return [
        fields.service_tag,
        f"{fields.version:03d}",
        str(int(fields.character_set)),
        fields.identification,
        fields.bic,
        fields.name,
        fields.iban,
        f"EUR{format_2f(to_decimal(fields.amount))}",
        fields.purpose,
        fields.remittance_reference,
        fields.information,
    ]


class SepaQr:
    """
    Builder für den Text eines EPC-QR-Codes (SEPA Credit Transfer, "GiroCode").

    Die Setter schreiben in genau einen PaymentFields-Datensatz und geben den
    Builder zurück, damit Aufrufe verkettet werden können. Geprüft werden nur
    Service-Tag, Version, Zeichensatz und Identifikation sofort, alle übrigen
    Felder erst in build().

    Das Rendern übernimmt ein QrEncoder, der nur den fertigen Text und den
    Fehlerkorrektur-Level (Standard: Medium) erhält.

    Beispiel:
        payload = (
            SepaQr()
            .set_name("John Doe")
            .set_iban("BE68539007547034")
            .set_amount("12.50")
            .build()
        )
    """

    def __init__(
        self,
        error_correction: ErrorCorrectionLevel = ErrorCorrectionLevel.MEDIUM,
        box_size: int = 10,
        border: int = 4,
    ):
        self._fields: PaymentFields = PaymentFields()
        self.error_correction: ErrorCorrectionLevel = ErrorCorrectionLevel(error_correction)
        self.box_size = box_size
        self.border = border
        self._text: str = ""

    @classmethod
    def from_config(cls, config: "Config") -> "SepaQr":
        """
        Erstellt einen Builder, der Begünstigten, Zeichensatz, Version und
        QR-Einstellungen aus der Konfiguration übernimmt.
        """
        qr_cfg = config.qr
        beneficiary = config.beneficiary
        builder = cls(
            error_correction=ErrorCorrectionLevel(qr_cfg.error_correction),
            box_size=qr_cfg.box_size,
            border=qr_cfg.border,
        )
        builder.set_version(beneficiary.version).set_character_set(beneficiary.character_set)
        if beneficiary.name is not None:
            builder.set_name(beneficiary.name)
        if beneficiary.iban is not None:
            builder.set_iban(beneficiary.iban)
        if beneficiary.bic is not None:
            builder.set_bic(beneficiary.bic)
        logger.debug(f"Builder aus Konfiguration erstellt für '{beneficiary.name}'")
        return builder

    # --- Konfigurations-Setter (sofortige Prüfung) ---

    def set_service_tag(self, service_tag: str = "BCD") -> "SepaQr":
        if service_tag != "BCD":
            logger.error(f"Ungültiger Service-Tag: {service_tag!r}")
            raise InvalidConfiguration("Invalid service tag")
        self._fields.service_tag = service_tag
        return self

    def set_version(self, version: int = 2) -> "SepaQr":
        if isinstance(version, bool) or version not in (1, 2):
            logger.error(f"Ungültige Version: {version!r}")
            raise InvalidConfiguration("Invalid version")
        self._fields.version = int(version)
        return self

    def set_character_set(self, character_set: Union[CharacterSet, int] = CharacterSet.UTF_8) -> "SepaQr":
        try:
            self._fields.character_set = CharacterSet(character_set)
        except ValueError:
            logger.error(f"Ungültiger Zeichensatz: {character_set!r}")
            raise InvalidConfiguration("Invalid character set") from None
        return self

    def set_identification(self, identification: str = "SCT") -> "SepaQr":
        if identification != "SCT":
            logger.error(f"Ungültiger Identifikationscode: {identification!r}")
            raise InvalidConfiguration("Invalid identification code")
        self._fields.identification = identification
        return self

    # --- Feld-Setter (Prüfung erst in build) ---

    def set_bic(self, bic: Optional[str]) -> "SepaQr":
        self._fields.bic = bic
        return self

    def set_name(self, name: Optional[str]) -> "SepaQr":
        self._fields.name = name
        return self

    def set_iban(self, iban: Optional[str]) -> "SepaQr":
        self._fields.iban = iban
        return self

    def set_amount(self, amount: AmountInput) -> "SepaQr":
        self._fields.amount = amount
        return self

    def set_purpose(self, purpose: Optional[str]) -> "SepaQr":
        self._fields.purpose = purpose
        return self

    def set_remittance_reference(self, remittance_reference: Optional[str]) -> "SepaQr":
        self._fields.remittance_reference = remittance_reference
        return self

    def set_remittance_text(self, remittance_text: Optional[str]) -> "SepaQr":
        self._fields.remittance_text = remittance_text
        return self

    def set_information(self, information: Optional[str]) -> "SepaQr":
        self._fields.information = information
        return self

    def set_error_correction(self, level: Union[ErrorCorrectionLevel, str]) -> "SepaQr":
        """
        Setzt den Fehlerkorrektur-Level für das Rendern, unabhängig vom Payload.
        """
        try:
            self.error_correction = ErrorCorrectionLevel(level)
        except ValueError:
            logger.error(f"Ungültiger Fehlerkorrektur-Level: {level!r}")
            raise InvalidConfiguration("Invalid error correction level") from None
        return self

    # --- Zugriff ---

    @property
    def fields(self) -> PaymentFields:
        """Kopie des aktuellen Datensatzes."""
        return self._fields.model_copy()

    @property
    def text(self) -> str:
        """Zuletzt erzeugter Payload ("" vor dem ersten build)."""
        return self._text

    # --- Validierung und Serialisierung ---

    def validate(self, fields: Optional[PaymentFields] = None) -> None:
        """
        Prüft die übergebenen oder die eigenen Felder.

        Raises:
            ValidationError: Beim ersten verletzten Feld.
        """
        source = fields if fields is not None else self._fields
        validate_sepa_values(source.merged())

    def build(self, fields: Optional[PaymentFields] = None) -> str:
        """
        Validiert die Felder und erzeugt den Payload (elf Zeilen, ohne
        abschließenden Zeilenumbruch). Bei einem Fehler wird nichts erzeugt.
        """
        merged = (fields if fields is not None else self._fields).merged()
        validate_sepa_values(merged)
        text = "\n".join(build_lines(merged))
        if fields is None:
            self._text = text
        logger.debug(f"EPC-Payload erzeugt für '{merged.name}' ({merged.iban})")
        return text

    def encoder(self) -> QrEncoder:
        """
        Erzeugt den Payload und übergibt ihn an einen QrEncoder.
        """
        return QrEncoder(
            text=self.build(),
            error_correction=self.error_correction,
            character_set=self._fields.character_set,
            box_size=self.box_size,
            border=self.border,
        )

    def create(self) -> Any:
        """
        Erzeugt den Payload und rendert ihn als PIL-Bild.
        """
        return self.encoder().make_image()

    def save(self, output_png: Union[str, Path]) -> Path:
        """
        Erzeugt den Payload und speichert den QR-Code als PNG.
        """
        return self.encoder().save(output_png)
