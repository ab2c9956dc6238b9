from __future__ import annotations

from decimal import Decimal
from enum import IntEnum
from typing import Any, Union

from pydantic import BaseModel, ConfigDict


class CharacterSet(IntEnum):
    """
    Zeichensatz-Codes laut EPC-Register (Zeile 3 des Payloads).
    """
    UTF_8 = 1
    ISO8859_1 = 2
    ISO8859_2 = 3
    ISO8859_4 = 4
    ISO8859_5 = 5
    ISO8859_7 = 6
    ISO8859_10 = 7
    ISO8859_15 = 8

    @property
    def codec(self) -> str:
        """Name des passenden Python-Codecs."""
        return _CODECS[self]


_CODECS = {
    CharacterSet.UTF_8: "utf-8",
    CharacterSet.ISO8859_1: "iso-8859-1",
    CharacterSet.ISO8859_2: "iso-8859-2",
    CharacterSet.ISO8859_4: "iso-8859-4",
    CharacterSet.ISO8859_5: "iso-8859-5",
    CharacterSet.ISO8859_7: "iso-8859-7",
    CharacterSet.ISO8859_10: "iso-8859-10",
    CharacterSet.ISO8859_15: "iso-8859-15",
}

AmountInput = Union[Decimal, float, int, str, None]

# Textfelder, die beim Zusammenführen mit "" vorbelegt werden
TEXT_FIELDS: tuple[str, ...] = (
    "bic",
    "name",
    "iban",
    "purpose",
    "remittance_reference",
    "remittance_text",
    "information",
)


class PaymentFields(BaseModel):
    """
    Fachliches Datenmodell für eine SEPA-Überweisung (EPC-QR-Code).
    Die Setter des Builders schreiben Rohwerte ohne Prüfung in dieses Modell,
    validiert wird erst beim Erzeugen des Payloads.
    """
    model_config = ConfigDict(validate_assignment=False)

    service_tag: str = "BCD"
    version: int = 2
    character_set: CharacterSet = CharacterSet.UTF_8
    identification: str = "SCT"

    bic: Any = ""
    name: Any = ""
    iban: Any = ""
    amount: AmountInput = None
    purpose: Any = ""
    remittance_reference: Any = ""
    remittance_text: Any = ""
    information: Any = ""

    def merged(self) -> "PaymentFields":
        """
        Gibt eine Kopie zurück, in der nie gesetzte bzw. mit None belegte
        Textfelder als leerer String erscheinen. Der Betrag bleibt None, wenn er fehlt.
        """
        values = dict(self)
        for field in TEXT_FIELDS:
            values[field] = "" if values[field] is None else str(values[field])
        return PaymentFields.model_construct(**values)
