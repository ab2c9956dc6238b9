from typing import Optional
from pydantic import BaseModel, field_validator

class QrConfig(BaseModel):
    """
    Einstellungen für das Rendern des QR-Codes.
    Der Fehlerkorrektur-Level wird als Buchstabe (L, M, Q, H) angegeben.
    """
    error_correction: str = "M"
    box_size: int = 10
    border: int = 4
    output_path: Optional[str] = "output"

    @field_validator("error_correction", mode="before")
    @classmethod
    def upper_level(cls, v: str) -> str:
        """
        Normalisiert den Level auf Großbuchstaben und prüft, ob er bekannt ist.
        """
        level = str(v).strip().upper()
        if level not in {"L", "M", "Q", "H"}:
            raise ValueError(f"Unbekannter Fehlerkorrektur-Level '{v}' (erlaubt: L, M, Q, H)")
        return level
