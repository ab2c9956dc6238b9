from enum import Enum
from pathlib import Path
from typing import List, Union

import qrcode
from loguru import logger
from qrcode.constants import ERROR_CORRECT_H, ERROR_CORRECT_L, ERROR_CORRECT_M, ERROR_CORRECT_Q

from pydantic_models.data.payment_fields import CharacterSet

from .errors import EncodingError
from .utils import ensure_dir


class ErrorCorrectionLevel(str, Enum):
    """
    Fehlerkorrektur-Level des QR-Codes. Der Wert ist der Buchstabe aus der Config.
    """
    LOW = "L"
    MEDIUM = "M"
    QUARTILE = "Q"
    HIGH = "H"

    @property
    def qrcode_constant(self) -> int:
        return _QRCODE_LEVELS[self]


_QRCODE_LEVELS = {
    ErrorCorrectionLevel.LOW: ERROR_CORRECT_L,
    ErrorCorrectionLevel.MEDIUM: ERROR_CORRECT_M,
    ErrorCorrectionLevel.QUARTILE: ERROR_CORRECT_Q,
    ErrorCorrectionLevel.HIGH: ERROR_CORRECT_H,
}


class QrEncoder:
    """
    Dünner Wrapper um qrcode.QRCode.
    Nimmt einen fertigen Text entgegen und rendert ihn mit dem gewünschten
    Fehlerkorrektur-Level. Die Umwandlung in Bytes erfolgt hier, im Zeichensatz,
    den der Payload in Zeile 3 deklariert.
    """

    def __init__(
        self,
        text: str = "",
        error_correction: ErrorCorrectionLevel = ErrorCorrectionLevel.MEDIUM,
        character_set: CharacterSet = CharacterSet.UTF_8,
        box_size: int = 10,
        border: int = 4,
    ):
        self.text = text
        self.error_correction = ErrorCorrectionLevel(error_correction)
        self.character_set = CharacterSet(character_set)
        self.box_size = box_size
        self.border = border

    def encode_text(self) -> bytes:
        """
        Kodiert den Text im deklarierten Zeichensatz.

        Raises:
            EncodingError: Wenn ein Zeichen im Zeichensatz nicht darstellbar ist.
        """
        codec = self.character_set.codec
        try:
            return self.text.encode(codec)
        except UnicodeEncodeError as e:
            logger.error(f"Text lässt sich nicht als {codec} kodieren: {e}")
            raise EncodingError(f"Text cannot be encoded as {codec}: {e.reason} at position {e.start}") from e

    def _make_qr(self) -> qrcode.QRCode:
        qr = qrcode.QRCode(
            version=None,
            error_correction=self.error_correction.qrcode_constant,
            box_size=self.box_size,
            border=self.border,
        )
        qr.add_data(self.encode_text())
        qr.make(fit=True)
        logger.debug(
            f"QR-Code erzeugt: Version {qr.version}, Level {self.error_correction.value}, "
            f"{len(self.text)} Zeichen"
        )
        return qr

    def matrix(self) -> List[List[bool]]:
        """
        Gibt die Modul-Matrix inklusive Rand zurück (True = dunkles Modul).
        """
        return self._make_qr().get_matrix()

    def make_image(self):
        """
        Rendert den QR-Code als PIL-Bild (schwarz auf weiß).
        """
        return self._make_qr().make_image(fill_color="black", back_color="white")

    def save(self, output_png: Union[str, Path]) -> Path:
        """
        Speichert den QR-Code als PNG. Fehlende Verzeichnisse werden angelegt.
        """
        path = Path(output_png)
        ensure_dir(path.parent)
        img = self.make_image()
        img.save(path)
        logger.info(f"QR-Code gespeichert: {path}")
        return path
