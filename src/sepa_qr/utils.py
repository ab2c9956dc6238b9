from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Callable, Dict, Optional


def _parse_decimal_str(s: str) -> Optional[Decimal]:
    s = s.strip().replace("’", "").replace("'", "").replace(" ", "").replace(",", ".")
    if not s:
        return None
    try:
        return Decimal(s)
    except InvalidOperation:
        raise ValueError(f"Kein gültiger Betrag: '{s}'")


_DECIMAL_CONVERTERS: Dict[type, Callable[[Any], Optional[Decimal]]] = {
    type(None): lambda _v: None,
    int: lambda v: Decimal(v),
    float: lambda v: Decimal(repr(v)),
    Decimal: lambda v: v,
    str: _parse_decimal_str,
}


def to_decimal(v: Any) -> Optional[Decimal]:
    """
    Typbasierte Betrags-Konvertierung (None/str/int/float/Decimal -> Decimal|None).
    Floats werden über ihre kürzeste Darstellung umgewandelt, damit 12.5 nicht
    als 12.4999... ankommt.
    Ein leerer String gilt wie None als fehlender Betrag.

    Raises:
        ValueError: Bei unbekanntem Typ, NaN/Infinity oder unlesbarem String.
    """
    conv = _DECIMAL_CONVERTERS.get(type(v))
    if conv is None:
        raise ValueError(f"Betrag hat einen ungültigen Typ: {type(v).__name__}")
    result = conv(v)
    if result is not None and not result.is_finite():
        raise ValueError(f"Betrag ist keine endliche Zahl: {v!r}")
    return result


def format_2f(value: Optional[Decimal]) -> str:
    """
    Formatiert einen Betrag mit genau zwei Nachkommastellen und Punkt als Trenner.
    Ein fehlender Betrag wird als 0.00 ausgegeben.
    """
    amount = value if value is not None else Decimal(0)
    return f"{amount.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP):f}"


def ensure_dir(path: Path) -> Path:
    """Erzeugt ein Verzeichnis (rekursiv), falls es fehlt, und gibt den Pfad zurück."""
    path.mkdir(parents=True, exist_ok=True)
    return path
