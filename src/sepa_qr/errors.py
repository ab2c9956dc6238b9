class SepaQrError(Exception):
    """
    Basisklasse für alle Fehler beim Erzeugen eines EPC-QR-Codes.
    """


class InvalidConfiguration(SepaQrError):
    """
    Ein Setter hat einen Wert außerhalb des erlaubten Bereichs erhalten
    (Service-Tag, Version, Zeichensatz oder Identifikationscode).
    """


# Alternativer Name, wie er in der Dokumentation der Setter verwendet wird
InvalidField = InvalidConfiguration


class ValidationError(SepaQrError):
    """
    Ein Feld verletzt beim Erzeugen des Payloads eine Vorgabe des EPC-Standards
    (fehlendes Pflichtfeld, zu lange Angabe, Betrag außerhalb des Bereichs).
    """


class EncodingError(SepaQrError):
    """
    Der Payload lässt sich nicht im deklarierten Zeichensatz kodieren.
    """
