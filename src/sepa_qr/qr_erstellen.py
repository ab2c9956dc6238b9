import os
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from loguru import logger
from rich import print
from rich.traceback import install

from .config import DEFAULT_CONFIG_PATH, Config
from .errors import SepaQrError
from .sepa_qr import SepaQr


def main(argv: Optional[List[str]] = None) -> int:
    """
    Einstiegspunkt für die Erzeugung eines EPC-QR-Codes.
    Begünstigter und QR-Einstellungen kommen aus der Config-Datei
    (Pfad über SEPA_QR_CONFIG überschreibbar), Betrag und Referenz von der Kommandozeile.

    Aufruf:
        sepa-qr <betrag> [referenz] [ausgabe.png]
    """
    args = sys.argv[1:] if argv is None else argv
    install(show_locals=False)

    config_path = Path(os.getenv("SEPA_QR_CONFIG", str(DEFAULT_CONFIG_PATH)))
    config = Config(config_path)

    if not args:
        print("[yellow]Kein Betrag übergeben, der QR-Code wird ohne Betrag erzeugt.[/yellow]")
    if len(args) > 2:
        output_png = Path(args[2])
    else:
        output_png = config.output_dir() / f"zahlung_qr_{datetime.now():%Y%m%d_%H%M%S}.png"

    # SepaQrError wird bereits an der Fehlerstelle geloggt
    try:
        builder = SepaQr.from_config(config)
        if args:
            builder.set_amount(args[0])
        if len(args) > 1:
            builder.set_remittance_reference(args[1])
        path = builder.save(output_png)
    except SepaQrError as e:
        print(f"[red]{e}[/red]")
        return 1

    print(builder.text)
    print(f"[green]QR-Code gespeichert:[/green] {path}")
    logger.success("EPC-QR-Code erfolgreich erzeugt.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
