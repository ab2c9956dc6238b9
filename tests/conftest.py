from pathlib import Path

import pytest
import yaml

from sepa_qr import SepaQr
from sepa_qr.config import Config


@pytest.fixture(autouse=True)
def reset_config():
    """Jeder Test startet ohne geladene Config-Instanz."""
    Config.reset()
    yield
    Config.reset()


@pytest.fixture
def john_doe() -> SepaQr:
    """Gültiger Builder mit allen Pflichtfeldern."""
    return SepaQr().set_name("John Doe").set_iban("BE68539007547034")


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Schreibt eine vollständige Config-Datei ins Temp-Verzeichnis."""
    path = tmp_path / ".config" / "sepa_qr_config.yaml"
    path.parent.mkdir()
    data = {
        "logging": {"log_file": "sepa_qr.log", "log_level": "DEBUG"},
        "qr": {"error_correction": "q", "box_size": 4, "border": 2, "output_path": "../output"},
        "beneficiary": {
            "name": "Red Cross of Belgium",
            "iban": "BE72000000001616",
            "bic": "BPOTBEB1",
            "character_set": 2,
            "version": 1,
        },
    }
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path
