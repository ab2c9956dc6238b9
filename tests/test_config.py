"""
Tests für die YAML-Konfiguration und das Logging-Setup
"""

from pathlib import Path

import pydantic
import pytest

from sepa_qr.config import Config


class TestConfig:
    """Laden, Defaults und Zugriff"""

    def test_sections_are_parsed(self, config_file):
        config = Config(config_file)
        assert config.logging.log_level == "DEBUG"
        assert config.qr.error_correction == "Q"
        assert config.qr.box_size == 4
        assert config.beneficiary.iban == "BE72000000001616"

    def test_empty_file_uses_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        config = Config(path)
        assert config.logging.log_file is None
        assert config.logging.log_level == "INFO"
        assert config.qr.error_correction == "M"
        assert config.beneficiary.version == 2
        assert config.beneficiary.name is None

    def test_singleton(self, config_file, tmp_path):
        first = Config(config_file)
        second = Config(tmp_path / "does_not_matter.yaml")
        assert first is second
        assert second.config_path == config_file

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Config(tmp_path / "missing.yaml")

    def test_invalid_error_correction(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("qr:\n  error_correction: X\n", encoding="utf-8")
        with pytest.raises(pydantic.ValidationError):
            Config(path)

    def test_get_dot_notation(self, config_file):
        config = Config(config_file)
        assert config.get("beneficiary.bic") == "BPOTBEB1"
        assert config.get("beneficiary.unknown", "x") == "x"
        assert config.get("qr.border.deeper") is None

    def test_output_dir_relative_to_config(self, config_file):
        config = Config(config_file)
        assert config.output_dir() == (config_file.parent.parent / "output").resolve()

    def test_log_file_written(self, config_file):
        Config(config_file)
        from loguru import logger

        logger.info("Testmeldung")
        logger.remove()
        log_file: Path = config_file.parent / "sepa_qr.log"
        assert log_file.exists()
        assert "Testmeldung" in log_file.read_text(encoding="utf-8")
