"""
Tests für das Kommandozeilen-Skript
"""

import pytest
import yaml

from sepa_qr.qr_erstellen import main


class TestMain:
    """Ende-zu-Ende über die Config-Datei"""

    def test_writes_png(self, config_file, tmp_path, monkeypatch, capsys):
        monkeypatch.setenv("SEPA_QR_CONFIG", str(config_file))
        out = tmp_path / "qr.png"
        assert main(["12.50", "RF18539007547034", str(out)]) == 0
        assert out.read_bytes()[:4] == b"\x89PNG"
        captured = capsys.readouterr().out
        assert "EUR12.50" in captured
        assert "RF18539007547034" in captured

    def test_default_output_dir(self, config_file, monkeypatch):
        monkeypatch.setenv("SEPA_QR_CONFIG", str(config_file))
        assert main(["5"]) == 0
        files = list((config_file.parent.parent / "output").glob("zahlung_qr_*.png"))
        assert len(files) == 1

    def test_invalid_amount(self, config_file, tmp_path, monkeypatch, capsys):
        monkeypatch.setenv("SEPA_QR_CONFIG", str(config_file))
        out = tmp_path / "qr.png"
        assert main(["0", "", str(out)]) == 1
        assert not out.exists()
        assert "smaller than 0.01" in capsys.readouterr().out

    @pytest.mark.parametrize("field, value", [("version", 3), ("character_set", 9)])
    def test_invalid_beneficiary_config(self, config_file, tmp_path, monkeypatch, capsys, field, value):
        data = yaml.safe_load(config_file.read_text(encoding="utf-8"))
        data["beneficiary"][field] = value
        config_file.write_text(yaml.safe_dump(data), encoding="utf-8")
        monkeypatch.setenv("SEPA_QR_CONFIG", str(config_file))
        out = tmp_path / "qr.png"
        assert main(["5", "", str(out)]) == 1
        assert not out.exists()
        assert "Invalid" in capsys.readouterr().out
