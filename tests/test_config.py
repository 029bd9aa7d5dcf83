from pathlib import Path

import pytest

from ygodeck.config import Settings
from ygodeck.models.format import Format


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.chdir(tmp_path)

        settings = Settings()

        assert settings.app_name == "ygodeck"
        assert settings.default_format == Format.TCG
        assert settings.card_database_path == Path("data/cards.json")

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("YGODECK_DEFAULT_FORMAT", "goat")
        monkeypatch.setenv("YGODECK_CARD_DATABASE_PATH", "/srv/cards.json")

        settings = Settings()

        assert settings.default_format == Format.GOAT
        assert settings.card_database_path == Path("/srv/cards.json")

    def test_env_file(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".env").write_text("YGODECK_DEBUG=true\n")

        assert Settings().debug is True
