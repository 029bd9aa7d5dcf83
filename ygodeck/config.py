from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from ygodeck.models.format import DEFAULT_FORMAT, Format


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="YGODECK_")

    app_name: str = "ygodeck"
    debug: bool = False

    # Card data in the public card-data API layout, see services.card_database
    card_database_path: Path = Path("data/cards.json")

    default_format: Format = DEFAULT_FORMAT

    log_level: str = "INFO"


settings = Settings()
