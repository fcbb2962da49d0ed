from typing import Optional
from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    name: str = Field(default="flashdeck", alias="APP_NAME")
    version: str = Field(default="v1", alias="API_VERSION")
    port: int = Field(default=9000, alias="APP_PORT")
    mode: str = Field(default="prod", alias="MODE")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"], alias="CORS_ORIGINS"
    )

    @computed_field
    def is_production(self) -> bool:
        return self.mode != "dev"


class DeckSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    # None means the XML deck bundled with the package
    source: Optional[str] = Field(default=None, alias="FLASHCARDS_SOURCE")
    rotation_interval: float = Field(
        default=15.0, gt=0, alias="FLASHCARDS_ROTATION_INTERVAL"
    )
    shuffle_seed: Optional[int] = Field(default=None, alias="FLASHCARDS_SHUFFLE_SEED")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    app: AppSettings = Field(default_factory=lambda: AppSettings())
    deck: DeckSettings = Field(default_factory=lambda: DeckSettings())

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")


settings = Settings()
