from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    database_url: str = "sqlite+aiosqlite:///./ddroller.db"
    environment: str = "local"
    debug: bool = True
    log_level: str = "INFO"

    # Dice notation limits. Requests above the count limit are refused rather
    # than rolled, keeping each request O(limit).
    dice_count_limit: int = 1000
    supported_sides: list[int] = [2, 4, 6, 8, 10, 12, 20]

    # Page size for the roll list feed; callers may ask for fewer, never more.
    roll_list_limit: int = 20

    # Placeholder identity recorded on every roll until accounts exist.
    default_user: str = "w8kerr"


settings = Settings()
