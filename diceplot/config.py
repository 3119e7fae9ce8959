from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_prefix="DICEPLOT_", extra="ignore"
    )

    environment: str = "local"
    debug: bool = True
    log_level: str = "INFO"

    # What the index page plots when no query is given.
    default_dice: str = "3d6 + d20"
    default_aggregate: str = "sum"

    # Request guard for the HTTP routes. The engine itself accepts any spec;
    # these only bound how much work a single request may ask for.
    max_dice: int = 200
    max_sides: int = 1000

    # Highcharts is loaded from a CDN by the index template.
    highcharts_url: str = "https://code.highcharts.com/highcharts.js"


settings = Settings()
