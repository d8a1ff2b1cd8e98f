from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Per-unit detection
    UNIT_LOOKAHEAD_CHARS: int = 200

    # Range filter
    MIN_PRICES_FOR_RANGE: int = 2

    # Savings badge filter
    MIN_PRICES_FOR_SAVINGS: int = 3
    SAVINGS_MIN_RATIO: float = 0.1
    SAVINGS_MIN_DIFF: float = 0.01
    SAVINGS_TOLERANCE_RATIO: float = 0.02
    SAVINGS_TOLERANCE_MIN: float = 1.0

    # Consent banners
    CONSENT_ANCESTOR_DEPTH: int = 3

    model_config = SettingsConfigDict(
        env_prefix="PRICE_SCANNER_",
        env_file=".env",
        extra="ignore",
        case_sensitive=True,
    )


settings = Settings()
