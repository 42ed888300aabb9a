from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRES_IN_DAYS: int = 7
    AUTH_COOKIE_NAME: str = "auth-token"

    # seeded password for the built-in demo accounts (admin/analyst/user)
    DEMO_PASSWORD: str = "halaleco-demo"

    EXPLORER_TX_URL: str = "https://etherscan.io/tx/{tx_hash}"
    # fixes the simulated image/competitor/trend draws; unset -> OS entropy
    RANDOM_SEED: int | None = None

    APP_BASE_URL: str = "http://localhost:8000"
    LOG_LEVEL: str = "INFO"
    ENV: str = "dev"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def cookie_secure(self) -> bool:
        return self.ENV == "production"

    @property
    def token_max_age(self) -> int:
        return self.JWT_EXPIRES_IN_DAYS * 24 * 60 * 60


settings = Settings()
