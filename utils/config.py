from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # DB
    DB_HOST: str = "db"
    DB_PORT: int = 5432
    DB_USER: str = "samp"
    DB_PASSWORD: str = "samp_password"
    DB_NAME: str = "samp_directory"
    DATABASE_URL: str | None = None
    SQL_ECHO: bool = False

    # App
    APP_ENV: str = "dev"
    LOG_LEVEL: str = "INFO"
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"postgresql+asyncpg://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

settings = Settings()
