from pydantic_settings import BaseSettings

class Settings(BaseSettings):

    # Server
    ROOT_PATH: str = ""
    HOST: str = "0.0.0.0"
    PORT: int = 5001
    CORS_ORIGINS: str = "*"
    LOG_LEVEL: str = "INFO"

    # MongoDB
    MONGODB_URI: str = "mongodb://localhost:27017/campus-survey"
    MONGODB_DB_NAME: str = "campus-survey"  # used when the URI names no database
    MONGODB_TLS: bool = False
    MONGODB_TIMEOUT_MS: int = 5000

    # Local development without a database server
    USE_IN_MEMORY_STORE: bool = False

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = 'ignore'

settings = Settings()
