from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    store_path: str = ""
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:3000"]

    class Config:
        env_file = ".env"
        env_prefix = "INFLUENCE_"
