from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    host: str = "127.0.0.1"
    port: int = 9000
    api_base_url: str = "http://localhost:3000/api"
    public_base_url: str = "http://localhost:5173"
    cloudinary_upload_url: str = "https://api.cloudinary.com/v1_1/{cloud_name}/image/upload"
    session_file: Path = Path("sessions.json")
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "OUTLETDESK_"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
