from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    """
    Application settings.
    Environment variables win over the project's .env file, which wins over defaults.
    """
    model_config = SettingsConfigDict(env_file=PROJECT_ROOT / ".env", extra="ignore")

    app_name: str = "Greenhouse Backend API"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 3000
    db_path: str = str(PROJECT_ROOT / "data" / "greenhouse_data.sqlite")
    image_base_dir: str = "/mnt/GreenhouseData/imgs"
    client_dist_path: str = str(PROJECT_ROOT / "client" / "dist")
    # Zone used for bucket boundaries when a request does not name one
    timezone: str = "UTC"


settings = Settings()
