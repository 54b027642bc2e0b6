from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # App
    environment: str = "development"
    debug: bool = False
    allowed_origins: str = "http://localhost:3000,http://localhost:5173"

    # Local store (offline copy of every collection)
    local_store_backend: str = "file"  # "file" or "redis"
    local_store_path: str = "./data"
    redis_url: str = "redis://localhost:6379/0"

    # Cloud database, empty to run local-only
    cloud_database_url: str = ""
    cloud_database_url_sync: str = ""

    # Backup
    backup_prefix: str = "ALS_BACKUP"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
