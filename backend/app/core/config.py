from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "Quality Notifications"
    DEBUG: bool = False
    APP_DOMAIN: str = "example.com"
    APP_DATA_PATH: str = "/tmp"
    APP_DATABASE_DSN: str = "sqlite:////tmp/database.db"

    # Auth
    JWT_SECRET: str = "change-me"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_MINUTES: int = 60

    # Uploads
    UPLOAD_DIR: str = ""  # defaults to <APP_DATA_PATH>/uploads/images
    UPLOAD_MAX_FILES: int = 5
    UPLOAD_MAX_BYTES: int = 10 * 1024 * 1024

    # Realtime, messages buffered per connection before it is dropped
    REALTIME_QUEUE_MAX: int = 100

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE_PATH: str = ""

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000"

    # Role configuration, comma separated role names
    TASK_NOTIFICATION_ROLES: str = "HOD,PDC,Employee"
    TASK_CREATOR_ROLES: str = "Quality"
    PART_MANAGER_ROLES: str = "Admin,HOD"
    LEDGER_READER_ROLES: str = "Admin,HOD,Employee,Quality,PDC"

    version: str = "1.0.0"

    @property
    def upload_dir(self) -> str:
        return self.UPLOAD_DIR or f"{self.APP_DATA_PATH.rstrip('/')}/uploads/images"


settings = Settings()
