from pydantic_settings import BaseSettings

DEFAULT_JWT_SECRET = "change-this-secret-key-in-production"


class Settings(BaseSettings):
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    database_url: str = "sqlite:///./data/site.db"
    media_dir: str = "./public/media"
    max_upload_bytes: int = 2 * 1024 * 1024 * 1024

    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_alg: str = "HS256"
    # None keeps tokens valid forever, matching what the site always did.
    jwt_expires_min: int | None = None

    api_prefix: str = "/api"
    cors_origins: str = ""

    seed_admin_user: str = "admin"
    seed_admin_pass: str = "changeme"

    class Config:
        env_prefix = ""
        case_sensitive = False
        env_file = ".env"


settings = Settings()
