from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    default_expires_seconds: int = 600
    emit_host_header: bool = True
    digest_algorithm: str = "sha256"

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="ZCAP_INVOKE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
