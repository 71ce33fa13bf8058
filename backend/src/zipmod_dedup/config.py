from pydantic_settings import BaseSettings, SettingsConfigDict

from zipmod_dedup.constants import DEFAULT_LOG_CANDIDATES, DEFAULT_MOD_SUBDIRS, MANIFEST_ENTRY


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="ZMD_",
        extra="ignore",
    )

    host: str = "127.0.0.1"
    port: int = 8426
    mod_subdirs: list[str] = list(DEFAULT_MOD_SUBDIRS)
    log_candidates: list[str] = list(DEFAULT_LOG_CANDIDATES)
    manifest_entry: str = MANIFEST_ENTRY
    size_duplicate_include_zero: bool = True


settings = Settings()
