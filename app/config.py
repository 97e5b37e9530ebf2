"""
Service settings, read from the environment (``LITECRM_*``) or a ``.env`` file.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="LITECRM_", env_file=".env", extra="ignore")

    app_name: str = "LiteCRM Service"
    environment: str = "development"
    log_level: str = "INFO"
    log_format: str = "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s"
    log_date_format: str = "%Y-%m-%d %H:%M:%S"

    # demo data loaded by the app lifespan and the admin reseed endpoint
    seed_on_startup: bool = True
    seed_random_seed: int = 42


@lru_cache()
def get_settings() -> Settings:
    return Settings()
