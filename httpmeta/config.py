from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix='HTTPMETA_',
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore',
    )

    forwarded_for_header: str = 'x-forwarded-for'
    accept_header: str = 'accept'
    trust_forwarded_for: bool = True

    @field_validator('forwarded_for_header', 'accept_header', mode='before')
    @classmethod
    def normalize_header_name(cls, value: str) -> str:
        normalized = str(value).strip().lower()
        if not normalized:
            raise ValueError('header name must not be empty')
        return normalized


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
