"""Configurações da aplicação - carrega variáveis do .env"""

from functools import lru_cache
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",  # carrega local
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ===========================================
    # CORE
    # ===========================================
    environment: str = "development"
    database_url: str
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    cors_origins: List[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
    ]

    # ===========================================
    # ROLETA (distribuição de leads)
    # ===========================================
    timezone: str = "America/Sao_Paulo"
    roleta_initial_stage: str = "Novo"

    # Job que distribui leads pendentes sozinho
    roleta_auto_enabled: bool = False
    roleta_auto_interval_minutes: int = 5

    # ===========================================
    # PROPRIEDADES
    # ===========================================
    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def async_database_url(self) -> str:
        """
        Converte a URL para o driver async.
        Railway/Supabase fornecem postgresql:// mas asyncpg precisa de postgresql+asyncpg://
        """
        url = self.database_url
        if url.startswith("postgresql://"):
            return url.replace("postgresql://", "postgresql+asyncpg://", 1)
        if url.startswith("postgres://"):
            return url.replace("postgres://", "postgresql+asyncpg://", 1)
        return url


@lru_cache
def get_settings() -> Settings:
    return Settings()
