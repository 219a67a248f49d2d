"""Configuration management for cliente service."""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    sql_api_url: str = "http://localhost:3001/api"
    lookup_backend: str = "sql_api"  # 'sql_api' or 'csv'

    clientes_csv_path: str = "data/clientes.csv"
    vendedores_csv_path: Optional[str] = None
    vendedores_reload_seconds: float = 3600.0
    gps_separators: str = ",&"
    id_columns: str = "CLAVE,#Cliente"
    name_columns: str = "RAZON,Nombre del Cliente"

    fetch_timeout_seconds: float = 20.0
    fetch_retries: int = 3
    fetch_initial_delay: float = 0.3

    cache_control: str = "public, s-maxage=60, stale-while-revalidate=300"
    cors_allow_origin: str = "*"

    host: str = "0.0.0.0"
    port: int = 8080
    metrics_port: int = 9102
    log_level: str = "INFO"
    environment: str = "development"
    tracing_enabled: bool = False
    otel_exporter_otlp_endpoint: str = "http://localhost:4317"

    class Config:
        env_file = ".env"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    return Settings()
