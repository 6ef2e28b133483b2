from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Redis (session profiles)
    redis_url: str = "redis://localhost:6379/0"
    cache_enabled: bool = True
    session_profile_ttl_seconds: int = 24 * 60 * 60

    # Engine data overrides (JSON file with providers / pricing / weight presets)
    quote_config_path: str = ""

    # Simulated providers
    provider_timeout_seconds: float = 3.0
    provider_min_latency_ms: int = 200
    provider_max_latency_ms: int = 800
    provider_failure_rate: float = 0.0
    provider_price_jitter: float = 0.0  # 0.05 = ±5%, 0 keeps prices reproducible

    # Background jobs
    scheduler_enabled: bool = True
    usage_report_interval_minutes: int = 15

    # Logging
    log_level: str = "INFO"
    log_dir: str = ""  # empty = backend/logs

    # CORS
    cors_origins: str = "http://localhost:5173"

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",")]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
