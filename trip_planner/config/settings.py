from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""  # anon key; every user query runs with the caller's JWT under RLS

    # Google Places
    google_maps_api_key: Optional[str] = None
    places_api_url: str = "https://places.googleapis.com/v1/places:searchText"
    places_max_results: int = 10
    places_timeout_seconds: float = 10.0

    # Session cookies
    site_url: str = "http://localhost:3000"  # OAuth callbacks land on {site_url}/auth/callback
    access_token_cookie: str = "sb-access-token"
    refresh_token_cookie: str = "sb-refresh-token"
    code_verifier_cookie: str = "sb-code-verifier"
    cookie_secure: bool = False
    cookie_max_age: int = 60 * 60 * 24 * 7
    gate_excluded_paths: str = "/api/version,/health,/ready,/favicon.ico,/version.txt"

    # App
    app_name: str = "trip-planner"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"
    login_rate_limit: str = "10/minute"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    def get_gate_excluded_paths(self) -> List[str]:
        return [p.strip() for p in self.gate_excluded_paths.split(",") if p.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",
        extra="ignore"
    )


settings = Settings()
