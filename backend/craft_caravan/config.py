from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

from dotenv import load_dotenv

load_dotenv()



class Settings(BaseSettings):
    supabase_url: str              # will read from .env
    supabase_anon_key: str         # public key, row level security guards the tables
    fe_host: str = "http://localhost:8080"
    cors_origins: List[str] = []   # will be set from fe_host if not provided
    submission_max_attempts: int = 3
    submission_window_ms: int = 60000
    rate_limiter_sweep_every: int = 100
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        # set cors_origins default to fe_host if empty
        if not self.cors_origins:
            self.cors_origins = [self.fe_host]
