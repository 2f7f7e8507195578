import logging
from functools import lru_cache

from fastapi import Depends
from supabase import create_client, Client

from craft_caravan.config import Settings
from craft_caravan.services.catalog import CatalogService
from craft_caravan.services.rate_limiter import RateLimiter
from craft_caravan.services.record_store import RecordStore, SupabaseRecordStore
from craft_caravan.services.submission_gate import SubmissionGate, SubmissionPolicy

logger = logging.getLogger(__name__)

_supabase_client: Client | None = None
_rate_limiter: RateLimiter | None = None


@lru_cache
def get_settings() -> Settings:
    return Settings()


def get_supabase(settings: Settings = Depends(get_settings)) -> Client:
    global _supabase_client
    if _supabase_client is None:
        _supabase_client = create_client(
            settings.supabase_url,
            settings.supabase_anon_key,
        )
        logger.info("Supabase client initialized for %s", settings.supabase_url)
    return _supabase_client


def get_record_store(supabase: Client = Depends(get_supabase)) -> RecordStore:
    return SupabaseRecordStore(supabase)


def get_rate_limiter(settings: Settings = Depends(get_settings)) -> RateLimiter:
    """Process-wide limiter; attempts are remembered across requests."""
    global _rate_limiter
    if _rate_limiter is None:
        _rate_limiter = RateLimiter(sweep_every=settings.rate_limiter_sweep_every)
    return _rate_limiter


def get_submission_gate(
    store: RecordStore = Depends(get_record_store),
    limiter: RateLimiter = Depends(get_rate_limiter),
    settings: Settings = Depends(get_settings),
) -> SubmissionGate:
    policy = SubmissionPolicy(
        max_attempts=settings.submission_max_attempts,
        window_ms=settings.submission_window_ms,
    )
    return SubmissionGate(store, limiter, policy)


def get_catalog_service(store: RecordStore = Depends(get_record_store)) -> CatalogService:
    return CatalogService(store)
