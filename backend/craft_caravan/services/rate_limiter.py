import threading
from collections.abc import Callable
from datetime import datetime, timedelta, timezone


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RateLimiter:
    """In-memory sliding-window rate limiter keyed by submitter.

    State lives for the lifetime of the process. Each process enforces its own
    limits; nothing is shared between workers.
    """

    def __init__(
        self,
        clock: Callable[[], datetime] = _utcnow,
        sweep_every: int = 0,
    ):
        self._clock = clock
        self._sweep_every = sweep_every
        self._allowed_calls = 0
        self._lock = threading.Lock()
        self._timestamps: dict[str, list[datetime]] = {}
        # when the newest attempt of each key stops counting under its own window
        self._expires: dict[str, datetime] = {}

    def can_submit(self, key: str, max_attempts: int = 3, window_ms: int = 60000) -> bool:
        """Return True and record the attempt if ``key`` is within its budget.

        A denied call leaves the stored timestamps untouched, so the window
        only moves once the oldest retained attempt ages out.
        """
        if not key:
            raise ValueError("key must be a non-empty string")
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if window_ms < 1:
            raise ValueError("window_ms must be >= 1")

        window = timedelta(milliseconds=window_ms)

        with self._lock:
            now = self._clock()
            recent = [ts for ts in self._timestamps.get(key, []) if now - ts < window]

            if len(recent) >= max_attempts:
                return False

            recent.append(now)
            self._timestamps[key] = recent
            expires = now + window
            if key not in self._expires or self._expires[key] < expires:
                self._expires[key] = expires

            self._allowed_calls += 1
            if self._sweep_every and self._allowed_calls % self._sweep_every == 0:
                self._sweep(now)

            return True

    def sweep(self, now: datetime | None = None) -> int:
        """Evict keys whose newest attempt fell out of the window it was recorded with.

        Returns the number of evicted keys.
        """
        with self._lock:
            return self._sweep(now or self._clock())

    def attempts(self, key: str) -> list[datetime]:
        with self._lock:
            return list(self._timestamps.get(key, []))

    def reset(self) -> None:
        with self._lock:
            self._timestamps.clear()
            self._expires.clear()
            self._allowed_calls = 0

    def __len__(self) -> int:
        return len(self._timestamps)

    def _sweep(self, now: datetime) -> int:
        idle = [key for key, expires in self._expires.items() if expires <= now]
        for key in idle:
            del self._timestamps[key]
            del self._expires[key]
        return len(idle)
