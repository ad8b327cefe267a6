"""In-memory TTL cache of sessions."""

from cachetools import TTLCache

from transcript_topics_mcp.session import Session


class SessionCache:
    def __init__(self, max_size: int = 100, ttl: int = 3600, debug_parsing: bool = False):
        self._cache: TTLCache = TTLCache(maxsize=max_size, ttl=ttl)
        self._debug_parsing = debug_parsing
        self._hits = 0
        self._misses = 0

    def get(self, session_id: str) -> Session | None:
        result = self._cache.get(session_id)
        if result is not None:
            self._hits += 1
        else:
            self._misses += 1
        return result

    def get_or_create(self, session_id: str) -> Session:
        session = self.get(session_id)
        if session is None:
            session = Session(session_id, debug_parsing=self._debug_parsing)
        # re-inserting restarts the TTL
        self._cache[session_id] = session
        return session

    def drop(self, session_id: str) -> bool:
        return self._cache.pop(session_id, None) is not None

    def stats(self) -> dict:
        return {
            "size": len(self._cache),
            "max_size": self._cache.maxsize,
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": round(self._hits / max(self._hits + self._misses, 1) * 100, 1),
        }
