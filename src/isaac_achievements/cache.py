"""
Cache layer for wiki pages and extraction results using diskcache.

Fetched pages are kept for a limited time to avoid hammering the wiki on
repeated runs. The last successful result is kept indefinitely so it stays
available when a later refresh fails. Entries are tagged (wiki, result) for
selective clearing.
"""

from pathlib import Path
from typing import Any

from diskcache import Cache as DiskCache


class CacheClient:
    def __init__(self, cache_dir: Path):
        self._cache_dir = cache_dir
        self._cache_dir.mkdir(parents=True, exist_ok=True)
        self._cache = DiskCache(str(self._cache_dir))

    def get_wiki_page(self, source_url: str) -> str | None:
        return self._cache.get(f"wiki:{source_url}")

    def set_wiki_page(self, source_url: str, content: str, ttl: int | None = None) -> None:
        # ttl=None keeps the page until evicted; ttl=0 disables page caching
        if ttl is not None and ttl <= 0:
            self.delete_wiki_page(source_url)
            return
        self._cache.set(f"wiki:{source_url}", content, expire=ttl, tag="wiki")

    def delete_wiki_page(self, source_url: str) -> None:
        self._cache.delete(f"wiki:{source_url}")

    def get_result(self, source_url: str) -> dict[str, Any] | None:
        return self._cache.get(f"result:{source_url}")

    def set_result(self, source_url: str, data: dict[str, Any]) -> None:
        self._cache.set(f"result:{source_url}", data, expire=None, tag="result")

    def clear_cache(self, tags: list[str] | None = None) -> None:
        if tags:
            for tag in tags:
                self._cache.evict(tag)
        else:
            self._cache.clear()
