from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from functools import lru_cache

import httpx
import structlog
from pydantic import BaseModel, TypeAdapter

from ewm.core.config import settings
from ewm.core.dates import format_dt
from ewm.models.base import utcnow

logger = structlog.get_logger(__name__)


class ViewStats(BaseModel):
    app: str
    uri: str
    hits: int


_view_stats_list = TypeAdapter(list[ViewStats])


class StatsClient:
    """Synchronous client of the stats service (``POST /hit``, ``GET /stats``)."""

    def __init__(
        self,
        base_url: str | None = None,
        *,
        http: httpx.Client | None = None,
        app_name: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self._app_name = app_name or settings.app_name
        self._http = http or httpx.Client(
            base_url=base_url or settings.stats_server_url,
            timeout=timeout or settings.stats_timeout_seconds,
        )

    @property
    def app_name(self) -> str:
        return self._app_name

    def close(self) -> None:
        self._http.close()

    def hit(self, uri: str, ip: str, timestamp: datetime | None = None) -> bool:
        """Record one hit. Failures are logged and reported as ``False``."""
        payload = {
            "app": self._app_name,
            "uri": uri,
            "ip": ip,
            "timestamp": format_dt(timestamp or utcnow()),
        }
        try:
            resp = self._http.post("/hit", json=payload)
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("stats_hit_failed", uri=uri, error=str(exc))
            return False
        logger.debug("stats_hit_saved", uri=uri)
        return True

    def get_stats(
        self,
        start: datetime,
        end: datetime,
        uris: Iterable[str] | None = None,
        unique: bool = False,
    ) -> list[ViewStats]:
        params: list[tuple[str, str]] = [
            ("start", format_dt(start)),
            ("end", format_dt(end)),
            ("unique", "true" if unique else "false"),
        ]
        params.extend(("uris", uri) for uri in uris or ())

        resp = self._http.get("/stats", params=params)
        resp.raise_for_status()
        return _view_stats_list.validate_python(resp.json())

    def views_for(
        self,
        uris: Iterable[str],
        start: datetime,
        end: datetime | None = None,
        unique: bool | None = None,
    ) -> dict[str, int]:
        """Hits per URI; an unreachable stats service yields an empty mapping."""
        uri_list = list(dict.fromkeys(uris))
        if not uri_list:
            return {}

        try:
            stats = self.get_stats(
                start,
                end or utcnow(),
                uri_list,
                settings.stats_unique_views if unique is None else unique,
            )
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("stats_lookup_failed", uris=len(uri_list), error=str(exc))
            return {}

        views: dict[str, int] = {}
        for item in stats:
            views[item.uri] = views.get(item.uri, 0) + item.hits
        return views


@lru_cache(maxsize=1)
def get_stats_client() -> StatsClient:
    return StatsClient()
