"""SofaScore HTTP adapter returning explicit fetch results instead of raising."""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional
from urllib.parse import quote

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import setup_logger
from .constants import SOFASCORE_API_BASE, SOFASCORE_HEADERS
from .errors import APIError
from .settings import SOFASCORE_TIMEOUT_MS

log = setup_logger(__name__)

SOURCE = "SofaScore"


@dataclass(frozen=True)
class FetchResult:
    """Outcome of one GET: parsed JSON object on success, a reason on failure."""

    ok: bool
    data: Optional[Dict[str, Any]] = None
    reason: Optional[str] = None
    status_code: Optional[int] = None
    path: Optional[str] = None

    @classmethod
    def success(cls, data: Dict[str, Any], status_code: int = 200) -> "FetchResult":
        return cls(ok=True, data=data, status_code=status_code)

    @classmethod
    def failure(
        cls, reason: str, status_code: Optional[int] = None, path: Optional[str] = None
    ) -> "FetchResult":
        return cls(ok=False, reason=reason, status_code=status_code, path=path)

    def unwrap(self) -> Dict[str, Any]:
        if self.ok and self.data is not None:
            return self.data
        code = str(self.status_code) if self.status_code else (self.reason or "UNKNOWN").upper()
        raise APIError(SOURCE, code, self.path, self.reason)


def create_session(headers: Optional[Mapping[str, str]] = None) -> requests.Session:
    """Session carrying the browser headers; the mounted adapter never retries."""

    adapter = HTTPAdapter(
        max_retries=Retry(total=0, connect=0, read=0, raise_on_status=False)
    )
    session = requests.Session()
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    session.headers.update(dict(headers or SOFASCORE_HEADERS))
    return session


class SofascoreClient:
    def __init__(
        self,
        base_url: str = SOFASCORE_API_BASE,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
        session: Optional[Any] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout if timeout is not None else SOFASCORE_TIMEOUT_MS / 1000.0
        self._session = session or create_session(headers)

    def get_json(self, path: str, op: str = "get") -> FetchResult:
        url = f"{self.base_url}/{path.lstrip('/')}"
        t0 = time.perf_counter()
        try:
            response = self._session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            result = FetchResult.failure("network", path=path)
            self._log(op, path, t0, result, exc)
            return result

        status = getattr(response, "status_code", None)
        if status is None or not 200 <= status < 300:
            result = FetchResult.failure(f"http_{status}", status_code=status, path=path)
            self._log(op, path, t0, result)
            return result

        try:
            payload = response.json()
        except ValueError as exc:
            result = FetchResult.failure("parse", status_code=status, path=path)
            self._log(op, path, t0, result, exc)
            return result

        if not isinstance(payload, dict):
            result = FetchResult.failure("parse", status_code=status, path=path)
            self._log(op, path, t0, result)
            return result

        result = FetchResult.success(payload, status_code=status)
        self._log(op, path, t0, result)
        return result

    def search(self, query: str) -> FetchResult:
        return self.get_json(f"search/{quote(query, safe='')}", op="search")

    def team_last_events(self, team_id: int, page: int = 0) -> FetchResult:
        return self.get_json(f"team/{team_id}/events/last/{page}", op="team_last_events")

    def event_statistics(self, event_id: int) -> FetchResult:
        return self.get_json(f"event/{event_id}/statistics", op="event_statistics")

    @staticmethod
    def _log(op: str, path: str, t0: float, result: FetchResult, exc: Optional[Exception] = None) -> None:
        took_ms = int((time.perf_counter() - t0) * 1000)
        if result.ok:
            log.debug("provider=sofascore op=%s path=%s took_ms=%d result=ok", op, path, took_ms)
            return
        log.warning(
            "provider=sofascore op=%s path=%s took_ms=%d result=%s%s",
            op,
            path,
            took_ms,
            result.reason,
            f" err={exc}" if exc else "",
        )
