"""MediaWiki Action API 클라이언트 (httpx)

- 프로세스 단위로 httpx.Client를 재사용해서 커넥션/TLS 오버헤드를 줄입니다.
- list/prop 쿼리는 continue 토큰을 따라 끝까지 읽습니다.
- 존재하지 않는 페이지는 빈 값으로 돌려줍니다 (jWiki와 같은 관례).
"""

from __future__ import annotations

import threading
from typing import Any, Callable, Dict, List, Optional

import httpx

from src.core.config import settings
from src.core.exceptions import ContentSourceException, NetworkTimeoutException
from src.core.logging import logger, sanitize_for_log

TITLE_SEPARATOR = "|"


class MediaWikiClient:
    """MediaWiki 기반 ContentSource 구현"""

    def __init__(
        self,
        api_url: Optional[str] = None,
        *,
        timeout_s: Optional[float] = None,
        user_agent: Optional[str] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.api_url = api_url or settings.wiki_api_url
        self.timeout_s = timeout_s or settings.wiki_http_timeout_s
        self._owns_client = client is None
        self._client = client or httpx.Client(
            headers=self.default_headers(user_agent),
            timeout=self.timeout_s,
            follow_redirects=True,
        )

    def default_headers(self, user_agent: Optional[str] = None) -> Dict[str, str]:
        return {
            "User-Agent": user_agent or settings.wiki_user_agent,
            "Accept": "application/json",
        }

    # ------------------------------------------------------------------
    # 저수준 호출
    # ------------------------------------------------------------------

    def _get(self, params: Dict[str, Any]) -> Dict[str, Any]:
        query = {"action": "query", "format": "json", "formatversion": "2"}
        query.update(params)
        try:
            resp = self._client.get(self.api_url, params=query)
        except httpx.TimeoutException as e:
            logger.warning(f"[WIKI] timeout: {type(e).__name__}")
            raise NetworkTimeoutException(operation=str(params.get("list") or params.get("prop")), timeout_s=self.timeout_s)
        except httpx.HTTPError as e:
            logger.warning(f"[WIKI] request failed: {type(e).__name__}: {e!r}")
            raise ContentSourceException(
                "MediaWiki request failed",
                details={"error": f"{type(e).__name__}: {e}"},
            )

        if resp.status_code >= 400:
            raise ContentSourceException(
                f"MediaWiki returned HTTP {resp.status_code}",
                error_code="CONTENT_SOURCE_HTTP_ERROR",
                details={"status_code": resp.status_code},
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise ContentSourceException(
                "MediaWiki returned invalid JSON",
                error_code="CONTENT_SOURCE_PARSE_ERROR",
                details={"error": str(e)},
            )

        if "error" in data:
            error = data["error"]
            raise ContentSourceException(
                f"MediaWiki API error: {error.get('info', error.get('code', 'unknown'))}",
                error_code="CONTENT_SOURCE_API_ERROR",
                details={"code": error.get("code")},
            )
        return data

    def _collect(
        self,
        params: Dict[str, Any],
        extract: Callable[[Dict[str, Any]], List[str]],
        limit: Optional[int] = None,
    ) -> List[str]:
        """continue 토큰을 따라가며 결과 수집"""
        results: List[str] = []
        cont: Dict[str, Any] = {}
        while True:
            data = self._get({**params, **cont})
            results.extend(extract(data))
            if limit is not None and len(results) >= limit:
                return results[:limit]
            if "continue" not in data:
                return results
            cont = data["continue"]

    @staticmethod
    def _first_page(data: Dict[str, Any]) -> Dict[str, Any]:
        pages = data.get("query", {}).get("pages") or [{}]
        return pages[0]

    @staticmethod
    def _is_missing(page: Dict[str, Any]) -> bool:
        return not page or bool(page.get("missing")) or bool(page.get("invalid"))

    @staticmethod
    def _is_invalid_title(title: str) -> bool:
        """'|'는 titles 파라미터에서 구분자라 한 제목으로 보낼 수 없음 (invalid 페이지 취급)"""
        if TITLE_SEPARATOR in title:
            logger.info(f"[WIKI] invalid title (contains '|'): '{sanitize_for_log(title)}'")
            return True
        return False

    # ------------------------------------------------------------------
    # ContentSource
    # ------------------------------------------------------------------

    def search(self, term: str, limit: int) -> List[str]:
        if limit <= 0:
            return []
        logger.debug(f"[WIKI] search '{sanitize_for_log(term)}' limit={limit}")
        return self._collect(
            {"list": "search", "srsearch": term, "srlimit": min(limit, 500), "srprop": ""},
            lambda data: [hit["title"] for hit in data.get("query", {}).get("search", [])],
            limit=limit,
        )

    def get_page_text(self, title: str) -> str:
        if self._is_invalid_title(title):
            return ""
        data = self._get({
            "prop": "revisions",
            "titles": title,
            "rvprop": "content",
            "rvslots": "main",
        })
        page = self._first_page(data)
        if self._is_missing(page):
            logger.info(f"[WIKI] page missing: '{sanitize_for_log(title)}'")
            return ""
        revisions = page.get("revisions") or []
        if not revisions:
            return ""
        return revisions[0].get("slots", {}).get("main", {}).get("content", "")

    def links_on_page(self, title: str) -> List[str]:
        def extract(data: Dict[str, Any]) -> List[str]:
            page = self._first_page(data)
            return [link["title"] for link in page.get("links", [])]

        if self._is_invalid_title(title):
            return []
        return self._collect(
            {"prop": "links", "titles": title, "plnamespace": 0, "pllimit": "max"},
            extract,
        )

    def category_members(self, category: str) -> List[str]:
        if self._is_invalid_title(category):
            return []
        return self._collect(
            {"list": "categorymembers", "cmtitle": category, "cmlimit": "max"},
            lambda data: [m["title"] for m in data.get("query", {}).get("categorymembers", [])],
        )

    def categories_on_page(self, title: str) -> List[str]:
        def extract(data: Dict[str, Any]) -> List[str]:
            page = self._first_page(data)
            return [c["title"] for c in page.get("categories", [])]

        if self._is_invalid_title(title):
            return []
        return self._collect(
            {"prop": "categories", "titles": title, "cllimit": "max"},
            extract,
        )

    def last_editor(self, title: str) -> str:
        if self._is_invalid_title(title):
            return ""
        data = self._get({"prop": "revisions", "titles": title, "rvprop": "user", "rvlimit": 1})
        page = self._first_page(data)
        if self._is_missing(page):
            return ""
        revisions = page.get("revisions") or []
        return revisions[0].get("user", "") if revisions else ""

    def exists(self, title: str) -> bool:
        if self._is_invalid_title(title):
            return False
        data = self._get({"prop": "info", "titles": title})
        return not self._is_missing(self._first_page(data))

    def close(self) -> None:
        if self._owns_client:
            self._client.close()


_shared_client: Optional[MediaWikiClient] = None
_shared_lock = threading.Lock()


def get_shared_wiki_client() -> MediaWikiClient:
    global _shared_client
    with _shared_lock:
        if _shared_client is None:
            _shared_client = MediaWikiClient()
        return _shared_client


def shutdown_shared_wiki_client() -> None:
    global _shared_client
    with _shared_lock:
        if _shared_client is None:
            return
        try:
            _shared_client.close()
        except Exception as e:
            logger.info(f"[WIKI] close failed: {type(e).__name__}")
        _shared_client = None
