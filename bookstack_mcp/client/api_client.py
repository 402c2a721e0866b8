"""Async client for the BookStack REST API.

Payloads are returned as decoded JSON without further modelling; the MCP
tools pass them through to callers.

API reference: https://demo.bookstackapp.com/api/docs
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

import httpx

from bookstack_mcp.config.settings import UpstreamSettings
from bookstack_mcp.config_docs import DEFAULT_PAGE_COUNT, DEFAULT_PAGE_OFFSET
from bookstack_mcp.exceptions import BookStackApiError
from bookstack_mcp.logger import Logger

STATUS_PATH = "/api/status"
DEFAULT_REQUEST_TIMEOUT_SECONDS = 30.0


class EntityKind(str, Enum):
    """Entity collections exposed by the API, valued by their URL segment."""

    BOOK = "books"
    CHAPTER = "chapters"
    PAGE = "pages"
    SHELF = "shelves"
    USER = "users"

    @classmethod
    def parse(cls, name: str) -> "EntityKind":
        """Accept singular or plural names, case-insensitively."""
        lowered = name.strip().lower()
        for kind in cls:
            if lowered in (kind.value, kind.name.lower()):
                return kind
        raise ValueError(f"Unknown entity type: {name}")

    @classmethod
    def supported_names(cls) -> List[str]:
        return [kind.name.lower() for kind in cls]


class FilterOperator(str, Enum):
    EQ = "eq"
    NE = "ne"
    GT = "gt"
    LT = "lt"
    GTE = "gte"
    LTE = "lte"
    LIKE = "like"

    @classmethod
    def parse(
        cls, value: Optional[str], default: Optional["FilterOperator"] = None
    ) -> "FilterOperator":
        """Case-insensitive lookup; unknown operators fall back to ``default`` (LIKE)."""
        fallback = default or cls.LIKE
        if not value:
            return fallback
        try:
            return cls(value.strip().lower())
        except ValueError:
            return fallback


@dataclass(frozen=True)
class Filter:
    field: str
    value: str
    operator: FilterOperator = FilterOperator.LIKE

    def as_query(self) -> Dict[str, str]:
        value = self.value
        if self.operator is FilterOperator.LIKE and "%" not in value:
            value = f"%{value}%"
        return {f"filter[{self.field}:{self.operator.value}]": value}


class BookStackClient:
    """Thin async binding over ``httpx.AsyncClient``.

    Non-success responses raise BookStackApiError; transport failures surface as
    ``httpx.HTTPError`` subclasses.
    """

    def __init__(
        self,
        settings: UpstreamSettings,
        logger: Logger,
        timeout: float = DEFAULT_REQUEST_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings
        self.logger = logger
        self._http = httpx.AsyncClient(
            base_url=settings.base_url,
            headers={
                "Authorization": f"Token {settings.token_id}:{settings.token_secret}",
                "Accept": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self.settings.base_url

    @property
    def status_url(self) -> str:
        return self.settings.status_url

    async def close(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "BookStackClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def list(
        self,
        kind: EntityKind,
        offset: int = DEFAULT_PAGE_OFFSET,
        count: int = DEFAULT_PAGE_COUNT,
        filters: Optional[Sequence[Filter]] = None,
    ) -> Dict[str, Any]:
        params: Dict[str, Any] = {"offset": offset, "count": count}
        for item in filters or ():
            params.update(item.as_query())
        return await self._request_json("GET", f"/api/{kind.value}", params=params)

    async def read(self, kind: EntityKind, item_id: int) -> Dict[str, Any]:
        return await self._request_json("GET", f"/api/{kind.value}/{item_id}")

    async def create(self, kind: EntityKind, payload: Dict[str, Any]) -> Dict[str, Any]:
        body = {key: value for key, value in payload.items() if value is not None}
        return await self._request_json("POST", f"/api/{kind.value}", json=body)

    async def delete(self, kind: EntityKind, item_id: int) -> bool:
        await self._request("DELETE", f"/api/{kind.value}/{item_id}")
        return True

    async def fetch_status(self, timeout: Optional[float] = None) -> httpx.Response:
        """GET the unauthenticated status endpoint and return the raw response.

        The status is not checked here; callers classify it.
        """
        request = self._http.build_request(
            "GET", STATUS_PATH, timeout=timeout if timeout is not None else httpx.USE_CLIENT_DEFAULT
        )
        request.headers.pop("Authorization", None)
        return await self._http.send(request)

    async def _request_json(self, method: str, path: str, **kwargs: Any) -> Dict[str, Any]:
        response = await self._request(method, path, **kwargs)
        if not response.content:
            return {}
        return response.json()

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        self.logger.debug("BookStack request", method=method, path=path)
        response = await self._http.request(method, path, **kwargs)
        if response.is_error:
            message = _error_message(response)
            self.logger.warning(
                "BookStack request failed",
                method=method,
                path=path,
                status_code=response.status_code,
                error=message,
            )
            raise BookStackApiError(
                status_code=response.status_code,
                message=f"BookStack API returned {response.status_code}: {message}",
                details={"path": path},
            )
        return response


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return response.reason_phrase or "request failed"
