"""Thin client for the Prismic REST API v2."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence

import httpx

from app import config


logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "User-Agent": "spacetravelling/1.0",
}


class PrismicError(RuntimeError):
    """The API answered with something we cannot use."""


def at(path: str, value: str) -> str:
    """Build an ``at`` predicate, e.g. ``[at(document.type, "posts")]``."""
    return f"[at({path}, {json.dumps(value)})]"


@dataclass(slots=True)
class SearchResponse:
    results: List[Dict[str, Any]] = field(default_factory=list)
    page: int = 1
    total_pages: int = 1

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "SearchResponse":
        return cls(
            results=list(payload.get("results") or []),
            page=int(payload.get("page") or 1),
            total_pages=int(payload.get("total_pages") or 1),
        )


class PrismicClient:
    def __init__(
        self,
        endpoint: str,
        *,
        access_token: Optional[str] = None,
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.endpoint = endpoint.rstrip("/")
        self.access_token = access_token
        self._client = client or httpx.Client(headers=DEFAULT_HEADERS, timeout=timeout)

    def close(self) -> None:
        self._client.close()

    def _get(self, url: str, params: Dict[str, Any]) -> Dict[str, Any]:
        if self.access_token:
            params = {**params, "access_token": self.access_token}
        response = self._client.get(url, params=params)
        response.raise_for_status()
        return response.json()

    def master_ref(self) -> str:
        payload = self._get(self.endpoint, {})
        for ref in payload.get("refs") or []:
            if ref.get("isMasterRef"):
                return ref["ref"]
        raise PrismicError(f"No master ref advertised by {self.endpoint}")

    def query(
        self,
        predicates: Sequence[str],
        *,
        ref: Optional[str] = None,
        page_size: int = 20,
        page: int = 1,
        orderings: Optional[str] = None,
        after: Optional[str] = None,
        fetch: Optional[Iterable[str]] = None,
    ) -> SearchResponse:
        params: Dict[str, Any] = {
            "ref": ref or self.master_ref(),
            "q": f"[{''.join(predicates)}]",
            "pageSize": page_size,
            "page": page,
        }
        if orderings:
            params["orderings"] = orderings
        if after:
            params["after"] = after
        if fetch:
            params["fetch"] = ",".join(fetch)
        logger.debug("Prismic query %s", params)
        payload = self._get(f"{self.endpoint}/documents/search", params)
        return SearchResponse.from_payload(payload)

    def get_by_uid(self, document_type: str, uid: str, *, ref: Optional[str] = None) -> Optional[Dict[str, Any]]:
        response = self.query([at(f"my.{document_type}.uid", uid)], ref=ref, page_size=1)
        return response.results[0] if response.results else None

    def get_by_id(self, document_id: str, *, ref: Optional[str] = None) -> Optional[Dict[str, Any]]:
        response = self.query([at("document.id", document_id)], ref=ref, page_size=1)
        return response.results[0] if response.results else None


def get_prismic_client() -> PrismicClient:
    return PrismicClient(
        config.PRISMIC_API_ENDPOINT,
        access_token=config.PRISMIC_ACCESS_TOKEN,
        timeout=config.HTTP_TIMEOUT,
    )
