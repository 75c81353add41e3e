"""Shared fixtures: an in-memory Prismic API behind ``httpx.MockTransport``."""

from __future__ import annotations

import json
import re
from typing import Any, Dict, List

import httpx
import pytest
from jinja2 import Environment, FileSystemLoader, select_autoescape

from app import config
from app.services.prismic import PrismicClient


ENDPOINT = "https://spacetravelling.cdn.prismic.io/api/v2"
MASTER_REF = "master-ref"
PREVIEW_REF = "preview-ref"

_PREDICATE = re.compile(r'at\(([^,]+), ("(?:[^"\\]|\\.)*")\)')


def paragraph(text: str, spans: List[Dict[str, Any]] | None = None) -> Dict[str, Any]:
    return {"type": "paragraph", "text": text, "spans": spans or []}


def make_document(
    doc_id: str,
    uid: str,
    title: str,
    first: str,
    last: str,
    content: List[Dict[str, Any]] | None = None,
    banner: Dict[str, Any] | None = None,
) -> Dict[str, Any]:
    return {
        "id": doc_id,
        "uid": uid,
        "type": "posts",
        "first_publication_date": first,
        "last_publication_date": last,
        "data": {
            "title": title,
            "subtitle": f"About {title}",
            "banner": banner if banner is not None else {"url": f"https://images.prismic.io/{uid}.png"},
            "author": "Joseph Oliveira",
            "content": content
            if content is not None
            else [
                {"heading": "Proin et varius", "body": [paragraph("Lorem ipsum dolor sit amet")]},
                {"heading": "Cras laoreet", "body": [paragraph("Nullam dolor sapien"), paragraph("vulputate eu")]},
            ],
        },
    }


PUBLISHED = [
    make_document("p1", "first-post", "First post", "2021-03-20T10:00:00+0000", "2021-03-20T10:00:00+0000"),
    make_document("p2", "middle-post", "Middle post", "2021-03-22T10:00:00+0000", "2021-03-25T19:25:28+0000"),
    make_document("p3", "last-post", "Last post", "2021-03-28T08:00:00+0000", "2021-03-28T08:00:00+0000"),
]

DRAFTS = {
    "p2": make_document(
        "p2", "middle-post", "Middle post (draft)", "2021-03-22T10:00:00+0000", "2021-03-26T09:00:00+0000"
    ),
}


class FakePrismicApi:
    def __init__(self, documents: List[Dict[str, Any]], drafts: Dict[str, Dict[str, Any]] | None = None) -> None:
        self.documents = documents
        self.drafts = drafts or {}
        self.requests: List[httpx.Request] = []

    def _documents_for(self, ref: str) -> List[Dict[str, Any]]:
        if ref == PREVIEW_REF:
            return [self.drafts.get(doc["id"], doc) for doc in self.documents]
        if ref != MASTER_REF:
            raise ValueError(f"unknown ref {ref}")
        return list(self.documents)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path.endswith("/documents/search"):
            return self._search(request)
        return httpx.Response(200, json={"refs": [{"id": "master", "ref": MASTER_REF, "isMasterRef": True}]})

    def _search(self, request: httpx.Request) -> httpx.Response:
        params = request.url.params
        try:
            docs = self._documents_for(params["ref"])
        except ValueError:
            return httpx.Response(400, json={"message": "Invalid ref"})

        for path, raw_value in _PREDICATE.findall(params["q"]):
            value = json.loads(raw_value)
            if path == "document.type":
                docs = [doc for doc in docs if doc["type"] == value]
            elif path == "document.id":
                docs = [doc for doc in docs if doc["id"] == value]
            elif path.endswith(".uid"):
                docs = [doc for doc in docs if doc["uid"] == value]

        orderings = params.get("orderings")
        if orderings:
            docs.sort(key=lambda doc: doc["last_publication_date"], reverse=orderings.endswith("desc]"))

        after = params.get("after")
        if after:
            ids = [doc["id"] for doc in docs]
            docs = docs[ids.index(after) + 1 :] if after in ids else docs

        page_size = int(params.get("pageSize", 20))
        page = int(params.get("page", 1))
        total_pages = max(1, -(-len(docs) // page_size))
        results = docs[(page - 1) * page_size : page * page_size]

        fetch = params.get("fetch")
        if fetch:
            fields = [field.split(".", 1)[1] for field in fetch.split(",")]
            results = [{**doc, "data": {key: doc["data"][key] for key in fields}} for doc in results]

        return httpx.Response(
            200,
            json={"page": page, "results_per_page": page_size, "total_pages": total_pages, "results": results},
        )


@pytest.fixture(autouse=True)
def _utc_timezone(monkeypatch):
    monkeypatch.setattr(config, "SITE_TIMEZONE", "UTC")
    monkeypatch.setattr(config, "COMMENTS_REPO", "spacetravelling/comments")


@pytest.fixture()
def fake_api() -> FakePrismicApi:
    return FakePrismicApi(PUBLISHED, DRAFTS)


@pytest.fixture()
def prismic_client(fake_api):
    client = PrismicClient(ENDPOINT, client=httpx.Client(transport=httpx.MockTransport(fake_api)))
    yield client
    client.close()


@pytest.fixture()
def env() -> Environment:
    routes = {
        "post_detail": lambda params: f"/post/{params['slug']}",
        "post_resolve": lambda params: f"/post/{params['slug']}/resolve",
        "exit_preview": lambda params: "/api/exit-preview",
        "static": lambda params: f"/static{params.get('path', '')}",
    }
    environment = Environment(
        loader=FileSystemLoader(config.TEMPLATES_DIR),
        autoescape=select_autoescape(["html"]),
    )
    environment.globals["url_for"] = lambda name, **params: routes[name](params)
    return environment
