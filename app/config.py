from __future__ import annotations

import os
from pathlib import Path


BASE_DIR = Path(__file__).resolve().parent.parent
TEMPLATES_DIR = BASE_DIR / "templates"
STATIC_DIR = BASE_DIR / "static"

SITE_NAME = os.getenv("SPACETRAVELLING_SITE_NAME", "spacetravelling")

PRISMIC_API_ENDPOINT = os.getenv("PRISMIC_API_ENDPOINT", "https://spacetravelling.cdn.prismic.io/api/v2")
PRISMIC_ACCESS_TOKEN = os.getenv("PRISMIC_ACCESS_TOKEN") or None
DOCUMENT_TYPE = os.getenv("SPACETRAVELLING_DOCUMENT_TYPE", "posts")
HTTP_TIMEOUT = float(os.getenv("SPACETRAVELLING_HTTP_TIMEOUT", "10"))

# Cookie written by the Prismic toolbar, and our own preview-mode cookie.
PRISMIC_PREVIEW_COOKIE = "io.prismic.preview"
PREVIEW_COOKIE = os.getenv("SPACETRAVELLING_PREVIEW_COOKIE", "spacetravelling.preview")

SITE_TIMEZONE = os.getenv("SPACETRAVELLING_TIMEZONE", "America/Sao_Paulo")

COMMENTS_REPO = os.getenv("SPACETRAVELLING_COMMENTS_REPO") or None
COMMENTS_THEME = os.getenv("SPACETRAVELLING_COMMENTS_THEME", "github-dark")


def prismic_repository_name() -> str:
    """Repository name as it appears in the toolbar preview cookie."""
    host = PRISMIC_API_ENDPOINT.split("//", 1)[-1].split("/", 1)[0]
    return host.split(".", 1)[0]
