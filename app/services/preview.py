from __future__ import annotations

import json
import logging
from typing import Mapping, Optional
from urllib.parse import unquote, urlencode

from app import config


logger = logging.getLogger(__name__)

PREVIEW_URL = "/api/preview"
EXIT_PREVIEW_URL = "/api/exit-preview"


def active_preview_ref(cookies: Mapping[str, str]) -> Optional[str]:
    """Preview ref stored when the reader entered preview mode."""
    return cookies.get(config.PREVIEW_COOKIE) or None


def toolbar_preview_ref(cookies: Mapping[str, str], repository: Optional[str] = None) -> Optional[str]:
    """Ref the CMS toolbar currently wants to preview, if any."""
    raw = cookies.get(config.PRISMIC_PREVIEW_COOKIE)
    if not raw:
        return None
    try:
        payload = json.loads(unquote(raw))
    except (TypeError, ValueError):
        logger.warning("Ignoring malformed %s cookie", config.PRISMIC_PREVIEW_COOKIE)
        return None
    if not isinstance(payload, dict):
        return None
    repository = repository or config.prismic_repository_name()
    entry = payload.get(f"{repository}.prismic.io")
    if isinstance(entry, dict) and entry.get("preview"):
        return str(entry["preview"])
    return None


def sync_preview(
    cookies: Mapping[str, str],
    preview_ref: Optional[str],
    document_uid: str,
    *,
    repository: Optional[str] = None,
) -> Optional[str]:
    """One-shot check after a post resolves.

    Returns the URL the reader must be sent to so the active preview ref
    matches the toolbar's, or ``None`` when they already agree.
    """
    has_toolbar_cookie = bool(cookies.get(config.PRISMIC_PREVIEW_COOKIE))
    toolbar_ref = toolbar_preview_ref(cookies, repository)

    if has_toolbar_cookie:
        if toolbar_ref and toolbar_ref != preview_ref:
            logger.info("Preview ref changed for %s, re-entering preview", document_uid)
            return f"{PREVIEW_URL}?{urlencode({'token': toolbar_ref, 'documentId': document_uid})}"
        return None

    if preview_ref:
        logger.info("Toolbar preview ended for %s, leaving preview mode", document_uid)
        return f"{EXIT_PREVIEW_URL}?{urlencode({'slug': document_uid})}"
    return None
