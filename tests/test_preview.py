import json
from urllib.parse import quote

from app import config
from app.services import preview


def _cookies(toolbar_ref=None, active_ref=None, raw_toolbar=None):
    cookies = {}
    if raw_toolbar is not None:
        cookies[config.PRISMIC_PREVIEW_COOKIE] = raw_toolbar
    elif toolbar_ref is not None:
        cookies[config.PRISMIC_PREVIEW_COOKIE] = quote(json.dumps({"blog.prismic.io": {"preview": toolbar_ref}}))
    if active_ref is not None:
        cookies[config.PREVIEW_COOKIE] = active_ref
    return cookies


def test_toolbar_ref_is_read_for_repository():
    assert preview.toolbar_preview_ref(_cookies(toolbar_ref="abc"), "blog") == "abc"
    assert preview.toolbar_preview_ref(_cookies(toolbar_ref="abc"), "other") is None


def test_malformed_toolbar_cookie_is_ignored():
    assert preview.toolbar_preview_ref(_cookies(raw_toolbar="{not json"), "blog") is None


def test_no_preview_anywhere_needs_no_redirect():
    assert preview.sync_preview({}, None, "post", repository="blog") is None


def test_matching_refs_need_no_redirect():
    cookies = _cookies(toolbar_ref="abc", active_ref="abc")
    assert preview.sync_preview(cookies, "abc", "post", repository="blog") is None


def test_new_toolbar_ref_redirects_into_preview():
    cookies = _cookies(toolbar_ref="new", active_ref="old")
    assert preview.sync_preview(cookies, "old", "my-post", repository="blog") == (
        "/api/preview?token=new&documentId=my-post"
    )


def test_ended_toolbar_session_exits_preview():
    assert preview.sync_preview({}, "old", "my-post", repository="blog") == "/api/exit-preview?slug=my-post"


def test_active_ref_comes_from_preview_cookie():
    assert preview.active_preview_ref(_cookies(active_ref="abc")) == "abc"
    assert preview.active_preview_ref({}) is None
