import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from app import config
from app.models.post import PostProps
from app.services import i18n, post_loader, post_page, preview
from app.services.prismic import PrismicClient


logger = logging.getLogger(__name__)

router = APIRouter()
templates = Jinja2Templates(directory=str(config.TEMPLATES_DIR))


def get_language(lang: Optional[str] = Query(None, alias="lang")) -> str:
    """Get current language from query parameter or default."""
    return i18n.normalize_lang(lang)


def get_client(request: Request) -> PrismicClient:
    return request.app.state.prismic_client


def get_known_slugs(request: Request) -> frozenset:
    return getattr(request.app.state, "known_slugs", frozenset())


def _resolve(client: PrismicClient, slug: str, preview_ref: Optional[str]) -> PostProps:
    try:
        return post_loader.load_post_props(client, slug, preview_ref)
    except post_loader.PostNotFound:
        raise HTTPException(status_code=404, detail="Post not found")


def _ready_response(request: Request, client: PrismicClient, slug: str, lang: str):
    preview_ref = preview.active_preview_ref(request.cookies)
    props = _resolve(client, slug, preview_ref)

    redirect_url = preview.sync_preview(request.cookies, preview_ref, props.post.uid)
    if redirect_url:
        return RedirectResponse(redirect_url, status_code=307)

    page = post_page.build_post_page(props, lang)
    return templates.TemplateResponse(request, post_page.POST_TEMPLATE, post_page.page_context(page))


@router.get("/post/{slug}", response_class=HTMLResponse, name="post_detail", response_model=None)
def post_detail(
    request: Request,
    slug: str,
    lang: str = Depends(get_language),
    client: PrismicClient = Depends(get_client),
    known_slugs: frozenset = Depends(get_known_slugs),
):
    if slug not in known_slugs and preview.active_preview_ref(request.cookies) is None:
        logger.info("Serving fallback for non-enumerated post %s", slug)
        return templates.TemplateResponse(
            request, post_page.FALLBACK_TEMPLATE, post_page.fallback_context(slug, lang)
        )
    return _ready_response(request, client, slug, lang)


@router.get("/post/{slug}/resolve", response_class=HTMLResponse, name="post_resolve", response_model=None)
def post_resolve(
    request: Request,
    slug: str,
    lang: str = Depends(get_language),
    client: PrismicClient = Depends(get_client),
):
    return _ready_response(request, client, slug, lang)
