import logging
from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import RedirectResponse

from app import config
from app.models.post import Post
from app.routers.pages import get_client
from app.services.prismic import PrismicClient


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


@router.get("/preview", name="preview")
def enter_preview(
    token: str = Query(...),
    document_id: str = Query(..., alias="documentId"),
    client: PrismicClient = Depends(get_client),
) -> RedirectResponse:
    document = client.get_by_id(document_id, ref=token)
    if document is None:
        # The toolbar sync sends the slug instead of the id.
        document = client.get_by_uid(config.DOCUMENT_TYPE, document_id, ref=token)
    if document is None:
        raise HTTPException(status_code=404, detail="Preview document not found")

    post = Post.from_document(document)
    logger.info("Entering preview for %s", post.uid)
    response = RedirectResponse(f"/post/{post.uid}", status_code=307)
    response.set_cookie(config.PREVIEW_COOKIE, token, httponly=True, samesite="lax")
    return response


@router.get("/exit-preview", name="exit_preview")
def exit_preview(slug: Optional[str] = Query(None)) -> RedirectResponse:
    target = f"/post/{quote(slug)}" if slug else "/"
    response = RedirectResponse(target, status_code=307)
    response.delete_cookie(config.PREVIEW_COOKIE)
    return response
