from __future__ import annotations

import logging
from typing import List, Optional

from app import config
from app.models.post import Post, PostProps, StaticPaths
from app.services.prismic import PrismicClient, at


logger = logging.getLogger(__name__)

LISTING_PAGE_SIZE = 100


class PostNotFound(LookupError):
    def __init__(self, slug: str) -> None:
        super().__init__(f"Post not found: {slug}")
        self.slug = slug


def load_static_paths(client: PrismicClient, *, document_type: str = config.DOCUMENT_TYPE) -> StaticPaths:
    """Enumerate every known slug so those pages can be generated ahead of time."""
    slugs: List[str] = []
    ref = client.master_ref()
    page = 1
    while True:
        response = client.query(
            [at("document.type", document_type)],
            ref=ref,
            page_size=LISTING_PAGE_SIZE,
            page=page,
            orderings="[document.last_publication_date]",
        )
        slugs.extend(str(result["uid"]) for result in response.results if result.get("uid"))
        if page >= response.total_pages or not response.results:
            break
        page += 1
    logger.info("Enumerated %d %s paths", len(slugs), document_type)
    return StaticPaths(slugs=slugs, fallback=True)


def load_post_props(
    client: PrismicClient,
    slug: str,
    preview_ref: Optional[str] = None,
    *,
    document_type: str = config.DOCUMENT_TYPE,
) -> PostProps:
    """Resolve a post and its neighbours by last publication date.

    The preview ref only applies to the post itself; neighbours always come
    from published content.
    """
    master_ref = client.master_ref()
    document = client.get_by_uid(document_type, slug, ref=preview_ref or master_ref)
    if document is None:
        raise PostNotFound(slug)

    post = Post.from_document(document)
    prev_post = _load_neighbour(client, post, ref=master_ref, descending=True, document_type=document_type)
    next_post = _load_neighbour(client, post, ref=master_ref, descending=False, document_type=document_type)

    return PostProps(post=post, preview_ref=preview_ref, prev_post=prev_post, next_post=next_post)


def _load_neighbour(
    client: PrismicClient,
    post: Post,
    *,
    ref: str,
    descending: bool,
    document_type: str,
) -> Optional[Post]:
    order = " desc" if descending else ""
    response = client.query(
        [at("document.type", document_type)],
        ref=ref,
        page_size=1,
        after=post.id,
        fetch=[f"{document_type}.title"],
        orderings=f"[document.last_publication_date{order}]",
    )
    if not response.results:
        return None
    return Post.from_document(response.results[0])
