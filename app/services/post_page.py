"""Turn resolved post props into the page the reader sees."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from jinja2 import Environment
from markupsafe import Markup

from app import config
from app.models.post import Post, PostProps
from app.services import dates, i18n, rich_text
from app.services.reading_time import estimate_reading_time


POST_TEMPLATE = "post.html"
FALLBACK_TEMPLATE = "post_fallback.html"


class RenderState(str, Enum):
    RESOLVING = "resolving"
    READY = "ready"


@dataclass(frozen=True, slots=True)
class SectionView:
    heading: str
    body_html: Markup


@dataclass(frozen=True, slots=True)
class NeighbourLink:
    slug: str
    title: str


@dataclass(frozen=True, slots=True)
class CommentWidget:
    repo: Optional[str]
    theme: str

    @property
    def enabled(self) -> bool:
        return bool(self.repo)


@dataclass(frozen=True, slots=True)
class PostPage:
    page_title: str
    slug: str
    title: str
    banner_url: Optional[str]
    published_at: str
    author: str
    reading_time: str
    edited_at: Optional[str]
    sections: List[SectionView]
    prev_post: Optional[NeighbourLink]
    next_post: Optional[NeighbourLink]
    comments: CommentWidget
    preview_active: bool
    lang: str


def _neighbour_link(post: Optional[Post]) -> Optional[NeighbourLink]:
    if post is None:
        return None
    return NeighbourLink(slug=post.uid, title=post.data.title)


def build_post_page(props: PostProps, lang: str | None = None) -> PostPage:
    lang = i18n.normalize_lang(lang)
    post = props.post
    edited_at = None
    if post.was_edited:
        edited_at = i18n.labels(lang)["edited"].format(date=dates.format_date_hours(post.last_publication_date, lang))

    return PostPage(
        page_title=f"{post.data.title} | {config.SITE_NAME}",
        slug=post.uid,
        title=post.data.title,
        banner_url=post.data.banner_url,
        published_at=dates.format_date(post.first_publication_date, lang),
        author=post.data.author,
        reading_time=estimate_reading_time(post.data.content),
        edited_at=edited_at,
        sections=[
            SectionView(heading=section.heading, body_html=rich_text.as_html(section.body))
            for section in post.data.content
        ],
        prev_post=_neighbour_link(props.prev_post),
        next_post=_neighbour_link(props.next_post),
        comments=CommentWidget(repo=config.COMMENTS_REPO, theme=config.COMMENTS_THEME),
        preview_active=bool(props.preview_ref),
        lang=lang,
    )


def page_context(page: PostPage) -> dict:
    return {
        "page": page,
        "state": RenderState.READY,
        "labels": i18n.labels(page.lang),
        "current_lang": page.lang,
        "available_langs": i18n.SUPPORTED_LANGUAGES,
    }


def fallback_context(slug: str, lang: str | None = None) -> dict:
    lang = i18n.normalize_lang(lang)
    return {
        "slug": slug,
        "state": RenderState.RESOLVING,
        "labels": i18n.labels(lang),
        "current_lang": lang,
        "available_langs": i18n.SUPPORTED_LANGUAGES,
    }


def render_post_page(env: Environment, page: PostPage) -> str:
    return env.get_template(POST_TEMPLATE).render(page_context(page))


def render_fallback_page(env: Environment, slug: str, lang: str | None = None) -> str:
    return env.get_template(FALLBACK_TEMPLATE).render(fallback_context(slug, lang))


def render(env: Environment, state: RenderState, slug: str, props: Optional[PostProps] = None, lang: str | None = None) -> str:
    """Render the post page for the given state; no work happens while resolving."""
    if state is RenderState.RESOLVING:
        return render_fallback_page(env, slug, lang)
    if props is None:
        raise ValueError("Ready pages need resolved post props")
    return render_post_page(env, build_post_page(props, lang))
