from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


RichTextNode = Dict[str, Any]


@dataclass(frozen=True, slots=True)
class ContentSection:
    heading: str
    body: Tuple[RichTextNode, ...] = ()

    @classmethod
    def from_raw(cls, raw: Dict[str, Any]) -> "ContentSection":
        heading = raw.get("heading") or ""
        # Prismic returns key text fields as plain strings, rich text as node lists
        if isinstance(heading, list):
            heading = " ".join(str(node.get("text") or "") for node in heading)
        body = raw.get("body") or []
        return cls(heading=str(heading), body=tuple(body))


@dataclass(frozen=True, slots=True)
class PostData:
    title: str
    subtitle: str = ""
    banner_url: Optional[str] = None
    author: str = ""
    content: Tuple[ContentSection, ...] = ()


@dataclass(frozen=True, slots=True)
class Post:
    uid: str
    first_publication_date: Optional[str]
    last_publication_date: Optional[str]
    data: PostData
    id: Optional[str] = None

    @property
    def was_edited(self) -> bool:
        return bool(self.last_publication_date) and self.last_publication_date != self.first_publication_date

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "Post":
        """Flatten a CMS document into the fields the post page needs."""
        data = document.get("data") or {}
        banner = data.get("banner") or {}
        content = data.get("content") or []
        return cls(
            id=document.get("id"),
            uid=str(document.get("uid") or ""),
            first_publication_date=document.get("first_publication_date"),
            last_publication_date=document.get("last_publication_date"),
            data=PostData(
                title=str(data.get("title") or ""),
                subtitle=str(data.get("subtitle") or ""),
                banner_url=banner.get("url") if isinstance(banner, dict) else None,
                author=str(data.get("author") or ""),
                content=tuple(ContentSection.from_raw(section) for section in content),
            ),
        )


@dataclass(frozen=True, slots=True)
class PostProps:
    post: Post
    preview_ref: Optional[str] = None
    prev_post: Optional[Post] = None
    next_post: Optional[Post] = None


@dataclass(slots=True)
class StaticPaths:
    slugs: List[str] = field(default_factory=list)
    fallback: bool = True
