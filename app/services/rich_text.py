"""Serialize Prismic structured text to plain text and HTML."""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List, Optional

from markupsafe import Markup, escape


Node = Dict[str, Any]
LinkResolver = Callable[[Node], str]

BLOCK_TAGS = {
    "paragraph": "p",
    "heading1": "h1",
    "heading2": "h2",
    "heading3": "h3",
    "heading4": "h4",
    "heading5": "h5",
    "heading6": "h6",
    "preformatted": "pre",
}

LIST_TAGS = {
    "list-item": "ul",
    "o-list-item": "ol",
}


def default_link_resolver(link: Node) -> str:
    uid = link.get("uid")
    if uid:
        return f"/post/{uid}"
    return "/"


def as_text(nodes: Optional[Iterable[Node]], separator: str = " ") -> str:
    return separator.join(str(node.get("text") or "") for node in nodes or [] if "text" in node)


def as_html(nodes: Optional[Iterable[Node]], link_resolver: LinkResolver = default_link_resolver) -> Markup:
    parts: List[str] = []
    open_list: Optional[str] = None

    for node in nodes or []:
        node_type = node.get("type")
        list_tag = LIST_TAGS.get(node_type)

        if open_list and list_tag != open_list:
            parts.append(f"</{open_list}>")
            open_list = None
        if list_tag and open_list is None:
            parts.append(f"<{list_tag}>")
            open_list = list_tag

        if list_tag:
            parts.append(f"<li>{_serialize_spans(node, link_resolver)}</li>")
        elif node_type in BLOCK_TAGS:
            tag = BLOCK_TAGS[node_type]
            parts.append(f"<{tag}>{_serialize_spans(node, link_resolver)}</{tag}>")
        elif node_type == "image":
            parts.append(_serialize_image(node, link_resolver))
        elif node_type == "embed":
            parts.append(_serialize_embed(node))

    if open_list:
        parts.append(f"</{open_list}>")

    return Markup("".join(parts))


def _serialize_image(node: Node, link_resolver: LinkResolver) -> str:
    img = f'<img src="{escape(node.get("url") or "")}" alt="{escape(node.get("alt") or "")}" />'
    link = node.get("linkTo")
    if link:
        img = f'<a href="{escape(_link_href(link, link_resolver))}">{img}</a>'
    return f'<p class="block-img">{img}</p>'


def _serialize_embed(node: Node) -> str:
    oembed = node.get("oembed") or {}
    embed_html = oembed.get("html") or ""
    provider = escape(oembed.get("provider_name") or "")
    embed_url = escape(oembed.get("embed_url") or "")
    # oEmbed markup comes from the provider and is trusted by the CMS.
    return f'<div data-oembed="{embed_url}" data-oembed-provider="{provider}">{embed_html}</div>'


def _link_href(link: Node, link_resolver: LinkResolver) -> str:
    if link.get("link_type") == "Document":
        return link_resolver(link)
    return str(link.get("url") or "")


def _span_open(span: Node, link_resolver: LinkResolver) -> str:
    span_type = span.get("type")
    data = span.get("data") or {}
    if span_type == "strong":
        return "<strong>"
    if span_type == "em":
        return "<em>"
    if span_type == "hyperlink":
        target = ' target="_blank" rel="noopener noreferrer"' if data.get("target") else ""
        return f'<a href="{escape(_link_href(data, link_resolver))}"{target}>'
    if span_type == "label":
        return f'<span class="{escape(data.get("label") or "")}">'
    return ""


def _span_close(span: Node) -> str:
    return {
        "strong": "</strong>",
        "em": "</em>",
        "hyperlink": "</a>",
        "label": "</span>",
    }.get(span.get("type"), "")


def _serialize_spans(node: Node, link_resolver: LinkResolver) -> str:
    text = str(node.get("text") or "")
    spans = sorted(node.get("spans") or [], key=lambda span: (span.get("start", 0), -span.get("end", 0)))

    opens: Dict[int, List[Node]] = {}
    closes: Dict[int, List[Node]] = {}
    for span in spans:
        start = max(0, int(span.get("start", 0)))
        end = min(len(text), int(span.get("end", 0)))
        if end <= start:
            continue
        opens.setdefault(start, []).append(span)
        closes.setdefault(end, []).insert(0, span)

    out: List[str] = []
    for index, char in enumerate(text):
        for span in closes.get(index, []):
            out.append(_span_close(span))
        for span in opens.get(index, []):
            out.append(_span_open(span, link_resolver))
        out.append("<br />" if char == "\n" else str(escape(char)))
    for span in closes.get(len(text), []):
        out.append(_span_close(span))
    return "".join(out)
