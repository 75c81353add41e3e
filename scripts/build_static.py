from __future__ import annotations

import argparse
import logging
import shutil
import sys
from pathlib import Path
from typing import Callable, Dict

from jinja2 import Environment, FileSystemLoader, select_autoescape

BASE_DIR = Path(__file__).resolve().parent.parent

sys.path.insert(0, str(BASE_DIR))

from app import config
from app.services import i18n, post_loader, post_page
from app.services.prismic import PrismicClient, get_prismic_client

DEFAULT_OUTPUT = BASE_DIR / "site"

logger = logging.getLogger("build_static")


def build_url_factory(base_url: str) -> Callable[[str, Dict[str, str]], str]:
    base = "/" if not base_url else f"/{base_url.strip('/')}/"

    def builder(name: str, params: Dict[str, str]) -> str:
        if name == "post_detail":
            path = f"post/{params['slug']}/"
        elif name == "post_resolve":
            path = f"post/{params['slug']}/resolve"
        elif name == "exit_preview":
            path = "api/exit-preview"
        elif name == "static":
            static_path = params.get("path", "")
            if static_path.startswith("/"):
                static_path = static_path[1:]
            path = f"static/{static_path}"
        else:
            path = ""
        return f"{base}{path}"

    return builder


def prepare_environment(url_builder: Callable[[str, Dict[str, str]], str]) -> Environment:
    env = Environment(
        loader=FileSystemLoader(config.TEMPLATES_DIR),
        autoescape=select_autoescape(["html"]),
    )
    env.globals["url_for"] = lambda name, **params: url_builder(name, params)
    return env


def ensure_output_dir(output: Path) -> None:
    if output.exists():
        shutil.rmtree(output)
    output.mkdir(parents=True, exist_ok=True)
    (output / "post").mkdir()
    shutil.copytree(config.STATIC_DIR, output / "static", dirs_exist_ok=True)
    (output / ".nojekyll").write_text("", encoding="utf-8")


def write_page(destination: Path, html: str) -> None:
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(html, encoding="utf-8")


def build_site(
    output_dir: Path,
    base_url: str,
    client: PrismicClient,
    lang: str = i18n.DEFAULT_LANGUAGE,
    *,
    with_fallback: bool = False,
) -> int:
    env = prepare_environment(build_url_factory(base_url))
    ensure_output_dir(output_dir)

    paths = post_loader.load_static_paths(client)
    written = 0
    for slug in paths.slugs:
        try:
            props = post_loader.load_post_props(client, slug)
        except post_loader.PostNotFound:
            logger.warning("Skipping %s: document disappeared during the build", slug)
            continue
        html = post_page.render(env, post_page.RenderState.READY, slug, props, lang)
        write_page(output_dir / "post" / slug / "index.html", html)
        written += 1

    # The shell loads <path>/resolve, which only the FastAPI app serves.
    if with_fallback and paths.fallback:
        html = post_page.render(env, post_page.RenderState.RESOLVING, "", lang=lang)
        write_page(output_dir / "post" / "fallback.html", html)

    logger.info("Wrote %d post pages to %s", written, output_dir)
    return written


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Pre-render post pages for static hosting.")
    parser.add_argument("--output", type=Path, default=DEFAULT_OUTPUT, help="Output directory (default: ./site)")
    parser.add_argument("--base-url", type=str, default="", help="Sub-path the site is served from.")
    parser.add_argument("--lang", type=str, default=i18n.DEFAULT_LANGUAGE, choices=i18n.SUPPORTED_LANGUAGES)
    parser.add_argument(
        "--with-fallback",
        action="store_true",
        help="Also write post/fallback.html; it needs the app serving /post/<slug>/resolve behind it.",
    )
    parser.add_argument("--log-level", type=str, default="INFO")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    client = get_prismic_client()
    try:
        build_site(args.output.resolve(), args.base_url, client, args.lang, with_fallback=args.with_fallback)
    finally:
        client.close()


if __name__ == "__main__":
    main()
