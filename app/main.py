import logging

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from app import config
from app.routers import pages, preview
from app.services import post_loader
from app.services.prismic import get_prismic_client


logger = logging.getLogger(__name__)

app = FastAPI(title="spacetravelling")

app.include_router(pages.router)
app.include_router(preview.router)

app.mount("/static", StaticFiles(directory=str(config.STATIC_DIR)), name="static")

app.state.known_slugs = frozenset()
# Shared by every request; the client owns its connection pool.
app.state.prismic_client = get_prismic_client()


@app.on_event("startup")
def startup() -> None:
    client = app.state.prismic_client
    try:
        paths = post_loader.load_static_paths(client)
    except Exception as exc:  # pylint: disable=broad-except
        logger.warning("Path enumeration failed, every post will use the fallback: %s", exc)
        return
    app.state.known_slugs = frozenset(paths.slugs)


@app.on_event("shutdown")
def shutdown() -> None:
    app.state.prismic_client.close()


@app.get("/health")
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}
