import asyncio
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bible import router as bible_router
from core import config
from jokes import router as jokes_router
from pokemon import router as pokemon_router
from pokemon import service as pokemon_service
from soccer import router as soccer_router
from transit import router as transit_router

logger = logging.getLogger(__name__)

PROXY_SECRET_HEADER = "X-RapidAPI-Proxy-Secret"


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Warm the Hebrew Pokemon name dictionary without delaying startup.
    preload = None
    if config.preload_hebrew_names():
        preload = asyncio.create_task(pokemon_service.name_dictionary.ensure_loaded())
    try:
        yield
    finally:
        if preload is not None and not preload.done():
            preload.cancel()


app = FastAPI(title="hebrew-hub", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_allow_origins(),
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def require_proxy_secret(request: Request, call_next):
    # Only enforced when RAPID_PROXY_SECRET is set.
    secret = config.rapid_proxy_secret()
    if secret is not None and request.headers.get(PROXY_SECRET_HEADER) != secret:
        logger.warning("proxy_secret_rejected path=%s", request.url.path)
        return JSONResponse(status_code=403, content={"error": "Forbidden"})
    return await call_next(request)


app.include_router(jokes_router.router, prefix="/jokes", tags=["jokes"])
app.include_router(pokemon_router.router, prefix="/pokemon", tags=["pokemon"])
app.include_router(bible_router.router, prefix="/bible", tags=["bible"])
app.include_router(transit_router.router, prefix="/israel-transit", tags=["israel-transit"])
app.include_router(soccer_router.router, prefix="/soccer", tags=["soccer"])


@app.get("/health")
def health() -> dict:
    return {"ok": True}


def run() -> None:
    logging.basicConfig(
        level=config.log_level(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    uvicorn.run(app, host=config.host(), port=config.port(), log_level=config.log_level().lower())


if __name__ == "__main__":
    run()
