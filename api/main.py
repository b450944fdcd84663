# -----------------------------------------------------------------------------
# Created: 2026-02-13
# Description: main.py
# -----------------------------------------------------------------------------
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from api.dependencies import get_app_container
from api.routers import health, documents, search, vectors, stats

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # only tear down a container that was actually built
    if get_app_container.cache_info().currsize:
        logger.info("Shutting down: persisting vector index and closing store")
        get_app_container().close()
        get_app_container.cache_clear()


app = FastAPI(title="KB Vector API", lifespan=lifespan)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning("%s %s -> 400 (validation): %s", request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


app.include_router(health.router)
app.include_router(documents.router)
app.include_router(search.router)
app.include_router(vectors.router)
app.include_router(stats.router)
