import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api import router as api_router
from app.api.deps import get_store
from app.core.config import SEED_DEMO
from app.core.errors import NoctoonError
from app.db.seed import seed_demo_data
from app.store import CatalogStore, get_store as default_store

logger = logging.getLogger(__name__)


def create_app(store: Optional[CatalogStore] = None, seed: bool = SEED_DEMO) -> FastAPI:
    app = FastAPI(title="Noctoon")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if store is not None:
        app.dependency_overrides[get_store] = lambda: store
    if seed:
        seed_demo_data(store if store is not None else default_store())

    @app.exception_handler(NoctoonError)
    async def noctoon_error(request: Request, exc: NoctoonError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid data", "details": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(Exception)
    async def server_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Server error"})

    app.include_router(api_router)

    @app.get("/")
    def read_root():
        return {"message": "Noctoon API running"}

    return app
