# app/main.py
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request

from app.core.logging import bind_context, clear_context, get_logger
from app.routers import admin, redeem
from app.services.claim_allocator import ClaimAllocator
from app.services.kv_store import KeyValueStore, build_store

logger = get_logger("promo_drop.main")


def create_app(store: Optional[KeyValueStore] = None) -> FastAPI:
    """Build the app around ``store``, or the backend named by STORE_BACKEND."""
    store = store if store is not None else build_store()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("app.startup", store=type(store).__name__)
        yield
        await store.close()
        logger.info("app.shutdown")

    app = FastAPI(title="Promo Code Drop", lifespan=lifespan)
    app.state.store = store
    app.state.allocator = ClaimAllocator(store)

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        clear_context()
        bind_context(method=request.method, path=request.url.path)
        try:
            return await call_next(request)
        finally:
            clear_context()

    # Pages-style paths and bare paths
    app.include_router(redeem.router, prefix="/api")
    app.include_router(admin.router, prefix="/api")
    app.include_router(redeem.router)
    app.include_router(admin.router)

    @app.get("/")
    async def root():
        return {"message": "Promo code API is up and running"}

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    # Memory and SQL backends lock per process; keep a single worker for them
    uvicorn.run("app.main:app", host="127.0.0.1", port=8000, reload=False)
