from fastapi import FastAPI

from grocery_api.api.auth import router as auth_router
from grocery_api.api.customers import router as customers_router
from grocery_api.api.metrics import router as metrics_router
from grocery_api.config import get_settings
from grocery_api.observability.logging import configure_logging
from grocery_api.observability.middleware import RequestContextMiddleware
from grocery_api.repositories.loader import build_repository, json_file_loader


app = FastAPI(title="Grocery Store API", version="0.1.0")
app.add_middleware(RequestContextMiddleware)
app.include_router(auth_router)
app.include_router(customers_router)
app.include_router(metrics_router)


@app.on_event("startup")
def _startup() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    # A missing or malformed seed file raises LoaderError and aborts startup.
    if getattr(app.state, "repository", None) is None:
        app.state.repository = build_repository(json_file_loader(settings.customers_path))


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
