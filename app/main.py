# app/main.py
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import logging
from contextlib import asynccontextmanager

from app.config import settings
from app.api.deps import get_db
from app.api.routes import categories as category_routes
from app.api.routes import products as product_routes
from app.api.routes import suppliers as supplier_routes
from app.core.errors import CatalogError, NotFound, ValidationFailed
from app.middleware.cors_config import configure_cors
from app.middleware.security_headers import add_security_headers


logging.basicConfig(level=settings.LOG_LEVEL.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("uvicorn.error")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context: run startup checks before the app starts serving,
    and allow for clean shutdown actions if needed later.
    """
    db = get_db()
    products_path = db._file_path("products")
    if not products_path.exists():
        logger.warning(
            "Products table not found at %s. Run scripts/seed_catalog.py to load demo data.",
            products_path,
        )
    else:
        logger.info("Found products table: %s", products_path)
    yield
    logger.info("Shutting down Product Catalog API")


app = FastAPI(title="Product Catalog API", version="0.1.0", lifespan=lifespan)
configure_cors(app)
add_security_headers(app)


def _validation_body(errors, message: str, provider: str) -> dict:
    return {
        "type": "ValidationError",
        "errors": errors,
        "message": message,
        "provider": provider,
    }


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ())]
        location = loc[0] if loc else ""
        errors.append({
            "location": location,
            "field": ".".join(loc[1:]) or location,
            "reason": err.get("msg", ""),
        })
    return JSONResponse(
        status_code=400,
        content=_validation_body(errors, f"{len(errors)} validation error(s)", "pydantic"),
    )


@app.exception_handler(ValidationFailed)
async def validation_failed_handler(request: Request, exc: ValidationFailed):
    errors = [{"location": exc.location, "field": f, "reason": r} for f, r in exc.errors]
    return JSONResponse(status_code=exc.status_code, content=_validation_body(errors, exc.message, exc.provider))


@app.exception_handler(NotFound)
async def not_found_handler(request: Request, exc: NotFound):
    return JSONResponse(status_code=exc.status_code, content={"ok": False, "message": exc.message})


@app.exception_handler(CatalogError)
async def catalog_error_handler(request: Request, exc: CatalogError):
    # details stay in the log, the client gets a generic message
    logger.error("Request %s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
    return JSONResponse(status_code=exc.status_code, content={"ok": False, "message": "Internal server error"})


# Include API routers
app.include_router(product_routes.router)
app.include_router(category_routes.router)
app.include_router(supplier_routes.router)


@app.get("/", tags=["root"])
async def root():
    return {"status": "ok", "service": "Product Catalog API", "env": settings.ENV}
