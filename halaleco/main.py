# halaleco/main.py
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .auth.auth import router as auth_router
from .config import settings
from .errors import ServiceError
from .routes.blockchain import router as blockchain_router
from .routes.compliance import router as compliance_router
from .routes.dashboard import router as dashboard_router
from .routes.fraud import router as fraud_router
from .routes.supply_chain import router as supply_chain_router
from .utils.logging import configure_logging, logger

# pydantic error types that mean "not provided"
REQUIRED_ERRORS = {"missing", "string_too_short", "too_short"}

configure_logging(settings.LOG_LEVEL)

app = FastAPI(title="HalalEco Compliance Backend",
              description="Halal compliance, fraud scoring and supply-chain tracking endpoints",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json")

app.include_router(auth_router)
app.include_router(compliance_router)
app.include_router(fraud_router)
app.include_router(supply_chain_router)
app.include_router(blockchain_router)
app.include_router(dashboard_router)


def _failure(status_code: int, message: str, error: str | None = None) -> JSONResponse:
    body = {"success": False, "message": message}
    if error:
        body["error"] = error
    return JSONResponse(status_code=status_code, content=body)


def validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    if first.get("type") == "json_invalid":
        return "Invalid JSON body"
    loc = [str(p) for p in first.get("loc", ()) if p not in ("body", "query")]
    field = ".".join(loc) or "body"
    if first.get("type") in REQUIRED_ERRORS:
        return f"{field} is required"
    return f"{field}: {first.get('msg', 'invalid value')}"


@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException):
    return _failure(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError):
    message = validation_message(exc)
    logger.info("Rejected %s %s: %s", request.method, request.url.path, message)
    return _failure(400, message)


@app.exception_handler(ServiceError)
async def service_error(request: Request, exc: ServiceError):
    return _failure(exc.status_code, exc.message, exc.error)


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _failure(500, "Internal server error", str(exc))


@app.get("/health")
def health():
    return {"ok": True}
