"""FastAPI registration API - tournaments, registrations, certificates."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

import config
from siahrokh.errors import CertificateIdExhausted, DuplicateKey, SiahrokhError, ValidationFailed
from siahrokh.storage import create_storage

from web.api.admin_routes import router as admin_router
from web.api.auth_routes import router as auth_router
from web.api.limits import limiter
from web.api.routes import router as api_router
from web.api.settings_routes import router as settings_router

logger = logging.getLogger("siahrokh.web")


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.storage = await create_storage(config.DATABASE_URL)
    yield
    await app.state.storage.close()


app = FastAPI(title="SiahRokh Registration API", lifespan=lifespan)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


def _request_error_message(error: dict) -> str:
    field = ".".join(str(p) for p in error["loc"] if p not in ("body", "query", "path", "header"))
    if error["type"] == "missing":
        return f"{field} is required" if field else "Request body is required"
    return f"{field}: {error['msg']}" if field else error["msg"]


@app.exception_handler(RequestValidationError)
async def _request_validation_failed(request: Request, exc: RequestValidationError):
    """Malformed request bodies and parameters get the same 400 shape as rule violations."""
    return JSONResponse(
        status_code=400,
        content={"error": "Validation failed", "errors": [_request_error_message(e) for e in exc.errors()]},
    )


@app.exception_handler(ValidationFailed)
async def _validation_failed(request: Request, exc: ValidationFailed):
    return JSONResponse(status_code=400, content={"error": exc.message, "errors": exc.errors})


@app.exception_handler(SiahrokhError)
async def _siahrokh_error(request: Request, exc: SiahrokhError):
    if isinstance(exc, (CertificateIdExhausted, DuplicateKey)):
        # Operational cause stays in the server log; the client just resubmits
        return JSONResponse(
            status_code=500,
            content={"error": "Registration failed", "errors": ["Please try again"]},
        )
    if exc.status_code >= 500:
        logger.error("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
# Next-tournament routes before the public router so /api/tournaments/next is matched literally
app.include_router(settings_router)
app.include_router(api_router)
app.include_router(admin_router)
app.include_router(auth_router)
