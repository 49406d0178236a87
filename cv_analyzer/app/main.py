from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from .api.v1.routes import router as v1_router
from .core.config import CORS_ORIGINS
from .core.errors import WebhookError
from .core.logging import get_logger, request_id_ctx

app = FastAPI(title="CV Analyzer", version=__version__)

# --- CORS: Vite dev server + Streamlit ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(v1_router)

logger = get_logger("cv_analyzer.app")

def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or request.headers.get("X-Request-ID", "-")

def jsonable_errors(exc: RequestValidationError):
    # pydantic v2 error dicts may carry the raw exception under "ctx"
    return jsonable_encoder(exc.errors(), custom_encoder={Exception: str})

@app.middleware("http")
async def add_request_id(request: Request, call_next):
    rid = request.headers.get("X-Request-ID", str(uuid4()))
    # scope state outlives this function; the 500 handler runs after the reset below
    request.state.request_id = rid
    token = request_id_ctx.set(rid)
    try:
        logger.info(f"Incoming {request.method} {request.url.path}")
        resp = await call_next(request)
        resp.headers["X-Request-ID"] = rid
        logger.info(f"Completed {request.method} {request.url.path} -> {resp.status_code}")
        return resp
    finally:
        request_id_ctx.reset(token)

# --- Exception Handlers ---
@app.exception_handler(RequestValidationError)
async def validation_handler(request: Request, exc: RequestValidationError):
    rid = request_id_ctx.get()
    logger.warning(f"ValidationError {request.url.path} | detail={exc.errors()}")
    return JSONResponse(
        status_code=422,
        content={"error": "Invalid request payload", "details": jsonable_errors(exc), "request_id": rid},
    )

@app.exception_handler(WebhookError)
async def webhook_handler(request: Request, exc: WebhookError):
    rid = request_id_ctx.get()
    logger.error(f"WebhookError {request.url.path} | op={exc.operation} status={exc.status_code} | {exc}")
    return JSONResponse(
        status_code=502,
        content={"error": "Upstream service failed", "detail": str(exc), "request_id": rid},
    )

@app.exception_handler(Exception)
async def internal_handler(request: Request, exc: Exception):
    rid = _request_id(request)
    token = request_id_ctx.set(rid)
    try:
        logger.error(f"UnhandledError {request.url.path} | {exc!r}")
    finally:
        request_id_ctx.reset(token)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "request_id": rid},
        headers={"X-Request-ID": rid},
    )


@app.get("/")
def read_root():
    return {"message": "Welcome to CV Analyzer API"}
