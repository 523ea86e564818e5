import logging

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from api.routes.voicings import router as voicings_router
from infrastructure.metrics import get_metrics_response, record_request_error

logger = logging.getLogger(__name__)

app = FastAPI(title="Chord Voicing Solver")

# CORS — allow the instrument UI (Vite dev server) to call the API
# Include both localhost and 127.0.0.1 variants — browsers treat them as different origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(voicings_router)


@app.get("/health")
def health() -> dict[str, str]:
    """Return a simple liveness check."""
    return {"status": "ok"}


@app.get("/metrics")
def metrics() -> Response:
    """Prometheus metrics endpoint in text exposition format."""
    body, content_type = get_metrics_response()
    return Response(content=body, media_type=content_type)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Count rejected requests per endpoint, then answer with FastAPI's default 422."""
    logger.warning(
        "Rejected request to %s: %d validation error(s)", request.url.path, len(exc.errors())
    )
    record_request_error(request.url.path)
    return await request_validation_exception_handler(request, exc)
