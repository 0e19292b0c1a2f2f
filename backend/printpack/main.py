"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from printpack.api.routes import router
from printpack.config import CORS_ORIGINS, MAX_WORKERS, logger as config_logger
from printpack.exceptions import PrintPackError

logging.getLogger("uvicorn").setLevel(logging.INFO)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred during processing."


@asynccontextmanager
async def lifespan(app: FastAPI):
    config_logger.info("Print package API started (max_workers=%s)", MAX_WORKERS)
    yield
    config_logger.info("Print package API shutting down")


app = FastAPI(
    title="Print Format Packager API",
    description="Resize images to print ratios and download them with per-format PDFs in one zip.",
    version="1.0.0",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS if CORS_ORIGINS else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)


@app.exception_handler(PrintPackError)
async def print_pack_error_handler(request: Request, exc: PrintPackError):
    """Validation, decode and build failures with their own status code."""
    if exc.status_code >= 500:
        config_logger.error("Processing failed: %s", exc.message)
    else:
        config_logger.info("Request rejected: %s", exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed form fields, reported in the same shape as our own rejections."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(p) for p in first.get("loc", ()) if p != "body") or "request"
        message = f"Invalid request field {field}: {first.get('msg', 'invalid value')}"
    else:
        message = "Invalid request."
    config_logger.info("Request rejected: %s", message)
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    """Anything else is reported without internal detail."""
    config_logger.exception("Processing error: %s", exc)
    return JSONResponse(status_code=500, content={"error": GENERIC_ERROR_MESSAGE})


app.include_router(router)


if __name__ == "__main__":
    import uvicorn
    from printpack.config import HOST, PORT
    uvicorn.run("printpack.main:app", host=HOST, port=PORT, reload=True)
