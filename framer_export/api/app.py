from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from framer_export.config.logger_config import logger
from framer_export.exporter.export import run_export_async


class ExportRequest(BaseModel):
    url: str = ""


app = FastAPI(title="Framer Export", version="0.1.0")


@app.exception_handler(RequestValidationError)
async def request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning("Rejected malformed export request: {}", exc.errors())
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


@app.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/api/export")
async def export_site(body: ExportRequest | None = None) -> Response:
    """Render the requested site and return it as a zip download."""
    url = body.url if body is not None else ""
    try:
        result = await run_export_async(url, show_progress=False)
        # Header encoding happens here, so a bad archive name still maps to a 400.
        return Response(
            content=result.content,
            media_type="application/zip",
            headers={
                "Content-Disposition": f"attachment; filename={result.archive_name}",
                "Cache-Control": "no-store",
            },
        )
    except Exception as exc:
        message = str(exc) or "Unexpected error"
        logger.error("Export request for {!r} failed with error type {}: {}", url, type(exc).__name__, message)
        return JSONResponse(status_code=400, content={"error": message})
