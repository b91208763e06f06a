"""HTTP surface: a single scan endpoint."""
import logging
from typing import Optional

from fastapi import APIRouter, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from core.engine import Engine
from core.errors import ScanError, ErrorCategory, INVALID_DOMAIN_MESSAGE

logger = logging.getLogger(__name__)
router = APIRouter()


class ScanIn(BaseModel):
    domain: Optional[str] = None


def get_engine() -> Engine:
    return Engine()


@router.post("/api/scan")
async def scan_domain(scan_in: ScanIn) -> JSONResponse:
    logger.info(f"Scan requested for {scan_in.domain!r}")
    try:
        report = await get_engine().scan(scan_in.domain)
    except ScanError as e:
        logger.warning(f"Scan of {scan_in.domain!r} failed: {e!r}")
        return JSONResponse(status_code=e.http_status, content=e.to_dict())

    return JSONResponse(status_code=status.HTTP_200_OK, content=report.to_dict())


def add_exception_handlers(app: FastAPI):
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        # Malformed bodies get the same error shape as a rejected domain
        logger.info(f"Rejected scan request body: {exc.errors()}")
        error = ScanError(INVALID_DOMAIN_MESSAGE, category=ErrorCategory.VALIDATION)
        return JSONResponse(status_code=error.http_status, content=error.to_dict())


def create_app() -> FastAPI:
    app = FastAPI(title="SEO Scanner")
    add_exception_handlers(app)
    app.include_router(router)
    return app


app = create_app()
