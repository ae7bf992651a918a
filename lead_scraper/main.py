from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from lead_scraper import __version__
from lead_scraper.api.v1.routes.scraper_router import router as scraper_router
from lead_scraper.core.config import settings
from lead_scraper.core.exceptions import LeadScraperError
from lead_scraper.middlewares.logger_middleware import LoggingMiddleware
from lead_scraper.middlewares.trace_id_middleware import TraceIDMiddleware
from lead_scraper.models.heartbeat_models import HeartbeatModel
from lead_scraper.utils.heartbeat import get_heartbeat
from lead_scraper.utils.logging import setup_logger

logger = setup_logger(__name__)


app = FastAPI(
    title=settings.APP_NAME,
    version=__version__,
)


# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

#Added logging middleware
app.add_middleware(LoggingMiddleware)

#Trace ID middleware
app.add_middleware(TraceIDMiddleware)

app.include_router(scraper_router)


@app.exception_handler(LeadScraperError)
async def lead_scraper_error_handler(request: Request, exc: LeadScraperError):
    if exc.status_code >= 500:
        logger.error(
            "Scraping failed",
            extra={"path": request.url.path, "error_type": type(exc).__name__, "error": exc.message},
        )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    problems = "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg', 'invalid')}"
        for error in exc.errors()
    )
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request", "message": problems or "Request validation failed"},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(
        "Unhandled error",
        extra={"path": request.url.path, "error_type": type(exc).__name__},
    )
    return JSONResponse(
        status_code=500,
        content={"error": "Server error", "message": str(exc)},
    )


@app.get("/")
async def root():
    """API information"""
    return {
        "message": "Welcome to Lead Generation API",
        "version": __version__,
        "endpoints": {
            "GET /health": "Health check",
            "GET /scraper/details?search=<text>": "Extract search parameters from text",
            "POST /scraper/leads": "Scrape leads for industry, position and place",
        }
    }


@app.get("/health", response_model=HeartbeatModel)
async def health_check():
    return await get_heartbeat()


if __name__ == "__main__":
    import uvicorn

    logger.info(
        "Starting server",
        extra={"host": settings.HOST, "port": settings.PORT},
    )
    uvicorn.run("lead_scraper.main:app", host=settings.HOST, port=settings.PORT)
