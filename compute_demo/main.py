from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from structlog import get_logger

from .config import get_settings
from .exceptions import AggregationError, ComputeDemoError
from .log_config import configure_logging
from .compute.aggregator import Aggregator
from .compute.router import router as compute_router
from .pages.router import router as pages_router

settings = get_settings()
logger = get_logger("app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.LOG_LEVEL)
    
    # One reduction pool for the whole process, bounded by COMPUTE_WORKERS
    app.state.aggregator = Aggregator(workers=settings.COMPUTE_WORKERS)
    logger.info("app_started", workers=app.state.aggregator.workers)
    
    yield
    
    app.state.aggregator.close()
    logger.info("app_stopped")

app = FastAPI(
    title=settings.APP_NAME,
    lifespan=lifespan,
)


@app.exception_handler(AggregationError)
async def aggregation_exception_handler(request: Request, exc: AggregationError):
    logger.error("aggregation_failed", path=request.url.path, error=exc.message)
    return JSONResponse(
        status_code=500,
        content={"error": exc.code, "message": exc.message}
    )

@app.exception_handler(ComputeDemoError)
async def compute_demo_exception_handler(request: Request, exc: ComputeDemoError):
    return JSONResponse(
        status_code=500,
        content={"error": exc.code, "message": exc.message}
    )

@app.get("/health")
async def health_check():
    return {"status": "ok", "app": settings.APP_NAME}

# Include routers
app.include_router(pages_router)
app.include_router(compute_router)
