from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from careerquest.config import get_settings
from careerquest.database import init_db
from careerquest.errors import CareerQuestError
from careerquest.middleware.correlation import CorrelationMiddleware
from careerquest.routes import catalog, onet, roadmaps, saves
from careerquest.utils.logger import logger
from careerquest.utils.metrics import get_snapshot

settings = get_settings()

app = FastAPI(title=settings.app_name, version=settings.app_version)

# CORS - Explicit origins from config
allowed_origins = [origin.strip() for origin in settings.allowed_origins.split(",") if origin.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-User-ID", "X-Correlation-ID"],
)
app.add_middleware(CorrelationMiddleware)


@app.exception_handler(CareerQuestError)
async def careerquest_error_handler(request: Request, exc: CareerQuestError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}", exc_info=exc)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    missing = [str(e["loc"][-1]) for e in errors if e.get("type") == "missing" and e.get("loc")]
    if missing:
        message = f"Missing required fields: {', '.join(missing)}"
    elif errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"Invalid request: {location}: {first.get('msg')}" if location else f"Invalid request: {first.get('msg')}"
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {type(exc).__name__}: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "An error occurred"})


# Startup: Initialize database
@app.on_event("startup")
async def startup_event():
    logger.info("Starting CareerQuest Backend...")
    await init_db()
    logger.info(f"Backend ready at http://{settings.backend_host}:{settings.backend_port}")


# Health check endpoint (minimal response to prevent information disclosure)
@app.get("/health")
async def health_check():
    return {"status": "ok"}


@app.get("/metrics")
async def metrics():
    return get_snapshot()


# Register routes
app.include_router(onet.router, prefix="/api/onet", tags=["O*NET Proxy"])
app.include_router(catalog.router, prefix="/api/catalog", tags=["Catalog"])
app.include_router(roadmaps.router, prefix="/api/roadmaps", tags=["Roadmaps"])
app.include_router(saves.router, prefix="/api/saves", tags=["Saved Items"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "careerquest.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        reload=settings.debug
    )
