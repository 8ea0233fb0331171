import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from smartspend.core.config import settings
from smartspend.core.exceptions import SmartSpendException
from smartspend.routers import assistant, auth, calendar, expenses, export, health, summary

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    debug=settings.DEBUG,
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    max_age=3600,
)


@app.exception_handler(SmartSpendException)
async def smartspend_exception_handler(request: Request, exc: SmartSpendException):
    logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# Root endpoint
@app.get("/")
def root():
    return {"message": f"Welcome to {settings.PROJECT_NAME} API"}


# Register routers
app.include_router(health.router, prefix=f"{settings.API_PREFIX}", tags=["Health"])  # /api/health
app.include_router(auth.router, prefix=f"{settings.API_PREFIX}/auth", tags=["Auth"])
app.include_router(expenses.router, prefix=f"{settings.API_PREFIX}/expenses", tags=["Expenses"])
app.include_router(summary.router, prefix=f"{settings.API_PREFIX}/summary", tags=["Summary"])
app.include_router(calendar.router, prefix=f"{settings.API_PREFIX}/calendar", tags=["Calendar"])
app.include_router(export.router, prefix=f"{settings.API_PREFIX}/export", tags=["Export"])
app.include_router(assistant.router, prefix=f"{settings.API_PREFIX}/assistant", tags=["Assistant"])
