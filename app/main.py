import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, status
from app.api.v1.assistant import router as assistant_router
from app.api.v1.dashboard import router as dashboard_router
from app.api.v1.inventory import router as inventory_router
from app.api.v1.notifications import router as notifications_router
from app.api.v1.suppliers import router as suppliers_router
from app.api.v1.usage import router as usage_router
from app.core.config import GEMINI_API_KEY, LOG_FORMAT, LOG_LEVEL, PROJECT_NAME, SEED_ON_STARTUP, VERSION
from app.core.exception_handlers import setup_exception_handlers
from app.scripts.seed_data import build_store
from app.services.assistant_service import AssistantService
from app.services.gemini_client import GeminiClient

logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
log = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Builds the in-memory session state on startup. Nothing survives shutdown."""
    log.info(f"Starting {PROJECT_NAME} v{VERSION}...")
    store = build_store(seed=SEED_ON_STARTUP)
    if not GEMINI_API_KEY:
        log.warning("GEMINI_API_KEY is not set; assistant calls will answer with fallback texts.")
    app.state.store = store
    app.state.assistant = AssistantService(GeminiClient(), store)
    log.info(f"Session loaded with {len(store.items())} items and {len(store.notifications())} alerts.")
    yield
    log.info(f"{PROJECT_NAME} stopped.")

app = FastAPI(
    title=PROJECT_NAME,
    version=VERSION,
    lifespan=lifespan,
    # Configure API documentation and paths
    docs_url="/docs",
    redoc_url="/redoc"
)

# Include routers for modular API structure
app.include_router(inventory_router, prefix="/api/v1/inventory", tags=["Inventory"])
app.include_router(usage_router, prefix="/api/v1/usage", tags=["Daily Usage"])
app.include_router(notifications_router, prefix="/api/v1/notifications", tags=["Notifications"])
app.include_router(dashboard_router, prefix="/api/v1/dashboard", tags=["Dashboard"])
app.include_router(suppliers_router, prefix="/api/v1/suppliers", tags=["Suppliers"])
app.include_router(assistant_router, prefix="/api/v1/assistant", tags=["AI Assistant"])


setup_exception_handlers(app)

@app.get("/health", status_code=status.HTTP_200_OK)
async def health_check():
    """Simple health check endpoint."""
    return {"status": "ok", "app_name": PROJECT_NAME}
