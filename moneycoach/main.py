"""Main FastAPI application."""
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from moneycoach import __version__
from moneycoach.config import settings
from moneycoach.errors import register_exception_handlers
from moneycoach.coach import routes as coach_routes
from moneycoach.coach.llm_client import CoachLLMClient
from moneycoach.transactions import routes as transaction_routes
from moneycoach.transactions.client import TransactionsClient


LOG_FORMAT = "%(levelname)s - %(name)s - %(message)s"

logging.basicConfig(level=settings.LOG_LEVEL, format=LOG_FORMAT)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the shared upstream clients once and close them on shutdown."""
    app.state.coach_client = CoachLLMClient.from_settings(settings)
    app.state.transactions_client = TransactionsClient.from_settings(settings)
    logger.info(f"Money Coach API started (model {settings.OPENAI_MODEL}, env {settings.APP_ENV})")
    yield
    await app.state.coach_client.close()


# Create FastAPI app
app = FastAPI(
    title="Money Coach API",
    description="Money coaching assistant with caller-executed tool calls",
    version=__version__,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers
app.include_router(coach_routes.router, tags=["Coach"])
app.include_router(transaction_routes.router, tags=["Transactions"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Money Coach API is running",
        "version": __version__,
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "moneycoach.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.APP_ENV == "development",
    )
