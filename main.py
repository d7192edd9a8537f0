from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from oncotriage.config.settings import settings
from oncotriage.config.vocabulary import get_vocabulary
from oncotriage.api.triage import router as triage_router
from oncotriage.tools.inference import get_inference_provider
import logging

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    # Startup
    logger.info("Starting OncoTriage Symptom Assessment Service...")
    logger.info(f"Environment: {settings.environment}")

    # Load shared read-only vocabularies and the inference provider once
    vocabulary = get_vocabulary()
    logger.info(f"Loaded {len(vocabulary.symptom_keywords)} symptom keywords")
    provider = get_inference_provider()
    logger.info(f"Inference provider ready: {provider.provider_name}")

    yield

    # Shutdown
    logger.info("Shutting down OncoTriage Symptom Assessment Service...")


# Initialize FastAPI app
app = FastAPI(
    title="OncoTriage - Symptom Assessment",
    description="Rule-based symptom triage for cancer patients: multimodal severity assessment, quick-triage questionnaire and structured risk scoring.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(triage_router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "ok",
        "service": settings.service_name,
        "version": "1.0.0",
        "dependencies": {
            "inference_provider": settings.inference_provider,
        },
    }


@app.get("/")
async def root():
    return {
        "message": "OncoTriage Symptom Assessment Service",
        "description": "Multimodal symptom triage and quick self-assessment",
        "version": "1.0.0",
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.oncotriage_port,
        reload=settings.environment == "development",
    )
