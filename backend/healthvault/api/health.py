from fastapi import APIRouter, Depends

from healthvault.api.deps import get_response_generator
from healthvault.schemas.chat import AssistantInfoResponse
from healthvault.services.assistant import ResponseGenerator

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check():
    """Health check endpoint for Docker and load balancers."""
    return {"status": "healthy", "service": "healthvault-api"}


@router.get("/")
async def root():
    """Root endpoint with API information."""
    return {"message": "Welcome to HealthVault API", "docs": "/docs", "health": "/health"}


@router.get("/health/assistant", response_model=AssistantInfoResponse)
async def assistant_health(
    generator: ResponseGenerator = Depends(get_response_generator),
):
    """Which reply strategy is active. Never exposes credentials."""
    return AssistantInfoResponse(
        strategy=generator.name,
        model=getattr(generator, "model", None),
    )
