"""API routes implementation."""

from datetime import datetime, timezone

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from .schemas import CreateRequest, CreateResponse, HealthResponse
from shortlink.common.url_builder import build_short_url
from shortlink.exceptions import DurableStoreError, InvalidInputError, SlugConflictError

router = APIRouter()

INVALID_REQUEST_MESSAGE = "Error: Invalid Request"
# Masked on purpose: doesn't tell whether or where the slug exists
CONFLICT_MESSAGE = "Error: Please choose another short slug or leave it empty!"
INTERNAL_ERROR_MESSAGE = "Error: Internal Server Error"


def error_response(status_code: int, message: str) -> JSONResponse:
    """Build a create response carrying only an error message."""
    return JSONResponse(
        status_code=status_code,
        content=CreateResponse(error_message=message).model_dump(by_alias=True),
    )


@router.post(
    "/create",
    response_model=CreateResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": CreateResponse, "description": "Invalid request"},
        409: {"model": CreateResponse, "description": "Slug not available"},
        500: {"model": CreateResponse, "description": "Internal server error"},
    },
    summary="Create short URL",
    description="Create a shortened URL. Optionally provide a custom slug and an expiry.",
)
async def create_short_url(request: Request, body: CreateRequest):
    """Create a shortened URL."""
    service = request.app.state.service
    config = request.app.state.config
    logger = request.app.state.logger

    try:
        slug = await service.create_short_url(
            target_url=body.real_url,
            slug=body.short_slug,
            expires_at=body.expires,
        )
    except InvalidInputError as e:
        logger.info(f"Rejected create request: {e}")
        return error_response(status.HTTP_400_BAD_REQUEST, INVALID_REQUEST_MESSAGE)
    except SlugConflictError:
        return error_response(status.HTTP_409_CONFLICT, CONFLICT_MESSAGE)
    except DurableStoreError as e:
        logger.error(f"Create failed: {e}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)

    short_url = build_short_url(
        slug=slug,
        base_url=config.base_url,
        path_prefix=config.path_prefix,
    )
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=CreateResponse(short_url=short_url).model_dump(by_alias=True),
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the database and the cache are reachable.",
)
async def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    service = request.app.state.service

    health = await service.health_check()

    return HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        database="healthy" if health["database"] else "unhealthy",
        cache="healthy" if health["cache"] else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )
