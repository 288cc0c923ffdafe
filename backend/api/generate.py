import logging
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from core.errors import GenerateError, InputValidationError, ConfigError, UnknownError
from models.image_generate import GenerateRequest, GenerateResponse, ErrorResponse, GenerateHealthResponse
from services.openrouter_service import OpenRouterService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/generate", tags=["generate"])

def get_openrouter_service(request: Request) -> OpenRouterService:
    return request.app.state.openrouter_service

def error_response(error: GenerateError) -> JSONResponse:
    return JSONResponse(status_code=error.status_code, content=error.to_body())

async def parse_generate_request(request: Request) -> GenerateRequest:
    body = await request.json()
    try:
        edit_request = GenerateRequest.model_validate(body)
    except ValidationError as e:
        raise InputValidationError() from e

    if not edit_request.image_url or not edit_request.prompt:
        raise InputValidationError()
    return edit_request

@router.post(
    "",
    response_model=GenerateResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
)
async def generate_image(
    request: Request,
    openrouter_service: OpenRouterService = Depends(get_openrouter_service)
):
    """Edit an image with the configured OpenRouter model and relay its text and images"""
    try:
        edit_request = await parse_generate_request(request)

        if not openrouter_service.is_configured:
            logger.error("❌ OPENROUTER_API_KEY is not set")
            raise ConfigError()

        message = await openrouter_service.generate(edit_request.image_url, edit_request.prompt)
        return GenerateResponse.from_message(message)

    except GenerateError as e:
        logger.error("Error generating image (%s): %s", e.status_code, e.message)
        return error_response(e)
    except Exception as e:
        logger.exception("Error generating image")
        return error_response(UnknownError.from_exception(e))

@router.get("/health", response_model=GenerateHealthResponse)
async def check_openrouter_config(
    openrouter_service: OpenRouterService = Depends(get_openrouter_service)
):
    """Check if OpenRouter is properly configured"""
    has_key = openrouter_service.is_configured

    return GenerateHealthResponse(
        configured=has_key,
        model=openrouter_service.model,
        message="OpenRouter API key configured" if has_key else "OpenRouter API key not set"
    )
