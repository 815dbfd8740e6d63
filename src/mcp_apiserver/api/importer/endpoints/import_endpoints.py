"""OpenAPI import endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status
from loguru import logger

from mcp_apiserver.api.base.base_exceptions import (
    ConfigNotFoundError,
    NotifierError,
    StoreError,
    StoreValidationError,
)
from mcp_apiserver.api.importer.importer_service import ImporterService
from mcp_apiserver.api.importer.models import (
    ConfigListResponse,
    ConfigResponse,
    Imported,
    ImportResponse,
    ImportResult,
    MessageResponse,
    NotificationFailed,
    PersistenceFailed,
    Rejected,
    addressing_from_form,
)
from mcp_apiserver.utils.errors import (
    create_error,
    BAD_REQUEST,
    INTERNAL_ERROR,
    NOT_FOUND,
    PAYLOAD_TOO_LARGE,
)


router = APIRouter(prefix="/openapi", tags=["openapi"])


async def get_importer_service(request: Request) -> ImporterService:
    """Get importer service from app state."""
    return request.app.state.service


async def get_upload_limit(request: Request) -> int:
    """Get the largest accepted upload size from app settings."""
    return request.app.state.settings.service.max_upload_bytes


def result_to_response(result: ImportResult, filename: Optional[str] = None) -> ImportResponse:
    """Map an import outcome to a response or an HTTP error.

    Raises:
        HTTPException: 400 for rejected input, 500 for store or notifier failures
    """
    context = {"filename": filename} if filename else {}

    if isinstance(result, Imported):
        return ImportResponse(config=result.config)
    if isinstance(result, Rejected):
        raise create_error(
            message=f"Failed to convert OpenAPI specification: {result.reason}",
            status_code=BAD_REQUEST,
            context=context
        )
    if isinstance(result, PersistenceFailed):
        raise create_error(
            message=f"Failed to create MCP server: {result.reason}",
            status_code=INTERNAL_ERROR,
            context=context
        )
    if isinstance(result, NotificationFailed):
        raise create_error(
            message=f"Failed to notify gateway: {result.reason}",
            status_code=INTERNAL_ERROR,
            context={**context, "config": result.config.model_dump(mode="json")}
        )
    raise TypeError(f"Unknown import result: {type(result).__name__}")


def store_error_to_http(error: StoreError, name: str):
    """Convert a store error raised for a named configuration."""
    if isinstance(error, ConfigNotFoundError):
        return create_error(message=error.message, status_code=NOT_FOUND, context={"name": name})
    if isinstance(error, StoreValidationError):
        return create_error(message=error.message, status_code=BAD_REQUEST, context={"name": name})
    return create_error(message=error.message, status_code=INTERNAL_ERROR, context={"name": name})


@router.post("/import", response_model=ImportResponse, status_code=status.HTTP_201_CREATED)
async def import_openapi(
    file: UploadFile = File(..., description="OpenAPI document (JSON or YAML)"),
    tenant_id: Optional[str] = Form(None, alias="tenantId"),
    prefix: Optional[str] = Form(None),
    service: ImporterService = Depends(get_importer_service),
    max_upload_bytes: int = Depends(get_upload_limit)
) -> ImportResponse:
    """Import an OpenAPI document as an MCP server configuration."""
    logger.info("Handling OpenAPI import request")
    logger.debug("Processing OpenAPI file {} ({} bytes)", file.filename, file.size)

    try:
        # One byte past the limit is enough to detect an oversized upload
        content = await file.read(max_upload_bytes + 1)
    except Exception as e:
        logger.error(f"Failed to read file content: {e}")
        raise create_error(
            message=f"Failed to read file: {e}",
            status_code=BAD_REQUEST,
            context={"filename": file.filename},
            cause=e
        )

    if len(content) > max_upload_bytes:
        logger.error(f"Rejected upload {file.filename}: larger than {max_upload_bytes} bytes")
        raise create_error(
            message=f"OpenAPI document exceeds the {max_upload_bytes} byte upload limit",
            status_code=PAYLOAD_TOO_LARGE,
            context={"filename": file.filename, "max_upload_bytes": max_upload_bytes}
        )

    result = await service.import_spec(content, addressing_from_form(tenant_id, prefix))
    return result_to_response(result, file.filename)


@router.get("/configs", response_model=ConfigListResponse)
async def list_configs(service: ImporterService = Depends(get_importer_service)) -> ConfigListResponse:
    """List stored configurations."""
    try:
        return ConfigListResponse(configs=await service.list_configs())
    except StoreError as e:
        logger.error(f"Failed to list configs: {e.message}")
        raise create_error(
            message=f"Failed to list configs: {e.message}",
            status_code=INTERNAL_ERROR
        )


@router.get("/configs/{name}", response_model=ConfigResponse)
async def get_config(name: str, service: ImporterService = Depends(get_importer_service)) -> ConfigResponse:
    """Get a stored configuration."""
    try:
        return ConfigResponse(config=await service.get_config(name))
    except StoreError as e:
        logger.error(f"Failed to get config {name}: {e.message}")
        raise store_error_to_http(e, name)


@router.post("/configs/{name}/notify", response_model=MessageResponse)
async def notify_config(name: str, service: ImporterService = Depends(get_importer_service)) -> MessageResponse:
    """Re-issue the gateway notification for a stored configuration."""
    try:
        await service.renotify(name)
    except StoreError as e:
        logger.error(f"Failed to load config {name} for notification: {e.message}")
        raise store_error_to_http(e, name)
    except NotifierError as e:
        logger.error(f"Failed to notify gateway about {name}: {e.message}")
        raise create_error(
            message=f"Failed to notify gateway: {e.message}",
            status_code=INTERNAL_ERROR,
            context={"name": name}
        )

    return MessageResponse(message=f"Gateways notified about {name}")
