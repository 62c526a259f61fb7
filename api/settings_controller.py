"""
Credential and access gate controller for the PDF Research Assistant REST API
"""
import logging
from fastapi import APIRouter, status

from models.api import (
    CredentialRequest, CredentialStatusResponse, CredentialValidationResponse,
    UnlockRequest, AccessStatusResponse, ErrorResponse
)
from utils.exceptions import AccessDeniedError

from api.dependencies import CredentialStoreDep, LLMServiceDep

logger = logging.getLogger(__name__)

router = APIRouter(tags=["settings"])


@router.get(
    "/settings/credential",
    response_model=CredentialStatusResponse,
    summary="Report whether an API key is configured and where it comes from"
)
async def get_credential_status(credential_store: CredentialStoreDep = None) -> CredentialStatusResponse:
    api_key, source = credential_store.resolve_credential()
    return CredentialStatusResponse(configured=api_key is not None, source=source)


@router.put(
    "/settings/credential",
    response_model=CredentialStatusResponse,
    summary="Store an API key",
    description="The stored key takes precedence over the environment key. "
                "The text-generation client is rebuilt on the next call."
)
async def set_credential(
    request: CredentialRequest,
    credential_store: CredentialStoreDep = None,
    llm_service: LLMServiceDep = None
) -> CredentialStatusResponse:
    credential_store.set_credential(request.api_key)
    llm_service.reset_client()
    return CredentialStatusResponse(configured=True, source="stored")


@router.delete(
    "/settings/credential",
    response_model=CredentialStatusResponse,
    summary="Forget the stored API key"
)
async def clear_credential(
    credential_store: CredentialStoreDep = None,
    llm_service: LLMServiceDep = None
) -> CredentialStatusResponse:
    credential_store.clear_credential()
    llm_service.reset_client()
    api_key, source = credential_store.resolve_credential()
    return CredentialStatusResponse(configured=api_key is not None, source=source)


@router.post(
    "/settings/credential/validate",
    response_model=CredentialValidationResponse,
    summary="Check the active API key with a trivial generation call"
)
async def validate_credential(llm_service: LLMServiceDep = None) -> CredentialValidationResponse:
    return CredentialValidationResponse(valid=llm_service.validate_credential())


@router.get("/auth/status", response_model=AccessStatusResponse, summary="Access gate status")
async def access_status(credential_store: CredentialStoreDep = None) -> AccessStatusResponse:
    return AccessStatusResponse(
        required=credential_store.access_required,
        unlocked=credential_store.is_unlocked()
    )


@router.post(
    "/auth/unlock",
    response_model=AccessStatusResponse,
    responses={403: {"model": ErrorResponse}},
    summary="Enter the access code"
)
async def unlock(request: UnlockRequest, credential_store: CredentialStoreDep = None) -> AccessStatusResponse:
    if not credential_store.unlock(request.code):
        raise AccessDeniedError("Invalid access code")
    return AccessStatusResponse(required=credential_store.access_required, unlocked=True)


@router.post("/auth/lock", status_code=status.HTTP_204_NO_CONTENT, summary="Lock the access gate")
async def lock(credential_store: CredentialStoreDep = None):
    credential_store.lock()
