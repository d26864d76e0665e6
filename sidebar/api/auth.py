"""
Authentication endpoint.

One route, dispatched on the body's ``action``: register, login, verify,
update-keys.
"""

from typing import Any, Union

import pydantic
from fastapi import APIRouter, Body

from sidebar.api.deps import Identity
from sidebar.errors import ValidationError
from sidebar.schemas.auth import (
    KeyStatusResponse,
    LoginRequest,
    LoginResponse,
    LoginUserResponse,
    RegisterRequest,
    TokenResponse,
    UpdateKeysRequest,
    UserResponse,
    VerifyRequest,
    VerifyResponse,
    auth_request_adapter,
)

router = APIRouter()

_UNKNOWN_ACTION_ERRORS = {"union_tag_invalid", "union_tag_not_found"}


def parse_auth_request(body: Any) -> Union[RegisterRequest, LoginRequest, VerifyRequest, UpdateKeysRequest]:
    """Validate the raw body into its action variant."""
    try:
        return auth_request_adapter.validate_python(body)
    except pydantic.ValidationError as e:
        if any(err["type"] in _UNKNOWN_ACTION_ERRORS for err in e.errors()):
            raise ValidationError("Invalid action")
        raise ValidationError("Invalid request body")


@router.post("", response_model=None)
async def auth(identity: Identity, body: Any = Body(None)):
    """
    Register, log in, verify a token, or save API keys.

    Errors are returned as ``{"error": message}`` with the matching status.
    """
    data = parse_auth_request(body)

    if isinstance(data, RegisterRequest):
        result = await identity.register(data.email, data.password, data.name, data.company)
        return TokenResponse(token=result.token, user=UserResponse.model_validate(result.user))

    if isinstance(data, LoginRequest):
        result = await identity.login(data.email, data.password)
        return LoginResponse(token=result.token, user=LoginUserResponse.model_validate(result.user))

    if isinstance(data, VerifyRequest):
        profile = await identity.verify(data.token)
        return VerifyResponse(user=UserResponse.model_validate(profile))

    user = await identity.update_keys(
        data.token,
        jobtread_api_key=data.provided("jobtread_api_key"),
        anthropic_api_key=data.provided("anthropic_api_key"),
    )
    return KeyStatusResponse(
        has_jobtread_key=user.has_jobtread_key,
        has_anthropic_key=user.has_anthropic_key,
    )
