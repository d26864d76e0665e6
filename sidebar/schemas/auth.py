"""
Authentication schemas.

``POST /api/auth`` takes ``{action, ...fields}``. The body is parsed into one
variant per action, discriminated on ``action``. Fields are optional at the
schema level so that missing input is reported with the endpoint's own
messages rather than a generic validation error.
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import Field, TypeAdapter

from sidebar.schemas.common import CamelModel


class RegisterRequest(CamelModel):
    action: Literal["register"]
    email: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None
    company: Optional[str] = None


class LoginRequest(CamelModel):
    action: Literal["login"]
    email: Optional[str] = None
    password: Optional[str] = None


class VerifyRequest(CamelModel):
    action: Literal["verify"]
    token: Optional[str] = None


class UpdateKeysRequest(CamelModel):
    """
    Save API keys. An omitted key is left untouched; an explicit value,
    including "" or null, replaces it.
    """

    action: Literal["update-keys"]
    token: Optional[str] = None
    jobtread_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None

    def provided(self, field_name: str) -> Optional[str]:
        """The key value if the client sent the field (null becomes ""), else None."""
        if field_name not in self.model_fields_set:
            return None
        return getattr(self, field_name) or ""


AuthRequest = Annotated[
    Union[RegisterRequest, LoginRequest, VerifyRequest, UpdateKeysRequest],
    Field(discriminator="action"),
]

auth_request_adapter: TypeAdapter = TypeAdapter(AuthRequest)


class UserResponse(CamelModel):
    """Public profile."""

    id: str
    email: str
    name: str
    company: str


class LoginUserResponse(UserResponse):
    """Public profile plus which API keys are saved."""

    has_jobtread_key: bool = False
    has_anthropic_key: bool = False


class TokenResponse(CamelModel):
    token: str
    user: UserResponse


class LoginResponse(CamelModel):
    token: str
    user: LoginUserResponse


class VerifyResponse(CamelModel):
    user: UserResponse


class KeyStatusResponse(CamelModel):
    success: bool = True
    has_jobtread_key: bool
    has_anthropic_key: bool
