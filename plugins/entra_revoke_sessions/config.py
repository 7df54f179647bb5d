"""Per-invocation configuration read from ``context.environment``."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from action_sdk import ActionContext

# Secret keys, in credential selection order
ACCESS_TOKEN_SECRET = "OAUTH2_AUTHORIZATION_CODE_ACCESS_TOKEN"
LEGACY_ACCESS_TOKEN_SECRET = "BEARER_AUTH_TOKEN"
CLIENT_SECRET_SECRET = "OAUTH2_CLIENT_CREDENTIALS_CLIENT_SECRET"

ACCESS_TOKEN_SECRETS = (ACCESS_TOKEN_SECRET, LEGACY_ACCESS_TOKEN_SECRET)


class AuthStyle(str, Enum):
    """How client credentials are delivered to the token endpoint."""

    in_header = "InHeader"
    in_params = "InParams"
    auto_detect = "AutoDetect"


class ActionEnvironment(BaseModel):
    """Typed view over the host-supplied environment map.

    Blank values count as unset. Unknown auth styles fall back to
    ``InHeader``, the same as leaving the style unset.
    """

    # Only the documented upper-case keys are read; field names never match host variables
    model_config = ConfigDict(frozen=True, extra="ignore")

    address: str | None = Field(None, alias="ADDRESS")
    token_url: str | None = Field(None, alias="OAUTH2_CLIENT_CREDENTIALS_TOKEN_URL")
    client_id: str | None = Field(None, alias="OAUTH2_CLIENT_CREDENTIALS_CLIENT_ID")
    scope: str | None = Field(None, alias="OAUTH2_CLIENT_CREDENTIALS_SCOPE")
    audience: str | None = Field(None, alias="OAUTH2_CLIENT_CREDENTIALS_AUDIENCE")
    auth_style: AuthStyle = Field(AuthStyle.in_header, alias="OAUTH2_CLIENT_CREDENTIALS_AUTH_STYLE")

    @field_validator("address", "token_url", "client_id", "scope", "audience", mode="before")
    @classmethod
    def _blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip() or None
        return v

    @field_validator("auth_style", mode="before")
    @classmethod
    def _parse_auth_style(cls, v: Any) -> AuthStyle:
        if isinstance(v, AuthStyle):
            return v
        try:
            return AuthStyle(str(v or "").strip())
        except ValueError:
            return AuthStyle.in_header

    @classmethod
    def from_context(cls, context: ActionContext) -> "ActionEnvironment":
        return cls.model_validate(dict(context.environment))
