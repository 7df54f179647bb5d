"""Credential selection: which of the two token strategies applies.

Exactly one variant is resolved per invocation, from whichever secrets are
populated. A pre-issued token always wins over client credentials.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, SecretStr

from action_sdk import ActionContext

from .config import ACCESS_TOKEN_SECRETS, CLIENT_SECRET_SECRET, ActionEnvironment, AuthStyle
from .errors import AuthenticationRequiredError, ConfigurationError


class PreIssuedToken(BaseModel):
    """An access token issued out of band and stored as a secret."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["pre_issued"] = "pre_issued"
    token: SecretStr
    source: str


class ClientCredentials(BaseModel):
    """Everything needed for an OAuth2 client-credentials exchange."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["client_credentials"] = "client_credentials"
    token_url: str
    client_id: str
    client_secret: SecretStr
    scope: str | None = None
    audience: str | None = None
    auth_style: AuthStyle = AuthStyle.in_header


Credentials = Annotated[PreIssuedToken | ClientCredentials, Field(discriminator="kind")]


def resolve_credentials(context: ActionContext, env: ActionEnvironment) -> Credentials:
    """Pick the credential variant for this invocation.

    Raises:
        ConfigurationError: A client secret is set but the token URL or client ID is not.
        AuthenticationRequiredError: No credential secrets are set at all.
    """
    for key in ACCESS_TOKEN_SECRETS:
        token = context.secret(key)
        if token is not None:
            return PreIssuedToken(token=SecretStr(token), source=key)

    client_secret = context.secret(CLIENT_SECRET_SECRET)
    if client_secret is not None:
        missing = [
            alias
            for field_name, alias in (
                ("token_url", "OAUTH2_CLIENT_CREDENTIALS_TOKEN_URL"),
                ("client_id", "OAUTH2_CLIENT_CREDENTIALS_CLIENT_ID"),
            )
            if getattr(env, field_name) is None
        ]
        if missing:
            raise ConfigurationError(f"Client credentials are incomplete: {', '.join(missing)} not set")
        return ClientCredentials(
            token_url=env.token_url,
            client_id=env.client_id,
            client_secret=SecretStr(client_secret),
            scope=env.scope,
            audience=env.audience,
            auth_style=env.auth_style,
        )

    raise AuthenticationRequiredError()
