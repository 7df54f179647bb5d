ACTION_MANIFEST = {
    "name": "entra_revoke_sessions",
    "display_name": "Entra ID Revoke Sign-in Sessions",
    "version": "1",
    # Dotted import path used by the host to instantiate the action class.
    "module": "entra_revoke_sessions.plugin:RevokeSessionsAction",
    # Handlers the host may call: invoke runs the job, error decides retries,
    # halt reports a host-initiated stop.
    "handlers": ["invoke", "error", "halt"],
    # Environment keys read from context.environment.
    "environment": [
        "ADDRESS",
        "OAUTH2_CLIENT_CREDENTIALS_TOKEN_URL",
        "OAUTH2_CLIENT_CREDENTIALS_CLIENT_ID",
        "OAUTH2_CLIENT_CREDENTIALS_SCOPE",
        "OAUTH2_CLIENT_CREDENTIALS_AUDIENCE",
        "OAUTH2_CLIENT_CREDENTIALS_AUTH_STYLE",
    ],
    # Secret keys read from context.secrets, in credential selection order.
    "secrets": [
        "OAUTH2_AUTHORIZATION_CODE_ACCESS_TOKEN",
        "BEARER_AUTH_TOKEN",
        "OAUTH2_CLIENT_CREDENTIALS_CLIENT_SECRET",
    ],
}
