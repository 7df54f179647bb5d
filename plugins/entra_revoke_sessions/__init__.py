"""Revoke all Microsoft Entra ID sign-in sessions for a user."""

from .plugin import RevokeSessionsAction

__all__ = ["RevokeSessionsAction"]
