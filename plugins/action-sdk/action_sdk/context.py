"""Per-invocation execution context handed to actions by the host.

The host supplies two string maps on every call: ``environment`` (plain
configuration) and ``secrets`` (credentials). ``ActionContext`` freezes both
so an action cannot mutate what the host handed it, and so nothing an action
does in one invocation can leak into the next.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any


class ImmutableMixin:
    """Mixin that makes a __slots__ class immutable after __init__.

    Classes using this mixin must:
    1. Define __slots__ for all instance attributes
    2. Use object.__setattr__ in __init__ to set attributes
    """

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{self.__class__.__name__} attributes are immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{self.__class__.__name__} attributes are immutable")


def _freeze(values: Mapping[str, Any] | None) -> Mapping[str, str]:
    if not values:
        return MappingProxyType({})
    return MappingProxyType({str(k): "" if v is None else str(v) for k, v in values.items()})


class ActionContext(ImmutableMixin):
    """Read-only bag of ``environment`` and ``secrets`` for one invocation."""

    __slots__ = ("_environment", "_secrets")

    _environment: Mapping[str, str]
    _secrets: Mapping[str, str]

    def __init__(
        self,
        *,
        environment: Mapping[str, Any] | None = None,
        secrets: Mapping[str, Any] | None = None,
    ) -> None:
        object.__setattr__(self, "_environment", _freeze(environment))
        object.__setattr__(self, "_secrets", _freeze(secrets))

    @classmethod
    def coerce(cls, context: ActionContext | Mapping[str, Any] | None) -> ActionContext:
        """Return ``context`` as an ``ActionContext``.

        Accepts an existing context, a mapping shaped like
        ``{"environment": {...}, "secrets": {...}}``, or None (empty context).
        """
        if isinstance(context, ActionContext):
            return context
        if context is None:
            return cls()
        if not isinstance(context, Mapping):
            raise TypeError(f"Unsupported context type: {type(context).__name__}")
        return cls(environment=context.get("environment"), secrets=context.get("secrets"))

    @property
    def environment(self) -> Mapping[str, str]:
        return self._environment

    @property
    def secrets(self) -> Mapping[str, str]:
        return self._secrets

    def secret(self, key: str) -> str | None:
        """Secret value for ``key`` exactly as stored, or None when missing or blank."""
        value = self._secrets.get(key, "")
        return value if value.strip() else None

    def __repr__(self) -> str:
        # Secret values stay out of reprs and tracebacks
        return f"ActionContext(environment={sorted(self._environment)!r}, secrets={sorted(self._secrets)!r})"
