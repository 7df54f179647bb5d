"""Static contract validation for host-invoked actions."""

from __future__ import annotations

import importlib
import inspect
import re
from typing import Any

import jsonschema

KNOWN_HANDLERS: frozenset[str] = frozenset({"invoke", "error", "halt"})

_MODULE_PATTERN = re.compile(r"^[\w.]+:[\w]+$")


def _discover_manifest(action_cls: type) -> dict:
    """Import ``{package}.manifest`` next to ``action_cls`` and return its ``ACTION_MANIFEST``.

    Raises:
        AssertionError: If the manifest module or ``ACTION_MANIFEST`` cannot be found.
    """
    module_parts = action_cls.__module__.rsplit(".", 1)
    if len(module_parts) < 2:
        raise AssertionError(
            f"Cannot discover manifest for {action_cls!r}: module '{action_cls.__module__}' "
            "has no parent package. Pass the manifest explicitly: "
            "assert_action_contract(MyAction, manifest=ACTION_MANIFEST)"
        )
    manifest_module_name = f"{module_parts[0]}.manifest"
    try:
        manifest_module = importlib.import_module(manifest_module_name)
    except ImportError as exc:
        raise AssertionError(
            f"Cannot discover manifest for {action_cls!r}: failed to import "
            f"'{manifest_module_name}'."
        ) from exc
    if not hasattr(manifest_module, "ACTION_MANIFEST"):
        raise AssertionError(
            f"Cannot discover manifest for {action_cls!r}: '{manifest_module_name}' "
            "does not define 'ACTION_MANIFEST'."
        )
    return manifest_module.ACTION_MANIFEST  # type: ignore[no-any-return]


def assert_action_contract(action_cls: type, manifest: dict | None = None) -> None:
    """Validate an action's manifest, handlers, and schemas.

    Args:
        action_cls: The action class to validate.
        manifest: The manifest dict. If ``None``, it is discovered from the
            action's package (``{package}.manifest.ACTION_MANIFEST``).

    Raises:
        AssertionError: If any contract rule is violated.
    """
    if manifest is None:
        manifest = _discover_manifest(action_cls)

    _validate_manifest_keys(manifest)
    _validate_handlers_declared(manifest)
    _validate_module_string(manifest, action_cls)

    action = _instantiate_action(action_cls)
    _validate_handlers_are_async(action, manifest["handlers"])
    _validate_name_version_match(action, manifest)

    for method in ("get_schema", "get_output_schema"):
        assert hasattr(action, method), f"Action {action_cls.__name__} does not implement '{method}()'."
        schema = getattr(action, method)()
        assert schema, f"{action_cls.__name__}.{method}() returned an empty schema."
        _assert_valid_draft7(schema, context=f"{method}()")
        _validate_schema_required_fields(schema, f"{method}()")


def validate_params(schema: dict, params: Any) -> list[str]:
    """Validate ``params`` against ``schema`` and return readable error messages.

    An empty list means the params are valid.
    """
    validator = jsonschema.Draft7Validator(schema)
    errors = sorted(validator.iter_errors(params), key=lambda e: list(e.absolute_path))
    messages = []
    for err in errors:
        location = ".".join(str(p) for p in err.absolute_path)
        messages.append(f"{location}: {err.message}" if location else err.message)
    return messages


# ---------------------------------------------------------------------------
# Internal validation helpers
# ---------------------------------------------------------------------------


def _validate_manifest_keys(manifest: dict) -> None:
    required_keys = ("name", "version", "module", "handlers")
    for key in required_keys:
        assert key in manifest, (
            f"Manifest is missing required key '{key}'. "
            f"All of {required_keys} must be present in ACTION_MANIFEST."
        )


def _validate_handlers_declared(manifest: dict) -> None:
    declared: list[str] = manifest.get("handlers", [])
    assert "invoke" in declared, "Manifest 'handlers' must include 'invoke'."
    unknown = set(declared) - KNOWN_HANDLERS
    assert not unknown, (
        f"Manifest 'handlers' contains unknown value(s): {sorted(unknown)}. "
        f"Known handlers are: {sorted(KNOWN_HANDLERS)}"
    )


def _validate_module_string(manifest: dict, action_cls: type) -> None:
    module_str: str = manifest.get("module", "")
    assert _MODULE_PATTERN.match(module_str), (
        f"Manifest 'module' value '{module_str}' is not a valid 'dotted.path:ClassName' string."
    )
    module_name, class_name = module_str.split(":")
    assert (module_name, class_name) == (action_cls.__module__, action_cls.__name__), (
        f"Manifest 'module' points at '{module_str}' but the action class is "
        f"'{action_cls.__module__}:{action_cls.__name__}'."
    )


def _instantiate_action(action_cls: type) -> object:
    try:
        return action_cls()
    except Exception as exc:
        raise AssertionError(
            f"Failed to instantiate action class {action_cls!r} with no arguments: {exc}."
        ) from exc


def _validate_handlers_are_async(action: object, handlers: list[str]) -> None:
    for name in handlers:
        handler = getattr(action, name, None)
        assert handler is not None, f"Action {action.__class__.__name__} does not implement '{name}()'."
        assert inspect.iscoroutinefunction(handler), (
            f"Action {action.__class__.__name__}.{name}() is not an async function. "
            f"It must be defined as 'async def {name}(self, params, context)'."
        )


def _validate_name_version_match(action: object, manifest: dict) -> None:
    for attr in ("name", "version"):
        ours = getattr(action, attr, None)
        theirs = manifest.get(attr)
        assert ours == theirs, (
            f"Action class attribute '{attr}' ({ours!r}) does not match manifest '{attr}' ({theirs!r})."
        )


def _validate_schema_required_fields(schema: dict, context: str) -> None:
    """Assert that every field listed in 'required' is defined in 'properties'."""
    properties = set(schema.get("properties", {}).keys())
    required: list[str] = schema.get("required", [])
    phantom = [f for f in required if f not in properties]
    assert not phantom, (
        f"{context} declares {phantom} in 'required' but "
        f"{'they are' if len(phantom) > 1 else 'it is'} not defined in 'properties'."
    )


def _assert_valid_draft7(schema: dict, *, context: str) -> None:
    try:
        jsonschema.Draft7Validator.check_schema(schema)
    except jsonschema.SchemaError as exc:
        raise AssertionError(
            f"{context} returned an invalid JSON Schema (Draft 7): {exc.message}"
        ) from exc
