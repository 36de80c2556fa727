"""HTTP backend; imported lazily so the engine can be used without FastAPI loaded."""

from __future__ import annotations

from importlib import import_module

_EXPORTS = {
    "app": ".app",
    "create_app": ".app",
    "GameSession": ".session",
}

__all__ = sorted(_EXPORTS)


def __getattr__(name: str):
    try:
        module_name = _EXPORTS[name]
    except KeyError:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}") from None
    return getattr(import_module(module_name, __name__), name)
