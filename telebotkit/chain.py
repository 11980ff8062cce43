"""Middleware chaining and handler groups."""

from __future__ import annotations

from typing import Any, Callable, Protocol

Handler = Callable[[Any], Any]
Middleware = Callable[[Handler], Handler]


class _Registrar(Protocol):
    def handle(self, endpoint: Any, handler: Handler, *middleware: Middleware) -> None: ...


def apply_middleware(handler: Handler, *middleware: Middleware) -> Handler:
    """Wrap handler so that the first middleware runs outermost."""
    for mw in reversed(middleware):
        handler = mw(handler)
    return handler


class Group:
    """A set of handlers sharing common middleware."""

    def __init__(self, registrar: _Registrar, middleware: list[Middleware] | None = None):
        self._registrar = registrar
        self.middleware: list[Middleware] = list(middleware or [])

    def use(self, *middleware: Middleware) -> None:
        """Add middleware to the group's chain."""
        self.middleware.extend(middleware)

    def handle(self, endpoint: Any, handler: Handler, *middleware: Middleware) -> None:
        """Register a handler with the group's middleware followed by the given ones."""
        self._registrar.handle(endpoint, handler, *self.middleware, *middleware)