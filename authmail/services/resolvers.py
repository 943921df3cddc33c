"""First-match-wins resolution for optional overrides."""

from __future__ import annotations

from typing import Callable, Iterable, Optional, TypeVar

T = TypeVar("T")

Resolver = Callable[[], Optional[T]]


def first_match(resolvers: Iterable[Resolver[T]], default: T) -> T:
    """Return the first truthy value produced by ``resolvers``, else ``default``.

    Resolvers run lazily in order; empty strings count as unset.
    """

    for resolve in resolvers:
        value = resolve()
        if value:
            return value
    return default


def constant(value: Optional[T]) -> Resolver[T]:
    return lambda: value


__all__ = ["Resolver", "constant", "first_match"]
