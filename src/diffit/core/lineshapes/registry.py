"""Function registry mapping persisted type tags to function classes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from diffit.core.fitting.functions import KEY_TYPE, Function, Polynom, SumFunctions
from diffit.core.shared.exceptions import ConfigError

if TYPE_CHECKING:
    from collections.abc import Callable

F = TypeVar("F", bound=type[Function])

# Global function registry, keyed by the exact persisted tag
FUNCTIONS: dict[str, type[Function]] = {}

# Tags of peak shapes, in registration order
PEAK_TYPES: list[str] = []


def register_function(tag: str, *, peak: bool = False) -> Callable[[F], F]:
    """Register a function class under a type tag.

    Args:
        tag: Tag written to and read from the ``"type"`` key
        peak: Whether the class is a peak shape selectable for peak fits

    Returns
    -------
        Decorator that registers the class and sets its ``type_tag``

    Example:
        @register_function("Gaussian", peak=True)
        class Gaussian(AmplitudePeak):
            ...
    """

    def decorator(function_class: F) -> F:
        function_class.type_tag = tag
        FUNCTIONS[tag] = function_class
        if peak and tag not in PEAK_TYPES:
            PEAK_TYPES.append(tag)
        return function_class

    return decorator


def get_function(tag: str) -> type[Function]:
    """Get a function class by tag.

    Raises
    ------
        ConfigError: If no class is registered under ``tag``
    """
    try:
        return FUNCTIONS[tag]
    except KeyError:
        msg = f"Unknown function type '{tag}'. Known types: {', '.join(FUNCTIONS)}"
        raise ConfigError(msg) from None


def list_functions() -> list[str]:
    """List all registered function tags."""
    return list(FUNCTIONS.keys())


def list_peak_types() -> list[str]:
    """List the tags of registered peak shapes."""
    return list(PEAK_TYPES)


def make_function(tag: str) -> Function:
    """Create a default-constructed function of the given type."""
    return get_function(tag)()


def function_from_json(obj: Any) -> Function:
    """Rebuild a function from its persisted object.

    Raises
    ------
        ConfigError: If the object is not a mapping, has no ``"type"``, or
            names an unknown type
    """
    if not isinstance(obj, dict):
        msg = f"Function object must be a mapping, got {type(obj).__name__}"
        raise ConfigError(msg)
    if KEY_TYPE not in obj:
        msg = f"Function object has no '{KEY_TYPE}' key"
        raise ConfigError(msg)
    function = make_function(str(obj[KEY_TYPE]))
    function.load_json(obj)
    return function


register_function("sum")(SumFunctions)
register_function("polynom")(Polynom)
