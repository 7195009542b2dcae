"""To prevent circular dependencies, this module should never import anything else from argclaim."""

import functools
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

# https://threeofwands.com/attra-iv-zero-overhead-frozen-attrs-classes/
if TYPE_CHECKING:
    from attrs import frozen
else:
    from attrs import define

    frozen = functools.partial(define, unsafe_hash=True)


def is_iterable(obj) -> bool:
    if isinstance(obj, list | tuple | set | dict):  # Fast path for common types
        return True
    return not isinstance(obj, str) and isinstance(obj, Iterable)


def to_tuple_converter(value: None | Any | Iterable[Any]) -> tuple[Any, ...]:
    """Convert a single element or an iterable of elements into a tuple.

    Intended to be used in an ``attrs.Field``. If :obj:`None` is provided, returns an empty tuple.
    If a single element is provided, returns a tuple containing just that element.
    If an iterable is provided, converts it into a tuple.

    Parameters
    ----------
    value: Any | Iterable[Any] | None
        An element, an iterable of elements, or None.

    Returns
    -------
    tuple[Any, ...]: A tuple containing the elements.
    """
    if value is None:
        return ()
    elif is_iterable(value):
        return tuple(value)
    else:
        return (value,)


def short_names_converter(value: None | str | Iterable[str]) -> tuple[str, ...]:
    """Normalize short names into a tuple of single characters.

    A plain string is split into its characters, so ``"vq"`` and ``["v", "q"]`` are equivalent.
    """
    if isinstance(value, str):
        value = tuple(value)
    out = to_tuple_converter(value)
    for short_name in out:
        if not isinstance(short_name, str) or len(short_name) != 1:
            raise ValueError(f"Short names must be single characters; got {short_name!r}.")
    return out
