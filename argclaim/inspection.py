from enum import Enum

from attrs import field

from argclaim.utils import frozen, short_names_converter, to_tuple_converter


class ArgumentKind(Enum):
    PARAMETER = "parameter"
    MULTI_PARAMETER = "multi-parameter"
    FLAG = "flag"


@frozen(kw_only=True)
class ArgumentSpec:
    """Structural description of a single named declaration."""

    name: str
    """Canonical long name, without leading dashes."""

    kind: ArgumentKind

    alias_names: tuple[str, ...] = field(default=(), converter=to_tuple_converter)
    """Additional long names, in declaration order."""

    short_names: tuple[str, ...] = field(default=(), converter=short_names_converter)
    """Single-character names, in declaration order."""

    is_optional: bool = False

    default_value: str | None = None
    """Textual default; flags record ``"true"``/``"false"``."""

    description: str = ""

    @property
    def names(self) -> tuple[str, ...]:
        """Canonical name followed by all aliases."""
        return (self.name,) + self.alias_names


@frozen(kw_only=True)
class PositionalSpec:
    """Structural description of the trailing positional declaration."""

    name: str
    description: str = ""
    min_count: int | None = None
    max_count: int | None = None

    @property
    def is_optional(self) -> bool:
        return not self.min_count


@frozen(kw_only=True)
class InspectionModel:
    """Everything a schema declares, in declaration order.

    Produced by :func:`~argclaim.inspect_arguments`, or internally when ``--help`` is given.
    """

    name: str = ""
    description: str = ""
    arguments: tuple[ArgumentSpec, ...] = field(default=(), converter=tuple)
    positional: PositionalSpec | None = None

    def format_help(self) -> str:
        from argclaim.help import format_help

        return format_help(self)
