from collections.abc import Sequence
from typing import TYPE_CHECKING, ClassVar, Optional

from attrs import define, field

if TYPE_CHECKING:
    from rich.console import Console


__all__ = [
    "ArgclaimError",
    "DeclarationCollisionError",
    "DuplicateArgumentError",
    "InvalidDeclarationOrderError",
    "MissingRequiredArgumentError",
    "PositionalCountOutOfRangeError",
    "TooManyValuesError",
    "UnclaimedArgumentError",
    "ValidationError",
    "ValueExpectedButMissingError",
]


class InvalidDeclarationOrderError(Exception):
    """A declaration was made after ``positional_arguments``, or positionals were declared twice."""

    # This doesn't derive from ArgclaimError since this is a developer error
    # rather than a runtime error.


class DeclarationCollisionError(Exception):
    """A declaration reuses a name reserved for the automatic help flag."""


@define
class ArgclaimError(Exception):
    """Root exception for runtime parsing errors.

    As errors bubble up to :func:`~argclaim.parse_arguments`, more information is added to them.
    """

    msg: str | None = None
    """
    If set, override automatic message generation.
    """

    verbose: bool = True
    """
    More verbose error messages; aimed towards developers debugging their schema.
    Defaults to ``False`` when raised through :func:`~argclaim.parse_arguments`.
    """

    root_input_tokens: list[str] | None = None
    """
    The raw tokens that were initially fed into :func:`~argclaim.parse_arguments`.
    """

    schema_name: str | None = None
    """
    Name of the schema being parsed, if it has one.
    """

    console: Optional["Console"] = field(default=None, kw_only=True)
    """:class:`~rich.console.Console` to display runtime errors."""

    title: ClassVar[str] = "Error"
    """Title of the error panel printed by :func:`~argclaim.parse_arguments`."""

    def _message(self) -> str:
        return ""

    def __str__(self):
        if self.msg is not None:
            return self.msg

        strings = []
        if self.verbose:
            strings.append(type(self).__name__)
            if self.schema_name:
                strings.append(f'Schema "{self.schema_name}".')
            if self.root_input_tokens is not None:
                strings.append(f"Root Input Tokens: {self.root_input_tokens}")

        prefix = "\n".join(strings) + "\n" if strings else ""
        return prefix + self._message()


@define(kw_only=True)
class MissingRequiredArgumentError(ArgclaimError):
    """A required parameter or flag was not provided."""

    name: str
    """Canonical name of the missing argument."""

    kind: str = "parameter"
    """Either ``"parameter"`` or ``"flag"``."""

    title: ClassVar[str] = "Missing Argument"

    def _message(self):
        return f'Missing required {self.kind} "--{self.name}".'


@define(kw_only=True)
class DuplicateArgumentError(ArgclaimError):
    """A flag or single-value parameter was specified multiple times."""

    name: str

    title: ClassVar[str] = "Duplicate Argument"

    def _message(self):
        return f'Argument "--{self.name}" specified multiple times.'


@define(kw_only=True)
class TooManyValuesError(DuplicateArgumentError):
    """A single-value parameter received more than one value."""

    values: list[str] = field(factory=list)

    def _message(self):
        return f'Parameter "--{self.name}" accepts a single value; got {len(self.values)}: {self.values}.'


@define(kw_only=True)
class ValueExpectedButMissingError(ArgclaimError):
    """A parameter name was not immediately followed by an unclaimed value."""

    name: str

    token: str = ""
    """The name or short name as it appeared on the command line."""

    title: ClassVar[str] = "Missing Value"

    def _message(self):
        used = f" ({self.token})" if self.token else ""
        return f'Parameter "--{self.name}"{used} requires a value.'


@define(kw_only=True)
class UnclaimedArgumentError(ArgclaimError):
    """A named or short-named token was never claimed by a declaration."""

    token: str = ""
    """Name of an unclaimed ``--name`` token (without dashes)."""

    short_names: Sequence[str] = ()
    """Characters left over in a ``-abc`` bundle."""

    title: ClassVar[str] = "Unknown Argument"

    def _message(self):
        if self.short_names:
            return f"Unknown short-named arguments: {', '.join(self.short_names)}."
        return f'Unknown argument: "--{self.token}".'


@define(kw_only=True)
class PositionalCountOutOfRangeError(ArgclaimError):
    """Number of positional arguments is outside the declared bounds."""

    min_count: int | None = None
    max_count: int | None = None
    actual: int = 0

    title: ClassVar[str] = "Positional Arguments"

    def _message(self):
        if self.min_count is not None and self.max_count is not None:
            if self.min_count == self.max_count:
                expected = f"exactly {self.min_count}"
            else:
                expected = f"between {self.min_count} and {self.max_count}"
        elif self.min_count is not None:
            expected = f"at least {self.min_count}"
        else:
            expected = f"at most {self.max_count}"
        return f"Expected {expected} positional arguments; got {self.actual}."


@define(kw_only=True)
class ValidationError(ArgclaimError):
    """The schema's ``validate`` hook raised an exception."""

    exception_message: str = ""
    """Parenting Assertion/Value/Type Error message."""

    title: ClassVar[str] = "Invalid Arguments"

    def _message(self):
        if self.schema_name:
            message = f'Invalid arguments for "{self.schema_name}".'
        else:
            message = "Invalid arguments."
        if self.exception_message:
            return f"{message} {self.exception_message}"
        return message
