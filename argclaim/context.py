from collections.abc import Iterable
from enum import Enum
from typing import TYPE_CHECKING

from attrs import define, field

from argclaim.exceptions import DeclarationCollisionError, InvalidDeclarationOrderError
from argclaim.inspection import ArgumentSpec, PositionalSpec
from argclaim.session import ParseSession

if TYPE_CHECKING:
    from argclaim.arguments import Arguments

HELP_NAME = "help"
HELP_SHORT_NAME = "h"


class Mode(Enum):
    INSPECTION = "inspection"
    """Declarations return placeholders and only record their specs."""

    EXECUTION = "execution"
    """Declarations claim tokens from a :class:`.ParseSession` and return real values."""


@define
class DeclarationContext:
    """Shared state handed to every declaration of a single schema construction.

    Create one with :meth:`for_inspection` or :meth:`for_execution`;
    a context is bound to the first :class:`~argclaim.Arguments` that receives it.
    """

    mode: Mode
    session: ParseSession | None = None
    help_requested: bool = False

    arguments: list[ArgumentSpec] = field(factory=list, init=False)
    positional: PositionalSpec | None = field(default=None, init=False)
    positionals: list[str] | None = field(default=None, init=False)
    """Values claimed by an explicit positional declaration, or harvested by the finalizer."""

    _schema: "Arguments | None" = field(default=None, init=False)

    @classmethod
    def for_inspection(cls) -> "DeclarationContext":
        return cls(Mode.INSPECTION)

    @classmethod
    def for_execution(cls, raw: Iterable[str], *, positional_until_separator: bool = False) -> "DeclarationContext":
        """Tokenize ``raw`` and claim the automatic help flag.

        When help is requested the context drops to :attr:`Mode.INSPECTION`,
        so required arguments are not demanded from a ``--help`` invocation.
        """
        session = ParseSession.from_raw(raw, positional_until_separator=positional_until_separator)
        help_requested = bool(session.claim_flag(HELP_NAME, (HELP_NAME,), (HELP_SHORT_NAME,)))
        mode = Mode.INSPECTION if help_requested else Mode.EXECUTION
        return cls(mode, session, help_requested)

    @property
    def is_executing(self) -> bool:
        return self.mode is Mode.EXECUTION

    @property
    def positional_declared(self) -> bool:
        return self.positional is not None

    def bind(self, schema: "Arguments") -> None:
        if self._schema is not None and self._schema is not schema:
            raise RuntimeError("A DeclarationContext can only be used to construct a single Arguments instance.")
        self._schema = schema

    def check_order(self, name: str) -> None:
        if self.positional_declared:
            raise InvalidDeclarationOrderError(
                f'Cannot declare "{name}" after positional arguments "{self.positional.name}".'  # pyright: ignore[reportOptionalMemberAccess]
            )

    def add_argument(self, spec: ArgumentSpec) -> None:
        self.check_order(spec.name)
        if HELP_NAME in spec.names or HELP_SHORT_NAME in spec.short_names:
            raise DeclarationCollisionError(
                f'"{spec.name}" collides with the automatic "--{HELP_NAME}"/"-{HELP_SHORT_NAME}" flag.'
            )
        self.arguments.append(spec)

    def add_positional(self, spec: PositionalSpec) -> None:
        self.check_order(spec.name)
        self.positional = spec
