import sys
from collections.abc import Iterable
from typing import overload

from argclaim.context import DeclarationContext, Mode
from argclaim.exceptions import MissingRequiredArgumentError
from argclaim.inspection import ArgumentKind, ArgumentSpec, InspectionModel, PositionalSpec
from argclaim.session import ParseSession

if sys.version_info < (3, 11):  # pragma: no cover
    from typing_extensions import assert_never
else:  # pragma: no cover
    from typing import assert_never


class Arguments:
    """Base class for a declarative command line schema.

    Subclasses declare their arguments inside ``__init__``, after calling ``super().__init__``:

    .. code-block:: python

        class Example(Arguments):
            def __init__(self, context):
                super().__init__(context, name="example", description="An example.")
                self.text = self.parameter("text", short_names="t", description="Print this text.")
                self.shout = self.optional_flag("shout", default=False)
                self.more = self.positional_arguments("more-text")

    The same ``__init__`` runs for both parsing (:func:`~argclaim.parse_arguments`) and
    inspection (:func:`~argclaim.inspect_arguments`). During inspection every declaration
    returns a placeholder instead of a parsed value.

    Store results under attribute names that differ from the declaration methods;
    ``self.flag = self.flag("flag")`` shadows :meth:`flag` and any later ``self.flag(...)``
    raises :exc:`TypeError`.

    Parameters
    ----------
    context: DeclarationContext
        Provided by :func:`~argclaim.parse_arguments` or :func:`~argclaim.inspect_arguments`.
    name: str
        Displayed as the first line of the help page.
    description: str
        Displayed below the name on the help page.
    """

    def __init__(self, context: DeclarationContext, name: str = "", description: str = ""):
        if not isinstance(context, DeclarationContext):
            raise TypeError(
                "Arguments must be constructed with the DeclarationContext provided by "
                "parse_arguments or inspect_arguments."
            )
        context.bind(self)
        self._context = context
        self._schema_name = name
        self._schema_description = description

    @property
    def _session(self) -> ParseSession:
        assert self._context.session is not None
        return self._context.session

    @property
    def positionals(self) -> list[str]:
        """Positional values after parsing.

        Either the result of :meth:`positional_arguments`, or every value no declaration claimed.
        Empty when inspecting or showing help.
        """
        return list(self._context.positionals or [])

    def _declare(
        self,
        kind: ArgumentKind,
        name: str,
        alias_names: Iterable[str],
        short_names: str | Iterable[str],
        description: str,
        is_optional: bool,
        default_value: str | None = None,
    ) -> ArgumentSpec:
        self._context.check_order(name)
        spec = ArgumentSpec(
            name=name,
            kind=kind,
            alias_names=alias_names,
            short_names=short_names,
            is_optional=is_optional,
            default_value=default_value,
            description=description,
        )
        self._context.add_argument(spec)
        return spec

    def parameter(
        self,
        name: str,
        alias_names: Iterable[str] = (),
        short_names: str | Iterable[str] = (),
        description: str = "",
    ) -> str:
        """Declare a required single-value parameter, e.g. ``--name value``.

        Raises
        ------
        MissingRequiredArgumentError
            The parameter was not provided.
        TooManyValuesError
            The parameter was provided more than once.
        ValueExpectedButMissingError
            The parameter was not followed by a value.
        """
        spec = self._declare(ArgumentKind.PARAMETER, name, alias_names, short_names, description, False)

        match self._context.mode:
            case Mode.INSPECTION:
                return ""
            case Mode.EXECUTION:
                value = self._session.claim_parameter(spec.name, spec.names, spec.short_names)
                if value is None:
                    raise MissingRequiredArgumentError(name=name, kind="parameter")
                return value
            case _:  # pragma: no cover
                assert_never(self._context.mode)

    @overload
    def optional_parameter(
        self,
        name: str,
        alias_names: Iterable[str] = (),
        short_names: str | Iterable[str] = (),
        description: str = "",
        default: None = None,
    ) -> str | None: ...

    @overload
    def optional_parameter(
        self,
        name: str,
        alias_names: Iterable[str] = (),
        short_names: str | Iterable[str] = (),
        description: str = "",
        *,
        default: str,
    ) -> str: ...

    def optional_parameter(self, name, alias_names=(), short_names=(), description="", default=None):
        """Declare an optional single-value parameter.

        Returns ``default`` when the parameter is absent.
        """
        spec = self._declare(ArgumentKind.PARAMETER, name, alias_names, short_names, description, True, default)

        match self._context.mode:
            case Mode.INSPECTION:
                return None if default is None else ""
            case Mode.EXECUTION:
                value = self._session.claim_parameter(spec.name, spec.names, spec.short_names)
                return default if value is None else value
            case _:  # pragma: no cover
                assert_never(self._context.mode)

    def multi_parameter(
        self,
        name: str,
        alias_names: Iterable[str] = (),
        short_names: str | Iterable[str] = (),
        description: str = "",
    ) -> list[str]:
        """Declare a repeatable parameter; ``-m a -m b`` yields ``["a", "b"]``.

        An absent multi-parameter yields an empty list.
        """
        spec = self._declare(ArgumentKind.MULTI_PARAMETER, name, alias_names, short_names, description, False)

        match self._context.mode:
            case Mode.INSPECTION:
                return []
            case Mode.EXECUTION:
                return self._session.claim_multi_parameter(spec.name, spec.names, spec.short_names)
            case _:  # pragma: no cover
                assert_never(self._context.mode)

    def flag(
        self,
        name: str,
        alias_names: Iterable[str] = (),
        short_names: str | Iterable[str] = (),
        description: str = "",
    ) -> bool:
        """Declare a required flag. ``--name`` yields :obj:`True`, ``--no-name`` yields :obj:`False`.

        Raises
        ------
        MissingRequiredArgumentError
            Neither form of the flag was provided.
        DuplicateArgumentError
            The flag was provided more than once.
        """
        spec = self._declare(ArgumentKind.FLAG, name, alias_names, short_names, description, False)

        match self._context.mode:
            case Mode.INSPECTION:
                return False
            case Mode.EXECUTION:
                value = self._session.claim_flag(spec.name, spec.names, spec.short_names)
                if value is None:
                    raise MissingRequiredArgumentError(name=name, kind="flag")
                return value
            case _:  # pragma: no cover
                assert_never(self._context.mode)

    @overload
    def optional_flag(
        self,
        name: str,
        alias_names: Iterable[str] = (),
        short_names: str | Iterable[str] = (),
        description: str = "",
        default: None = None,
    ) -> bool | None: ...

    @overload
    def optional_flag(
        self,
        name: str,
        alias_names: Iterable[str] = (),
        short_names: str | Iterable[str] = (),
        description: str = "",
        *,
        default: bool,
    ) -> bool: ...

    def optional_flag(self, name, alias_names=(), short_names=(), description="", default=None):
        """Declare an optional flag.

        Returns ``default`` when the flag is absent.
        """
        default_value = None if default is None else str(bool(default)).lower()
        spec = self._declare(ArgumentKind.FLAG, name, alias_names, short_names, description, True, default_value)

        match self._context.mode:
            case Mode.INSPECTION:
                return False
            case Mode.EXECUTION:
                value = self._session.claim_flag(spec.name, spec.names, spec.short_names)
                return default if value is None else value
            case _:  # pragma: no cover
                assert_never(self._context.mode)

    def positional_arguments(
        self,
        name: str = "arguments",
        description: str = "",
        min_count: int | None = None,
        max_count: int | None = None,
    ) -> list[str]:
        """Claim every remaining value, followed by everything after ``--``.

        Must be the last declaration of the schema.

        Raises
        ------
        InvalidDeclarationOrderError
            Positional arguments were already declared.
        PositionalCountOutOfRangeError
            The number of values violates ``min_count``/``max_count``.
        """
        self._context.check_order(name)
        if min_count is not None and max_count is not None and min_count > max_count:
            raise ValueError(f"min_count ({min_count}) cannot exceed max_count ({max_count}).")

        spec = PositionalSpec(name=name, description=description, min_count=min_count, max_count=max_count)
        self._context.add_positional(spec)

        match self._context.mode:
            case Mode.INSPECTION:
                return []
            case Mode.EXECUTION:
                values = self._session.claim_positional(min_count, max_count)
                self._context.positionals = values
                return list(values)
            case _:  # pragma: no cover
                assert_never(self._context.mode)

    def validate(self) -> None:
        """Cross-field validation hook; runs once after a successful parse.

        Raise :exc:`ValueError`, :exc:`TypeError` or :exc:`AssertionError` to reject the arguments.
        Never called when inspecting or showing help.
        """

    def inspect(self) -> InspectionModel:
        """Structural description of everything declared so far."""
        return InspectionModel(
            name=self._schema_name,
            description=self._schema_description,
            arguments=self._context.arguments,
            positional=self._context.positional,
        )
