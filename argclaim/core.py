import os
import shlex
import sys
import warnings
from collections.abc import Callable, Iterable
from enum import Enum
from functools import lru_cache
from typing import TYPE_CHECKING, Optional, TypeVar

from argclaim.arguments import Arguments
from argclaim.context import DeclarationContext
from argclaim.exceptions import ArgclaimError, UnclaimedArgumentError, ValidationError
from argclaim.help import help_print
from argclaim.inspection import InspectionModel
from argclaim.panel import ArgclaimPanel
from argclaim.token import NameToken, ShortNameBundle

if TYPE_CHECKING:
    from rich.console import Console

T = TypeVar("T", bound=Arguments)


def normalize_tokens(tokens: None | str | Iterable[str]) -> list[str]:
    if tokens is None:
        tokens = sys.argv[1:]  # Remove the executable
    elif isinstance(tokens, str):
        tokens = shlex.split(tokens)
    else:
        tokens = list(tokens)
    return tokens


def _build(builder: Callable[[DeclarationContext], T], context: DeclarationContext) -> T:
    schema = builder(context)
    if not isinstance(schema, Arguments):
        raise TypeError(f"Builder must return an Arguments instance; got {type(schema).__name__}.")
    if schema._context is not context:
        raise RuntimeError("Builder must construct its Arguments with the provided DeclarationContext.")
    return schema


def finalize(schema: Arguments, print_help: Callable[[str], None]) -> None:
    """Run once, after every declaration of ``schema`` has executed.

    * Help mode: hand the rendered help page to ``print_help``.
    * Inspection mode: nothing to do.
    * Execution mode: reject the first unclaimed name in command line order,
      harvest positionals if none were declared, then run :meth:`.Arguments.validate`.

    Raises
    ------
    UnclaimedArgumentError
        A ``--name`` or ``-x`` token was not claimed by any declaration.
    ValidationError
        :meth:`.Arguments.validate` raised.
    """
    context = schema._context

    if context.help_requested:
        print_help(schema.inspect().format_help())
        return

    if not context.is_executing:
        return

    session = context.session
    assert session is not None

    for index, token in enumerate(session.tokens):
        if isinstance(token, NameToken) and not session.claimed[index]:
            raise UnclaimedArgumentError(token=token.text)
        if isinstance(token, ShortNameBundle) and session.unclaimed_chars[index]:
            raise UnclaimedArgumentError(short_names=list(session.unclaimed_chars[index]))

    if not context.positional_declared:
        # Implicit positionals have no bounds.
        context.positionals = session.claim_positional()

    try:
        schema.validate()
    except (AssertionError, ValueError, TypeError) as e:
        raise ValidationError(exception_message=e.args[0] if e.args else "") from e


def inspect_arguments(builder: Callable[[DeclarationContext], Arguments]) -> InspectionModel:
    """Describe a schema without parsing anything.

    Every declaration in ``builder`` runs in inspection mode and returns a placeholder;
    :meth:`.Arguments.validate` is not called.

    Parameters
    ----------
    builder: Callable[[DeclarationContext], Arguments]
        Typically the :class:`.Arguments` subclass itself.

    Returns
    -------
    InspectionModel
    """
    context = DeclarationContext.for_inspection()
    return _build(builder, context).inspect()


def _default_print_help(console: Optional["Console"]) -> Callable[[str], None]:
    def print_help(help_text: str) -> None:
        nonlocal console
        if console is None:
            from rich.console import Console

            console = Console()
        console.print(help_text, end="", markup=False, highlight=False, soft_wrap=True)
        sys.exit(0)

    return print_help


def parse_arguments(
    tokens: None | str | Iterable[str],
    builder: Callable[[DeclarationContext], T],
    *,
    print_help: Callable[[str], None] | None = None,
    console: Optional["Console"] = None,
    error_console: Optional["Console"] = None,
    print_error: bool | None = None,
    exit_on_error: bool | None = None,
    help_on_error: bool | None = None,
    verbose: bool | None = None,
    positional_until_separator: bool | None = None,
) -> T:
    """Parse ``tokens`` against the schema declared by ``builder``.

    The automatic ``--help``/``-h`` flag is claimed before ``builder`` runs.
    If present, every declaration runs in inspection mode and the rendered help page
    is passed to ``print_help`` instead of validating anything.

    Parameters
    ----------
    tokens: None | str | Iterable[str]
        Either a string, or a list of strings.
        Defaults to ``sys.argv[1:]``.
    builder: Callable[[DeclarationContext], Arguments]
        Typically the :class:`.Arguments` subclass itself.
    print_help: Callable[[str], None] | None
        Receives the rendered help page.
        Defaults to printing it to ``console`` and invoking ``sys.exit(0)``.
    console: ~rich.console.Console
        Console to print help. Defaults to a new console on stdout.
    error_console: ~rich.console.Console
        Console to print error messages. Defaults to a new console on stderr.
    print_error: bool | None
        Print a rich-formatted error on error.
        If :obj:`None`, defaults to :obj:`True`.
    exit_on_error: bool | None
        If there is an error parsing the tokens invoke ``sys.exit(1)``.
        Otherwise, continue to raise the exception.
        If :obj:`None`, defaults to :obj:`True`.
    help_on_error: bool | None
        Prints the help-page before printing an error.
        If :obj:`None`, defaults to :obj:`False`.
    verbose: bool | None
        Populate exception strings with more information intended for developers.
        If :obj:`None`, defaults to :obj:`False`.
    positional_until_separator: bool | None
        Treat every token as positional until the first ``---``.
        If :obj:`None`, defaults to :obj:`False`.

    Returns
    -------
    Arguments
        The populated schema.
    """
    if tokens is None:
        _log_framework_warning(_detect_test_framework())

    tokens = normalize_tokens(tokens)
    if print_help is None:
        print_help = _default_print_help(console)

    context = None
    try:
        context = DeclarationContext.for_execution(tokens, positional_until_separator=bool(positional_until_separator))
        schema = _build(builder, context)
        finalize(schema, print_help)
    except ArgclaimError as e:
        e.verbose = verbose if verbose is not None else False
        e.root_input_tokens = tokens
        if e.schema_name is None and context is not None and context._schema is not None:
            e.schema_name = context._schema._schema_name or None
        if e.console is None:
            if error_console is None:
                from rich.console import Console

                error_console = Console(stderr=True)
            e.console = error_console
        if help_on_error if help_on_error is not None else False:
            help_print(inspect_arguments(builder), console=console)
        if print_error if print_error is not None else True:
            e.console.print(ArgclaimPanel(e))
        if exit_on_error if exit_on_error is not None else True:
            sys.exit(1)
        raise

    return schema


class TestFramework(str, Enum):
    UNKNOWN = ""
    PYTEST = "pytest"


@lru_cache
def _detect_test_framework() -> TestFramework:
    """Detects if we are currently being ran in a test framework.

    Returns
    -------
    TestFramework
        Name of the testing framework. Returns an empty string if not testing
        framework discovered.
    """
    # PYTEST_VERSION is set as of pytest v8.2.0
    if "pytest" in sys.modules and os.environ.get("PYTEST_VERSION") is not None:
        return TestFramework.PYTEST
    else:
        return TestFramework.UNKNOWN


@lru_cache  # Prevent logging of multiple warnings
def _log_framework_warning(framework: TestFramework) -> None:
    """Warn when ``sys.argv`` is parsed from inside a unit-test.

    Intended to catch developers calling :func:`parse_arguments` during unit-tests
    without providing tokens and erroneously reading from :obj:`sys.argv`.
    """
    if framework == TestFramework.UNKNOWN:
        return

    message = (
        f'parse_arguments invoked without tokens under unit-test framework "{framework.value}". '
        "Did you mean parse_arguments([], ...)?"
    )
    warnings.warn(UserWarning(message), stacklevel=3)
