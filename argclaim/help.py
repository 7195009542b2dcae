"""Render an :class:`~argclaim.inspection.InspectionModel` as a plain-text help page."""

from typing import TYPE_CHECKING, Optional

from argclaim.inspection import ArgumentKind, ArgumentSpec, InspectionModel, PositionalSpec

if TYPE_CHECKING:
    from rich.console import Console

INDENT = "  "


def format_usage(argument: ArgumentSpec) -> str:
    """Single usage line for a named argument, e.g. ``[--output | -o] <value>``."""
    usage = " | ".join(["--" + x for x in argument.names] + ["-" + x for x in argument.short_names])
    if argument.is_optional:
        usage = f"[{usage}]"

    if argument.kind is ArgumentKind.MULTI_PARAMETER:
        usage += " <value> (repeat parameter for multiple values)"
    elif argument.kind is ArgumentKind.PARAMETER:
        usage += " <value>"

    return usage


def format_positional_usage(positional: PositionalSpec) -> str:
    usage = f"<{positional.name}> ..."
    if positional.is_optional:
        usage = f"[{usage}]"

    bounds = []
    if positional.min_count:
        bounds.append(f"at least {positional.min_count}")
    if positional.max_count is not None:
        bounds.append(f"at most {positional.max_count}")
    if bounds:
        usage += f" ({', '.join(bounds)})"

    return usage


def format_help(model: InspectionModel) -> str:
    """Render the help page.

    The output depends only on the declarations, so it is identical for every run
    of the same schema.

    Parameters
    ----------
    model: InspectionModel
        Result of :func:`~argclaim.inspect_arguments`.

    Returns
    -------
    str
        Newline-terminated help text.
    """
    lines = []
    if model.name:
        lines.append(model.name)
    if model.description:
        lines.append(model.description)
        lines.append("")

    entries = [(format_usage(x), x.description) for x in model.arguments]
    if model.positional is not None:
        entries.append((format_positional_usage(model.positional), model.positional.description))

    for usage, description in entries:
        lines.append(INDENT + usage)
        if description:
            lines.append(INDENT * 2 + description)

    return "".join(line + "\n" for line in lines)


def help_print(model: InspectionModel, console: Optional["Console"] = None) -> None:
    """Print the help page to a :class:`~rich.console.Console`.

    Markup, highlighting and wrapping are disabled so the printed text matches :func:`format_help`.
    """
    if console is None:
        from rich.console import Console

        console = Console()

    console.print(format_help(model), end="", markup=False, highlight=False, soft_wrap=True)
