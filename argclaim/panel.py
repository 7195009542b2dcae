from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rich.panel import Panel

    from argclaim.exceptions import ArgclaimError


def ArgclaimPanel(error: "ArgclaimError", style: str = "red") -> "Panel":  # noqa: N802
    """Wrap a runtime parsing error in a rounded panel titled by the kind of error.

    .. code-block:: text

        ╭─ Missing Argument ───────────────────────╮
        │ Missing required parameter "--input".    │
        ╰──────────────────────────────────────────╯
    """
    from rich import box
    from rich.panel import Panel
    from rich.text import Text

    return Panel(
        Text(str(error), "default"),
        title=error.title,
        title_align="left",
        style=style,
        box=box.ROUNDED,
    )
