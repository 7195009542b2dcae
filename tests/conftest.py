import pytest
from rich.console import Console

import argclaim


@pytest.fixture
def console():
    return Console(width=70, force_terminal=True, highlight=False, color_system=None, legacy_windows=False)


@pytest.fixture
def parse(console):
    """Parse with errors raised instead of printed, and help text captured instead of printed."""
    printed_help = []

    def inner(builder, tokens, **kwargs):
        kwargs.setdefault("print_error", False)
        kwargs.setdefault("exit_on_error", False)
        kwargs.setdefault("print_help", printed_help.append)
        kwargs.setdefault("console", console)
        return argclaim.parse_arguments(tokens, builder, **kwargs)

    inner.printed_help = printed_help
    return inner
