# Don't manually change, let hatch-vcs handle it.
__version__ = "0.0.0"

__all__ = [
    "ArgclaimError",
    "ArgclaimPanel",
    "ArgumentKind",
    "ArgumentSpec",
    "Arguments",
    "DeclarationCollisionError",
    "DeclarationContext",
    "DuplicateArgumentError",
    "InspectionModel",
    "InvalidDeclarationOrderError",
    "MissingRequiredArgumentError",
    "Mode",
    "PositionalCountOutOfRangeError",
    "PositionalSpec",
    "TooManyValuesError",
    "UnclaimedArgumentError",
    "ValidationError",
    "ValueExpectedButMissingError",
    "format_help",
    "help_print",
    "inspect_arguments",
    "parse_arguments",
]

from argclaim.arguments import Arguments
from argclaim.context import DeclarationContext, Mode
from argclaim.core import inspect_arguments, parse_arguments
from argclaim.exceptions import (
    ArgclaimError,
    DeclarationCollisionError,
    DuplicateArgumentError,
    InvalidDeclarationOrderError,
    MissingRequiredArgumentError,
    PositionalCountOutOfRangeError,
    TooManyValuesError,
    UnclaimedArgumentError,
    ValidationError,
    ValueExpectedButMissingError,
)
from argclaim.help import format_help, help_print
from argclaim.inspection import ArgumentKind, ArgumentSpec, InspectionModel, PositionalSpec
from argclaim.panel import ArgclaimPanel
