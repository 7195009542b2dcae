from collections.abc import Iterable

from attrs import field

from argclaim.utils import frozen

END_OF_OPTIONS_DELIMITER = "--"
PASSTHROUGH_TOGGLE = "---"


@frozen
class ValueToken:
    """A bare token; either a parameter value or a positional argument."""

    text: str


@frozen
class NameToken:
    """A ``--name`` reference. ``text`` holds the name without the leading dashes."""

    text: str

    @property
    def keyword(self) -> str:
        return "--" + self.text


@frozen
class ShortNameBundle:
    """A ``-abc`` token; each character is independently claimable."""

    chars: tuple[str, ...] = field(converter=tuple)

    @property
    def keyword(self) -> str:
        return "-" + "".join(self.chars)


Token = ValueToken | NameToken | ShortNameBundle


@frozen
class TokenStream:
    """Result of :func:`tokenize`."""

    tokens: tuple[Token, ...] = field(converter=tuple)
    """Classified tokens, in input order."""

    post_separator: tuple[str, ...] = field(converter=tuple, factory=tuple)
    """Raw strings that were passed through verbatim after ``--`` or inside a ``---`` block."""


def classify(raw: str) -> Token:
    """Classify a single raw string into a token."""
    if raw.startswith("--"):
        return NameToken(raw[2:])
    elif raw.startswith("-") and len(raw) > 1:
        return ShortNameBundle(raw[1:])
    else:
        return ValueToken(raw)


def tokenize(raw: Iterable[str], *, positional_until_separator: bool = False) -> TokenStream:
    """Classify a raw argument vector in a single left-to-right pass.

    * ``---`` toggles passthrough mode and is itself dropped.
    * ``--`` is dropped and makes every following string passthrough, permanently.
      Inside a ``---`` block it is kept verbatim, but still ends toggling.
    * Passthrough strings go to :attr:`TokenStream.post_separator` untouched.

    Parameters
    ----------
    raw: Iterable[str]
        Raw command line strings (usually ``sys.argv[1:]``).
    positional_until_separator: bool
        Start in passthrough mode, as if the vector began with ``---``.

    Returns
    -------
    TokenStream
    """
    tokens, post_separator = [], []
    passthrough = positional_until_separator
    terminated = False

    for element in raw:
        if terminated:
            post_separator.append(element)
        elif element == PASSTHROUGH_TOGGLE:
            passthrough = not passthrough
        elif element == END_OF_OPTIONS_DELIMITER:
            terminated = True
            if passthrough:
                post_separator.append(element)
        elif passthrough:
            post_separator.append(element)
        else:
            tokens.append(classify(element))

    return TokenStream(tokens, post_separator)
