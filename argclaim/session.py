from collections.abc import Iterable, Sequence

from attrs import define, field

from argclaim.exceptions import (
    DuplicateArgumentError,
    PositionalCountOutOfRangeError,
    TooManyValuesError,
    ValueExpectedButMissingError,
)
from argclaim.token import NameToken, ShortNameBundle, TokenStream, ValueToken, tokenize


@define
class ParseSession:
    """Claim state for a single raw argument vector.

    Tokens live in an immutable arena indexed by position.
    Claim state is kept in parallel arrays:

    * ``claimed[i]`` for :class:`.NameToken` and :class:`.ValueToken`.
    * ``unclaimed_chars[i]`` for :class:`.ShortNameBundle`; characters are removed as they are claimed.

    A session belongs to exactly one schema construction and must not be reused.
    """

    tokens: tuple[NameToken | ShortNameBundle | ValueToken, ...] = field(converter=tuple)
    post_separator: tuple[str, ...] = field(converter=tuple, factory=tuple)
    claimed: list[bool] = field(init=False)
    unclaimed_chars: list[list[str]] = field(init=False)

    def __attrs_post_init__(self):
        self.claimed = [False] * len(self.tokens)
        self.unclaimed_chars = [list(t.chars) if isinstance(t, ShortNameBundle) else [] for t in self.tokens]

    @classmethod
    def from_stream(cls, stream: TokenStream) -> "ParseSession":
        return cls(stream.tokens, stream.post_separator)

    @classmethod
    def from_raw(cls, raw: Iterable[str], *, positional_until_separator: bool = False) -> "ParseSession":
        return cls.from_stream(tokenize(raw, positional_until_separator=positional_until_separator))

    def _claim_name(self, index: int, names: Sequence[str]) -> bool:
        token = self.tokens[index]
        assert isinstance(token, NameToken)
        if self.claimed[index] or token.text not in names:
            return False
        self.claimed[index] = True
        return True

    def _claim_char(self, index: int, short_names: Sequence[str]) -> str | None:
        """Claim the first of ``short_names`` still present in the bundle at ``index``."""
        remaining = self.unclaimed_chars[index]
        for short_name in short_names:
            if short_name in remaining:
                remaining.remove(short_name)
                return short_name
        return None

    def _claim_following_value(self, index: int) -> str | None:
        next_index = index + 1
        if next_index >= len(self.tokens):
            return None
        token = self.tokens[next_index]
        if not isinstance(token, ValueToken) or self.claimed[next_index]:
            return None
        self.claimed[next_index] = True
        return token.text

    def claim_flag(self, name: str, names: Sequence[str], short_names: Sequence[str] = ()) -> bool | None:
        """Claim every occurrence of a flag.

        Parameters
        ----------
        name: str
            Canonical name; used for error messages.
        names: Sequence[str]
            Long names (canonical + aliases), without leading dashes.
            ``--no-NAME`` negates.
        short_names: Sequence[str]
            Single characters matched inside ``-abc`` bundles.

        Raises
        ------
        DuplicateArgumentError
            The flag was matched more than once.

        Returns
        -------
        bool | None
            :obj:`None` if the flag was not present.
        """
        result = None
        negated_names = ["no-" + x for x in names]

        for index, token in enumerate(self.tokens):
            if isinstance(token, NameToken):
                if self._claim_name(index, negated_names):
                    value = False
                elif self._claim_name(index, names):
                    value = True
                else:
                    continue
            elif isinstance(token, ShortNameBundle):
                if self._claim_char(index, short_names) is None:
                    continue
                value = True
            else:
                continue

            if result is not None:
                raise DuplicateArgumentError(name=name)
            result = value

        return result

    def claim_multi_parameter(self, name: str, names: Sequence[str], short_names: Sequence[str] = ()) -> list[str]:
        """Claim every occurrence of a parameter along with the value that immediately follows it.

        Raises
        ------
        ValueExpectedButMissingError
            A matched name is not directly followed by an unclaimed value.

        Returns
        -------
        list[str]
            Values in the order they appeared; empty if the parameter was not present.
        """
        values = []
        for index, token in enumerate(self.tokens):
            if isinstance(token, NameToken):
                if not self._claim_name(index, names):
                    continue
                used = token.keyword
            elif isinstance(token, ShortNameBundle):
                short_name = self._claim_char(index, short_names)
                if short_name is None:
                    continue
                used = "-" + short_name
            else:
                continue

            value = self._claim_following_value(index)
            if value is None:
                raise ValueExpectedButMissingError(name=name, token=used)
            values.append(value)

        return values

    def claim_parameter(self, name: str, names: Sequence[str], short_names: Sequence[str] = ()) -> str | None:
        """Single-value variant of :meth:`claim_multi_parameter`.

        Raises
        ------
        TooManyValuesError
            The parameter was given more than once.
        """
        values = self.claim_multi_parameter(name, names, short_names)
        if len(values) > 1:
            raise TooManyValuesError(name=name, values=values)
        return values[0] if values else None

    def unclaimed_values(self) -> list[str]:
        return [
            token.text
            for token, claimed in zip(self.tokens, self.claimed, strict=True)
            if isinstance(token, ValueToken) and not claimed
        ]

    def claim_positional(self, min_count: int | None = None, max_count: int | None = None) -> list[str]:
        """Claim all remaining values, followed by the post-separator strings.

        Raises
        ------
        PositionalCountOutOfRangeError
            The number of collected values violates ``min_count``/``max_count``.
        """
        values = []
        for index, token in enumerate(self.tokens):
            if isinstance(token, ValueToken) and not self.claimed[index]:
                self.claimed[index] = True
                values.append(token.text)
        values.extend(self.post_separator)

        if (min_count is not None and len(values) < min_count) or (max_count is not None and len(values) > max_count):
            raise PositionalCountOutOfRangeError(min_count=min_count, max_count=max_count, actual=len(values))

        return values

    def unclaimed_names(self) -> list[str]:
        return [
            token.text
            for token, claimed in zip(self.tokens, self.claimed, strict=True)
            if isinstance(token, NameToken) and not claimed
        ]

    def unclaimed_short_names(self) -> list[list[str]]:
        """Leftover characters, one list per bundle that still has any."""
        return [list(chars) for chars in self.unclaimed_chars if chars]
