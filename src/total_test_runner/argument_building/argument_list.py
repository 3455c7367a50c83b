"""Ordered command line tokens with per-token log masking."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

MASK = "******"

_DOUBLE_QUOTE = '"'
_DOUBLE_QUOTE_ESCAPED = '""'


def escape_for_script(value: str) -> str:
    """Escape ``value`` for a batch or shell script by doubling every double quote."""
    return value.replace(_DOUBLE_QUOTE, _DOUBLE_QUOTE_ESCAPED)


def quote_whole_token(token: str) -> str:
    """Wrap an already escaped token in an outer pair of double quotes."""
    return f"{_DOUBLE_QUOTE}{token}{_DOUBLE_QUOTE}"


@dataclass(frozen=True)
class ArgumentToken:
    """One command line token."""

    value: str
    masked: bool = False

    @property
    def display(self) -> str:
        return MASK if self.masked else self.value


class ArgumentList:
    """Command line assembled for one run of the Total Test CLI.

    Flags are added verbatim; every value goes through :func:`escape_for_script`.
    """

    def __init__(self) -> None:
        self._tokens: list[ArgumentToken] = []

    def add(self, flag: str) -> ArgumentList:
        """Append a flag or constant token that carries no user data."""
        self._tokens.append(ArgumentToken(flag))
        return self

    def add_value(self, value: str, *, masked: bool = False) -> ArgumentList:
        self._tokens.append(ArgumentToken(escape_for_script(value), masked=masked))
        return self

    def add_option(self, flag: str, value: str, *, masked: bool = False) -> ArgumentList:
        """Append ``flag`` followed by its escaped value as a separate token."""
        return self.add(flag).add_value(value, masked=masked)

    def add_assignment(
        self, flag: str, value: str, *, quote: bool = False, masked: bool = False
    ) -> ArgumentList:
        """Append a single ``flag=value`` token, escaped as a whole."""
        token = escape_for_script(f"{flag}={value}")
        if quote:
            token = quote_whole_token(token)
        self._tokens.append(ArgumentToken(token, masked=masked))
        return self

    @property
    def tokens(self) -> tuple[str, ...]:
        return tuple(token.value for token in self._tokens)

    @property
    def display_tokens(self) -> tuple[str, ...]:
        return tuple(token.display for token in self._tokens)

    def to_display_string(self) -> str:
        """Render the command line for logs with masked tokens hidden."""
        return " ".join(_display_quote(token) for token in self.display_tokens)

    def __iter__(self) -> Iterator[str]:
        return iter(self.tokens)

    def __len__(self) -> int:
        return len(self._tokens)


def _display_quote(token: str) -> str:
    if " " in token and not token.startswith(_DOUBLE_QUOTE):
        return quote_whole_token(token)
    return token
