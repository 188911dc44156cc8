"""Canonical song identifier shared by both score sites."""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering

SONG_ID_ALPHABET = "01689DIOPQbdiloq"
SONG_ID_LENGTH = 32
_BITS_PER_CHAR = 4
_DIGITS = {char: value for value, char in enumerate(SONG_ID_ALPHABET)}


class SongIdParseError(ValueError):
    """Raised when text is not a well-formed 32-character song id."""


@total_ordering
@dataclass(frozen=True, slots=True)
class SongId:
    """A 128-bit id encoded as 32 four-bit digits over ``SONG_ID_ALPHABET``.

    Character ``i`` of the text form occupies bits ``4i..4i+3`` of ``value``.
    """

    value: int

    @classmethod
    def parse(cls, text: str) -> SongId:
        if len(text) != SONG_ID_LENGTH:
            raise SongIdParseError(
                f"Song id must be {SONG_ID_LENGTH} characters, got {len(text)}: {text!r}"
            )
        value = 0
        for position, char in enumerate(text):
            digit = _DIGITS.get(char)
            if digit is None:
                raise SongIdParseError(f"Invalid song id character {char!r} in {text!r}")
            value |= digit << (_BITS_PER_CHAR * position)
        return cls(value)

    def __str__(self) -> str:
        chars: list[str] = []
        remaining = self.value
        for _ in range(SONG_ID_LENGTH):
            chars.append(SONG_ID_ALPHABET[remaining & 0xF])
            remaining >>= _BITS_PER_CHAR
        return "".join(chars)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, SongId):
            return NotImplemented
        return self.value < other.value
