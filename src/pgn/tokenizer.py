"""Turns a stream of characters into a (lazy, single pass) stream of tokens."""

from typing import Iterable, Iterator, Optional, TextIO

from src.core.exceptions import LexicalError
from src.pgn.tokens import (
    SELF_DELIMITING_KINDS,
    AcceptResult,
    PartialToken,
    Token,
    start_token,
)

SEPARATORS = " \t\n\r"
CHUNK_SIZE = 4096


class Tokenizer:
    """
    Iterate over this to get the tokens of the input, one at a time.
    ----

    Separators (whitespace) are only skipped in between tokens: inside a string or a comment they are just characters.

    NOTE: A token still being built when the input runs out is dropped.
    With `flush_trailing_token`, a symbol / NAG / suffix annotation cut off by the end of the input is handed out
    instead, since nothing more could have been added to it anyway. Unterminated strings and comments are always dropped.
    """

    def __init__(self, source: str | TextIO, flush_trailing_token: bool = False) -> None:
        self.source = source
        self.flush_trailing_token = flush_trailing_token
        self.line = 1
        self.column = 0
        self._consumed = False

    def __iter__(self) -> Iterator[Token]:
        if self._consumed:
            raise RuntimeError("Tokenizer can only be iterated once.")
        self._consumed = True
        return self._scan()

    def _characters(self) -> Iterator[str]:
        """One character at a time, keeping track of where we are (for error messages)."""
        source = self.source
        chunks: Iterable[str]
        if isinstance(source, str):
            chunks = [source]
        else:
            chunks = iter(lambda: source.read(CHUNK_SIZE), "")
        for chunk in chunks:
            for character in chunk:
                if character == "\n":
                    self.line += 1
                    self.column = 0
                else:
                    self.column += 1
                yield character

    def _scan(self) -> Iterator[Token]:
        current: Optional[PartialToken] = None
        for character in self._characters():
            # a character rejected by the token before is offered again as the start of the next one
            while True:
                if current is None:
                    if character in SEPARATORS:
                        break
                    current = start_token(character)
                    if current is None:
                        raise LexicalError(
                            f"Expecting a letter or digit, got {character!r}",
                            self.line,
                            self.column,
                        )

                result = current.accept(character)
                if result == AcceptResult.CONSUMED:
                    break
                if result == AcceptResult.INVALID:
                    raise LexicalError(
                        f"Unexpected character {character!r} in {current.kind.name.lower()} token",
                        self.line,
                        self.column,
                    )

                yield current.finish()
                current = None
                if result == AcceptResult.TERMINATED_CONSUMED:
                    break

        if (
            current is not None
            and self.flush_trailing_token
            and current.kind in SELF_DELIMITING_KINDS
        ):
            yield current.finish()
