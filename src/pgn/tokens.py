"""
Lexical units of PGN and the rules deciding which characters belong to them.

Key idea: Use strategy pattern (again) to define one small acceptance machine per token kind.
A token is built one character at a time: each character is offered to `PartialToken.accept()`, which answers
whether the character was taken, whether it finished the token, or whether it belongs to the next token.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Optional


class AcceptResult(Enum):
    CONSUMED = auto()  # token continues
    TERMINATED_CONSUMED = auto()  # character was the last one of the token
    TERMINATED_NONCONSUMED = auto()  # token ended before this character: offer it to the next token
    INVALID = auto()


class TokenKind(Enum):
    SYMBOL = auto()
    INTEGER = auto()
    STRING = auto()
    PERIOD = auto()
    ASTERISK = auto()
    LEFT_BRACKET = auto()
    RIGHT_BRACKET = auto()
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    BRACE_COMMENT = auto()
    LINE_COMMENT = auto()
    ESCAPE_LINE = auto()
    NAG = auto()
    SUFFIX_ANNOTATION = auto()


# Tokens the grammar never looks at
TRANSPARENT_KINDS: frozenset[TokenKind] = frozenset(
    {
        TokenKind.BRACE_COMMENT,
        TokenKind.LINE_COMMENT,
        TokenKind.ESCAPE_LINE,
        TokenKind.NAG,
        TokenKind.SUFFIX_ANNOTATION,
    }
)

# Tokens that only end when a character outside of them shows up (so the end of the input ends them just as well)
SELF_DELIMITING_KINDS: frozenset[TokenKind] = frozenset(
    {
        TokenKind.SYMBOL,
        TokenKind.NAG,
        TokenKind.SUFFIX_ANNOTATION,
    }
)

SYMBOL_PUNCTUATION = ":-_+=#/"
SUFFIX_CHARACTERS = "!?"


def is_symbol_start(character: str) -> bool:
    return character.isascii() and character.isalnum()


def is_symbol_character(character: str) -> bool:
    return is_symbol_start(character) or character in SYMBOL_PUNCTUATION


@dataclass(frozen=True)
class Token:
    """A completed token, as handed to the grammar."""

    kind: TokenKind
    text: str = ""

    def __str__(self) -> str:
        return f"{self.kind.name}({self.text!r})"


@dataclass
class PartialToken:
    """
    A token under construction.
    ----

    `opened` records that the opening character (quote, brace, ';', '%', '$') has been seen.
    Needed to tell the opening quote of a string from the closing one, even for an empty string.
    """

    kind: TokenKind
    text: str = ""
    opened: bool = False
    escaped: bool = False
    digits_only: bool = True

    def accept(self, character: str) -> AcceptResult:
        rule: AcceptFn = ACCEPT_RULES[self.kind]
        return rule(self, character)

    def finish(self) -> Token:
        """Freeze the token. A symbol made of digits only is a move number: an Integer."""
        kind = self.kind
        if kind == TokenKind.SYMBOL and self.digits_only:
            kind = TokenKind.INTEGER
        return Token(kind, self.text)


# --- ACCEPTANCE RULES ---
def accept_string(token: PartialToken, character: str) -> AcceptResult:
    """
    Quoted string: "..."
    ---

    The quotes themselves are not kept. A backslash escapes the next character (so \\" is a quote inside the string).
    Only printable characters are allowed, a string can not span multiple lines.
    """
    if not token.opened:
        token.opened = True
        return AcceptResult.CONSUMED

    if not character.isprintable():
        return AcceptResult.INVALID

    if token.escaped:
        token.escaped = False
        token.text += character
        return AcceptResult.CONSUMED

    if character == "\\":
        token.escaped = True
        return AcceptResult.CONSUMED

    if character == '"':
        return AcceptResult.TERMINATED_CONSUMED

    token.text += character
    return AcceptResult.CONSUMED


def accept_single_character(token: PartialToken, character: str) -> AcceptResult:
    """Period, brackets, parentheses, and '*' are complete with the character that started them"""
    token.text += character
    return AcceptResult.TERMINATED_CONSUMED


def accept_symbol(token: PartialToken, character: str) -> AcceptResult:
    if not is_symbol_character(character):
        return AcceptResult.TERMINATED_NONCONSUMED

    if not character.isdigit():
        token.digits_only = False
    token.text += character
    return AcceptResult.CONSUMED


def accept_nag(token: PartialToken, character: str) -> AcceptResult:
    """Numeric annotation glyph: '$' followed by digits ($1, $22, ...)"""
    if not token.opened:
        token.opened = True
        token.text += character
        return AcceptResult.CONSUMED

    if character.isascii() and character.isdigit():
        token.text += character
        return AcceptResult.CONSUMED
    return AcceptResult.TERMINATED_NONCONSUMED


def accept_suffix_annotation(token: PartialToken, character: str) -> AcceptResult:
    """'!', '?', '!!', '??', '!?', '?!'"""
    if character in SUFFIX_CHARACTERS:
        token.text += character
        return AcceptResult.CONSUMED
    return AcceptResult.TERMINATED_NONCONSUMED


def accept_until(terminator: str) -> "AcceptFn":
    """Comments (and escape lines) swallow everything up to their terminating character. Delimiters are not kept."""

    def _accept(token: PartialToken, character: str) -> AcceptResult:
        if not token.opened:
            token.opened = True
            return AcceptResult.CONSUMED
        if character == terminator:
            return AcceptResult.TERMINATED_CONSUMED
        token.text += character
        return AcceptResult.CONSUMED

    return _accept


# --- STRATEGY PATTERN: ACCEPTANCE RULES ---
AcceptFn = Callable[[PartialToken, str], AcceptResult]
ACCEPT_RULES: dict[TokenKind, AcceptFn] = {
    TokenKind.SYMBOL: accept_symbol,
    TokenKind.STRING: accept_string,
    TokenKind.PERIOD: accept_single_character,
    TokenKind.ASTERISK: accept_single_character,
    TokenKind.LEFT_BRACKET: accept_single_character,
    TokenKind.RIGHT_BRACKET: accept_single_character,
    TokenKind.LEFT_PAREN: accept_single_character,
    TokenKind.RIGHT_PAREN: accept_single_character,
    TokenKind.BRACE_COMMENT: accept_until("}"),
    TokenKind.LINE_COMMENT: accept_until("\n"),
    TokenKind.ESCAPE_LINE: accept_until("\n"),
    TokenKind.NAG: accept_nag,
    TokenKind.SUFFIX_ANNOTATION: accept_suffix_annotation,
}

# Which token a character starts (letters and digits start a symbol, see `start_token()`)
START_CHARACTERS: dict[str, TokenKind] = {
    "[": TokenKind.LEFT_BRACKET,
    "]": TokenKind.RIGHT_BRACKET,
    "(": TokenKind.LEFT_PAREN,
    ")": TokenKind.RIGHT_PAREN,
    '"': TokenKind.STRING,
    ".": TokenKind.PERIOD,
    "*": TokenKind.ASTERISK,
    "{": TokenKind.BRACE_COMMENT,
    "$": TokenKind.NAG,
    ";": TokenKind.LINE_COMMENT,
    "%": TokenKind.ESCAPE_LINE,
    "!": TokenKind.SUFFIX_ANNOTATION,
    "?": TokenKind.SUFFIX_ANNOTATION,
}


def start_token(character: str) -> Optional[PartialToken]:
    """Pick the kind of token the character opens. None if no token can start with it."""
    if character in START_CHARACTERS:
        return PartialToken(START_CHARACTERS[character])
    if is_symbol_start(character):
        return PartialToken(TokenKind.SYMBOL)
    return None
