"""Tokenizer for ``.martial`` source text."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterator, Optional


class TokenKind(enum.Enum):
    """Kinds of tokens; the value is the token's display text."""

    ROLES = "roles"
    STATE = "state"
    SEQUENCE = "sequence"
    GROUP = "group"
    IDENTIFIER = "identifier"
    LEFT_BRACE = "{"
    RIGHT_BRACE = "}"
    LEFT_BRACKET = "["
    RIGHT_BRACKET = "]"
    COLON = ":"
    ARROW = "->"
    COMMA = ","
    EOF = "EOF"


_KEYWORDS = {
    "roles": TokenKind.ROLES,
    "state": TokenKind.STATE,
    "sequence": TokenKind.SEQUENCE,
    "group": TokenKind.GROUP,
}

_SINGLE_CHAR = {
    "{": TokenKind.LEFT_BRACE,
    "}": TokenKind.RIGHT_BRACE,
    "[": TokenKind.LEFT_BRACKET,
    "]": TokenKind.RIGHT_BRACKET,
    ":": TokenKind.COLON,
    ",": TokenKind.COMMA,
}


@dataclass(frozen=True)
class Token:
    """A token; ``text`` is set only for identifiers."""

    kind: TokenKind
    text: Optional[str] = None

    @classmethod
    def identifier(cls, text: str) -> Token:
        return cls(TokenKind.IDENTIFIER, text)

    def __str__(self) -> str:
        if self.kind is TokenKind.IDENTIFIER:
            return self.text or ""
        return self.kind.value


@dataclass(frozen=True)
class Position:
    """A 1-based line and column in the source."""

    line: int
    column: int

    def __str__(self) -> str:
        return f"line {self.line}, column {self.column}"


@dataclass(frozen=True)
class PositionedToken:
    """A token together with where it starts."""

    token: Token
    position: Position


class LexError(Exception):
    """Raised when the source contains text that is not a token."""

    def __init__(self, message: str, position: Position) -> None:
        super().__init__(message, position)
        self.message = message
        self.position = position

    def __str__(self) -> str:
        return f"Lexer error at {self.position}: {self.message}"


def _describe(ch: Optional[str]) -> str:
    return "None" if ch is None else f"Some('{ch}')"


class Lexer:
    """Turns source text into positioned tokens."""

    def __init__(self, source: str) -> None:
        self._text = source
        self._index = 0
        self._line = 1
        self._column = 1

    def _peek(self, offset: int = 0) -> Optional[str]:
        i = self._index + offset
        return self._text[i] if i < len(self._text) else None

    def _advance(self) -> Optional[str]:
        ch = self._peek()
        if ch is None:
            return None
        self._index += 1
        if ch == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1
        return ch

    def _skip_trivia(self) -> None:
        while True:
            while (ch := self._peek()) is not None and ch.isspace():
                self._advance()
            if self._peek() == "/" and self._peek(1) == "/":
                while (ch := self._peek()) is not None and ch != "\n":
                    self._advance()
            else:
                return

    def _lex_word(self) -> Token:
        start = self._index
        while (ch := self._peek()) is not None and (ch.isalnum() or ch == "_"):
            self._advance()
        word = self._text[start:self._index]
        kind = _KEYWORDS.get(word)
        return Token(kind) if kind is not None else Token.identifier(word)

    def next_token(self) -> PositionedToken:
        """Return the next token, or an EOF token once the input is used up."""
        self._skip_trivia()
        position = Position(self._line, self._column)
        ch = self._peek()

        if ch is None:
            return PositionedToken(Token(TokenKind.EOF), position)

        if ch in _SINGLE_CHAR:
            self._advance()
            return PositionedToken(Token(_SINGLE_CHAR[ch]), position)

        if ch == "-":
            self._advance()
            if self._peek() == ">":
                self._advance()
                return PositionedToken(Token(TokenKind.ARROW), position)
            raise LexError(
                f"Expected '>' after '-', got {_describe(self._peek())}", position
            )

        if ch.isalpha() or ch == "_":
            return PositionedToken(self._lex_word(), position)

        raise LexError(f"Unexpected character: '{ch}'", position)

    def __iter__(self) -> Iterator[PositionedToken]:
        while True:
            tok = self.next_token()
            yield tok
            if tok.token.kind is TokenKind.EOF:
                return

    def tokenize(self) -> list[PositionedToken]:
        """Tokenize the rest of the input; the list ends with an EOF token."""
        return list(self)


def tokenize(source: str) -> list[PositionedToken]:
    """Tokenize ``source`` completely."""
    return Lexer(source).tokenize()