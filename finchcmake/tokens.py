"""Token kinds and tokens produced by the CMake lexer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Union

from finchcmake.source import SourceLocation

TokenValue = Optional[Union[str, float]]


class TokenType(Enum):
    """Lexical categories of CMake source."""

    IDENTIFIER = auto()
    STRING = auto()
    NUMBER = auto()
    VARIABLE = auto()
    GENERATOR_EXPR = auto()

    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    LEFT_BRACKET = auto()
    RIGHT_BRACKET = auto()
    SEMICOLON = auto()

    COMMENT = auto()
    BRACKET_COMMENT = auto()

    NEWLINE = auto()
    WHITESPACE = auto()
    EOF = auto()

    INVALID = auto()


_TRIVIA = frozenset({TokenType.WHITESPACE, TokenType.COMMENT, TokenType.BRACKET_COMMENT})


@dataclass(frozen=True)
class Token:
    """A lexed token with its value, location and original text."""

    type: TokenType
    value: TokenValue = None
    location: SourceLocation = field(default_factory=SourceLocation)
    text: str = ""

    def is_type(self, token_type: TokenType) -> bool:
        return self.type is token_type

    def is_error(self) -> bool:
        return self.type is TokenType.INVALID

    def is_trivia(self) -> bool:
        """Whitespace and comments, which the parser may skip."""
        return self.type in _TRIVIA