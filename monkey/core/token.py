"""Tokens of the monkey language. A token is a (kind, literal) pair: kind is one of TokenType, and literal is the
exact source text that produced it.
"""

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    ILLEGAL = auto()
    EOF = auto()

    # identifiers + literals
    IDENT = auto()
    INT = auto()

    # operators
    ASSIGN = auto()
    PLUS = auto()
    MINUS = auto()
    BANG = auto()
    ASTERISK = auto()
    SLASH = auto()
    LT = auto()
    GT = auto()
    EQ = auto()
    NOT_EQ = auto()

    # delimiters
    COMMA = auto()
    SEMICOLON = auto()
    LPAREN = auto()
    RPAREN = auto()
    LBRACE = auto()
    RBRACE = auto()

    # keywords
    FUNCTION = auto()
    LET = auto()
    TRUE = auto()
    FALSE = auto()
    IF = auto()
    ELSE = auto()
    RETURN = auto()


KEYWORDS = {
    "fn": TokenType.FUNCTION,
    "let": TokenType.LET,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "return": TokenType.RETURN,
}


@dataclass(frozen=True)
class Token:
    kind: TokenType
    literal: str

    def __repr__(self):
        return f"Token({self.kind.name}, '{self.literal}')"


def lookup_ident(word):
    """Returns the keyword TokenType for word, or IDENT if word is not a keyword."""
    return KEYWORDS.get(word, TokenType.IDENT)
