"""Lexical analysis for the monkey language: turns a source string into a stream of Tokens, one at a time.

```
<ident>   ::= (<letter> | "_")+          ; keywords are identifiers found in token.KEYWORDS
<int>     ::= <digit>+
<op>      ::= "=" | "==" | "!" | "!=" | "+" | "-" | "*" | "/" | "<" | ">"
<delim>   ::= "," | ";" | "(" | ")" | "{" | "}"
```

Whitespace separates tokens and is otherwise ignored. Anything else is an ILLEGAL token.
"""

from monkey.core.token import Token, TokenType, lookup_ident


class Lexer:
    """On-demand tokenizer. Never looks further ahead than the character after the current one."""
    WHITESPACE = " \t\n\r"
    SINGLES = {
        ";": TokenType.SEMICOLON,
        ",": TokenType.COMMA,
        "(": TokenType.LPAREN,
        ")": TokenType.RPAREN,
        "{": TokenType.LBRACE,
        "}": TokenType.RBRACE,
        "+": TokenType.PLUS,
        "-": TokenType.MINUS,
        "*": TokenType.ASTERISK,
        "/": TokenType.SLASH,
        "<": TokenType.LT,
        ">": TokenType.GT,
    }

    def __init__(self, source):
        self.source = source
        self.position = 0       # index of self.ch
        self.read_position = 0  # index of the character after self.ch
        self.ch = ""            # "" signifies end of input

        self._read_char()

    def next_token(self):
        """Returns the next Token in the source. Once the source is exhausted, every call returns EOF."""
        self._skip_whitespace()
        ch = self.ch

        if ch == "":
            return Token(TokenType.EOF, "")

        if ch == "=" or ch == "!":
            if self._peek_char() == "=":
                self._read_char()
                self._read_char()
                return Token(TokenType.EQ if ch == "=" else TokenType.NOT_EQ, ch + "=")
            kind = TokenType.ASSIGN if ch == "=" else TokenType.BANG

        elif ch in Lexer.SINGLES:
            kind = Lexer.SINGLES[ch]

        elif Lexer.is_letter(ch):
            word = self._read_while(Lexer.is_letter)
            return Token(lookup_ident(word), word)

        elif Lexer.is_digit(ch):
            return Token(TokenType.INT, self._read_while(Lexer.is_digit))

        else:
            kind = TokenType.ILLEGAL

        self._read_char()
        return Token(kind, ch)

    @staticmethod
    def is_letter(ch):
        return ch == "_" or ("a" <= ch <= "z") or ("A" <= ch <= "Z")

    @staticmethod
    def is_digit(ch):
        return "0" <= ch <= "9"

    def _read_char(self):
        if self.read_position >= len(self.source):
            self.ch = ""
        else:
            self.ch = self.source[self.read_position]
        self.position = self.read_position
        self.read_position += 1

    def _peek_char(self):
        if self.read_position >= len(self.source):
            return ""
        return self.source[self.read_position]

    def _skip_whitespace(self):
        while self.ch and self.ch in Lexer.WHITESPACE:
            self._read_char()

    def _read_while(self, predicate):
        start = self.position
        while self.ch and predicate(self.ch):
            self._read_char()
        return self.source[start:self.position]

    def __iter__(self):
        """Yields tokens up to and including the first EOF."""
        while True:
            token = self.next_token()
            yield token
            if token.kind is TokenType.EOF:
                return
