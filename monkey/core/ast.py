"""Abstract syntax tree for the monkey language.

```
<program>    ::= <statement>*
<statement>  ::= "let" <ident> "=" <expr> ";"?
               | "return" <expr> ";"?
               | <expr> ";"?
<block>      ::= "{" <statement>* "}"
<expr>       ::= <ident> | <int> | "true" | "false"
               | ("!" | "-") <expr>                             ; prefix
               | <expr> <infix_op> <expr>                       ; infix, see parser.PRECEDENCES
               | "(" <expr> ")"
               | "if" "(" <expr> ")" <block> ("else" <block>)?
               | "fn" "(" (<ident> ("," <ident>)*)? ")" <block>
               | <expr> "(" (<expr> ("," <expr>)*)? ")"         ; call
```

Nodes are pure data: once built they are never mutated, and every node but Program keeps the Token that introduced
it. string() renders a node back to source-like text, fully parenthesizing operator expressions.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Tuple

from monkey.core.token import Token


class Node(ABC):
    """Superclass of every AST node."""
    token: Token

    def token_literal(self):
        """Literal of the token that introduced this node."""
        return self.token.literal

    @abstractmethod
    def string(self):
        """Renders this node as source-like text."""

    def __str__(self):
        return self.string()


class Statement(Node):
    ...


class Expression(Node):
    ...


@dataclass(frozen=True)
class Program(Node):
    """Root of every parse. An empty program (empty source) is valid."""
    statements: Tuple[Statement, ...] = ()

    def token_literal(self):
        if self.statements:
            return self.statements[0].token_literal()
        return ""

    def string(self):
        return "".join(statement.string() for statement in self.statements)


@dataclass(frozen=True)
class Identifier(Expression):
    token: Token
    value: str

    def string(self):
        return self.value


@dataclass(frozen=True)
class IntegerLiteral(Expression):
    token: Token
    value: int

    def string(self):
        return self.token.literal


@dataclass(frozen=True)
class Boolean(Expression):
    token: Token
    value: bool

    def string(self):
        return self.token.literal


@dataclass(frozen=True)
class PrefixExpression(Expression):
    token: Token
    operator: str
    right: Expression

    def string(self):
        return f"({self.operator}{self.right.string()})"


@dataclass(frozen=True)
class InfixExpression(Expression):
    token: Token
    left: Expression
    operator: str
    right: Expression

    def string(self):
        return f"({self.left.string()} {self.operator} {self.right.string()})"


@dataclass(frozen=True)
class LetStatement(Statement):
    token: Token
    name: Identifier
    value: Expression

    def string(self):
        return f"{self.token_literal()} {self.name.string()} = {self.value.string()};"


@dataclass(frozen=True)
class ReturnStatement(Statement):
    token: Token
    return_value: Expression

    def string(self):
        return f"{self.token_literal()} {self.return_value.string()};"


@dataclass(frozen=True)
class ExpressionStatement(Statement):
    token: Token
    expression: Expression

    def string(self):
        return self.expression.string()


@dataclass(frozen=True)
class BlockStatement(Statement):
    token: Token
    statements: Tuple[Statement, ...] = ()

    def string(self):
        return "".join(statement.string() for statement in self.statements)


@dataclass(frozen=True)
class IfExpression(Expression):
    token: Token
    condition: Expression
    consequence: BlockStatement
    alternative: Optional[BlockStatement] = None

    def string(self):
        result = f"if{self.condition.string()} {self.consequence.string()}"
        if self.alternative is not None:
            result += f"else {self.alternative.string()}"
        return result


@dataclass(frozen=True)
class FunctionLiteral(Expression):
    token: Token
    parameters: Tuple[Identifier, ...]
    body: BlockStatement

    def string(self):
        params = ", ".join(param.string() for param in self.parameters)
        return f"{self.token_literal()}({params}) {self.body.string()}"


@dataclass(frozen=True)
class CallExpression(Expression):
    token: Token  # the "(" token
    function: Expression
    arguments: Tuple[Expression, ...] = ()

    def string(self):
        args = ", ".join(arg.string() for arg in self.arguments)
        return f"{self.function.string()}({args})"
