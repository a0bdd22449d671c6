"""Pratt parser for the monkey language: turns a token stream into a Program.

Statements are parsed by recursive descent. Expressions are parsed by operator precedence: every token kind that can
start an expression has a "prefix" rule, and every token kind that can continue one (binary operators and the call
parenthesis) has an "infix" rule plus a binding power in PRECEDENCES. parse_expression keeps absorbing infix rules
while the peeked operator binds tighter than the floor it was given, and each infix rule parses its right operand with
its own precedence as the new floor, so `a - b - c` groups as `((a - b) - c)` and `a + b * c` as `(a + (b * c))`.

Errors never abort parsing: they are collected in Parser.errors, and the subtree that failed is dropped.
"""

from enum import IntEnum

from monkey.core import ast
from monkey.core.token import TokenType


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2        # == !=
    LESS_GREATER = 3  # < >
    SUM = 4           # + -
    PRODUCT = 5       # * /
    PREFIX = 6        # -x !x
    CALL = 7          # f(x)


PRECEDENCES = {
    TokenType.EQ: Precedence.EQUALS,
    TokenType.NOT_EQ: Precedence.EQUALS,
    TokenType.LT: Precedence.LESS_GREATER,
    TokenType.GT: Precedence.LESS_GREATER,
    TokenType.PLUS: Precedence.SUM,
    TokenType.MINUS: Precedence.SUM,
    TokenType.ASTERISK: Precedence.PRODUCT,
    TokenType.SLASH: Precedence.PRODUCT,
    TokenType.LPAREN: Precedence.CALL,
}

INT64_MAX = 2 ** 63 - 1


class Parser:
    """Parses tokens from token_source, any object with a next_token() method (usually a Lexer). Keeps exactly one
    token of lookahead: current_token is being parsed, peek_token is the one after it.
    """

    def __init__(self, token_source):
        self.token_source = token_source
        self.errors = []

        self.prefix_parse_fns = {
            TokenType.IDENT: self.parse_identifier,
            TokenType.INT: self.parse_integer_literal,
            TokenType.TRUE: self.parse_boolean,
            TokenType.FALSE: self.parse_boolean,
            TokenType.BANG: self.parse_prefix_expression,
            TokenType.MINUS: self.parse_prefix_expression,
            TokenType.LPAREN: self.parse_grouped_expression,
            TokenType.IF: self.parse_if_expression,
            TokenType.FUNCTION: self.parse_function_literal,
        }
        self.infix_parse_fns = {kind: self.parse_infix_expression for kind in PRECEDENCES}
        self.infix_parse_fns[TokenType.LPAREN] = self.parse_call_expression

        self.current_token = None
        self.peek_token = None
        self.next_token()
        self.next_token()

    def next_token(self):
        self.current_token = self.peek_token
        self.peek_token = self.token_source.next_token()

    def current_token_is(self, kind):
        return self.current_token.kind is kind

    def peek_token_is(self, kind):
        return self.peek_token.kind is kind

    def expect_peek(self, kind):
        """Advances if the peeked token is of kind, else records an error. Returns whether it advanced."""
        if self.peek_token_is(kind):
            self.next_token()
            return True
        self.peek_error(kind)
        return False

    def peek_error(self, kind):
        self.errors.append(f"expected next token to be {kind.name}, got {self.peek_token.kind.name} instead")

    def peek_precedence(self):
        return PRECEDENCES.get(self.peek_token.kind, Precedence.LOWEST)

    def current_precedence(self):
        return PRECEDENCES.get(self.current_token.kind, Precedence.LOWEST)

    # ---------- statements ----------

    def parse_program(self):
        statements = []
        while not self.current_token_is(TokenType.EOF):
            statement = self.parse_statement()
            if statement is not None:
                statements.append(statement)
            self.next_token()
        return ast.Program(tuple(statements))

    def parse_statement(self):
        if self.current_token_is(TokenType.LET):
            return self.parse_let_statement()
        elif self.current_token_is(TokenType.RETURN):
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self):
        token = self.current_token

        if not self.expect_peek(TokenType.IDENT):
            return None
        name = ast.Identifier(self.current_token, self.current_token.literal)

        if not self.expect_peek(TokenType.ASSIGN):
            return None
        self.next_token()

        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None

        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()
        return ast.LetStatement(token, name, value)

    def parse_return_statement(self):
        token = self.current_token
        self.next_token()

        return_value = self.parse_expression(Precedence.LOWEST)
        if return_value is None:
            return None

        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()
        return ast.ReturnStatement(token, return_value)

    def parse_expression_statement(self):
        token = self.current_token

        expression = self.parse_expression(Precedence.LOWEST)
        if expression is None:
            return None

        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()
        return ast.ExpressionStatement(token, expression)

    def parse_block_statement(self):
        """Parses statements from the current "{" up to its matching "}", which becomes the current token."""
        token = self.current_token
        statements = []
        self.next_token()

        while not self.current_token_is(TokenType.RBRACE):
            if self.current_token_is(TokenType.EOF):
                self.errors.append(f"expected next token to be {TokenType.RBRACE.name}, got EOF instead")
                break

            statement = self.parse_statement()
            if statement is not None:
                statements.append(statement)
            self.next_token()

        return ast.BlockStatement(token, tuple(statements))

    # ---------- expressions ----------

    def parse_expression(self, precedence):
        prefix = self.prefix_parse_fns.get(self.current_token.kind)
        if prefix is None:
            self.errors.append(f"no prefix parse function for {self.current_token.kind.name} found")
            return None
        left = prefix()

        while left is not None and not self.peek_token_is(TokenType.SEMICOLON) and precedence < self.peek_precedence():
            infix = self.infix_parse_fns.get(self.peek_token.kind)
            if infix is None:
                return left

            self.next_token()
            left = infix(left)

        return left

    def parse_identifier(self):
        return ast.Identifier(self.current_token, self.current_token.literal)

    def parse_integer_literal(self):
        literal = self.current_token.literal
        try:
            value = int(literal)
            if value > INT64_MAX:
                raise ValueError(literal)
        except ValueError:
            self.errors.append(f"could not parse {literal} as integer")
            return None
        return ast.IntegerLiteral(self.current_token, value)

    def parse_boolean(self):
        return ast.Boolean(self.current_token, self.current_token_is(TokenType.TRUE))

    def parse_prefix_expression(self):
        token = self.current_token
        self.next_token()

        right = self.parse_expression(Precedence.PREFIX)
        if right is None:
            return None
        return ast.PrefixExpression(token, token.literal, right)

    def parse_infix_expression(self, left):
        token = self.current_token
        precedence = self.current_precedence()
        self.next_token()

        right = self.parse_expression(precedence)
        if right is None:
            return None
        return ast.InfixExpression(token, left, token.literal, right)

    def parse_grouped_expression(self):
        self.next_token()

        expression = self.parse_expression(Precedence.LOWEST)
        if not self.expect_peek(TokenType.RPAREN):
            return None
        return expression

    def parse_if_expression(self):
        token = self.current_token

        if not self.expect_peek(TokenType.LPAREN):
            return None
        self.next_token()
        condition = self.parse_expression(Precedence.LOWEST)

        if not self.expect_peek(TokenType.RPAREN):
            return None
        if not self.expect_peek(TokenType.LBRACE):
            return None
        consequence = self.parse_block_statement()

        alternative = None
        if self.peek_token_is(TokenType.ELSE):
            self.next_token()
            if not self.expect_peek(TokenType.LBRACE):
                return None
            alternative = self.parse_block_statement()

        if condition is None:
            return None
        return ast.IfExpression(token, condition, consequence, alternative)

    def parse_function_literal(self):
        token = self.current_token

        if not self.expect_peek(TokenType.LPAREN):
            return None
        parameters = self.parse_function_parameters()
        if parameters is None:
            return None

        if not self.expect_peek(TokenType.LBRACE):
            return None
        body = self.parse_block_statement()

        return ast.FunctionLiteral(token, parameters, body)

    def parse_function_parameters(self):
        """Parses "(a, b, c)" starting on "(" and ending on ")". Returns a tuple of Identifiers, or None on error."""
        parameters = []

        if self.peek_token_is(TokenType.RPAREN):
            self.next_token()
            return ()

        if not self.expect_peek(TokenType.IDENT):
            return None
        parameters.append(ast.Identifier(self.current_token, self.current_token.literal))

        while self.peek_token_is(TokenType.COMMA):
            self.next_token()
            if not self.expect_peek(TokenType.IDENT):
                return None
            parameters.append(ast.Identifier(self.current_token, self.current_token.literal))

        if not self.expect_peek(TokenType.RPAREN):
            return None
        return tuple(parameters)

    def parse_call_expression(self, function):
        token = self.current_token
        arguments = self.parse_call_arguments()
        if arguments is None:
            return None
        return ast.CallExpression(token, function, arguments)

    def parse_call_arguments(self):
        """Parses "(x, y + 1)" starting on "(" and ending on ")". Returns a tuple of Expressions, or None on error."""
        arguments = []

        if self.peek_token_is(TokenType.RPAREN):
            self.next_token()
            return ()

        self.next_token()
        arguments.append(self.parse_expression(Precedence.LOWEST))

        while self.peek_token_is(TokenType.COMMA):
            self.next_token()
            self.next_token()
            arguments.append(self.parse_expression(Precedence.LOWEST))

        if not self.expect_peek(TokenType.RPAREN) or None in arguments:
            return None
        return tuple(arguments)


def parse(token_source):
    """Parses every token from token_source. Returns (Program, errors); the Program should only be trusted if errors is
    empty.
    """
    parser = Parser(token_source)
    program = parser.parse_program()
    return program, parser.errors
