"""Runtime values of the monkey language.

Every value is an Object with a type tag (ObjectType) and a human-readable rendering (inspect). Integers, booleans and
null are plain values; ReturnValue and Error are sentinels that the evaluator threads through its return path instead
of raising Python exceptions; Function is a closure over the Environment it was created in.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

from monkey.core import ast
from monkey.core.environment import Environment


class ObjectType(Enum):
    INTEGER = "INTEGER"
    BOOLEAN = "BOOLEAN"
    NULL = "NULL"
    RETURN_VALUE = "RETURN_VALUE"
    ERROR = "ERROR"
    FUNCTION = "FUNCTION"

    def __str__(self):
        return self.value


class Object(ABC):
    """Superclass of every runtime value."""

    @property
    @abstractmethod
    def type(self):
        """ObjectType of this value."""

    @abstractmethod
    def inspect(self):
        """Renders this value for a human."""

    def __str__(self):
        return self.inspect()


@dataclass(frozen=True)
class Integer(Object):
    """Signed 64-bit integer. Arithmetic wraps on overflow, see wrap."""
    value: int
    MIN = -2 ** 63
    MAX = 2 ** 63 - 1

    @property
    def type(self):
        return ObjectType.INTEGER

    def inspect(self):
        return str(self.value)

    @staticmethod
    def wrap(value):
        """Returns value truncated to two's-complement 64 bits."""
        return (value - Integer.MIN) % 2 ** 64 + Integer.MIN


@dataclass(frozen=True)
class Boolean(Object):
    value: bool

    @property
    def type(self):
        return ObjectType.BOOLEAN

    def inspect(self):
        return "true" if self.value else "false"


@dataclass(frozen=True)
class Null(Object):

    @property
    def type(self):
        return ObjectType.NULL

    def inspect(self):
        return "null"


@dataclass(frozen=True)
class ReturnValue(Object):
    """Wraps the value of a return statement until it reaches the enclosing call (or the program)."""
    value: Object

    @property
    def type(self):
        return ObjectType.RETURN_VALUE

    def inspect(self):
        return self.value.inspect()


@dataclass(frozen=True)
class Error(Object):
    """Evaluation error. Propagated untouched by every enclosing evaluation step."""
    message: str

    @property
    def type(self):
        return ObjectType.ERROR

    def inspect(self):
        return f"ERROR: {self.message}"


@dataclass(frozen=True, eq=False)
class Function(Object):
    """Closure: parameters and body are shared with the FunctionLiteral that produced it, and env is the Environment
    that was current when the literal was evaluated (shared, never copied).
    """
    parameters: Tuple[ast.Identifier, ...]
    body: ast.BlockStatement
    env: Environment = field(repr=False)

    @property
    def type(self):
        return ObjectType.FUNCTION

    def inspect(self):
        params = ", ".join(param.string() for param in self.parameters)
        return f"fn({params}) {{\n{self.body.string()}\n}}"


TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()


def native_bool(value):
    """Returns the TRUE or FALSE singleton for a Python bool."""
    return TRUE if value else FALSE


def is_error(obj):
    return obj is not None and obj.type is ObjectType.ERROR


def is_unwinding(obj):
    """Whether obj is an Error or a ReturnValue: a result that must be handed back unchanged by every enclosing step
    until a function call (or the program) consumes it.
    """
    return obj is not None and obj.type in (ObjectType.ERROR, ObjectType.RETURN_VALUE)
