"""Tree-walking evaluator for the monkey language.

Evaluation is a structural recursion over the AST against an Environment. Failures are never raised: they are Error
objects, and every composite rule checks each sub-result with is_unwinding and hands it back unchanged before doing
anything else with it. `return` travels the same way: a ReturnValue stops every enclosing block or expression until a
function call (or the program) unwraps it, so `let x = if (c) { return 1; };` returns from the enclosing function.

Each monkey call costs about ten Python frames, so evaluating a Program raises the interpreter's recursion limit to
RECURSION_LIMIT, and a program that still exhausts it evaluates to an Error rather than raising RecursionError.
"""

import sys

from monkey.core import ast
from monkey.core.environment import Environment
from monkey.core.object import (
    Error, Function, Integer, ReturnValue, ObjectType, FALSE, NULL, is_unwinding, native_bool
)


class Evaluator:
    """Evaluates AST nodes. on_step, if given, is called with (node type name, node source text) for every node
    visited, in evaluation order.
    """
    RECURSION_LIMIT = 10000

    def __init__(self, on_step=None):
        self.on_step = on_step

    def eval(self, node, env):
        """Returns the Object node evaluates to in env, or None for statements that have no value (let)."""
        if self.on_step is not None:
            self.on_step(type(node).__name__, node.string())

        # statements
        if isinstance(node, ast.Program):
            return self.eval_program(node, env)

        elif isinstance(node, ast.ExpressionStatement):
            return self.eval(node.expression, env)

        elif isinstance(node, ast.BlockStatement):
            return self.eval_block_statement(node, env)

        elif isinstance(node, ast.ReturnStatement):
            value = self.eval(node.return_value, env)
            if is_unwinding(value):
                return value
            return ReturnValue(value)

        elif isinstance(node, ast.LetStatement):
            value = self.eval(node.value, env)
            if is_unwinding(value):
                return value
            env.set(node.name.value, value)
            return None

        # expressions
        elif isinstance(node, ast.IntegerLiteral):
            return Integer(node.value)

        elif isinstance(node, ast.Boolean):
            return native_bool(node.value)

        elif isinstance(node, ast.Identifier):
            return self.eval_identifier(node, env)

        elif isinstance(node, ast.PrefixExpression):
            right = self.eval(node.right, env)
            if is_unwinding(right):
                return right
            return eval_prefix_expression(node.operator, right)

        elif isinstance(node, ast.InfixExpression):
            left = self.eval(node.left, env)
            if is_unwinding(left):
                return left
            right = self.eval(node.right, env)
            if is_unwinding(right):
                return right
            return eval_infix_expression(node.operator, left, right)

        elif isinstance(node, ast.IfExpression):
            return self.eval_if_expression(node, env)

        elif isinstance(node, ast.FunctionLiteral):
            return Function(node.parameters, node.body, env)

        elif isinstance(node, ast.CallExpression):
            function = self.eval(node.function, env)
            if is_unwinding(function):
                return function

            args = self.eval_expressions(node.arguments, env)
            if len(args) == 1 and is_unwinding(args[0]):
                return args[0]

            return self.apply_function(function, args)

        raise TypeError(f"cannot evaluate {type(node).__name__}")

    def eval_program(self, program, env):
        if sys.getrecursionlimit() < Evaluator.RECURSION_LIMIT:
            sys.setrecursionlimit(Evaluator.RECURSION_LIMIT)

        result = None
        try:
            for statement in program.statements:
                result = self.eval(statement, env)

                if isinstance(result, ReturnValue):
                    return result.value
                elif isinstance(result, Error):
                    return result
        except RecursionError:
            return Error("maximum recursion depth exceeded")
        return result

    def eval_block_statement(self, block, env):
        """Unlike eval_program, leaves ReturnValues wrapped so that they keep propagating outwards."""
        result = None
        for statement in block.statements:
            result = self.eval(statement, env)

            if is_unwinding(result):
                return result
        return result

    def eval_identifier(self, node, env):
        value = env.get(node.value)
        if value is None:
            return Error(f"identifier not found: {node.value}")
        return value

    def eval_if_expression(self, node, env):
        condition = self.eval(node.condition, env)
        if is_unwinding(condition):
            return condition

        result = None
        if is_truthy(condition):
            result = self.eval(node.consequence, env)
        elif node.alternative is not None:
            result = self.eval(node.alternative, env)
        return NULL if result is None else result

    def eval_expressions(self, expressions, env):
        """Evaluates expressions left to right. On the first Error or ReturnValue, returns [it] alone."""
        result = []
        for expression in expressions:
            evaluated = self.eval(expression, env)
            if is_unwinding(evaluated):
                return [evaluated]
            result.append(evaluated)
        return result

    def apply_function(self, function, args):
        """Calls function with already-evaluated args. The body runs in a fresh scope enclosed by the function's own
        Environment, never the caller's.
        """
        if not isinstance(function, Function):
            return Error(f"not a function: {function.type}")

        if len(args) != len(function.parameters):
            return Error(f"wrong number of arguments: want={len(function.parameters)}, got={len(args)}")

        extended_env = Environment.enclosed(function.env)
        for param, arg in zip(function.parameters, args):
            extended_env.set(param.value, arg)

        evaluated = self.eval(function.body, extended_env)
        if isinstance(evaluated, ReturnValue):
            return evaluated.value
        elif evaluated is None:  # empty body, or one ending in a let
            return NULL
        return evaluated


def eval_prefix_expression(operator, right):
    if operator == "!":
        return native_bool(not is_truthy(right))
    elif operator == "-":
        if right.type is not ObjectType.INTEGER:
            return Error(f"unknown operator: -{right.type}")
        return Integer(Integer.wrap(-right.value))
    return Error(f"unknown operator: {operator}{right.type}")


def eval_infix_expression(operator, left, right):
    if left.type is ObjectType.INTEGER and right.type is ObjectType.INTEGER:
        return eval_integer_infix_expression(operator, left, right)
    elif left.type is ObjectType.BOOLEAN and right.type is ObjectType.BOOLEAN:
        return eval_boolean_infix_expression(operator, left, right)
    elif left.type is not right.type:
        return Error(f"type mismatch: {left.type} {operator} {right.type}")
    return Error(f"unknown operator: {left.type} {operator} {right.type}")


def eval_integer_infix_expression(operator, left, right):
    left_val, right_val = left.value, right.value

    if operator == "+":
        return Integer(Integer.wrap(left_val + right_val))
    elif operator == "-":
        return Integer(Integer.wrap(left_val - right_val))
    elif operator == "*":
        return Integer(Integer.wrap(left_val * right_val))
    elif operator == "/":
        if right_val == 0:
            return Error("division by zero")
        quotient = abs(left_val) // abs(right_val)  # truncate toward zero, not floor
        if (left_val < 0) != (right_val < 0):
            quotient = -quotient
        return Integer(Integer.wrap(quotient))
    elif operator == "<":
        return native_bool(left_val < right_val)
    elif operator == ">":
        return native_bool(left_val > right_val)
    elif operator == "==":
        return native_bool(left_val == right_val)
    elif operator == "!=":
        return native_bool(left_val != right_val)
    return Error(f"unknown operator: {left.type} {operator} {right.type}")


def eval_boolean_infix_expression(operator, left, right):
    # booleans are always the TRUE/FALSE singletons, so identity is equality
    if operator == "==":
        return native_bool(left is right)
    elif operator == "!=":
        return native_bool(left is not right)
    return Error(f"unknown operator: {left.type} {operator} {right.type}")


def is_truthy(obj):
    """false and null are falsy; everything else, 0 included, is truthy."""
    return not (obj is FALSE or obj is NULL)


def evaluate(node, env):
    """Evaluates node in env without tracing. See Evaluator.eval."""
    return Evaluator().eval(node, env)
