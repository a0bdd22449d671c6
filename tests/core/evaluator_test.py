import unittest

from monkey.core.environment import Environment
from monkey.core.evaluator import Evaluator, evaluate, is_truthy
from monkey.core.lexer import Lexer
from monkey.core.object import Boolean, Error, Function, Integer, FALSE, NULL, TRUE
from monkey.core.parser import parse


def run(source, env=None):
    program, errors = parse(Lexer(source))
    assert not errors, errors
    return evaluate(program, env if env is not None else Environment())


class EvaluatorTestCase(unittest.TestCase):

    def test_integer_expressions(self):
        cases = {
            "5": 5, "10": 10, "-5": -5, "-10": -10,
            "5 + 5 + 5 + 5 - 10": 10,
            "2 * 2 * 2 * 2 * 2": 32,
            "-50 + 100 + -50": 0,
            "5 * 2 + 10": 20,
            "5 + 2 * 10": 25,
            "20 + 2 * -10": 0,
            "50 / 2 * 2 + 10": 60,
            "2 * (5 + 10)": 30,
            "3 * 3 * 3 + 10": 37,
            "3 * (3 * 3) + 10": 37,
            "(5 + 10 * 2 + 15 / 3) * 2 + -10": 50,
        }
        for case, expected in cases.items():
            self.assertEqual(Integer(expected), run(case), case)

    def test_division_truncates(self):
        cases = {"7 / 2": 3, "-7 / 2": -3, "7 / -2": -3, "-7 / -2": 3, "0 / 5": 0}
        for case, expected in cases.items():
            self.assertEqual(Integer(expected), run(case), case)

    def test_integer_overflow_wraps(self):
        cases = {
            "9223372036854775807 + 1": -9223372036854775808,
            "-9223372036854775807 - 2": 9223372036854775807,
            "4611686018427387904 * 2": -9223372036854775808,
        }
        for case, expected in cases.items():
            self.assertEqual(Integer(expected), run(case), case)

    def test_boolean_expressions(self):
        cases = {
            "true": True, "false": False,
            "1 < 2": True, "1 > 2": False, "1 < 1": False, "1 > 1": False,
            "1 == 1": True, "1 != 1": False, "1 == 2": False, "1 != 2": True,
            "true == true": True, "false == false": True, "true == false": False,
            "true != false": True, "false != true": True,
            "(1 < 2) == true": True, "(1 < 2) == false": False,
            "(1 > 2) == true": False, "(1 > 2) == false": True,
        }
        for case, expected in cases.items():
            result = run(case)
            self.assertIs(TRUE if expected else FALSE, result, case)

    def test_bang_operator(self):
        cases = {"!true": False, "!false": True, "!5": False, "!0": False, "!!true": True, "!!false": False,
                 "!!5": True, "!if (false) { 1 }": True}
        for case, expected in cases.items():
            self.assertEqual(Boolean(expected), run(case), case)

    def test_truthiness(self):
        should_fail = [FALSE, NULL]
        for case in should_fail:
            self.assertFalse(is_truthy(case), case)

        should_pass = [TRUE, Integer(0), Integer(-1), Integer(10)]
        for case in should_pass:
            self.assertTrue(is_truthy(case), case)

    def test_if_else_expressions(self):
        cases = {
            "if (true) { 10 }": Integer(10),
            "if (false) { 10 }": NULL,
            "if (1) { 10 }": Integer(10),
            "if (0) { 10 }": Integer(10),
            "if (1 < 2) { 10 }": Integer(10),
            "if (1 > 2) { 10 }": NULL,
            "if (1 > 2) { 10 } else { 20 }": Integer(20),
            "if (1 < 2) { 10 } else { 20 }": Integer(10),
            "if (true) { }": NULL,
            "if (true) { let a = 1; }": NULL,
        }
        for case, expected in cases.items():
            self.assertEqual(expected, run(case), case)

    def test_return_statements(self):
        cases = {
            "return 10;": 10,
            "return 10; 9;": 10,
            "return 2 * 5; 9;": 10,
            "9; return 2 * 5; 9;": 10,
            "if (10 > 1) { if (10 > 1) { return 10; } return 1; }": 10,
            "let f = fn(x) { if (x > 1) { return x; } return 0; }; f(5) + f(1);": 5,
        }
        for case, expected in cases.items():
            self.assertEqual(Integer(expected), run(case), case)

    def test_error_handling(self):
        cases = {
            "5 + true;": "type mismatch: INTEGER + BOOLEAN",
            "5 + true; 5;": "type mismatch: INTEGER + BOOLEAN",
            "-true": "unknown operator: -BOOLEAN",
            "true + false;": "unknown operator: BOOLEAN + BOOLEAN",
            "true < false;": "unknown operator: BOOLEAN < BOOLEAN",
            "5; true + false; 5": "unknown operator: BOOLEAN + BOOLEAN",
            "if (10 > 1) { true + false; }": "unknown operator: BOOLEAN + BOOLEAN",
            "if (10 > 1) { if (10 > 1) { return true + false; } return 1; }": "unknown operator: BOOLEAN + BOOLEAN",
            "foobar": "identifier not found: foobar",
            "1 == true": "type mismatch: INTEGER == BOOLEAN",
            "fn() {} + fn() {}": "unknown operator: FUNCTION + FUNCTION",
            "5()": "not a function: INTEGER",
            "true(1)": "not a function: BOOLEAN",
            "-fn(x) { x }": "unknown operator: -FUNCTION",
        }
        for case, expected in cases.items():
            self.assertEqual(Error(expected), run(case), case)

    def test_error_short_circuits(self):
        cases = {
            "let a = foo; a": "identifier not found: foo",
            "-(1 + true)": "type mismatch: INTEGER + BOOLEAN",
            "(1 + true) + undefined": "type mismatch: INTEGER + BOOLEAN",
            "1 + (undefined + true)": "identifier not found: undefined",
            "if (x) { 1 }": "identifier not found: x",
            "return x; 1": "identifier not found: x",
            "undefined(1)": "identifier not found: undefined",
            "let f = fn(a, b) { a }; f(x, y)": "identifier not found: x",
            "let f = fn(a, b) { a }; f(1, y)": "identifier not found: y",
            "let f = fn(a) { a + true; 10 }; f(1); 20": "type mismatch: INTEGER + BOOLEAN",
        }
        for case, expected in cases.items():
            self.assertEqual(Error(expected), run(case), case)

    def test_division_by_zero(self):
        cases = ["1 / 0", "let zero = 0; 10 / zero", "5 / (2 - 2) + 1"]
        for case in cases:
            self.assertEqual(Error("division by zero"), run(case), case)

    def test_let_statements(self):
        cases = {
            "let a = 5; a;": 5,
            "let a = 5 * 5; a;": 25,
            "let a = 5; let b = a; b;": 5,
            "let a = 5; let b = a; let c = a + b + 5; c;": 15,
            "let a = 1; let a = a + 1; a": 2,
        }
        for case, expected in cases.items():
            self.assertEqual(Integer(expected), run(case), case)

        self.assertIsNone(run("let a = 5;"))
        self.assertIsNone(run(""))

    def test_function_object(self):
        result = run("fn(x) { x + 2; };")
        self.assertIsInstance(result, Function)
        self.assertEqual(["x"], [param.value for param in result.parameters])
        self.assertEqual("(x + 2)", result.body.string())
        self.assertEqual("fn(x) {\n(x + 2)\n}", result.inspect())

    def test_function_application(self):
        cases = {
            "let identity = fn(x) { x; }; identity(5);": 5,
            "let identity = fn(x) { return x; }; identity(5);": 5,
            "let double = fn(x) { x * 2; }; double(5);": 10,
            "let add = fn(x, y) { x + y; }; add(5, 5);": 10,
            "let add = fn(x, y) { x + y; }; add(5 + 5, add(5, 5));": 20,
            "fn(x) { x; }(5)": 5,
            "let fact = fn(n) { if (n < 2) { 1 } else { n * fact(n - 1) } }; fact(10)": 3628800,
        }
        for case, expected in cases.items():
            self.assertEqual(Integer(expected), run(case), case)

    def test_function_without_value(self):
        cases = ["fn() {}()", "let f = fn() { let a = 1; }; f()"]
        for case in cases:
            self.assertIs(NULL, run(case), case)

    def test_deep_recursion(self):
        cases = {500: 500, 750: 750}
        for depth, expected in cases.items():
            source = f"let f = fn(n) {{ if (n == 0) {{ 0 }} else {{ 1 + f(n - 1) }} }}; f({depth})"
            self.assertEqual(Integer(expected), run(source), depth)

    def test_runaway_recursion(self):
        cases = ["let f = fn(n) { f(n + 1) }; f(0)", "let f = fn() { 1 + f() }; let x = f(); x"]
        for case in cases:
            self.assertEqual(Error("maximum recursion depth exceeded"), run(case), case)

        # the environment is still usable afterwards
        env = Environment()
        run("let f = fn(n) { f(n + 1) }; let one = 1;", env)
        self.assertEqual(Error("maximum recursion depth exceeded"), run("f(0)", env))
        self.assertEqual(Integer(2), run("one + 1", env))

    def test_return_in_expression_position(self):
        cases = {
            "let x = if (true) { return 5; }; 99": 5,
            "-if (true) { return 5; }": 5,
            "1 + if (true) { return 2; }": 2,
            "let f = fn() { let x = if (true) { return 5; }; 10 }; f()": 5,
            "let f = fn() { 1 + if (true) { return 7; } }; f() * 2": 14,
            "let g = fn(a) { a }; let f = fn() { g(if (true) { return 3; }) + 100 }; f()": 3,
            "let f = fn() { if (if (true) { return 4; }) { 1 } else { 2 } }; f()": 4,
            "let f = fn() { return if (true) { return 6; }; }; f()": 6,
        }
        for case, expected in cases.items():
            self.assertEqual(Integer(expected), run(case), case)

    def test_wrong_number_of_arguments(self):
        cases = {
            "fn(x) { x }()": "wrong number of arguments: want=1, got=0",
            "fn(x, y) { x }(1)": "wrong number of arguments: want=2, got=1",
            "fn() { 1 }(1, 2)": "wrong number of arguments: want=0, got=2",
        }
        for case, expected in cases.items():
            self.assertEqual(Error(expected), run(case), case)

    def test_closures(self):
        env = Environment()
        self.assertIsNone(run("let newAdder = fn(x) { fn(y) { x + y } }; let addTwo = newAdder(2);", env))
        self.assertEqual(Integer(4), run("addTwo(2);", env))
        self.assertEqual(Integer(5), run("addTwo(3);", env))

        self.assertEqual(Integer(4), run("let newAdder = fn(x) { fn(y) { x + y } }; let addTwo = newAdder(2); "
                                         "addTwo(2);"))

    def test_closures_share_environment(self):
        env = Environment()
        run("let x = 1; let getX = fn() { x };", env)
        self.assertEqual(Integer(1), run("getX()", env))

        run("let x = 2;", env)  # rebinding after the closure was created is visible to it
        self.assertEqual(Integer(2), run("getX()", env))

    def test_lexical_scoping(self):
        cases = {
            # the callee sees its defining scope, not the caller's
            "let x = 1; let f = fn() { x }; let g = fn(x) { f() }; g(2)": 1,
            # parameters shadow outer bindings without overwriting them
            "let x = 1; let f = fn(x) { x }; f(5) + x": 6,
            # let inside a function body does not leak into the caller
            "let x = 1; let f = fn() { let x = 10; x }; f() + x": 11,
        }
        for case, expected in cases.items():
            self.assertEqual(Integer(expected), run(case), case)

    def test_trace(self):
        steps = []
        program, __ = parse(Lexer("1 + 2"))
        result = Evaluator(on_step=lambda step, expr: steps.append((step, expr))).eval(program, Environment())

        self.assertEqual(Integer(3), result)
        self.assertEqual([
            ("Program", "(1 + 2)"),
            ("ExpressionStatement", "(1 + 2)"),
            ("InfixExpression", "(1 + 2)"),
            ("IntegerLiteral", "1"),
            ("IntegerLiteral", "2"),
        ], steps)


if __name__ == '__main__':
    unittest.main()
