"""
Test suite for the Lox expression parser.

Tests cover:
- Operator precedence and associativity
- Unary, grouping and literal expressions
- Syntax error reporting and abandonment of the parse
- Panic-mode synchronization

Author: xwest
"""

import os
import sys
import tempfile
import unittest
from typing import Optional

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from lox.lexer import Scanner, TokenType, LexerError
from lox.parser import (
    Parser, ParseError, AstPrinter, ASTNodeType, Expression,
    Literal, Unary, Binary, Grouping, parse_string, parse_file
)
from lox.reporter import DiagnosticCollector


class TestParser(unittest.TestCase):
    """Test cases for the parser."""

    def setUp(self):
        """Set up test fixtures."""
        self.reporter = DiagnosticCollector()
        self.printer = AstPrinter()

    def _parse(self, source: str) -> Optional[Expression]:
        """Helper to scan and parse a snippet with the shared reporter."""
        tokens = Scanner(source, "test.lox", self.reporter).scan_tokens()
        return Parser(tokens, self.reporter).parse()

    def _print(self, source: str) -> str:
        expr = self._parse(source)
        self.assertIsNotNone(expr, f"Unexpected errors: {self.reporter.diagnostics}")
        return self.printer.print(expr)

    def test_multiplication_binds_tighter_than_addition(self):
        """'1 + 2 * 3' is 1 + (2 * 3), never (1 + 2) * 3."""
        expr = self._parse("1 + 2 * 3")

        self.assertIsInstance(expr, Binary)
        self.assertEqual(expr.operator.type, TokenType.PLUS)
        self.assertEqual(expr.left, Literal(1.0))
        self.assertIsInstance(expr.right, Binary)
        self.assertEqual(expr.right.operator.type, TokenType.STAR)
        self.assertEqual(expr.right.left, Literal(2.0))
        self.assertEqual(expr.right.right, Literal(3.0))

    def test_equality_is_left_associative(self):
        """'1 == 2 != 3' folds left: (1 == 2) != 3."""
        expr = self._parse("1 == 2 != 3")

        self.assertIsInstance(expr, Binary)
        self.assertEqual(expr.operator.type, TokenType.BANG_EQUAL)
        self.assertIsInstance(expr.left, Binary)
        self.assertEqual(expr.left.operator.type, TokenType.EQUAL_EQUAL)
        self.assertEqual(expr.right, Literal(3.0))

    def test_binary_levels_are_left_associative(self):
        self.assertEqual(self._print("1 - 2 - 3"), "(- (- 1 2) 3)")
        self.assertEqual(self._print("8 / 4 / 2"), "(/ (/ 8 4) 2)")
        self.assertEqual(self._print("1 < 2 < 3"), "(< (< 1 2) 3)")

    def test_full_precedence_cascade(self):
        self.assertEqual(
            self._print("1 + 2 * 3 > 4 == !false"),
            "(== (> (+ 1 (* 2 3)) 4) (! false))"
        )

    def test_comparison_operators(self):
        for op in [">", ">=", "<", "<="]:
            with self.subTest(op=op):
                self.assertEqual(self._print(f"1 {op} 2"), f"({op} 1 2)")

    def test_unary_minus(self):
        """'-1' is Unary(-, Literal(1))."""
        expr = self._parse("-1")

        self.assertIsInstance(expr, Unary)
        self.assertEqual(expr.operator.type, TokenType.MINUS)
        self.assertEqual(expr.right, Literal(1.0))

    def test_unary_is_right_associative(self):
        """'--1' is Unary(-, Unary(-, Literal(1)))."""
        expr = self._parse("--1")

        self.assertIsInstance(expr, Unary)
        self.assertIsInstance(expr.right, Unary)
        self.assertEqual(expr.right.right, Literal(1.0))
        self.assertEqual(self._print("!!true"), "(! (! true))")

    def test_unary_binds_tighter_than_factor(self):
        self.assertEqual(self._print("-2 * 3"), "(* (- 2) 3)")

    def test_grouping(self):
        """'(1 + 2)' is Grouping(Binary(1, +, 2))."""
        expr = self._parse("(1 + 2)")

        self.assertIsInstance(expr, Grouping)
        self.assertIsInstance(expr.expression, Binary)
        self.assertEqual(expr.expression.operator.type, TokenType.PLUS)
        self.assertEqual(expr.node_type, ASTNodeType.GROUPING)

    def test_grouping_overrides_precedence(self):
        self.assertEqual(self._print("(1 + 2) * 3"), "(* (group (+ 1 2)) 3)")
        self.assertEqual(self._print("((1))"), "(group (group 1))")

    def test_literals(self):
        self.assertEqual(self._parse("true"), Literal(True))
        self.assertEqual(self._parse("false"), Literal(False))
        self.assertEqual(self._parse("nil"), Literal(None))
        self.assertEqual(self._parse('"hi"'), Literal("hi"))
        self.assertEqual(self._parse("2.5"), Literal(2.5))

    def test_missing_closing_paren_reports_error(self):
        """A missing ')' reports a syntax error and yields no result."""
        expr = self._parse("(1 + 2")

        self.assertIsNone(expr)
        self.assertEqual(len(self.reporter.errors), 1)
        error = self.reporter.errors[0]
        self.assertEqual(error.message, "Expect ')' after expression.")
        self.assertEqual(error.code, "P001")
        self.assertEqual(error.where, "at end")

    def test_missing_operand_reports_expect_expression(self):
        expr = self._parse("1 +")

        self.assertIsNone(expr)
        self.assertEqual(self.reporter.errors[0].message, "Expect expression.")
        self.assertEqual(self.reporter.errors[0].code, "P005")

    def test_error_names_offending_token(self):
        self._parse("(1 ; 2)")

        error = self.reporter.errors[0]
        self.assertEqual(error.where, "at ';'")
        self.assertEqual(error.line, 1)
        self.assertEqual(error.summary(), "[line 1] Error at ';': Expect ')' after expression.")

    def test_empty_input_is_an_error(self):
        self.assertIsNone(self._parse(""))
        self.assertEqual(self.reporter.errors[0].where, "at end")

    def test_identifier_is_not_a_primary(self):
        """Identifiers belong to the statement grammar, not this one."""
        self.assertIsNone(self._parse("x + 1"))
        self.assertEqual(self.reporter.errors[0].where, "at 'x'")

    def test_only_first_syntax_error_is_reported(self):
        """The whole parse is abandoned at the first syntax error."""
        self._parse("(1 + ) * (")

        self.assertEqual(len(self.reporter.errors), 1)

    def test_nesting_up_to_the_limit_parses(self):
        depth = Parser.MAX_NESTING
        expr = self._parse("(" * depth + "1" + ")" * depth)

        self.assertIsInstance(expr, Grouping)
        self.assertFalse(self.reporter.had_error)

    def test_nesting_past_the_limit_is_a_syntax_error(self):
        depth = Parser.MAX_NESTING + 1
        expr = self._parse("(" * depth + "1" + ")" * depth)

        self.assertIsNone(expr)
        self.assertEqual(len(self.reporter.errors), 1)
        error = self.reporter.errors[0]
        self.assertEqual(error.message, "Too much nesting.")
        self.assertEqual(error.code, "P002")
        self.assertEqual(error.where, "at '('")

    def test_deep_parentheses_do_not_exhaust_the_stack(self):
        """Far past the limit still ends in a reported error, not a RecursionError."""
        expr = self._parse("(" * 1000 + "1" + ")" * 1000)

        self.assertIsNone(expr)
        self.assertEqual(self.reporter.errors[0].message, "Too much nesting.")

    def test_deep_unary_chain_is_a_syntax_error(self):
        expr = self._parse("-" * 1000 + "1")

        self.assertIsNone(expr)
        self.assertEqual(self.reporter.errors[0].where, "at '-'")

    def test_nesting_depth_resets_between_parses(self):
        depth = Parser.MAX_NESTING
        tokens = Scanner("(" * (depth + 1) + "1; " + "(" * depth + "2" + ")" * depth).scan_tokens()
        parser = Parser(tokens, self.reporter)

        self.assertIsNone(parser.parse())
        parser.synchronize()
        self.assertIsInstance(parser.parse(), Grouping)
        self.assertEqual(len(self.reporter.errors), 1)

    def test_trailing_tokens_are_left_unconsumed(self):
        tokens = Scanner("1 + 2; 3").scan_tokens()
        parser = Parser(tokens)
        expr = parser.parse()

        self.assertEqual(self.printer.print(expr), "(+ 1 2)")
        self.assertEqual(tokens[parser.current].type, TokenType.SEMICOLON)
        self.assertFalse(parser.has_errors())

    def test_unterminated_string_still_parses(self):
        """The scanner's best-effort STRING token is usable by the parser."""
        expr = self._parse('"abc')

        self.assertEqual(expr, Literal("abc"))
        self.assertTrue(self.reporter.had_error)

    def test_parser_errors_are_kept_on_parser(self):
        tokens = Scanner("(").scan_tokens()
        parser = Parser(tokens)

        self.assertIsNone(parser.parse())
        self.assertTrue(parser.has_errors())
        self.assertIsInstance(parser.errors[0], ParseError)
        self.assertEqual(parser.errors[0].token.type, TokenType.EOF)

    def test_token_list_must_end_with_eof(self):
        with self.assertRaises(ValueError):
            Parser([])

        tokens = Scanner("1").scan_tokens()
        with self.assertRaises(ValueError):
            Parser(tokens[:-1])

    def test_children(self):
        expr = self._parse("-(1 + 2)")

        self.assertEqual(len(expr.children()), 1)
        grouping = expr.children()[0]
        self.assertEqual(grouping.node_type, ASTNodeType.GROUPING)
        self.assertEqual(grouping.children()[0].children(), [Literal(1.0), Literal(2.0)])
        self.assertEqual(Literal(1.0).children(), [])

    def test_nodes_are_immutable(self):
        expr = self._parse("1")

        with self.assertRaises(AttributeError):
            expr.value = 2


class TestSynchronize(unittest.TestCase):
    """Test cases for panic-mode synchronization."""

    def _parser_at(self, source: str, index: int) -> Parser:
        parser = Parser(Scanner(source).scan_tokens())
        parser.current = index
        return parser

    def test_stops_after_semicolon(self):
        """A ';' boundary is consumed."""
        parser = self._parser_at("1 + ; 2", 1)
        parser.synchronize()

        self.assertEqual(parser.tokens[parser.current].lexeme, "2")

    def test_stops_before_statement_keyword(self):
        """A keyword boundary is left for the statement parser."""
        parser = self._parser_at("1 2 3 var x", 0)
        parser.synchronize()

        self.assertEqual(parser.tokens[parser.current].type, TokenType.VAR)

    def test_always_skips_current_token(self):
        """Even when the offending token is a keyword, it is skipped."""
        parser = self._parser_at("print print", 0)
        parser.synchronize()

        self.assertEqual(parser.current, 1)
        self.assertEqual(parser.tokens[parser.current].type, TokenType.PRINT)

    def test_stops_at_eof(self):
        parser = self._parser_at("1 2 3", 0)
        parser.synchronize()

        self.assertEqual(parser.tokens[parser.current].type, TokenType.EOF)

        # Already at EOF: no movement
        parser.synchronize()
        self.assertEqual(parser.tokens[parser.current].type, TokenType.EOF)

    def test_resynchronized_parser_can_parse_next_expression(self):
        reporter = DiagnosticCollector()
        parser = Parser(Scanner("(1 + ; 2 * 3").scan_tokens(), reporter)

        self.assertIsNone(parser.parse())
        parser.synchronize()
        expr = parser.parse()

        self.assertEqual(AstPrinter().print(expr), "(* 2 3)")
        self.assertEqual(len(reporter.errors), 1)


class TestParseHelpers(unittest.TestCase):
    """Test cases for the convenience parse functions."""

    def test_parse_string(self):
        self.assertEqual(AstPrinter().print(parse_string("1 + 2 * 3")), "(+ 1 (* 2 3))")

    def test_parse_string_raises_parse_error(self):
        with self.assertRaises(ParseError) as ctx:
            parse_string("(1")

        self.assertEqual(ctx.exception.diagnostic.code, "P001")
        self.assertIn("Expect ')' after expression.", str(ctx.exception))

    def test_parse_string_raises_lexer_error_first(self):
        with self.assertRaises(LexerError):
            parse_string("1 + @")

    def test_parse_file(self):
        with tempfile.NamedTemporaryFile("w", suffix=".lox", delete=False, encoding="utf-8") as f:
            f.write("// header\n(1 + 2)\n")
            path = f.name

        try:
            expr = parse_file(path)
        finally:
            os.remove(path)

        self.assertEqual(AstPrinter().print(expr), "(group (+ 1 2))")


if __name__ == '__main__':
    unittest.main()
