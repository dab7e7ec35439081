"""
Unit tests for the flag-encoded comparison predicates.
"""

import unittest

from rectimage.core.compare import (
    Bitwise,
    Combinator,
    Compare,
    Comparison,
    ComparisonKind
)
from rectimage.core.errors import InvalidArgumentCount, UnsupportedOperation


class TestBitwise(unittest.TestCase):

    def test_is_bit_in_value(self):
        self.assertTrue(Bitwise.is_bit_in_value(2, 3))
        self.assertFalse(Bitwise.is_bit_in_value(4, 3))
        # Any bit of a mask counts
        self.assertTrue(Bitwise.is_bit_in_value(6, 4))


class TestFormatOperator(unittest.TestCase):

    def test_empty_operator_gets_defaults(self):
        self.assertEqual(Compare.format_operator(0), Comparison.EQUAL_TO | Comparison.AND)

    def test_combinator_only_gets_equal_to(self):
        self.assertEqual(Compare.format_operator(Comparison.OR), Comparison.EQUAL_TO | Comparison.OR)

    def test_magnitude_only_gets_and(self):
        self.assertEqual(
            Compare.format_operator(Comparison.LESS_THAN),
            Comparison.LESS_THAN | Comparison.AND
        )

    def test_greater_and_less_rejected(self):
        with self.assertRaises(UnsupportedOperation):
            Compare.format_operator(Comparison.GREATER_THAN | Comparison.LESS_THAN)

    def test_and_or_rejected(self):
        with self.assertRaises(UnsupportedOperation):
            Compare.format_operator(Comparison.AND | Comparison.OR)

    def test_enum_operators_accepted(self):
        self.assertEqual(
            Compare.format_operator(ComparisonKind.GE),
            Comparison.GREATER_THAN | Comparison.EQUAL_TO | Comparison.AND
        )
        self.assertEqual(
            Compare.build_operator(ComparisonKind.LT, Combinator.OR),
            Comparison.LESS_THAN | Comparison.OR
        )


class TestFormatArguments(unittest.TestCase):

    def test_two_arguments_default_to_equal_to(self):
        a, operator, b = Compare.format_arguments((1, 2))
        self.assertEqual((a, b), (1, 2))
        self.assertEqual(operator, Comparison.EQUAL_TO | Comparison.AND)

    def test_wrong_arity(self):
        for arguments in [(), (1,), (1, 2, 3, 4)]:
            with self.subTest(arguments=arguments):
                with self.assertRaises(InvalidArgumentCount):
                    Compare.format_arguments(arguments)

    def test_invalid_argument_count_is_type_error(self):
        with self.assertRaises(TypeError):
            Compare.compare_values(1)


class TestCompareValues(unittest.TestCase):

    def test_documented_examples(self):
        self.assertTrue(Compare.compare_values(5, 5))
        self.assertTrue(Compare.compare_values(5, Comparison.GREATER_THAN, 3))
        self.assertTrue(Compare.compare_values(5, Comparison.GREATER_THAN | Comparison.EQUAL_TO, 5))
        self.assertFalse(Compare.compare_values(3, Comparison.LESS_THAN, 3))

    def test_each_kind(self):
        cases = [
            (ComparisonKind.EQ, 2, 2, True),
            (ComparisonKind.EQ, 2, 3, False),
            (ComparisonKind.GT, 3, 2, True),
            (ComparisonKind.GT, 2, 2, False),
            (ComparisonKind.GE, 2, 2, True),
            (ComparisonKind.LT, 1, 2, True),
            (ComparisonKind.LE, 2, 2, True),
            (ComparisonKind.LE, 3, 2, False),
        ]
        for kind, a, b, expected in cases:
            with self.subTest(kind=kind, a=a, b=b):
                self.assertEqual(Compare.compare_values(a, kind, b), expected)

    def test_ambiguous_magnitude_fails_fast(self):
        with self.assertRaises(UnsupportedOperation):
            Compare.compare_values(1, Comparison.GREATER_THAN | Comparison.LESS_THAN, 2)


class TestCompareValuesIf(unittest.TestCase):

    def test_and_combinator(self):
        self.assertTrue(Compare.compare_values_if(True, 1, 1))
        self.assertFalse(Compare.compare_values_if(False, 1, 1))
        self.assertFalse(Compare.compare_values_if(True, 1, 2))

    def test_or_combinator(self):
        self.assertTrue(Compare.compare_values_if(False, 1, Comparison.OR, 1))
        self.assertTrue(Compare.compare_values_if(True, 1, Comparison.OR, 2))
        self.assertFalse(Compare.compare_values_if(False, 1, Comparison.OR, 2))

    def test_result_is_bool_for_truthy_conditionals(self):
        self.assertIs(Compare.compare_values_if(1, 2, 2), True)
        self.assertIs(Compare.compare_values_if(0, 2, Comparison.OR, 3), False)
        self.assertIs(Compare.compare_values_if("yes", 2, Comparison.OR, 3), True)

    def test_magnitude_with_combinator(self):
        operator = Comparison.GREATER_THAN | Comparison.OR
        self.assertTrue(Compare.compare_values_if(False, 3, operator, 2))
        self.assertFalse(Compare.compare_values_if(False, 2, operator, 2))


if __name__ == "__main__":
    unittest.main()
