"""
Bit-Flag Comparison Predicates
==============================

A compact, composable representation of "a OP b" and of
"previous_result COMBINATOR (a OP b)".

An operator is made of two independent parts packed into one flag value:

- a magnitude part: EQUAL_TO, GREATER_THAN, LESS_THAN, or GREATER_THAN or
  LESS_THAN together with EQUAL_TO
- a combinator part: AND or OR

Missing parts are filled in by Compare.format_operator() (EQUAL_TO and AND).
Callers that prefer explicit types can use ComparisonKind and Combinator and
build the flag value with Compare.build_operator().

Usage:
------
    Compare.compare_values(5, 5)                                   # True
    Compare.compare_values(5, Comparison.GREATER_THAN, 3)          # True
    Compare.compare_values_if(False, 1, Comparison.OR, 1)          # True
"""

from enum import Enum, IntFlag
from typing import Any, Sequence, Tuple, Union

from rectimage.core.errors import InvalidArgumentCount, UnsupportedOperation


class Comparison(IntFlag):
    """Operator flags. Magnitude bits and combinator bits are independent."""
    EQUAL_TO = 1
    GREATER_THAN = 2
    LESS_THAN = 4
    AND = 8
    OR = 16


MAGNITUDE_MASK = Comparison.EQUAL_TO | Comparison.GREATER_THAN | Comparison.LESS_THAN
COMBINATOR_MASK = Comparison.AND | Comparison.OR


class ComparisonKind(Enum):
    """Explicit magnitude selector."""
    EQ = Comparison.EQUAL_TO
    GE = Comparison.GREATER_THAN | Comparison.EQUAL_TO
    GT = Comparison.GREATER_THAN
    LE = Comparison.LESS_THAN | Comparison.EQUAL_TO
    LT = Comparison.LESS_THAN


class Combinator(Enum):
    """Explicit boolean combinator selector."""
    AND = Comparison.AND
    OR = Comparison.OR


OperatorLike = Union[Comparison, ComparisonKind, Combinator, int]


class Bitwise:
    """Bit helpers shared by the predicate and geometry code."""

    @staticmethod
    def is_bit_in_value(bit: int, value: int) -> bool:
        """True if any bit of ``bit`` is set in ``value``."""
        return (int(value) & int(bit)) != 0


class Compare:
    """
    Evaluation of flag-encoded comparisons.

    All methods are static; the class only groups them.
    """

    @staticmethod
    def _coerce(operator: OperatorLike) -> Comparison:
        if isinstance(operator, (ComparisonKind, Combinator)):
            return Comparison(operator.value)
        return Comparison(int(operator))

    @staticmethod
    def build_operator(
        kind: ComparisonKind = ComparisonKind.EQ,
        combinator: Combinator = Combinator.AND
    ) -> Comparison:
        """Build a flag operator from the explicit enums."""
        return Comparison(kind.value | combinator.value)

    @staticmethod
    def format_arguments(arguments: Sequence[Any]) -> Tuple[Any, Comparison, Any]:
        """
        Normalize ``(a, b)`` or ``(a, operator, b)`` into ``(a, operator, b)``.

        The two-value form uses EQUAL_TO. The operator is normalized with
        format_operator().

        Raises:
            InvalidArgumentCount: for any other number of values.
        """
        arguments = tuple(arguments)
        if len(arguments) == 2:
            arguments = (arguments[0], Comparison.EQUAL_TO, arguments[1])
        if len(arguments) != 3:
            raise InvalidArgumentCount(
                f"Expected 2 or 3 comparison arguments, got {len(arguments)}"
            )
        a, operator, b = arguments
        return a, Compare.format_operator(operator), b

    @staticmethod
    def format_operator(operator: OperatorLike) -> Comparison:
        """
        Fill in the missing parts of a partially specified operator.

        No magnitude bit -> EQUAL_TO is added. No combinator bit -> AND is added.

        Raises:
            UnsupportedOperation: if GREATER_THAN and LESS_THAN, or AND and OR,
                are requested together.
        """
        operator = Compare._coerce(operator)
        if not Bitwise.is_bit_in_value(MAGNITUDE_MASK, operator):
            operator |= Comparison.EQUAL_TO
        if not Bitwise.is_bit_in_value(COMBINATOR_MASK, operator):
            operator |= Comparison.AND

        if (operator & Comparison.GREATER_THAN) and (operator & Comparison.LESS_THAN):
            raise UnsupportedOperation(
                "GREATER_THAN and LESS_THAN cannot be combined in one operator"
            )
        if (operator & Comparison.AND) and (operator & Comparison.OR):
            raise UnsupportedOperation("AND and OR cannot be combined in one operator")
        return operator

    @staticmethod
    def compare_values(*arguments: Any) -> bool:
        """
        Evaluate ``a OP b``. Accepts ``(a, b)`` or ``(a, operator, b)``.

        GREATER_THAN is checked first, then LESS_THAN, then plain EQUAL_TO.
        """
        a, operator, b = Compare.format_arguments(arguments)
        equal_to = Bitwise.is_bit_in_value(Comparison.EQUAL_TO, operator)
        if Bitwise.is_bit_in_value(Comparison.GREATER_THAN, operator):
            return a >= b if equal_to else a > b
        elif Bitwise.is_bit_in_value(Comparison.LESS_THAN, operator):
            return a <= b if equal_to else a < b
        elif equal_to:
            return a == b
        else:
            raise UnsupportedOperation(f"Cannot evaluate operator {operator!r}")

    @staticmethod
    def compare_values_if(conditional: bool, *arguments: Any) -> bool:
        """
        Combine ``conditional`` with ``a OP b`` using the operator's combinator.

        Accepts ``(conditional, a, b)`` or ``(conditional, a, operator, b)``.
        """
        arguments = Compare.format_arguments(arguments)
        result = Compare.compare_values(*arguments)
        operator = arguments[1]
        if Bitwise.is_bit_in_value(Comparison.OR, operator):
            return bool(conditional or result)
        elif Bitwise.is_bit_in_value(Comparison.AND, operator):
            return bool(conditional and result)
        else:
            raise UnsupportedOperation(f"No combinator in operator {operator!r}")
