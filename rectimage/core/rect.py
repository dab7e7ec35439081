"""
Rectangles
==========

Mutable rectangle value type with field-wise comparison and the
containment-fitting algorithm used to scale one rectangle into another while
keeping its aspect ratio.
"""

from dataclasses import dataclass
from enum import IntFlag
from typing import Optional, Tuple

from rectimage.core.compare import Bitwise, Compare, Comparison, OperatorLike


class RectField(IntFlag):
    """Selects which fields Rect.compare_to() looks at."""
    X = 1
    Y = 2
    WIDTH = 4
    HEIGHT = 8
    ALL = X | Y | WIDTH | HEIGHT


class FitFlags(IntFlag):
    """Options for Rect.fit_inside_of()."""
    NONE = 0
    CENTER = 1
    NO_ENLARGE = 2


# Fields are always folded in this order
_FIELD_ORDER = (
    (RectField.X, "x"),
    (RectField.Y, "y"),
    (RectField.WIDTH, "width"),
    (RectField.HEIGHT, "height"),
)


@dataclass
class Rect:
    """A rectangle. Floating-point fields keep ratio math exact enough."""
    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0

    def compare_to(
        self,
        other: "Rect",
        fields: Optional[int] = None,
        operator: OperatorLike = Comparison.EQUAL_TO
    ) -> bool:
        """
        Compare the selected fields of this rectangle with ``other``.

        Every selected field is compared with the magnitude part of ``operator``
        and folded with its combinator, in X, Y, WIDTH, HEIGHT order. AND folds
        start from True and OR folds from False, so the result is the plain
        conjunction or disjunction of the field comparisons.

        Args:
            other: Rectangle to compare against.
            fields: RectField mask; None or 0 selects every field.
            operator: Comparison flags (magnitude and combinator).
        """
        if not fields:
            fields = RectField.ALL
        operator = Compare.format_operator(operator)

        result = not Bitwise.is_bit_in_value(Comparison.OR, operator)
        for field, name in _FIELD_ORDER:
            if Bitwise.is_bit_in_value(field, fields):
                result = Compare.compare_values_if(
                    result, getattr(self, name), operator, getattr(other, name)
                )
        return result

    @property
    def aspect_ratio(self) -> float:
        if self.height == 0:
            raise ValueError("Aspect ratio is undefined for a rectangle of zero height")
        return self.width / self.height

    @property
    def area(self) -> float:
        return self.width * self.height

    def fit_inside_of(self, container: "Rect", flags: int = FitFlags.NONE) -> "Rect":
        """
        Scale this rectangle to fit inside ``container`` keeping its aspect ratio.

        Without NO_ENLARGE the result always touches the container on at least
        one axis. With NO_ENLARGE a rectangle that already fits keeps its size.
        With CENTER the result is centered vertically if there is vertical
        slack, otherwise horizontally if there is horizontal slack; identical
        aspect ratios leave the origin at (self.x, self.y).

        Returns a new Rect; neither rectangle is modified.
        """
        ratio = self.aspect_ratio
        x, y = self.x, self.y
        width = height = None

        if Bitwise.is_bit_in_value(FitFlags.NO_ENLARGE, flags):
            if container.width >= self.width and container.height >= self.height:
                width, height = self.width, self.height

        if width is None:
            width = container.width
            height = width / ratio
            if height > container.height:
                height = container.height
                width = height * ratio

        if Bitwise.is_bit_in_value(FitFlags.CENTER, flags):
            if height < container.height:
                y = (container.height - height) / 2
            elif width < container.width:
                x = (container.width - width) / 2

        return Rect(x, y, width, height)

    def as_box(self) -> Tuple[int, int, int, int]:
        """Integer (left, top, right, bottom) box, as Pillow expects it."""
        left = int(round(self.x))
        top = int(round(self.y))
        return left, top, left + int(round(self.width)), top + int(round(self.height))

    def html_block(self, color: str) -> str:
        """Render as an absolutely positioned div, handy for debugging layouts."""
        return (
            f'<div style="position:absolute;top:{self.y:g}px;left:{self.x:g}px;'
            f'width:{self.width:g}px;height:{self.height:g}px;background:{color}"></div>'
        )
