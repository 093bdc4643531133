from quadrant_plot.decorators.base import LineDecorator, SolidLineDecorator
from quadrant_plot.decorators.dashed import DashedLineDecorator
from quadrant_plot.decorators.dotted import DottedLineDecorator
from quadrant_plot.decorators.factory import DASHED, DOTTED, SOLID, LineDecoratorFactory

__all__ = [
    "DASHED",
    "DOTTED",
    "SOLID",
    "DashedLineDecorator",
    "DottedLineDecorator",
    "LineDecorator",
    "LineDecoratorFactory",
    "SolidLineDecorator",
]
