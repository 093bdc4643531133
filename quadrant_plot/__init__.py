from quadrant_plot.api import quadrant
from quadrant_plot.axis import IN, MAJOR, MINOR, OUT, Axis
from quadrant_plot.decorators import (
    DASHED,
    DOTTED,
    SOLID,
    DashedLineDecorator,
    DottedLineDecorator,
    LineDecorator,
    LineDecoratorFactory,
    SolidLineDecorator,
)
from quadrant_plot.errors import CoordinateDataError, QuadrantConfigError
from quadrant_plot.graph_axis import HORIZONTAL, VERTICAL, GraphAxis
from quadrant_plot.properties import FunctionDrawProperties, GraphDrawProperties, LabelDrawProperties
from quadrant_plot.quadrant import Quadrant
from quadrant_plot.scene import Container, DrawingSink, Shape, Text

__all__ = [
    "Axis",
    "Container",
    "CoordinateDataError",
    "DASHED",
    "DOTTED",
    "DashedLineDecorator",
    "DottedLineDecorator",
    "DrawingSink",
    "FunctionDrawProperties",
    "GraphAxis",
    "GraphDrawProperties",
    "HORIZONTAL",
    "IN",
    "LabelDrawProperties",
    "LineDecorator",
    "LineDecoratorFactory",
    "MAJOR",
    "MINOR",
    "OUT",
    "Quadrant",
    "QuadrantConfigError",
    "SOLID",
    "Shape",
    "SolidLineDecorator",
    "Text",
    "VERTICAL",
    "quadrant",
]
