from __future__ import annotations

from contextlib import contextmanager
import logging
from typing import Any, Callable, ClassVar, Iterator, Mapping

from quadrant_plot.decorators.base import LineDecorator, SolidLineDecorator
from quadrant_plot.decorators.dashed import DashedLineDecorator
from quadrant_plot.decorators.dotted import DottedLineDecorator


LOGGER = logging.getLogger(__name__)

SOLID = "solid"
DASHED = "dashed"
DOTTED = "dotted"

_DECORATOR_TYPES: dict[str, Callable[[], LineDecorator]] = {
    SOLID: SolidLineDecorator,
    DASHED: DashedLineDecorator,
    DOTTED: DottedLineDecorator,
}


class LineDecoratorFactory:
    """Hands out line decorators by style name.

    ``create`` returns one process-wide instance per style. Those instances share pattern
    state with every other caller, so drawing code should prefer ``stroke_session``, which
    lends out a reset instance for the duration of a single stroke.
    """

    _decorators: ClassVar[dict[str, LineDecorator]] = {}
    _idle: ClassVar[dict[str, list[LineDecorator]]] = {}

    @staticmethod
    def resolve(style: str | None) -> str:
        if style in _DECORATOR_TYPES:
            return style  # type: ignore[return-value]
        if style is not None:
            LOGGER.debug("unknown line style %r, using %s", style, SOLID)
        return SOLID

    @classmethod
    def create(cls, style: str | None) -> LineDecorator:
        key = cls.resolve(style)
        decorator = cls._decorators.get(key)
        if decorator is None:
            decorator = _DECORATOR_TYPES[key]()
            cls._decorators[key] = decorator
        return decorator

    @classmethod
    @contextmanager
    def stroke_session(cls, style: str | None, params: Mapping[str, Any] | None = None) -> Iterator[LineDecorator]:
        """Lend a decorator with fresh pattern state for one stroke.

        Sessions of the same style that overlap each get their own instance. Instances
        configured through ``params`` are not returned to the pool.
        """
        key = cls.resolve(style)
        idle = cls._idle.setdefault(key, [])
        if params:
            decorator = _DECORATOR_TYPES[key]()
            decorator.set_params(params)
        else:
            decorator = idle.pop() if idle else _DECORATOR_TYPES[key]()
            decorator.reset()
        try:
            yield decorator
        finally:
            if not params:
                idle.append(decorator)
