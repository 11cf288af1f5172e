"""
Element kinds.

``element_type`` is stored as free text. Everything that branches on it goes
through :func:`classify_element_type`, which maps the string onto a closed
set of kinds: the four structural kinds the tree engine understands, and
``Leaf`` for content (text, image, video, ...) that the engine never looks
inside.
"""
from dataclasses import dataclass
from typing import Optional, Union

ROW = "row"
COLUMN = "column"
CAROUSEL = "carousel"
CAROUSEL_SLIDE = "carousel-slide"


@dataclass(frozen=True)
class Row:
    element_type: str = ROW


@dataclass(frozen=True)
class Column:
    element_type: str = COLUMN


@dataclass(frozen=True)
class Carousel:
    element_type: str = CAROUSEL


@dataclass(frozen=True)
class Slide:
    element_type: str = CAROUSEL_SLIDE


@dataclass(frozen=True)
class Leaf:
    element_type: str


ElementKind = Union[Row, Column, Carousel, Slide, Leaf]

_STRUCTURAL: dict[str, ElementKind] = {
    ROW: Row(),
    COLUMN: Column(),
    CAROUSEL: Carousel(),
    CAROUSEL_SLIDE: Slide(),
}


def classify_element_type(element_type: Optional[str]) -> ElementKind:
    if not element_type:
        raise ValueError("element_type is required")
    return _STRUCTURAL.get(element_type, Leaf(element_type))


def is_layout(kind: ElementKind) -> bool:
    """Layout nodes derive their children from their own answers."""
    return isinstance(kind, (Row, Carousel))

