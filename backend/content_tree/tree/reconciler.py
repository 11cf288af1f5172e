"""
Layout Reconciler.

A row declares its columns (``columns: "4,8"``) and a carousel its slide count
(``slides: 3``). After such a node is saved, its persisted children are brought
in line with that declaration: surplus children are deleted, existing ones are
updated in place, missing ones are created.

Children are matched to slots by their current sort position only. Reordering
columns is expressed by reordering the row's ``columns`` array.
"""
from dataclasses import dataclass, field
from flask import current_app
from content_tree.models.element import Element
from content_tree.domain.answers import RowAnswers, CarouselAnswers, ColumnAnswers, SlideAnswers
from content_tree.domain.element_types import (
    COLUMN,
    CAROUSEL_SLIDE,
    Row,
    Column,
    Carousel,
    Slide,
    Leaf,
    classify_element_type,
)
from content_tree.domain.invariants.exceptions import MalformedLayoutSpec


@dataclass
class ReconcileResult:
    element_id: str
    created: list = field(default_factory=list)
    updated: list = field(default_factory=list)
    deleted: list = field(default_factory=list)  # ids, leaf-first

    @property
    def writes(self) -> int:
        return len(self.created) + len(self.updated) + len(self.deleted)

    def as_dict(self) -> dict:
        return {
            "element_id": self.element_id,
            "created": [e.id for e in self.created],
            "updated": [e.id for e in self.updated],
            "deleted": list(self.deleted),
        }


def reconcile_layout(store, element: Element, *, strict: bool = False) -> ReconcileResult:
    kind = classify_element_type(element.element_type)

    if isinstance(kind, Row):
        result = _reconcile_row(store, element, strict)
    elif isinstance(kind, Carousel):
        result = _reconcile_carousel(store, element, strict)
    elif isinstance(kind, (Column, Slide, Leaf)):
        return ReconcileResult(element.id)
    else:
        raise TypeError(f"Unhandled element kind: {kind!r}")

    if result.writes:
        current_app.logger.info(
            f"Reconciled {element.element_type} {element.id}: "
            f"{len(result.created)} created, {len(result.updated)} updated, "
            f"{len(result.deleted)} deleted"
        )
    return result


def _malformed(element: Element, field_name: str, value, strict: bool) -> None:
    if strict:
        raise MalformedLayoutSpec(element.id, field_name, value)
    current_app.logger.warning(
        f"{element.element_type} {element.id} has malformed '{field_name}' ({value!r}); "
        f"treating it as zero children"
    )


def _new_child(layout: Element, element_type: str, index: int, answers_json: str) -> Element:
    child = Element()
    child.section_id = layout.section_id
    child.block_id = layout.block_id
    child.parent_id = layout.id
    child.element_type = element_type
    child.sort = index + 1
    child.answers_json = answers_json
    return child


def _trim(store, children, keep: int, result: ReconcileResult) -> None:
    for child in children[keep:]:
        result.deleted.extend(store.delete_element_tree(child))


def _reconcile_row(store, row: Element, strict: bool) -> ReconcileResult:
    spec = RowAnswers.parse(row.answers_json)
    if spec.malformed:
        _malformed(row, "columns", spec.raw_columns, strict)

    cols = spec.columns
    children = store.load_children(row.id)
    result = ReconcileResult(row.id)

    _trim(store, children, len(cols), result)

    for index, (child, size) in enumerate(zip(children, cols)):
        answers = ColumnAnswers.parse(child.answers_json)
        mobile_size = spec.mobile_size_at(index)
        mobile_order = spec.mobile_order_at(index)

        if (
            child.element_type == COLUMN
            and child.sort == index + 1
            and answers.size == size
            and answers.mobile_size == mobile_size
            and answers.mobile_order == mobile_order
        ):
            continue

        answers.size = size
        answers.mobile_size = mobile_size  # None clears the override
        answers.mobile_order = mobile_order
        child.element_type = COLUMN
        child.sort = index + 1
        child.answers_json = answers.serialize()
        store.save(child)
        result.updated.append(child)

    for index in range(len(children), len(cols)):
        answers = ColumnAnswers(
            size=cols[index],
            mobile_size=spec.mobile_size_at(index),
            mobile_order=spec.mobile_order_at(index),
        )
        column = _new_child(row, COLUMN, index, answers.serialize())
        store.save(column)
        result.created.append(column)

    return result


def _reconcile_carousel(store, carousel: Element, strict: bool) -> ReconcileResult:
    spec = CarouselAnswers.parse(carousel.answers_json)
    if spec.malformed:
        _malformed(carousel, "slides", spec.raw_slides, strict)

    count = spec.slides
    children = store.load_children(carousel.id)
    result = ReconcileResult(carousel.id)

    _trim(store, children, count, result)

    for index, child in enumerate(children[:count]):
        answers = SlideAnswers.parse(child.answers_json)
        if (
            child.element_type == CAROUSEL_SLIDE
            and child.sort == index + 1
            and answers.slide == index
        ):
            continue

        answers.slide = index
        child.element_type = CAROUSEL_SLIDE
        child.sort = index + 1
        child.answers_json = answers.serialize()
        store.save(child)
        result.updated.append(child)

    for index in range(len(children), count):
        slide = _new_child(carousel, CAROUSEL_SLIDE, index, SlideAnswers(slide=index).serialize())
        store.save(slide)
        result.created.append(slide)

    return result
