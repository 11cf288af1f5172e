from content_tree.domain.answers import ColumnAnswers, RowAnswers, CarouselAnswers, SlideAnswers
from content_tree.domain.element_types import COLUMN, CAROUSEL_SLIDE
from .exceptions import InvariantViolation

def assert_sibling_order(siblings):
    sorts = [sibling.sort for sibling in siblings]
    if not sorts:
        return

    expected = list(range(1, len(sorts) + 1))
    if sorted(sorts) != expected:
        raise InvariantViolation(
            f"Element sorts are not consecutive starting from 1: {sorts}"
        )

def assert_element_owner(element):
    if not element.section_id and not element.block_id:
        raise InvariantViolation(
            "Element must belong to a section or a block."
        )
    if element.parent_id is not None and element.parent_id == element.id:
        raise InvariantViolation(
            f"Element {element.id} cannot be its own parent."
        )

def assert_row_converged(row, children):
    spec = RowAnswers.parse(row.answers_json)
    ordered = sorted(children, key=lambda c: c.sort)

    if len(ordered) != len(spec.columns):
        raise InvariantViolation(
            f"Row {row.id} declares {len(spec.columns)} columns but has {len(ordered)} children."
        )

    for index, child in enumerate(ordered):
        answers = ColumnAnswers.parse(child.answers_json)
        if (
            child.element_type != COLUMN
            or child.sort != index + 1
            or answers.size != spec.columns[index]
            or answers.mobile_size != spec.mobile_size_at(index)
            or answers.mobile_order != spec.mobile_order_at(index)
        ):
            raise InvariantViolation(
                f"Column {child.id} of row {row.id} does not match slot {index + 1}."
            )

def assert_carousel_converged(carousel, children):
    spec = CarouselAnswers.parse(carousel.answers_json)
    ordered = sorted(children, key=lambda c: c.sort)

    if len(ordered) != spec.slides:
        raise InvariantViolation(
            f"Carousel {carousel.id} declares {spec.slides} slides but has {len(ordered)} children."
        )

    for index, child in enumerate(ordered):
        if (
            child.element_type != CAROUSEL_SLIDE
            or child.sort != index + 1
            or SlideAnswers.parse(child.answers_json).slide != index
        ):
            raise InvariantViolation(
                f"Slide {child.id} of carousel {carousel.id} does not match slot {index}."
            )
