from .element import assert_sibling_order
from .exceptions import InvariantViolation

def assert_section_owner(section):
    # Exactly one owner: a page or a block, never both
    if bool(section.page_id) == bool(section.block_id):
        raise InvariantViolation(
            "Section must belong to exactly one of a page or a block."
        )

def assert_section_order(sections):
    orders = [section.sort for section in sections]
    if not orders:
        return

    expected = list(range(1, len(orders) + 1))
    if sorted(orders) != expected:
        raise InvariantViolation(
            f"Section sorts are not consecutive starting from 1: {orders}"
        )

def assert_section_elements(section, elements):
    roots = [e for e in elements if e.parent_id is None]
    assert_sibling_order(roots)

    for element in elements:
        if element.section_id != section.id:
            raise InvariantViolation(
                f"Element {element.id} does not belong to section {section.id}."
            )
