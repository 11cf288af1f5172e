class InvariantViolation(Exception):
    """A content tree rule was broken (ordering, ownership, shape)."""


class MalformedLayoutSpec(InvariantViolation):
    """A row or carousel declares columns/slides that cannot be parsed."""

    def __init__(self, element_id, field, value):
        self.element_id = element_id
        self.field = field
        self.value = value
        super().__init__(
            f"Element {element_id} has a malformed '{field}' specification: {value!r}"
        )


class NodeNotFound(Exception):
    """A referenced page, block, section or element does not exist for the tenant."""

    def __init__(self, entity_type: str, entity_id):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type.capitalize()} not found: {entity_id}")
