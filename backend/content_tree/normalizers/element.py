from content_tree.domain.answers import load_answers


def normalize_element(element, admin=False):
    base = {
        "id": element.id,
        "section_id": element.section_id,
        "block_id": element.block_id,
        "parent_id": element.parent_id,
        "element_type": element.element_type,
        "sort": element.sort,
        "answers": load_answers(element.answers_json),
        "styles": load_answers(element.styles_json),
        "animations": load_answers(element.animations_json),
    }

    if admin:
        base["created_at"] = element.created_at
        base["updated_at"] = element.updated_at

    return base


def normalize_element_tree(tree_node, admin=False):
    data = normalize_element(tree_node.node, admin=admin)
    data["elements"] = [
        normalize_element_tree(child, admin=admin) for child in tree_node.children
    ]
    return data
