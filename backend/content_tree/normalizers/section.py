from content_tree.domain.answers import load_answers
from .element import normalize_element_tree

def normalize_section(section, admin=False):
    data = {
        "id": section.id,
        "page_id": section.page_id,
        "block_id": section.block_id,
        "zone": section.zone,
        "sort": section.sort,
        "background": section.background,
        "text_color": section.text_color,
        "heading_color": section.heading_color,
        "link_color": section.link_color,
        "target_block_id": section.target_block_id,
        "answers": load_answers(section.answers_json),
        "styles": load_answers(section.styles_json),
        "animations": load_answers(section.animations_json),
    }

    if admin:
        data["created_at"] = section.created_at
        data["updated_at"] = section.updated_at

    return data


def normalize_section_tree(tree_node, admin=False):
    data = normalize_section(tree_node.node, admin=admin)
    data["elements"] = [
        normalize_element_tree(child, admin=admin) for child in tree_node.children
    ]
    return data
