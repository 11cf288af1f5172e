from content_tree.models.section import Section
from .section import normalize_section_tree
from .element import normalize_element_tree

def normalize_block(block):
    return {
        "id": block.id,
        "block_type": block.block_type,
        "name": block.name,
    }


def normalize_block_tree(tree_node, admin=False):
    data = normalize_block(tree_node.node)

    # Element blocks have no section layer
    sections = [c for c in tree_node.children if isinstance(c.node, Section)]
    elements = [c for c in tree_node.children if not isinstance(c.node, Section)]

    data["sections"] = [normalize_section_tree(s, admin=admin) for s in sections]
    data["elements"] = [normalize_element_tree(e, admin=admin) for e in elements]
    return data
