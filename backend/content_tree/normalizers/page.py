from itertools import groupby
from .section import normalize_section_tree

def normalize_page(page, sections=None, admin=False):
    data = {
        "id": page.id,
        "url": page.url,
        "title": page.title,
        "layout": page.layout,
    }

    if sections is not None:
        data["sections"] = [normalize_section_tree(s, admin=admin) for s in sections]
        data["zones"] = {
            zone: [s.id for s in zone_sections]
            for zone, zone_sections in groupby(sections, key=lambda s: s.node.zone or "")
        }

    return data
