from typing import Any, Dict, List
from pagetree.domain.menu import MenuNode


def normalize_menu_node(node: MenuNode) -> Dict[str, Any]:
    return {
        "id": node.id,
        "label": node.label,
        "url": node.url,
        "selected": node.selected,
        "children": [normalize_menu_node(child) for child in node.children],
    }


def normalize_menu(tree: List[MenuNode]) -> List[Dict[str, Any]]:
    return [normalize_menu_node(node) for node in tree]
