import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from .paths import DEFAULT_PATH_PREFIX, resolve_path_mode
from .snapshot import PageSnapshot
from .titles import menu_label

logger = logging.getLogger(__name__)


@dataclass
class MenuNode:
    page: PageSnapshot
    label: str
    url: str
    selected: bool = False
    parent: Optional["MenuNode"] = field(default=None, repr=False, compare=False)
    children: List["MenuNode"] = field(default_factory=list)

    @property
    def id(self) -> str:
        return self.page.id

    @property
    def skip_to_first_child(self) -> bool:
        return self.page.skip_to_first_child

    def walk(self):
        yield self
        for child in self.children:
            yield from child.walk()


def index_pages(pages: Iterable[PageSnapshot]) -> Dict[str, PageSnapshot]:
    return {page.id: page for page in pages}


def ancestor_chain(page: PageSnapshot, index: Dict[str, PageSnapshot]) -> List[PageSnapshot]:
    """
    Ancestors of page, root first, limited to pages present in index.
    Stops at a dangling parent or a cycle.
    """
    chain: List[PageSnapshot] = []
    seen = {page.id}
    parent_id = page.parent_id

    while parent_id is not None and parent_id in index and parent_id not in seen:
        parent = index[parent_id]
        chain.append(parent)
        seen.add(parent_id)
        parent_id = parent.parent_id

    chain.reverse()
    return chain


def page_paths(
    pages: Sequence[PageSnapshot],
    *,
    marketable_urls: bool = True,
    path_prefix: str = DEFAULT_PATH_PREFIX,
) -> Dict[str, str]:
    """Maps page id -> public path for every page in the snapshot."""
    index = index_pages(pages)
    return {
        page.id: resolve_path_mode(
            marketable_urls,
            page,
            ancestor_chain(page, index),
            path_prefix=path_prefix,
        )
        for page in pages
    }


def is_menu_candidate(page: PageSnapshot) -> bool:
    return not page.draft and page.show_in_menu


def _ordered(pages: Iterable[PageSnapshot]) -> List[PageSnapshot]:
    # sorted() is stable, so position ties keep their fetch order
    return sorted(pages, key=lambda p: p.position)


def _in_cycle(page: PageSnapshot, index: Dict[str, PageSnapshot]) -> bool:
    seen = set()
    parent_id = page.parent_id
    while parent_id is not None and parent_id in index and parent_id not in seen:
        if parent_id == page.id:
            return True
        seen.add(parent_id)
        parent_id = index[parent_id].parent_id
    return parent_id == page.id


def build_menu(
    pages: Sequence[PageSnapshot],
    *,
    marketable_urls: bool = True,
    path_prefix: str = DEFAULT_PATH_PREFIX,
) -> List[MenuNode]:
    """
    Builds the ordered navigation tree from a flat fast-menu snapshot.

    Draft and hidden pages are dropped. A page whose parent is not among
    the rendered candidates (or that sits in a parent cycle) is attached
    at the root instead of failing.
    """
    urls = page_paths(pages, marketable_urls=marketable_urls, path_prefix=path_prefix)
    candidates = [page for page in pages if is_menu_candidate(page)]
    index = index_pages(candidates)

    children_of: Dict[Optional[str], List[PageSnapshot]] = {}
    for page in candidates:
        parent_id = page.parent_id
        if parent_id is not None and parent_id not in index:
            logger.debug("Page %s has no rendered parent %s; treating as root", page.id, parent_id)
            parent_id = None
        elif parent_id is not None and _in_cycle(page, index):
            logger.debug("Page %s is part of a parent cycle; treating as root", page.id)
            parent_id = None
        children_of.setdefault(parent_id, []).append(page)

    def attach(parent: Optional[MenuNode], siblings: List[PageSnapshot]) -> List[MenuNode]:
        nodes = []
        for page in _ordered(siblings):
            node = MenuNode(
                page=page,
                label=menu_label(page),
                url=urls[page.id],
                parent=parent,
            )
            node.children = attach(node, children_of.get(page.id, []))
            nodes.append(node)
        return nodes

    return attach(None, children_of.get(None, []))


def iter_nodes(tree: Iterable[MenuNode]):
    for root in tree:
        yield from root.walk()


def find_node(tree: Iterable[MenuNode], page_id) -> Optional[MenuNode]:
    for node in iter_nodes(tree):
        if node.id == page_id:
            return node
    return None


def mark_active(tree: List[MenuNode], current_page) -> Optional[MenuNode]:
    """
    Highlights the current page and its ancestor chain.

    A skip_to_first_child page hands activation to its first rendered
    child, repeatedly, so the parent stays selected only as an ancestor.
    Returns the active node, or None when the page is not in the menu.
    """
    for node in iter_nodes(tree):
        node.selected = False

    if current_page is None:
        return None

    active = find_node(tree, current_page.id)
    if active is None:
        return None

    while active.skip_to_first_child and active.children:
        active = active.children[0]

    node = active
    while node is not None:
        node.selected = True
        node = node.parent

    return active
