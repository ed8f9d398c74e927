"""
Category hierarchy guard — pure parent-pointer walks.

The category tree is stored as parent links. Before a parent link is
changed, walk upward from the proposed parent: if the walk reaches the
category being moved, the change would close a loop.

The walk keeps a visited set, so it also stops on a cycle that already
exists higher up and does not involve the moved category.

Usage:
    parents = {'C': 'B', 'B': 'A'}
    check_no_cycle('A', 'C', parents.get)   # raises CYCLE_DETECTED
"""

from collections.abc import Iterator

from stockkeeper.exceptions import CategoryError
from stockkeeper.protocols.lookups import ParentLookup


def find_cycle(node_id, proposed_parent_id, get_parent: ParentLookup) -> list | None:
    """
    Path that makes ``proposed_parent_id`` an invalid parent, or None.

    The path starts at the proposed parent and ends at the node that
    closes the loop (``node_id`` itself, or a revisited ancestor).
    """
    visited = set()
    path = []
    current = proposed_parent_id

    while current is not None:
        if current == node_id or current in visited:
            path.append(current)
            return path
        visited.add(current)
        path.append(current)
        current = get_parent(current)

    return None


def check_no_cycle(node_id, proposed_parent_id, get_parent: ParentLookup) -> None:
    """
    Validate a parent change.

    Args:
        node_id: Category being moved
        proposed_parent_id: New parent (None = make it a root)
        get_parent: Returns the parent id of a category, or None

    Raises:
        CategoryError('SELF_PARENT'): node_id == proposed_parent_id
        CategoryError('CYCLE_DETECTED'): the walk reaches node_id or loops
    """
    if proposed_parent_id is None:
        return

    if node_id == proposed_parent_id:
        raise CategoryError('SELF_PARENT', category_id=node_id)

    path = find_cycle(node_id, proposed_parent_id, get_parent)
    if path is not None:
        raise CategoryError(
            'CYCLE_DETECTED',
            category_id=node_id,
            parent_id=proposed_parent_id,
            path=path,
        )


def walk_ancestors(node_id, get_parent: ParentLookup) -> Iterator:
    """
    Yield ancestors of ``node_id``, nearest first.

    Raises:
        CategoryError('CYCLE_DETECTED'): the stored tree already loops
    """
    seen = {node_id}
    current = get_parent(node_id)
    while current is not None:
        if current in seen:
            raise CategoryError('CYCLE_DETECTED', category_id=node_id, path=[current])
        seen.add(current)
        yield current
        current = get_parent(current)
