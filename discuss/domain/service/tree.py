"""Locate-and-update helpers for partially loaded comment trees.

A tree is a tuple of root comments whose ``children`` are tuples too. Nothing
is mutated: an update copies the comments on the path from the root down to
the target and shares every other subtree with the previous tree.
All traversals use explicit stacks, so data depth never grows the call stack.
"""

from collections.abc import Callable, Iterator, Sequence
from typing import Optional

from discuss.domain.model import Comment
from discuss.domain.value import CommentId

Path = tuple[int, ...]


def walk(roots: Sequence[Comment]) -> Iterator[tuple[Comment, int]]:
    """Yield ``(comment, depth)`` for every loaded comment in pre-order."""
    stack: list[tuple[Comment, int]] = [(node, 0) for node in reversed(roots)]
    while stack:
        node, depth = stack.pop()
        yield node, depth
        stack.extend((child, depth + 1) for child in reversed(node.children))


def find_path(roots: Sequence[Comment], comment_id: CommentId) -> Optional[Path]:
    """Find the index path to a comment, searching depth-first.

    Args:
        roots: Root comments of the tree
        comment_id: Comment to look for

    Returns:
        Child indexes from the root level down to the comment, or None
    """
    stack: list[tuple[Path, Comment]] = [
        ((index,), node) for index, node in reversed(list(enumerate(roots)))
    ]
    while stack:
        path, node = stack.pop()
        if node.id == comment_id:
            return path
        for index in range(len(node.children) - 1, -1, -1):
            stack.append((path + (index,), node.children[index]))
    return None


def find_comment(roots: Sequence[Comment], comment_id: CommentId) -> Optional[Comment]:
    """Return the loaded comment with the given ID, if any."""
    path = find_path(roots, comment_id)
    if path is None:
        return None
    return node_at(roots, path)


def node_at(roots: Sequence[Comment], path: Path) -> Comment:
    """Return the comment at an index path produced by ``find_path``."""
    nodes: Sequence[Comment] = roots
    node = None
    for index in path:
        node = nodes[index]
        nodes = node.children
    if node is None:
        raise ValueError("Path must not be empty")
    return node


def replace_at(
    roots: Sequence[Comment],
    path: Path,
    update: Callable[[Comment], Comment],
) -> tuple[Comment, ...]:
    """Apply ``update`` to the comment at ``path`` and rebuild its ancestors.

    Args:
        roots: Root comments of the tree
        path: Index path from ``find_path``
        update: Function producing the replacement comment

    Returns:
        New root tuple; siblings off the path are the same objects as before
    """
    levels: list[tuple[tuple[Comment, ...], int]] = []
    nodes = tuple(roots)
    for index in path:
        levels.append((nodes, index))
        nodes = nodes[index].children

    siblings, index = levels.pop()
    rebuilt = siblings[:index] + (update(siblings[index]),) + siblings[index + 1 :]
    while levels:
        siblings, index = levels.pop()
        parent = siblings[index].model_copy(update={"children": rebuilt})
        rebuilt = siblings[:index] + (parent,) + siblings[index + 1 :]
    return rebuilt


def update_comment(
    roots: Sequence[Comment],
    comment_id: CommentId,
    update: Callable[[Comment], Comment],
) -> tuple[tuple[Comment, ...], bool]:
    """Locate a comment anywhere in the tree and replace it.

    Returns:
        Tuple of (new roots, whether the comment was found). When it was not
        found the original roots are returned unchanged.
    """
    path = find_path(roots, comment_id)
    if path is None:
        return tuple(roots), False
    return replace_at(roots, path, update), True
