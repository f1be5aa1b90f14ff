from __future__ import annotations

from typing import Iterable, Iterator

from blog_client.schema import Comment, CommentNode


def build_comment_tree(comments: Iterable[Comment]) -> list[CommentNode]:
    """Nest a flat list of comments under their parents.

    Roots are the comments whose ``parent_id`` is ``None``. A comment whose
    parent is not in the batch is left out of the result, and so is anything
    below it. Root and sibling order follow the input order.
    """
    nodes: dict[int, CommentNode] = {}
    for comment in comments:
        nodes[comment.id] = CommentNode(**comment.model_dump(exclude={"children"}))

    roots: list[CommentNode] = []
    for node in nodes.values():
        if node.parent_id is None:
            roots.append(node)
            continue
        parent = nodes.get(node.parent_id)
        if parent is not None:
            parent.children.append(node)

    return roots


def iter_preorder(roots: Iterable[CommentNode], depth: int = 0) -> Iterator[tuple[int, CommentNode]]:
    for node in roots:
        yield depth, node
        yield from iter_preorder(node.children, depth + 1)


def flatten_tree(roots: Iterable[CommentNode]) -> list[CommentNode]:
    return [node for _, node in iter_preorder(roots)]


def find_unreachable(comments: Iterable[Comment]) -> list[Comment]:
    """Return the comments that ``build_comment_tree`` leaves out.

    These are comments with a dangling parent, comments caught in a parent
    cycle, and their descendants.
    """
    comments = list(comments)
    reachable = {node.id for node in flatten_tree(build_comment_tree(comments))}
    return [comment for comment in comments if comment.id not in reachable]
