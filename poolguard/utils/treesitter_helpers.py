from collections.abc import Callable, Iterator
from pathlib import Path

from tree_sitter import Node as TSNode

from poolguard.models.base import SourceLocation


def node_text(node: TSNode) -> str:
    """Source text covered by a Tree-sitter node."""
    return (node.text or b"").decode("utf-8")


def normalize_name(raw: str) -> str:
    """Collapse whitespace so dotted names compare equal across line breaks."""
    return "".join(raw.split())


def location_for(node: TSNode, path: Path) -> SourceLocation:
    start_row, start_column = node.start_point
    end_row, end_column = node.end_point
    return SourceLocation(
        file_path=path,
        line_start=start_row + 1,
        column_start=start_column + 1,
        line_end=end_row + 1,
        column_end=end_column + 1,
        start_byte=node.start_byte,
        end_byte=node.end_byte,
    )


def iter_nodes(
    node: TSNode, descend: Callable[[TSNode], bool] = lambda _: True
) -> Iterator[TSNode]:
    """Yield the node and its descendants in source order.

    Walks with an explicit stack, so deeply nested expressions do not hit the
    interpreter's recursion limit. Children of a node are skipped when
    `descend` returns False for it.
    """
    stack: list[TSNode] = [node]
    while stack:
        current = stack.pop()
        yield current
        if descend(current):
            stack.extend(reversed(current.children))


def iter_nodes_of_type(node: TSNode, node_type: str) -> Iterator[TSNode]:
    """Yield every descendant (and the node itself) of the given type in source order."""
    return (current for current in iter_nodes(node) if current.type == node_type)
