"""
Tree normalization for diagram generation.

Turns the caller's nested ``(label, child*)`` structure into ``TreeNode``
records with stable integer ids, and loads normalized trees into a networkx
graph for the row builder.
"""

from typing import Any, Dict, Iterator, List, Sequence, Tuple

import networkx as nx

from .models import Symbol, TreeNode


class InvalidTreeError(ValueError):
    """Raised when the input is not a well-formed tree."""

    pass


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def label_text(label: Any) -> str:
    """
    Convert a label to display text.

    Strings are literal text, symbols have dashes replaced by spaces and
    anything else goes through ``str()``.
    """
    if isinstance(label, Symbol):
        return label.display()
    if isinstance(label, str):
        return label
    return str(label)


def _split_node(raw: Any) -> Tuple[str, Sequence[Any]]:
    """Split a raw node into its label text and raw children."""
    if not _is_sequence(raw):
        return label_text(raw), ()
    if not raw:
        raise InvalidTreeError("Empty node: expected (label, child*)")
    head = raw[0]
    if _is_sequence(head):
        raise InvalidTreeError(f"Node label missing, got a sequence: {head!r}")
    return label_text(head), raw[1:]


def _split_forest(tree: Any) -> List[Any]:
    """
    Return the list of root nodes in ``tree``.

    A sequence whose first element is itself a sequence is a forest;
    anything else is a single tree.
    """
    if not _is_sequence(tree):
        return [tree]
    if not tree:
        raise InvalidTreeError("Tree is empty")
    if _is_sequence(tree[0]):
        return list(tree)
    return [tree]


def normalize_tree(tree: Any) -> List[TreeNode]:
    """
    Assign ids to every node of ``tree``.

    Ids are handed out in pre-order depth-first order starting at 0, so a
    parent's id is always smaller than the ids of its descendants.

    Args:
        tree: A node ``(label, child*)`` or a sequence of such nodes.

    Returns:
        The normalized root nodes, in input order.

    Raises:
        InvalidTreeError: If the structure is not a tree of labelled nodes.
    """
    roots = _split_forest(tree)

    labels: List[str] = []
    child_ids: Dict[int, List[int]] = {}
    root_ids: List[int] = []

    # Explicit stack so deep trees do not hit the recursion limit
    stack: List[Tuple[Any, Any]] = [(node, None) for node in reversed(roots)]
    while stack:
        raw, parent_id = stack.pop()
        text, raw_children = _split_node(raw)

        node_id = len(labels)
        labels.append(text)
        child_ids[node_id] = []
        if parent_id is None:
            root_ids.append(node_id)
        else:
            child_ids[parent_id].append(node_id)

        stack.extend((child, node_id) for child in reversed(raw_children))

    # Children always carry larger ids, so build from the highest id down
    built: Dict[int, TreeNode] = {}
    for node_id in range(len(labels) - 1, -1, -1):
        built[node_id] = TreeNode(
            id=node_id,
            text=labels[node_id],
            children=tuple(built[c] for c in child_ids[node_id]),
        )

    return [built[r] for r in root_ids]


def iter_preorder(roots: Sequence[TreeNode]) -> Iterator[TreeNode]:
    """Yield normalized nodes in id order."""
    stack = list(reversed(roots))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def tree_to_digraph(roots: Sequence[TreeNode]) -> nx.DiGraph:
    """
    Load normalized trees into a directed graph.

    Nodes are keyed by id and carry the original ``TreeNode`` in the
    ``node`` attribute. Edges run parent to child and are added in sibling
    order, so successor iteration preserves the input order.
    """
    graph = nx.DiGraph()
    for node in iter_preorder(roots):
        graph.add_node(node.id, node=node)
        for child in node.children:
            graph.add_edge(node.id, child.id)
    return graph
