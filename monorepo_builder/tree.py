"""Box-drawing rendering of the dependency graph."""

from __future__ import annotations

from .graph import Digraph
from .models import TreeNode


def _subtree(graph: Digraph, name: str) -> TreeNode:
    return TreeNode(
        label=name,
        nodes=[_subtree(graph, dep) for dep in graph.adjacent_list(name)],
    )


def tree_view(graph: Digraph, prefix: str = "") -> str:
    """Render the graph as a forest, one top-level entry per vertex.

    Entries follow topological order. Each dependency is expanded with its
    own dependencies, so shared dependencies appear once per dependent.
    Output grows with the number of paths, not packages, so deeply nested
    diamonds render large; depth is bounded by the recursion limit.

    Raises:
        CycleError: If the graph contains a cycle.
    """
    model = TreeNode(
        nodes=[_subtree(graph, name) for name in graph.topological_sort()]
    )
    return build_tree(model, prefix)


def build_tree(node: TreeNode, prefix: str = "") -> str:
    """Render ``node`` and its children, every line starting with ``prefix``.

    An unlabeled node renders only its children, which is how the forest
    root is drawn.
    """
    out = ""
    if node.label:
        splitter = "\n" + prefix + ("│ " if node.nodes else "  ")
        out = prefix + splitter.join(node.label.split("\n")) + "\n"

    for index, child in enumerate(node.nodes):
        last = index == len(node.nodes) - 1
        more = bool(child.nodes)
        child_prefix = prefix + ("  " if last else "│ ")
        # The child renders with its own prefix; swap that for the connector
        body = build_tree(child, child_prefix)[len(child_prefix) :]
        connector = ("└─" if last else "├─") + ("┬ " if more else "─ ")
        out += prefix + connector + body
    return out
