"""Graph-structured data sets: trees and Sankey node/edge sets.

Both structures are validated once, at validate time:

1. node names must be unique within the data set,
2. every edge must reference nodes registered in the data set,
3. the edge relation must be acyclic.

Cycle detection is an explicit depth-first search that keeps two sets: nodes
visited by any completed search ("visited") and nodes on the active path
("path"). Re-entering a node on the active path is a cycle; a node finished by
an earlier, disjoint search is not explored again.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable, Iterator
from dataclasses import dataclass
from typing import Any, TypeVar

from .data import DataSource, DataType, ObjectData
from .exceptions import ChartValidationError, CircularEdgeError, DuplicateNodeError, InvalidEdgeError

NodeT = TypeVar("NodeT", bound=Hashable)


def find_duplicate_name(names: Iterable[str]) -> str | None:
    """Return the first name seen twice, or None."""

    seen: set[str] = set()
    for name in names:
        if name in seen:
            return name
        seen.add(name)
    return None


def has_cycle(nodes: Iterable[NodeT], successors: Callable[[NodeT], Iterable[NodeT]]) -> bool:
    """Return True when the directed relation reachable from `nodes` has a cycle.

    Args:
        nodes: Start nodes; each unvisited one starts a new search.
        successors: Function returning the direct successors of a node.
    """

    visited: set[NodeT] = set()
    path: set[NodeT] = set()
    for start in nodes:
        if start in visited:
            continue
        visited.add(start)
        path.add(start)
        stack: list[tuple[NodeT, Iterator[NodeT]]] = [(start, iter(successors(start)))]
        while stack:
            node, pending = stack[-1]
            following = next(pending, None)
            if following is None:
                stack.pop()
                path.discard(node)
                continue
            if following in path:
                return True
            if following in visited:
                continue
            visited.add(following)
            path.add(following)
            stack.append((following, iter(successors(following))))
    return False


class TreeData:
    """A named node of a tree, holding a value and ordered children."""

    def __init__(self, name: str, value: Any = None) -> None:
        self.name = name
        self.value = value
        self._children: list[TreeData] = []

    @property
    def children(self) -> tuple[TreeData, ...]:
        return tuple(self._children)

    def add(self, *nodes: TreeData | None) -> TreeData:
        """Append child nodes (None entries are ignored) and return self."""

        for node in nodes:
            if node is not None:
                self._children.append(node)
        return self

    def remove(self, *nodes: TreeData) -> None:
        for node in nodes:
            self._children = [child for child in self._children if child is not node]

    def get(self, index: int) -> TreeData | None:
        """Return the child at `index`, or None when out of range."""

        if 0 <= index < len(self._children):
            return self._children[index]
        return None

    def walk(self) -> Iterator[TreeData]:
        """Yield this node and its descendants depth-first, each node once."""

        seen: set[int] = set()
        stack = [self]
        while stack:
            node = stack.pop()
            if id(node) in seen:
                continue
            seen.add(id(node))
            yield node
            stack.extend(reversed(node._children))

    def validate(self) -> None:
        """Reject cyclic trees and duplicate node names.

        Raises:
            CircularEdgeError: When a node is its own descendant.
            DuplicateNodeError: When two nodes share a name.
        """

        if has_cycle([self], lambda node: node._children):
            raise CircularEdgeError(part=self)
        duplicate = find_duplicate_name(node.name for node in self.walk())
        if duplicate is not None:
            raise DuplicateNodeError(duplicate, part=self)

    def as_json(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"name": self.name or "Name?"}
        if self.value is not None:
            payload["value"] = self.value
        if self._children:
            payload["children"] = [child.as_json() for child in self._children]
        return payload

    def __repr__(self) -> str:
        return f"<TreeData {self.name!r} children={len(self._children)}>"


class TreeSource(DataSource):
    """Exposes a tree as a single-element OBJECT data source."""

    def __init__(self, root: TreeData, *, name: str | None = None) -> None:
        super().__init__(DataType.OBJECT, name=name)
        self.root = root

    def stream(self) -> Iterator[TreeData]:
        return iter((self.root,))

    def validate(self) -> None:
        self.root.validate()


@dataclass(eq=False, slots=True)
class SankeyNode:
    """A Sankey node. Nodes compare by identity."""

    name: str
    value: Any = None
    depth: int | None = None

    def as_json(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"name": self.name}
        if self.depth is not None and self.depth >= 0:
            payload["depth"] = self.depth
        if self.value is not None:
            payload["value"] = self.value
        return payload


@dataclass(eq=False, slots=True)
class SankeyEdge:
    """A directed, weighted flow between two Sankey nodes."""

    source: SankeyNode | None
    target: SankeyNode | None
    value: Any = None

    def as_json(self) -> dict[str, Any]:
        if self.source is None or self.target is None:
            raise InvalidEdgeError("edge without endpoints cannot be encoded")
        return {"source": self.source.name, "target": self.target.name, "value": self.value}


class SankeyData(ObjectData):
    """Nodes (the data values) plus the edges connecting them."""

    def __init__(self, *nodes: SankeyNode, name: str | None = None) -> None:
        super().__init__(*nodes, name=name)
        self._edges: list[SankeyEdge] = []

    @property
    def nodes(self) -> tuple[SankeyNode, ...]:
        return tuple(self)

    @property
    def edges(self) -> tuple[SankeyEdge, ...]:
        return tuple(self._edges)

    def node(self, name: str) -> SankeyNode | None:
        """Return the first node with this name, or None."""

        for node in self:
            if node.name == name:
                return node
        return None

    def add_edge(self, edge: SankeyEdge) -> SankeyEdge:
        """Add an edge, registering endpoints whose name is not known yet.

        An endpoint whose name already belongs to a different node object is
        not added; validation reports the edge as invalid.
        """

        for endpoint in (edge.source, edge.target):
            if endpoint is not None and self.node(endpoint.name) is None:
                self.append(endpoint)
        self._edges.append(edge)
        return edge

    def connect(self, source: SankeyNode, target: SankeyNode, value: Any = None) -> SankeyEdge:
        return self.add_edge(SankeyEdge(source, target, value))

    def validate(self) -> None:
        """Validate names, edge endpoints, and acyclicity.

        Raises:
            DuplicateNodeError: When two nodes share a name.
            InvalidEdgeError: When an edge misses an endpoint or references an
                unregistered node.
            CircularEdgeError: When the edges form a cycle.
        """

        super().validate()
        for node in self:
            if not isinstance(node, SankeyNode):
                raise ChartValidationError(f"{node!r} is not a Sankey node in {self.class_name()}", part=self)
        duplicate = find_duplicate_name(node.name for node in self)
        if duplicate is not None:
            raise DuplicateNodeError(duplicate, part=self)

        registered = {id(node) for node in self}
        adjacency: dict[SankeyNode, list[SankeyNode]] = {node: [] for node in self}
        for edge in self._edges:
            if edge.source is None or edge.target is None:
                raise InvalidEdgeError("missing endpoint", part=self)
            for endpoint in (edge.source, edge.target):
                if id(endpoint) not in registered:
                    raise InvalidEdgeError(f"node {endpoint.name!r} is not registered", part=self)
            adjacency[edge.source].append(edge.target)

        if self._edges and has_cycle(list(self), adjacency.__getitem__):
            raise CircularEdgeError(part=self)
