from __future__ import annotations

"""
Dependency Graph and Transitive Closure.

Maps each entity to the set of entities it depends on directly. The same
depth-first walk serves both the include reader (which fills the graph as it
goes) and the closure ("extrapolation") that turns one-hop edges into full
reachable sets. The walk keeps an explicit frame stack and an explicit
current-path list; meeting a node that is still on the path is a cycle.
"""

import logging
from typing import Callable, Dict, ItemsView, Iterator, List, Optional, Set

from mkmk.core.graph.entity import Entity
from mkmk.domain.errors import CircularDependencyError

logger = logging.getLogger(__name__)

Visitor = Callable[[Entity], bool]


class DependencyGraph:
    """
    Mapping from entity to its dependency set.

    A missing key is not the same as an empty set: readers use absence to
    mean "not visited yet".
    """

    def __init__(self) -> None:
        self._map: Dict[Entity, Set[Entity]] = {}

    # ==========================================================================
    # ACCESSORS
    # ==========================================================================

    def __contains__(self, key: object) -> bool:
        return key in self._map

    def __iter__(self) -> Iterator[Entity]:
        return iter(self._map)

    def __len__(self) -> int:
        return len(self._map)

    def items(self) -> ItemsView[Entity, Set[Entity]]:
        return self._map.items()

    def get(self, key: Entity) -> Optional[Set[Entity]]:
        return self._map.get(key)

    def walk(self, root: Entity, visit: Visitor) -> None:
        """
        Depth-first preorder walk from `root`.

        `visit(node)` runs on every node reached. When it returns True the
        node is pushed on the current path and its dependencies are queued;
        they are looked up only after the visit, so a visitor may fill them in.

        Args:
            root: Starting node.
            visit: Callback deciding whether to descend into a node.

        Raises:
            CircularDependencyError: If a node on the current path is reached again.
        """
        path: List[Entity] = []
        frames: List[List[Entity]] = [[root]]
        while frames:
            batch = frames[-1]
            if not batch:
                frames.pop()
                if path:
                    path.pop()
                continue

            node = batch.pop()
            if node in path:
                raise CircularDependencyError(node, path)
            if visit(node):
                path.append(node)
                frames.append(list(self._map.get(node, ())))

    def extrapolated(self, result: DependencyGraph) -> None:
        """
        Add to `result` every recursive dependency implied by this graph.

        Each existing key is closed independently; a key never lands in its
        own set since reaching it again is reported as a cycle.

        Args:
            result: Target graph; this graph is left unmodified.
        """
        for root in list(self._map):
            seen = result[root]

            def visit(node: Entity, root: Entity = root, seen: Set[Entity] = seen) -> bool:
                if node == root:
                    return True
                if node in seen:
                    return False
                seen.add(node)
                return True

            self.walk(root, visit)

    # ==========================================================================
    # MANIPULATORS
    # ==========================================================================

    def __getitem__(self, key: Entity) -> Set[Entity]:
        deps = self._map.get(key)
        if deps is None:
            deps = self._map[key] = set()
        return deps

    def extrapolate(self) -> None:
        """Replace every dependency set with its transitive closure."""
        result = DependencyGraph()
        self.extrapolated(result)
        logger.debug(f"Closed graph of {len(result)} nodes")
        self._map = result._map
