"""Generic A* search.

The algorithm knows nothing about grids: it only talks to a
:class:`SearchProblem`, so any graph with hashable nodes can be searched.
"""

from __future__ import annotations

import heapq
import itertools
from typing import Dict, Hashable, Iterable, List, Optional, Protocol, Tuple, TypeVar

import structlog

log = structlog.get_logger(__name__)

N = TypeVar("N", bound=Hashable)


class SearchProblem(Protocol[N]):
    """Protocol describing what A* needs to know about a graph.

    ``heuristic`` must never overestimate the remaining cost for the returned
    path to be a cheapest one.
    """

    def start(self) -> N: ...

    def is_goal(self, node: N) -> bool: ...

    def heuristic(self, node: N) -> int: ...

    def neighbors(self, node: N) -> Iterable[Tuple[N, int]]: ...


def _reconstruct(came_from: Dict[N, N], node: N) -> List[N]:
    path = [node]
    while node in came_from:
        node = came_from[node]
        path.append(node)
    path.reverse()
    return path


def astar(problem: SearchProblem[N]) -> Optional[List[N]]:
    """Return the path from ``problem.start()`` to a goal node, both inclusive.

    ``None`` means the goal is unreachable.
    """
    start = problem.start()
    counter = itertools.count()  # tie-breaker, nodes need not be orderable
    open_heap: List[Tuple[int, int, N]] = [(problem.heuristic(start), next(counter), start)]
    g_score: Dict[N, int] = {start: 0}
    came_from: Dict[N, N] = {}
    closed = set()

    expanded = 0
    while open_heap:
        _, _, node = heapq.heappop(open_heap)
        if node in closed:
            continue
        if problem.is_goal(node):
            path = _reconstruct(came_from, node)
            log.debug("A* found path", length=len(path), expanded=expanded)
            return path
        closed.add(node)
        expanded += 1

        cost = g_score[node]
        for neighbor, step_cost in problem.neighbors(node):
            if neighbor in closed:
                continue
            new_cost = cost + step_cost
            if new_cost < g_score.get(neighbor, new_cost + 1):
                g_score[neighbor] = new_cost
                came_from[neighbor] = node
                heapq.heappush(
                    open_heap,
                    (new_cost + problem.heuristic(neighbor), next(counter), neighbor),
                )

    log.debug("A* exhausted open set", expanded=expanded)
    return None


__all__ = ["SearchProblem", "astar"]
