import logging
from typing import Hashable, Union

import numpy as np

from .heap import FibHeap

log = logging.getLogger(__name__)

Edges = Union[list[tuple[Hashable, Hashable]],
              list[tuple[Hashable, Hashable, float]]]


def _adjacency(graph: Union[np.ndarray, Edges], directed: bool) -> dict:
    """
    Build ``{u: [(v, weight, edge), ...]}`` from a weight matrix or an edge
    list.  ``edge`` is the pair as the caller wrote it.
    """
    adj = {}

    def add(u, v, w):
        if w < 0:
            raise ValueError(f'negative weight {w} on edge ({u!r}, {v!r})')
        adj.setdefault(u, []).append((v, w, (u, v)))
        adj.setdefault(v, [])
        if not directed:
            adj[v].append((u, w, (u, v)))

    if isinstance(graph, np.ndarray):
        if graph.ndim != 2 or graph.shape[0] != graph.shape[1]:
            raise ValueError(
                f'weight matrix must be square, got shape {graph.shape}')
        for u in range(graph.shape[0]):
            adj[u] = []
        for u, v in zip(*np.nonzero(np.isfinite(graph))):
            if u != v:
                add(int(u), int(v), float(graph[u, v]))
    else:
        for e in graph:
            u, v, *w = e
            add(u, v, w[0] if w else 1)
    return adj


def dijkstra(graph: Union[np.ndarray, Edges],
             source: Hashable,
             directed: bool = False) -> tuple[dict, dict]:
    """
    single source shortest paths

    Args:
        graph: square weight matrix (``np.inf`` for a missing edge) or a
            list of edges ``(u, v)`` / ``(u, v, weight)``
        source: start vertex
        directed: treat edges as one-way

    Returns:
        (distance, predecessor) dicts over the vertices reachable from
        ``source``, the predecessor of ``source`` is None
    """
    adj = _adjacency(graph, directed)
    if source not in adj:
        raise ValueError(f'unknown source vertex {source!r}')

    heap = FibHeap()
    handles = {source: heap.insert(0, source)}
    dist, pred = {}, {source: None}
    while heap:
        node = heap.extract_min_node()
        u = node.value
        dist[u] = node.key
        for v, w, _ in adj[u]:
            if v in dist:
                continue
            d = node.key + w
            h = handles.get(v)
            if h is None:
                handles[v] = heap.insert(d, v)
                pred[v] = u
            elif d < h.key:
                heap.decrease_key(h, d)
                pred[v] = u
    log.debug(f'dijkstra from {source!r} reached {len(dist)} vertices')
    return dist, {v: pred[v] for v in dist}


def shortest_path(graph: Union[np.ndarray, Edges],
                  source: Hashable,
                  target: Hashable,
                  directed: bool = False) -> list:
    """
    shortest path from ``source`` to ``target``

    Returns:
        list of vertices from source to target, empty if unreachable
    """
    _, pred = dijkstra(graph, source, directed)
    if target not in pred:
        return []
    path = [target]
    while pred[path[-1]] is not None:
        path.append(pred[path[-1]])
    return path[::-1]


def minimum_spanning_tree(edges: Edges) -> list[tuple[Hashable, Hashable]]:
    """
    minimum spanning tree

    Prim's algorithm grown from every unvisited vertex, so a disconnected
    graph gives a spanning forest.  Edges without weight weigh 1.

    Args:
        edges: list of edges

    Returns:
        list of edges in minimum spanning tree
    """
    if not edges:
        return []

    adj = _adjacency(edges, directed=False)

    tree = []
    visited = set()
    for start in adj:
        if start in visited:
            continue
        heap = FibHeap()
        handles = {start: heap.insert(0, start)}
        via = {start: None}
        while heap:
            u = heap.extract_min_node().value
            visited.add(u)
            if via[u] is not None:
                tree.append(via[u])
            for v, w, e in adj[u]:
                if v in visited:
                    continue
                h = handles.get(v)
                if h is None:
                    handles[v] = heap.insert(w, v)
                    via[v] = e
                elif w < h.key:
                    heap.decrease_key(h, w)
                    via[v] = e

    return tree
