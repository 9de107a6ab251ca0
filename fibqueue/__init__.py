from .graph import dijkstra, minimum_spanning_tree, shortest_path
from .heap import (FibHeap, FibNode, HeapInvariantError, InvalidKeyError,
                   heap_view)
from .version import __version__
