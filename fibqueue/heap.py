import itertools
import logging
import math
from typing import Any, Iterator, Optional

log = logging.getLogger(__name__)

PHI = (1 + math.sqrt(5)) / 2


class InvalidKeyError(ValueError):
    """Raised when ``decrease_key`` is given a key above the current one."""


class HeapInvariantError(RuntimeError):
    """The internal structure of a heap is corrupted."""


class FibNode():
    """
    A node of a Fibonacci heap, also the handle returned by ``insert``.

    Every node is a member of exactly one circular doubly-linked list: the
    root list of its heap or the child list of its parent.  The handle is
    only valid until the node is extracted from the heap.
    """
    __slots__ = ('key', 'value', 'degree', 'left', 'right', 'child',
                 'parent', 'marked')

    def __init__(self, key, value=None):
        self.key, self.value = key, value
        self.degree = 0
        self.left, self.right = self, self
        self.child, self.parent = None, None
        self.marked = False

    def splice(self, node: 'FibNode') -> None:
        """Insert the singleton ``node`` as the right neighbour of ``self``."""
        node.left, node.right = self, self.right
        self.right.left = node
        self.right = node

    def detach(self) -> None:
        """Unlink ``self`` from its list and leave it a singleton."""
        self.left.right, self.right.left = self.right, self.left
        self.left, self.right = self, self

    def siblings(self) -> Iterator['FibNode']:
        node = self
        while True:
            yield node
            node = node.right
            if node is self:
                break

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def __repr__(self):
        return f'FibNode({self.key!r})'


class FibHeap():
    """
    Fibonacci Heap

    Attributes:
        key_number: number of keys in the heap
        min_node: the node with the minimum key

    Methods:
        insert(key, value): insert a key and return its node
        peek_min(): the minimum key
        extract_min(): remove the minimum and return its key
        decrease_key(node, key): lower the key of a node

    Handles returned by ``insert`` may be passed to ``decrease_key`` until
    they are extracted.  Passing an extracted node is undefined.  The heap
    is not thread safe.
    """

    def __init__(self):
        self.key_number, self.min_node = 0, None

    def insert(self, key, value=None) -> FibNode:
        node = FibNode(key, value)
        self._add_root(node)
        self.key_number += 1
        return node

    def peek_min(self):
        return None if self.min_node is None else self.min_node.key

    def peek_min_node(self) -> Optional[FibNode]:
        return self.min_node

    def extract_min(self):
        node = self.extract_min_node()
        return None if node is None else node.key

    def extract_min_node(self) -> Optional[FibNode]:
        """
        Remove the node with the minimum key.

        Returns:
            the removed node, or None if the heap is empty
        """
        ret = self.min_node
        if ret is None:
            return None
        if ret.child is not None:
            for x in list(ret.child.siblings()):
                x.detach()
                x.parent = None
                x.marked = False
                ret.splice(x)
            ret.child, ret.degree = None, 0
        right = ret.right
        ret.detach()
        if right is ret:
            self.min_node = None
        else:
            self.min_node = right
            self._consolidate()
        self.key_number -= 1
        return ret

    def decrease_key(self, node: FibNode, key) -> None:
        """
        Lower the key of ``node`` to ``key``.

        Raises:
            InvalidKeyError: ``key`` is greater than the current key, the
                heap is left untouched.
        """
        if key > node.key:
            raise InvalidKeyError(
                f'new key {key!r} is greater than current key {node.key!r}')
        node.key = key
        parent = node.parent
        if parent is not None and key < parent.key:
            self._cut(node, parent)
            self._cascading_cut(parent)
        if key < self.min_node.key:
            self.min_node = node

    def size(self) -> int:
        return self.key_number

    def roots(self) -> list[FibNode]:
        """Snapshot of the root list, starting at the minimum."""
        if self.min_node is None:
            return []
        return list(self.min_node.siblings())

    def check(self) -> None:
        """
        Walk every tree and verify the structural invariants.

        Raises:
            HeapInvariantError: on the first violation found
        """
        if self.min_node is None:
            if self.key_number != 0:
                raise HeapInvariantError(
                    f'empty heap reports {self.key_number} keys')
            return

        roots = self._walk(self.min_node)
        for r in roots:
            if r.parent is not None:
                raise HeapInvariantError(f'root {r!r} has a parent')
            if r.marked:
                raise HeapInvariantError(f'root {r!r} is marked')
            if r.key < self.min_node.key:
                raise HeapInvariantError(
                    f'{r!r} is smaller than min_node {self.min_node!r}')

        count = 0
        stack = roots
        while stack:
            node = stack.pop()
            count += 1
            if node.child is None:
                if node.degree != 0:
                    raise HeapInvariantError(
                        f'{node!r} has degree {node.degree} but no child')
                continue
            children = self._walk(node.child)
            if len(children) != node.degree:
                raise HeapInvariantError(
                    f'{node!r} has degree {node.degree} '
                    f'but {len(children)} children')
            for c in children:
                if c.parent is not node:
                    raise HeapInvariantError(
                        f'{c!r} is in the child list of {node!r} '
                        f'but has parent {c.parent!r}')
                if c.key < node.key:
                    raise HeapInvariantError(
                        f'heap order violated: {c!r} below {node!r}')
            stack.extend(children)

        if count != self.key_number:
            raise HeapInvariantError(
                f'found {count} nodes, heap reports {self.key_number}')

    def _walk(self, start: FibNode) -> list[FibNode]:
        nodes = list(
            itertools.islice(start.siblings(), self.key_number + 1))
        if len(nodes) > self.key_number:
            raise HeapInvariantError(
                f'sibling list of {start!r} is longer than the heap')
        for node in nodes:
            if node.right.left is not node or node.left.right is not node:
                raise HeapInvariantError(f'broken sibling links at {node!r}')
        return nodes

    def _add_root(self, node: FibNode) -> None:
        if self.min_node is None:
            self.min_node = node
        else:
            self.min_node.splice(node)
            if node.key < self.min_node.key:
                self.min_node = node

    def _consolidate(self) -> None:
        # key_number still counts the extracted node here
        n = self.key_number
        max_degree = math.floor(math.log(n) / math.log(PHI)) + 2 if n > 0 else 1
        cons = [None] * max_degree

        root_list = self.roots()
        for w in root_list:
            x = w
            d = x.degree
            while True:
                if d >= max_degree:
                    msg = (f'degree {d} exceeds the bound {max_degree - 1} '
                           f'for {n} keys')
                    log.error(msg)
                    raise HeapInvariantError(msg)
                y = cons[d]
                if y is None:
                    break
                if y.key < x.key:
                    x, y = y, x
                self._link(y, x)
                cons[d] = None
                d += 1
            cons[d] = x

        self.min_node = None
        trees = 0
        for x in cons:
            if x is not None:
                x.left, x.right = x, x
                self._add_root(x)
                trees += 1
        log.debug(f'consolidated {len(root_list)} roots into {trees} trees')

    def _link(self, y: FibNode, x: FibNode) -> None:
        y.detach()
        y.parent = x
        if x.child is None:
            x.child = y
        else:
            x.child.splice(y)
        x.degree += 1
        y.marked = False

    def _cut(self, x: FibNode, y: FibNode) -> None:
        if y.child is x:
            y.child = None if x.right is x else x.right
        x.detach()
        y.degree -= 1
        x.parent = None
        x.marked = False
        self._add_root(x)

    def _cascading_cut(self, y: FibNode) -> None:
        cuts = 0
        z = y.parent
        while z is not None:
            if not y.marked:
                y.marked = True
                break
            self._cut(y, z)
            cuts += 1
            y, z = z, z.parent
        if cuts:
            log.debug(f'cascading cut promoted {cuts} ancestors')

    def __len__(self):
        return self.key_number

    def __bool__(self):
        return self.min_node is not None

    def __repr__(self):
        return f'FibHeap(size={self.key_number}, min={self.peek_min()!r})'


def heap_view(heap: FibHeap) -> str:
    """
    Render the forest of ``heap`` as text, marked nodes end with ``*``.
    """
    from treelib import Tree

    ret = Tree()
    ret.create_node('heap', 'root')
    stack: list[tuple[FibNode, Any]] = [(r, 'root') for r in heap.roots()]
    while stack:
        node, parent = stack.pop()
        tag = f'{node.key}*' if node.marked else f'{node.key}'
        ret.create_node(tag, id(node), parent=parent)
        if node.child is not None:
            stack.extend((c, id(node)) for c in node.child.siblings())
    return ret.show(stdout=False)
