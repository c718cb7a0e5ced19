"""
Persistent binary search tree.

A BinaryTree is either empty or a node holding a value and two child trees.
Values smaller than a node's value live in its left subtree; everything else,
including values equal to it, lives in its right subtree. Nothing is ever
removed and nothing is rebalanced.

Two insertion strategies are provided. naive_insert fills the first empty
slot it reaches in place; insert rebuilds only the root-to-leaf path and
shares every untouched subtree with the previous version, so copies taken
before the insertion stay valid. Both produce the same shape.

Traversals and lookups use explicit stacks, so degenerate (sorted input)
trees deeper than the interpreter recursion limit work too.
"""

from typing import Callable, Generic, Iterable, Iterator, List, Optional, Tuple, TypeVar

T = TypeVar('T')


class BinaryTree(Generic[T]):
    """Ordered binary tree over values supporting ``<`` and ``==``.

    Trees assembled by hand with :meth:`node` must keep every left value
    strictly below its parent and every right value at or above it. This is
    the caller's job: nothing here repairs a misordered tree, and search on
    one gives unreliable answers. :meth:`is_valid` reports the problem.
    """

    class Node:
        __slots__ = ('left', 'value', 'right')

        def __init__(
            self,
            left: Optional['BinaryTree.Node'],
            value: T,
            right: Optional['BinaryTree.Node'],
        ) -> None:
            self.left: Optional[BinaryTree.Node] = left
            self.value: T = value
            self.right: Optional[BinaryTree.Node] = right

    def __init__(self) -> None:
        self._root: Optional[BinaryTree.Node] = None
        # False once any cell under _root is reachable from another handle.
        self._exclusive: bool = True

    @classmethod
    def node(cls, left: 'BinaryTree[T]', value: T, right: 'BinaryTree[T]') -> 'BinaryTree[T]':
        """Build a tree rooted at ``value`` over two existing subtrees."""
        left_root = left._share()
        right_root = right._share()
        tree: BinaryTree[T] = cls()
        tree._root = cls.Node(left_root, value, right_root)
        tree._exclusive = left_root is None and right_root is None
        return tree

    @classmethod
    def from_values(cls, values: Iterable[T]) -> 'BinaryTree[T]':
        tree: BinaryTree[T] = cls()
        for value in values:
            tree.insert(value)
        return tree

    def naive_insert(self, new_value: T) -> None:
        """Insert by filling the first empty slot on the search path.

        Cells are mutated in place only while this handle is their sole
        owner. Once structure is shared with a copy or a subtree handle the
        path is rebuilt instead, exactly as :meth:`insert` does.
        """
        if not self._exclusive:
            self.insert(new_value)
            return

        leaf = BinaryTree.Node(None, new_value, None)
        if self._root is None:
            self._root = leaf
            return

        node = self._root
        while True:
            if new_value < node.value:
                if node.left is None:
                    node.left = leaf
                    return
                node = node.left
            else:
                if node.right is None:
                    node.right = leaf
                    return
                node = node.right

    def insert(self, new_value: T) -> None:
        """Rebind this tree to a new version containing ``new_value``.

        Only the cells on the path to the new leaf are rebuilt; all other
        subtrees are shared with the previous version, which is left intact.
        """
        self._root = self._with_inserted(self._root, new_value)

    @staticmethod
    def _with_inserted(root: Optional['BinaryTree.Node'], new_value: T) -> 'BinaryTree.Node':
        path: List[Tuple[BinaryTree.Node, bool]] = []
        node = root
        while node is not None:
            went_left = new_value < node.value
            path.append((node, went_left))
            node = node.left if went_left else node.right

        rebuilt = BinaryTree.Node(None, new_value, None)
        for parent, went_left in reversed(path):
            if went_left:
                rebuilt = BinaryTree.Node(rebuilt, parent.value, parent.right)
            else:
                rebuilt = BinaryTree.Node(parent.left, parent.value, rebuilt)
        return rebuilt

    def search(self, search_value: T) -> Optional['BinaryTree[T]']:
        """Return the subtree rooted at ``search_value``, or None."""
        node = self._find_node(search_value)
        if node is None:
            return None
        self._exclusive = False
        return self._subtree(node)

    def _find_node(self, search_value: T) -> Optional['BinaryTree.Node']:
        node = self._root
        while node is not None:
            if search_value == node.value:
                return node
            if search_value < node.value:
                node = node.left
            else:
                node = node.right
        return None

    def count(self) -> int:
        total = 0
        stack: List[Optional[BinaryTree.Node]] = [self._root]
        while stack:
            node = stack.pop()
            if node is None:
                continue
            total += 1
            stack.append(node.left)
            stack.append(node.right)
        return total

    def height(self) -> int:
        depth = 0
        level: List[BinaryTree.Node] = [self._root] if self._root is not None else []
        while level:
            depth += 1
            next_level: List[BinaryTree.Node] = []
            for node in level:
                if node.left is not None:
                    next_level.append(node.left)
                if node.right is not None:
                    next_level.append(node.right)
            level = next_level
        return depth

    def is_empty(self) -> bool:
        return self._root is None

    def is_valid(self) -> bool:
        """Check the ordering invariant against every ancestor, not just parents."""
        # Bounds are (inclusive low, exclusive high); None means unbounded.
        stack: List[Tuple[Optional[BinaryTree.Node], Optional[T], Optional[T]]] = [
            (self._root, None, None)
        ]
        while stack:
            node, low, high = stack.pop()
            if node is None:
                continue
            if low is not None and node.value < low:
                return False
            if high is not None and not node.value < high:
                return False
            stack.append((node.left, low, node.value))
            stack.append((node.right, node.value, high))
        return True

    @property
    def value(self) -> T:
        if self._root is None:
            raise ValueError("value of empty tree")
        return self._root.value

    @property
    def left(self) -> 'BinaryTree[T]':
        if self._root is None:
            return BinaryTree()
        self._exclusive = False
        return self._subtree(self._root.left)

    @property
    def right(self) -> 'BinaryTree[T]':
        if self._root is None:
            return BinaryTree()
        self._exclusive = False
        return self._subtree(self._root.right)

    def copy(self) -> 'BinaryTree[T]':
        """Return an independent tree value; structure is shared, not copied."""
        return self._subtree(self._share())

    def traverse_in_order(self, process: Callable[[T], object]) -> None:
        for value in self._iter_in_order():
            process(value)

    def traverse_pre_order(self, process: Callable[[T], object]) -> None:
        for value in self._iter_pre_order():
            process(value)

    def traverse_post_order(self, process: Callable[[T], object]) -> None:
        for value in self._iter_post_order():
            process(value)

    def in_order(self) -> List[T]:
        return list(self._iter_in_order())

    def pre_order(self) -> List[T]:
        return list(self._iter_pre_order())

    def post_order(self) -> List[T]:
        return list(self._iter_post_order())

    def _iter_in_order(self) -> Iterator[T]:
        stack: List[BinaryTree.Node] = []
        node = self._root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node.value
            node = node.right

    def _iter_pre_order(self) -> Iterator[T]:
        if self._root is None:
            return
        stack: List[BinaryTree.Node] = [self._root]
        while stack:
            node = stack.pop()
            yield node.value
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)

    def _iter_post_order(self) -> Iterator[T]:
        stack: List[BinaryTree.Node] = []
        last: Optional[BinaryTree.Node] = None
        node = self._root
        while stack or node is not None:
            if node is not None:
                stack.append(node)
                node = node.left
                continue
            top = stack[-1]
            if top.right is not None and top.right is not last:
                node = top.right
            else:
                yield top.value
                last = stack.pop()

    def _share(self) -> Optional['BinaryTree.Node']:
        if self._root is not None:
            self._exclusive = False
        return self._root

    @staticmethod
    def _subtree(root: Optional['BinaryTree.Node']) -> 'BinaryTree[T]':
        tree: BinaryTree[T] = BinaryTree()
        tree._root = root
        tree._exclusive = root is None
        return tree

    def __len__(self) -> int:
        return self.count()

    def __bool__(self) -> bool:
        return self._root is not None

    def __contains__(self, value: T) -> bool:
        return self._find_node(value) is not None

    def __iter__(self) -> Iterator[T]:
        return self._iter_in_order()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BinaryTree):
            return NotImplemented
        stack: List[Tuple[Optional[BinaryTree.Node], Optional[BinaryTree.Node]]] = [
            (self._root, other._root)
        ]
        while stack:
            a, b = stack.pop()
            if a is b:
                continue
            if a is None or b is None or a.value != b.value:
                return False
            stack.append((a.left, b.left))
            stack.append((a.right, b.right))
        return True

    def __repr__(self) -> str:
        return f"BinaryTree({self.in_order()})"

    def __str__(self) -> str:
        # Pending items are either literal text or a cell still to render.
        parts: List[str] = []
        pending: List[object] = [self._root]
        while pending:
            item = pending.pop()
            if item is None:
                continue
            if isinstance(item, str):
                parts.append(item)
                continue
            assert isinstance(item, BinaryTree.Node)
            pending.append("]")
            pending.append(item.right)
            pending.append("], right = [")
            pending.append(item.left)
            pending.append(f"value: {item.value}, left = [")
        return "".join(parts)
