#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
binary_search_tree.py
---------------------

An unbalanced binary search tree whose nodes know their parent.

Every node owns its children through plain references (``left`` / ``right``)
and points back at its parent through a *weak* reference, so the tree never
forms a reference cycle: dropping the root frees the whole structure.

Features
~~~~~~~~
* `BstNode`                       – the node type, with a weak ``parent`` link
* `search`, `minimum`, `maximum`, `get_root`
* `tree_successor`, `tree_predecessor`
* `tree_insert(root, key)`        – returns the (possibly new) root
* `transplant(u, v)`              – splice subtree `v` into `u`'s position
* `delete(root, key)`             – returns the (possibly new) root
* `validate(root)`                – assert ordering and back‑reference invariants
* `BinarySearchTree`              – a small container wrapping the functions above

Equal keys are routed right, so the left subtree of a node holds keys strictly
smaller than its own and the right subtree holds keys greater or equal.
Nothing is rebalanced: insertion order decides the shape.

Typical usage
~~~~~~~~~~~~~
>>> from binary_search_tree import tree_insert, search, tree_successor, delete
>>> root = None
>>> for k in (5, 3, 8, 1, 4, 7, 9):
...     root = tree_insert(root, k)
>>> tree_successor(search(root, 4)).key
5
>>> root = delete(root, 5)
>>> root.key
7
>>> search(root, 5) is None
True
"""

from __future__ import annotations

import logging
import weakref
from typing import (
    Generator,
    Iterable,
    List,
    Optional,
    Tuple,
)

logger = logging.getLogger(__name__)


class InvariantViolation(RuntimeError):
    """The tree structure is corrupt (stale back-reference, missing key...)."""


def _violation(message: str) -> None:
    logger.error(f"BST invariant violated: {message}")
    raise InvariantViolation(message)


# ----------------------------------------------------------------------
#  Node
# ----------------------------------------------------------------------
class BstNode:
    """
    A tree node. ``left`` and ``right`` own their subtrees; ``parent`` is a
    weak back-reference that is resolved on every access.

    A node whose ``key`` is ``None`` is an empty placeholder and must never
    take part in comparisons.
    """

    __slots__ = ("key", "left", "right", "_parent", "__weakref__")

    def __init__(self, key: Optional[int] = None, parent: Optional[BstNode] = None) -> None:
        self.key = key
        self.left: Optional[BstNode] = None
        self.right: Optional[BstNode] = None
        self._parent: Optional[weakref.ref] = None
        self.parent = parent

    @classmethod
    def new_with_parent(cls, parent: BstNode, key: int) -> BstNode:
        """
        Create a node whose back-reference already points at *parent*.
        The parent's ``left`` / ``right`` links are left untouched.
        """
        return cls(key, parent)

    @property
    def parent(self) -> Optional[BstNode]:
        if self._parent is None:
            return None
        node = self._parent()
        if node is None:
            _violation(f"parent of {self!r} no longer exists")
        return node

    @parent.setter
    def parent(self, node: Optional[BstNode]) -> None:
        self._parent = weakref.ref(node) if node is not None else None

    def is_root(self) -> bool:
        return self._parent is None

    def add_left_child(self, key: int) -> BstNode:
        """Attach a new left leaf holding *key*; raises ValueError if occupied."""
        if self.left is not None:
            raise ValueError(f"{self!r} already has a left child")
        self.left = BstNode.new_with_parent(self, key)
        return self.left

    def add_right_child(self, key: int) -> BstNode:
        """Attach a new right leaf holding *key*; raises ValueError if occupied."""
        if self.right is not None:
            raise ValueError(f"{self!r} already has a right child")
        self.right = BstNode.new_with_parent(self, key)
        return self.right

    def detached_copy(self) -> BstNode:
        """
        Return a new node with the same key, parent and children as this one.

        The copy is not owned by anybody: the parent still links to the
        original and the children's back-references still point at it.
        """
        copy = BstNode(self.key)
        copy._parent = self._parent
        copy.left = self.left
        copy.right = self.right
        return copy

    def __repr__(self) -> str:
        return f"BstNode({self.key!r})"


def _key_of(node: BstNode) -> int:
    if node.key is None:
        _violation(f"structural node {node!r} has no key")
    return node.key  # type: ignore[return-value]


# ----------------------------------------------------------------------
#  Queries
# ----------------------------------------------------------------------
def search(node: Optional[BstNode], value: int) -> Optional[BstNode]:
    """Return the first node holding *value* below *node*, or ``None``."""
    while node is not None:
        key = _key_of(node)
        if value == key:
            return node
        # value < key never continues into the right subtree: every key
        # there is >= key, so it cannot match.
        node = node.left if value < key else node.right
    return None


def minimum(node: Optional[BstNode]) -> BstNode:
    """Return the node with the smallest key in the subtree rooted at *node*."""
    if node is None:
        raise ValueError("minimum of an empty tree")
    while node.left is not None:
        node = node.left
    return node


def maximum(node: Optional[BstNode]) -> BstNode:
    """Return the node with the largest key in the subtree rooted at *node*."""
    if node is None:
        raise ValueError("maximum of an empty tree")
    while node.right is not None:
        node = node.right
    return node


def get_root(node: Optional[BstNode]) -> BstNode:
    """Follow back-references up to the node that has no parent."""
    if node is None:
        raise ValueError("root of an empty tree")
    parent = node.parent
    while parent is not None:
        node, parent = parent, parent.parent
    return node


def inorder(node: Optional[BstNode]) -> Generator[BstNode, None, None]:
    """Yield the nodes below *node* in ascending key order."""
    stack: List[BstNode] = []
    while stack or node is not None:
        while node is not None:
            stack.append(node)
            node = node.left
        node = stack.pop()
        yield node
        node = node.right


# ----------------------------------------------------------------------
#  Successor / predecessor
# ----------------------------------------------------------------------
def tree_successor(node: BstNode) -> Optional[BstNode]:
    """
    Return the node that follows *node* in in-order sequence, or ``None``
    when *node* is the last one.

    Ancestors are matched by identity. Matching by key would give the same
    answer on a well-formed tree (a right child never shares its key with its
    parent's left child) but not on a corrupted one.
    """
    if node.right is not None:
        return minimum(node.right)

    child, ancestor = node, node.parent
    while ancestor is not None:
        if ancestor.left is child:
            return ancestor
        if ancestor.right is not child:
            _violation(f"{ancestor!r} does not link back to its child {child!r}")
        child, ancestor = ancestor, ancestor.parent
    return None


def tree_predecessor(node: BstNode) -> Optional[BstNode]:
    """Mirror image of `tree_successor`."""
    if node.left is not None:
        return maximum(node.left)

    child, ancestor = node, node.parent
    while ancestor is not None:
        if ancestor.right is child:
            return ancestor
        if ancestor.left is not child:
            _violation(f"{ancestor!r} does not link back to its child {child!r}")
        child, ancestor = ancestor, ancestor.parent
    return None


# ----------------------------------------------------------------------
#  Mutation
# ----------------------------------------------------------------------
def tree_insert(root: Optional[BstNode], value: int) -> BstNode:
    """
    Insert *value* as a new leaf and return the root of the tree.

    An empty tree (``root is None``) gets the new node as its root; callers
    must keep the returned handle, e.g. ``root = tree_insert(root, 3)``.
    """
    new_node = BstNode(value)
    if root is None:
        logger.debug(f"insert {value}: new root")
        return new_node

    current = root
    while True:
        if value < _key_of(current):
            if current.left is None:
                current.left = new_node
                break
            current = current.left
        else:
            if current.right is None:
                current.right = new_node
                break
            current = current.right

    new_node.parent = current
    logger.debug(f"insert {value}: attached under {current!r}")
    return root


def transplant(u: BstNode, v: Optional[BstNode]) -> Optional[BstNode]:
    """
    Put subtree *v* where *u* hangs from its parent.

    Returns *v* when *u* was the root (the caller must adopt it as the new
    root), ``None`` otherwise. *u* itself is not modified.
    """
    parent = u.parent
    if parent is not None:
        if parent.left is u:
            parent.left = v
        elif parent.right is u:
            parent.right = v
        else:
            _violation(f"{parent!r} does not link back to its child {u!r}")

    if v is not None:
        v.parent = parent

    return v if parent is None else None


def delete_node(root: BstNode, node: BstNode) -> Optional[BstNode]:
    """
    Unlink *node* from the tree rooted at *root* and return the new root
    (``None`` once the tree is empty). The removed node is left detached.
    """
    if node.left is None:
        replacement = node.right
        transplant(node, replacement)
    elif node.right is None:
        replacement = node.left
        transplant(node, replacement)
    else:
        successor = minimum(node.right)
        if successor is not node.right:
            transplant(successor, successor.right)
            successor.right = node.right
            successor.right.parent = successor
        successor.left = node.left
        successor.left.parent = successor
        transplant(node, successor)
        replacement = successor

    node.left = node.right = None
    node.parent = None
    logger.debug(f"delete {node.key}: replaced by {replacement!r}")

    return replacement if node is root else root


def delete(root: Optional[BstNode], key: int) -> Optional[BstNode]:
    """
    Remove one node holding *key* and return the root of the tree.

    The returned root differs from *root* when the root itself was removed;
    a missing key leaves the tree untouched and returns *root*.
    """
    node = search(root, key)
    if node is None:
        return root
    return delete_node(root, node)  # type: ignore[arg-type]


# ----------------------------------------------------------------------
#  Validation – useful for debugging
# ----------------------------------------------------------------------
def validate(root: Optional[BstNode]) -> int:
    """
    Check the ordering and back-reference invariants of the whole tree.
    Raises ``AssertionError`` on the first violation, returns the node count.
    """
    if root is None:
        return 0
    assert root.parent is None, "Root has a parent"

    count = 0
    # (node, inclusive lower bound, exclusive upper bound)
    stack: List[Tuple[BstNode, Optional[int], Optional[int]]] = [(root, None, None)]
    while stack:
        node, low, high = stack.pop()
        count += 1
        assert node.key is not None, "Structural node without a key"
        if low is not None:
            assert node.key >= low, "BST property violated (right subtree smaller)"
        if high is not None:
            assert node.key < high, "BST property violated (left subtree not smaller)"

        for child in (node.left, node.right):
            if child is not None:
                assert child.parent is node, f"Back-reference of {child!r} is wrong"
        if node.left is not None:
            stack.append((node.left, low, node.key))
        if node.right is not None:
            stack.append((node.right, node.key, high))
    return count


# ----------------------------------------------------------------------
#  Container
# ----------------------------------------------------------------------
class BinarySearchTree:
    """
    Keeps the strong reference to the root and the element count, and adopts
    the new root returned by every insert and delete.

    Parameters
    ----------
    items : iterable of int, optional
        Keys inserted one by one, in order.

    validate_on_mutation : bool, default ``False``
        Run `validate` after every insert and delete.
    """

    __slots__ = ("_root", "_size", "_validate_on_mutation")

    def __init__(
        self,
        items: Optional[Iterable[int]] = None,
        *,
        validate_on_mutation: bool = False,
    ) -> None:
        self._root: Optional[BstNode] = None
        self._size = 0
        self._validate_on_mutation = validate_on_mutation

        if items is not None:
            for key in items:
                self.insert(key)

    @property
    def root(self) -> Optional[BstNode]:
        return self._root

    def insert(self, key: int) -> None:
        self._root = tree_insert(self._root, key)
        self._size += 1
        if self._validate_on_mutation:
            self.validate()

    def delete(self, key: int) -> None:
        """Remove one occurrence of *key*; KeyError if it is not stored."""
        node = search(self._root, key)
        if node is None:
            raise KeyError(key)
        self._root = delete_node(self._root, node)  # type: ignore[arg-type]
        self._size -= 1
        if self._validate_on_mutation:
            self.validate()

    def search(self, key: int) -> Optional[BstNode]:
        return search(self._root, key)

    def __contains__(self, key: object) -> bool:
        return search(self._root, key) is not None  # type: ignore[arg-type]

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Generator[int, None, None]:
        """Yield keys in ascending order."""
        for node in inorder(self._root):
            yield node.key  # type: ignore[misc]

    def keys(self) -> List[int]:
        return list(self)

    def min_key(self) -> int:
        if self._root is None:
            raise ValueError("Tree is empty")
        return minimum(self._root).key  # type: ignore[return-value]

    def max_key(self) -> int:
        if self._root is None:
            raise ValueError("Tree is empty")
        return maximum(self._root).key  # type: ignore[return-value]

    def successor(self, key: int) -> int:
        """Return the key that follows *key*; raise KeyError if none."""
        node = search(self._root, key)
        if node is None:
            raise KeyError(key)
        nxt = tree_successor(node)
        if nxt is None:
            raise KeyError(f"No successor for {key}")
        return nxt.key  # type: ignore[return-value]

    def predecessor(self, key: int) -> int:
        """Return the key that precedes *key*; raise KeyError if none."""
        node = search(self._root, key)
        if node is None:
            raise KeyError(key)
        prev = tree_predecessor(node)
        if prev is None:
            raise KeyError(f"No predecessor for {key}")
        return prev.key  # type: ignore[return-value]

    def validate(self) -> None:
        """Assert the tree invariants and that the stored size is accurate."""
        assert validate(self._root) == self._size, "Size mismatch"

    def __repr__(self) -> str:
        return f"BinarySearchTree([{', '.join(map(repr, self))}])"
