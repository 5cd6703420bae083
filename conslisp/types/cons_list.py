"""Lisp lists as chains of shared, individually locked cons cells.

A `List` is only a handle on a head cell (or on nothing, for NIL). Cells are
shared between every list that reaches them: `cons` allocates a new head that
points at the existing chain, `cdr` hands out a handle on the next cell, and
nothing is ever copied. Mutating a cell through `set_car`/`set_cdr` is
therefore visible through every alias.

Each cell carries its own lock. Every access holds exactly one cell lock for
the duration of that single read or write, so two threads walking or
mutating the same chain never deadlock, but a walk is not isolated from
concurrent mutation.

Cyclic chains can be built with `set_cdr`. They are not detected: iterating,
measuring or printing one does not terminate.
"""

from __future__ import annotations

import threading
from typing import Iterable, Iterator, Optional

from conslisp import LispValue
from conslisp.errors import LispEmptyListError, LispTypeError


def values_equal(a: LispValue, b: LispValue) -> bool:
    """Structural equality over runtime values.

    Booleans are their own variant and never equal a number. Lists compare
    shallowly (see `List.__eq__`).
    """
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    return a == b


class ConsCell:
    """One link of a list: an item (car) and the following cell (cdr)."""

    __slots__ = ("car", "cdr", "lock")

    def __init__(self, car: LispValue, cdr: Optional[ConsCell] = None):
        self.car: LispValue = car
        self.cdr: Optional[ConsCell] = cdr
        self.lock = threading.Lock()

    def __repr__(self) -> str:
        return f"<ConsCell car={self.car!r} id={id(self)}>"


class ConsIterator:
    """Lazy walk over a cell chain, starting from a captured head."""

    __slots__ = ("_cell",)

    def __init__(self, cell: Optional[ConsCell]):
        self._cell = cell

    def __iter__(self) -> ConsIterator:
        return self

    def __next__(self) -> LispValue:
        cell = self._cell
        if cell is None:
            raise StopIteration
        with cell.lock:
            value = cell.car
            self._cell = cell.cdr
        return value


class List:
    """A Lisp list: a reference to a head cell, or none for NIL."""

    __slots__ = ("head",)

    def __init__(self, head: Optional[ConsCell] = None):
        self.head: Optional[ConsCell] = head

    @classmethod
    def from_iterable(cls, values: Iterable[LispValue]) -> List:
        """Build a fresh chain holding `values` in order."""
        head: Optional[ConsCell] = None
        tail: Optional[ConsCell] = None
        for value in values:
            cell = ConsCell(value)
            if tail is None:
                head = cell
            else:
                # The chain is not shared until we return it
                tail.cdr = cell
            tail = cell
        return cls(head) if head is not None else NIL

    # --- Core operations ---
    def cons(self, value: LispValue) -> List:
        return List(ConsCell(value, self.head))

    def car(self) -> LispValue:
        head = self.head
        if head is None:
            raise LispEmptyListError("Attempted to apply car on nil")
        with head.lock:
            return head.car

    def cdr(self) -> List:
        head = self.head
        if head is None:
            return NIL
        with head.lock:
            rest = head.cdr
        return List(rest) if rest is not None else NIL

    # --- Destructive operations ---
    def set_car(self, value: LispValue) -> None:
        head = self.head
        if head is None:
            raise LispEmptyListError("Attempted to set the car of nil")
        with head.lock:
            head.car = value

    def set_cdr(self, tail: List) -> None:
        head = self.head
        if head is None:
            raise LispEmptyListError("Attempted to set the cdr of nil")
        if not isinstance(tail, List):
            raise LispTypeError(f"The cdr of a list must be a list, got {tail!r}")
        with head.lock:
            head.cdr = tail.head

    def is_same(self, other: List) -> bool:
        """Identity: both handles point at the same head cell (or are both NIL)."""
        return isinstance(other, List) and self.head is other.head

    # --- Python protocols ---
    def __iter__(self) -> Iterator[LispValue]:
        return ConsIterator(self.head)

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __bool__(self) -> bool:
        return self.head is not None

    def __eq__(self, other: object) -> bool:
        # Shallow on purpose: only the head items are compared, tails are
        # ignored. deep_equal in conslisp.types.value walks whole chains.
        if not isinstance(other, List):
            return NotImplemented
        if self.head is None or other.head is None:
            return self.head is None and other.head is None
        if self.head is other.head:
            return True
        # Take one cell lock at a time
        return values_equal(self.car(), other.car())

    def __hash__(self) -> int:
        if self.head is None:
            return hash(("list", None))
        return hash(("list", self.car()))

    def __str__(self) -> str:
        if self.head is None:
            return "NIL"
        # Lazy import to avoid circular imports
        from conslisp.types.value import to_string

        return "(" + " ".join(to_string(v) for v in self) + ")"

    def __repr__(self) -> str:
        return str(self)


NIL = List()


def cons(value: LispValue, lst: List) -> List:
    return lst.cons(value)


def car(lst: List) -> LispValue:
    return lst.car()


def cdr(lst: List) -> List:
    return lst.cdr()
