"""Runtime values for Bilisp.

Every datum the evaluator touches is one of six variants:

    - Integer      -> signed 64-bit integer
    - Float        -> IEEE double
    - Symbol       -> operator / function name
    - SExpression  -> evaluable list, reduced by the evaluator
    - QExpression  -> quoted list, never reduced
    - Error        -> terminal result, propagated unchanged

Ownership is strictly tree-shaped: a list value owns its children and no
value is reachable from two places. Values are released explicitly with
``release()``; a process-wide counter tracks values that have been built but
not yet released, so callers can check that a tree was consumed completely.
"""

from __future__ import annotations

import sys
from typing import Iterable, Iterator

from bilisp.errors import DoubleReleaseError, ErrorKind

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


def wrap_i64(n: int) -> int:
    """Reduce ``n`` to a signed 64-bit integer, two's complement."""
    n &= (1 << 64) - 1
    return n - (1 << 64) if n > INT64_MAX else n


class AllocationCounter:
    __slots__ = ("created", "released")

    def __init__(self):
        self.created = 0
        self.released = 0

    @property
    def live(self) -> int:
        return self.created - self.released

    def reset(self) -> None:
        self.created = 0
        self.released = 0

    def __repr__(self):
        return f"AllocationCounter(live={self.live}, created={self.created})"


allocations = AllocationCounter()


class Value:
    __slots__ = ("_released",)

    def __init__(self):
        self._released = False
        allocations.created += 1

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> None:
        """Release this value and everything it owns, children first.

        Walks the tree with an explicit stack so very deep trees do not hit
        the interpreter's recursion limit.
        """
        if self._released:
            raise DoubleReleaseError(f"{self!r} has already been released")
        order: list[Value] = []
        stack: list[Value] = [self]
        while stack:
            node = stack.pop()
            order.append(node)
            if isinstance(node, ListValue):
                stack.extend(node.cells)
        for node in reversed(order):
            node._mark_released()

    def _mark_released(self) -> None:
        if self._released:
            raise DoubleReleaseError(f"{self!r} is owned twice")
        self._released = True
        allocations.released += 1

    def __str__(self):
        return render(self)


class Integer(Value):
    __slots__ = ("value",)

    def __init__(self, value: int):
        super().__init__()
        self.value = value

    def __eq__(self, other) -> bool:
        return isinstance(other, Integer) and self.value == other.value

    def __repr__(self):
        return f"Integer({self.value})"


class Float(Value):
    __slots__ = ("value",)

    def __init__(self, value: float):
        super().__init__()
        self.value = float(value)

    def __eq__(self, other) -> bool:
        return isinstance(other, Float) and self.value == other.value

    def __repr__(self):
        return f"Float({self.value!r})"


class Symbol(Value):
    __slots__ = ("name",)

    def __init__(self, name: str):
        super().__init__()
        # Intern to ensure fast equality for dispatch
        self.name = sys.intern(name)

    def __eq__(self, other) -> bool:
        return isinstance(other, Symbol) and self.name == other.name

    def __repr__(self):
        return f"Symbol({self.name!r})"


class Error(Value):
    __slots__ = ("message", "kind")

    def __init__(self, message: str, kind: ErrorKind | None = None):
        super().__init__()
        self.message = message
        self.kind = kind

    def __eq__(self, other) -> bool:
        return isinstance(other, Error) and self.message == other.message

    def __repr__(self):
        return f"Error({self.message!r})"


class ListValue(Value):
    """Ordered container that exclusively owns its children."""

    __slots__ = ("cells",)

    def __init__(self, cells: Iterable[Value] = ()):
        super().__init__()
        self.cells: list[Value] = list(cells)

    def _mark_released(self) -> None:
        super()._mark_released()
        self.cells = []

    def add(self, v: Value) -> ListValue:
        self.cells.append(v)
        return self

    def pop(self, i: int = 0) -> Value:
        """Remove child ``i``; the caller now owns it."""
        return self.cells.pop(i)

    def take(self, i: int) -> Value:
        """Keep child ``i`` and release this list with the rest of its children."""
        v = self.pop(i)
        self.release()
        return v

    def detach(self) -> list[Value]:
        """Hand every child to the caller and release only the container."""
        cells, self.cells = self.cells, []
        self.release()
        return cells

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.cells)

    def __getitem__(self, i: int) -> Value:
        return self.cells[i]

    def __eq__(self, other) -> bool:
        return type(self) is type(other) and self.cells == other.cells

    def __repr__(self):
        return f"{type(self).__name__}({self.cells!r})"


class SExpression(ListValue):
    __slots__ = ()


class QExpression(ListValue):
    __slots__ = ()


def render(v: Value) -> str:
    """Canonical text of a value: ``3``, ``0.500000``, ``(+ 1 2)``, ``{1 2}``."""
    if isinstance(v, Integer):
        return str(v.value)
    if isinstance(v, Float):
        return f"{v.value:f}"
    if isinstance(v, Symbol):
        return v.name
    if isinstance(v, Error):
        return v.message
    if isinstance(v, SExpression):
        return "(" + " ".join(render(c) for c in v.cells) + ")"
    if isinstance(v, QExpression):
        return "{" + " ".join(render(c) for c in v.cells) + "}"
    raise TypeError(f"Cannot render {v!r}")
