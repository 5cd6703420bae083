import threading

import pytest

from conslisp.errors import LispTypeError, LispUnboundSymbolError
from conslisp.types.environment import Environment
from conslisp.types.symbol import Symbol

X = Symbol("x")
Y = Symbol("y")


@pytest.fixture
def root():
    e = Environment()
    e.define(X, 1)
    return e


def test_lookup_walks_the_parent_chain(root):
    grandchild = root.child().child()
    assert grandchild.lookup(X) == 1


def test_lookup_unbound_names_the_symbol(root):
    with pytest.raises(LispUnboundSymbolError) as exc:
        root.child().lookup(Symbol("missing"))
    assert "missing" in str(exc.value)
    assert exc.value.symbol == Symbol("missing")


def test_define_in_child_is_invisible_to_parent(root):
    child = root.child()
    grandchild = child.child()
    child.define(Y, 2)
    assert child.lookup(Y) == 2
    assert grandchild.lookup(Y) == 2
    with pytest.raises(LispUnboundSymbolError):
        root.lookup(Y)


def test_define_shadows_without_touching_ancestor(root):
    child = root.child()
    child.define(X, 100)
    assert child.lookup(X) == 100
    assert root.lookup(X) == 1


def test_set_mutates_the_owning_ancestor(root):
    child = root.child()
    sibling = root.child()
    child.child().set(X, 2)
    assert root.lookup(X) == 2
    assert sibling.lookup(X) == 2
    assert X not in child.local_bindings()


def test_set_unbound_fails(root):
    with pytest.raises(LispUnboundSymbolError) as exc:
        root.child().set(Y, 5)
    assert "y" in str(exc.value)


def test_define_requires_a_symbol(root):
    with pytest.raises(LispTypeError):
        root.define("x", 1)
    with pytest.raises(LispTypeError):
        root.update({"x": 1})


def test_find_and_is_bound(root):
    child = root.child()
    assert child.find(X) is root
    assert child.is_bound(X)
    assert child.find(Y) is None
    assert not child.is_bound(Y)


def test_local_bindings_is_a_copy(root):
    bindings = root.local_bindings()
    bindings[Y] = 3
    assert not root.is_bound(Y)


def test_str_and_repr(root):
    child = root.child()
    child.define(Y, 2)
    assert str(child) == "{y} -> ..."
    assert repr(child) == "<Environment chain: {y} -> {x}>"


def test_concurrent_defines_and_sets():
    root = Environment()
    counter = Symbol("counter")
    root.define(counter, 0)
    lock = threading.Lock()

    def worker(n):
        frame = root.child()
        for i in range(200):
            frame.define(Symbol(f"v{n}-{i}"), i)
            # read-modify-write across two operations is not atomic on its own
            with lock:
                frame.set(counter, frame.lookup(counter) + 1)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert root.lookup(counter) == 1600
    assert root.local_bindings() == {counter: 1600}
