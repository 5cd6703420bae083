import threading

import pytest
from hypothesis import given, strategies as st

from conslisp.errors import LispEmptyListError, LispTypeError
from conslisp.types.cons_list import List, NIL, cons, car, cdr
from conslisp.types.symbol import Symbol
from conslisp.types.value import deep_equal, values_equal

# Atoms the reader can produce
atoms = st.one_of(
    st.integers(),
    st.floats(allow_nan=False),
    st.booleans(),
    st.text(max_size=10),
    st.text(alphabet="abcdefxyz-?!", min_size=1, max_size=8).map(Symbol),
)
lists = st.lists(atoms, max_size=8).map(List.from_iterable)


# -----------------------------------------------------
# cons / car / cdr
# -----------------------------------------------------

@given(atoms, lists)
def test_car_of_cons_is_the_value(value, tail):
    assert values_equal(car(cons(value, tail)), value)


@given(atoms, lists)
def test_cdr_of_cons_shares_the_original_chain(value, tail):
    rest = cdr(cons(value, tail))
    assert rest.head is tail.head
    assert deep_equal(rest, tail)


def test_car_of_nil_fails():
    with pytest.raises(LispEmptyListError):
        NIL.car()
    with pytest.raises(LispEmptyListError):
        car(List())


def test_cdr_of_nil_is_nil():
    assert not cdr(NIL)
    assert cdr(NIL) == NIL
    assert not cdr(cons(1, NIL))


def test_cons_does_not_mutate_the_tail():
    tail = List.from_iterable([2, 3])
    a = cons(1, tail)
    b = cons(0, tail)
    assert list(tail) == [2, 3]
    assert list(a) == [1, 2, 3]
    assert list(b) == [0, 2, 3]
    assert a.cdr().head is b.cdr().head


def test_iteration_order_and_tail():
    xs = cons(1, cons(2, NIL))
    assert list(xs) == [1, 2]
    assert list(xs.cdr()) == [2]


def test_iteration_restarts_from_the_handle():
    xs = List.from_iterable([1, 2, 3])
    assert list(xs) == [1, 2, 3]
    assert list(xs) == [1, 2, 3]
    assert len(xs) == 3


def test_from_iterable_empty_is_nil():
    assert List.from_iterable([]).head is None
    assert len(NIL) == 0
    assert not NIL


# -----------------------------------------------------
# Equality and hashing
# -----------------------------------------------------

def test_equality_is_shallow():
    a = List.from_iterable([1, 2, 3])
    b = List.from_iterable([1, 9, 9, 9])
    assert a == b
    assert not deep_equal(a, b)


def test_empty_and_nonempty_lists_differ():
    assert NIL == List()
    assert NIL != List.from_iterable([1])
    assert List.from_iterable([1]) != NIL


def test_boolean_heads_do_not_equal_numbers():
    assert List.from_iterable([True]) != List.from_iterable([1])
    assert List.from_iterable([1]) == List.from_iterable([1.0])


def test_list_is_not_equal_to_other_variants():
    assert List.from_iterable([1]) != 1
    assert NIL != False  # noqa: E712


@given(lists, lists)
def test_hash_is_consistent_with_equality(a, b):
    if a == b:
        assert hash(a) == hash(b)


def test_lists_usable_as_dict_keys():
    d = {List.from_iterable([1, 2]): "x"}
    assert d[List.from_iterable([1, 5])] == "x"


def test_is_same_compares_head_cells():
    xs = List.from_iterable([1, 2])
    assert xs.is_same(List(xs.head))
    assert not xs.is_same(List.from_iterable([1, 2]))
    assert NIL.is_same(List())


# -----------------------------------------------------
# Shared mutation
# -----------------------------------------------------

def test_set_cdr_is_visible_through_aliases():
    shared = List.from_iterable([2, 3])
    a = cons(1, shared)
    b = cons(10, shared)
    shared.set_cdr(List.from_iterable([30, 40]))
    assert list(a) == [1, 2, 30, 40]
    assert list(b) == [10, 2, 30, 40]


def test_set_car_is_visible_through_aliases():
    shared = List.from_iterable([2, 3])
    a = cons(1, shared)
    shared.set_car(Symbol("two"))
    assert list(a) == [1, Symbol("two"), 3]


def test_iteration_observes_mutation_after_start():
    xs = List.from_iterable([1, 2, 3])
    it = iter(xs)
    assert next(it) == 1
    xs.cdr().set_cdr(List.from_iterable([99]))
    assert list(it) == [2, 99]


def test_mutating_nil_fails():
    with pytest.raises(LispEmptyListError):
        NIL.set_car(1)
    with pytest.raises(LispEmptyListError):
        NIL.set_cdr(NIL)


def test_set_cdr_requires_a_list():
    with pytest.raises(LispTypeError):
        List.from_iterable([1]).set_cdr(2)


def test_concurrent_cons_and_walk():
    base = List.from_iterable(range(100))
    results = []

    def worker(n):
        xs = base
        for i in range(50):
            xs = cons(i, xs)
        results.append(len(xs))
        xs.set_car(n)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert results == [150] * 8
    assert list(base) == list(range(100))


# -----------------------------------------------------
# Rendering
# -----------------------------------------------------

@pytest.mark.parametrize(
    "items, expected",
    [
        ([], "NIL"),
        ([1, 2, 3], "(1 2 3)"),
        ([Symbol("a"), "s", True, False, 2.5], '(a "s" T F 2.5)'),
        ([List.from_iterable([1]), NIL], "((1) NIL)"),
    ],
)
def test_rendering(items, expected):
    assert str(List.from_iterable(items)) == expected
