import pytest

from conslisp.builtin import env_builtin
from conslisp.errors import LispArityError, LispEmptyListError, LispTypeError
from conslisp.types.cons_list import List, NIL
from conslisp.types.environment import Environment
from conslisp.types.primitive import Primitive
from conslisp.types.symbol import Symbol


def values(xs):
    return list(xs)


def test_default_env_is_fresh_each_time():
    a = env_builtin.default_env()
    b = env_builtin.default_env()
    a.define(Symbol("only-in-a"), 1)
    assert not b.is_bound(Symbol("only-in-a"))


def test_primitives_are_named(env):
    car = env.lookup(Symbol("car"))
    assert isinstance(car, Primitive)
    assert str(car) == "<primitive car>"


def test_call_primitive_directly(env):
    add = env.lookup(Symbol("+"))
    assert add(env, [1, 2, 3]) == 6


@pytest.mark.parametrize(
    "code, expected",
    [
        ("(+)", 0),
        ("(+ 1 2.5)", 3.5),
        ("(- 5)", -5),
        ("(- 10 1 2)", 7),
        ("(*)", 1),
        ("(* 2 3 4)", 24),
        ("(/ 8 2)", 4),
        ("(/ 7 2)", 3.5),
        ("(/ 4)", 0.25),
        ("(truncate 7 2)", 3),
        ("(truncate -7 2)", -3),
        ("(truncate 10000000000000000000001 1)", 10000000000000000000001),
        ("(truncate -10000000000000000000001 10)", -1000000000000000000000),
        ("(mod 7 3)", 1),
        ("(== 1 1 1)", True),
        ("(== 1 2)", False),
        ("(== 1 1.0)", True),
        ("(== T 1)", False),
        ("(!= 1 2)", True),
        ("(< 1 2 3)", True),
        ("(< 1 3 2)", False),
        ("(>= 3 3 1)", True),
        ("(not nil)", True),
        ("(not 0)", False),
        ("(length '(1 2 3))", 3),
        ("(length nil)", 0),
        ("(nth 1 '(a b c))", Symbol("b")),
        ("(null? nil)", True),
        ("(null? '(1))", False),
        ("(number? 1.5)", True),
        ("(number? T)", False),
        ("(integer? 2)", True),
        ("(float? 2)", False),
        ("(string? \"s\")", True),
        ("(symbol? 'a)", True),
        ("(boolean? F)", True),
        ("(list? nil)", True),
        ("(procedure? car)", True),
        ("(procedure? (lambda () 1))", True),
        ("(procedure? 'car)", False),
        ("(eval '(+ 1 2))", 3),
        ("(apply + '(1 2 3))", 6),
        ("(apply (lambda (a b) (- a b)) '(5 3))", 2),
    ],
)
def test_primitive_results(interp, code, expected):
    result = interp.eval(code)
    assert type(result) is type(expected)
    assert result == expected


@pytest.mark.parametrize(
    "code, expected",
    [
        ("(list 1 2 3)", [1, 2, 3]),
        ("(list)", []),
        ("(reverse '(1 2 3))", [3, 2, 1]),
        ("(append '(1 2) '(3) '(4 5))", [1, 2, 3, 4, 5]),
        ("(append)", []),
        ("(map (lambda (x) (* x x)) '(1 2 3))", [1, 4, 9]),
        ("(filter (lambda (x) (> x 1)) '(1 2 3))", [2, 3]),
        ("(range 0 4)", [0, 1, 2, 3]),
        ("(sort '(3 1 2))", [1, 2, 3]),
        ("(sort '(3 1 2) >)", [3, 2, 1]),
        ("(map car '((1 2) (3 4)))", [1, 3]),
    ],
)
def test_list_primitives(interp, code, expected):
    assert values(interp.eval(code)) == expected


def test_append_shares_last_list(interp):
    interp.eval("(define tail '(3 4)) (define joined (append '(1 2) tail))")
    assert interp.eval("(eq? (cdr (cdr joined)) tail)") is True


def test_eq_and_equal(interp):
    interp.eval("(define xs '(1 2 3))")
    assert interp.eval("(eq? xs xs)") is True
    assert interp.eval("(eq? xs '(1 2 3))") is False
    assert interp.eval("(equal? xs '(1 2 3))") is True
    assert interp.eval("(equal? xs '(1 2 4))") is False
    assert interp.eval("(== xs '(1 9 9))") is True
    assert interp.eval("(eq? 'a 'a)") is True


def test_set_cdr_shares_structure(interp):
    interp.eval(
        """
        (define shared '(2 3))
        (define a (cons 1 shared))
        (define b (cons 10 shared))
        (set-cdr! shared '(30))
        """
    )
    assert values(interp.eval("a")) == [1, 2, 30]
    assert values(interp.eval("b")) == [10, 2, 30]


def test_set_car(interp):
    interp.eval("(define xs (list 1 2)) (define ys (cons 0 xs))")
    assert interp.eval("(set-car! xs 'one)") == Symbol("one")
    assert values(interp.eval("ys")) == [0, Symbol("one"), 2]


def test_print_outputs_raw_strings(interp, capsys):
    ret = interp.eval('(print "alpha" 42 \'beta T \'(1 "x"))')
    out = capsys.readouterr().out
    assert out == 'alpha 42 beta T (1 "x")\n'
    assert values(ret) == [1, "x"]


def test_print_no_args_returns_nil(interp, capsys):
    assert interp.eval("(print)") == NIL
    assert capsys.readouterr().out == "\n"


@pytest.mark.parametrize(
    "code, error",
    [
        ("(car nil)", LispEmptyListError),
        ("(car 1)", LispTypeError),
        ("(cdr)", LispArityError),
        ("(cons 1 2)", LispTypeError),
        ("(+ 1 \"a\")", LispTypeError),
        ("(+ 1 T)", LispTypeError),
        ("(/ 1 0)", LispTypeError),
        ("(-)", LispArityError),
        ("(mod 1.5 2)", LispTypeError),
        ("(not)", LispArityError),
        ("(set-cdr! nil nil)", LispEmptyListError),
        ("(map 1 '(1))", LispTypeError),
        ("(sort '(1 \"a\"))", LispTypeError),
        ("(sort)", LispArityError),
        ("(range 0 1.5)", LispTypeError),
        ("(apply car 1)", LispTypeError),
    ],
)
def test_primitive_errors(interp, code, error):
    with pytest.raises(error):
        interp.eval(code)


def test_register_into_existing_env():
    env = Environment()
    env_builtin.register(env)
    assert env.lookup(Symbol("nil")) == NIL
    assert isinstance(env.lookup(Symbol("cons")), Primitive)
    assert env.lookup(Symbol("cdr"))(env, [List.from_iterable([1, 2])]) == List.from_iterable([2])
