import pytest

from minilisp.evaluation.free_vars import free_identifiers

from conftest import read_one


@pytest.mark.parametrize(
    "body,expected",
    [
        ("42", set()),
        ('"text"', set()),
        ("x", {"x"}),
        ("(+ x y)", {"x", "y"}),
        ("(if a (car b) (cons c d))", {"a", "b", "c", "d"}),
        ("(f (lambda (z) (+ z w)))", {"f"}),
        ("(g 'h (quote i))", {"g"}),
        ("`(a ,b (c ,(d e)))", {"b", "d", "e"}),
        ("(quasiquote (a (unquote b)))", {"b"}),
        ("`(lambda (x) ,y)", {"y"}),
        ("`(a unquote b)", {"b"}),
        ("`(a (c unquote d))", {"d"}),
        ("`(unquote a b)", set()),
        ("(quasiquote (unquote a))", {"a"}),
        ("(f . g)", {"f", "g"}),
        ("(def target value)", {"target", "value"}),
        ("(print-debug (eval (defmacro m (p) p)))", {"m", "p"}),
    ]
)
def test_free_identifiers(body, expected):
    assert free_identifiers(read_one(body)) == expected


def test_ignored_names_are_not_free():
    body = read_one("(f x (g y))")
    assert free_identifiers(body, {"x", "f"}) == {"g", "y"}


def test_reserved_names_are_never_free():
    body = read_one("(+ (- 1 2) (* 3 (/ 4 (= 5 (car (cdr (quote 6)))))))")
    assert free_identifiers(body) == set()
