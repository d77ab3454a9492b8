import pytest

from minilisp import errors
from minilisp.evaluation.evaluator import evaluate_expression, evaluate_program
from minilisp.reader.parser import read_all
from minilisp.types.context import RESERVED_IDENTS
from minilisp.types.expr import Cons, Unquote, from_list
from minilisp.types.nil import Nil
from minilisp.types.symbol import Ident, T


# -----------------------------------------------------
# Atoms
# -----------------------------------------------------

@pytest.mark.parametrize("literal", [1, -7, 3.14, "hello", Nil])
def test_self_evaluating_literals(context, literal):
    first = evaluate_expression(context, literal)
    second = evaluate_expression(first, first.expr)
    assert first.expr == literal
    assert second.expr == literal
    assert not first.has_error and not second.has_error


def test_identifier_lookup(run):
    assert run("(def x 42) x").expr == 42


def test_unbound_identifier(run):
    ctx = run("z")
    assert ctx.has_error
    assert isinstance(ctx.error, errors.UnboundIdentifier)
    assert ctx.expr is Nil


def test_quote_does_not_evaluate(run):
    ctx = run("(quote (1 2 3))")
    assert ctx.expr == from_list([1, 2, 3])

    # unbound identifiers inside quoted data are never looked up
    ctx = run("(quote (a b c))")
    assert not ctx.has_error
    assert ctx.expr == from_list([Ident("a"), Ident("b"), Ident("c")])
    assert run("'(+ 1 2)").expr == from_list([Ident("+"), 1, 2])


def test_bare_unquote_evaluates_to_itself(run):
    assert run(",x").expr == Unquote(Ident("x"))


# -----------------------------------------------------
# if
# -----------------------------------------------------

@pytest.mark.parametrize(
    "source,expected",
    [
        ("(if nil 1 2)", 2),
        ("(if 0 1 2)", 1),  # 0 is truthy
        ("(if '(1) 1 2)", 1),
        ("(if t 1 2)", 1),
        ('(if "" 1 2)', 1),
        ("(if (= 1 2) 1 2)", 2),
        ("(if nil undefined-thing 2)", 2),  # only the chosen branch is evaluated
    ]
)
def test_if(run, source, expected):
    ctx = run(source)
    assert not ctx.has_error
    assert ctx.expr == expected


@pytest.mark.parametrize(
    "source,error",
    [
        ("(if 1 2)", errors.TooFewArguments),
        ("(if 1 2 3 4)", errors.TooManyArguments),
        ("(if)", errors.TooFewArguments),
    ]
)
def test_if_malformed(run, source, error):
    ctx = run(source)
    assert isinstance(ctx.error, error)
    assert isinstance(ctx.error, errors.MalformedForm)
    assert ctx.expr is Nil


# -----------------------------------------------------
# def
# -----------------------------------------------------

def test_def_returns_and_binds_value(run):
    ctx = run("(def x (+ 2 3))")
    assert ctx.expr == 5
    assert ctx.env["x"] == 5


def test_def_shadows(run):
    assert run("(def x 1) (def x 2) x").expr == 2


@pytest.mark.parametrize(
    "source,error",
    [
        ("(def x)", errors.TooFewArguments),
        ("(def x 1 2)", errors.TooManyArguments),
        ("(def 1 2)", errors.MalformedForm),
        ('(def "x" 2)', errors.MalformedForm),
    ]
)
def test_def_malformed(run, source, error):
    assert isinstance(run(source).error, error)


@pytest.mark.parametrize("name", sorted(RESERVED_IDENTS))
def test_def_reserved_identifier(run, context, name):
    ctx = run(f"(def {name} 1)")
    assert isinstance(ctx.error, errors.ReservedIdentifier)
    assert ctx.expr is Nil
    assert ctx.env == context.env


# -----------------------------------------------------
# Pairs
# -----------------------------------------------------

@pytest.mark.parametrize(
    "x,y",
    [("1", "2"), ("'a", "'(b c)"), ('"s"', "2.5"), ("(+ 1 2)", "nil"), ("'(1)", "'(2)")]
)
def test_car_cdr_of_cons(run, x, y):
    assert run(f"(car (cons {x} {y}))").expr == run(x).expr
    assert run(f"(cdr (cons {x} {y}))").expr == run(y).expr


def test_cons_result_is_not_evaluated(run):
    ctx = run("(cons 'car '(1))")
    assert ctx.expr == Cons(Ident("car"), Cons(1, Nil))


@pytest.mark.parametrize(
    "source,error",
    [
        ("(car 1)", errors.TypeMismatch),
        ("(cdr nil)", errors.TypeMismatch),
        ("(car)", errors.TooFewArguments),
        ("(car '(1) '(2))", errors.TooManyArguments),
        ("(cons 1)", errors.TooFewArguments),
        ("(cons 1 2 3)", errors.TooManyArguments),
    ]
)
def test_pair_errors(run, source, error):
    assert isinstance(run(source).error, error)


# -----------------------------------------------------
# eval / print-debug
# -----------------------------------------------------

def test_eval_evaluates_twice(run):
    assert run("(eval '(+ 1 2))").expr == 3
    assert run("(eval (cons '+ '(1 2)))").expr == 3
    assert run("(def code '(* 2 21)) (eval code)").expr == 42


def test_eval_arity(run):
    assert isinstance(run("(eval)").error, errors.TooFewArguments)
    assert isinstance(run("(eval 1 2)").error, errors.TooManyArguments)


def test_print_debug_prints_and_returns_nil(run, capsys):
    ctx = run('(print-debug (+ 1 2)) ')
    assert capsys.readouterr().out == "3\n"
    assert ctx.expr is Nil
    assert not ctx.has_error

    run("(print-debug '(a \"b\"))")
    assert capsys.readouterr().out == '(a "b")\n'


def test_print_debug_arity(run, capsys):
    assert isinstance(run("(print-debug)").error, errors.TooFewArguments)
    assert capsys.readouterr().out == ""


# -----------------------------------------------------
# Application
# -----------------------------------------------------

@pytest.mark.parametrize("source", ["(1 2)", '("f" 1)', "(nil)", "(2.5)"])
def test_not_callable(run, source):
    assert isinstance(run(source).error, errors.NotCallable)


def test_identifier_bound_to_a_form_name(run):
    assert run("(def first 'car) (first '(1 2))").expr == 1
    assert run("(def plus '+) (def add 'plus) (add 2 3)").expr == 5


def test_identifier_bound_to_itself_is_not_callable(run):
    # t evaluates to t
    assert isinstance(run("(t 1)").error, errors.NotCallable)


# -----------------------------------------------------
# Error propagation
# -----------------------------------------------------

def test_first_diagnostic_survives(run):
    ctx = run("(+ 1 (car 5))")
    assert isinstance(ctx.error, errors.TypeMismatch)
    assert "car" in str(ctx.error)

    ctx = run("(+ 1 undefined)")
    assert isinstance(ctx.error, errors.UnboundIdentifier)

    ctx = run("(if (car 1) 1 2)")
    assert isinstance(ctx.error, errors.TypeMismatch)


def test_errors_are_logged(run, caplog):
    run("nowhere")
    assert "Lookup: variable nowhere not found in environment" in caplog.text


def test_program_continues_after_error(run):
    ctx = run("(def a 1) (car 5) (undefined) (def b 2) (+ a b)")
    assert not ctx.has_error
    assert ctx.expr == 3


def test_last_form_error_is_reported(run):
    ctx = run("(def a 1) (car a)")
    assert ctx.has_error
    assert ctx.env["a"] == 1


def test_evaluation_does_not_mutate_input_context(context):
    before = context.env
    after = evaluate_program(context, read_all("(def x 1) (def y 2)"))
    assert context.env is before
    assert "x" not in context.env
    assert after.env["x"] == 1 and after.env["y"] == 2


def test_equality_returns_t(run):
    assert run("(= '(1 2) '(1 2))").expr == T
    assert run("(= 1 2)").expr is Nil


def test_unbounded_recursion_fails_only_that_form(context):
    ctx = evaluate_program(
        context, read_all("(def spin (lambda spin (n) (spin n))) (spin 1) (def after 1)")
    )
    assert not ctx.has_error
    assert ctx.env["after"] == 1

    ctx = evaluate_program(ctx, read_all("(spin 2)"))
    assert isinstance(ctx.error, errors.RecursionLimitExceeded)
    assert ctx.expr is Nil
