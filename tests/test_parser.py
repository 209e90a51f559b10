from fractions import Fraction

import pytest

from wthr.ast import (
    Program, Block, Assign, Print, IfStmt, FuncDecl, ImportStmt, CallStmt,
    ExprStmt, Number, StringLit, Ident, Constant, BinaryOp, UnaryOp,
    BuiltinCall, Call,
)
from wthr.errors import ParseError
from wthr.parser import parse_program


def test_assignment_and_print():
    program = parse_program('x = 5\nprint(x + 3)')
    assert program == Program([
        Assign('x', Number(Fraction(5))),
        Print(BinaryOp('+', Ident('x'), Number(Fraction(3)))),
    ])


def test_precedence_and_left_associativity():
    program = parse_program('a = 1 + 2 * 3 - 4 / 2')
    expected = BinaryOp(
        '-',
        BinaryOp('+', Number(Fraction(1)), BinaryOp('*', Number(Fraction(2)), Number(Fraction(3)))),
        BinaryOp('/', Number(Fraction(4)), Number(Fraction(2))),
    )
    assert program.body == [Assign('a', expected)]


def test_relational_operators_share_additive_level():
    program = parse_program('r = a > b < c')
    assert program.body == [
        Assign('r', BinaryOp('<', BinaryOp('>', Ident('a'), Ident('b')), Ident('c'))),
    ]


def test_if_else_and_bare_block():
    program = parse_program('if (t > 25) { print("hot") } else { print("cool") }\n{ x = 1 }')
    assert program.body == [
        IfStmt(
            BinaryOp('>', Ident('t'), Number(Fraction(25))),
            Block([Print(StringLit('hot'))]),
            Block([Print(StringLit('cool'))]),
        ),
        Block([Assign('x', Number(Fraction(1)))]),
    ]


def test_function_definition_call_and_call_statement():
    program = parse_program('function add(a, b) { a + b }\nprint(add(2, 3))\ncall(add(1, 1))')
    assert program.body == [
        FuncDecl('add', ['a', 'b'], Block([ExprStmt(BinaryOp('+', Ident('a'), Ident('b')))])),
        Print(Call('add', [Number(Fraction(2)), Number(Fraction(3))])),
        CallStmt(Call('add', [Number(Fraction(1)), Number(Fraction(1))])),
    ]


def test_import_appends_extension():
    program = parse_program('import "helpers"')
    assert program.body == [ImportStmt('helpers', 'helpers.wthr')]


def test_builtins_constants_negation_and_braced_expression():
    program = parse_program('v = ftoc(-40) + { 2 } * _g_ + dewpoint(20, 0.5)')
    ftoc = BuiltinCall('ftoc', [UnaryOp('-', Number(Fraction(40)))])
    braced = BinaryOp('*', Block([ExprStmt(Number(Fraction(2)))]), Constant('_g_'))
    dew = BuiltinCall('dewpoint', [Number(Fraction(20)), Number(Fraction(1, 2))])
    assert program.body == [Assign('v', BinaryOp('+', BinaryOp('+', ftoc, braced), dew))]


def test_nodes_remember_lines():
    program = parse_program('x = 1\n\ny = x + z')
    assign = program.body[1]
    assert assign.value.line == 3
    assert assign.value.right.line == 3


def test_missing_token_reports_expected_found_and_line():
    with pytest.raises(ParseError) as excinfo:
        parse_program('x = 1\nprint(x')
    err = excinfo.value
    assert err.expected == ')'
    assert err.found.type == 'EOF'
    assert err.line == 2
    assert "expected ')'" in str(err)


@pytest.mark.parametrize('source', [
    'ftoc(1, 2)',
    'dewpoint(20)',
])
def test_builtin_arity_is_fixed(source):
    with pytest.raises(ParseError):
        parse_program(source)


@pytest.mark.parametrize('source', [
    '1 + 2 = 3',
    'if 5 > 3 { print(1) }',
    'function (a) { a }',
    'import helpers',
    'add(1, 2,)',
    'print(1',
    'else { 1 }',
    '{ x = 1',
])
def test_malformed_programs_raise(source):
    with pytest.raises(ParseError):
        parse_program(source)
