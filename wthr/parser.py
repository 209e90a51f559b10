"""Recursive-descent parser for the wthr language.

The parser pulls tokens from a `Lexer` one at a time and never looks
further ahead than the current token. Expressions are parsed by
precedence climbing over two binary levels:

    expression := term (("+" | "-" | ">" | "<") term)*
    term       := atom (("*" | "/") atom)*

Statements need no separators; an expression simply ends at the first
token that cannot continue it. The first mismatch raises `ParseError`
and parsing stops there.
"""

from __future__ import annotations

from typing import List, Union

from .ast import (
    Program, Block, Assign, Print, IfStmt, FuncDecl, ImportStmt, CallStmt,
    ExprStmt, Number, StringLit, Ident, Constant, BinaryOp, UnaryOp,
    BuiltinCall, Call, Node,
)
from .config import module_filename
from .constants import BUILTINS
from .errors import ParseError
from .lexer import Lexer, Token

ADDITIVE_OPS = ['+', '-', '>', '<']
MULTIPLICATIVE_OPS = ['*', '/']


class Parser:
    def __init__(self, lexer: Lexer):
        self.lexer = lexer
        self.current = lexer.next_token()

    def peek(self) -> Token:
        return self.current

    def match(self, expected: Union[str, List[str]]) -> bool:
        if isinstance(expected, list):
            return self.current.type in expected
        return self.current.type == expected

    def consume(self, expected: Union[str, List[str]]) -> Token:
        token = self.current
        if not self.match(expected):
            if isinstance(expected, list):
                wanted = 'one of ' + ', '.join(repr(e) for e in expected)
            else:
                wanted = repr(expected)
            raise ParseError(
                f"expected {wanted}, found {token.describe()} on line {token.line}",
                token.line, expected=expected, found=token,
            )
        self.current = self.lexer.next_token()
        return token

    def parse_program(self) -> Program:
        statements: List[Node] = []
        while not self.match('EOF'):
            statements.append(self.parse_statement())
        return Program(statements)

    def parse_statement(self) -> Node:
        token = self.peek()
        if token.type == 'print':
            return self.parse_print()
        if token.type == 'if':
            return self.parse_if()
        if token.type == 'function':
            return self.parse_function()
        if token.type == 'import':
            return self.parse_import()
        if token.type == 'call':
            return self.parse_call_stmt()
        expr = self.parse_expression()
        if self.match('='):
            if not isinstance(expr, Ident):
                raise ParseError(
                    f"cannot assign to this expression on line {self.current.line}",
                    self.current.line, expected='IDENT', found=self.current,
                )
            self.consume('=')
            return Assign(expr.name, self.parse_expression())
        # `{ ... }` on its own is a block statement, not a value
        if isinstance(expr, Block):
            return expr
        return ExprStmt(expr)

    def parse_print(self) -> Print:
        self.consume('print')
        self.consume('(')
        expr = self.parse_expression()
        self.consume(')')
        return Print(expr)

    def parse_if(self) -> IfStmt:
        self.consume('if')
        self.consume('(')
        condition = self.parse_expression()
        self.consume(')')
        then_block = self.parse_block()
        else_block = None
        if self.match('else'):
            self.consume('else')
            else_block = self.parse_block()
        return IfStmt(condition, then_block, else_block)

    def parse_function(self) -> FuncDecl:
        self.consume('function')
        name = self.consume('IDENT').value
        self.consume('(')
        params: List[str] = []
        if not self.match(')'):
            params.append(self.consume('IDENT').value)
            while self.match(','):
                self.consume(',')
                params.append(self.consume('IDENT').value)
        self.consume(')')
        body = self.parse_block()
        return FuncDecl(name, params, body)

    def parse_import(self) -> ImportStmt:
        import_token = self.consume('import')
        module = self.consume('STRING').value
        return ImportStmt(module, module_filename(module), line=import_token.line)

    def parse_call_stmt(self) -> CallStmt:
        # call(name(args)) runs a function for its side effects
        self.consume('call')
        self.consume('(')
        name_token = self.consume('IDENT')
        args = self.parse_arguments()
        self.consume(')')
        return CallStmt(Call(name_token.value, args, line=name_token.line))

    def parse_block(self) -> Block:
        self.consume('{')
        statements: List[Node] = []
        while not self.match(['}', 'EOF']):
            statements.append(self.parse_statement())
        self.consume('}')
        return Block(statements)

    def parse_arguments(self) -> List[Node]:
        self.consume('(')
        args: List[Node] = []
        if not self.match(')'):
            args.append(self.parse_expression())
            while self.match(','):
                self.consume(',')
                args.append(self.parse_expression())
        self.consume(')')
        return args

    # Expression parsing
    def parse_expression(self) -> Node:
        node = self.parse_term()
        while self.match(ADDITIVE_OPS):
            op_token = self.consume(ADDITIVE_OPS)
            right = self.parse_term()
            node = BinaryOp(op_token.type, node, right, line=op_token.line)
        return node

    def parse_term(self) -> Node:
        node = self.parse_atom()
        while self.match(MULTIPLICATIVE_OPS):
            op_token = self.consume(MULTIPLICATIVE_OPS)
            right = self.parse_atom()
            node = BinaryOp(op_token.type, node, right, line=op_token.line)
        return node

    def parse_atom(self) -> Node:
        token = self.peek()
        if token.type == 'NUMBER':
            self.consume('NUMBER')
            return Number(token.value)
        if token.type == 'STRING':
            self.consume('STRING')
            return StringLit(token.value, line=token.line)
        if token.type == 'CONSTANT':
            self.consume('CONSTANT')
            return Constant(token.value)
        if token.type == 'IDENT':
            self.consume('IDENT')
            if self.match('('):
                return Call(token.value, self.parse_arguments(), line=token.line)
            return Ident(token.value, line=token.line)
        if token.type == 'BUILTIN':
            self.consume('BUILTIN')
            args = self.parse_arguments()
            check_builtin_arity(token.value, len(args), token.line)
            return BuiltinCall(token.value, args, line=token.line)
        if token.type == '(':
            self.consume('(')
            expr = self.parse_expression()
            self.consume(')')
            return expr
        if token.type == '{':
            return self.parse_block()
        if token.type == '-':
            self.consume('-')
            return UnaryOp('-', self.parse_atom())
        raise ParseError(
            f"unexpected {token.describe()} on line {token.line}",
            token.line, expected='expression', found=token,
        )


def check_builtin_arity(name: str, count: int, line: int):
    arity = BUILTINS[name].arity
    if count != arity:
        plural = '' if arity == 1 else 's'
        raise ParseError(
            f"{name} expects {arity} argument{plural}, got {count} on line {line}",
            line, expected=arity, found=count,
        )


def parse_program(source: str) -> Program:
    """Parse wthr source code into a Program AST."""
    return Parser(Lexer(source)).parse_program()
