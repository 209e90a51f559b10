"""Lark grammar front end for the wthr language.

This is the same language as `wthr.parser`, written down as a Lark LALR
grammar. The parse tree is turned into the very same AST classes by
`ASTTransformer`, so either front end can feed the interpreter
(`python -m wthr --parser lark script.wthr`).

Statements have no terminator. Where a token could either continue the
current expression or start the next statement (`-`, `(`) the LALR
tables resolve the conflict as a shift, the same greedy choice the
recursive-descent parser makes.
"""

from __future__ import annotations

from typing import List

from lark import Lark, Token, Transformer
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, VisitError

from .ast import (
    Program, Block, Assign, Print, IfStmt, FuncDecl, ImportStmt, CallStmt,
    ExprStmt, Number, StringLit, Ident, Constant, BinaryOp, UnaryOp,
    BuiltinCall, Call, Node,
)
from .config import module_filename
from .errors import LexError, ParseError
from .parser import check_builtin_arity
from .types import parse_decimal


WTHR_GRAMMAR = r"""
    start: statement*

    ?statement: print_stmt
              | if_stmt
              | func_decl
              | import_stmt
              | call_stmt
              | assign
              | expr_stmt

    print_stmt: "print" "(" expression ")"
    if_stmt: "if" "(" expression ")" block ["else" block]
    func_decl: "function" IDENT "(" [param_list] ")" block
    param_list: IDENT ("," IDENT)*
    import_stmt: "import" STRING
    call_stmt: "call" "(" IDENT "(" [arg_list] ")" ")"
    assign: IDENT "=" expression
    expr_stmt: expression

    block: "{" statement* "}"

    // Expressions with precedence
    ?expression: sum
    ?sum: product ((PLUS | MINUS | GT | LT) product)*
    ?product: atom ((STAR | SLASH) atom)*
    ?atom: NUMBER                                  -> number
         | STRING                                  -> string
         | CONSTANT                                -> constant
         | IDENT                                   -> var
         | IDENT "(" [arg_list] ")"                -> call
         | BUILTIN "(" [arg_list] ")"              -> builtin_call
         | "(" expression ")"
         | block
         | MINUS atom                              -> neg
    arg_list: expression ("," expression)*

    // Tokens
    BUILTIN.2: /(dewpoint|ftoc|ctof|ctok|ktoc|ftok|ktof)\b/
    CONSTANT.2: /_(pi|kelvin|rd|cp|p0|lv|cw|rho_air|rho_water|g)_\b/
    IDENT: /[A-Za-z_]\w*/
    NUMBER: /(\d+\.?\d*|\.\d+)(?![.\d])/
    STRING: /"[^"]*"/
    PLUS: "+"
    MINUS: "-"
    GT: ">"
    LT: "<"
    STAR: "*"
    SLASH: "/"

    COMMENT: /#[^\n]*/
    %import common.WS
    %ignore WS
    %ignore COMMENT
"""


WTHR_PARSER = Lark(
    WTHR_GRAMMAR,
    parser='lalr',
    lexer='basic',
    propagate_positions=True,
    maybe_placeholders=False,
)


class ASTTransformer(Transformer):
    """Transforms the raw parse tree into a wthr AST."""

    def start(self, items):
        return Program(body=list(items))

    def print_stmt(self, items):
        return Print(items[0])

    def if_stmt(self, items):
        condition = items[0]
        then_block = items[1]
        else_block = items[2] if len(items) > 2 else None
        return IfStmt(condition, then_block, else_block)

    def func_decl(self, items):
        name = str(items[0])
        params: List[str] = items[1] if len(items) == 3 else []
        body = items[-1]
        return FuncDecl(name, params, body)

    def param_list(self, items):
        return [str(item) for item in items]

    def import_stmt(self, items):
        token = items[0]
        module = token.value[1:-1]
        return ImportStmt(module, module_filename(module), line=token.line)

    def call_stmt(self, items):
        name_token = items[0]
        args = items[1] if len(items) > 1 else []
        return CallStmt(Call(str(name_token), args, line=name_token.line))

    def assign(self, items):
        return Assign(str(items[0]), items[1])

    def expr_stmt(self, items):
        expr = items[0]
        if isinstance(expr, Block):
            return expr
        return ExprStmt(expr)

    def block(self, items):
        return Block(statements=list(items))

    def binary_expr(self, items):
        left = items[0]
        i = 1
        while i < len(items):
            op = items[i]
            right = items[i + 1]
            left = BinaryOp(op.value, left, right, line=op.line)
            i += 2
        return left

    def sum(self, items):
        return self.binary_expr(items)

    def product(self, items):
        return self.binary_expr(items)

    def number(self, items):
        return Number(parse_decimal(items[0].value))

    def string(self, items):
        token = items[0]
        return StringLit(token.value[1:-1], line=token.line)

    def constant(self, items):
        return Constant(items[0].value)

    def var(self, items):
        token = items[0]
        return Ident(token.value, line=token.line)

    def call(self, items):
        token = items[0]
        args = items[1] if len(items) > 1 else []
        return Call(token.value, args, line=token.line)

    def builtin_call(self, items):
        token = items[0]
        args = items[1] if len(items) > 1 else []
        check_builtin_arity(token.value, len(args), token.line)
        return BuiltinCall(token.value, args, line=token.line)

    def neg(self, items):
        return UnaryOp('-', items[1])

    def arg_list(self, items):
        return list(items)


def describe_token(token: Token) -> str:
    if token.type == '$END':
        return 'end of input'
    return f"{token.type} {token.value}"


def parse_program_lark(source: str) -> Program:
    """Parse wthr source with the Lark grammar, raising wthr errors."""
    try:
        tree = WTHR_PARSER.parse(source)
    except UnexpectedCharacters as e:
        raise LexError(f"unexpected character {e.char!r} at column {e.column}", e.line)
    except UnexpectedEOF as e:
        raise ParseError(f"unexpected end of input, expected one of {sorted(e.expected)}", None,
                         expected=sorted(e.expected), found='EOF')
    except UnexpectedInput as e:
        token = getattr(e, 'token', None)
        found = describe_token(token) if token is not None else 'input'
        expected = sorted(getattr(e, 'expected', None) or [])
        raise ParseError(f"expected one of {expected}, found {found} on line {e.line}", e.line,
                         expected=expected, found=found)
    try:
        return ASTTransformer().transform(tree)
    except VisitError as e:
        if isinstance(e.orig_exc, ParseError):
            raise e.orig_exc
        raise
