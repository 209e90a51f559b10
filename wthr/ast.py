"""Abstract Syntax Tree (AST) definitions for the wthr language.

Both parser front ends build these nodes and the interpreter walks them.
Every node owns its children outright; nothing is shared between two
parents and there are no back references. Nodes whose evaluation can
fail remember the source line, which takes no part in equality so that
trees built by different front ends compare equal.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from fractions import Fraction
from typing import List, Optional


@dataclass
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass
class Program(Node):
    body: List[Node]


@dataclass
class Block(Node):
    statements: List[Node]


@dataclass
class Assign(Node):
    name: str
    value: Node


@dataclass
class Print(Node):
    expr: Node


@dataclass
class IfStmt(Node):
    condition: Node
    then_block: Block
    else_block: Optional[Block]


@dataclass
class FuncDecl(Node):
    name: str
    params: List[str]
    body: Block


@dataclass
class ImportStmt(Node):
    module: str     # name as written between the quotes
    filename: str   # module with the configured extension appended
    line: int = field(default=0, compare=False)


@dataclass
class CallStmt(Node):
    call: 'Call'


@dataclass
class ExprStmt(Node):
    expr: Node


@dataclass
class Number(Node):
    value: Fraction


@dataclass
class StringLit(Node):
    value: str
    line: int = field(default=0, compare=False)


@dataclass
class Ident(Node):
    name: str
    line: int = field(default=0, compare=False)


@dataclass
class Constant(Node):
    name: str


@dataclass
class BinaryOp(Node):
    op: str
    left: Node
    right: Node
    line: int = field(default=0, compare=False)


@dataclass
class UnaryOp(Node):
    op: str
    operand: Node


@dataclass
class BuiltinCall(Node):
    name: str
    args: List[Node]
    line: int = field(default=0, compare=False)


@dataclass
class Call(Node):
    name: str
    args: List[Node]
    line: int = field(default=0, compare=False)
