"""JSON serialization/deserialization for the wthr AST.

This module converts between wthr AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. Exact fractions are
stored as `"numerator/denominator"` strings so that a round trip loses
no precision.
"""

from __future__ import annotations

from fractions import Fraction
from typing import Any, Dict

from .ast import (
    Program,
    Block,
    Assign,
    Print,
    IfStmt,
    FuncDecl,
    ImportStmt,
    CallStmt,
    ExprStmt,
    Number,
    StringLit,
    Ident,
    Constant,
    BinaryOp,
    UnaryOp,
    BuiltinCall,
    Call,
)


def fraction_to_obj(value: Fraction) -> Dict[str, Any]:
    return {"__type__": "Fraction", "value": f"{value.numerator}/{value.denominator}"}


def fraction_from_obj(o: Dict[str, Any]) -> Fraction:
    return Fraction(o["value"])


def ast_to_obj(node: Any) -> Any:
    # Primitives
    if node is None:
        return None
    if isinstance(node, (int, str, bool)):
        return node

    if isinstance(node, Fraction):
        return fraction_to_obj(node)

    # Node types
    if isinstance(node, Program):
        return {"type": "Program", "body": [ast_to_obj(n) for n in node.body]}
    if isinstance(node, Block):
        return {"type": "Block", "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, Assign):
        return {"type": "Assign", "name": node.name, "value": ast_to_obj(node.value)}
    if isinstance(node, Print):
        return {"type": "Print", "expr": ast_to_obj(node.expr)}
    if isinstance(node, IfStmt):
        return {
            "type": "IfStmt",
            "condition": ast_to_obj(node.condition),
            "then_block": ast_to_obj(node.then_block),
            "else_block": ast_to_obj(node.else_block),
        }
    if isinstance(node, FuncDecl):
        return {
            "type": "FuncDecl",
            "name": node.name,
            "params": list(node.params),
            "body": ast_to_obj(node.body),
        }
    if isinstance(node, ImportStmt):
        return {"type": "ImportStmt", "module": node.module, "filename": node.filename, "line": node.line}
    if isinstance(node, CallStmt):
        return {"type": "CallStmt", "call": ast_to_obj(node.call)}
    if isinstance(node, ExprStmt):
        return {"type": "ExprStmt", "expr": ast_to_obj(node.expr)}
    if isinstance(node, Number):
        return {"type": "Number", "value": ast_to_obj(node.value)}
    if isinstance(node, StringLit):
        return {"type": "StringLit", "value": node.value, "line": node.line}
    if isinstance(node, Ident):
        return {"type": "Ident", "name": node.name, "line": node.line}
    if isinstance(node, Constant):
        return {"type": "Constant", "name": node.name}
    if isinstance(node, BinaryOp):
        return {
            "type": "BinaryOp",
            "op": node.op,
            "left": ast_to_obj(node.left),
            "right": ast_to_obj(node.right),
            "line": node.line,
        }
    if isinstance(node, UnaryOp):
        return {"type": "UnaryOp", "op": node.op, "operand": ast_to_obj(node.operand)}
    if isinstance(node, BuiltinCall):
        return {"type": "BuiltinCall", "name": node.name, "args": [ast_to_obj(a) for a in node.args], "line": node.line}
    if isinstance(node, Call):
        return {"type": "Call", "name": node.name, "args": [ast_to_obj(a) for a in node.args], "line": node.line}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None or isinstance(obj, (int, str, bool)):
        return obj
    if isinstance(obj, dict) and obj.get("__type__") == "Fraction":
        return fraction_from_obj(obj)
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    line = obj.get("line", 0)
    if t == "Program":
        return Program(body=[ast_from_obj(n) for n in obj["body"]])
    if t == "Block":
        return Block(statements=[ast_from_obj(s) for s in obj["statements"]])
    if t == "Assign":
        return Assign(name=obj["name"], value=ast_from_obj(obj["value"]))
    if t == "Print":
        return Print(expr=ast_from_obj(obj["expr"]))
    if t == "IfStmt":
        return IfStmt(
            condition=ast_from_obj(obj["condition"]),
            then_block=ast_from_obj(obj["then_block"]),
            else_block=ast_from_obj(obj.get("else_block")),
        )
    if t == "FuncDecl":
        return FuncDecl(name=obj["name"], params=list(obj["params"]), body=ast_from_obj(obj["body"]))
    if t == "ImportStmt":
        return ImportStmt(module=obj["module"], filename=obj["filename"], line=line)
    if t == "CallStmt":
        return CallStmt(call=ast_from_obj(obj["call"]))
    if t == "ExprStmt":
        return ExprStmt(expr=ast_from_obj(obj["expr"]))
    if t == "Number":
        return Number(value=ast_from_obj(obj["value"]))
    if t == "StringLit":
        return StringLit(value=obj["value"], line=line)
    if t == "Ident":
        return Ident(name=obj["name"], line=line)
    if t == "Constant":
        return Constant(name=obj["name"])
    if t == "BinaryOp":
        return BinaryOp(op=obj["op"], left=ast_from_obj(obj["left"]), right=ast_from_obj(obj["right"]), line=line)
    if t == "UnaryOp":
        return UnaryOp(op=obj["op"], operand=ast_from_obj(obj["operand"]))
    if t == "BuiltinCall":
        return BuiltinCall(name=obj["name"], args=[ast_from_obj(a) for a in obj["args"]], line=line)
    if t == "Call":
        return Call(name=obj["name"], args=[ast_from_obj(a) for a in obj["args"]], line=line)

    raise ValueError(f"Unknown AST node type: {t}")
