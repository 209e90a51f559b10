"""Tree-walking interpreter for the wthr language.

The interpreter executes statements for their effects and evaluates
expressions to exact fractions. Variables live in `Environment` frames;
user functions live in a single function table per interpreter. An
`import` runs the target file in a brand new interpreter and then copies
only that interpreter's function table into this one.

Every failure is raised as a `WthrError` subclass and left for the
caller (normally the CLI) to report.
"""

from __future__ import annotations

from fractions import Fraction
from pathlib import Path
from typing import Callable, Dict, List, Optional, TextIO

from .ast import (
    Program, Block, Assign, Print, IfStmt, FuncDecl, ImportStmt, CallStmt,
    ExprStmt, Number, StringLit, Ident, Constant, BinaryOp, UnaryOp,
    BuiltinCall, Call, Node,
)
from .config import DEFAULT_DEBUG_FILE
from .constants import BUILTINS, CONSTANTS
from .environment import Environment
from .errors import EvalError, WthrError
from .loader import ModuleLoader
from .parser import parse_program
from .types import format_number, from_bool, is_truthy, type_name


class FunctionValue:
    """Represents a user-defined wthr function."""
    def __init__(self, name: str, params: List[str], body: Block):
        self.name = name
        self.params = params
        self.body = body

    def __repr__(self) -> str:
        return f"<function {self.name}({', '.join(self.params)})>"


class Interpreter:
    """Core interpreter that executes a wthr AST."""
    def __init__(
        self,
        debug_level: int = 0,
        debug_file: str = DEFAULT_DEBUG_FILE,
        base_dir: Optional[Path] = None,
        loader: Optional[ModuleLoader] = None,
        parse: Optional[Callable[[str], Program]] = None,
        debug_fp: Optional[TextIO] = None,
    ):
        self.global_env = Environment()
        self.functions: Dict[str, FunctionValue] = {}
        self.base_dir = base_dir
        self.loader = loader if loader is not None else ModuleLoader()
        self.parse = parse if parse is not None else parse_program
        self.debug_level = debug_level
        self.owns_debug_fp = debug_fp is None and debug_level > 0
        if debug_fp is not None:
            self.debug_fp = debug_fp
        elif debug_level > 0:
            self.debug_fp = open(debug_file, 'w', encoding='utf-8')
        else:
            self.debug_fp = None

    def debug(self, msg: str):
        if self.debug_level > 0 and self.debug_fp:
            self.debug_fp.write(msg + '\n')
            self.debug_fp.flush()

    def close(self):
        if self.owns_debug_fp and self.debug_fp:
            self.debug_fp.close()
        self.debug_fp = None

    # Public API
    def run(self, program: Program, env: Optional[Environment] = None) -> Optional[Fraction]:
        if env is None:
            env = self.global_env
        self.debug(f"run {len(program.body)} statements")
        try:
            result = self.execute_block(program.body, env)
            self.debug('run finished')
            return result
        finally:
            if self.owns_debug_fp:
                self.close()

    def execute_block(self, statements: List[Node], env: Environment) -> Optional[Fraction]:
        result: Optional[Fraction] = None
        for stmt in statements:
            result = self.execute(stmt, env)
        return result

    def execute(self, node: Node, env: Environment) -> Optional[Fraction]:
        if isinstance(node, Assign):
            value = self.evaluate(node.value, env)
            env.set(node.name, value)
            if self.debug_level >= 2:
                self.debug(f"assign {node.name} = {value}")
            return value
        if isinstance(node, Print):
            if isinstance(node.expr, StringLit):
                print(node.expr.value)
            else:
                print(format_number(self.evaluate(node.expr, env)))
            return None
        if isinstance(node, IfStmt):
            cond = self.evaluate(node.condition, env)
            truthy = is_truthy(cond)
            if self.debug_level >= 3:
                self.debug(f"if condition {cond} -> {truthy}")
            if truthy:
                return self.execute(node.then_block, env)
            if node.else_block is not None:
                return self.execute(node.else_block, env)
            return None
        if isinstance(node, Block):
            # blocks share the enclosing frame
            return self.execute_block(node.statements, env)
        if isinstance(node, FuncDecl):
            self.functions[node.name] = FunctionValue(node.name, list(node.params), node.body)
            if self.debug_level >= 2:
                self.debug(f"define function {node.name}({', '.join(node.params)})")
            return None
        if isinstance(node, ImportStmt):
            self.import_module(node)
            return None
        if isinstance(node, CallStmt):
            self.invoke(node.call, env)
            return None
        if isinstance(node, ExprStmt):
            return self.evaluate(node.expr, env)
        raise EvalError(f"cannot execute {type(node).__name__}")

    def evaluate(self, node: Node, env: Environment) -> Fraction:
        if isinstance(node, Number):
            return node.value
        if isinstance(node, Ident):
            return env.get(node.name, node.line)
        if isinstance(node, Constant):
            if node.name not in CONSTANTS:
                raise EvalError(f"unknown constant {node.name}")
            return CONSTANTS[node.name]
        if isinstance(node, BinaryOp):
            left = self.evaluate(node.left, env)
            right = self.evaluate(node.right, env)
            return self.apply_binary_op(node.op, left, right, node.line)
        if isinstance(node, UnaryOp):
            operand = self.evaluate(node.operand, env)
            if node.op == '-':
                return -operand
            raise EvalError(f"unsupported unary operator {node.op}")
        if isinstance(node, BuiltinCall):
            return self.call_builtin(node, env)
        if isinstance(node, Call):
            result = self.invoke(node, env)
            if result is None:
                raise EvalError(f"function {node.name} produced no value", node.line)
            return result
        if isinstance(node, Block):
            result = self.execute_block(node.statements, env)
            if result is None:
                raise EvalError('block produced no value')
            return result
        if isinstance(node, StringLit):
            raise EvalError(f'string "{node.value}" cannot be used as a number', node.line)
        raise EvalError(f"cannot evaluate {type(node).__name__}")

    def apply_binary_op(self, op: str, a: Fraction, b: Fraction, line: Optional[int] = None) -> Fraction:
        for operand in (a, b):
            if not isinstance(operand, Fraction):
                raise EvalError(f"operator {op} expects numbers, got {type_name(operand)}", line)
        if op == '+':
            return a + b
        if op == '-':
            return a - b
        if op == '*':
            return a * b
        if op == '/':
            if b == 0:
                raise EvalError('division by zero', line)
            return a / b
        if op == '>':
            return from_bool(a > b)
        if op == '<':
            return from_bool(a < b)
        raise EvalError(f"unknown operator {op}", line)

    def call_builtin(self, node: BuiltinCall, env: Environment) -> Fraction:
        builtin = BUILTINS.get(node.name)
        if builtin is None:
            raise EvalError(f"undefined builtin {node.name}", node.line)
        if len(node.args) != builtin.arity:
            raise EvalError(f"{node.name} expects {builtin.arity} arguments, got {len(node.args)}", node.line)
        args = [self.evaluate(arg, env) for arg in node.args]
        try:
            return builtin(args)
        except EvalError as ex:
            if ex.line is None:
                ex.line = node.line
            raise
        except OverflowError:
            raise EvalError(f"{node.name}: argument out of floating point range", node.line)
        except ValueError as ex:
            raise EvalError(f"{node.name}: {ex}", node.line)

    def invoke(self, call: Call, env: Environment) -> Optional[Fraction]:
        func = self.functions.get(call.name)
        if func is None:
            raise EvalError(f"undefined function {call.name}", call.line)
        if len(call.args) != len(func.params):
            raise EvalError(
                f"{func.name} expects {len(func.params)} arguments, got {len(call.args)}", call.line
            )
        # arguments are evaluated in the caller's frame before the new one exists
        args = [self.evaluate(arg, env) for arg in call.args]
        if self.debug_level >= 2:
            self.debug(f"call {func.name}({', '.join(str(a) for a in args)})")
        frame = env.child()
        for param, arg in zip(func.params, args):
            frame.set(param, arg)
        return self.execute(func.body, frame)

    def import_module(self, node: ImportStmt):
        path = self.loader.resolve(node.filename, self.base_dir)
        with self.loader.loading(path, node.line):
            source = self.loader.read(path, node.line)
            self.debug(f"import {node.module} from {path}")
            module_interpreter = Interpreter(
                debug_level=self.debug_level,
                base_dir=path.parent,
                loader=self.loader,
                parse=self.parse,
                debug_fp=self.debug_fp,
            )
            try:
                program = self.parse(source)
                module_interpreter.run(program)
            except WthrError as ex:
                if ex.filename is None:
                    ex.filename = str(path)
                raise
        # only function definitions cross the module boundary
        self.functions.update(module_interpreter.functions)
        self.debug(f"imported functions from {node.module}: {', '.join(sorted(module_interpreter.functions))}")


def run_program(source: str, debug_level: int = 0, base_dir: Optional[Path] = None) -> Interpreter:
    """Convenience function to parse and run a wthr program from a source string."""
    ast_program = parse_program(source)
    interpreter = Interpreter(debug_level=debug_level, base_dir=base_dir)
    interpreter.run(ast_program)
    return interpreter


def run_file(file_path, debug_level: int = 0, parse: Optional[Callable[[str], Program]] = None) -> Interpreter:
    """Parse and execute a wthr file, returning the interpreter instance."""
    parse = parse if parse is not None else parse_program
    interpreter = Interpreter(debug_level=debug_level, parse=parse)
    path = interpreter.loader.resolve(str(file_path))
    interpreter.base_dir = path.parent
    try:
        with interpreter.loader.loading(path):
            source = interpreter.loader.read(path)
            interpreter.run(parse(source))
    except WthrError as ex:
        if ex.filename is None:
            ex.filename = str(file_path)
        raise
    finally:
        interpreter.close()
    return interpreter
