"""CLI entry point for the wthr interpreter.

Usage:
    python -m wthr [-v|-vv|-vvv] [--parser {descent,lark}] <program_file>
    python -m wthr [-v...] --emit-ast <program_file>
    python -m wthr [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --parser      Front end used to parse source files (default: descent)
  --emit-ast    Parse the given .wthr file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero. Any lex, parse, evaluation or import
failure is reported on stderr and the process exits with status 1.
"""

import argparse
import json
import sys
import threading
from pathlib import Path

from .ast_json import ast_to_obj, ast_from_obj
from .config import AST_SUFFIX, RECURSION_LIMIT, THREAD_STACK_SIZE
from .errors import WthrError
from .grammar import parse_program_lark
from .interpreter import Interpreter, run_file
from .parser import parse_program

PARSERS = {
    'descent': parse_program,
    'lark': parse_program_lark,
}


def fail(message: str) -> None:
    print(message, file=sys.stderr)
    sys.exit(1)


def load_ast(ast_path: Path):
    with open(ast_path, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
            return ast_from_obj(data)
        except (ValueError, KeyError, TypeError) as e:
            fail(f"Error: malformed AST file {ast_path}: {e}")


def execute(args, parse) -> None:
    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        if not program_file.exists():
            fail(f"Error: file {program_file} not found")
        with open(program_file, 'r', encoding='utf-8') as f:
            source = f.read()
        try:
            ast_program = parse(source)
        except WthrError as e:
            e.filename = e.filename or str(program_file)
            raise
        out_path = program_file.with_name(program_file.name + AST_SUFFIX)
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(ast_to_obj(ast_program), out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    # Execute from AST JSON
    if args.ast:
        ast_path = Path(args.ast)
        if not ast_path.exists():
            fail(f"Error: file {ast_path} not found")
        ast_program = load_ast(ast_path)
        interpreter = Interpreter(debug_level=args.v, base_dir=ast_path.resolve().parent, parse=parse)
        try:
            interpreter.run(ast_program)
        except WthrError as e:
            e.filename = e.filename or str(ast_path)
            raise
        return

    # Default: execute source file
    program_file = Path(args.program)
    if not program_file.exists():
        fail(f"Error: file {program_file} not found")
    run_file(program_file, debug_level=args.v, parse=parse)


def run_with_deep_stack(target) -> None:
    """Run `target` on a worker thread with a raised recursion limit.

    Exceptions, including SystemExit from `fail`, are re-raised in the
    calling thread.
    """
    outcome = {}

    def worker():
        try:
            target()
        except BaseException as e:
            outcome['error'] = e

    old_limit = sys.getrecursionlimit()
    old_stack = threading.stack_size(THREAD_STACK_SIZE)
    sys.setrecursionlimit(max(old_limit, RECURSION_LIMIT))
    try:
        thread = threading.Thread(target=worker, name='wthr-main')
        thread.start()
        thread.join()
    finally:
        threading.stack_size(old_stack)
        sys.setrecursionlimit(old_limit)
    if 'error' in outcome:
        raise outcome['error']


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog='wthr', description="wthr weather scripting language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--parser', choices=sorted(PARSERS), default='descent', help='parser front end to use')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='WTHR_FILE', help='emit AST JSON for the given .wthr file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='wthr program file to execute')
    args = parser.parse_args(argv)
    if not (args.emit_ast or args.ast or args.program):
        parser.error('missing program file; or use --emit-ast/--ast')
    parse = PARSERS[args.parser]

    def guarded():
        try:
            execute(args, parse)
        except WthrError as e:
            fail(e.diagnostic())
        except RecursionError:
            fail('Fatal: maximum recursion depth exceeded')

    run_with_deep_stack(guarded)


if __name__ == '__main__':
    main()
