# wthr language package
# Lexer, parser and interpreter for the wthr weather scripting language.
from .errors import WthrError, LexError, ParseError, EvalError, ModuleImportError
from .parser import parse_program
from .interpreter import run_program, run_file, Interpreter

__all__ = [
    'run_program',
    'run_file',
    'parse_program',
    'Interpreter',
    'WthrError',
    'LexError',
    'ParseError',
    'EvalError',
    'ModuleImportError',
]
