# Settings shared by the loader, the interpreter and the CLI.

# Extension appended to `import "name"` targets.
FILE_EXTENSION = 'wthr'

# Written in the working directory when debug verbosity is above zero.
DEFAULT_DEBUG_FILE = 'debug.txt'

# Suffix added to a script path by `--emit-ast`.
AST_SUFFIX = '.ast.json'


def module_filename(name: str) -> str:
    return f"{name}.{FILE_EXTENSION}"

# Each wthr call nests several interpreter frames; the CLI raises the
# host limit and runs programs on a thread with a matching stack.
RECURSION_LIMIT = 20000
THREAD_STACK_SIZE = 256 * 1024 * 1024
