from pathlib import Path

from wthr.parser import parse_program
from wthr.interpreter import Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_5_call_frames(capsys):
    with open(EXAMPLES / 'program_5.wthr', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == ['8', '10', '11']
    # the callee's local never leaks into the global frame
    assert 'y' not in interp.global_env
