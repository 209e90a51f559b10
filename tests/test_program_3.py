from pathlib import Path

from wthr.parser import parse_program
from wthr.interpreter import Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_3_conditionals(capsys):
    with open(EXAMPLES / 'program_3.wthr', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == ["It's a hot day!", "It's a dry day!", '1', '0']
