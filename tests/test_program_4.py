from pathlib import Path

from wthr.parser import parse_program
from wthr.interpreter import Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_4_functions(capsys):
    with open(EXAMPLES / 'program_4.wthr', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == ['5', '5', '0', '3', '2', '1', '3628800']
    assert sorted(interp.functions) == ['add', 'countdown', 'fact', 'heat_excess']
