from pathlib import Path

from wthr.interpreter import run_file

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_weather_script(capsys):
    run_file(EXAMPLES / 'weather.wthr')
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines[0] == 'Dew Point:'
    assert abs(float(out_lines[1]) - 30.18) < 0.01
    assert out_lines[2:] == [
        'Fahrenheit to Celsius:',
        '30',
        'Celsius to Fahrenheit:',
        '86',
        "It's a cool day!",
        "It's a dry day!",
    ]
