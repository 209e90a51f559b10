import pytest

from wthr.errors import EvalError, ModuleImportError, ParseError
from wthr.grammar import parse_program_lark
from wthr.interpreter import run_file, run_program
from wthr.loader import ModuleLoader


def write(path, text):
    path.write_text(text, encoding='utf-8')
    return path


def test_import_merges_functions_only(tmp_path, capsys):
    write(tmp_path / 'lib.wthr', 'secret = 42\nprint("lib loaded")\nfunction double(a) { a * 2 }\n')
    main = write(tmp_path / 'main.wthr', 'import "lib"\nprint(double(21))\n')
    interp = run_file(main)
    assert capsys.readouterr().out == 'lib loaded\n42\n'
    assert 'double' in interp.functions
    assert 'secret' not in interp.global_env


def test_imported_variables_are_not_visible(tmp_path):
    write(tmp_path / 'lib.wthr', 'secret = 42\n')
    main = write(tmp_path / 'main.wthr', 'import "lib"\nprint(secret)\n')
    with pytest.raises(EvalError) as excinfo:
        run_file(main)
    assert 'secret' in str(excinfo.value)
    assert excinfo.value.filename == str(main)


def test_module_runs_in_isolated_environment(tmp_path):
    # the importer's variables are not visible while the module runs
    write(tmp_path / 'lib.wthr', 'y = x + 1\n')
    main = write(tmp_path / 'main.wthr', 'x = 1\nimport "lib"\n')
    with pytest.raises(EvalError) as excinfo:
        run_file(main)
    assert excinfo.value.filename == str((tmp_path / 'lib.wthr').resolve())
    assert excinfo.value.line == 1


def test_imports_resolve_next_to_the_importing_file(tmp_path, capsys):
    sub = tmp_path / 'sub'
    sub.mkdir()
    write(sub / 'inner.wthr', 'function inner() { 7 }\n')
    write(sub / 'outer.wthr', 'import "inner"\nfunction outer() { inner() + 1 }\n')
    main = write(tmp_path / 'main.wthr', 'import "sub/outer"\nprint(outer())\nprint(inner())\n')
    run_file(main)
    assert capsys.readouterr().out == '8\n7\n'


def test_module_is_rerun_on_each_import(tmp_path, capsys):
    write(tmp_path / 'noisy.wthr', 'print("hello")\n')
    main = write(tmp_path / 'main.wthr', 'import "noisy"\nimport "noisy"\n')
    run_file(main)
    assert capsys.readouterr().out == 'hello\nhello\n'


def test_missing_module(tmp_path):
    main = write(tmp_path / 'main.wthr', 'x = 1\nimport "nowhere"\n')
    with pytest.raises(ModuleImportError) as excinfo:
        run_file(main)
    err = excinfo.value
    assert 'nowhere.wthr' in str(err)
    assert err.line == 2
    assert err.diagnostic().startswith(f"{main}:2: ImportError:")


def test_self_import_is_a_cycle(tmp_path):
    main = write(tmp_path / 'main.wthr', 'import "main"\n')
    with pytest.raises(ModuleImportError) as excinfo:
        run_file(main)
    assert 'import cycle: main.wthr -> main.wthr' in str(excinfo.value)


def test_indirect_cycle(tmp_path):
    write(tmp_path / 'a.wthr', 'import "b"\n')
    write(tmp_path / 'b.wthr', 'import "a"\n')
    main = write(tmp_path / 'main.wthr', 'import "a"\n')
    with pytest.raises(ModuleImportError) as excinfo:
        run_file(main)
    assert 'main.wthr -> a.wthr -> b.wthr -> a.wthr' in str(excinfo.value)


def test_diamond_imports_are_not_cycles(tmp_path, capsys):
    write(tmp_path / 'base.wthr', 'function one() { 1 }\n')
    write(tmp_path / 'left.wthr', 'import "base"\nfunction two() { one() + one() }\n')
    write(tmp_path / 'right.wthr', 'import "base"\nfunction three() { one() + two() }\n')
    main = write(tmp_path / 'main.wthr', 'import "left"\nimport "right"\nprint(three())\n')
    interp = run_file(main)
    # calls resolve through the table of the interpreter running them
    assert capsys.readouterr().out == '3\n'
    assert sorted(interp.functions) == ['one', 'three', 'two']


def test_syntax_error_in_module_names_the_module(tmp_path):
    lib = write(tmp_path / 'lib.wthr', 'function broken( { 1 }\n')
    main = write(tmp_path / 'main.wthr', 'import "lib"\n')
    with pytest.raises(ParseError) as excinfo:
        run_file(main)
    assert excinfo.value.filename == str(lib.resolve())


def test_lark_front_end_is_used_for_modules(tmp_path, capsys):
    write(tmp_path / 'lib.wthr', 'function half(a) { a / 2 }\n')
    main = write(tmp_path / 'main.wthr', 'import "lib"\nprint(half(5))\n')
    run_file(main, parse=parse_program_lark)
    assert capsys.readouterr().out == '2.5\n'


def test_in_memory_source_imports_from_base_dir(tmp_path, capsys):
    write(tmp_path / 'lib.wthr', 'function f() { 3 }\n')
    run_program('import "lib"\nprint(f())', base_dir=tmp_path)
    assert capsys.readouterr().out == '3\n'


def test_loader_releases_paths_after_loading(tmp_path):
    loader = ModuleLoader()
    path = loader.resolve('x.wthr', tmp_path)
    with loader.loading(path):
        assert loader.active == [path]
    assert loader.active == []
