"""Driver tests: file I/O, runtime launch, CLI exit codes."""

import json
import subprocess

import pytest

import main
from main import (
    compile_source,
    load_source,
    write_output,
    run_script,
    ReadFailure,
    WriteFailure,
    LaunchFailure,
)

HELLO = 'var name = "Alice";\nprint("Hello {name}")\n'
HELLO_JS = "const name = 'Alice'\nconsole.log(`Hello ${name}`)\n"


@pytest.fixture
def runs(monkeypatch):
    """Record runtime invocations instead of launching anything."""
    calls = []

    def fake_run(cmd, *args, **kwargs):
        calls.append(cmd)
        return subprocess.CompletedProcess(cmd, 0)

    monkeypatch.setattr(subprocess, "run", fake_run)
    return calls


class TestIO:

    def test_compile_source(self):
        assert compile_source(HELLO) == HELLO_JS

    def test_load_source(self, tmp_path):
        path = tmp_path / "index.mc"
        path.write_text(HELLO, encoding="utf-8")
        assert load_source(str(path)) == HELLO

    def test_missing_source(self, tmp_path):
        with pytest.raises(ReadFailure):
            load_source(str(tmp_path / "missing.mc"))

    def test_write_output(self, tmp_path):
        path = tmp_path / "index.js"
        write_output(str(path), HELLO_JS)
        assert path.read_text(encoding="utf-8") == HELLO_JS

    def test_write_into_directory_fails(self, tmp_path):
        with pytest.raises(WriteFailure):
            write_output(str(tmp_path), HELLO_JS)


class TestRunScript:

    def test_passes_runtime_and_path(self, runs):
        assert run_script("index.js", "deno") == 0
        assert runs == [["deno", "index.js"]]

    def test_returns_program_exit_code(self, monkeypatch):
        monkeypatch.setattr(
            subprocess, "run", lambda cmd, *a, **kw: subprocess.CompletedProcess(cmd, 3)
        )
        assert run_script("index.js") == 3

    def test_launch_failure(self, monkeypatch):
        def missing(cmd, *args, **kwargs):
            raise FileNotFoundError(cmd[0])

        monkeypatch.setattr(subprocess, "run", missing)
        with pytest.raises(LaunchFailure):
            run_script("index.js", "no-such-runtime")


class TestCLI:

    def test_compiles_and_runs(self, tmp_path, monkeypatch, runs):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "prog.mc").write_text(HELLO, encoding="utf-8")

        main.main(["prog.mc", "-o", "prog.js"])

        assert (tmp_path / "prog.js").read_text(encoding="utf-8") == HELLO_JS
        assert runs == [["node", "prog.js"]]

    def test_default_filenames(self, tmp_path, monkeypatch, runs):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "index.mc").write_text(HELLO, encoding="utf-8")

        main.main([])

        assert (tmp_path / "index.js").read_text(encoding="utf-8") == HELLO_JS
        assert runs == [["node", "index.js"]]

    def test_no_run(self, tmp_path, monkeypatch, runs):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "index.mc").write_text(HELLO, encoding="utf-8")

        main.main(["--no-run"])

        assert (tmp_path / "index.js").exists()
        assert runs == []

    def test_config_file(self, tmp_path, monkeypatch, runs):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "index.mc").write_text(HELLO, encoding="utf-8")
        (tmp_path / ".mcrc.json").write_text(json.dumps({"output": "app.js", "runtime": "bun"}))

        main.main([])

        assert (tmp_path / "app.js").read_text(encoding="utf-8") == HELLO_JS
        assert runs == [["bun", "app.js"]]

    def test_mistyped_config_values(self, tmp_path, monkeypatch, runs):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "index.mc").write_text(HELLO, encoding="utf-8")
        (tmp_path / ".mcrc.json").write_text(json.dumps({"run": "false", "output": 5}))

        main.main([])

        assert (tmp_path / "5").read_text(encoding="utf-8") == HELLO_JS
        assert runs == [["node", "5"]]

    def test_bad_config_warning_is_logged(self, tmp_path, monkeypatch, runs, caplog):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "index.mc").write_text(HELLO, encoding="utf-8")
        (tmp_path / ".mcrc.json").write_text("{not json")

        main.main(["--no-run"])

        assert any(
            r.name == "config_mc" and r.levelname == "WARNING" for r in caplog.records
        )
        assert (tmp_path / "index.js").exists()

    def test_verbose_dumps_stages(self, tmp_path, monkeypatch, runs, capsys):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "index.mc").write_text(HELLO, encoding="utf-8")

        main.main(["-v", "--no-run"])

        out = capsys.readouterr().out
        for banner in ("=== Source ===", "=== Tokens ===", "=== AST ===", "=== JavaScript ==="):
            assert banner in out

    def test_compile_error_exits_1(self, tmp_path, monkeypatch, runs, capsys):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "index.mc").write_text("var x = y;", encoding="utf-8")

        with pytest.raises(SystemExit) as exc_info:
            main.main([])

        assert exc_info.value.code == 1
        assert "Compile error" in capsys.readouterr().err
        assert not (tmp_path / "index.js").exists()
        assert runs == []

    def test_missing_source_exits_1(self, tmp_path, monkeypatch, runs):
        monkeypatch.chdir(tmp_path)

        with pytest.raises(SystemExit) as exc_info:
            main.main(["nothing.mc"])

        assert exc_info.value.code == 1
