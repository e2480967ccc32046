import gzip
import os
import subprocess
import sys
from pathlib import Path

import pytest
from scranfilize.cli import main

REPO_ROOT = Path(__file__).resolve().parent.parent
SAMPLE = "c sample\np cnf 4 3\n1 -2 0\n2 3 -4 0\n-1 4 0\n"

# Helper to run CLI
def run_cli(args, stdin=None):
    cmd = [sys.executable, "-m", "scranfilize"] + args
    env = os.environ.copy()
    env["PYTHONPATH"] = str(REPO_ROOT)
    return subprocess.run(cmd, env=env, input=stdin, capture_output=True, text=True)

def test_cli_stdin_to_stdout():
    res = run_cli(["-s", "1", "-f", "0", "-v", "0", "-c", "0"], stdin=SAMPLE)
    assert res.returncode == 0, res.stderr
    body = [line for line in res.stdout.splitlines() if not line.startswith("c ")]
    assert body == ["p cnf 4 3", "1 -2 0", "2 3 -4 0", "-1 4 0"]
    assert "[scranfilize] Scranfilize CNF Scrambler" in res.stderr

def test_cli_files_and_force(tmp_path):
    src = tmp_path / "in.cnf.gz"
    src.write_bytes(gzip.compress(SAMPLE.encode()))
    dst = tmp_path / "out.cnf"

    res = run_cli(["-p", "-P", "-s", "3", str(src), str(dst)])
    assert res.returncode == 0, res.stderr
    first = dst.read_text()
    assert "p cnf 4 3" in first

    res = run_cli(["-p", "-P", "-s", "3", str(src), str(dst)])
    assert res.returncode == 1
    assert "use '--force'" in res.stderr

    res = run_cli(["-p", "-P", "-s", "3", "--force", str(src), str(dst)])
    assert res.returncode == 0
    assert dst.read_text() == first

def test_cli_parse_error(tmp_path):
    src = tmp_path / "bad.cnf"
    src.write_text("p cnf 2 1\n1 3 0\n")
    res = run_cli([str(src)])
    assert res.returncode == 1
    assert f"scranfilize: parse error: {src}:2: maximum variable index exceeded" in res.stderr
    assert res.stdout == ""

def test_cli_version():
    res = run_cli(["--version"])
    assert res.returncode == 0
    assert res.stdout.strip() == "1.0.0"

def test_main_rejects_conflicting_options(capsys):
    assert main(["-p", "-r", "-s", "1"]) == 1
    assert "can not combine '-p' and '-r'" in capsys.readouterr().err

def test_main_rejects_repeated_option(capsys):
    with pytest.raises(SystemExit):
        main(["-f", "0.1", "-f", "0.2"])
    assert "multiple '-f' options" in capsys.readouterr().err

def test_main_missing_input(tmp_path, capsys):
    assert main([str(tmp_path / "nope.cnf")]) == 1
    assert "scranfilize: error: file" in capsys.readouterr().err
