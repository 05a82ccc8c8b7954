"""Shared test fixtures and helpers for pathmark tests.

Provides:
- CliRunner fixtures: cli_runner, invoke_cli()
- Java project fixture: java_project (a git repo with a few sources)
- Parsing helper: java_tree() for adapter-level tests
- JSON validation helpers: parse_json_output(), assert_json_envelope()
"""

from __future__ import annotations

import json
import os
import textwrap

import pytest
from click.testing import CliRunner

# ===========================================================================
# CliRunner helpers
# ===========================================================================


@pytest.fixture
def cli_runner():
    """Provide a Click CliRunner for in-process CLI testing."""
    return CliRunner()


def invoke_cli(runner, args, cwd=None, json_mode=False):
    """Invoke the pathmark CLI via CliRunner.

    Args:
        runner: CliRunner instance
        args: list of CLI arguments (e.g. ["npath", "src"])
        cwd: directory to run in
        json_mode: if True, prepend --json flag
    Returns:
        click.testing.Result
    """
    from pathmark.cli import cli

    full_args = []
    if json_mode:
        full_args.append("--json")
    full_args.extend(args)

    old_cwd = os.getcwd()
    try:
        if cwd:
            os.chdir(str(cwd))
        result = runner.invoke(cli, full_args, catch_exceptions=False)
    finally:
        os.chdir(old_cwd)

    return result


# ===========================================================================
# JSON helpers
# ===========================================================================


def parse_json_output(result, command=None, exit_code=0):
    """Parse JSON from a CliRunner result.

    Raises:
        AssertionError with context on parse failure
    """
    assert result.exit_code == exit_code, (
        f"Command {command or '?'} failed (exit {result.exit_code}):\n{result.output}"
    )
    text = result.stdout if hasattr(result, "stdout") else result.output
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        pytest.fail(f"Invalid JSON from {command or '?'}: {e}\nOutput was:\n{text[:500]}")


def assert_json_envelope(data, command=None):
    """Validate that a parsed JSON dict follows the pathmark envelope contract.

    Checks required top-level keys: command, version, summary.
    Checks _meta contains timestamp (non-deterministic metadata).
    Checks summary contains a verdict string.
    """
    assert isinstance(data, dict), f"Expected dict, got {type(data)}"
    assert "command" in data, "Missing 'command' key in envelope"
    assert "version" in data, "Missing 'version' key in envelope"
    assert "summary" in data, "Missing 'summary' key in envelope"
    assert "timestamp" in data.get("_meta", {}), "Missing 'timestamp' in _meta"
    if command:
        assert data["command"] == command, f"Expected command={command}, got {data['command']}"
    summary = data["summary"]
    assert isinstance(summary, dict), f"summary should be dict, got {type(summary)}"
    assert isinstance(summary.get("verdict"), str), "summary should carry a verdict"


# ===========================================================================
# Java sources
# ===========================================================================


def java(source: str) -> bytes:
    return textwrap.dedent(source).encode("utf-8")


def java_tree(source: str, max_depth: int | None = None):
    """Parse Java *source* and return the converted syntax tree root."""
    from pathmark.languages.registry import get_adapter, get_ts_parser

    data = java(source)
    tree = get_ts_parser("java").parse(data)
    return get_adapter("java", max_depth=max_depth).adapt(tree, data)


LOOPS_JAVA = """\
public class Loops {
    void run() {
        for (int i = 0; i < 10; i++) {
            if (i % 2 == 0) {
                even();
            } else {
                odd();
            }
        }
        if (ready) {
            go();
        } else {
            stop();
        }
    }
}
"""

SWITCH_JAVA = """\
public class Switches {
    void pick(int x) {
        switch (x) {
            case 0:
                if (a) {
                    one();
                } else if (b) {
                    two();
                } else {
                    three();
                }
                break;
            case 1:
                if (c) {
                    four();
                } else {
                    five();
                }
                break;
            case 2:
            default:
        }
    }
}
"""

PLAIN_JAVA = """\
public class Plain {
    int value() {
        return 42;
    }
}
"""


@pytest.fixture
def java_project(tmp_path):
    """A git repo with Java sources plus a non-Java file.

    Returns the path to the project directory.
    """
    proj = tmp_path / "proj"
    (proj / ".git").mkdir(parents=True)
    src = proj / "src"
    src.mkdir()
    (src / "Loops.java").write_text(LOOPS_JAVA, encoding="utf-8")
    (src / "Switches.java").write_text(SWITCH_JAVA, encoding="utf-8")
    (src / "Plain.java").write_text(PLAIN_JAVA, encoding="utf-8")
    (src / "notes.txt").write_text("not java\n", encoding="utf-8")
    return proj
