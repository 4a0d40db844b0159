"""Test CLI functionality."""

import json

import pytest
from click.testing import CliRunner

from formbuilder.cli import cli


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text(
        f"""
log_file = "{(tmp_path / 'logs' / 'formbuilder.log').as_posix()}"

[storage]
type = "file"
directory = "{(tmp_path / 'forms').as_posix()}"
""",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def run(config_file):
    runner = CliRunner()

    def _run(*args):
        return runner.invoke(cli, ["--config", str(config_file), *args], obj={})

    return _run


@pytest.fixture
def form_id(run):
    result = run("new", "Contact", "--description", "Say hi")
    assert result.exit_code == 0, result.output
    return result.stdout.strip().splitlines()[-1]


def _stored(tmp_path, form_id):
    return json.loads((tmp_path / "forms" / f"{form_id}.json").read_text(encoding="utf-8"))


def test_types(run):
    result = run("types")
    assert result.exit_code == 0
    assert "basic\ttext\tText Input" in result.stdout
    assert "advanced\tsignature\tSignature" in result.stdout


def test_new_requires_name(run):
    result = run("new", "  ")
    assert result.exit_code != 0
    assert "Please enter a form name" in result.output


def test_new_and_list(run, form_id, tmp_path):
    assert _stored(tmp_path, form_id)["name"] == "Contact"

    result = run("list")
    assert result.exit_code == 0
    assert f"{form_id}\t0\tContact" in result.stdout


def test_add_edit_show(run, form_id, tmp_path):
    result = run("add", form_id, "select", "--key", "colour")
    assert result.exit_code == 0, result.output
    assert result.stdout.strip().splitlines()[-1] == "colour"

    result = run("edit", form_id, "colour", "--title", "Colour", "--options", "Red, Green,Blue", "--required")
    assert result.exit_code == 0, result.output

    stored = _stored(tmp_path, form_id)
    assert stored["schema"]["properties"]["colour"]["enum"] == ["Red", "Green", "Blue"]
    assert stored["schema"]["required"] == ["colour"]

    result = run("show", form_id)
    assert "colour\tselect\tyes\tColour" in result.stdout


def test_add_collision(run, form_id):
    run("add", form_id, "text", "--key", "name")
    result = run("add", form_id, "text", "--key", "name")
    assert result.exit_code != 0
    assert "Field key already exists: name" in result.output


def test_duplicate_and_delete(run, form_id, tmp_path):
    run("add", form_id, "email", "--key", "email")

    result = run("duplicate", form_id, "email")
    assert result.exit_code == 0, result.output
    copy_key = result.stdout.strip().splitlines()[-1]

    result = run("delete", form_id, "email")
    assert result.exit_code == 0, result.output

    stored = _stored(tmp_path, form_id)
    assert list(stored["schema"]["properties"]) == [copy_key]
    assert stored["schema"]["properties"][copy_key]["title"] == "New Email (Copy)"


def test_missing_field(run, form_id):
    assert run("edit", form_id, "nope", "--title", "x").exit_code != 0
    assert run("duplicate", form_id, "nope").exit_code != 0


def test_missing_form(run):
    result = run("show", "nope")
    assert result.exit_code != 0
    assert "Form not found: nope" in result.output


def test_render(run, form_id, tmp_path):
    run("add", form_id, "text", "--key", "name")

    result = run("render", form_id)
    assert 'class="form-preview"' in result.stdout
    assert " disabled>" in result.stdout

    output = tmp_path / "live.html"
    result = run("render", form_id, "--mode", "live", "-o", str(output))
    assert result.exit_code == 0, result.output
    assert "Submit Form" in output.read_text(encoding="utf-8")


def test_invalid_config(tmp_path):
    path = tmp_path / "bad.toml"
    path.write_text("[web]\nport = 0\n", encoding="utf-8")

    result = CliRunner().invoke(cli, ["--config", str(path), "types"], obj={})

    assert result.exit_code != 0
    assert "Configuration validation failed" in result.output
