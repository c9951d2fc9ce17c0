"""Tests for the chatprompts command line interface."""

import json

from pydantic import ValidationError
from typer.testing import CliRunner

from cli.main import app
from tests.conftest import write_template

runner = CliRunner()


def test_list_shows_registered_prompts():
    result = runner.invoke(app, ["list"])

    assert result.exit_code == 0
    assert "summarize_thread" in result.output
    assert "change_tone" in result.output


def test_list_flags_missing_templates(prompts_dir):
    write_template(prompts_dir, "spellcheck.tmpl", "{% block user %}x{% endblock %}")
    write_template(prompts_dir, "custom.tmpl", "{% block user %}x{% endblock %}")

    result = runner.invoke(app, ["list", "--prompts-dir", str(prompts_dir)])

    assert result.exit_code == 0
    assert "no template" in result.output
    assert "Unregistered templates: custom" in result.output


def test_check_bundled_templates():
    result = runner.invoke(app, ["check"])

    assert result.exit_code == 0
    assert "templates OK" in result.output


def test_check_fails_on_syntax_error(prompts_dir):
    write_template(prompts_dir, "spellcheck.tmpl", "{% block user %}{{ oops {% endblock %}")

    result = runner.invoke(app, ["check", "--prompts-dir", str(prompts_dir)])

    assert result.exit_code == 1
    assert "unable to parse prompt templates" in result.output


def test_render_with_params():
    result = runner.invoke(
        app,
        ["render", "summarize_thread", "--param", "thread=jdoe: ship it?"],
    )

    assert result.exit_code == 0
    messages = json.loads(result.output)
    assert [m["role"] for m in messages] == ["system", "user"]
    assert messages[1]["content"] == "Thread:\njdoe: ship it?"


def test_render_with_context_file(tmp_path, context):
    context_file = tmp_path / "context.json"
    context_file.write_text(context.model_dump_json())

    result = runner.invoke(app, ["render", "spellcheck", "--context", str(context_file)])

    assert result.exit_code == 0
    messages = json.loads(result.output)
    assert messages[-1] == {"role": "user", "content": "teh quick brwn fox"}


def test_render_unknown_prompt():
    result = runner.invoke(app, ["render", "nope"])

    assert result.exit_code == 1
    assert "main template not found" in result.output


def test_render_rejects_malformed_param():
    result = runner.invoke(app, ["render", "summarize_thread", "--param", "novalue"])

    assert result.exit_code != 0


def test_list_shows_prompt_parameters():
    result = runner.invoke(app, ["list"])

    assert result.exit_code == 0
    assert "parameters: transcript" in result.output
    assert "parameters: tone" in result.output


def test_render_rejects_malformed_context_file(tmp_path):
    context_file = tmp_path / "context.json"
    context_file.write_text("{not json")

    result = runner.invoke(app, ["render", "spellcheck", "--context", str(context_file)])

    assert result.exit_code == 1
    assert "invalid context file" in result.output
    assert not isinstance(result.exception, ValidationError)


def test_render_rejects_context_with_wrong_schema(tmp_path):
    context_file = tmp_path / "context.json"
    context_file.write_text(json.dumps({"requesting_user": "not-an-object"}))

    result = runner.invoke(app, ["render", "spellcheck", "--context", str(context_file)])

    assert result.exit_code == 1
    assert "invalid context file" in result.output


def test_render_missing_context_file(tmp_path):
    result = runner.invoke(app, ["render", "spellcheck", "--context", str(tmp_path / "nope.json")])

    assert result.exit_code == 2
    assert not isinstance(result.exception, FileNotFoundError)
