"""Integration tests for CLI."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from click.testing import CliRunner

from umlgen import cli
from umlgen.cli import main


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch):
    """Keep the CLI from reconfiguring logging onto the runner's streams."""
    monkeypatch.setattr(cli, "setup_logging", lambda *args, **kwargs: None)


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "projects.json"


@pytest.fixture
def invoke(runner, store_path):
    def _invoke(*args):
        return runner.invoke(main, ["--store", str(store_path), *args])

    return _invoke


def _records(store_path):
    return json.loads(store_path.read_text())


class TestValidateCommand:
    def test_validate_valid_file(self, runner, examples_dir):
        result = runner.invoke(main, ["validate", str(examples_dir / "library_class.json")])

        assert result.exit_code == 0
        assert "Validation passed" in result.output

    def test_validate_yaml_file(self, runner, examples_dir):
        result = runner.invoke(main, ["validate", str(examples_dir / "order_states.yaml")])

        assert result.exit_code == 0

    def test_validate_with_errors(self, runner, examples_dir):
        result = runner.invoke(
            main, ["validate", str(examples_dir / "invalid" / "dangling_reference.json")]
        )

        assert result.exit_code == 1
        assert "UNDEFINED_REFERENCE" in result.output
        assert "Validation failed: 2 error(s), 0 warning(s)" in result.output

    def test_validate_with_warnings(self, runner, examples_dir):
        result = runner.invoke(
            main, ["validate", str(examples_dir / "invalid" / "orphan_class.json")]
        )

        # Warnings don't cause failure by default
        assert result.exit_code == 0
        assert "ORPHAN_NODE" in result.output
        assert "Validation passed with 1 warning(s)" in result.output

    def test_validate_strict_mode(self, runner, examples_dir):
        result = runner.invoke(
            main,
            ["validate", "--strict", str(examples_dir / "invalid" / "unreachable_state.yaml")],
        )

        assert result.exit_code == 1
        assert "UNREACHABLE_STATE" in result.output

    def test_validate_json_output(self, runner, examples_dir):
        result = runner.invoke(
            main,
            [
                "validate",
                "--format",
                "json",
                str(examples_dir / "invalid" / "dangling_reference.json"),
            ],
        )

        data = json.loads(result.output)
        assert data["valid"] is False
        assert data["errors"] == [
            "relationships[0]: Invalid class reference: a",
            "relationships[0]: Invalid class reference: b",
        ]
        assert data["issues"][0]["code"] == "UNDEFINED_REFERENCE"
        assert data["issues"][0]["path"] == "relationships[0]"

    def test_validate_unloadable_file(self, runner, examples_dir):
        result = runner.invoke(
            main, ["validate", str(examples_dir / "invalid" / "not_a_diagram.json")]
        )

        assert result.exit_code == 2
        assert "Error loading file" in result.output

    def test_validate_missing_file(self, runner):
        result = runner.invoke(main, ["validate", "/nonexistent/diagram.json"])

        assert result.exit_code == 2


class TestLayoutCommand:
    def test_layout_prints_graph(self, runner, examples_dir):
        result = runner.invoke(main, ["layout", str(examples_dir / "library_class.json")])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert [n["id"] for n in data["nodes"]] == ["book", "member", "loan"]
        assert len(data["edges"]) == 2
        assert min(n["position"]["x"] for n in data["nodes"]) == 0
        assert len({n["position"]["y"] for n in data["nodes"]}) == 3

    def test_layout_kind_override(self, runner, examples_dir):
        result = runner.invoke(
            main,
            ["layout", "--kind", "stateMachine", str(examples_dir / "library_class.json")],
        )

        data = json.loads(result.output)
        assert len({n["position"]["x"] for n in data["nodes"]}) == 3
        assert {n["position"]["y"] for n in data["nodes"]} == {0}

    def test_layout_orders_sequence_messages(self, runner, examples_dir):
        result = runner.invoke(main, ["layout", str(examples_dir / "checkout_sequence.yaml")])

        data = json.loads(result.output)
        assert [e["id"] for e in data["edges"]] == ["m1", "m2", "m3"]

    def test_layout_invalid_diagram(self, runner, examples_dir):
        result = runner.invoke(
            main, ["layout", str(examples_dir / "invalid" / "dangling_reference.json")]
        )

        assert result.exit_code == 0
        assert "Warning: relationships[0]: Invalid class reference: a" in result.output
        assert '"nodes": []' in result.output


class TestGenerateCommand:
    def test_generate_and_save(self, invoke, store_path):
        result = invoke("generate", "a library with books")

        assert result.exit_code == 0
        assert "Generated class diagram with 4 classes and 4 relationships." in result.output
        assert "Saved project" in result.output

        records = _records(store_path)
        assert len(records) == 1
        assert records[0]["name"] == "a library with books"
        assert records[0]["diagramType"] == "class"
        assert [m["role"] for m in records[0]["messages"]] == ["user", "assistant"]

    def test_generate_without_saving(self, invoke, store_path):
        result = invoke("generate", "--no-save", "a library")

        assert result.exit_code == 0
        assert "Saved project" not in result.output
        assert not store_path.exists()

    def test_generate_other_kind(self, invoke, store_path):
        result = invoke("generate", "--kind", "sequence", "user login")

        assert result.exit_code == 0
        assert "Generated sequence diagram with 4 participants and 6 messages." in result.output
        assert _records(store_path)[0]["diagramType"] == "sequence"

    def test_continue_project(self, invoke, store_path):
        invoke("generate", "a library with books")
        project_id = _records(store_path)[0]["id"]

        result = invoke("generate", "--project", project_id, "add a blog")

        assert result.exit_code == 0
        records = _records(store_path)
        assert len(records) == 1
        assert records[0]["name"] == "a library with books"
        assert len(records[0]["messages"]) == 4
        assert [c["id"] for c in records[0]["diagram"]["classes"]][0] == "user"

    def test_continue_project_with_new_kind(self, invoke, store_path):
        invoke("generate", "a library with books")
        project_id = _records(store_path)[0]["id"]

        result = invoke("generate", "--project", project_id, "--kind", "component", "services")

        assert result.exit_code == 0
        assert _records(store_path)[0]["diagramType"] == "component"

    def test_continue_missing_project(self, invoke):
        result = invoke("generate", "--project", "nope", "anything")

        assert result.exit_code == 2
        assert "Project not found: nope" in result.output

    def test_llm_without_api_key(self, invoke, monkeypatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)

        result = invoke("generate", "--llm", "a library")

        assert result.exit_code == 2
        assert "Generation error" in result.output

    def test_llm_generation(self, invoke, store_path, blog_class_diagram):
        response = MagicMock()
        block = MagicMock()
        block.text = json.dumps(blog_class_diagram)
        response.content = [block]

        with patch("anthropic.AsyncAnthropic") as mock:
            mock.return_value.messages.create = AsyncMock(return_value=response)
            result = invoke("generate", "--llm", "--api-key", "test-key", "a blog")

        assert result.exit_code == 0
        assert "Generated class diagram with 2 classes and 1 relationships." in result.output
        assert _records(store_path)[0]["diagram"] == blog_class_diagram

    def test_llm_api_failure(self, invoke, store_path):
        with patch("anthropic.AsyncAnthropic") as mock:
            mock.return_value.messages.create = AsyncMock(side_effect=RuntimeError("boom"))
            result = invoke("generate", "--llm", "--api-key", "test-key", "a blog")

        assert result.exit_code == 2
        assert "Unexpected error during generation: boom" in result.output
        assert not store_path.exists()

    def test_unreadable_store(self, invoke, store_path):
        store_path.write_text("{not json")

        result = invoke("generate", "a library")

        assert result.exit_code == 2
        assert "Error reading project store" in result.output


class TestProjectsCommands:
    def test_list_empty(self, invoke):
        result = invoke("projects", "list")

        assert result.exit_code == 0
        assert "No saved projects" in result.output

    def test_list_projects(self, invoke):
        invoke("generate", "a library with books")
        invoke("generate", "--kind", "activity", "order handling")

        result = invoke("projects", "list")

        lines = result.output.strip().splitlines()
        assert len(lines) == 2
        assert "order handling" in result.output
        assert "activity" in result.output

    def test_show_project(self, invoke, store_path):
        invoke("generate", "a library with books")
        project_id = _records(store_path)[0]["id"]

        result = invoke("projects", "show", project_id)

        assert result.exit_code == 0
        assert "a library with books (class diagram)" in result.output
        assert "4 nodes, 4 edges" in result.output
        assert "[user] a library with books" in result.output
        assert '"nodes"' not in result.output

    def test_show_project_graph(self, invoke, store_path):
        invoke("generate", "--kind", "stateMachine", "orders")
        project_id = _records(store_path)[0]["id"]

        result = invoke("projects", "show", "--graph", project_id)

        assert result.exit_code == 0
        assert '"stateNode"' in result.output

    def test_show_missing_project(self, invoke):
        result = invoke("projects", "show", "nope")

        assert result.exit_code == 2
        assert "Project not found: nope" in result.output

    def test_delete_project(self, invoke, store_path):
        invoke("generate", "a library with books")
        project_id = _records(store_path)[0]["id"]

        result = invoke("projects", "delete", project_id)

        assert result.exit_code == 0
        assert f"Deleted project {project_id}" in result.output
        assert _records(store_path) == []

    def test_delete_missing_project(self, invoke):
        result = invoke("projects", "delete", "nope")

        assert result.exit_code == 2
        assert "Project not found: nope" in result.output
