"""Command-line interface for umlgen."""

import asyncio
import sys

import click
from click.core import ParameterSource

from .generation.client import DEFAULT_MODEL, LLMClient, TemplateClient
from .generation.errors import GenerationError
from .graph import layout as layout_nodes
from .graph import profile_for_kind, transform
from .logging_config import setup_logging
from .output.formatter import format_graph, format_project_list, format_validation_result
from .project import JsonFileStorage, ProjectStore, submit_prompt
from .schema.errors import SchemaLoadError
from .schema.loader import coerce_diagram, load_diagram_file
from .schema.models import DiagramKind
from .validators.runner import validate as validate_candidate

DEFAULT_STORE = "./umlgen-projects.json"

KIND_CHOICE = click.Choice([kind.value for kind in DiagramKind])


def _open_store(ctx: click.Context) -> ProjectStore:
    store = ProjectStore(JsonFileStorage(ctx.obj["store_path"]))
    result = store.initialize()
    if not result.success:
        click.echo(f"Error reading project store: {result.error}", err=True)
        sys.exit(2)
    return store


@click.group()
@click.version_option()
@click.option(
    "--store",
    "store_path",
    envvar="UMLGEN_STORE",
    default=DEFAULT_STORE,
    show_default=True,
    type=click.Path(dir_okay=False),
    help="JSON file holding saved projects",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, store_path: str, verbose: bool):
    """umlgen: generate, validate and lay out UML diagrams."""
    setup_logging("DEBUG" if verbose else "WARNING")
    ctx.ensure_object(dict)
    ctx.obj["store_path"] = store_path


@main.command()
@click.argument("diagram_file", type=click.Path(exists=True))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Treat warnings as errors",
)
def validate(diagram_file: str, output_format: str, strict: bool):
    """Validate a diagram file.

    DIAGRAM_FILE is the path to a JSON or YAML diagram file.

    Exit codes:
      0 - Validation passed
      1 - Validation failed (errors found)
      2 - File error
    """
    try:
        data = load_diagram_file(diagram_file)
    except SchemaLoadError as e:
        click.echo(f"Error loading file: {e}", err=True)
        sys.exit(2)

    result = validate_candidate(data)

    output = format_validation_result(result, output_format)  # type: ignore
    click.echo(output)

    # Determine exit code
    if result.has_errors:
        sys.exit(1)
    elif strict and result.has_warnings:
        sys.exit(1)
    else:
        sys.exit(0)


@main.command()
@click.argument("diagram_file", type=click.Path(exists=True))
@click.option(
    "--kind",
    type=KIND_CHOICE,
    default=None,
    help="Layout profile to use (defaults to the diagram's own kind)",
)
def layout(diagram_file: str, kind: str | None):
    """Transform a diagram file and print the laid-out graph as JSON.

    DIAGRAM_FILE is the path to a JSON or YAML diagram file. Invalid
    diagrams are laid out on a best-effort basis; their validation errors
    are reported on stderr.

    Exit codes:
      0 - Success
      2 - File error
    """
    try:
        data = load_diagram_file(diagram_file)
    except SchemaLoadError as e:
        click.echo(f"Error loading file: {e}", err=True)
        sys.exit(2)

    result = validate_candidate(data)
    for message in result.errors:
        click.echo(f"Warning: {message}", err=True)

    model = coerce_diagram(data)
    graph = transform(model)
    config = profile_for_kind(kind or model.type)
    nodes = layout_nodes(graph.nodes, graph.edges, config)

    click.echo(format_graph(nodes, graph.edges))
    sys.exit(0)


@main.command()
@click.argument("prompt")
@click.option(
    "--kind",
    type=KIND_CHOICE,
    default=DiagramKind.CLASS.value,
    show_default=True,
    help="Kind of diagram to generate",
)
@click.option(
    "--project",
    "project_id",
    default=None,
    help="Continue an existing project instead of starting a new one",
)
@click.option(
    "--llm",
    is_flag=True,
    default=False,
    help="Generate with Claude instead of the offline sample diagrams",
)
@click.option(
    "--api-key",
    envvar="ANTHROPIC_API_KEY",
    help="Anthropic API key (defaults to ANTHROPIC_API_KEY env var)",
)
@click.option(
    "--model",
    "claude_model",
    default=DEFAULT_MODEL,
    help="Claude model to use for generation",
)
@click.option(
    "--save/--no-save",
    default=True,
    help="Save the project after generation",
)
@click.pass_context
def generate(
    ctx: click.Context,
    prompt: str,
    kind: str,
    project_id: str | None,
    llm: bool,
    api_key: str | None,
    claude_model: str,
    save: bool,
):
    """Generate a diagram from a natural language PROMPT.

    Exit codes:
      0 - Diagram generated
      2 - Project store, API key or generation error
    """
    store = _open_store(ctx)

    if project_id is not None:
        if not store.load_project(project_id):
            click.echo(f"Project not found: {project_id}", err=True)
            sys.exit(2)
        if ctx.get_parameter_source("kind") != ParameterSource.DEFAULT:
            store.set_diagram_type(kind)
    else:
        store.create_project(kind)

    try:
        if llm:
            client = LLMClient(api_key=api_key, model=claude_model)
        else:
            client = TemplateClient()
        result = asyncio.run(submit_prompt(store, client, prompt))
    except GenerationError as e:
        click.echo(f"Generation error: {e}", err=True)
        sys.exit(2)

    click.echo(store.messages[-1].content)
    for message in result.errors:
        click.echo(f"Warning: {message}", err=True)

    if save:
        if not store.save_project():
            click.echo("Error: the project could not be saved", err=True)
            sys.exit(2)
        click.echo(f"Saved project {store.current_project_id}: {store.current_project.name}")

    sys.exit(0)


@main.group()
def projects():
    """Manage saved projects."""
    pass


@projects.command("list")
@click.pass_context
def list_projects(ctx: click.Context):
    """List saved projects, most recently updated first."""
    store = _open_store(ctx)
    click.echo(format_project_list(store.projects))


@projects.command("show")
@click.argument("project_id")
@click.option("--graph", "show_graph", is_flag=True, default=False, help="Print the laid-out graph")
@click.pass_context
def show_project(ctx: click.Context, project_id: str, show_graph: bool):
    """Show a saved project and its conversation."""
    store = _open_store(ctx)
    if not store.load_project(project_id):
        click.echo(f"Project not found: {project_id}", err=True)
        sys.exit(2)

    project = store.current_project
    click.echo(f"{project.name} ({store.current_diagram_type.value} diagram)")
    click.echo(f"{len(store.nodes)} nodes, {len(store.edges)} edges")
    for message in store.messages:
        click.echo(f"  [{message.role}] {message.content}")

    if show_graph:
        click.echo(format_graph(store.nodes, store.edges))


@projects.command("delete")
@click.argument("project_id")
@click.pass_context
def delete_project(ctx: click.Context, project_id: str):
    """Delete a saved project."""
    store = _open_store(ctx)
    if not any(project.id == project_id for project in store.projects):
        click.echo(f"Project not found: {project_id}", err=True)
        sys.exit(2)

    if not store.delete_project(project_id):
        click.echo(f"Error: project {project_id} could not be deleted", err=True)
        sys.exit(2)
    click.echo(f"Deleted project {project_id}")


if __name__ == "__main__":
    main()
