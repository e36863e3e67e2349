"""Command-line interface for the Formulaic API using Click."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Awaitable, Callable, List, Optional

import click

from . import utils
from .client import FormulaicClient
from .exceptions import FormulaicError
from .formatters import BaseFormatter
from .models import ChatMessage, FileInfo, ModelInfo

logger = logging.getLogger(__name__)

LOG_LEVELS = ["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"]


def _parse_json(value: Optional[str], option: str) -> Any:
    if value is None:
        return None
    try:
        return json.loads(value)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"invalid JSON: {e}", param_hint=option) from e


def _as_list(payload: Any) -> List[Any]:
    """Unwrap list responses that may come enveloped in ``{"data": [...]}``."""
    if isinstance(payload, dict) and isinstance(payload.get("data"), list):
        return payload["data"]
    if isinstance(payload, list):
        return payload
    return []


def _run(
    ctx: click.Context,
    action: Callable[[FormulaicClient, BaseFormatter], Awaitable[str]],
) -> None:
    """Build the client, run ``action`` and echo its output."""
    try:
        config = utils.load_config(
            ctx.obj["config_file"], base_url=ctx.obj["base_url"], debug=ctx.obj["debug"]
        )
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    async def _main() -> str:
        client, table_formatter, json_formatter = utils.create_command_dependencies(config)
        formatter = json_formatter if ctx.obj["output_format"] == "json" else table_formatter
        async with client as c:
            return await action(c, formatter)

    try:
        output = asyncio.run(_main())
    except FormulaicError as e:
        raise click.ClickException(str(e)) from e
    except OSError as e:
        raise click.ClickException(str(e)) from e
    except Exception as e:
        logger.debug("Unhandled error", exc_info=True)
        raise click.ClickException(f"Unexpected error: {e}") from e
    click.echo(output, nl=False)


@click.group()
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON or TOML configuration file",
)
@click.option("--base-url", help="API origin (default: https://formulaic.app)")
@click.option("--debug", is_flag=True, help="Trace requests and responses")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"], case_sensitive=False),
    default="table",
)
@click.option(
    "--log-level",
    "log_level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Set logging level",
    envvar="FORMULAIC_LOG_LEVEL",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_file: Optional[Path],
    base_url: Optional[str],
    debug: bool,
    output_format: str,
    log_level: Optional[str],
) -> None:
    """Formulaic - run formulas, chats and file operations from the shell.

    Authentication:
      Set FORMULAIC_API_KEY environment variable with your API key,
      or put api_key in the file passed to --config.
    """
    utils.configure_logging("DEBUG" if debug else log_level, default_to_warning=True)
    ctx.obj = {
        "config_file": config_file,
        "base_url": base_url,
        "debug": debug,
        "output_format": output_format.lower(),
    }


@cli.command("models")
@click.pass_context
def models_command(ctx: click.Context) -> None:
    """List available models."""

    async def action(client: FormulaicClient, formatter: BaseFormatter) -> str:
        payload = await client.get_models()
        return formatter.format_models([ModelInfo.model_validate(m) for m in _as_list(payload)])

    _run(ctx, action)


@cli.command("formula")
@click.argument("formula_id")
@click.pass_context
def formula_command(ctx: click.Context, formula_id: str) -> None:
    """Show a formula."""

    async def action(client: FormulaicClient, formatter: BaseFormatter) -> str:
        return formatter.format_result(await client.get_formula(formula_id), title=formula_id)

    _run(ctx, action)


@cli.command("scripts")
@click.argument("formula_id")
@click.pass_context
def scripts_command(ctx: click.Context, formula_id: str) -> None:
    """Show the scripts of a formula."""

    async def action(client: FormulaicClient, formatter: BaseFormatter) -> str:
        return formatter.format_result(await client.get_scripts(formula_id))

    _run(ctx, action)


@cli.command("create-formula")
@click.option("--data", "data_json", required=True, help="Formula definition as JSON")
@click.pass_context
def create_formula_command(ctx: click.Context, data_json: str) -> None:
    """Create a formula."""
    data = _parse_json(data_json, "--data")
    if not isinstance(data, dict):
        raise click.BadParameter("must be a JSON object", param_hint="--data")

    async def action(client: FormulaicClient, formatter: BaseFormatter) -> str:
        return formatter.format_result(await client.create_formula(data))

    _run(ctx, action)


@cli.command("complete")
@click.argument("formula_id")
@click.option("--model", "-m", "models", multiple=True, help="Model to run (repeatable)")
@click.option("--variables", "variables_json", help="Variables as a JSON array")
@click.option("--data", "data_json", help="Extra request fields as a JSON object")
@click.pass_context
def complete_command(
    ctx: click.Context,
    formula_id: str,
    models: tuple[str, ...],
    variables_json: Optional[str],
    data_json: Optional[str],
) -> None:
    """Run a formula and print the artifact."""
    data = _parse_json(data_json, "--data") or {}
    if not isinstance(data, dict):
        raise click.BadParameter("must be a JSON object", param_hint="--data")
    if models:
        data["models"] = list(models)
    variables = _parse_json(variables_json, "--variables")
    if variables is not None:
        data["variables"] = variables

    async def action(client: FormulaicClient, formatter: BaseFormatter) -> str:
        return formatter.format_result(await client.create_completion(formula_id, data))

    _run(ctx, action)


@cli.command("chat")
@click.argument("formula_id")
@click.argument("messages", nargs=-1, required=True)
@click.option("--role", default="user", show_default=True, help="Role for the messages")
@click.pass_context
def chat_command(ctx: click.Context, formula_id: str, messages: tuple[str, ...], role: str) -> None:
    """Send one or more messages to a formula's chat."""
    payload = [ChatMessage(role=role, content=m).model_dump() for m in messages]

    async def action(client: FormulaicClient, formatter: BaseFormatter) -> str:
        return formatter.format_result(await client.create_chat_completion(formula_id, payload))

    _run(ctx, action)


@cli.group("files")
def files_group() -> None:
    """Manage files attached to a formula."""


@files_group.command("list")
@click.argument("formula_id")
@click.pass_context
def files_list(ctx: click.Context, formula_id: str) -> None:
    """List files of a formula."""

    async def action(client: FormulaicClient, formatter: BaseFormatter) -> str:
        payload = await client.get_files(formula_id)
        files = [FileInfo.model_validate(f) for f in _as_list(payload)]
        return formatter.format_files(files, title=f"Files of {formula_id}")

    _run(ctx, action)


@files_group.command("get")
@click.argument("formula_id")
@click.argument("file_id")
@click.pass_context
def files_get(ctx: click.Context, formula_id: str, file_id: str) -> None:
    """Show one file."""

    async def action(client: FormulaicClient, formatter: BaseFormatter) -> str:
        return formatter.format_result(await client.get_file(formula_id, file_id))

    _run(ctx, action)


@files_group.command("upload")
@click.argument("formula_id")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--name", "file_name", help="File name sent to the server (default: PATH's name)")
@click.pass_context
def files_upload(ctx: click.Context, formula_id: str, path: Path, file_name: Optional[str]) -> None:
    """Upload a local file to a formula."""

    async def action(client: FormulaicClient, formatter: BaseFormatter) -> str:
        result = await client.upload_file(formula_id, path, file_name or path.name)
        return formatter.format_result(result)

    _run(ctx, action)


@files_group.command("update")
@click.argument("formula_id")
@click.argument("file_id")
@click.option("--data", "data_json", required=True, help="Fields to change as a JSON object")
@click.pass_context
def files_update(ctx: click.Context, formula_id: str, file_id: str, data_json: str) -> None:
    """Update file metadata."""
    data = _parse_json(data_json, "--data")
    if not isinstance(data, dict):
        raise click.BadParameter("must be a JSON object", param_hint="--data")

    async def action(client: FormulaicClient, formatter: BaseFormatter) -> str:
        return formatter.format_result(await client.update_file(formula_id, file_id, data))

    _run(ctx, action)


@files_group.command("delete")
@click.argument("formula_id")
@click.argument("file_id")
@click.pass_context
def files_delete(ctx: click.Context, formula_id: str, file_id: str) -> None:
    """Delete a file."""

    async def action(client: FormulaicClient, formatter: BaseFormatter) -> str:
        result = await client.delete_file(formula_id, file_id)
        if result is None:
            return f"Deleted {file_id}\n"
        return formatter.format_result(result)

    _run(ctx, action)
