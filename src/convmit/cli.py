"""CLI interface for convmit."""

from __future__ import annotations

import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.text import Text

from . import __version__
from .config import Config
from .errors import ConfigError, ConvmitError
from .generator import CommitGenerator, GenerateOptions
from .git import GitError
from .models import Model, Provider

console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )
    # httpx logs every request at INFO; keep it for --verbose only
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)


def _split_paths(ctx: click.Context, param: click.Parameter, value: tuple[str, ...]) -> list[str]:
    return [part.strip() for item in value for part in item.split(",") if part.strip()]


def print_models(config: Config) -> None:
    """Print every supported model grouped by provider."""
    try:
        default = config.resolve_model()
    except ConfigError:
        logger.debug("Configured default model is invalid; listing without a default")
        default = None
    table = Table(title="Available models", box=None)
    table.add_column("Provider", style="bold")
    table.add_column("Model", style="cyan")
    table.add_column("API id", style="dim")
    table.add_column("Default")

    for provider in Provider:
        for model in Model.all_models():
            if model.provider is not provider:
                continue
            table.add_row(
                provider.display_name,
                model.cli_name,
                model.api_id,
                "✓" if model is default else "",
            )
    console.print(table)


def _save_key(config: Config, provider: Provider, api_key: str) -> None:
    config.set_api_key(provider, api_key)
    console.print(f"[green]✓ {provider.display_name} API key saved to config[/]")


@click.command()
@click.option("--set-claude-key", metavar="KEY", help="Set the Claude API key in config")
@click.option("--set-openai-key", metavar="KEY", help="Set the OpenAI API key in config")
@click.option("--set-gemini-key", metavar="KEY", help="Set the Gemini API key in config")
@click.option("--set-mistral-key", metavar="KEY", help="Set the Mistral API key in config")
@click.option(
    "--set-default-model",
    type=click.Choice(Model.cli_names()),
    help="Set the default model in config",
)
@click.option("--list-models", is_flag=True, help="List all available models")
@click.option(
    "-m",
    "--model",
    type=click.Choice(Model.cli_names()),
    help="Model to use (default: configured default or haiku-3-5)",
)
@click.option(
    "-n",
    "--no-commit",
    is_flag=True,
    help="Only print the generated message, do not commit",
)
@click.option("--edit", is_flag=True, help="Edit the generated message before using it")
@click.option(
    "--only",
    multiple=True,
    metavar="FILE[,FILE]",
    callback=_split_paths,
    help="Limit the prompt to the specified files",
)
@click.option(
    "--exclude",
    multiple=True,
    metavar="FILE[,FILE]",
    callback=_split_paths,
    help="Files to exclude from the generated prompt",
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    help="Print only the commit message (useful for scripts and hooks)",
)
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging and tracebacks")
@click.version_option(__version__)
def main(
    set_claude_key: str | None,
    set_openai_key: str | None,
    set_gemini_key: str | None,
    set_mistral_key: str | None,
    set_default_model: str | None,
    list_models: bool,
    model: str | None,
    no_commit: bool,
    edit: bool,
    only: list[str],
    exclude: list[str],
    quiet: bool,
    verbose: bool,
) -> None:
    """Generate conventional commit messages for staged changes using AI.

    \b
    Examples:
      # Generate a message and commit with it
      convmit

      # Only print the message
      convmit --no-commit

      # Use a specific model
      convmit --model gpt-5-mini

      # Store an API key
      convmit --set-claude-key sk-ant-...
    """
    setup_logging(verbose)

    try:
        config = Config.load()

        key_flags = {
            Provider.CLAUDE: set_claude_key,
            Provider.OPENAI: set_openai_key,
            Provider.GEMINI: set_gemini_key,
            Provider.MISTRAL: set_mistral_key,
        }
        for provider, api_key in key_flags.items():
            if api_key is not None:
                _save_key(config, provider, api_key)
                return

        if set_default_model:
            config.set_default_model(Model.from_cli_name(set_default_model))
            console.print(f"[green]✓ Default model set to {set_default_model}[/]")
            return

        if list_models:
            print_models(config)
            return

        selected = config.resolve_model(model)
        api_key = config.validate_model_config(selected)
        logger.debug("Using model %s (%s)", selected.cli_name, selected.api_id)

        generator = CommitGenerator(
            GenerateOptions(
                model=selected,
                only=only,
                exclude=exclude,
                quiet=quiet,
                verbose=verbose,
            ),
            api_key,
        )
        try:
            result = generator.generate()
        finally:
            generator.close()

        message = result.message
        if not result.is_conventional and not quiet:
            err_console.print(
                "[yellow]⚠ Response is not a conventional commit; using it as returned[/]"
            )

        if quiet:
            click.echo(message)
        else:
            console.print("[bold blue]Generated commit message:[/]")
            console.print(Text(message, style="cyan"), soft_wrap=True)

        if edit:
            edited = click.edit(message, extension=".gitcommit")
            if edited is not None:
                message = edited.strip()
            if not message:
                raise ConvmitError("Aborting commit due to empty commit message")

        if no_commit:
            return

        generator.commit(message)
        if not quiet:
            console.print("[bold green]✓ Committed with generated message[/]")

    except ConvmitError as e:
        if verbose:
            err_console.print_exception()
        else:
            err_console.print(Text(f"❌ Error: {e}", style="red"), soft_wrap=True)
        exit_code = e.returncode if isinstance(e, GitError) else 1
        sys.exit(exit_code or 1)


if __name__ == "__main__":
    main()
