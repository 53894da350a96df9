"""Main CLI entry point for autotestgen."""

import logging
import sys
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.syntax import Syntax

from ..adapters.codegen.router import create_backend
from ..application.generate_usecase import GenerateUseCase, parse_test_names
from ..application.source import extract_function_source, render_test_module
from ..config.loader import ConfigLoader
from ..ports.codegen_error import ConfigurationError

console = Console(stderr=True)


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Install a single RichHandler on the root logger."""
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if isinstance(handler, RichHandler):
            root_logger.removeHandler(handler)

    rich_handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    rich_handler.setFormatter(logging.Formatter(fmt="%(message)s"))
    root_logger.addHandler(rich_handler)

    if verbose:
        root_logger.setLevel(logging.DEBUG)
    elif quiet:
        root_logger.setLevel(logging.WARNING)
    else:
        root_logger.setLevel(logging.INFO)
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


@click.group()
@click.option(
    "--config",
    "-c",
    "config_file",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--quiet", "-q", is_flag=True, help="Only log warnings and errors")
@click.version_option(package_name="autotestgen")
@click.pass_context
def app(ctx: click.Context, config_file: Path | None, verbose: bool, quiet: bool) -> None:
    """autotestgen - generate test functions with a hosted code model."""
    setup_logging(verbose=verbose, quiet=quiet)
    ctx.ensure_object(dict)
    ctx.obj["config_file"] = config_file


@app.command()
@click.argument("source_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--function", "-f", "function_name", required=True, help="Function to test (Class.method for methods)")
@click.option("--tests", "-t", "tests", required=True, help="Comma-separated test names, e.g. 'test_valid,test_div_by_zero'")
@click.option("--backend", "-b", type=click.Choice(["chat", "completion"]), default=None, help="Generation strategy")
@click.option("--model", "-m", default=None, help="Model identifier for the selected backend")
@click.option("--language", "-l", default=None, help="Language tag expected on the code fence")
@click.option("--module", "module_name", default=None, help="Import path of the module under test (defaults to the file stem)")
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Write the test module here instead of printing it")
@click.pass_context
def generate(
    ctx: click.Context,
    source_file: Path,
    function_name: str,
    tests: str,
    backend: str | None,
    model: str | None,
    language: str | None,
    module_name: str | None,
    output: Path | None,
) -> None:
    """Generate the named tests for a function in SOURCE_FILE."""
    try:
        test_names = parse_test_names(tests)
        function_source = extract_function_source(source_file, function_name)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e
    if not test_names:
        raise click.BadParameter("At least one test name is required", param_hint="--tests")

    try:
        cli_overrides: dict[str, Any] = {}
        if backend:
            cli_overrides["backend"] = backend
        if language:
            cli_overrides["extraction"] = {"language": language}
        config = ConfigLoader(ctx.obj.get("config_file")).load_config(cli_overrides=cli_overrides)
        if model:
            backend_config = getattr(config, config.backend).model_copy(update={"model": model})
            config = config.model_copy(update={config.backend: backend_config})

        usecase = GenerateUseCase(
            backend_factory=lambda: create_backend(config),
            language=config.extraction.language,
        )
        results = usecase.generate_tests(function_source, test_names)
    except ConfigurationError as e:
        console.print(f"[red]Configuration error:[/red] {e.message}")
        sys.exit(2)

    module_text = render_test_module(module_name or source_file.stem, function_name, results)
    if output:
        output.write_text(module_text, encoding="utf-8")
        console.print(f"[green]Wrote {output}[/green]")
    elif sys.stdout.isatty():
        Console(soft_wrap=True).print(Syntax(module_text, config.extraction.language))
    else:
        # Redirected output must be the module text, byte for byte
        click.echo(module_text, nl=False)

    failed = [r.test_name for r in results if not r.success]
    if failed:
        console.print(f"[yellow]Failed to generate: {', '.join(failed)}[/yellow]")
        sys.exit(1)


def main() -> None:
    app(obj={})


if __name__ == "__main__":
    main()
