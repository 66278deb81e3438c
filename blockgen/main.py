"""Command line interface for blockgen.

This module provides a command-line interface for generating source code from
block workspaces with a pluggable language binding.
"""

import importlib
import importlib.util
import inspect
import os
import sys
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any, Optional, TypeVar, cast

import arrow
import typer
import watchdog.events
import watchdog.observers
from loguru import logger
from watchdog.events import FileSystemEventHandler

from blockgen import __version__
from blockgen.generator import Generator, GeneratorError
from blockgen.workspace import Workspace, WorkspaceFormatError, load_workspace

# Define type variables for TypedCallable
F = TypeVar("F", bound=Callable[..., Any])


# TypedCommand decorator helper
def typed_command(app_command: Any) -> Callable[[F], F]:
    """Wrap typer command with proper typing for mypy."""

    def decorator(func: F) -> F:
        return cast(F, app_command(func))

    return decorator


app = typer.Typer(
    name="blockgen",
    help=(
        "Generate source code from block workspaces. "
        "Commands: generate, check, rules, watch."
    ),
    add_completion=False,
)


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log generation details"
    ),
) -> None:
    # Runs before every command
    logger.remove()
    logger.add(
        lambda message: typer.echo(message, err=True, nl=False),
        level="DEBUG" if verbose else "INFO",
        format="<level>{level: <8}</level> | {message}",
    )


def _load_binding_module(binding: str) -> Any:
    """Load the module holding a language binding.

    Args:
        binding: Path to a Python file, or a dotted module name

    Returns:
        Loaded module
    """
    if not binding.endswith(".py") and not os.path.isfile(binding):
        return importlib.import_module(binding)

    abs_path = os.path.abspath(binding)
    module_dir = os.path.dirname(abs_path)
    module_name = os.path.splitext(os.path.basename(abs_path))[0]

    # Let the binding import its siblings
    if module_dir not in sys.path:
        sys.path.insert(0, module_dir)

    spec = importlib.util.spec_from_file_location(module_name, abs_path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Could not load module from {binding}")

    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _find_generator(module: Any, attribute: str = "") -> Generator:
    """Find the generator instance exported by a binding module.

    Args:
        module: The imported binding module
        attribute: Name of the generator attribute; empty to auto-detect

    Returns:
        The generator instance
    """
    if attribute:
        generator = getattr(module, attribute, None)
        if not isinstance(generator, Generator):
            raise ValueError(f"'{attribute}' is not a Generator instance")
        return generator

    generators = {
        name: obj
        for name, obj in inspect.getmembers(module)
        if isinstance(obj, Generator) and not name.startswith("__")
    }
    if not generators:
        raise ValueError("No Generator instance found in the binding module")
    if len(generators) > 1:
        raise ValueError(
            f"Multiple generators found ({', '.join(sorted(generators))}); "
            "name one with module:attribute"
        )
    return next(iter(generators.values()))


def _get_generator(language: str) -> Generator:
    """Resolve a --language value to a generator.

    Args:
        language: "path/to/binding.py", "package.module" or either followed
            by ":attribute"

    Returns:
        The generator instance
    """
    binding, attribute = language, ""
    if not os.path.isfile(language) and ":" in language:
        binding, _, attribute = language.rpartition(":")
    try:
        module = _load_binding_module(binding)
        generator = _find_generator(module, attribute)
    except ImportError as e:
        logger.error(f"Failed to load language binding: {e}")
        raise typer.Exit(1) from e
    except ValueError as e:
        logger.error(f"Invalid language binding: {e}")
        raise typer.Exit(1) from e

    logger.info(f"Using {generator.name} generator with {len(generator.rules)} rules")
    return generator


def _get_workspace(workspace_file: str) -> Workspace:
    try:
        return load_workspace(workspace_file)
    except OSError as e:
        logger.error(f"Failed to read workspace: {e}")
        raise typer.Exit(1) from e
    except WorkspaceFormatError as e:
        logger.error(f"Invalid workspace: {e}")
        raise typer.Exit(1) from e


def _generate(workspace_file: str, generator: Generator) -> str:
    """Load a workspace and run one generation pass over it."""
    workspace = _get_workspace(workspace_file)
    try:
        return generator.workspace_to_code(workspace)
    except GeneratorError as e:
        logger.error(f"Generation error: {e}")
        raise typer.Exit(1) from e


def _add_header_comments(code: str, source_file: str, generator: Generator) -> str:
    """Add header comments to the code.

    Args:
        code: Generated code
        source_file: Workspace file the code came from
        generator: Generator that produced the code

    Returns:
        Code with header comments
    """
    prefix = generator.config.comment_prefix
    timestamp = arrow.utcnow().format("YYYY-MM-DD HH:mm:ss UTC")
    header = f"{prefix}Generated by blockgen v{__version__}\n"
    header += f"{prefix}Generation time: {timestamp}\n"
    header += f"{prefix}Source file: {os.path.basename(source_file)}\n"
    header += f"{prefix}Language: {generator.name}\n"
    header += "\n"
    return header + code


def _format_code(code: str, format_type: str, source_file: str, generator: Generator) -> str:
    """Format generated code for output.

    Args:
        code: Raw generated code
        format_type: Format type (plain, commented)
        source_file: Workspace file the code came from
        generator: Generator that produced the code

    Returns:
        Formatted code
    """
    if format_type == "commented":
        return _add_header_comments(code, source_file, generator)
    if format_type != "plain":
        logger.warning(f"Unknown format: {format_type}. Using plain.")
    return code


def _write_output(code: str, output: Path | None) -> None:
    if output is None:
        typer.echo(code, nl=False)
        return
    logger.info(f"Writing generated code to {output}...")
    with open(output, "w") as f:
        f.write(code)
    logger.info(f"Generated code written to {output}")


# Define reusable arguments
WORKSPACE_ARG = typer.Argument(..., help="JSON file containing the workspace")
LANGUAGE_OPTION = typer.Option(
    ..., "--language", "-l", help="Binding file or module, optionally :attribute"
)


@typed_command(app.command("generate"))
def generate_code(
    workspace_file: str = WORKSPACE_ARG,
    language: str = LANGUAGE_OPTION,
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Output file (default: stdout)"
    ),
    format: str = typer.Option(
        "plain", "--format", "-f", help="Code format (plain, commented)"
    ),
) -> None:
    """Generate code for a workspace.

    Example: blockgen generate examples/hello_world.json -l examples/python_lite.py
    """
    generator = _get_generator(language)
    code = _generate(workspace_file, generator)
    _write_output(_format_code(code, format, workspace_file, generator), output)


@typed_command(app.command("check"))
def check_workspace(
    workspace_file: str = WORKSPACE_ARG,
    language: str = LANGUAGE_OPTION,
) -> None:
    """List block types in a workspace that the language cannot translate.

    Disabled blocks are included, since enabling them must not break generation.
    """
    generator = _get_generator(language)
    workspace = _get_workspace(workspace_file)

    missing = sorted(
        {b.type for b in workspace.get_all_blocks() if not generator.has_rule(b.type)}
    )
    if not missing:
        logger.info(f"All {len(workspace)} blocks are supported by {generator.name}")
        return

    for block_type in missing:
        typer.echo(block_type)
    logger.error(f"{len(missing)} block types have no {generator.name} rule")
    raise typer.Exit(1)


@typed_command(app.command("rules"))
def list_rules(language: str = LANGUAGE_OPTION) -> None:
    """List the block types a language binding can translate."""
    generator = _get_generator(language)
    for block_type in sorted(generator.rules):
        typer.echo(block_type)


class WorkspaceChangeHandler(FileSystemEventHandler):  # type: ignore
    """Event handler for workspace file changes."""

    def __init__(self, workspace_file: str, generator: Generator, output: Path):
        """Initialize workspace change handler.

        Args:
            workspace_file: Path to the workspace file
            generator: Generator to run on every change
            output: File receiving the generated code
        """
        self.workspace_file = workspace_file
        self.generator = generator
        self.output = output
        self.needs_regeneration = True

    def on_modified(self, event: watchdog.events.FileSystemEvent) -> None:
        """Handle file modified event.

        Args:
            event: File system event
        """
        if event.src_path == os.path.abspath(self.workspace_file):
            logger.info(f"Detected changes in {self.workspace_file}")
            self.needs_regeneration = True

    def regenerate(self) -> bool:
        """Regenerate code if the workspace changed since the last run.

        Returns:
            True if code was written
        """
        if not self.needs_regeneration:
            return False
        self.needs_regeneration = False
        try:
            code = _generate(self.workspace_file, self.generator)
        except typer.Exit:
            # Already logged; keep watching for the next change
            return False
        _write_output(code, self.output)
        return True


@typed_command(app.command("watch"))
def watch_workspace(
    workspace_file: str = WORKSPACE_ARG,
    language: str = LANGUAGE_OPTION,
    output: Path = typer.Option(..., "--output", "-o", help="Output file"),
    interval: float = typer.Option(
        0.5, "--interval", help="Seconds between change checks"
    ),
) -> None:
    """Watch a workspace file and regenerate code on changes.

    Example: blockgen watch examples/hello_world.json -l examples/python_lite.py -o out.py
    """
    generator = _get_generator(language)
    observer = watchdog.observers.Observer()

    abs_workspace_file = os.path.abspath(workspace_file)
    handler = WorkspaceChangeHandler(abs_workspace_file, generator, output)

    # Watch the file's directory, not the file itself
    directory = os.path.dirname(abs_workspace_file)
    observer.schedule(handler, path=directory, recursive=False)
    observer.start()

    logger.info(f"Watching {workspace_file} (Ctrl+C to stop)...")
    try:
        while True:
            handler.regenerate()
            time.sleep(interval)
    except KeyboardInterrupt:
        logger.info("Keyboard interrupt received, stopping...")
    finally:
        observer.stop()
        observer.join()


if __name__ == "__main__":
    app()
