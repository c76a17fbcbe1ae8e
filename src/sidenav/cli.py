"""Command-line interface."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Annotated

import typer
import yaml
from ruamel.yaml import YAML

from sidenav import __version__
from sidenav.config import (
    Config,
    content_directories,
    load_config,
    scaffold_sidebar,
)
from sidenav.content import ScanResult, scan_content
from sidenav.nav import flatten_entries
from sidenav.render import FORMATS, render_json, render_markdown
from sidenav.resolve import ResolveResult, resolve

DEFAULT_OUTPUTS = {"json": "sidebar.json", "markdown": "sidebar.md"}


def _make_logger(
    quiet: bool, verbose: bool = False
) -> tuple[Callable[..., None], Callable[..., None]]:
    """Create log and log_verbose functions for CLI output.

    Args:
        quiet: If True, suppress all output.
        verbose: If True, enable verbose logging (quiet overrides this).

    Returns:
        Tuple of (log, log_verbose) functions.
    """
    effective_verbose = verbose and not quiet

    def log(msg: str, color: str = "green", err: bool = False) -> None:
        if not quiet:
            typer.secho(msg, fg=color, err=err)

    def log_verbose(msg: str, color: str = "green", err: bool = False) -> None:
        if effective_verbose:
            typer.secho(msg, fg=color, err=err)

    return log, log_verbose


def version_callback(value: bool) -> None:
    """Print version and exit if --version flag is set."""
    if value:
        typer.echo(f"sidenav {__version__}")
        raise typer.Exit()


app = typer.Typer(
    help="Resolve a declarative sidebar config into a navigation tree.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback(invoke_without_command=True)
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """Resolve a declarative sidebar config into a navigation tree."""


def _resolve_site(
    config: Path, log: Callable[..., None]
) -> tuple[Config, ScanResult, ResolveResult]:
    """Load config, scan content and resolve the sidebar.

    Reports failures through ``log`` and raises typer.Exit(1).
    """
    try:
        cfg = load_config(config)
    except FileNotFoundError:
        log(f"Error: Config file not found: {config}", color="red", err=True)
        raise typer.Exit(1) from None
    except (ValueError, yaml.YAMLError) as e:
        log(f"Error loading config: {e}", color="red", err=True)
        raise typer.Exit(1) from None

    if not cfg.sidebar:
        log("Error: No sidebar configured.", color="red", err=True)
        log(
            "Add a 'sidebar' list to the config, or run 'sidenav init'.",
            color="yellow",
            err=True,
        )
        raise typer.Exit(1)

    try:
        scan = scan_content(cfg.content_dir)
    except FileNotFoundError as e:
        log(f"Error: {e}", color="red", err=True)
        log(
            "Hint: Set 'content_dir' in the config to your pages directory.",
            color="yellow",
            err=True,
        )
        raise typer.Exit(1) from None

    try:
        result = resolve(cfg.sidebar, scan.documents)
    except ValueError as e:
        log(f"Error resolving sidebar: {e}", color="red", err=True)
        raise typer.Exit(1) from None

    return cfg, scan, result


def _report(
    scan: ScanResult,
    result: ResolveResult,
    log: Callable[..., None],
    log_verbose: Callable[..., None],
) -> None:
    if scan.skipped:
        log_verbose("Skipped files:", color="yellow", err=True)
        for path, reason in scan.skipped:
            log_verbose(f"- {path} ({reason})", color="yellow", err=True)

    if result.warnings:
        log("Warnings:", color="yellow", err=True)
        for warning in result.warnings:
            log(f"- {warning}", color="yellow", err=True)


@app.command()
def build(
    config: Annotated[
        Path,
        typer.Option("--config", "-c", help="Path to sidenav.yml config file"),
    ] = Path("sidenav.yml"),
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output file (defaults to sidebar.json or sidebar.md beside config)",
        ),
    ] = None,
    output_format: Annotated[
        str,
        typer.Option("--format", help="Output format: json or markdown"),
    ] = "json",
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Preview what would be generated without writing files",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Suppress output (exit code only)"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show detailed progress"),
    ] = False,
) -> None:
    """Resolve the sidebar and write the navigation tree."""
    log, log_verbose = _make_logger(quiet, verbose)

    if output_format not in FORMATS:
        log(
            f"Error: Unknown format {output_format!r} "
            f"(expected one of: {', '.join(FORMATS)})",
            color="red",
            err=True,
        )
        raise typer.Exit(1)

    cfg, scan, result = _resolve_site(config, log)

    log_verbose(f"Site: {cfg.site_name}")
    log_verbose(f"Content: {cfg.content_dir} ({len(scan.documents)} pages)")
    log_verbose(f"Sections: {[section.label for section in cfg.sidebar]}")
    if dry_run:
        log_verbose("Dry run - no files will be written")

    if output_format == "markdown":
        text = render_markdown(
            result.tree,
            site_name=cfg.site_name,
            site_url=cfg.site_url,
            site_description=cfg.site_description,
        )
    else:
        text = render_json(result.tree)

    out_path = output or config.parent / DEFAULT_OUTPUTS[output_format]

    if dry_run:
        action = "Would generate"
        color = "yellow"
    else:
        action = "Generated"
        color = "green"
        try:
            out_path.parent.mkdir(parents=True, exist_ok=True)
            out_path.write_text(text, encoding="utf-8")
        except OSError as exc:
            log(f"Error writing output file: {exc}", color="red", err=True)
            raise typer.Exit(1) from None

    entries = result.tree.iter_entries()
    log(f"{action} {out_path} ({len(text):,} bytes)", color)
    log(f"{action} {len(entries)} sidebar entries", color)

    _report(scan, result, log, log_verbose)


@app.command()
def validate(
    config: Annotated[
        Path,
        typer.Option("--config", "-c", help="Path to sidenav.yml config file"),
    ] = Path("sidenav.yml"),
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Suppress output (exit code only)"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show detailed sidebar information"),
    ] = False,
) -> None:
    """Check that the sidebar resolves against the content."""
    log, log_verbose = _make_logger(quiet, verbose)

    cfg, scan, result = _resolve_site(config, log)

    entries = result.tree.iter_entries()
    log(f"Config valid: {config}")
    log(f"  Site: {cfg.site_name}")
    log(f"  Sections: {len(result.tree.items)}")
    log(f"  Entries: {len(entries)} of {len(scan.documents)} pages")

    # Verbose: show section details
    for item in result.tree.items:
        section_entries = [entry.target for entry in flatten_entries([item])]
        log_verbose(f"  {item.label}: {len(section_entries)} entries")
        for target in section_entries:
            log_verbose(f"    - {target}")

    _report(scan, result, log, log_verbose)


@app.command()
def init(
    config: Annotated[
        Path,
        typer.Option("--config", "-c", help="Path to sidenav.yml config file"),
    ] = Path("sidenav.yml"),
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite existing sidebar section"),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Suppress output (exit code only)"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show detailed progress"),
    ] = False,
) -> None:
    """Add a sidebar scaffolded from the content directories to the config."""
    log, log_verbose = _make_logger(quiet, verbose)

    if not config.exists():
        log(f"Error: Config file not found: {config}", color="red", err=True)
        log(
            "Create one first or specify path with --config.",
            color="yellow",
            err=True,
        )
        raise typer.Exit(1)

    yaml_rt = YAML()
    yaml_rt.preserve_quotes = True

    with open(config, encoding="utf-8") as f:
        data = yaml_rt.load(f)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        log("Error: Config file must be a mapping.", color="red", err=True)
        raise typer.Exit(1)

    if "sidebar" in data and not force:
        log("Error: sidebar already configured.", color="red", err=True)
        log(
            "Use --force to overwrite existing configuration.",
            color="yellow",
            err=True,
        )
        raise typer.Exit(1)

    content_dir = data.get("content_dir") or "docs"
    if not isinstance(content_dir, str):
        log("Error: 'content_dir' must be a string.", color="red", err=True)
        raise typer.Exit(1)
    content_path = Path(content_dir)
    if not content_path.is_absolute():
        content_path = config.parent / content_path

    directories = content_directories(content_path)
    if not directories:
        log(
            f"Warning: No content directories found in {content_path}",
            color="yellow",
            err=True,
        )

    data["sidebar"] = scaffold_sidebar(directories)

    with open(config, "w", encoding="utf-8") as f:
        yaml_rt.dump(data, f)

    log(f"Added sidebar with {len(directories)} sections to {config}")
    for directory in directories:
        log_verbose(f"  - autogenerate: {directory}")


if __name__ == "__main__":
    app()
