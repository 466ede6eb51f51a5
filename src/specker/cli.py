"""Click CLI entry point for specker."""

from __future__ import annotations

from pathlib import Path

import click

from specker import __version__
from specker.config import (
    ConfigError,
    is_initialized,
    load_config,
    load_variables,
    options_from_config,
    parse_var_assignments,
    save_config,
)
from specker.logging_config import setup_logging
from specker.models import CheckFailure, ProjectConfig


@click.group()
@click.version_option(version=__version__, prog_name="specker")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log debug output")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Specker: check generated files against line-pattern specifications."""
    ctx.ensure_object(dict)
    setup_logging(verbose)


def _project_config() -> ProjectConfig:
    project_root = Path.cwd()
    if is_initialized(project_root):
        return load_config(project_root)
    return ProjectConfig()


def _collect_variables(
    config: ProjectConfig, vars_file: Path | None, var_items: tuple[str, ...]
) -> dict[str, str]:
    """Merge config, file and command-line variables; later sources win."""
    variables = dict(config.variables)
    if vars_file is not None:
        variables.update(load_variables(vars_file))
    variables.update(parse_var_assignments(var_items))
    return variables


var_option = click.option(
    "--var", "var_items", multiple=True, metavar="KEY=VALUE",
    help="Variable substituted into ${...} placeholders (repeatable)",
)
vars_file_option = click.option(
    "--vars-file", type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None, help="YAML mapping of variables",
)


@cli.command()
def init() -> None:
    """Initialize a project with a .specker/config.json."""
    project_root = Path.cwd()
    already = is_initialized(project_root)

    if already:
        click.echo("Warning: Project is already initialized. Keeping existing configuration.")
        config = load_config(project_root)
    else:
        config = ProjectConfig()

    spec_dir = project_root / config.spec_dir
    spec_dir.mkdir(parents=True, exist_ok=True)
    path = save_config(config, project_root)

    if not already:
        click.echo("Initialized specker project.")
        click.echo(f"  Created: {spec_dir}/")
        click.echo(f"  Config:  {path}")


@cli.command()
@click.argument(
    "spec_dir", required=False, type=click.Path(file_okay=False, path_type=Path)
)
@click.option("--ext", default=None, help="Spec file extension (default: txt)")
@click.option(
    "--root", type=click.Path(file_okay=False, path_type=Path), default=None,
    help="Directory that target file paths are relative to",
)
@var_option
@vars_file_option
@click.option(
    "--strict-eof/--no-strict-eof", default=None,
    help="Require items without a trailing skip marker to consume the whole file",
)
@click.option("--jobs", "-j", type=int, default=1, help="Items matched in parallel")
@click.option("--param", default="file", help="Item parameter naming the target file")
@click.pass_context
def check(
    ctx: click.Context,
    spec_dir: Path | None,
    ext: str | None,
    root: Path | None,
    var_items: tuple[str, ...],
    vars_file: Path | None,
    strict_eof: bool | None,
    jobs: int,
    param: str,
) -> None:
    """Check files against the specs found in SPEC_DIR."""
    from specker.runner import check_spec_dir

    try:
        config = _project_config()
        variables = _collect_variables(config, vars_file, var_items)
        options = options_from_config(config, strict_eof)
    except (ConfigError, ValueError) as e:
        click.echo(f"Error: {e}")
        ctx.exit(1)
        return

    spec_dir = spec_dir or Path(config.spec_dir)
    if root is None and config.root:
        root = Path(config.root)

    try:
        result = check_spec_dir(
            spec_dir,
            options,
            extension=ext or config.extension,
            variables=variables,
            root=root,
            param=param,
            jobs=max(1, jobs),
        )
    except FileNotFoundError as e:
        click.echo(f"Error: {e}")
        ctx.exit(1)
        return

    for failure in result.failures:
        click.echo(_describe_failure(failure, root or spec_dir))
        click.echo()

    click.echo(
        f"Checked {result.checked} item(s): "
        f"{result.passed} passed, {len(result.failures)} failed."
    )
    if not result.success:
        ctx.exit(1)


def _describe_failure(failure: CheckFailure, root: Path) -> str:
    from specker.display import format_error_for_file, summarize
    from specker.errors import MatchError, ParseError

    error = failure.error
    if isinstance(error, ParseError):
        header = f"FAILED {failure.spec_file}: parse error"
        return f"{header}\n{format_error_for_file(Path(failure.spec_file), error)}"
    if not failure.target:
        return f"FAILED {failure.spec_file}\n  {summarize(error)}"

    header = f"FAILED {failure.spec_file}:{failure.item_line} -> {failure.target}"
    if isinstance(error, MatchError):
        body = format_error_for_file(root / failure.target, error, label=failure.target)
        return f"{header}\n{body}"
    return f"{header}\n  {summarize(error)}"


@cli.command("parse")
@click.argument("spec_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--inspect", is_flag=True, default=False, help="Display items in readable form")
@click.pass_context
def parse_cmd(ctx: click.Context, spec_file: Path, inspect: bool) -> None:
    """Parse a spec file and report its items."""
    from specker.display import format_error_for_file
    from specker.errors import ParseError, PlaceholderError
    from specker.parser import parse_spec_file
    from specker.variables import placeholders

    try:
        options = options_from_config(_project_config())
    except (ConfigError, ValueError) as e:
        click.echo(f"Error: {e}")
        ctx.exit(1)
        return

    try:
        document = parse_spec_file(spec_file, options)
    except ParseError as e:
        click.echo(format_error_for_file(spec_file, e))
        ctx.exit(1)
        return

    click.echo(f"Parsed {len(document)} item(s) from {spec_file}.")
    if not inspect:
        return

    for item in document:
        click.echo(f"\n  Item at line {item.line_number}")
        for key, value in item.params.items():
            click.echo(f"    {key}: {value}")
        names: list[str] = []
        for entry in item.body:
            if entry.is_skip:
                click.echo(f"    {options.skip_marker}")
                continue
            click.echo(f"    | {entry.text}")
            try:
                found = placeholders(entry.text, options)
            except PlaceholderError as e:
                click.echo(f"    ! line {entry.line_number}: {e}")
                continue
            names.extend(n for n in found if n not in names)
        if names:
            click.echo(f"    Variables: {', '.join(names)}")


@cli.command()
@click.argument("spec_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@var_option
@vars_file_option
@click.option(
    "--out", "out_dir", type=click.Path(file_okay=False, path_type=Path), default=None,
    help="Write rendered files below this directory instead of printing them",
)
@click.option("--param", default="file", help="Item parameter naming the target file")
@click.pass_context
def render(
    ctx: click.Context,
    spec_file: Path,
    var_items: tuple[str, ...],
    vars_file: Path | None,
    out_dir: Path | None,
    param: str,
) -> None:
    """Render the expected content of each item in SPEC_FILE."""
    from specker.errors import ParseError, SpecError
    from specker.matcher import render_item
    from specker.parser import parse_spec_file

    try:
        config = _project_config()
        variables = _collect_variables(config, vars_file, var_items)
        options = options_from_config(config)
        document = parse_spec_file(spec_file, options)
    except (ConfigError, ParseError, ValueError) as e:
        click.echo(f"Error: {e}")
        ctx.exit(1)
        return

    failed = 0
    for item, value in document.iter_item_values(param):
        try:
            text = render_item(item, variables, options)
            if out_dir is None:
                click.echo(f"==> {value} <==")
                click.echo(text, nl=False)
            else:
                target = out_dir / value
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(text, encoding="utf-8")
                click.echo(f"Wrote {target}")
        except SpecError as e:
            click.echo(f"Error: {value}: {e}")
            failed += 1

    if failed:
        ctx.exit(1)
