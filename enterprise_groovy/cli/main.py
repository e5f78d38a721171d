"""Command-line interface for Enterprise Groovy.

Provides CLI commands for checking node tree descriptors against the
enforcement conventions.
"""

import logging
import sys
from pathlib import Path
from typing import Dict, Optional, Tuple

import click
import yaml


def setup_logging(verbose: bool = False, debug: bool = False) -> logging.Logger:
    """Setup logging for CLI commands."""
    level = logging.DEBUG if debug else (logging.INFO if verbose else logging.WARNING)
    # Console stays at the requested level even when --log-file lowers the
    # package logger to INFO
    console = logging.StreamHandler()
    console.setLevel(level)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
        handlers=[console],
    )
    return logging.getLogger("enterprise_groovy")


def build_properties(
    properties: Tuple[str, ...],
    conventions: Optional[str],
    console: bool,
) -> Dict[str, str]:
    """Merge environment properties with ``-D key=value`` and shortcut options.

    Later sources win: environment, then ``-D``, then ``--conventions`` and
    ``--console``.
    """
    from enterprise_groovy.config import (
        CONSOLE_PROPERTY,
        CONVENTIONS_PROPERTY,
        properties_from_environment,
    )

    merged = properties_from_environment()
    for item in properties:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected key=value, got '{item}'", param_hint="-D")
        merged[key.strip()] = value.strip()

    if conventions:
        merged[CONVENTIONS_PROPERTY] = conventions
    if console:
        merged[CONSOLE_PROPERTY] = "true"
    return merged


@click.group()
@click.version_option(version="0.1.0", prog_name="enterprise-groovy")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug output")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, debug: bool) -> None:
    """Enterprise Groovy: static compilation conventions for Groovy classes.

    Attaches CompileStatic to every non-exempt class and reports convention
    violations (def usage, dynamic compilation, unapproved extensions).

    Examples:

        # Check a tree descriptor against a conventions file
        enterprise-groovy check tree.yaml --conventions conventions.yaml

        # Override properties as in a console session
        enterprise-groovy check tree.yaml --console -D enterprise.groovy.defAllowed=false

        # Show the resolved configuration
        enterprise-groovy show-config --conventions conventions.yaml
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["logger"] = setup_logging(verbose, debug)


@cli.command()
@click.argument("tree", type=click.Path(exists=True, dir_okay=False))
@click.option("--conventions", "-c", help="Conventions file or inline YAML")
@click.option("--property", "-D", "properties", multiple=True,
              help="Override property as key=value (repeatable)")
@click.option("--console", is_flag=True, help="Resolve configuration as a console session")
@click.option("--skip-rule", "skip_rules", multiple=True, help="Rule ID to skip (repeatable)")
@click.option("--out", "-o", "output_path", type=click.Path(file_okay=False),
              help="Directory for JSON/CSV/Markdown exports")
@click.option("--log-file", type=click.Path(dir_okay=False),
              help="Write a timestamped log file")
@click.pass_context
def check(
    ctx: click.Context,
    tree: str,
    conventions: Optional[str],
    properties: Tuple[str, ...],
    console: bool,
    skip_rules: Tuple[str, ...],
    output_path: Optional[str],
    log_file: Optional[str],
) -> None:
    """Run the enforcement engine over a node tree descriptor.

    Prints one line per diagnostic and exits with status 1 when any
    diagnostic was reported.
    """
    logger = ctx.obj["logger"]

    from enterprise_groovy.config import ConfigurationResolver
    from enterprise_groovy.core.enforcement import EnforcementEngine, RuleRegistry, export_all
    from enterprise_groovy.io import TreeFormatError, get_logger, load_units, log_yaml

    if log_file:
        _, actual_log_path = get_logger(log_file)
        click.echo(f"Logging to: {actual_log_path}")

    unknown = [r for r in skip_rules if r not in RuleRegistry.list_rule_ids()]
    if unknown:
        raise click.BadParameter(
            f"unknown rule(s): {', '.join(unknown)}", param_hint="--skip-rule"
        )

    merged = build_properties(properties, conventions, console)
    resolver = ConfigurationResolver(lambda: merged)
    config = resolver.get()
    log_yaml(logger, {"configuration": config.to_dict()})

    try:
        units = load_units(tree)
    except TreeFormatError as e:
        raise click.ClickException(str(e))

    engine = EnforcementEngine(config=config, skip_rules=list(skip_rules))
    result = engine.execute_many(units)

    for d in result.diagnostics:
        click.echo(f"{d.unit}: {d.owner} {d.node_kind} '{d.node_name}': {d.message}")

    click.echo(
        f"Checked {len(result.classes_checked)} classes in "
        f"{len(result.units_processed)} units "
        f"({len(result.units_skipped)} skipped, {len(result.classes_exempt)} exempt): "
        f"{len(result.annotated_classes)} annotated, {result.n_diagnostics} diagnostics"
    )

    if output_path:
        paths = export_all(result, Path(output_path), config=config, tree_path=Path(tree))
        click.echo(f"Output saved to: {paths['json'].parent}")

    if result.has_errors:
        sys.exit(1)


@cli.command("show-config")
@click.option("--conventions", "-c", help="Conventions file or inline YAML")
@click.option("--property", "-D", "properties", multiple=True,
              help="Override property as key=value (repeatable)")
@click.option("--console", is_flag=True, help="Resolve configuration as a console session")
def show_config(
    conventions: Optional[str],
    properties: Tuple[str, ...],
    console: bool,
) -> None:
    """Print the resolved configuration and its rules as YAML."""
    from enterprise_groovy.config import (
        CONSOLE_PROPERTY,
        CONVENTIONS_PROPERTY,
        resolve_configuration,
        resolve_conventions_source,
    )
    from enterprise_groovy.core.enforcement import EnforcementEngine

    merged = build_properties(properties, conventions, console)

    if not merged.get(CONSOLE_PROPERTY) and merged.get(CONVENTIONS_PROPERTY):
        parsed = resolve_conventions_source(merged[CONVENTIONS_PROPERTY])
        config = parsed.configuration
        record = {
            "configuration": config.to_dict(),
            "recognized": parsed.recognized,
            "ignored": parsed.ignored,
        }
    else:
        config = resolve_configuration(merged)
        record = {"configuration": config.to_dict()}

    engine = EnforcementEngine(config=config)
    record["rules"] = {
        "available": engine.list_available_rules(),
        "active": engine.active_rule_ids(),
    }

    click.echo(yaml.safe_dump(record, sort_keys=False).rstrip("\n"))


def main() -> None:
    """Main entry point for CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
