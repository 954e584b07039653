"""
elfcat CLI
===========

Click-based command line for elfcat: decode one ELF file, print a
structural summary and write an annotated HTML hex-dump report.

Usage::

    # Summary on the terminal plus ./ls.html
    elfcat /usr/bin/ls

    # Report into another directory, no terminal summary
    elfcat /usr/bin/ls --output-dir reports --quiet

    # Machine-readable structure on stdout
    elfcat /usr/bin/ls --json --no-report

References:
    - Click documentation: https://click.palletsprojects.com/
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from shared.config import ElfcatConfig
from shared.console import ElfcatConsole
from shared.logger import ElfcatLogger

from elfcat.core.engine import ElfcatEngine
from elfcat.core.errors import ElfError
from elfcat.output.console import ElfConsoleOutput
from elfcat.output.report import ElfReportGenerator
from elfcat.utils import construct_filename


@click.command("elfcat")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output-dir", "-o",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory for the HTML report (default: from config, else '.').",
)
@click.option(
    "--json", "json_output",
    is_flag=True,
    default=False,
    help="Print the decoded structure as JSON to stdout.",
)
@click.option(
    "--no-report",
    is_flag=True,
    default=False,
    help="Do not write the HTML report.",
)
@click.option(
    "--quiet", "-q",
    is_flag=True,
    default=False,
    help="Suppress the terminal summary.",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    default=False,
    help="Enable debug logging.",
)
@click.option(
    "--config", "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to an elfcat TOML configuration file.",
)
def elfcat_cli(
    path: str,
    output_dir: str | None,
    json_output: bool,
    no_report: bool,
    quiet: bool,
    verbose: bool,
    config_path: str | None,
) -> None:
    """Decode the ELF file PATH and write an annotated hex-dump report.

    \b
    Examples:
        elfcat /bin/true
        elfcat build/firmware.elf -o reports --quiet
    """
    console = ElfcatConsole(quiet=quiet or json_output)
    errors = ElfcatConsole(stderr=True)

    try:
        config = ElfcatConfig.load(config_path)
    except (OSError, ValueError) as exc:
        errors.error(f"Cannot load configuration: {exc}")
        sys.exit(2)

    settings = config.global_settings
    logger = ElfcatLogger(
        "cli",
        log_level="DEBUG" if verbose or settings.debug else settings.log_level,
        log_file=settings.log_file,
        json_logs=settings.log_json,
    )

    engine = ElfcatEngine(config=config, logger=logger)
    try:
        decoded = engine.analyze(path)
    except ElfError as exc:
        errors.error(f"Cannot decode {path}: {exc}")
        for label, description in exc.identification or ():
            errors.info(f"{label}: {description}")
        sys.exit(1)
    except (OSError, ValueError) as exc:
        errors.error(f"Cannot read {path}: {exc}")
        sys.exit(1)

    if json_output:
        data = ElfReportGenerator.to_json_dict(decoded)
        click.echo(json.dumps(data, indent=2, ensure_ascii=False))
    else:
        ElfConsoleOutput(console=console).display(decoded)

    if no_report:
        return

    report_name = construct_filename(path, config.report.report_suffix)
    if report_name is None:
        errors.error(f"Cannot derive a report name from {path}")
        sys.exit(1)

    target_dir = Path(output_dir) if output_dir is not None else Path(config.report.output_dir)
    generator = ElfReportGenerator(bytes_per_row=config.report.bytes_per_row)
    with logger.timed("HTML report"):
        report_path = generator.generate_html(decoded, target_dir / report_name)
    console.success(f"HTML report saved: {report_path}")


def main() -> None:
    """Entry point for the ``elfcat`` console script."""
    elfcat_cli()


if __name__ == "__main__":
    main()
