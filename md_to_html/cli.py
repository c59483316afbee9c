"""
Converts a Markdown file to HTML.
The result is printed to stdout, or written to a file with `--output`.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
from .advisory import ServiceAdvisory, format_advisory
from .config import ConfigError, apply_overrides, build_config
from .exceptions import ParseFileError
from .filesystem import get_max_file_size, normalize_filepath, write_html
from .parser import read_markdown_file
from .renderer import to_html

__all__ = ["cli"]

logger = logging.getLogger(__name__)


@click.command()
@click.version_option(package_name="md-to-html")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    help="Write the HTML to this file instead of stdout",
)
@click.option("--escape/--no-escape", default=None, help="HTML-escape text content")
@click.option("--advisory-title", help="Wrap the output as a service advisory with this title")
@click.option("--verbose", "-v", is_flag=True, help="Log debugging details to stderr")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def cli(
    filepath: str,
    output: str | None = None,
    escape: bool | None = None,
    advisory_title: str | None = None,
    verbose: bool = False,
):
    """
    Entry point for converting a Markdown file to HTML.

    Args:
        filepath: Path to the Markdown file to convert.
        output: Destination file for the HTML; stdout when omitted.
        escape: Override for HTML-escaping text content.
        advisory_title: Title of the service advisory wrapping the body.
        verbose: Enable debug logging on stderr.

    Returns:
        None.

    Raises:
        click.BadParameter: If the input path is invalid or configuration
            values are unsupported.
        click.ClickException: If reading, size limits, or writing fail.

    Examples:
        md-to-html advisory.md --advisory-title "Route 15 detour" -o advisory.html
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    base_dir = Path.cwd().resolve()
    try:
        filepath = normalize_filepath(filepath, base_dir)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error
    try:
        config = build_config(filepath.parent, escape_html=escape)
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
    except ValueError as error:
        raise click.ClickException(str(error)) from error
    config = apply_overrides(config, max_file_size=max_file_size)

    try:
        source = read_markdown_file(filepath, config)
    except ParseFileError as error:
        raise click.ClickException(str(error)) from error

    if advisory_title is not None:
        html = format_advisory(ServiceAdvisory(advisory_title, source), config)
    else:
        html = to_html(source, escape=config.escape_html)

    # Writes HTML file
    if output is not None:
        output_path = Path(output).expanduser().absolute()
        try:
            write_html(output_path, html)
        except IOError as error:
            raise click.ClickException(str(error)) from error
        logger.debug("Converted %s to %s", filepath, output_path)
    # Prints HTML
    else:
        click.echo(html)


if __name__ == "__main__":
    cli()
