"""CLI entry point for swagger2angular."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from .codegen import Generator, export_templates, write_output
from .config import GeneratorConfig
from .exceptions import GeneratorError
from .loader import load_spec


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


@click.command()
@click.option("-s", "--source", default=None, help="Path to your swagger specification, can be file or a URL path.")
@click.option("-o", "--output-path", "output", default=None, help="Output path for the generated files.  [default: client]")
@click.option("-d", "--debug", is_flag=True, default=None, help="Enable verbose debug messages.")
@click.option("-t", "--template-path", default=None, help="Path to own templates to generate model and resource files.")
@click.option("-m", "--model-template", default=None, help="Template filename for generating model files.")
@click.option("-r", "--resource-template", default=None, help="Template filename for generating resource files.")
@click.option("-g", "--generate-templates", is_flag=True, help="Write the templates and their contexts to the output path instead of generating a client.")
@click.option("-b", "--build-config", type=click.Path(exists=True, dir_okay=False, path_type=Path), default=None, help="Path to your swagger2angular configuration file.")
def main(
    source: str | None,
    output: str | None,
    debug: bool | None,
    template_path: str | None,
    model_template: str | None,
    resource_template: str | None,
    generate_templates: bool,
    build_config: Path | None,
):
    """Generate an Angular API client from a Swagger specification."""
    try:
        config = GeneratorConfig.from_file(build_config) if build_config else GeneratorConfig()
        config = config.merged(
            source=source,
            output=output,
            debug=debug or None,
            template_path=template_path,
            model_template=model_template,
            resource_template=resource_template,
        )
        _configure_logging(config.debug)

        if not config.source:
            raise click.UsageError("Missing option '-s' / '--source' (or 'swaggerSpecFile' in the build config).")

        click.echo(f"Loading {config.source}...")
        spec = load_spec(config.source)
        generator = Generator(spec, config)
        output_path = Path(generator.get_output_path())

        if generate_templates:
            written = export_templates(generator, output_path)
            click.echo(f"Wrote {len(written)} template files to {output_path}")
            return

        result = generator.run()
        write_output(result, output_path)
    except GeneratorError as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(
        f"Generated {len(result.models) - 1} models and "
        f"{len(result.resources) - 1} resources in {output_path}"
    )
