import cProfile
import json
import logging
from pathlib import Path

import click

from .pipeline import GeneratorConfig, GoToSwaggerError, NamingScheme, OutputMode, SwaggerGenerator
from .utils import split_list_option


@click.command()
@click.option("--pkg", "-p", "package", default=None, type=str, help="The main package of your application.")
@click.option(
    "--naming",
    default=None,
    type=click.Choice([scheme.value for scheme in NamingScheme]),
    help="How much of the package path ends up in definition names (default: full).",
)
@click.option("--ignore", default=None, type=str, help="Comma separated package paths to ignore.")
@click.option("--source-root", "-s", "source_roots", multiple=True, type=click.Path(exists=True, file_okay=False, resolve_path=True))
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--output", "-o", default=None, type=click.Path(dir_okay=False, resolve_path=True), help="Write the document to a file instead of stdout.")
@click.option("--force", is_flag=True, default=False, help="Overwrite an existing output file.")
@click.option("--profile", default=None, type=click.Path(dir_okay=False, resolve_path=True), help="Where to store profiling results.")
@click.option("--verbose", "-v", is_flag=True, default=False)
def go_to_swagger(package, naming, ignore, source_roots, config, output, force, profile, verbose):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if config is not None:
        try:
            with open(config) as f:
                config = GeneratorConfig.from_dict(json.load(f))
        except (json.JSONDecodeError, GoToSwaggerError, ValueError) as e:
            raise click.ClickException(f"Invalid config file {config}: {e}") from e
    else:
        config = GeneratorConfig()

    # CLI flags override the config file
    if package:
        config.root_import_path = package
    if naming:
        config.naming = NamingScheme(naming)
    if ignore is not None:
        config.ignored_packages = split_list_option(ignore)
    if source_roots:
        config.source_roots = list(source_roots)
    if force:
        config.output.mode = OutputMode.FORCE

    profiler = cProfile.Profile() if profile else None
    if profiler is not None:
        profiler.enable()

    try:
        generator = SwaggerGenerator(config)
        if output is None:
            click.echo(generator.generate(), nl=False)
        else:
            generator.write(Path(output))
    except (GoToSwaggerError, FileExistsError) as e:
        raise click.ClickException(str(e)) from e
    finally:
        if profiler is not None:
            profiler.disable()
            profiler.dump_stats(profile)
