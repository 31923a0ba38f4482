import json
import logging

import click

from .cli_utils import reconstruct_command_line
from .config import ExportConfig
from .export import build_schema_document, load_target

logger = logging.getLogger(__name__)


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--root", "-r", default=None, type=str, help="Definition used as the root of the document")
@click.option("--no-refs", is_flag=True, default=False, help="Inline named definitions instead of using $ref")
@click.option(
    "--add-generation-comment",
    is_flag=True,
    default=False,
    help="Add a $comment with the command line that generated the document",
)
@click.option("--output", "-o", default=None, type=click.Path(resolve_path=True))
@click.argument("targets", nargs=-1, required=True)
def json_schema_serializers(config, root, no_refs, add_generation_comment, output, targets):
    """Export the JSON Schema of serializers given as `module:Name` or `file.py:Name`."""
    if config is not None:
        with open(config) as f:
            config = ExportConfig.from_dict(json.load(f))
    else:
        config = ExportConfig()

    # CLI flags override the config file
    if root:
        config.root = root
    if no_refs:
        config.use_refs = False
    if add_generation_comment:
        config.add_generation_comment = True

    serializers = {}
    for target in targets:
        try:
            name, serializer = load_target(target)
        except ValueError as err:
            raise click.BadParameter(str(err), param_hint="TARGETS") from err
        serializers[name] = serializer

    try:
        document = build_schema_document(serializers, config)
    except ValueError as err:
        raise click.UsageError(str(err)) from err

    if config.add_generation_comment:
        command_line = reconstruct_command_line(json_schema_serializers)
        document = {"$comment": f"Generated by {command_line}", **document}

    out = json.dumps(document, indent=config.indent)
    if output is None:
        click.echo(out)
        return

    with open(output, "w") as f:
        f.write(out + "\n")
    logger.info("Wrote %d definitions to %s", len(serializers), output)
