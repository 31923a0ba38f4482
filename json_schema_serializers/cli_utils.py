"""
CLI utilities for command line reconstruction and introspection.
"""

from pathlib import Path

import click

PROGRAM_NAME = "json_schema_serializers"


def _format_value(value) -> str:
    # Convert file paths to just filenames for cleaner display
    if isinstance(value, (str, Path)):
        path_obj = Path(str(value))
        return path_obj.name if path_obj.exists() else str(value)
    return str(value)


def reconstruct_command_line(click_command: click.Command) -> str:
    """
    Reconstruct command line from current Click context using introspection.

    Args:
        click_command: Click command object for introspection

    Returns:
        Reconstructed command line string
    """
    try:
        ctx = click.get_current_context()
        cli_args = ctx.params
    except RuntimeError:
        # No active context, return basic command
        return PROGRAM_NAME

    if not cli_args:
        return PROGRAM_NAME

    arguments = []  # For positional arguments
    options = []  # For optional arguments

    for param in click_command.params:
        value = cli_args.get(param.name)
        if not value:
            continue

        values = list(value) if isinstance(value, (list, tuple)) else [value]

        if isinstance(param, click.Argument):
            arguments.extend(_format_value(v) for v in values)

        elif isinstance(param, click.Option):
            # Skip if it's the default value
            if value == param.default:
                continue

            # Get the primary option name (first in opts list)
            flag = param.opts[0] if param.opts else f"--{param.name}"
            if param.is_flag:
                options.append(flag)
            else:
                for v in values:
                    options.extend([flag, _format_value(v)])

    return " ".join([PROGRAM_NAME, *arguments, *options])
