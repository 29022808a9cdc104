from typing import Any, List, Optional

import click

from equipreport.configmanager import ConfigManager

KNOWN_KEYS = ("storage.data_file", "export.output_dir")


def split_key(key: str):
    try:
        section, option = key.split(".", 1)
    except ValueError as err:
        raise click.UsageError("Invalid KEY given. Is it in the format 'section.option'?") from err
    return section, option


@click.command("config")
@click.argument("key", required=True)
@click.argument("values", nargs=-1)
def config(key: str, values: Optional[List[str]]):
    """Get or set a configuration value.

    If only KEY is provided, the current value is displayed.
    If both KEY and one or more VALUES are provided, the configuration value is set.
    KEY should be in the format 'section.option', e.g. 'storage.data_file' or
    'export.output_dir'.
    """
    config_manager = ConfigManager()
    section, option = split_key(key)

    if not values:
        result = config_manager.get(section, option)
        if result is None:
            click.echo(f"Configuration '{key}' not found.")
        else:
            click.echo(f"{key} = {result}")
        return

    if key not in KNOWN_KEYS:
        click.echo(f"Note: '{key}' is not used by equipreport ({', '.join(KNOWN_KEYS)}).")

    converted_values: List[Any] = []
    for value in values:
        if value.lower() == "true":
            converted_values.append(True)
        elif value.lower() == "false":
            converted_values.append(False)
        else:
            converted_values.append(value)

    # a single value is stored as-is, several as a list
    final_value = converted_values[0] if len(converted_values) == 1 else converted_values
    if config_manager.load_error is not None:
        raise click.ClickException(
            f"{config_manager.config_file_path} could not be parsed, fix it before setting values"
            f" ({config_manager.load_error})"
        )
    config_manager.set(section, option, final_value)
    click.echo(f"Configuration '{key}' set to '{final_value}'.")
