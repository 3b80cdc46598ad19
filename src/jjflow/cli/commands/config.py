import click

from jjflow.cli.ensure import Ensure
from jjflow.cli.output import machine_output, user_output
from jjflow.core.config_store import CONFIG_KEYS, GlobalConfig
from jjflow.core.context import JjflowContext


def _format_value(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)


def _config_value(config: GlobalConfig, key: str) -> str:
    return _format_value(getattr(config, key))


@click.group("config")
def config_group() -> None:
    """Manage jjflow configuration."""


@config_group.command("list")
@click.pass_obj
def config_list(ctx: JjflowContext) -> None:
    """Print a list of configuration keys and values."""
    user_output(click.style("Global configuration:", bold=True))
    if not ctx.config_store.exists():
        user_output(f"  (defaults - {ctx.config_store.path()} does not exist)")
    for key in CONFIG_KEYS:
        machine_output(f"  {key}={_config_value(ctx.global_config, key)}")


@config_group.command("get")
@click.argument("key")
@click.pass_obj
def config_get(ctx: JjflowContext, key: str) -> None:
    """Print the value of a given configuration key."""
    Ensure.invariant(key in CONFIG_KEYS, f"Invalid config key: {key}")
    machine_output(_config_value(ctx.global_config, key))


@config_group.command("set")
@click.argument("key")
@click.argument("value")
@click.pass_obj
def config_set(ctx: JjflowContext, key: str, value: str) -> None:
    """Update configuration with a provided key=value pair."""
    Ensure.invariant(key in CONFIG_KEYS, f"Invalid config key: {key}")
    try:
        updated = ctx.global_config.with_value(key, value)
    except ValueError as e:
        user_output(click.style("Error: ", fg="red") + str(e))
        raise SystemExit(1) from e

    ctx.config_store.save(updated)
    user_output(f"Set {key}={_config_value(updated, key)}")
