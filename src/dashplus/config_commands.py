"""Configuration commands for the dashplus CLI."""

from cyclopts import App

from dashplus.config import get_config

config_app = App(name="config", help="Manage configuration")


def _scope(global_: bool) -> str:
    return "global" if global_ else "local"


@config_app.command
def set(key: str, value: str, global_: bool = False) -> None:
    """Set a configuration setting.

    Args:
        key: Configuration key (e.g. store.path, graph.depth, graph.format)
        value: Configuration value
        global_: If True, set in global config. If False, set in local config.
    """
    get_config(use_global=global_).set(key, value)
    print(f"Set {key} = {value} ({_scope(global_)})")


@config_app.command
def unset(key: str, global_: bool = False) -> None:
    """Unset a configuration setting.

    Args:
        key: Configuration key
        global_: If True, unset from global config. If False, unset from local config.
    """
    get_config(use_global=global_).unset(key)
    print(f"Unset {key} ({_scope(global_)})")


@config_app.command
def get(key: str, global_: bool = False) -> None:
    """Get the value of a configuration setting, including built-in defaults."""
    value = get_config(use_global=global_).get(key)
    if value is None:
        print(f"{key} is not set")
    else:
        print(f"{key} = {value}")


@config_app.command(name="list")
def list_config(global_: bool = False) -> None:
    """List all explicitly set configuration settings."""
    settings = get_config(use_global=global_).list()

    if not settings:
        print(f"No {_scope(global_)} configuration settings")
        return

    print(f"{'Global' if global_ else 'Configuration'} settings:\n")
    for key, value in settings.items():
        print(f"{key} = {value}")
