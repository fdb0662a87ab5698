"""CLI entry point for clusterforge.

This module defines the main CLI group using the LazyGroup pattern so that
`clusterforge --help` does not import the asset graph.
"""

from __future__ import annotations

import importlib
from typing import Any

import click
import rich_click as rclick
from clusterforge_core.observability import (
    DEFAULT_LOG_LEVEL,
    LOG_LEVEL_ENV_VAR,
    LOG_LEVELS,
    configure_logging,
)

from clusterforge_cli import __version__
from clusterforge_cli.output import set_no_color

rclick.rich_click.TEXT_MARKUP = "markdown"
rclick.rich_click.SHOW_ARGUMENTS = True
rclick.rich_click.GROUP_ARGUMENTS_OPTIONS = True


class LazyGroup(rclick.RichGroup):
    """Click group that loads commands lazily.

    Commands are only imported when actually invoked, not at import time.

    Attributes:
        lazy_subcommands: Mapping of command names to module paths.
    """

    def __init__(
        self,
        *args: Any,
        lazy_subcommands: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize LazyGroup.

        Args:
            *args: Positional arguments for parent class.
            lazy_subcommands: Mapping of command name to module path.
                Format: {"validate": "clusterforge_cli.commands.validate.validate"}
            **kwargs: Keyword arguments for parent class.
        """
        super().__init__(*args, **kwargs)
        self.lazy_subcommands: dict[str, str] = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        commands = set(super().list_commands(ctx))
        commands.update(self.lazy_subcommands.keys())
        return sorted(commands)

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Get a command by name, loading lazily if needed.

        Returns:
            Click Command instance, or None if not found.
        """
        cmd = super().get_command(ctx, cmd_name)  # type: ignore[arg-type]
        if cmd is not None:
            return cmd

        if cmd_name not in self.lazy_subcommands:
            return None

        module_path = self.lazy_subcommands[cmd_name]
        module_name, attr_name = module_path.rsplit(".", 1)
        mod = importlib.import_module(module_name)
        return getattr(mod, attr_name)  # type: ignore[no-any-return]


LAZY_COMMANDS = {
    "create": "clusterforge_cli.commands.create.create",
    "validate": "clusterforge_cli.commands.validate.validate",
    "graph": "clusterforge_cli.commands.graph.graph",
}


def _set_log_level(ctx: click.Context, param: click.Parameter, value: str) -> None:
    configure_logging(value)


@click.command(cls=LazyGroup, lazy_subcommands=LAZY_COMMANDS)
@click.version_option(version=__version__, prog_name="clusterforge")
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable colored output.",
    is_eager=True,
    expose_value=False,
    callback=lambda ctx, param, value: set_no_color(value) if value else None,
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    envvar=LOG_LEVEL_ENV_VAR,
    default=DEFAULT_LOG_LEVEL,
    show_default=True,
    help=f"Minimum level of log events written to stderr [env: {LOG_LEVEL_ENV_VAR}].",
    expose_value=False,
    callback=_set_log_level,
)
def cli() -> None:
    """clusterforge - Cluster install config and manifest generator.

    Resolves the asset graph of an asset directory: install-config.yaml is
    loaded when present (and upgraded, defaulted and validated) or generated
    from `CLUSTERFORGE_*` environment variables.

    **Getting Started:**

    - `clusterforge create install-config` - Write install-config.yaml
    - `clusterforge create manifests` - Write the cluster manifests
    - `clusterforge validate` - Validate an existing install-config.yaml
    - `clusterforge graph` - Show the asset dependency graph
    """
    pass


if __name__ == "__main__":
    cli()
