"""devsetup command line entry point.

Usage:
    devsetup                 Run the interactive setup
    devsetup --verbose       Also show every command being run
    devsetup --init-config   Write the default configuration file and exit
"""

import logging
import sys

import click

from devsetup import __version__
from devsetup.config_manager import ConfigError, ConfigManager, DevSetupConfig
from devsetup.log_format import configure_logging
from devsetup.modules.command_runner import SubprocessRunner
from devsetup.modules.interaction_handler import CLIInteractionHandler
from devsetup.orchestrator import SetupOrchestrator

logger = logging.getLogger(__name__)


@click.command(context_settings={"help_option_names": ["--help", "-h"]})
@click.option("--config", help="Config file path (default: ~/.devsetup/config.toml)", type=click.Path())
@click.option("--verbose", "-v", is_flag=True, help="Show debug output, including each command")
@click.option("--init-config", is_flag=True, help="Write the default configuration file and exit")
@click.version_option(version=__version__)
def main(config: str | None, verbose: bool, init_config: bool) -> None:
    """devsetup - Linux development workstation provisioning.

    Interactively updates the system, applies development-friendly kernel
    settings, installs Homebrew with common CLI tools, installs JetBrains
    IDEs via Flatpak and sets up GitHub SSH authentication.

    \b
    MENU:
        1  Full setup (everything)
        2  System optimizations only
        3  Development tools only
        4  JetBrains IDEs only
        5  Custom selection

    \b
    CONFIGURATION:
        Config file: ~/.devsetup/config.toml
        Override package lists, kernel settings, key and profile paths.
    """
    configure_logging(verbose=verbose)

    try:
        if init_config:
            path = ConfigManager.save_config(DevSetupConfig(), config)
            click.echo(f"Wrote default configuration to {path}")
            sys.exit(0)

        setup_config = ConfigManager.load_config(config)
    except ConfigError as e:
        logger.error(str(e))
        sys.exit(e.exit_code)

    orchestrator = SetupOrchestrator(
        config=setup_config,
        runner=SubprocessRunner(),
        interaction=CLIInteractionHandler(),
    )
    sys.exit(orchestrator.run())


if __name__ == "__main__":
    main()
