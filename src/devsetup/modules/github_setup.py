"""
GitHub Setup Handler Module

Interactive SSH key and GitHub CLI setup for the workstation.

Behavior:
- Email and username are taken as typed (no format validation)
- The SSH key is regenerated on every run
- The connectivity probe may fail without aborting
- gh CLI delegation for auth; its outcome is not checked
"""

import logging
import socket
from dataclasses import dataclass

import click

from devsetup.config_manager import DevSetupConfig
from devsetup.log_format import SUCCESS
from devsetup.modules.command_runner import CommandRunner, cmd
from devsetup.modules.interaction_handler import InteractionHandler
from devsetup.modules.ssh_keys import SSHKeyManager, SSHKeyPair

logger = logging.getLogger(__name__)

# ssh exits 255 on connection/auth errors; GitHub answers a successful
# `ssh -T` with exit 1 because it offers no shell
SSH_CONNECTION_ERROR = 255

RULER = "-" * 40


@dataclass(frozen=True)
class GitIdentity:
    """Operator identity used for the key comment and git config."""

    email: str
    username: str


class GitHubSetupHandler:
    """Walk the operator through SSH key and GitHub CLI setup."""

    def __init__(
        self,
        config: DevSetupConfig,
        runner: CommandRunner,
        interaction: InteractionHandler,
    ):
        self.config = config
        self.runner = runner
        self.interaction = interaction
        self.keys = SSHKeyManager(runner)

    def prompt_identity(self) -> GitIdentity:
        """
        Ask for the GitHub email and username.

        Raises:
            EndOfInputError: If stdin closes before both are answered
        """
        email = self.interaction.read_line("Enter your GitHub email: ").strip()
        username = self.interaction.read_line("Enter your GitHub username: ").strip()
        return GitIdentity(email=email, username=username)

    def configure_git(self, identity: GitIdentity) -> None:
        self.runner.run(cmd("git", "config", "--global", "user.name", identity.username))
        self.runner.run(cmd("git", "config", "--global", "user.email", identity.email))

    def show_public_key(self, key_pair: SSHKeyPair) -> None:
        """Print the public key and the steps to register it."""
        logger.info("Your SSH public key (add this to GitHub):")
        click.echo(RULER)
        click.echo(key_pair.public_key_content)
        click.echo(RULER)

        logger.info("Please add this key to GitHub:")
        logger.info("1. Go to GitHub.com → Settings → SSH and GPG keys")
        logger.info("2. Click 'New SSH key'")
        logger.info("3. Paste the key above")
        logger.info(f"4. Give it a title like '{socket.gethostname()}'")

    def test_connection(self) -> int:
        """
        Probe SSH access to the git host.

        Returns:
            int: ssh exit code (never raises on failure)
        """
        logger.info("Testing GitHub connection...")
        result = self.runner.run(cmd("ssh", "-T", f"git@{self.config.git_host}", check=False))
        if result.returncode == SSH_CONNECTION_ERROR:
            logger.warning(
                f"Could not authenticate to {self.config.git_host} yet; "
                "check that the key was added"
            )
        return result.returncode

    def login_cli(self) -> None:
        """Run the interactive gh login flow; the exit code is ignored."""
        logger.info("Setting up GitHub CLI...")
        result = self.runner.run(cmd("gh", "auth", "login", check=False))
        logger.debug(f"gh auth login exited with {result.returncode}")

    def run(self) -> SSHKeyPair:
        """
        Execute the full SSH and GitHub CLI setup.

        Raises:
            EndOfInputError: If the identity prompts are not answered
            CommandFailedError: If key generation, ssh-agent or git config fail
        """
        logger.info("Setting up GitHub SSH authentication...")

        identity = self.prompt_identity()

        key_pair = self.keys.generate_key(self.config.key_path, identity.email)
        self.keys.add_to_agent(key_pair.private_path)

        self.configure_git(identity)
        self.show_public_key(key_pair)

        self.interaction.pause("Press Enter after adding the key to GitHub...")

        self.test_connection()
        self.login_cli()

        logger.log(SUCCESS, "GitHub SSH setup complete")
        return key_pair


def setup_github_ssh(
    config: DevSetupConfig, runner: CommandRunner, interaction: InteractionHandler
) -> SSHKeyPair:
    """Run GitHub SSH setup (convenience function)."""
    return GitHubSetupHandler(config, runner, interaction).run()


__all__ = ["GitHubSetupHandler", "GitIdentity", "setup_github_ssh"]
