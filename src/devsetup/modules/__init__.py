"""devsetup modules - Self-contained bricks following the brick philosophy

Each module is a self-contained component with clear contracts:
- Command Runner: Run external programs (injectable, fail-fast)
- Interaction Handler: Read operator input (injectable)
- System Checker: Identify the distribution
- System Packages: apt updates and Flatpak IDEs
- System Tuning: SSD TRIM and kernel parameters
- Homebrew Installer: Homebrew and brew-managed dev tools
- SSH Key Manager: Generate keys and load them into ssh-agent
- GitHub Setup Handler: Git identity, key registration and gh login
"""

from . import (
    command_runner,
    github_setup,
    homebrew_installer,
    interaction_handler,
    ssh_keys,
    system_check,
    system_packages,
    system_tuning,
)

__all__ = [
    "command_runner",
    "github_setup",
    "homebrew_installer",
    "interaction_handler",
    "ssh_keys",
    "system_check",
    "system_packages",
    "system_tuning",
]
