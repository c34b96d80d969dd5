"""Provisioning step registry.

The five steps and their order are fixed here. Menu presets and the custom
selection only filter this tuple; nothing reorders it.
"""

from collections.abc import Callable
from dataclasses import dataclass

from devsetup.config_manager import DevSetupConfig
from devsetup.modules.command_runner import CommandRunner
from devsetup.modules.github_setup import setup_github_ssh
from devsetup.modules.homebrew_installer import install_dev_tools, install_homebrew
from devsetup.modules.interaction_handler import InteractionHandler
from devsetup.modules.system_packages import install_jetbrains, update_system
from devsetup.modules.system_tuning import optimize_system


@dataclass(frozen=True)
class RunContext:
    """Everything a step needs, passed explicitly."""

    config: DevSetupConfig
    runner: CommandRunner
    interaction: InteractionHandler


@dataclass(frozen=True)
class Step:
    """A named unit of provisioning work.

    Attributes:
        id: Stable identifier (e.g. "install-tools")
        label: Human readable name for summaries
        prompt: Yes/no question asked in custom selection
        actions: Sub-steps run in order
    """

    id: str
    label: str
    prompt: str
    actions: tuple[Callable[[RunContext], object], ...]

    def run(self, ctx: RunContext) -> None:
        for action in self.actions:
            action(ctx)


STEPS: tuple[Step, ...] = (
    Step(
        id="update",
        label="System update",
        prompt="Update system? (y/n): ",
        actions=(lambda ctx: update_system(ctx.config, ctx.runner),),
    ),
    Step(
        id="optimize",
        label="System optimizations",
        prompt="Apply optimizations? (y/n): ",
        actions=(lambda ctx: optimize_system(ctx.config, ctx.runner),),
    ),
    Step(
        id="install-tools",
        label="Homebrew & dev tools",
        prompt="Install Homebrew & dev tools? (y/n): ",
        actions=(
            lambda ctx: install_homebrew(ctx.config, ctx.runner),
            lambda ctx: install_dev_tools(ctx.config, ctx.runner),
        ),
    ),
    Step(
        id="install-ides",
        label="JetBrains IDEs",
        prompt="Install JetBrains IDEs? (y/n): ",
        actions=(lambda ctx: install_jetbrains(ctx.config, ctx.runner),),
    ),
    Step(
        id="setup-ssh",
        label="GitHub SSH",
        prompt="Setup GitHub SSH? (y/n): ",
        actions=(lambda ctx: setup_github_ssh(ctx.config, ctx.runner, ctx.interaction),),
    ),
)

STEP_IDS: tuple[str, ...] = tuple(step.id for step in STEPS)


def get_step(step_id: str) -> Step:
    """Look up a step by id.

    Raises:
        KeyError: If no step has that id
    """
    for step in STEPS:
        if step.id == step_id:
            return step
    raise KeyError(step_id)


__all__ = ["STEPS", "STEP_IDS", "RunContext", "Step", "get_step"]
