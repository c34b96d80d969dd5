"""Menu, selection resolution and step execution.

The orchestrator coordinates the workflow:
1. System compatibility check
2. Menu and selection
3. Selected steps, in the fixed order, fail-fast
4. Summary
"""

import logging
from dataclasses import dataclass

import click

from devsetup.config_manager import DevSetupConfig
from devsetup.errors import DevSetupError, EndOfInputError, SetupAbortedError
from devsetup.log_format import SUCCESS
from devsetup.modules.command_runner import CommandRunner
from devsetup.modules.interaction_handler import InteractionHandler
from devsetup.modules.system_check import SystemChecker
from devsetup.steps import STEPS, RunContext, Step
from devsetup.summary import RunResult, print_summary

logger = logging.getLogger(__name__)

BANNER_WIDTH = 40

MENU_OPTIONS = (
    ("1", "Full setup (everything)"),
    ("2", "System optimizations only"),
    ("3", "Development tools only"),
    ("4", "JetBrains IDEs only"),
    ("5", "Custom selection"),
)

PRESETS: dict[str, tuple[str, ...]] = {
    "1": tuple(step.id for step in STEPS),
    "2": ("optimize",),
    "3": ("install-tools",),
    "4": ("install-ides",),
}

CUSTOM_CHOICE = "5"


@dataclass(frozen=True)
class Selection:
    """Ordered subset of steps chosen for one run."""

    steps: tuple[Step, ...]

    @property
    def step_ids(self) -> tuple[str, ...]:
        return tuple(step.id for step in self.steps)

    @classmethod
    def from_ids(cls, step_ids: tuple[str, ...] | list[str] | set[str]) -> "Selection":
        """Build a selection keeping the global step order."""
        wanted = set(step_ids)
        return cls(steps=tuple(step for step in STEPS if step.id in wanted))

    @classmethod
    def from_toggles(cls, toggles: dict[str, bool]) -> "Selection":
        return cls.from_ids([step_id for step_id, selected in toggles.items() if selected])


def print_banner() -> None:
    click.echo("=" * BANNER_WIDTH)
    click.echo("  Linux Development Environment Setup  ")
    click.echo("=" * BANNER_WIDTH)
    click.echo()


def print_menu() -> None:
    click.echo("What would you like to install?")
    for key, description in MENU_OPTIONS:
        click.echo(f"{key}. {description}")


def prompt_custom_toggles(interaction: InteractionHandler) -> dict[str, bool]:
    """Ask one yes/no question per step, in step order.

    Anything other than an answer starting with y/Y, including no answer at
    all, leaves the step out.
    """
    click.echo("Custom selection:")
    return {step.id: interaction.confirm(step.prompt) for step in STEPS}


def resolve_selection(choice: str, interaction: InteractionHandler) -> Selection:
    """
    Turn a menu answer into a selection.

    Args:
        choice: Raw menu input; surrounding whitespace is ignored
        interaction: Used for the custom selection prompts

    Raises:
        SetupAbortedError: If the choice is not one of 1-5
    """
    choice = choice.strip()

    if choice in PRESETS:
        return Selection.from_ids(PRESETS[choice])
    if choice == CUSTOM_CHOICE:
        return Selection.from_toggles(prompt_custom_toggles(interaction))

    raise SetupAbortedError(f"Invalid choice: {choice!r}")


def execute(
    selection: Selection, ctx: RunContext, results: list[RunResult] | None = None
) -> list[RunResult]:
    """
    Run the selected steps in order.

    The first failing command stops the run: the failed step is recorded and
    the error propagates, so no later step starts.

    Args:
        results: List to append RunResults to as steps finish (optional)

    Returns:
        The results list
    """
    results = [] if results is None else results
    for step in selection.steps:
        logger.debug(f"Starting step: {step.id}")
        try:
            step.run(ctx)
        except DevSetupError as e:
            results.append(RunResult(step.id, False, str(e)))
            logger.error(f"{step.label} failed: {e}")
            raise
        results.append(RunResult(step.id, True, step.label))
    return results


class SetupOrchestrator:
    """Orchestrate a provisioning run."""

    def __init__(
        self,
        config: DevSetupConfig,
        runner: CommandRunner,
        interaction: InteractionHandler,
    ):
        self.config = config
        self.runner = runner
        self.interaction = interaction
        self.results: list[RunResult] = []

    @property
    def context(self) -> RunContext:
        return RunContext(config=self.config, runner=self.runner, interaction=self.interaction)

    def choose(self) -> Selection:
        """Show the menu and resolve the operator's choice.

        Raises:
            SetupAbortedError: On an invalid or missing choice
        """
        print_menu()
        try:
            choice = self.interaction.read_line("Choose option (1-5): ")
        except EndOfInputError:
            choice = ""
        return resolve_selection(choice, self.interaction)

    def run(self) -> int:
        """Execute the workflow.

        Returns:
            Exit code (0 = success, failing command's exit code on failure)
        """
        print_banner()

        try:
            SystemChecker.check(self.config, self.interaction)

            try:
                selection = self.choose()
            except SetupAbortedError as e:
                logger.error("Invalid choice")
                logger.debug(str(e))
                return e.exit_code

            self.results = []
            execute(selection, self.context, self.results)

        except DevSetupError as e:
            # Step failures are logged by execute()
            logger.debug(str(e))
            return e.exit_code
        except KeyboardInterrupt:
            click.echo()
            logger.error("Cancelled by user")
            return 130

        click.echo()
        logger.log(SUCCESS, "Setup completed successfully!")
        print_summary(self.results)
        return 0


__all__ = [
    "MENU_OPTIONS",
    "PRESETS",
    "Selection",
    "SetupOrchestrator",
    "execute",
    "resolve_selection",
]
