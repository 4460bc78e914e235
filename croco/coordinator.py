"""Croco run coordinator.

Drives one end-to-end generator run:

1. Ask for the project name and whether to install dependencies.
2. Materialize the selected skeleton into ``<output_dir>/<project name>``.
3. Initialise version control in the new project.
4. Install dependencies, only when the user asked for it.

Both post-steps are opaque external commands executed with an explicit
working directory; their failure aborts the run.

Usage::

    croco
    python -m croco
"""

from __future__ import annotations

import asyncio
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from pydantic import ValidationError
from rich.prompt import Prompt

from croco import __version__
from croco.config import Config
from croco.scaffolder import (
    ExternalCommandError,
    Materializer,
    RenderParams,
    ScaffoldError,
    TemplateCatalog,
    Variant,
    tree_spec_for,
)
from croco.utils import (
    console,
    print_banner,
    print_error,
    print_next_steps,
    print_project_tree,
    print_step,
    print_success,
    print_warning,
    run_command,
)

_AFFIRMATIVE = frozenset({"y", "yes"})


def is_affirmative(answer: str) -> bool:
    """Return ``True`` only for ``y`` / ``yes`` in any letter case."""
    return answer.lower() in _AFFIRMATIVE


# ---------------------------------------------------------------------------
# Collaborators
# ---------------------------------------------------------------------------


class Prompter(Protocol):
    """Source of the two answers a run needs."""

    def ask_project_name(self) -> str: ...

    def ask_install(self) -> bool: ...


class ConsolePrompter:
    """Asks the run's questions interactively on the Rich console."""

    def ask_project_name(self) -> str:
        """Ask for the project name until a non-blank one is given.

        The name is returned exactly as typed; names the filesystem rejects
        surface later as a ``FilesystemError``.
        """
        while True:
            name = Prompt.ask("Enter your project name", console=console)
            if name.strip():
                return name
            console.print("[yellow]The project name cannot be empty.[/yellow]")

    def ask_install(self) -> bool:
        answer = Prompt.ask("Do you want to install dependencies? (y/n)", console=console)
        return is_affirmative(answer)


class CommandRunner:
    """Runs post-step commands, streaming their output to the console."""

    def __init__(self, timeout: int | None = None) -> None:
        self.timeout = timeout

    async def run(self, cmd: list[str], cwd: str | Path) -> None:
        """Run *cmd* in *cwd*.

        Raises:
            ExternalCommandError: If the command cannot be started, times out,
                or exits non-zero.
        """
        cmd_str = " ".join(cmd)
        try:
            returncode, _, stderr = await run_command(cmd, cwd=cwd, timeout=self.timeout)
        except FileNotFoundError as exc:
            raise ExternalCommandError(
                f"Cannot run {cmd_str}: {exc.strerror or exc}",
                command=cmd_str,
                returncode=127,
            ) from exc

        if returncode != 0:
            # Output is streamed, not captured, so stderr only carries the
            # timeout message.
            detail = f"\n{stderr}" if stderr else ""
            raise ExternalCommandError(
                f"Command failed (exit {returncode}): {cmd_str}{detail}",
                command=cmd_str,
                returncode=returncode,
            )


# ---------------------------------------------------------------------------
# Coordinator
# ---------------------------------------------------------------------------


@dataclass
class RunResult:
    """Outcome of a successful run."""

    project_name: str
    project_root: Path
    variant: Variant
    installed: bool
    files_written: list[Path] = field(default_factory=list)


class RunCoordinator:
    """Runs the generator once: prompts, materialization, post-steps.

    Attributes:
        config: Run configuration (output directory, variant, commands).
        prompter: Supplies the project name and the install answer.
        runner: Executes the version-control and install commands.
        catalog: Templates for the configured variant.
        tree: Tree specification for the configured variant.
    """

    def __init__(
        self,
        config: Config,
        prompter: Prompter | None = None,
        runner: CommandRunner | None = None,
        catalog: TemplateCatalog | None = None,
    ) -> None:
        self.config = config
        self.prompter = prompter or ConsolePrompter()
        self.runner = runner or CommandRunner(timeout=config.command_timeout)
        self.catalog = catalog or TemplateCatalog.for_variant(config.variant)
        self.tree = tree_spec_for(config.variant)
        self.materializer = Materializer(self.catalog)

    async def run(self) -> RunResult:
        """Execute the run.

        Raises:
            FilesystemError: The project tree could not be written.
            UnknownTemplateError: The tree references a missing template.
            ExternalCommandError: Version control or install failed.
        """
        print_banner()

        project_name = self.prompter.ask_project_name()
        install = self.prompter.ask_install()
        params = RenderParams(project_name=project_name)
        root = self.config.project_root(project_name)

        console.print()
        print_step("Creating your project...")
        written = await self.materializer.materialize(root, self.tree, params)
        print_step(f"Wrote {len(written)} files to {root}")

        print_step("Setting up git repository...")
        await self.runner.run(self.config.vcs_command, cwd=root)

        if install:
            print_step("Installing dependencies...")
            await self.runner.run(self.config.install_command, cwd=root)

        console.print()
        print_success("Project created successfully!")
        print_project_tree(project_name, self.config.variant)
        print_next_steps(project_name, installed=install)

        return RunResult(
            project_name=project_name,
            project_root=root,
            variant=self.config.variant,
            installed=install,
            files_written=written,
        )


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``croco`` / ``python -m croco``."""
    import argparse

    parser = argparse.ArgumentParser(
        prog="croco",
        description="Croco -- interactive full-stack monorepo generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Environment:\n"
            "  CROCO_OUTPUT_DIR       parent directory of the new project (default: cwd)\n"
            "  CROCO_VARIANT          minimal | full (default: minimal)\n"
            "  CROCO_VCS_COMMAND      default: git init\n"
            "  CROCO_INSTALL_COMMAND  default: npm install\n"
            "  CROCO_COMMAND_TIMEOUT  seconds per post-step command\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.parse_args(argv)

    try:
        config = Config.from_env()
    except ValueError as exc:
        print_error(f"Error: invalid configuration: {exc}")
        sys.exit(1)

    coordinator = RunCoordinator(config)
    try:
        asyncio.run(coordinator.run())
    except ScaffoldError as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)
    except ValidationError as exc:
        print_error(f"Error: invalid answer: {exc}")
        sys.exit(1)
    except (KeyboardInterrupt, EOFError):
        print_warning("Aborted.")
        sys.exit(130)


if __name__ == "__main__":
    main()
