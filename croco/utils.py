"""Shared utility functions for Croco.

Provides async command execution and the Rich-based console output used to
report a run's progress, the generated layout, and next steps.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from croco.scaffolder.catalog import Variant

console = Console()

# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


async def run_command(
    cmd: list[str],
    cwd: str | Path,
    timeout: int | None = None,
    capture: bool = False,
) -> tuple[int, str, str]:
    """Run a command asynchronously in an explicit working directory.

    Args:
        cmd: Program and arguments.
        cwd: Working directory for the child process.  The parent's working
            directory is never changed.
        timeout: Maximum wall-clock seconds before the process is killed.
            ``None`` waits for the process to finish.
        capture: Whether to capture stdout/stderr.  If ``False`` (the default)
            the child inherits the parent's streams, so its output goes
            straight to the console.

    Returns:
        A ``(returncode, stdout, stderr)`` tuple.  If *capture* is ``False``
        the stdout/stderr strings will be empty.  A timeout yields returncode
        ``-1`` and a message in stderr.

    Raises:
        FileNotFoundError: If the program does not exist.
    """
    stdout_pipe = asyncio.subprocess.PIPE if capture else None
    stderr_pipe = asyncio.subprocess.PIPE if capture else None

    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdout=stdout_pipe,
        stderr=stderr_pipe,
        cwd=str(cwd),
    )

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            process.communicate(), timeout=timeout
        )
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        return (-1, "", f"Command timed out after {timeout}s: {' '.join(cmd)}")

    stdout_str = (stdout_bytes or b"").decode("utf-8", errors="replace").strip()
    stderr_str = (stderr_bytes or b"").decode("utf-8", errors="replace").strip()
    return (process.returncode or 0, stdout_str, stderr_str)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_banner() -> None:
    """Print the welcome banner."""
    console.print(
        Panel.fit(
            "[bold green]Welcome to Croco[/bold green] -- your full-stack project generator",
            border_style="green",
        )
    )
    console.print()


def print_step(message: str) -> None:
    """Print one progress line for a run phase."""
    console.print(f"[bold cyan]>[/bold cyan] {escape(message)}")


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")


def build_project_tree(project_name: str, variant: Variant | str = Variant.MINIMAL) -> Tree:
    """Build a Rich tree describing the generated layout."""
    variant = Variant(variant)
    root = Tree(f"[bold]{escape(project_name)}/[/bold]")

    apps = root.add("apps/")
    frontend_label = "frontend/    [dim](Astro + React + Tailwind)[/dim]"
    frontend = apps.add(frontend_label)
    if variant is Variant.FULL:
        frontend.add("src/pages, src/layouts, src/components, src/styles")
    apps.add("backend/     [dim](Express + TypeScript)[/dim]")

    packages = root.add("packages/")
    packages.add("types/       [dim](Shared types with Zod)[/dim]")

    for name in ("package.json", "tsconfig.json", "turbo.json", ".env"):
        root.add(name)
    return root


def print_project_tree(project_name: str, variant: Variant | str = Variant.MINIMAL) -> None:
    """Print the generated project layout."""
    console.print()
    console.print("[bold]Project structure:[/bold]")
    console.print(build_project_tree(project_name, variant))
    console.print()


def next_steps(project_name: str, installed: bool) -> list[str]:
    """Return the shell commands the user should run next."""
    steps = [f"cd {project_name}"]
    if not installed:
        steps.append("npm install")
    steps.append("npm run dev")
    return steps


def print_next_steps(project_name: str, installed: bool) -> None:
    """Print the commands that start the generated project."""
    table = Table(title="Next steps", show_header=False, title_style="bold cyan")
    table.add_column("Command")
    for step in next_steps(project_name, installed):
        table.add_row(f"[green]{escape(step)}[/green]")
    console.print(table)
    console.print()
