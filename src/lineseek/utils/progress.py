"""Progress reporting and console logging for lineseek."""

import sys
from typing import Any, Optional

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)

# ASCII fallbacks for consoles that cannot encode the symbols
USE_ASCII_FALLBACKS = bool(sys.stderr.encoding) and sys.stderr.encoding.lower() in ('cp1252', 'cp850', 'ascii')

SYMBOLS = {
    'info': 'i' if USE_ASCII_FALLBACKS else 'ℹ',
    'warning': '!' if USE_ASCII_FALLBACKS else '⚠',
    'success': 'v' if USE_ASCII_FALLBACKS else '✓',
}

# stderr keeps stdout free for line content piped to other tools
console = Console(stderr=True, legacy_windows=False)


def create_progress_bar(description: str = "Indexing", total: Optional[int] = None) -> tuple[Progress, TaskID]:
    """Create a progress bar for chunk scans.
    
    Args:
        description: Description text for the progress bar
        total: Total number of chunks (None for indeterminate)
        
    Returns:
        Tuple of (Progress instance, TaskID) for updating
    """
    progress = Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=console,
    )
    
    task_id = progress.add_task(description, total=total)
    return progress, task_id


def update_progress(
    progress: Progress,
    task_id: TaskID,
    advance: int = 1,
    description: Optional[str] = None,
) -> None:
    """Update progress bar.
    
    Args:
        progress: Progress instance from create_progress_bar
        task_id: Task ID from create_progress_bar
        advance: Number of steps to advance (default 1)
        description: Optional new description text
    """
    if description:
        progress.update(task_id, description=description)
    progress.advance(task_id, advance)


def log_info(message: str, **kwargs: Any) -> None:
    """Log an info message."""
    console.print(f"[blue]{SYMBOLS['info']}[/blue] {message}", **kwargs)


def log_warning(message: str, **kwargs: Any) -> None:
    """Log a warning message."""
    console.print(f"[yellow]{SYMBOLS['warning']}[/yellow] {message}", **kwargs)


def log_success(message: str, **kwargs: Any) -> None:
    """Log a success message."""
    console.print(f"[green]{SYMBOLS['success']}[/green] {message}", **kwargs)
