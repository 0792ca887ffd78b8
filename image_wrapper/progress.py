from pathlib import Path
from rich.progress import (
    Progress,
    SpinnerColumn,
    TextColumn,
    BarColumn,
    MofNCompleteColumn,
    TimeElapsedColumn
)
from rich.console import Console
from rich.table import Table
from dataclasses import dataclass, field
from typing import Optional

@dataclass
class BatchResult:
    total: int
    written: list[Path] = field(default_factory=list)
    failures: list[tuple[Path, str]] = field(default_factory=list)

    @property
    def failed(self) -> int:
        return len(self.failures)

    @property
    def success_rate(self) -> float:
        return len(self.written) / self.total if self.total > 0 else 0.0

class ProgressManager:
    """Progress bar over a batch of files, with a failure table at the end."""

    def __init__(self, total: int, console: Console | None = None):
        self.console = console or Console()
        self.progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=self.console
        )
        self.result = BatchResult(total=total)
        self._task_id: Optional[int] = None

    def __enter__(self) -> 'ProgressManager':
        self.progress.start()
        self._task_id = self.progress.add_task("[cyan]Processing images...", total=self.result.total)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.progress.stop()
        if self.result.failures:
            self.print_failures()

    def start_file(self, path: Path) -> None:
        if self._task_id is not None:
            self.progress.update(self._task_id, description=f"[cyan]{path.name}")

    def succeeded(self, written: Path) -> None:
        self.result.written.append(written)
        self._advance()

    def failed(self, path: Path, error: Exception) -> None:
        self.result.failures.append((path, str(error)))
        self._advance()

    def _advance(self) -> None:
        if self._task_id is not None:
            self.progress.update(self._task_id, advance=1)

    def print_failures(self) -> None:
        table = Table(title=f"{self.result.failed} of {self.result.total} images failed")
        table.add_column("File", style="red")
        table.add_column("Error")
        for path, message in self.result.failures:
            table.add_row(str(path), message)
        self.console.print(table)
        self.console.print(f"{self.result.success_rate:.0%} of images written")
