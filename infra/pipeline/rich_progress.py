"""Rich progress bar for page-by-page conversion."""

from rich.console import Console
from rich.progress import (
    Progress,
    BarColumn,
    TextColumn,
    TaskProgressColumn,
    TimeRemainingColumn,
)


class RichProgressBar:
    """Transient progress bar; opens itself on the first update.

    Usage:
        with RichProgressBar(prefix="paper.pdf ") as bar:
            bar.update(3, total=10, suffix="Processing page 3/10")
        bar.finish("✓ Done")
    """

    def __init__(self, total: int = None, prefix: str = "", width: int = 40, unit: str = "pages", console: Console = None):
        self.total = total
        self.prefix = prefix
        self.unit = unit
        self.console = console or Console()

        self._progress = Progress(
            TextColumn(f"{prefix}{{task.description}}"),
            BarColumn(bar_width=width),
            TaskProgressColumn(),
            TextColumn("•"),
            TextColumn("{task.fields[rate]}", justify="right"),
            TextColumn("•"),
            TimeRemainingColumn(),
            TextColumn("•"),
            TextColumn("{task.fields[suffix]}", justify="right"),
            console=self.console,
            transient=True,
        )

        self._task_id = None
        self._started = False

    def __enter__(self):
        if not self._started:
            self._progress.__enter__()
            self._task_id = self._progress.add_task("", total=self.total, rate="", suffix="")
            self._started = True
        return self

    def __exit__(self, *args):
        if self._started:
            self._started = False
            return self._progress.__exit__(*args)
        return False

    def update(self, current: int, total: int = None, suffix: str = ""):
        if not self._started:
            self.__enter__()

        if total is not None and total != self.total:
            self.total = total
            self._progress.update(self._task_id, total=total)

        elapsed = self._progress.tasks[self._task_id].elapsed or 0.01
        rate = f"{current / elapsed:.2f} {self.unit}/sec"

        self._progress.update(
            self._task_id,
            completed=current,
            rate=rate,
            suffix=suffix
        )

    def finish(self, message: str = ""):
        self.__exit__(None, None, None)

        # Bar is transient, so the message replaces it
        if message:
            self.console.print(message)
