from dataclasses import dataclass, field
from time import time

@dataclass
class ProcessingStats:
    total: int = 0
    processed: int = 0
    failed: int = 0
    start_time: float = field(default_factory=time)

    def get_summary(self) -> str:
        elapsed = time() - self.start_time
        return f"Processed {self.processed}/{self.total}, {self.failed} failed ({elapsed:.1f}s)"

class Logger:
    """Prints ``[LEVEL] message`` lines.

    Nothing is printed unless ``show_logs`` is set; ``verbose`` additionally
    enables everything below ERROR.
    """

    def __init__(self, verbose: bool = True, show_logs: bool = False):
        self.verbose = verbose
        self.show_logs = show_logs
        self.stats = ProcessingStats()

    def _emit(self, level: str, message: str) -> None:
        if not self.show_logs:
            return
        if level != "ERROR" and not self.verbose:
            return
        print(f"[{level}] {message}")

    def set_total_images(self, total: int) -> None:
        self.stats.total = total
        self._emit("INFO", f"Processing {total} images")

    def update_stats(self, success: bool = True) -> None:
        if success:
            self.stats.processed += 1
        else:
            self.stats.failed += 1

    def summary(self) -> None:
        self._emit("INFO", self.stats.get_summary())

    def info(self, message: str) -> None:
        self._emit("INFO", message)

    def error(self, message: str) -> None:
        self._emit("ERROR", message)

    def warning(self, message: str) -> None:
        self._emit("WARNING", message)

    def debug(self, message: str) -> None:
        self._emit("DEBUG", message)
