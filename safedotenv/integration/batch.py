"""
Batch Processor

Runs one file operation per path on a thread pool and collects an outcome
for each. A failure in one file is recorded in its outcome and never stops
the other files. Results are available only once every task has finished.

By default the pool has one worker per path. Pass `workers` to bound it.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..files.file_crypto import FileCrypto, Mode


logger = logging.getLogger(__name__)


@dataclass
class FileOutcome:
    """Result of processing one file."""
    path: str
    mode: Mode
    output_path: Optional[str] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def __str__(self) -> str:
        if self.ok:
            return f"{self.path} -> {self.output_path}"
        return f"{self.path}: {type(self.error).__name__}: {self.error}"


@dataclass
class BatchResult:
    """All outcomes of one batch run, in input path order."""
    mode: Mode
    outcomes: List[FileOutcome] = field(default_factory=list)

    @property
    def succeeded(self) -> List[FileOutcome]:
        return [o for o in self.outcomes if o.ok]

    @property
    def failures(self) -> List[FileOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def ok(self) -> bool:
        return not self.failures


def _run_one(crypto: FileCrypto, path: str, mode: Mode) -> FileOutcome:
    """Process a single path, capturing its error in the outcome."""
    try:
        output_path = crypto.process(path, mode)
    except Exception as e:
        logger.debug("Failed to %s %s: %s", mode.value, path, e)
        return FileOutcome(path=path, mode=mode, error=e)
    return FileOutcome(path=path, mode=mode, output_path=output_path)


def process(paths: Sequence[str], mode: Mode, key: bytes,
            workers: Optional[int] = None) -> BatchResult:
    """
    Encrypt or decrypt every path concurrently.

    Args:
        paths: Files to process
        mode: Direction to apply to every file
        key: 32-byte derived key
        workers: Maximum concurrent tasks; None runs one task per path

    Returns:
        BatchResult with one outcome per path
    """
    result = BatchResult(mode=mode)
    if not paths:
        return result

    if workers is not None and workers < 1:
        raise ValueError("workers must be at least 1")

    crypto = FileCrypto(key)
    max_workers = workers or len(paths)

    with ThreadPoolExecutor(max_workers=max_workers,
                            thread_name_prefix="safedotenv") as executor:
        futures = [executor.submit(_run_one, crypto, path, mode) for path in paths]
        wait(futures)

    result.outcomes = [f.result() for f in futures]
    return result


def report(result: BatchResult) -> None:
    """Log each failure and a summary line."""
    for outcome in result.failures:
        logger.error("Error: %s", outcome)

    logger.info(
        "%s: %d file(s) succeeded, %d failed",
        result.mode.value.capitalize(),
        len(result.succeeded),
        len(result.failures),
    )
