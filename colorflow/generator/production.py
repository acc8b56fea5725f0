"""Background production queue for generated puzzles.

One worker thread pulls requests from an input queue and generates them one
at a time; callers drain finished puzzles from the other side. `drained` is
set whenever nothing is queued or in flight.
"""

from __future__ import annotations

import queue
import threading
from dataclasses import dataclass

from colorflow.board.puzzle import Puzzle
from colorflow.generator.level import LevelGenerator, check_level_parameters


@dataclass(frozen=True)
class GenerationRequest:
    width: int
    height: int
    max_color: int
    epoch: int = 0


class PuzzleQueue:
    """
    Single-producer puzzle queue.

    Usage:
        with PuzzleQueue() as production:
            production.enqueue(3, 7, 7, 8)
            production.wait_until_drained()
            puzzles = production.drain()

    `cancel()` is best effort: queued requests are dropped, but a puzzle
    already being generated is still delivered.
    """

    def __init__(self, generator: LevelGenerator | None = None):
        self.generator = generator or LevelGenerator()
        self.drained = threading.Event()
        self.drained.set()

        self._requests: queue.Queue[GenerationRequest | None] = queue.Queue()
        self._lock = threading.Lock()
        self._completed: list[Puzzle] = []
        self._failures: list[Exception] = []
        self._queued = 0
        self._working = False
        self._epoch = 0
        self._last_request: GenerationRequest | None = None
        self._thread: threading.Thread | None = None
        self._closed = False

    # ── Public API ─────────────────────────────────────────────

    def enqueue(self, count: int, width: int, height: int, max_color: int) -> None:
        """Queue `count` puzzles of the given geometry.

        Raises:
            InvalidDimensionsError: If the board size cannot hold a puzzle
            ValueError: If `count` is negative or the colors do not fit
        """
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        check_level_parameters(width, height, max_color, self.generator.config.pipe_count)
        with self._lock:
            if self._closed:
                raise RuntimeError("PuzzleQueue is closed")
            request = GenerationRequest(width, height, max_color, epoch=self._epoch)
            self._last_request = request
            if count == 0:
                return
            self._queued += count
            self.drained.clear()
            self._ensure_worker()
        for _ in range(count):
            self._requests.put(request)

    def drain(self) -> list[Puzzle]:
        """Remove and return every completed puzzle."""
        with self._lock:
            puzzles = self._completed
            self._completed = []
        return puzzles

    def retrieve(self, restock: bool = False) -> Puzzle | None:
        """Remove and return the oldest completed puzzle, or None.

        Args:
            restock: Queue one more puzzle with the most recent parameters
        """
        with self._lock:
            puzzle = self._completed.pop(0) if self._completed else None
            last = self._last_request
        if restock and last is not None:
            self.enqueue(1, last.width, last.height, last.max_color)
        return puzzle

    def cancel(self) -> None:
        """Drop queued requests; an in-flight generation may still deliver."""
        with self._lock:
            self._epoch += 1
            self._queued = 0
            while True:
                try:
                    self._requests.get_nowait()
                except queue.Empty:
                    break
            if not self._working:
                self.drained.set()

    def wait_until_drained(self, timeout: float | None = None) -> bool:
        return self.drained.wait(timeout)

    def close(self, timeout: float | None = None) -> None:
        """Cancel pending work and stop the worker thread."""
        self.cancel()
        with self._lock:
            self._closed = True
            thread = self._thread
        if thread is not None:
            self._requests.put(None)
            thread.join(timeout)

    @property
    def working(self) -> bool:
        with self._lock:
            return self._working

    @property
    def pending(self) -> int:
        """Requests queued but not started."""
        with self._lock:
            return self._queued

    @property
    def completed_count(self) -> int:
        with self._lock:
            return len(self._completed)

    @property
    def failures(self) -> list[Exception]:
        """Errors raised by requests, GenerationFailedError in the usual case."""
        with self._lock:
            return list(self._failures)

    def __enter__(self) -> "PuzzleQueue":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ── Internal ───────────────────────────────────────────────

    def _ensure_worker(self) -> None:
        # Caller holds the lock.
        if self._thread is None:
            self._thread = threading.Thread(target=self._run, name="puzzle-queue", daemon=True)
            self._thread.start()

    def _run(self) -> None:
        while True:
            request = self._requests.get()
            if request is None:
                return
            with self._lock:
                if request.epoch != self._epoch:
                    continue  # cancelled while queued
                self._queued -= 1
                self._working = True

            puzzle: Puzzle | None = None
            failure: Exception | None = None
            try:
                puzzle = self.generator.generate_solvable_level(
                    request.width, request.height, request.max_color
                )
            except Exception as exc:  # noqa: BLE001
                failure = exc
                if self.generator.config.verbose:
                    print(f"[failed] {request.width}x{request.height}: {exc}")

            with self._lock:
                if puzzle is not None:
                    self._completed.append(puzzle)
                if failure is not None:
                    self._failures.append(failure)
                self._working = False
                if self._queued == 0:
                    self.drained.set()


__all__ = ["PuzzleQueue", "GenerationRequest"]
