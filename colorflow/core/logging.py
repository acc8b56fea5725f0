"""Run logging for puzzle generation.

The generator reports one row of metrics per accepted puzzle; every key is
prefixed with `METRIC_PREFIX` so runs can share an MLflow experiment with
other tools.
"""

from __future__ import annotations

from typing import Any, Mapping

METRIC_PREFIX = "generator/"


class RunLogger:
    """Sink for run parameters and per-puzzle generation metrics."""

    def log_params(self, params: Mapping[str, Any]) -> None:
        raise NotImplementedError

    def log_metric(self, key: str, value: float, step: int | None = None) -> None:
        raise NotImplementedError

    def log_generation(self, step: int, *, attempts: int, expansions: int, seconds: float) -> None:
        """Report one accepted puzzle.

        Args:
            step: 1-based index of the puzzle within the run
            attempts: Boards drawn for this puzzle, the accepted one included
            expansions: Moves the solver applied on the accepted board
            seconds: Wall time spent on this puzzle
        """
        self.log_metric(f"{METRIC_PREFIX}attempts", attempts, step)
        self.log_metric(f"{METRIC_PREFIX}expansions", expansions, step)
        self.log_metric(f"{METRIC_PREFIX}seconds", seconds, step)

    def close(self) -> None:
        return None


class NullRunLogger(RunLogger):
    """Discards everything; the default when no tracking is configured."""

    def log_params(self, params: Mapping[str, Any]) -> None:
        return None

    def log_metric(self, key: str, value: float, step: int | None = None) -> None:
        return None


class MLflowRunLogger(RunLogger):
    """Logs a generation run to MLflow.

    mlflow is imported on construction so the package works without the
    `mlflow` extra installed.
    """

    def __init__(self, *, experiment_name: str | None = None, run_name: str | None = None) -> None:
        try:
            import mlflow
        except ModuleNotFoundError as exc:  # pragma: no cover - import guard
            raise RuntimeError(
                "MLflow tracking requested but mlflow is missing; install `colorflow[mlflow]`."
            ) from exc

        self._mlflow = mlflow
        if experiment_name is not None:
            mlflow.set_experiment(experiment_name)
        if mlflow.active_run() is not None:
            mlflow.end_run()
        mlflow.start_run(run_name=run_name)

    def log_params(self, params: Mapping[str, Any]) -> None:
        # MLflow rejects None values
        self._mlflow.log_params({key: "none" if value is None else value for key, value in params.items()})

    def log_metric(self, key: str, value: float, step: int | None = None) -> None:
        self._mlflow.log_metric(key, float(value), step=step)

    def close(self) -> None:
        if self._mlflow.active_run() is not None:
            self._mlflow.end_run()


class RecordingRunLogger(RunLogger):
    """Keeps every call in memory."""

    def __init__(self) -> None:
        self.params: dict[str, Any] = {}
        self.metrics: list[tuple[str, float, int | None]] = []
        self.closed = False

    def log_params(self, params: Mapping[str, Any]) -> None:
        self.params.update(params)

    def log_metric(self, key: str, value: float, step: int | None = None) -> None:
        self.metrics.append((key, float(value), step))

    def close(self) -> None:
        self.closed = True

    def values(self, key: str) -> list[float]:
        return [value for name, value, _ in self.metrics if name == key]


__all__ = ["METRIC_PREFIX", "RunLogger", "NullRunLogger", "MLflowRunLogger", "RecordingRunLogger"]
