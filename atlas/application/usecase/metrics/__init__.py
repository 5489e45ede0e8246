"""Metrics use cases."""

from .save_metric import SaveMetricUseCase

__all__ = ["SaveMetricUseCase"]
