"""Universal Scalability Law modelling from concurrency/throughput/latency measurements."""

from .datasets import DATASETS, Dataset, get_measurements, list_datasets
from .errors import (
    FitDidNotConvergeError,
    InsufficientDataError,
    InvalidArgumentError,
    USLError,
)
from .measurement import Measurement
from .model import MIN_MEASUREMENTS, Model, ModelCollector
from .solver import LevenbergMarquardt, Solver
from .tables import (
    load_measurements,
    measurements_from_frame,
    measurements_to_frame,
    prediction_table,
)

__all__ = [
    "DATASETS",
    "Dataset",
    "FitDidNotConvergeError",
    "InsufficientDataError",
    "InvalidArgumentError",
    "LevenbergMarquardt",
    "MIN_MEASUREMENTS",
    "Measurement",
    "Model",
    "ModelCollector",
    "Solver",
    "USLError",
    "get_measurements",
    "list_datasets",
    "load_measurements",
    "measurements_from_frame",
    "measurements_to_frame",
    "prediction_table",
]
