"""Workload generation module."""

from .models import WorkerRunResult, WorkloadConfiguration
from .sampler import BookSetGenerator
from .worker import Worker

__all__ = ["BookSetGenerator", "WorkloadConfiguration", "WorkerRunResult", "Worker"]
