"""Metric calculator interface."""

from abc import ABC, abstractmethod
from enum import Enum

from netscore.identity import RepoIdentity


class MetricName(str, Enum):
    """Sub-metrics combined into the NetScore. Values are report keys."""

    BUS_FACTOR = "BusFactor"
    CORRECTNESS = "Correctness"
    LICENSE = "License"
    RAMP_UP = "RampUp"
    RESPONSIVE_MAINTAINER = "ResponsiveMaintainer"


class BaseMetric(ABC):
    """Abstract base class for metric calculators."""

    name: MetricName

    @abstractmethod
    async def calculate(self, repo: RepoIdentity) -> float:
        """
        Score a resolved repository.

        Args:
            repo: Repository identity

        Returns:
            Score, nominally in [0, 1]
        """
        pass
