"""Scoring result data structures."""

import json
from dataclasses import dataclass
from typing import Mapping

from netscore.metrics.base import MetricName


def _round(value: float) -> float:
    return round(float(value), 2)


@dataclass(frozen=True)
class TimedResult:
    """A computed value paired with the wall-clock seconds it took."""

    result: float
    elapsed_seconds: float


@dataclass(frozen=True)
class CompositeReport:
    """Complete NetScore assessment for one package."""

    url: str
    net_score: float = 0.0
    net_score_latency: float = 0.0
    bus_factor: float = 0.0
    bus_factor_latency: float = 0.0
    correctness: float = 0.0
    correctness_latency: float = 0.0
    license: float = 0.0
    license_latency: float = 0.0
    ramp_up: float = 0.0
    ramp_up_latency: float = 0.0
    responsive_maintainer: float = 0.0
    responsive_maintainer_latency: float = 0.0

    @classmethod
    def zero(cls, url: str) -> "CompositeReport":
        """Report for a package that could not be scored at all."""
        return cls(url=url)

    @classmethod
    def from_results(
        cls,
        url: str,
        net_score: float,
        net_score_latency: float,
        results: Mapping[MetricName, TimedResult],
    ) -> "CompositeReport":
        """Build a report, rounding every numeric field to two decimals."""
        absent = TimedResult(result=0.0, elapsed_seconds=0.0)

        def score(name: MetricName) -> float:
            return _round(results.get(name, absent).result)

        def latency(name: MetricName) -> float:
            return _round(results.get(name, absent).elapsed_seconds)

        return cls(
            url=url,
            net_score=_round(net_score),
            net_score_latency=_round(net_score_latency),
            bus_factor=score(MetricName.BUS_FACTOR),
            bus_factor_latency=latency(MetricName.BUS_FACTOR),
            correctness=score(MetricName.CORRECTNESS),
            correctness_latency=latency(MetricName.CORRECTNESS),
            license=score(MetricName.LICENSE),
            license_latency=latency(MetricName.LICENSE),
            ramp_up=score(MetricName.RAMP_UP),
            ramp_up_latency=latency(MetricName.RAMP_UP),
            responsive_maintainer=score(MetricName.RESPONSIVE_MAINTAINER),
            responsive_maintainer_latency=latency(MetricName.RESPONSIVE_MAINTAINER),
        )

    def score_for(self, name: MetricName) -> float:
        return self.to_dict()[name.value]

    def to_dict(self) -> dict:
        """Convert to the NDJSON output schema."""
        return {
            "URL": self.url,
            "NetScore": self.net_score,
            "NetScore_Latency": self.net_score_latency,
            "BusFactor": self.bus_factor,
            "BusFactor_Latency": self.bus_factor_latency,
            "Correctness": self.correctness,
            "Correctness_Latency": self.correctness_latency,
            "License": self.license,
            "License_Latency": self.license_latency,
            "RampUp": self.ramp_up,
            "RampUp_Latency": self.ramp_up_latency,
            "ResponsiveMaintainer": self.responsive_maintainer,
            "ResponsiveMaintainer_Latency": self.responsive_maintainer_latency,
        }

    def to_json(self) -> str:
        """Serialize as a single NDJSON line (no trailing newline)."""
        return json.dumps(self.to_dict())
