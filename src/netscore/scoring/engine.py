"""NetScore engine: concurrent, failure-isolated metric aggregation."""

import asyncio
import logging
import time
from types import MappingProxyType
from typing import Awaitable, Callable, Mapping, Optional, Sequence

from netscore.collectors.github import GitHubCollector
from netscore.collectors.git import GitCollector
from netscore.collectors.npm import NpmCollector
from netscore.errors import ResolutionError
from netscore.identity import PackageIdentity
from netscore.metrics import (
    BaseMetric,
    BusFactorMetric,
    CorrectnessMetric,
    LicenseMetric,
    MetricName,
    RampUpMetric,
    ResponsivenessMetric,
)
from netscore.resolver import resolve
from netscore.scoring.report import CompositeReport, TimedResult

logger = logging.getLogger(__name__)

WEIGHTS: Mapping[MetricName, float] = MappingProxyType({
    MetricName.BUS_FACTOR: 0.15,
    MetricName.CORRECTNESS: 0.24,
    MetricName.RAMP_UP: 0.15,
    MetricName.RESPONSIVE_MAINTAINER: 0.20,
    MetricName.LICENSE: 0.26,
})


async def timed(compute: Callable[[], Awaitable[float]], label: str = "") -> TimedResult:
    """
    Run ``compute`` and measure how long it took.

    Any exception is logged and turned into a result of 0; the elapsed time
    still covers the work done before the failure.
    """
    start = time.perf_counter()
    try:
        result = float(await compute())
    except Exception as e:
        elapsed = time.perf_counter() - start
        logger.error(f"Error calculating {label or 'score'}: {e!r}")
        return TimedResult(result=0.0, elapsed_seconds=elapsed)
    return TimedResult(result=result, elapsed_seconds=time.perf_counter() - start)


def combine(scores: Mapping[MetricName, float], weights: Mapping[MetricName, float] = WEIGHTS) -> float:
    """Weighted sum of the sub-metric scores."""
    return sum(weights[name] * scores.get(name, 0.0) for name in weights)


class NetScoreCalculator:
    """
    Scores one package by fanning out every metric concurrently.

    NetScore = 0.15 BusFactor + 0.24 Correctness + 0.15 RampUp
             + 0.20 ResponsiveMaintainer + 0.26 License
    """

    def __init__(
        self,
        github: GitHubCollector,
        npm: NpmCollector,
        git: GitCollector,
        metrics: Optional[Sequence[BaseMetric]] = None,
        weights: Mapping[MetricName, float] = WEIGHTS,
    ):
        self.npm = npm
        self.weights = weights
        self.metrics = list(metrics) if metrics is not None else [
            BusFactorMetric(github),
            CorrectnessMetric(github),
            LicenseMetric(git),
            RampUpMetric(github),
            ResponsivenessMetric(github),
        ]

        missing = set(weights) - {m.name for m in self.metrics}
        if missing:
            raise ValueError(f"No calculator for weighted metrics: {sorted(m.value for m in missing)}")

    async def score(self, identity: PackageIdentity, url: Optional[str] = None) -> CompositeReport:
        """
        Produce the composite report for ``identity``.

        Args:
            identity: Package to score
            url: Value for the report's URL field. Defaults to the identity's
                canonical URL.

        Returns:
            CompositeReport; all zeros if a registry package cannot be resolved
        """
        report_url = url or identity.url

        try:
            repo = await resolve(identity, self.npm)
        except ResolutionError as e:
            logger.error(f"Could not resolve {report_url}: {e}")
            return CompositeReport.zero(report_url)

        logger.info(f"Scoring {report_url} as {repo}")
        results = await asyncio.gather(
            *(timed(lambda metric=metric: metric.calculate(repo), metric.name.value) for metric in self.metrics)
        )
        by_name = {metric.name: result for metric, result in zip(self.metrics, results)}

        net_score = combine({name: r.result for name, r in by_name.items()}, self.weights)
        # Sum of per-metric times: total compute cost, not the parallel wall clock
        net_score_latency = sum(r.elapsed_seconds for r in by_name.values())

        report = CompositeReport.from_results(report_url, net_score, net_score_latency, by_name)
        logger.info(f"NetScore for {report_url}: {report.net_score}")
        return report
