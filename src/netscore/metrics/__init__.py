"""Metric calculators combined into the NetScore."""

from netscore.metrics.base import BaseMetric, MetricName
from netscore.metrics.bus_factor import BusFactorMetric
from netscore.metrics.correctness import CorrectnessMetric
from netscore.metrics.license import LICENSE_COMPATIBILITY, LicenseMetric, LicenseScorer
from netscore.metrics.ramp_up import RampUpMetric
from netscore.metrics.responsiveness import ResponsivenessMetric

__all__ = [
    "BaseMetric",
    "MetricName",
    "BusFactorMetric",
    "CorrectnessMetric",
    "LICENSE_COMPATIBILITY",
    "LicenseMetric",
    "LicenseScorer",
    "RampUpMetric",
    "ResponsivenessMetric",
]
