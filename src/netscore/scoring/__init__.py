"""NetScore aggregation engine."""

from netscore.scoring.engine import WEIGHTS, NetScoreCalculator, combine, timed
from netscore.scoring.report import CompositeReport, TimedResult

__all__ = [
    "WEIGHTS",
    "NetScoreCalculator",
    "combine",
    "timed",
    "CompositeReport",
    "TimedResult",
]
