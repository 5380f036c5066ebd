"""
Distribution report for bounded draws.

Tallies how often each value in [low, high] comes out of
generate_bounded_number() and scores the tally against a uniform
expectation with a chi-square statistic. Useful as a smoke check for
modulo bias on small ranges; it is not a randomness test suite.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict

import numpy as np

from .generator import Yarrow

logger = logging.getLogger(__name__)

MAX_REPORT_WIDTH = 1_000_000


@dataclass
class DistributionReport:
    """Counts per value for a run of bounded draws."""
    low: int
    high: int
    samples: int
    counts: np.ndarray
    observed_min: int
    observed_max: int

    @property
    def width(self) -> int:
        return self.high - self.low + 1

    @property
    def expected_per_value(self) -> float:
        return self.samples / self.width

    @property
    def chi_square(self) -> float:
        """Pearson chi-square statistic against a uniform distribution."""
        expected = self.expected_per_value
        return float(np.sum((self.counts - expected) ** 2) / expected)

    @property
    def degrees_of_freedom(self) -> int:
        return self.width - 1

    def count_for(self, value: int) -> int:
        if not self.low <= value <= self.high:
            raise ValueError(f"value {value} outside [{self.low}, {self.high}]")
        return int(self.counts[value - self.low])

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "low": self.low,
            "high": self.high,
            "samples": self.samples,
            "counts": {str(self.low + i): int(c) for i, c in enumerate(self.counts)},
            "observed_min": self.observed_min,
            "observed_max": self.observed_max,
            "chi_square": self.chi_square,
            "degrees_of_freedom": self.degrees_of_freedom,
        }


def bounded_distribution(generator: Yarrow, low: int, high: int, samples: int = 1000) -> DistributionReport:
    """
    Draw ``samples`` bounded numbers and tally them.

    Args:
        generator: Generator to draw from (advanced by the draws).
        low: Inclusive lower bound.
        high: Inclusive upper bound.
        samples: Number of draws (>0).

    Returns:
        DistributionReport over [low, high]

    Raises:
        ValueError: If samples <= 0 or the range is wider than MAX_REPORT_WIDTH.
        InvalidBoundsError: If high < low.
    """
    if samples <= 0:
        raise ValueError(f"samples must be >0, got {samples}")
    width = high - low + 1
    if width > MAX_REPORT_WIDTH:
        raise ValueError(f"range width {width} exceeds report limit {MAX_REPORT_WIDTH}")

    draws = np.array(
        [generator.generate_bounded_number(low, high) - low for _ in range(samples)],
        dtype=np.int64,
    )
    counts = np.bincount(draws, minlength=width)

    report = DistributionReport(
        low=low,
        high=high,
        samples=samples,
        counts=counts,
        observed_min=int(draws.min()) + low,
        observed_max=int(draws.max()) + low,
    )
    logger.info(
        "Bounded distribution [%d, %d] over %d samples: chi2=%.2f (df=%d)",
        low, high, samples, report.chi_square, report.degrees_of_freedom,
    )
    return report
