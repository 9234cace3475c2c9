"""Run statistics: per-step records, running sums, and the aggregate `Results`.

Means are ``sum / n`` and standard deviations ``sqrt(sum_sq / n - mean**2)``
over the steps of one `advance` call. A zero-step call yields all zeros.
"""
import math
from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

import pandas as pd

HISTORY_COLUMNS = ['step', 'population', 'vegetation', 'yield', 'pools']


@dataclass
class StepRecord:
    step: int
    population: int
    vegetation: int
    yield_: int
    pools: int

    def as_row(self) -> Tuple[int, int, int, int, int]:
        return self.step, self.population, self.vegetation, self.yield_, self.pools


def _mean_std(total: float, total_sq: float, n: int) -> Tuple[float, float]:
    if n == 0:
        return 0.0, 0.0
    mean = total / n
    # float round-off can push the variance slightly negative
    var = max(total_sq / n - mean * mean, 0.0)
    return mean, math.sqrt(var)


@dataclass
class Results:
    """Aggregate of one `advance` call.

    Attributes hold raw sums; the ``*_mean`` / ``*_stddev`` properties derive
    from them. `as_tuple` gives the external result tuple.
    """
    steps: int = 0
    extinction_count: int = 0
    population_sum: int = 0
    population_sq_sum: int = 0
    vegetation_sum: int = 0
    vegetation_sq_sum: int = 0
    yield_sum: int = 0
    yield_sq_sum: int = 0

    @property
    def population_mean(self) -> float:
        return _mean_std(self.population_sum, self.population_sq_sum, self.steps)[0]

    @property
    def population_stddev(self) -> float:
        return _mean_std(self.population_sum, self.population_sq_sum, self.steps)[1]

    @property
    def vegetation_mean(self) -> float:
        return _mean_std(self.vegetation_sum, self.vegetation_sq_sum, self.steps)[0]

    @property
    def vegetation_stddev(self) -> float:
        return _mean_std(self.vegetation_sum, self.vegetation_sq_sum, self.steps)[1]

    @property
    def yield_mean(self) -> float:
        return _mean_std(self.yield_sum, self.yield_sq_sum, self.steps)[0]

    @property
    def yield_stddev(self) -> float:
        return _mean_std(self.yield_sum, self.yield_sq_sum, self.steps)[1]

    def as_tuple(self) -> Tuple[float, float, float, float, float, float, int, int]:
        """``(fish_n, yield, vegetation_n, fish_n_stddev, yield_stddev, vegetation_n_stddev, steps, extinction_count)``.

        The first three slots are means over `steps`, not sums; the raw sums
        are the ``*_sum`` attributes.
        """
        return (self.population_mean, self.yield_mean, self.vegetation_mean,
                self.population_stddev, self.yield_stddev, self.vegetation_stddev,
                self.steps, self.extinction_count)

    def summary(self) -> dict:
        return {
            'steps': self.steps,
            'fish_mean': self.population_mean,
            'fish_std': self.population_stddev,
            'yield_mean': self.yield_mean,
            'yield_std': self.yield_stddev,
            'vegetation_mean': self.vegetation_mean,
            'vegetation_std': self.vegetation_stddev,
            'extinctions': self.extinction_count,
        }


@dataclass
class RunStatistics:
    """Accumulates `StepRecord`s into a `Results`; optionally keeps them."""
    keep_records: bool = False
    results: Results = field(default_factory=Results)
    records: List[StepRecord] = field(default_factory=list)

    def add(self, record: StepRecord) -> None:
        r = self.results
        r.steps += 1
        r.population_sum += record.population
        r.population_sq_sum += record.population * record.population
        r.vegetation_sum += record.vegetation
        r.vegetation_sq_sum += record.vegetation * record.vegetation
        r.yield_sum += record.yield_
        r.yield_sq_sum += record.yield_ * record.yield_
        if record.population == 0:
            r.extinction_count += 1
        if self.keep_records:
            self.records.append(record)


def history_frame(records: Iterable[StepRecord]) -> pd.DataFrame:
    """Tabulate step records, one row per step, indexed by step number."""
    frame = pd.DataFrame([rec.as_row() for rec in records], columns=HISTORY_COLUMNS)
    return frame.set_index('step')
