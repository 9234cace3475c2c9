"""One running fishery: settings, tile grid, pool registry and random stream.

A `SimulationState` is built fully seeded and is advanced with `advance`.
Each step runs, in order: vegetation update, fish update, population and
vegetation totals, then the fishing pass when ``fishing_chance > 0``.
"""
import logging
from typing import List, Tuple

import numpy as np

from fishery.ecosystem.agents import FishPoolRegistry
from fishery.ecosystem.behavior import update_fish_population
from fishery.ecosystem.config import EMPTY_POPULATION, MAX_STEPS_PER_CALL
from fishery.ecosystem.errors import InvalidStepCount
from fishery.ecosystem.fishing import fishing_event
from fishery.ecosystem.geometry import internal_index, internal_to_external, position_from_internal
from fishery.ecosystem.metrics import Results, RunStatistics, StepRecord, history_frame
from fishery.ecosystem.settings import Settings
from fishery.ecosystem.vegetation import TileGrid, update_vegetation

logger = logging.getLogger(__name__)


class SimulationState:
    """Owns everything a single simulation needs.

    Parameters
    ----------
    settings : Settings
        Validated on construction; invalid settings raise `InvalidSettings`
        before anything is allocated.
    simulation_id : int
        Identifier assigned by the manager.
    rng : numpy.random.Generator or int or None
        Random stream used for every stochastic decision of this simulation.
    record_history : bool
        Keep one `StepRecord` per step for `history`.
    """

    def __init__(self, settings: Settings, simulation_id: int = 0, rng=None, record_history: bool = False):
        self.settings = settings.validate()
        self.simulation_id = int(simulation_id)
        self.rng = rng if isinstance(rng, np.random.Generator) else np.random.default_rng(rng)
        self.record_history = record_history
        self.steps_taken = 0
        self.records: List[StepRecord] = []

        self.grid = TileGrid.from_settings(self.settings)
        self.registry = FishPoolRegistry(self.grid)
        self._seed()
        logger.debug('simulation %d seeded: %d vegetated tiles, %d pools',
                     self.simulation_id, self.settings.initial_vegetation_size, len(self.registry))

    def _seed(self) -> None:
        s = self.settings
        self.grid.seed_vegetation(self.rng, s.initial_vegetation_size)
        picks = self.rng.choice(self.grid.area, size=s.initial_fish_size, replace=False)
        for index in picks:
            x, y = position_from_internal(int(index), self.grid.size_y)
            self.registry.add(x, y)

    # ── stepping ────────────────────────────────────────────────────────

    def step(self) -> StepRecord:
        """Advance one step and return its record."""
        s = self.settings
        update_vegetation(self.grid, s)
        update_fish_population(self.registry, s, self.rng)
        population = self.registry.total_population()
        vegetation = self.grid.total_vegetation()
        caught = fishing_event(self.registry, s, self.rng) if s.fishing_chance > 0 else 0
        self.steps_taken += 1
        return StepRecord(self.steps_taken, population, vegetation, caught, len(self.registry))

    def advance(self, steps: int) -> Results:
        """Run ``steps`` sequential steps and return their aggregate statistics."""
        if isinstance(steps, bool) or not isinstance(steps, (int, np.integer)):
            raise InvalidStepCount(steps, MAX_STEPS_PER_CALL)
        if steps < 0 or steps > MAX_STEPS_PER_CALL:
            raise InvalidStepCount(steps, MAX_STEPS_PER_CALL)

        stats = RunStatistics(keep_records=self.record_history)
        for _ in range(int(steps)):
            stats.add(self.step())
        self.records.extend(stats.records)

        r = stats.results
        logger.debug('simulation %d advanced %d steps (total %d): fish %.2f, yield %.2f, extinct %d',
                     self.simulation_id, r.steps, self.steps_taken,
                     r.population_mean, r.yield_mean, r.extinction_count)
        return r

    # ── views ───────────────────────────────────────────────────────────

    def vegetation_snapshot(self) -> List[int]:
        return self.grid.vegetation_snapshot()

    def fish_population(self) -> List[Tuple[int, int]]:
        """``(external_position, pop_level)`` per pool in registry order, or ``[EMPTY_POPULATION]``."""
        if not len(self.registry):
            return [EMPTY_POPULATION]
        size_x, size_y = self.grid.size_x, self.grid.size_y
        return [(int(internal_to_external(internal_index(p.x, p.y, size_y), size_x, size_y)), p.pop_level)
                for p in self.registry]

    def check_occupancy(self) -> bool:
        return self.registry.is_consistent()

    def history(self):
        """Per-step records as a pandas DataFrame indexed by step."""
        return history_frame(self.records)
