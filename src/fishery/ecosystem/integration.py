"""
integration.py

`SimulationManager`: the facade external callers (scripts, notebooks, the
headless runner) use to create, step, inspect and destroy simulations by id.

Responsibilities:
- Own the table of live `SimulationState`s keyed by monotonically increasing id.
- Derive an independent random stream for every new simulation from one
  `numpy.random.SeedSequence`, so ids created back to back are uncorrelated
  and a fixed seed reproduces every run.
- Translate unknown ids into `SimulationNotFound`.

Notes:
- The manager is a plain object; tests create as many as they need.
"""
import logging
import time
from typing import Dict, List, Mapping, Optional, Tuple, Union

import numpy as np

from fishery.ecosystem.config import ALL_SIMULATIONS, SETTING_ORDER, TIME_SEED
from fishery.ecosystem.core import SimulationState
from fishery.ecosystem.errors import SimulationNotFound
from fishery.ecosystem.metrics import Results
from fishery.ecosystem.settings import Settings

logger = logging.getLogger(__name__)

# seeds are taken as unsigned 32-bit values
SEED_MASK = 0xFFFFFFFF


class SimulationManager:
    """Registry of live simulations.

    Parameters
    ----------
    seed : int or None
        Root seed for the per-simulation random streams. ``None`` draws fresh
        OS entropy; ``TIME_SEED`` uses the wall clock.
    record_history : bool
        Default for `create_simulation`'s ``record_history``.
    """

    def __init__(self, seed: Optional[int] = None, record_history: bool = False):
        self._simulations: Dict[int, SimulationState] = {}
        self._next_id = 0
        self.record_history = record_history
        self.set_rng_seed(seed)

    def __len__(self) -> int:
        return len(self._simulations)

    # ── seeding ─────────────────────────────────────────────────────────

    def set_rng_seed(self, seed: Optional[int]) -> None:
        """Reseed the stream that new simulations draw from.

        ``TIME_SEED`` seeds from the wall clock; any other integer, negative
        ones included, is folded to 32 bits and seeds deterministically.
        Existing simulations keep their own generators.
        """
        if seed == TIME_SEED:
            seed = time.time_ns()
        elif seed is not None:
            seed = int(seed) & SEED_MASK
        self._seed_sequence = np.random.SeedSequence(seed)
        logger.debug('rng seeded with entropy %s', self._seed_sequence.entropy)

    # ── lifecycle ───────────────────────────────────────────────────────

    def create_simulation(self, settings: Union[Settings, Mapping], record_history: Optional[bool] = None) -> int:
        """Validate settings, build and seed a simulation, and return its id.

        A mapping is converted with `Settings.from_mapping` (missing names raise
        ``KeyError``). Invalid values raise `InvalidSettings` and no id is used.
        """
        if not isinstance(settings, Settings):
            settings = Settings.from_mapping(settings)
        settings.validate()
        if record_history is None:
            record_history = self.record_history

        simulation_id = self._next_id
        rng = np.random.default_rng(self._seed_sequence.spawn(1)[0])
        state = SimulationState(settings, simulation_id, rng, record_history=record_history)
        self._next_id += 1
        self._simulations[simulation_id] = state
        logger.info('created fishery %d (%dx%d, %d pools)',
                    simulation_id, settings.size_x, settings.size_y, len(state.registry))
        return simulation_id

    def destroy_simulation(self, simulation_id: int) -> None:
        """Drop one simulation, or every one with ``ALL_SIMULATIONS``."""
        if simulation_id == ALL_SIMULATIONS:
            n = len(self._simulations)
            self._simulations.clear()
            logger.info('destroyed all %d fisheries', n)
            return
        self._get(simulation_id)
        del self._simulations[simulation_id]
        logger.info('destroyed fishery %d', simulation_id)

    def does_simulation_exist(self, simulation_id: int) -> bool:
        return simulation_id in self._simulations

    def _get(self, simulation_id: int) -> SimulationState:
        try:
            return self._simulations[simulation_id]
        except (KeyError, TypeError):
            raise SimulationNotFound(simulation_id) from None

    # ── stepping and views ──────────────────────────────────────────────

    def advance_simulation(self, simulation_id: int, steps: int) -> Results:
        return self._get(simulation_id).advance(steps)

    def get_vegetation_snapshot(self, simulation_id: int) -> List[int]:
        """Vegetation levels in external row-major order (``x + y*size_x``)."""
        return self._get(simulation_id).vegetation_snapshot()

    def get_fish_population(self, simulation_id: int) -> List[Tuple[int, int]]:
        """``(position, pop_level)`` per pool; ``[EMPTY_POPULATION]`` when none."""
        return self._get(simulation_id).fish_population()

    def check_occupancy(self, simulation_id: int) -> bool:
        """Cross-check grid occupancy against the pool registry; mismatches are logged."""
        return self._get(simulation_id).check_occupancy()

    def get_history(self, simulation_id: int):
        """Per-step records of a simulation created with ``record_history=True``.

        Raises ``ValueError`` when history recording was not enabled.
        """
        state = self._get(simulation_id)
        if not state.record_history:
            raise ValueError(f'fishery {simulation_id} does not record history')
        return state.history()

    @staticmethod
    def get_setting_order() -> List[str]:
        return list(SETTING_ORDER)
