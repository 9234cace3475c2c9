"""Exception types raised by the fishery ecosystem model.

Each error also derives from the builtin a caller would expect
(``ValueError`` for bad input, ``KeyError`` for an unknown id) so existing
``except ValueError`` handlers keep working.
"""
from typing import Dict


class FisheryError(Exception):
    """Base class for recoverable fishery errors."""


class InvalidSettings(FisheryError, ValueError):
    """One or more settings are outside their documented range.

    ``errors`` maps every failing field to a message, not just the first.
    """

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        detail = '; '.join(f'{k}: {v}' for k, v in self.errors.items())
        super().__init__(f'invalid settings ({len(self.errors)} field(s)): {detail}')


class SimulationNotFound(FisheryError, KeyError):
    """No live simulation has the given id."""

    def __init__(self, simulation_id: int):
        self.simulation_id = simulation_id
        super().__init__(f'Fishery with ID {simulation_id} not found')

    def __str__(self):
        # KeyError quotes its argument; keep the message readable
        return self.args[0]


class InvalidStepCount(FisheryError, ValueError):
    """Step count is negative or above the per-call cap."""

    def __init__(self, steps: int, limit: int):
        self.steps = steps
        self.limit = limit
        super().__init__(f'Amount of steps invalid ({steps}); must be in [0, {limit}]')
