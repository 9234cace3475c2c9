"""Immutable run settings and their validation.

``Settings`` is built once per simulation, validated, and then only read.
Validation collects every failing field so a caller fixing a parameter file
sees all problems at once.
"""
import dataclasses
import logging
import math
import numbers
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Tuple

from fishery.ecosystem.config import SETTING_LIMITS, SETTING_ORDER, TABLE_SETTINGS
from fishery.ecosystem.errors import InvalidSettings

logger = logging.getLogger(__name__)

_FLOAT_SETTINGS = ('fishing_chance',)


@dataclass(frozen=True)
class Settings:
    """Configuration for one simulation run.

    Field names match ``config.SETTING_ORDER``. Consumption tables are stored
    as tuples indexed by level, so ``fish_consumption[pop_level]`` is the food
    a pool of that level needs per step.
    """
    size_x: int
    size_y: int
    initial_vegetation_size: int
    vegetation_level_max: int
    vegetation_level_spread_at: int
    vegetation_level_growth_req: int
    soil_energy_max: int
    soil_energy_increase_turn: int
    vegetation_consumption: Tuple[int, ...]
    initial_fish_size: int
    fish_level_max: int
    fish_growth_req: int
    fish_moves_turn: int
    fish_consumption: Tuple[int, ...]
    random_fishes_interval: int
    split_fishes_at_max: int
    fishing_chance: float

    def __post_init__(self):
        # freeze tables even when a caller passed lists
        for name in TABLE_SETTINGS:
            value = getattr(self, name)
            if not isinstance(value, tuple):
                object.__setattr__(self, name, tuple(value))

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> 'Settings':
        """Build settings from a dict keyed by setting name.

        Missing names raise ``KeyError``; values that cannot be converted to
        the field's type raise ``InvalidSettings``. Extra keys are ignored.
        """
        missing = [name for name in SETTING_ORDER if name not in mapping]
        if missing:
            raise KeyError(', '.join(missing))
        values = {}
        errors = {}
        for name in SETTING_ORDER:
            try:
                values[name] = _coerce(name, mapping[name])
            except (TypeError, ValueError) as e:
                errors[name] = f'cannot convert {mapping[name]!r} ({e})'
        if errors:
            raise InvalidSettings(errors)
        return cls(**values)

    def with_setting(self, name: str, value: Any) -> 'Settings':
        """Return a copy with one setting replaced. Unknown names raise ``KeyError``."""
        if name not in SETTING_ORDER:
            raise KeyError(name)
        return dataclasses.replace(self, **{name: _coerce(name, value)})

    def as_dict(self) -> Dict[str, Any]:
        out = {}
        for name in SETTING_ORDER:
            value = getattr(self, name)
            out[name] = list(value) if name in TABLE_SETTINGS else value
        return out

    def describe(self) -> List[str]:
        """One ``name: value`` line per setting, in canonical order."""
        return [f'{name}: {value}' for name, value in self.as_dict().items()]

    @property
    def grid_area(self) -> int:
        return self.size_x * self.size_y

    @property
    def split_enabled(self) -> bool:
        return bool(self.split_fishes_at_max)

    @property
    def spawn_probability(self) -> float:
        return self.random_fishes_interval / 100.0

    def find_errors(self) -> Dict[str, str]:
        """Return ``{field: message}`` for every invalid field (empty when valid)."""
        errors: Dict[str, str] = {}
        for name, (low, high) in SETTING_LIMITS.items():
            value = getattr(self, name)
            wanted = numbers.Real if name in _FLOAT_SETTINGS else numbers.Integral
            if isinstance(value, bool) or not isinstance(value, wanted):
                kind = 'a number' if wanted is numbers.Real else 'an integer'
                errors[name] = f'must be {kind}, got {value!r}'
                continue
            if not math.isfinite(value):
                errors[name] = f'must be finite, got {value!r}'
                continue
            high = self._resolve_bound(high)
            if not low <= value or (high is not None and not value <= high):
                upper = 'inf' if high is None else high
                errors[name] = f'{value} outside [{low}, {upper}]'

        for name, size_name in TABLE_SETTINGS.items():
            table = getattr(self, name)
            level_max = getattr(self, size_name)
            if size_name in errors:
                continue
            if len(table) != level_max + 1:
                errors[name] = f'needs {level_max + 1} entries ({size_name} + 1), got {len(table)}'
                continue
            not_int = [i for i, v in enumerate(table)
                       if isinstance(v, bool) or not isinstance(v, numbers.Integral)]
            if not_int:
                errors[name] = f'non-integer entries at index {not_int}'
                continue
            negative = [i for i, v in enumerate(table) if v < 0]
            if negative:
                errors[name] = f'negative entries at index {negative}'

        if self.fish_level_max == 0 and 'fish_level_max' not in errors:
            # pools start at level 1, which a zero cap cannot hold
            for name in ('initial_fish_size', 'random_fishes_interval'):
                if name not in errors and getattr(self, name) > 0:
                    errors[name] = 'must be 0 when fish_level_max is 0'
        return errors

    def validate(self) -> 'Settings':
        """Raise ``InvalidSettings`` listing every bad field; return self when valid."""
        errors = self.find_errors()
        if errors:
            for name, msg in errors.items():
                logger.debug('%s is invalid: %s', name, msg)
            raise InvalidSettings(errors)
        return self

    def _resolve_bound(self, bound):
        if bound == 'grid_area':
            sx, sy = self.size_x, self.size_y
            if isinstance(sx, int) and isinstance(sy, int):
                return sx * sy
            return None
        if isinstance(bound, str):
            return getattr(self, bound)
        return bound


def _coerce(name: str, value: Any):
    if name in TABLE_SETTINGS:
        if isinstance(value, (str, bytes)):
            raise TypeError('table must be a sequence of integers')
        return tuple(_as_int(v) for v in value)
    if name in _FLOAT_SETTINGS:
        return float(value)
    return _as_int(value)


def _as_int(value: Any) -> int:
    # reject 2.5 -> 2 silently truncating
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f'{value} is not an integer')
    return int(value)
