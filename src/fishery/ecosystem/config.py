# -*- coding: utf-8 -*-

"""
ecosystem/config.py

Central constants for the fishery ecosystem model. Simulation code, the
manager and the headless runner all read their limits and defaults from here
so that validation and documentation never drift apart.

Contents:
---------
1. SETTING_ORDER:
   - Canonical order of the 17 setting names. Callers that build settings
     from positional data (spreadsheets, parameter sweeps) use this order.

2. SETTING_LIMITS:
   - Inclusive (low, high) bounds per scalar setting. ``None`` for ``high``
     means unbounded; a string names another setting (or the grid area)
     that supplies the bound at validation time.

3. TABLE_SETTINGS:
   - Consumption lookup tables and the setting that sizes them
     (a table has exactly ``level_max + 1`` entries).

4. DEFAULT_SETTINGS:
   - A small, stable 10x10 scenario used by the runner and the tests.

5. MANAGER CONSTANTS:
   - Step cap per call, the "all simulations" id, the "seed from clock" value
     and the sentinel returned for an empty fish population.

Usage:
------
    from fishery.ecosystem.config import DEFAULT_SETTINGS, MAX_STEPS_PER_CALL
"""

# ───────────────────────────────────────────────────────────────────────────────
# 1) SETTING ORDER
# ───────────────────────────────────────────────────────────────────────────────
SETTING_ORDER = [
    'size_x',
    'size_y',
    'initial_vegetation_size',
    'vegetation_level_max',
    'vegetation_level_spread_at',
    'vegetation_level_growth_req',
    'soil_energy_max',
    'soil_energy_increase_turn',
    'vegetation_consumption',
    'initial_fish_size',
    'fish_level_max',
    'fish_growth_req',
    'fish_moves_turn',
    'fish_consumption',
    'random_fishes_interval',
    'split_fishes_at_max',
    'fishing_chance',
]

# ───────────────────────────────────────────────────────────────────────────────
# 2) SCALAR LIMITS (inclusive)
# ───────────────────────────────────────────────────────────────────────────────
SETTING_LIMITS = {
    # grid
    'size_x': (1, 1000),
    'size_y': (1, 1000),
    'initial_vegetation_size': (0, 'grid_area'),
    'initial_fish_size': (0, 'grid_area'),

    # vegetation and soil
    'vegetation_level_max': (1, 100),
    'vegetation_level_spread_at': (0, None),
    'vegetation_level_growth_req': (0, 100),
    'soil_energy_max': (0, 1000),
    'soil_energy_increase_turn': (0, 100),

    # fish
    'fish_level_max': (0, 100),
    'fish_growth_req': (0, 100),
    'fish_moves_turn': (0, 100),
    'random_fishes_interval': (0, 1000),   # spawn probability in percent per step
    'split_fishes_at_max': (0, 'fish_level_max'),

    # harvesting, probability per pool per step
    'fishing_chance': (0.0, 1.0),
}

# ───────────────────────────────────────────────────────────────────────────────
# 3) LOOKUP TABLES
# ───────────────────────────────────────────────────────────────────────────────
TABLE_SETTINGS = {
    'vegetation_consumption': 'vegetation_level_max',
    'fish_consumption': 'fish_level_max',
}

# ───────────────────────────────────────────────────────────────────────────────
# 4) DEFAULT SCENARIO
# ───────────────────────────────────────────────────────────────────────────────
DEFAULT_SETTINGS = {
    'size_x': 10,
    'size_y': 10,
    'initial_vegetation_size': 80,
    'vegetation_level_max': 5,
    'vegetation_level_spread_at': 3,
    'vegetation_level_growth_req': 3,
    'soil_energy_max': 10,
    'soil_energy_increase_turn': 3,
    'vegetation_consumption': [0, 1, 1, 2, 2, 3],
    'initial_fish_size': 10,
    'fish_level_max': 5,
    'fish_growth_req': 3,
    'fish_moves_turn': 3,
    'fish_consumption': [0, 1, 2, 3, 4, 5],
    'random_fishes_interval': 10,
    'split_fishes_at_max': 1,
    'fishing_chance': 0.15,
}

# ───────────────────────────────────────────────────────────────────────────────
# 5) MANAGER CONSTANTS
# ───────────────────────────────────────────────────────────────────────────────
MAX_STEPS_PER_CALL = 100000

# destroy_simulation(ALL_SIMULATIONS) tears down every live simulation
ALL_SIMULATIONS = -1

# set_rng_seed(TIME_SEED) reseeds from the wall clock
TIME_SEED = -1

# get_fish_population() returns [EMPTY_POPULATION] when no pool is alive
EMPTY_POPULATION = (-1, 0)

# tile.occupant value for a vacant tile
VACANT = -1
