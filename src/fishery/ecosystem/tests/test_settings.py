import pytest

from fishery.ecosystem.config import DEFAULT_SETTINGS, SETTING_ORDER
from fishery.ecosystem.errors import FisheryError, InvalidSettings
from fishery.ecosystem.settings import Settings
from fishery.ecosystem.tests.fixtures.scenario_fixture import make_settings


def test_default_settings_are_valid():
    s = Settings.from_mapping(DEFAULT_SETTINGS)
    assert s.validate() is s
    assert s.find_errors() == {}
    assert s.fish_consumption == (0, 1, 2, 3, 4, 5)
    assert s.grid_area == 100


def test_from_mapping_missing_names_raise_keyerror():
    values = dict(DEFAULT_SETTINGS)
    del values['fishing_chance']
    del values['size_y']
    with pytest.raises(KeyError) as exc:
        Settings.from_mapping(values)
    assert 'size_y' in str(exc.value)
    assert 'fishing_chance' in str(exc.value)


def test_from_mapping_rejects_truncating_floats():
    values = dict(DEFAULT_SETTINGS, size_x=2.5)
    with pytest.raises(InvalidSettings) as exc:
        Settings.from_mapping(values)
    assert 'size_x' in exc.value.errors


def test_all_bad_fields_are_reported():
    s = make_settings(size_x=0, fish_moves_turn=101, fishing_chance=1.5)
    with pytest.raises(InvalidSettings) as exc:
        s.validate()
    errors = exc.value.errors
    assert {'size_x', 'fish_moves_turn', 'fishing_chance'} <= set(errors)
    assert isinstance(exc.value, ValueError)
    assert isinstance(exc.value, FisheryError)


def test_initial_sizes_bounded_by_grid_area():
    s = make_settings(size_x=3, size_y=3, initial_vegetation_size=10, initial_fish_size=9)
    errors = s.find_errors()
    assert 'initial_vegetation_size' in errors
    assert 'initial_fish_size' not in errors


def test_table_length_must_match_level_cap():
    s = make_settings(fish_consumption=[0, 1, 2])
    assert 'fish_consumption' in s.find_errors()
    s = make_settings(vegetation_consumption=[0, 1, -1, 2, 2, 3])
    assert 'negative' in s.find_errors()['vegetation_consumption']


def test_split_flag_bounded_by_fish_level_max():
    assert 'split_fishes_at_max' in make_settings(split_fishes_at_max=6).find_errors()
    assert make_settings(split_fishes_at_max=5).find_errors() == {}


def test_zero_fish_cap_forbids_pools():
    s = make_settings(fish_level_max=0, initial_fish_size=1, random_fishes_interval=0, split_fishes_at_max=0)
    assert set(s.find_errors()) == {'initial_fish_size'}
    s = make_settings(fish_level_max=0, initial_fish_size=0, random_fishes_interval=0, split_fishes_at_max=0)
    assert s.find_errors() == {}


def test_with_setting_returns_copy():
    s = make_settings()
    t = s.with_setting('fishing_chance', 0.5)
    assert t.fishing_chance == 0.5
    assert s.fishing_chance == 0.15
    with pytest.raises(KeyError):
        s.with_setting('no_such_setting', 1)


def test_describe_lists_every_setting_in_order():
    lines = make_settings().describe()
    assert len(lines) == len(SETTING_ORDER)
    assert lines[0] == 'size_x: 10'
    assert lines[-1] == 'fishing_chance: 0.15'


def test_directly_built_settings_need_integer_fields():
    s = Settings(**dict(DEFAULT_SETTINGS, fish_moves_turn=2.5))
    with pytest.raises(InvalidSettings) as exc:
        s.validate()
    assert set(exc.value.errors) == {'fish_moves_turn'}
    assert 'integer' in exc.value.errors['fish_moves_turn']
    # an integral float is still not an integer field
    assert 'size_x' in Settings(**dict(DEFAULT_SETTINGS, size_x=10.0)).find_errors()


def test_table_entries_must_be_integers():
    s = Settings(**dict(DEFAULT_SETTINGS, fish_consumption=[0, 1, 2.5, 3, 4, 5]))
    assert 'index [2]' in s.find_errors()['fish_consumption']


@pytest.mark.parametrize('chance', [float('nan'), float('inf'), -0.1])
def test_fishing_chance_must_be_a_finite_fraction(chance):
    s = Settings.from_mapping(dict(DEFAULT_SETTINGS, fishing_chance=chance))
    with pytest.raises(InvalidSettings) as exc:
        s.validate()
    assert set(exc.value.errors) == {'fishing_chance'}
