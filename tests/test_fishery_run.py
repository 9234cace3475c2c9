import json
import logging

import pandas as pd
import pytest

from fishery.ecosystem.config import DEFAULT_SETTINGS
from fishery.ecosystem.run import load_settings, main


def test_runner_writes_history(tmp_path):
    settings_path = tmp_path / 'settings.json'
    settings_path.write_text(json.dumps(DEFAULT_SETTINGS))
    history_path = tmp_path / 'history.csv'
    rc = main([str(settings_path), '--steps', '20', '--batches', '2', '--seed', '9',
               '--history', str(history_path)])
    assert rc == 0
    frame = pd.read_csv(history_path, index_col='step')
    assert len(frame) == 40


def test_overrides_are_applied():
    s = load_settings(None, ['fishing_chance=0.4', 'size_x=20'])
    assert s.fishing_chance == 0.4
    assert s.size_x == 20
    with pytest.raises(ValueError):
        load_settings(None, ['fishing_chance'])
    with pytest.raises(KeyError):
        load_settings(None, ['not_a_setting=1'])


def test_bad_input_is_logged_not_raised(tmp_path, caplog):
    settings_path = tmp_path / 'settings.json'
    settings_path.write_text(json.dumps(dict(DEFAULT_SETTINGS, size_x=0)))
    with caplog.at_level(logging.ERROR):
        assert main([str(settings_path), '--steps', '5']) != 0
    assert 'invalid settings' in caplog.text

    caplog.clear()
    with caplog.at_level(logging.ERROR):
        assert main(['--steps', '100001', '--seed', '1']) != 0
    assert 'Amount of steps invalid' in caplog.text
