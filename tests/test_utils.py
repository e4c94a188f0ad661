"""
Tests for shared helpers, the scorer and env parsing.
"""

import pytest

from ecosense import config
from ecosense.scoring import RandomScorer
from ecosense.utils import capitalize, round_half_up


@pytest.mark.parametrize("value, digits, expected", [
    (2.5, 0, 3),
    (3.5, 0, 4),
    (12.5, 0, 13),
    (11.11, 0, 11),
    (-2.5, 0, -2),
    (0.125, 2, 0.13),
])
def test_round_half_up(value, digits, expected):
    assert round_half_up(value, digits) == expected


def test_round_half_up_returns_int():
    assert isinstance(round_half_up(4.4), int)


@pytest.mark.parametrize("text, expected", [
    ('flood', 'Flood'),
    ('sci-fi', 'Sci-fi'),
    ('normal conditions', 'Normal conditions'),
    ('', ''),
])
def test_capitalize(text, expected):
    assert capitalize(text) == expected


class TestRandomScorer:

    def test_seeded_scorers_match(self):
        first, second = RandomScorer(seed=9), RandomScorer(seed=9)
        assert [first.uniform(0, 1) for _ in range(5)] == [second.uniform(0, 1) for _ in range(5)]

    def test_ranges(self):
        scorer = RandomScorer(seed=1)
        for _ in range(200):
            assert 0.75 <= scorer.uniform(0.75, 0.95) <= 0.95
            assert 3 <= scorer.randint(3, 7) <= 7
            assert scorer.choice('ACGT') in 'ACGT'
            assert 79.99 <= scorer.jitter(100, 0.2) <= 120.01


class TestConfig:

    @pytest.mark.parametrize("raw, expected", [
        ('true', True), ('1', True), ('YES', True), ('off', False), ('false', False), ('', False),
    ])
    def test_env_flag(self, monkeypatch, raw, expected):
        monkeypatch.setenv('ECOSENSE_TEST_FLAG', raw)
        assert config._env_flag('ECOSENSE_TEST_FLAG', not expected) is expected

    def test_env_flag_default(self, monkeypatch):
        monkeypatch.delenv('ECOSENSE_TEST_FLAG', raising=False)
        assert config._env_flag('ECOSENSE_TEST_FLAG', True) is True

    def test_validate_env_reports_missing_keys(self, monkeypatch):
        monkeypatch.setattr(config, 'GEMINI_API_KEY', None)
        monkeypatch.setattr(config, 'OPENWEATHER_API_KEY', 'k')
        assert config.validate_env() is False

    def test_validate_env_all_present(self, monkeypatch):
        monkeypatch.setattr(config, 'GEMINI_API_KEY', 'g')
        monkeypatch.setattr(config, 'OPENWEATHER_API_KEY', 'k')
        assert config.validate_env() is True
