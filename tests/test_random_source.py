"""Tests for neighborhood.core.random_source."""

import numpy as np
import pytest

from neighborhood.core.random_source import RandomSource, default_source

# Chi-square critical value for 9 degrees of freedom at p = 0.001
_CHI2_CRITICAL_DF9 = 27.877


class TestRandomSource:
    """Tests for inclusive integer sampling."""

    def test_uniform_stays_in_range(self, rng: RandomSource) -> None:
        draws = [rng.uniform(3, 7) for _ in range(1000)]
        assert min(draws) == 3
        assert max(draws) == 7

    def test_uniform_single_value_range(self, rng: RandomSource) -> None:
        assert all(rng.uniform(4, 4) == 4 for _ in range(20))

    def test_uniform_returns_python_int(self, rng: RandomSource) -> None:
        assert type(rng.uniform(0, 10)) is int

    def test_low_above_high_rejected(self, rng: RandomSource) -> None:
        with pytest.raises(ValueError):
            rng.uniform(5, 3)

    def test_uniform_histogram_is_flat(self) -> None:
        """Chi-square goodness of fit against the uniform distribution."""
        source = RandomSource(seed=2024)
        samples = 20_000
        draws = np.array([source.uniform(0, 9) for _ in range(samples)])
        observed = np.bincount(draws, minlength=10)
        expected = samples / 10
        chi2 = float(((observed - expected) ** 2 / expected).sum())
        assert chi2 < _CHI2_CRITICAL_DF9

    def test_same_seed_same_sequence(self) -> None:
        a = RandomSource(seed=7)
        b = RandomSource(seed=7)
        assert [a.uniform(0, 100) for _ in range(50)] == [
            b.uniform(0, 100) for _ in range(50)
        ]

    def test_choice_picks_member(self, rng: RandomSource) -> None:
        items = ("a", "b", "c")
        picks = {rng.choice(items) for _ in range(200)}
        assert picks == set(items)


class TestDefaultSource:
    """Tests for the process-wide source."""

    def test_created_once(self) -> None:
        assert default_source() is default_source()

    def test_entropy_seeded(self) -> None:
        assert default_source().seed is None
