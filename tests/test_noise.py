import pytest

from envirogen.environment import GenerationError
from envirogen.noise import NoiseEnvironment
from envirogen.randoms import Randoms
from envirogen.settings import EnvironmentSettings, NoiseSettings


def make(n_min, n_max, seed=1, x=20, y=20):
    settings = EnvironmentSettings(x=x, y=y, noise=NoiseSettings(n_min, n_max))
    return NoiseEnvironment(settings, Randoms(seed=seed))


def test_values_within_range():
    env = make(40, 60)
    env.regenerate()
    assert int(env.environment.min()) >= 40
    assert int(env.environment.max()) < 60


def test_full_range_covered():
    env = make(10, 13)
    env.regenerate()
    assert set(env.environment.ravel().tolist()) == {10, 11, 12}


def test_frames_differ():
    env = make(0, 255)
    env.regenerate()
    first = env.environment.copy()
    env.regenerate()
    assert not (env.environment == first).all()


def test_seeded_runs_repeat():
    first = make(0, 200, seed=9)
    second = make(0, 200, seed=9)
    first.regenerate()
    second.regenerate()
    assert (first.environment == second.environment).all()


@pytest.mark.parametrize("n_min, n_max", [(50, 50), (100, 20)])
def test_min_not_below_max_rejected(n_min, n_max):
    with pytest.raises(GenerationError):
        make(n_min, n_max)


def test_range_outside_byte_rejected():
    with pytest.raises(GenerationError):
        make(0, 300)