import numpy as np
import pytest

from envirogen.environment import GenerationError
from envirogen.randoms import Randoms
from envirogen.russell import RussellEnvironment, Seed
from envirogen.settings import EnvironmentSettings, RussellSettings


def make_settings(size=20, **russell):
    defaults = dict(n_seed=2, buffer=2, max_size=5, converge=0.5)
    defaults.update(russell)
    return EnvironmentSettings(x=size, y=size, russell=RussellSettings(**defaults))


def test_seeds_initialised_within_ranges():
    env = RussellEnvironment(make_settings(n_seed=5), Randoms(seed=3))
    assert len(env.seeds) == 5
    for seed in env.seeds:
        assert seed.initialised
        assert 0 <= seed.n < env.x
        assert 0 <= seed.m < env.x
        assert 0 <= seed.size < env.max_size
        assert all(0 <= c <= 255 for c in seed.colour)
        assert seed.nv == 0.0 and seed.mv == 0.0


def test_regenerate_keeps_seeds_within_bounds():
    env = RussellEnvironment(make_settings(factor=2.0, size_velocity=3), Randoms(seed=5))
    for _ in range(3):
        env.regenerate()
        for seed in env.seeds:
            assert 0 <= seed.n <= env.x - 0.1
            assert 0 <= seed.m <= env.y - 0.1
            assert 1 <= seed.size <= env.max_size
            assert all(0 <= c <= 255 for c in seed.colour)


def test_periodic_regenerate_keeps_seeds_within_bounds():
    env = RussellEnvironment(make_settings(size=12, periodic=True), Randoms(seed=9))
    for _ in range(2):
        env.regenerate()
        for seed in env.seeds:
            assert 0 <= seed.n <= env.x - 0.1
            assert 0 <= seed.m <= env.y - 0.1
    assert env.environment.shape == (12, 12, 3)


def test_same_seed_gives_same_frames():
    first = RussellEnvironment(make_settings(), Randoms(seed=42))
    second = RussellEnvironment(make_settings(), Randoms(seed=42))
    first.regenerate()
    second.regenerate()
    assert np.array_equal(first.environment, second.environment)


def test_no_seeds_leave_environment_unchanged():
    env = RussellEnvironment(make_settings(n_seed=0), Randoms(seed=1))
    env.regenerate()
    assert env.pixel(0, 0) == (0, 110, 200)
    assert env.pixel(19, 19) == (0, 110, 200)
    assert env.pixel(7, 13) == (0, 110, 200)
    assert env.environment[:, :, 0].tolist() == [[0] * 20] * 20
    assert env.environment[:, :, 1].tolist() == [[110] * 20] * 20
    assert env.environment[:, :, 2].tolist() == [[200] * 20] * 20


def test_frozen_seed_paints_its_colour():
    env = RussellEnvironment(make_settings(size=21, n_seed=1, factor=0.0), Randoms(seed=2))
    env.seeds[0] = Seed(n=10.0, m=10.0, colour=[10.0, 20.0, 30.0], size=3.0, initialised=True)
    env.regenerate()
    assert env.pixel(10, 10) == (10, 20, 30)


def test_frozen_seed_does_not_move():
    env = RussellEnvironment(make_settings(size=21, n_seed=1, factor=0.0), Randoms(seed=4))
    env.seeds[0] = Seed(n=7.5, m=12.5, colour=[50.0, 60.0, 70.0], size=4.0, initialised=True)
    env.regenerate()
    seed = env.seeds[0]
    assert (seed.n, seed.m, seed.size) == (7.5, 12.5, 4.0)
    assert seed.colour == [50.0, 60.0, 70.0]


def test_colour_and_size_are_clamped():
    env = RussellEnvironment(
        make_settings(n_seed=2, factor=1.0, size_velocity=0, max_colour_velocity=0),
        Randoms(seed=6),
    )
    env.seeds[0].colour = [300.0, -5.0, 0.5]
    env.seeds[0].size = 50.0
    env.seeds[1].size = 0.2
    env.regenerate()
    assert env.seeds[0].colour == [255.0, 0.0, 0.0]
    assert env.seeds[0].size == env.max_size
    assert env.seeds[1].size == 1.0


def test_uninitialised_seed_is_placed_on_regenerate():
    env = RussellEnvironment(make_settings(n_seed=1), Randoms(seed=8))
    env.seeds[0] = Seed()
    env.regenerate()
    seed = env.seeds[0]
    assert seed.initialised
    assert 0 <= seed.n <= env.x - 0.1
    assert 1 <= seed.size <= env.max_size


@pytest.mark.parametrize(
    "settings",
    [
        make_settings(converge=0.0),
        make_settings(buffer=-1),
        make_settings(n_seed=1001),
        EnvironmentSettings(x=1, y=10, russell=RussellSettings(n_seed=1)),
    ],
)
def test_invalid_settings_raise(settings):
    with pytest.raises(GenerationError):
        RussellEnvironment(settings, Randoms(seed=0))