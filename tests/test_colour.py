import pytest

from envirogen.colour import ColourEnvironment
from envirogen.environment import GenerationError
from envirogen.randoms import Randoms
from envirogen.settings import ColourSettings, EnvironmentSettings


def make(red, green, blue, x=5, y=3):
    settings = EnvironmentSettings(x=x, y=y, colour=ColourSettings(red, green, blue))
    return ColourEnvironment(settings, Randoms(seed=1))


def test_regenerate_fills_every_pixel():
    env = make(12, 34, 56)
    env.regenerate()
    assert all(
        env.pixel(n, m) == (12, 34, 56) for n in range(5) for m in range(3)
    )


def test_before_regenerate_grid_is_initial_fill():
    env = make(12, 34, 56)
    assert env.pixel(0, 0) == (0, 110, 200)


def test_regenerate_is_stable():
    env = make(255, 0, 255)
    env.regenerate()
    first = env.environment.copy()
    env.regenerate()
    assert (env.environment == first).all()


@pytest.mark.parametrize("rgb", [(256, 0, 0), (0, -1, 0), (0, 0, 300)])
def test_out_of_range_channel_rejected(rgb):
    with pytest.raises(GenerationError):
        make(*rgb)