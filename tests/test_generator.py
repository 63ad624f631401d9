import pytest
from PIL import Image

from envirogen.colour import ColourEnvironment
from envirogen.environment import GenerationError
from envirogen.generator import (
    EnvironmentType,
    create_environment,
    generate,
    run_batch,
)
from envirogen.mark import MarkEnvironment
from envirogen.noise import NoiseEnvironment
from envirogen.randoms import Randoms
from envirogen.settings import EnvironmentSettings


def _settings(tmp_path, generations=3):
    return EnvironmentSettings(x=5, y=4, generations=generations, save_path=str(tmp_path))


def test_environment_type_numbers_follow_selection_order():
    assert EnvironmentType(0) is EnvironmentType.DYNAMIC_ONE
    assert EnvironmentType(3) is EnvironmentType.COMBINE
    assert EnvironmentType(5) is EnvironmentType.STACK_FROM_IMAGE


def test_create_environment_by_number(tmp_path):
    environment = create_environment(4, _settings(tmp_path))
    assert isinstance(environment, ColourEnvironment)
    assert environment.environment.shape == (5, 4, 3)
    assert isinstance(create_environment(EnvironmentType.NOISE, _settings(tmp_path)), NoiseEnvironment)
    assert isinstance(create_environment(1, _settings(tmp_path)), MarkEnvironment)


def test_create_environment_unknown_kind(tmp_path):
    with pytest.raises(GenerationError):
        create_environment(9, _settings(tmp_path))


def test_noise_min_not_below_max_is_rejected(tmp_path):
    settings = _settings(tmp_path)
    settings.noise.n_min = 10
    settings.noise.n_max = 10
    with pytest.raises(GenerationError):
        generate(EnvironmentType.NOISE, settings)


def test_generate_saves_every_frame(tmp_path):
    settings = _settings(tmp_path)
    settings.colour.red, settings.colour.green, settings.colour.blue = 1, 2, 3
    result = generate(EnvironmentType.COLOUR, settings)
    assert result.frames == 3
    assert not result.cancelled
    assert [path.name for path in result.saved] == ["0000.png", "0001.png", "0002.png"]
    for path in result.saved:
        with Image.open(path) as image:
            assert set(image.convert("RGB").getdata()) == {(1, 2, 3)}


def test_generate_without_saving(tmp_path):
    result = generate(EnvironmentType.NOISE, _settings(tmp_path), save_images=False, randoms=Randoms(1))
    assert result.frames == 3
    assert result.saved == []
    assert list(tmp_path.iterdir()) == []


def test_progress_can_cancel(tmp_path):
    seen = []

    def progress(index, total):
        seen.append((index, total))
        return index < 1

    result = generate(EnvironmentType.NOISE, _settings(tmp_path, 5), progress=progress)
    assert result.cancelled
    assert result.frames == 2
    assert seen == [(0, 5), (1, 5)]
    assert len(result.saved) == 2


def test_mark_generation_runs(tmp_path):
    settings = _settings(tmp_path, 2)
    settings.mark.object_count = 2
    result = generate(EnvironmentType.DYNAMIC_TWO, settings, save_images=False, randoms=Randoms(3))
    assert result.frames == 2
    assert result.kind is EnvironmentType.DYNAMIC_TWO


def _write_stack(directory, count, colour):
    directory.mkdir()
    for index in range(count):
        Image.new("RGB", (5, 4), colour).save(directory / f"{index:02d}.png")


def test_combine_generations_are_start_plus_second_stack(tmp_path):
    _write_stack(tmp_path / "one", 3, (200, 0, 0))
    _write_stack(tmp_path / "two", 2, (0, 0, 200))
    settings = _settings(tmp_path / "out", 99)
    settings.combine.stack_one = str(tmp_path / "one")
    settings.combine.stack_two = str(tmp_path / "two")
    settings.combine.start = 2
    result = generate(EnvironmentType.COMBINE, settings)
    assert result.generations == 4
    assert result.frames == 4
    with Image.open(result.saved[0]) as image:
        assert image.convert("RGB").getpixel((0, 0)) == (200, 0, 0)
    with Image.open(result.saved[3]) as image:
        assert image.convert("RGB").getpixel((0, 0)) == (0, 0, 200)


def test_run_batch_writes_one_folder_per_run(tmp_path):
    results = run_batch(EnvironmentType.NOISE, _settings(tmp_path, 2), 3, workers=2)
    assert len(results) == 3
    for run, result in enumerate(results):
        folder = tmp_path / f"EnviroGen_output_{run:03d}"
        assert result.save_path == str(folder)
        assert sorted(path.name for path in folder.iterdir()) == ["0000.png", "0001.png"]


def test_run_batch_does_not_change_settings(tmp_path):
    settings = _settings(tmp_path, 1)
    run_batch(EnvironmentType.NOISE, settings, 1, save_images=False)
    assert settings.batch is False
    assert settings.save_path == str(tmp_path)


def test_run_batch_rejects_unsupported_kind(tmp_path):
    with pytest.raises(GenerationError):
        run_batch(EnvironmentType.COLOUR, _settings(tmp_path), 2)


@pytest.mark.parametrize("runs", [0, 1000])
def test_run_batch_rejects_run_count(tmp_path, runs):
    with pytest.raises(ValueError):
        run_batch(EnvironmentType.NOISE, _settings(tmp_path), runs)