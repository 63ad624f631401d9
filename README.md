# envirogen

envirogen produces stacks of numbered PNG images that serve as changing
environments for evolutionary simulations. Each image in a stack is one
generation. Every pixel holds a red, green and blue value from 0 to 255.

## Environment types

The types are listed in `envirogen.generator.EnvironmentType`, with their
numbers:

- **Dynamic One** (`DYNAMIC_ONE`, 0): coloured seeds drift, grow and shrink.
  The space between them is smoothed by Laplacian relaxation until the
  residual falls to the convergence threshold or below.
- **Dynamic Two** (`DYNAMIC_TWO`, 1): moving lights over a grey background.
  Their size, colour and tightness change over time. They either bounce off
  the edges or, when toroidal, wrap around them.
- **Noise** (`NOISE`, 2): every channel of every pixel drawn uniformly from
  a minimum (inclusive) up to a maximum (exclusive).
- **Combine stacks** (`COMBINE`, 3): blends two folders of images frame by
  frame. The weight of stack one moves from a start percentage to an end
  percentage. Where only one stack has an image for a frame, that image is
  carried through. A combine run produces as many frames as the combine start
  plus the number of images in stack two.
- **Colour** (`COLOUR`, 4): a single flat colour.
- **Stack from image** (`STACK_FROM_IMAGE`, 5): repeats one source image for
  every generation.

Stacks are read from `.bmp`, `.jpg`, `.jpeg` and `.png` files, sorted by
name.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Command line

```
envirogen --help
```

The main options are:

- `-t`/`--type`: the environment type, by name (`dynamic-one`, `dynamic-two`,
  `noise`, `combine`, `colour`, `stack-from-image`) or by number.
- `-s`/`--size`: width and height of the grid (1 to 1000).
- `-g`/`--generations`: number of frames.
- `-o`/`--output`: folder under which output folders are created. It defaults
  to `Desktop` in the home directory.
- `--no-save`: generate without writing images.
- `--batch RUNS` and `--workers`: generate replicates in parallel.
- `--seed`: seed for reproducible output of a single run.
- `-v`/`--verbose`: report each frame and the smoothing residual.

Each environment type has its own group of options, for example `--seeds`,
`--converge` and `--periodic` for Dynamic One, `--objects` and `--toroidal`
for Dynamic Two, `--noise-min` and `--noise-max`, `--red`, `--green` and
`--blue`, `--image`, and `--stack-one`, `--stack-two`, `--combine-start`,
`--percent-start` and `--percent-end`.

A single run writes its images to `EnviroGen_output_000` under the output
folder, named `0000.png`, `0001.png` and so on. A batch run writes each
replicate to its own folder, `EnviroGen_output_000` up to one less than the
number of runs. Batches are available for Dynamic One, Dynamic Two, Noise and
Combine stacks, with 1 to 999 runs. The command exits with status 1 on a
settings error and 130 when interrupted.

## Library use

- `envirogen.settings.EnvironmentSettings` holds the grid size, the number of
  generations, the output path and one settings object for each type:
  `RussellSettings`, `MarkSettings`, `NoiseSettings`, `ColourSettings`,
  `MakeStackSettings` and `CombineSettings`. `validate()` raises
  `ValueError` when a hard limit is broken.
- `envirogen.randoms.Randoms` supplies the random numbers; pass a seed to make
  a run reproducible.
- `envirogen.generator.create_environment` builds an environment of a given
  type. Bad settings raise `envirogen.environment.GenerationError`.
- `envirogen.generator.generate` runs one environment through every
  generation, saving frames straight into `settings.save_path`, and returns a
  `GenerationResult`. An optional progress callback is called with the frame
  index and total after each frame; returning `False` stops the run.
- `envirogen.generator.run_batch` runs several replicates in parallel threads
  and returns their results.
- `envirogen.output.setup_save_directory`, `frame_path` and `save_frame`
  create run folders, name frames and write one frame to disk.

Each environment exposes `regenerate()`, which advances it by one
generation, an `environment` array of shape (x, y, 3) indexed
`[n, m, channel]`, and `pixel(n, m)`, which returns the colour at one
position.

## What it does not do

envirogen has no graphical window: it shows no live preview of frames, has no
pause button, and has no file or colour pickers. Everything is set through
command-line options or settings objects.