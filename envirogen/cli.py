"""Command-line front end for generating environment image stacks."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from dataclasses import dataclass

from .environment import GenerationError
from .generator import EnvironmentType, generate, run_batch
from .output import setup_save_directory
from .randoms import Randoms
from .settings import EnvironmentSettings

PRODUCT_NAME = "EnviroGen"
PRODUCT_TAG = "The [Enviro]nment [Gen]erator program"
VERSION = "3.0.1"


@dataclass(frozen=True)
class _Option:
    flag: str
    section: str
    attribute: str
    kind: type
    help: str

    @property
    def dest(self) -> str:
        return f"{self.section}_{self.attribute}"


_OPTIONS: tuple[_Option, ...] = (
    _Option("--seeds", "russell", "n_seed", int, "number of coloured seeds"),
    _Option("--buffer", "russell", "buffer", int, "dilation around overlapping seeds"),
    _Option("--max-size", "russell", "max_size", int, "largest seed radius"),
    _Option("--size-velocity", "russell", "size_velocity", int, "rate of seed size change"),
    _Option("--max-velocity", "russell", "maximum_velocity", float, "soft limit on seed speed"),
    _Option("--colour-velocity", "russell", "max_colour_velocity", int, "rate of seed colour change"),
    _Option("--periodic", "russell", "periodic", bool, "wrap seeds around the edges"),
    _Option("--blur", "russell", "blur", bool, "smooth the seeds themselves as well"),
    _Option("--converge", "russell", "converge", float, "residual at which smoothing stops"),
    _Option("--factor", "russell", "factor", float, "speed factor for seed movement"),
    _Option("--objects", "mark", "object_count", int, "number of light objects"),
    _Option("--mark-max-size", "mark", "max_size", float, "largest object radius"),
    _Option("--mark-min-size", "mark", "min_size", float, "smallest object radius"),
    _Option("--mark-max-velocity", "mark", "maximum_velocity", float, "largest object speed"),
    _Option("--mark-max-size-velocity", "mark", "max_size_velocity", float, "largest rate of size change"),
    _Option("--mark-max-colour-velocity", "mark", "max_colour_velocity", float, "largest rate of colour change"),
    _Option("--mark-max-tight-velocity", "mark", "max_tight_velocity", float, "largest rate of tightness change"),
    _Option("--mark-max-tight", "mark", "max_tight", float, "largest tightness"),
    _Option("--mark-min-tight", "mark", "min_tight", float, "smallest tightness"),
    _Option("--mark-speed-factor", "mark", "speed_factor", float, "speed factor for all changes"),
    _Option("--mark-velocity-tweak", "mark", "velocity_tweak", float, "largest velocity acceleration"),
    _Option("--mark-size-tweak", "mark", "size_tweak", float, "largest size acceleration"),
    _Option("--mark-colour-tweak", "mark", "colour_tweak", float, "largest colour acceleration"),
    _Option("--mark-tight-tweak", "mark", "tight_tweak", float, "largest tightness acceleration"),
    _Option("--mark-iterations", "mark", "iter_reset", int, "iterations between accelerations"),
    _Option("--toroidal", "mark", "toroidal", bool, "wrap objects around the edges"),
    _Option("--noise-min", "noise", "n_min", int, "smallest noise value"),
    _Option("--noise-max", "noise", "n_max", int, "noise values stay below this"),
    _Option("--red", "colour", "red", int, "red channel of the flat colour"),
    _Option("--green", "colour", "green", int, "green channel of the flat colour"),
    _Option("--blue", "colour", "blue", int, "blue channel of the flat colour"),
    _Option("--image", "make_stack", "file_name", str, "image to build a stack from"),
    _Option("--stack-one", "combine", "stack_one", str, "folder of the first image stack"),
    _Option("--stack-two", "combine", "stack_two", str, "folder of the second image stack"),
    _Option("--combine-start", "combine", "start", int, "frame at which stack two begins"),
    _Option("--percent-start", "combine", "percent_start", int, "weight of stack one at the start"),
    _Option("--percent-end", "combine", "percent_end", int, "weight of stack one at the end"),
)

_GROUP_TITLES = {
    "russell": "dynamic one (seeds)",
    "mark": "dynamic two (light objects)",
    "noise": "noise",
    "colour": "colour",
    "make_stack": "stack from image",
    "combine": "combine stacks",
}


def _environment_type(text: str) -> EnvironmentType:
    try:
        return EnvironmentType(int(text))
    except ValueError:
        pass
    try:
        return EnvironmentType[text.strip().replace("-", "_").upper()]
    except KeyError:
        names = ", ".join(kind.name.lower().replace("_", "-") for kind in EnvironmentType)
        raise argparse.ArgumentTypeError(
            f"unknown environment type {text!r}; choose from {names}"
        ) from None


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the command."""
    defaults = EnvironmentSettings()
    parser = argparse.ArgumentParser(
        prog="envirogen",
        description=f"{PRODUCT_NAME} - {PRODUCT_TAG}",
    )
    parser.add_argument("--version", action="version", version=f"{PRODUCT_NAME} {VERSION}")
    parser.add_argument(
        "-t", "--type", type=_environment_type, default=EnvironmentType.DYNAMIC_ONE,
        help="environment to generate: dynamic-one, dynamic-two, noise, combine, "
             "colour or stack-from-image (or its number)",
    )
    parser.add_argument("-s", "--size", type=int, default=defaults.x,
                        help="width and height of the environment")
    parser.add_argument("-g", "--generations", type=int, default=defaults.generations,
                        help="number of frames to generate")
    parser.add_argument("-o", "--output", default=None,
                        help="folder in which output folders are created")
    parser.add_argument("--no-save", action="store_true", help="do not write images")
    parser.add_argument("--batch", type=int, default=None, metavar="RUNS",
                        help="generate this many replicates in parallel")
    parser.add_argument("--workers", type=int, default=None, help="parallel workers for a batch")
    parser.add_argument("--seed", type=int, default=None, help="seed for reproducible output")
    parser.add_argument("-v", "--verbose", action="store_true", help="report progress")

    groups: dict[str, argparse._ArgumentGroup] = {}
    for option in _OPTIONS:
        group = groups.get(option.section)
        if group is None:
            group = parser.add_argument_group(_GROUP_TITLES[option.section])
            groups[option.section] = group
        default = getattr(getattr(defaults, option.section), option.attribute)
        if option.kind is bool:
            group.add_argument(option.flag, dest=option.dest, action="store_true",
                               default=default, help=option.help)
        else:
            group.add_argument(option.flag, dest=option.dest, type=option.kind,
                               default=default, help=option.help)
    return parser


def settings_from_args(args: argparse.Namespace) -> EnvironmentSettings:
    """Build environment settings from parsed arguments."""
    settings = EnvironmentSettings(x=args.size, y=args.size, generations=args.generations)
    if args.output:
        settings.save_path = str(args.output)
    for option in _OPTIONS:
        setattr(getattr(settings, option.section), option.attribute, getattr(args, option.dest))
    return settings


def main(argv: Sequence[str] | None = None) -> int:
    """Run the generator from the command line and return an exit status."""
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.INFO, format="%(message)s")
    settings = settings_from_args(args)
    save_images = not args.no_save

    def report(index: int, total: int) -> None:
        if args.verbose:
            print(f"Frame {index + 1}/{total}", file=sys.stderr)

    try:
        if args.batch is not None:
            results = run_batch(args.type, settings, args.batch, save_images, args.workers)
            print(f"Batch complete: {len(results)} runs generated in {settings.save_path}.")
            return 0

        if save_images:
            settings.save_path = str(setup_save_directory(settings.save_path, 0))
        result = generate(args.type, settings, save_images, Randoms(args.seed), report)
    except (GenerationError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("Generation cancelled.", file=sys.stderr)
        return 130

    if result.cancelled:
        print("Generation cancelled.")
    elif save_images:
        print(f"Generation complete: {result.generations} images were saved.")
    else:
        print("Generation complete; no images saved as saving is switched off.")
    return 0


if __name__ == "__main__":
    sys.exit(main())