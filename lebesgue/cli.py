from contextlib import contextmanager
from pathlib import Path

import click
import numpy as np
from numpy.polynomial import Polynomial

from . import logger
from .boxes import Box, ball_volume
from .config import DEFAULT_SETTINGS, load_settings
from .errors import VolumeError
from .intervals import KINDS, Interval
from .linear import decompose, linear_scaling_factor
from .logger import log
from .region import region_between_volume


def floats_parser(ctx, param, value):
    if value is None:
        return None
    try:
        return [float(x) for x in value.split(",")]
    except ValueError:
        raise click.BadParameter(f"expected comma separated numbers, got {value!r}")


@contextmanager
def reported():
    """Turn precondition violations into a clean exit."""
    try:
        yield
    except VolumeError as e:
        log.error(str(e))
        raise click.ClickException(str(e)) from e


@click.group()
@click.option(
    "-v",
    "--verbose",
    count=True,
    type=click.IntRange(0, logger.MAX_VERBOSITY, clamp=True),
    help="sets the verbosity of the program, more means more information",
)
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="a YAML file with numerical settings.",
)
@click.pass_context
def cli(ctx, verbose, config):
    """This is the lebesgue main entry point."""
    logger.initialize(verbose)
    if config is None:
        ctx.obj = DEFAULT_SETTINGS
        return
    try:
        ctx.obj = load_settings(config)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--config")
    log.debug(f"Loaded settings from {config}")


@cli.command()
@click.argument("KIND", type=click.Choice(KINDS))
@click.argument("LO", type=float)
@click.argument("HI", type=float)
def interval(kind, lo, hi):
    """Volume of the interval of KIND between LO and HI."""
    print(Interval.of_kind(kind, lo, hi).volume())


@cli.command()
@click.option(
    "--axis",
    "-a",
    type=(click.Choice(KINDS), float, float),
    multiple=True,
    help="an axis of the box as KIND LO HI, repeat for more axes.",
)
def box(axis):
    """Volume of a box given axis by axis."""
    b = Box.from_intervals(Interval.of_kind(k, lo, hi) for k, lo, hi in axis)
    log.info(f"Box {b!s}")
    print(b.volume())


@cli.command()
@click.option("--closed/--open", default=False, help="use the closed ball.")
@click.argument("N", type=click.IntRange(min=0))
@click.argument("RADIUS", type=float)
def ball(n, radius, closed):
    """Volume of a ball of RADIUS in N dimensions (sup metric)."""
    print(ball_volume(n, radius, closed))


@cli.command()
@click.option(
    "--chain/--no-chain",
    default=False,
    help="also print the generators the matrix factors into.",
)
@click.argument("ROWS", nargs=-1, required=True)
@click.pass_obj
def scaling(settings, rows, chain):
    """Volume scaling factor of the matrix given by comma separated ROWS."""
    try:
        matrix = np.array([[float(x) for x in row.split(",")] for row in rows])
    except ValueError:
        raise click.BadParameter(
            "rows must be comma separated numbers of equal length", param_hint="ROWS"
        )

    with reported():
        print(linear_scaling_factor(matrix, settings=settings))
        if chain:
            for gen in decompose(matrix, settings=settings):
                print(gen)


@cli.command()
@click.option(
    "--lower",
    "-f",
    default="0",
    callback=floats_parser,
    help="coefficients of the lower polynomial, lowest degree first.",
)
@click.option(
    "--upper",
    "-g",
    default="1",
    callback=floats_parser,
    help="coefficients of the upper polynomial, lowest degree first.",
)
@click.argument("LO", type=float)
@click.argument("HI", type=float)
@click.pass_obj
def between(settings, lower, upper, lo, hi):
    """Area between two polynomials over [LO, HI]."""
    f, g = Polynomial(lower), Polynomial(upper)
    log.info(f"Region between {f} and {g}")
    with reported():
        print(region_between_volume(
            lambda x: float(f(x)),
            lambda x: float(g(x)),
            Interval(lo, hi),
            settings=settings,
        ))


if __name__ == "__main__":
    cli()
