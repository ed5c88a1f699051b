"""afmscan CLI -- thin wrapper over run_simulation."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import click
import yaml

from afmscan.config import SimulationConfig, load_config, serialize_config
from afmscan.scan import run_simulation
from afmscan.surface import SurfaceProfile
from afmscan.tip import TipShapeInput, contamination_random_pair

_LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def _parse_overrides(items: tuple[str, ...]) -> dict[str, Any]:
    """Turn ``key=value`` strings into a dotted override dict.

    Values are parsed as YAML scalars so numbers and booleans keep their type.
    """
    overrides: dict[str, Any] = {}
    for item in items:
        key, sep, value = item.partition("=")
        if not key or not sep:
            raise click.BadParameter(
                f"expected key=value, got {item!r}", param_hint="--set"
            )
        overrides[key.strip()] = yaml.safe_load(value)
    return overrides


# ---------------------------------------------------------------------------
# CLI definition
# ---------------------------------------------------------------------------


@click.group()
def cli() -> None:
    """afmscan -- simulate AFM tip-convolution artefacts on synthetic surfaces."""


@cli.command()
def profiles() -> None:
    """List the available surface profiles."""
    for profile in SurfaceProfile:
        click.echo(profile.value)


@cli.command()
@click.option(
    "--profile",
    "-p",
    default=SurfaceProfile.SQUARE.value,
    show_default=True,
    help="Surface profile name (see `afmscan profiles`).",
)
@click.option(
    "--radius",
    type=click.FloatRange(0.0, 1.0),
    default=0.5,
    show_default=True,
    help="Tip radius slider value.",
)
@click.option(
    "--width",
    type=click.FloatRange(0.0, 1.0),
    default=0.5,
    show_default=True,
    help="Tip width slider value.",
)
@click.option("--contaminated", is_flag=True, default=False, help="Contaminate the tip.")
@click.option(
    "--randomize",
    is_flag=True,
    default=False,
    help="Draw the contamination pair from --seed instead of the fixed pair.",
)
@click.option("--seed", type=int, default=0, show_default=True, help="Contamination seed.")
@click.option("--sheared", is_flag=True, default=False, help="Use a sheared tip.")
@click.option(
    "--multiple-peaks", is_flag=True, default=False, help="Use a multiple-peaks tip."
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to a simulation config YAML.",
)
@click.option(
    "--set",
    "overrides",
    multiple=True,
    help="Config override as key=val (e.g. --set axis.delta_x=0.002).",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Verbose output.")
def simulate(
    profile: str,
    radius: float,
    width: float,
    contaminated: bool,
    randomize: bool,
    seed: int,
    sheared: bool,
    multiple_peaks: bool,
    config_path: str | None,
    overrides: tuple[str, ...],
    verbose: bool,
) -> None:
    """Run one simulation and print a summary of the simulated trace."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING, format=_LOG_FORMAT
    )
    try:
        config = load_config(config_path, cli_overrides=_parse_overrides(overrides))
        tip_input = TipShapeInput(
            radius_slider=radius,
            width_slider=width,
            contaminated=contaminated,
            random_pair=contamination_random_pair(width, randomize, seed, config=config),
            sheared=sheared,
            multiple_peaks=multiple_peaks,
        )
        run = run_simulation(profile, tip_input, config)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc

    image = run.result.y_surface_image
    click.echo(f"profile:        {SurfaceProfile.parse(profile).value}")
    click.echo(f"tip shape:      {run.tip.shape.value}")
    click.echo(f"tip radius:     {run.tip.tip_radius:.6f}")
    click.echo(f"tip half-width: {run.tip.tip_half_width:.6f}")
    click.echo(f"apex offset:    {run.tip.y_tip_dist:.6f}")
    click.echo(f"tip points:     {len(run.tip)}")
    click.echo(f"surface points: {len(run.surface)}")
    click.echo(f"scan positions: {len(run.result)}")
    click.echo(f"trace range:    [{image.min():.6f}, {image.max():.6f}]")


@cli.command("init-config")
@click.option(
    "--output",
    "-o",
    default="afmscan.yaml",
    type=click.Path(),
    help="Output file path (default: afmscan.yaml).",
)
@click.option(
    "--force",
    is_flag=True,
    default=False,
    help="Overwrite existing file.",
)
def init_config(output: str, force: bool) -> None:
    """Generate a template YAML config file with all simulation defaults."""
    output_path = Path(output)
    if output_path.exists() and not force:
        raise click.ClickException(
            f"'{output}' already exists. Use --force to overwrite."
        )
    output_path.write_text(serialize_config(SimulationConfig()))
    click.echo(f"Config written to {output}")


def main() -> None:
    """Entry point for the ``afmscan`` console script."""
    cli()
