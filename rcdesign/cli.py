"""Command-line interface for the RC beam and footing design tool.

Usage::

    rcdesign run <input_yaml> [-o output_dir]
    rcdesign beam <input_yaml> [--id B1] [--method WSD|SDM] [--steps]
    rcdesign double-beam <input_yaml> [--id DB1] [--method WSD|SDM] [--steps]
    rcdesign footing <input_yaml> [--thickness 0.6] [--steps]
    rcdesign template
    rcdesign validate <input_yaml>
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

import click
import yaml

from rcdesign.core.beam_design import design_double_beam, design_single_beam
from rcdesign.core.footing import calculate_all_footings, select_critical_footings
from rcdesign.core.footing_reinforcement import design_all_footings
from rcdesign.input_parser import (
    FootingConfig,
    InputError,
    ProjectConfig,
    generate_template,
    parse_input,
)
from rcdesign.models.inputs import CalculationMethod
from rcdesign.report import (
    summarise_critical_footing,
    summarise_double_beam,
    summarise_footing_sizes,
    summarise_single_beam,
)

_METHOD_CHOICE = click.Choice([m.value for m in CalculationMethod], case_sensitive=False)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _load(input_file: str) -> ProjectConfig:
    """Parse INPUT_FILE, exiting with status 1 on any input problem."""
    try:
        return parse_input(input_file)
    except (InputError, FileNotFoundError, yaml.YAMLError) as exc:
        click.secho(f"Error parsing input: {exc}", fg="red", err=True)
        raise SystemExit(1) from exc


def _method(value: Optional[str]) -> Optional[CalculationMethod]:
    return CalculationMethod(value.upper()) if value else None


def _select(items: dict[str, Any], beam_id: Optional[str], section: str) -> dict[str, Any]:
    if beam_id is None:
        return items
    if beam_id not in items:
        click.secho(f"No entry with id {beam_id!r} in '{section}'", fg="red", err=True)
        raise SystemExit(1)
    return {beam_id: items[beam_id]}


def _dump(result) -> Any:
    """JSON-ready dict of a result model, with its derived status."""
    if result is None:
        return None
    data = result.model_dump(mode="json")
    data["status"] = result.status.value
    return data


def _run_footings(config: FootingConfig, thickness: Optional[float] = None):
    """Size all footings, pick the critical ones and design them."""
    sized = calculate_all_footings(config.footings, config.allowable_bearing_capacity)
    critical = select_critical_footings(sized)
    designed = design_all_footings(
        critical,
        config.reinforcement,
        config.allowable_bearing_capacity,
        thickness if thickness is not None else config.thickness,
    )
    return sized, designed


def _echo_footings(sized, designed, show_steps: bool = False) -> None:
    click.echo(summarise_footing_sizes(sized))
    for footing in designed:
        click.echo("")
        click.echo(summarise_critical_footing(footing, show_steps))


# ---------------------------------------------------------------------------
# Top-level group
# ---------------------------------------------------------------------------

@click.group()
@click.version_option(package_name="thai-rc-design")
@click.option("-v", "--verbose", count=True, help="Increase log verbosity (-v, -vv).")
def main(verbose: int) -> None:
    """RC beam and footing design - Thai standard WSD & SDM."""
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


# ---------------------------------------------------------------------------
# run
# ---------------------------------------------------------------------------

@main.command()
@click.argument("input_file", type=click.Path(exists=True))
@click.option(
    "-o", "--output",
    default="./output",
    show_default=True,
    help="Output directory for results.",
)
def run(input_file: str, output: str) -> None:
    """Run every design section of INPUT_FILE."""
    input_path = Path(input_file)
    output_dir = Path(output)

    click.echo(f"Reading input file: {input_path}")
    config = _load(input_file)

    results: dict[str, Any] = {"project": config.project}

    if config.beams:
        results["beams"] = {}
        for beam_id, inputs in config.beams.items():
            result = design_single_beam(inputs)
            click.echo(summarise_single_beam(beam_id, result))
            results["beams"][beam_id] = _dump(result)

    if config.double_beams:
        results["double_beams"] = {}
        for beam_id, inputs in config.double_beams.items():
            result = design_double_beam(inputs)
            click.echo(summarise_double_beam(beam_id, result))
            results["double_beams"][beam_id] = _dump(result)

    if config.footings is not None:
        sized, designed = _run_footings(config.footings)
        _echo_footings(sized, designed)
        results["footings"] = {
            "sized": [f.model_dump(mode="json") for f in sized],
            "critical": [_dump(f) for f in designed],
        }

    output_dir.mkdir(parents=True, exist_ok=True)
    results_file = output_dir / "results.json"
    with open(results_file, "w", encoding="utf-8") as fh:
        json.dump(results, fh, indent=2, ensure_ascii=False)

    click.echo(f"\nResults saved to {results_file.resolve()}")


# ---------------------------------------------------------------------------
# beam / double-beam / footing
# ---------------------------------------------------------------------------

@main.command()
@click.argument("input_file", type=click.Path(exists=True))
@click.option("--id", "beam_id", default=None, help="Design only this beam.")
@click.option("--method", type=_METHOD_CHOICE, default=None, help="Show one design method only.")
@click.option("--steps", is_flag=True, help="Print the equation trace.")
def beam(input_file: str, beam_id: Optional[str], method: Optional[str], steps: bool) -> None:
    """Design the singly reinforced beams of INPUT_FILE."""
    config = _load(input_file)
    if not config.beams:
        click.secho("No 'beams' section in input.", fg="yellow")
        return
    for name, inputs in _select(config.beams, beam_id, "beams").items():
        click.echo(summarise_single_beam(name, design_single_beam(inputs), _method(method), steps))


@main.command("double-beam")
@click.argument("input_file", type=click.Path(exists=True))
@click.option("--id", "beam_id", default=None, help="Design only this beam.")
@click.option("--method", type=_METHOD_CHOICE, default=None, help="Show one design method only.")
@click.option("--steps", is_flag=True, help="Print the equation trace.")
def double_beam(input_file: str, beam_id: Optional[str], method: Optional[str], steps: bool) -> None:
    """Design the doubly reinforced beams of INPUT_FILE."""
    config = _load(input_file)
    if not config.double_beams:
        click.secho("No 'double_beams' section in input.", fg="yellow")
        return
    for name, inputs in _select(config.double_beams, beam_id, "double_beams").items():
        click.echo(summarise_double_beam(name, design_double_beam(inputs), _method(method), steps))


@main.command()
@click.argument("input_file", type=click.Path(exists=True))
@click.option(
    "--thickness", type=float, default=None,
    help="Footing thickness in m (overrides the punching-shear search).",
)
@click.option("--steps", is_flag=True, help="Print the equation trace.")
def footing(input_file: str, thickness: Optional[float], steps: bool) -> None:
    """Size and design the footings of INPUT_FILE."""
    config = _load(input_file)
    if config.footings is None:
        click.secho("No 'footings' section in input.", fg="yellow")
        return
    sized, designed = _run_footings(config.footings, thickness)
    _echo_footings(sized, designed, steps)


# ---------------------------------------------------------------------------
# template
# ---------------------------------------------------------------------------

@main.command()
def template() -> None:
    """Print a sample input YAML to stdout."""
    click.echo(generate_template())


# ---------------------------------------------------------------------------
# validate
# ---------------------------------------------------------------------------

@main.command()
@click.argument("input_file", type=click.Path(exists=True))
def validate(input_file: str) -> None:
    """Validate an input YAML file without running the design."""
    click.echo(f"Validating: {input_file}")
    config = _load(input_file)

    click.echo(f"  beams        : {len(config.beams)}")
    click.echo(f"  double_beams : {len(config.double_beams)}")
    n_footings = len(config.footings.footings) if config.footings else 0
    click.echo(f"  footings     : {n_footings}")
    click.secho("\nInput file is valid.", fg="green")


# ---------------------------------------------------------------------------
# Allow ``python -m rcdesign.cli``
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    main()
