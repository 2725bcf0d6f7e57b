"""Compile command - grid file to pattern descriptors"""

import json
from pathlib import Path
from typing import Any

import click
import yaml

from beatgrid_core.constants import DEFAULT_BANK
from beatgrid_core.exceptions import BeatgridError
from beatgrid_core.models.pattern import stack_to_strudel
from beatgrid_loop.engine import PatternCompiler
from beatgrid_loop.state import GridModel


def load_grid_file(path: Path) -> dict[str, Any]:
    """
    Load a grid file (JSON, or YAML for .yaml/.yml).

    Raises:
        ValueError: If the file does not hold a mapping
    """
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in (".yaml", ".yml"):
        data = yaml.safe_load(text)
    else:
        data = json.loads(text)

    if not isinstance(data, dict):
        raise ValueError(f"Grid file must contain a mapping, got {type(data).__name__}")
    return data


@click.command("compile")
@click.argument("grid_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--strudel", is_flag=True, help="Print a stacked Strudel expression")
@click.option("--bank", default=None, help="Override the file's sample bank")
@click.option("--bpm", type=float, default=None, help="Override the file's tempo")
@click.pass_context
def compile_grid(ctx, grid_file: Path, strudel: bool, bank: str | None, bpm: float | None):
    """Compile a grid file into per-instrument beat patterns

    Example:
        beatgrid compile groove.yaml
        beatgrid compile groove.json --strudel
    """
    formatter = ctx.obj["formatter"]

    try:
        data = load_grid_file(grid_file)
        grid = GridModel.from_dict(data)
        tempo = bpm if bpm is not None else float(data.get("bpm", 60.0))
        if tempo <= 0:
            raise click.BadParameter(f"BPM must be positive, got {tempo}", param_hint="bpm")
        tracks = PatternCompiler().compile_grid(
            grid,
            bank=bank or data.get("bank", DEFAULT_BANK),
            bpm=tempo,
        )
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        formatter.error("Invalid grid file", str(e))
        raise click.Abort()
    except (BeatgridError, ValueError) as e:
        formatter.error("Failed to compile grid", str(e))
        raise click.Abort()

    if strudel:
        formatter.text(stack_to_strudel(tracks))
    else:
        formatter.tracks([track.to_dict() for track in tracks])
