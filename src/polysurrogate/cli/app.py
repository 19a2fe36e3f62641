# cli/app.py
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, List, Any, Dict
import contextlib
import json
import logging
import os
import sys

import importlib.resources as ir
import numpy as np
import typer

import polysurrogate
from polysurrogate.diagnostics.core import jacobian_error, gradient_error
from polysurrogate.diagnostics.sampling import make_sobol_sampler
from polysurrogate.exceptions import PolySurrogateError
from polysurrogate.logging_config import setup_logging
from polysurrogate.models.polynomial import PolynomialModel
from polysurrogate.utils.tf_env import initialize as tf_initialize

logger = logging.getLogger(__name__)

app = typer.Typer(no_args_is_help=True, add_completion=False)


@contextlib.contextmanager
def _mute_os_stderr():
    """
    Temporarily redirect the OS-level stderr (fd=2) to /dev/null.
    Silences TensorFlow's C++ start-up messages; keep the wrapped block small.
    """
    try:
        orig_fd = sys.stderr.fileno()
    except (AttributeError, OSError, ValueError):
        # no real fd behind stderr (captured output, notebooks)
        yield
        return

    saved = os.dup(orig_fd)
    try:
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, orig_fd)
        os.close(devnull)
        yield
    finally:
        os.dup2(saved, orig_fd)
        os.close(saved)


# ---------- config ----------
@dataclass
class ModelSpec:
    degrees: List[int]
    coefficients: Optional[List[float]] = None
    terms: Optional[List[Dict[str, Any]]] = None   # [{"powers": [1, 0], "value": 2.0}, ...]
    output: str = "model.psm"
    tag: Optional[str] = None


def _read_text_from_path_or_resource(path: Path, resource_pkg: str, resource_subdir: str | None = None) -> str:
    """
    Read text from a filesystem path if it exists; otherwise, try to read
    from package resources under `resource_pkg[/resource_subdir]`.
    """
    p = Path(path)
    if p.exists():
        return p.read_text()
    try:
        base = ir.files(resource_pkg)
        if resource_subdir:
            base = base.joinpath(resource_subdir)
        return (base / p.name).read_text(encoding="utf-8")
    except (FileNotFoundError, NotADirectoryError):
        raise typer.BadParameter(f"Config not found: {path}") from None


def read_config(path: Path) -> Dict[str, Any]:
    text = _read_text_from_path_or_resource(path, "polysurrogate.cli", resource_subdir="cfgs")
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise typer.BadParameter(f"Config {path} is not valid JSON: {e}") from None


def _coerce(v: str) -> Any:
    # naive coercion (int/float/bool), else str
    if v.lstrip("-").isdigit():
        return int(v)
    try:
        return float(v)
    except ValueError:
        if v.lower() in ("true", "false"):
            return v.lower() == "true"
        return v


def apply_overrides(cfg: Dict[str, Any], overrides: List[str]) -> Dict[str, Any]:
    # overrides format: key=val, or key=a,b,c for lists (shallow keys only)
    for ov in overrides:
        if "=" not in ov:
            raise typer.BadParameter(f"Invalid override '{ov}', expected key=value")
        k, v = ov.split("=", 1)
        cfg[k] = [_coerce(p) for p in v.split(",")] if "," in v else _coerce(v)
    return cfg


def to_spec(d: Dict[str, Any]) -> ModelSpec:
    if "degrees" not in d:
        raise typer.BadParameter("Config must define 'degrees'")
    degrees = d["degrees"]
    if not isinstance(degrees, list):
        degrees = [degrees]
    return ModelSpec(
        degrees=[int(v) for v in degrees],
        coefficients=d.get("coefficients"),
        terms=d.get("terms"),
        output=str(d.get("output", "model.psm")),
        tag=d.get("tag"),
    )


def build_model(spec: ModelSpec) -> PolynomialModel:
    if spec.coefficients is not None and spec.terms is not None:
        raise typer.BadParameter("Give either 'coefficients' or 'terms', not both")
    if spec.terms is not None:
        terms = {tuple(int(p) for p in t["powers"]): float(t["value"]) for t in spec.terms}
        return PolynomialModel.from_terms(spec.degrees, terms)
    return PolynomialModel(spec.degrees, spec.coefficients)


def _load(file: Path) -> PolynomialModel:
    try:
        return PolynomialModel.from_file(file)
    except (PolySurrogateError, OSError) as e:
        typer.echo(f"✗ Could not load {file}: {e}", err=True)
        raise typer.Exit(1)


# ---------- CLI commands ----------
@app.callback()
def _main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")):
    if verbose:
        setup_logging(level=logging.DEBUG)


@app.command("create")
def create(
    config: Path = typer.Option(..., "--config", "-c", help="Path to JSON model config"),
    override: List[str] = typer.Option(None, "--override", "-o", help="Shallow key=val overrides"),
):
    """Build a polynomial from a config and save it."""
    cfg = read_config(config)
    if override:
        cfg = apply_overrides(dict(cfg), override)
    spec = to_spec(cfg)
    try:
        model = build_model(spec)
        model.save(spec.output)
    except (PolySurrogateError, OSError) as e:
        typer.echo(f"✗ {e}", err=True)
        raise typer.Exit(1)
    label = f" [{spec.tag}]" if spec.tag else ""
    typer.echo(f"Wrote → {spec.output}{label}: {model.get_description()}")


@app.command("describe")
def describe(file: Path = typer.Argument(..., help="Saved model file")):
    """Print what a saved model contains."""
    model = _load(file)
    typer.echo(model.get_description())
    typer.echo(f"variables:    {model.get_num_variables()}")
    typer.echo(f"degrees:      {list(model.degrees)}")
    typer.echo(f"coefficients: {model.num_coefficients()} ({len(model.terms())} non-zero)")


@app.command("eval")
def eval_cmd(
    file: Path = typer.Argument(..., help="Saved model file"),
    x: List[float] = typer.Option(..., "--x", "-x", help="One coordinate per variable, in order"),
):
    """Evaluate a saved model and its gradient at one point."""
    model = _load(file)
    try:
        value = model.eval(x)
        grad = model.eval_jacobian(x)
    except PolySurrogateError as e:
        raise typer.BadParameter(str(e)) from None
    typer.echo(json.dumps({"x": list(x), "value": value, "gradient": grad[0].tolist()}))


@app.command("check")
def check(
    file: Path = typer.Argument(..., help="Saved model file"),
    samples: int = typer.Option(64, "--samples", "-n", help="Number of Sobol points in [-1, 1]^n"),
    seed: int = typer.Option(42, "--seed"),
    tol: float = typer.Option(1e-6, "--tol", help="Largest accepted absolute error"),
):
    """Compare analytic derivatives and batched values against pointwise references."""
    model = _load(file)
    with _mute_os_stderr():
        tf_initialize(seed=seed)
    points = make_sobol_sampler(-1.0, 1.0, seed=seed)(samples, model.get_num_variables())

    jac_err = jacobian_error(model, points)
    grad_err = gradient_error(model, points)
    pointwise = np.array([model.eval(p) for p in points])
    batch_err = float(np.max(np.abs(model.eval_batch_num(points) - pointwise)))
    logger.debug(f"check on {samples} points: jac={jac_err:.3e} grad={grad_err:.3e} batch={batch_err:.3e}")

    # errors are absolute, so scale the batch tolerance with the model's magnitude
    batch_tol = tol * max(1.0, float(np.max(np.abs(pointwise))))
    typer.echo(f"basis jacobian error: {jac_err:.3e}")
    typer.echo(f"gradient error:       {grad_err:.3e}")
    typer.echo(f"batch eval error:     {batch_err:.3e}")
    if jac_err > tol or grad_err > tol or batch_err > batch_tol:
        typer.echo("✗ Check failed")
        raise typer.Exit(1)
    typer.echo("✔ Check passed.")


@app.command("version")
def version():
    typer.echo(polysurrogate.__version__)


def main():
    app()

if __name__ == "__main__":
    main()
