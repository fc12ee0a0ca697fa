#!filepath: mlscore/cli.py
from pathlib import Path
from typing import List

import typer
from rich import print

from mlscore import __version__, configure_logging, logs
from mlscore.config.app_config import AppConfig
from mlscore.features.codec import encode
from mlscore.models.serialization import deserialize, model_digest
from mlscore.serving.cache import ModelCache
from mlscore.serving.dispatch import ScoringDispatcher
from mlscore.utils.errors import ScoringError

app = typer.Typer(help="mlscore model scoring CLI")

catch = logs.catch("command failed", passthrough=(typer.Exit,))


def _read_blob(path: Path) -> bytes:
    if not path.exists():
        print(f"[red]Model file not found: {path}[/red]")
        raise typer.Exit(code=1)
    return path.read_bytes()


def _dispatcher() -> ScoringDispatcher:
    cfg = AppConfig.load()
    configure_logging(cfg)
    return ScoringDispatcher(ModelCache.from_config(cfg.cache))


def _fail(e: ScoringError):
    print(f"[red]{type(e).__name__}: {e}[/red]")
    raise typer.Exit(code=1)


@app.command()
def version():
    print(f"v{__version__}")


@app.command()
@catch
def features(values: List[float] = typer.Argument(..., help="1..10 feature values")):
    """
    Encode positional values as a feature-vector blob
    """
    try:
        typer.echo(encode(values))
    except ScoringError as e:
        _fail(e)


@app.command()
@catch
def digest(model_path: Path):
    """
    SHA-256 of a model blob file
    """
    typer.echo(model_digest(_read_blob(model_path)).hex())


@app.command()
@catch
def inspect(model_path: Path):
    """
    Show kind / name / n_features of a model blob file
    """
    try:
        model = deserialize(_read_blob(model_path))
    except ScoringError as e:
        _fail(e)
    typer.echo(f"kind={model.kind.value} name={model.name} n_features={model.n_features}")


@app.command()
@catch
def classify(features_blob: str, model_path: Path):
    """
    Score a feature-vector blob with a classifier blob file
    """
    blob = _read_blob(model_path)
    try:
        typer.echo(_dispatcher().classify(features_blob, blob))
    except ScoringError as e:
        _fail(e)


@app.command()
@catch
def regress(features_blob: str, model_path: Path):
    """
    Score a feature-vector blob with a regressor blob file
    """
    blob = _read_blob(model_path)
    try:
        typer.echo(_dispatcher().regress(features_blob, blob))
    except ScoringError as e:
        _fail(e)


if __name__ == "__main__":
    app()

# python -m mlscore.cli features 1.0 2.0 3.0
