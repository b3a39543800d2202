from __future__ import annotations

import json
from contextlib import contextmanager
from typing import Any, Iterator, Optional

import typer
from rich.console import Console
from rich.table import Table

from replicate_sdk.client import Client
from replicate_sdk.config.logging_config import configure_logging
from replicate_sdk.config.settings import settings
from replicate_sdk.errors import ReplicateError
from replicate_sdk.records.model import Model
from replicate_sdk.records.model_version import ModelVersion
from replicate_sdk.records.prediction import Prediction
from replicate_sdk.services.coercion import to_boolean, to_float, to_integer

app = typer.Typer(help="Replicate API CLI (predictions, models, trainings, uploads).")
console = Console()


def get_client() -> Client:
    return Client()


def parse_input_pairs(pairs: list[str]) -> dict[str, Any]:
    """Turn `key=value` pairs into prediction input; numbers and booleans are typed."""
    out: dict[str, Any] = {}
    for pair in pairs:
        key, sep, raw = pair.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"Expected key=value, got {pair!r}")
        if raw.lower() in ("true", "false"):
            out[key] = to_boolean(raw)
        elif to_integer(raw) is not None:
            out[key] = to_integer(raw)
        elif to_float(raw) is not None:
            out[key] = to_float(raw)
        else:
            out[key] = raw
    return out


@contextmanager
def _exit_on_api_error() -> Iterator[None]:
    try:
        yield
    except ReplicateError as e:
        console.print(f"[red]✗[/red] Error: {e}")
        raise typer.Exit(1)


def _print_prediction(prediction: Prediction) -> None:
    table = Table(title=f"Prediction {prediction.get('id', '')}")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("status", prediction.status_description())
    table.add_row("version", str(prediction.get("version", "")))
    table.add_row("created_at", str(prediction.get("created_at", "")))
    output = prediction.output
    table.add_row("output", json.dumps(prediction.to_dict().get("output")) if output is not None else "")
    if prediction.get("error"):
        table.add_row("error", str(prediction.get("error")))
    console.print(table)


@app.callback()
def main_callback(
    log_level: str = typer.Option(settings.log_level, "--log-level", help="Logging level."),
) -> None:
    configure_logging(log_level)


@app.command("predict")
def predict_cmd(
    version: str = typer.Argument(..., help="Model version ID."),
    inputs: list[str] = typer.Option([], "--input", "-i", help="Input as key=value (repeatable)."),
    webhook: Optional[str] = typer.Option(None, help="Webhook URL for completion notifications."),
) -> None:
    """Create a prediction."""
    params: dict[str, Any] = {"version": version, "input": parse_input_pairs(inputs)}
    if webhook:
        params["webhook"] = webhook
    with _exit_on_api_error(), get_client() as client:
        prediction = client.create_prediction(params)
    _print_prediction(prediction)


@app.command("prediction")
def prediction_cmd(prediction_id: str = typer.Argument(..., help="Prediction ID.")) -> None:
    """Show one prediction."""
    with _exit_on_api_error(), get_client() as client:
        prediction = client.retrieve_prediction(prediction_id)
    _print_prediction(prediction)


@app.command("cancel")
def cancel_cmd(prediction_id: str = typer.Argument(..., help="Prediction ID.")) -> None:
    """Cancel a running prediction."""
    with _exit_on_api_error(), get_client() as client:
        prediction = client.cancel_prediction(prediction_id)
    console.print(f"[green]✓[/green] {prediction.get('id', '')}: {prediction.status_description()}")


@app.command("predictions")
def predictions_cmd(
    cursor: Optional[str] = typer.Option(None, help="Pagination cursor."),
) -> None:
    """List recent predictions."""
    with _exit_on_api_error(), get_client() as client:
        page = client.list_predictions(cursor)

    table = Table(title="Predictions")
    table.add_column("id", style="cyan")
    table.add_column("status", style="magenta")
    table.add_column("created_at", style="green")
    for p in page["results"]:
        table.add_row(str(p.get("id", "")), str(p.get("status", "")), str(p.get("created_at", "")))
    console.print(table)
    if page.get("next"):
        console.print(f"next: {page['next']}")


@app.command("model")
def model_cmd(
    identifier: str = typer.Argument(..., help="Model as owner/name."),
    version: str = typer.Option("latest", help="'latest', 'all', or a version ID."),
) -> None:
    """Show a model, all its versions, or one version."""
    with _exit_on_api_error(), get_client() as client:
        result = client.retrieve_model(identifier, version=version)

    if isinstance(result, Model):
        console.print(f"[bold blue]{result.identifier}[/bold blue] {result.get('description') or ''}")
        latest = result.latest_version
        if latest is not None:
            console.print(f"latest version: {latest.get('id', '')}")
        return

    versions = result if isinstance(result, list) else [result]
    table = Table(title=f"Versions of {identifier}")
    table.add_column("id", style="cyan")
    table.add_column("created_at", style="green")
    for v in versions:
        table.add_row(str(v.get("id", "")), str(v.get("created_at", "")))
    console.print(table)


@app.command("collection")
def collection_cmd(slug: str = typer.Argument(..., help="Collection slug.")) -> None:
    """List the models in a collection."""
    with _exit_on_api_error(), get_client() as client:
        collection = client.retrieve_collection(slug)

    table = Table(title=collection.get("name") or slug)
    table.add_column("model", style="cyan")
    table.add_column("description", style="green")
    for m in collection.get("models") or []:
        table.add_row(f"{m.get('owner', '')}/{m.get('name', '')}", m.get("description") or "")
    console.print(table)


@app.command("training")
def training_cmd(training_id: str = typer.Argument(..., help="Training ID.")) -> None:
    """Show one training job."""
    with _exit_on_api_error(), get_client() as client:
        training = client.retrieve_training(training_id)
    console.print(f"{training.get('id', '')}: {training.status_description()}")
    version = training.version
    if isinstance(version, ModelVersion):
        version = version.get("id", "")
    if version:
        console.print(f"trained version: {version}")


@app.command("upload")
def upload_cmd(zip_path: str = typer.Argument(..., help="Path to a .zip training dataset.")) -> None:
    """Upload a training dataset and print its serving URL."""
    with _exit_on_api_error(), get_client() as client:
        upload = client.upload_zip(zip_path)
    console.print(f"[green]✓[/green] serving_url={upload.serving_url}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
