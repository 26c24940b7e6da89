"""CLI for wellness-report: render reports offline or run the API server."""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from wellness_report.analysis.prompts import FALLBACK_ANALYSIS
from wellness_report.analysis.provider import AnalysisProvider, analyze_with_fallback
from wellness_report.composer.composer import ReportComposer
from wellness_report.core.config import AppSettings
from wellness_report.exceptions import RenderError, ValidationError
from wellness_report.logging_config import setup_logging
from wellness_report.services.report_service import build_report_request, report_filename

app = typer.Typer(name="wellness-report", help="Questionnaire analysis rendered as a PDF report")
console = Console()


def _load_payload(payload_path: Path) -> dict:
    """Load an ``/api/analyze``-shaped JSON object from a file."""
    raw = json.loads(payload_path.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise typer.BadParameter(f"Expected a JSON object in {payload_path}")
    return raw


@app.command()
def render(
    payload_file: Path = typer.Argument(..., help="JSON file with name, email, responses, logoBase64"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output PDF path"),
    analysis_file: Optional[Path] = typer.Option(
        None, "--analysis-file", help="Use this text as the analysis instead of calling the LLM"
    ),
    offline: bool = typer.Option(False, "--offline", help="Skip the LLM and use the fallback analysis"),
    model: Optional[str] = typer.Option(None, "--model", help="LLM model name"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Render a PDF report from a submission file."""
    settings = AppSettings()
    if verbose:
        settings.observability.log_level = "DEBUG"
    setup_logging(settings.observability)
    if model:
        settings.llm.model = model

    payload = _load_payload(payload_file)
    try:
        request = build_report_request(
            payload.get("name"),
            payload.get("email"),
            payload.get("responses", payload.get("answers")),
            payload.get("logoBase64"),
        )
    except ValidationError as exc:
        console.print(f"[red]Invalid submission:[/red] {exc}")
        raise typer.Exit(code=2)

    if analysis_file:
        analysis = analysis_file.read_text(encoding="utf-8")
    elif offline:
        analysis = FALLBACK_ANALYSIS
    else:
        analysis = asyncio.run(analyze_with_fallback(AnalysisProvider(settings.llm), request))

    composer = ReportComposer(settings.report)
    try:
        document = composer.layout(request, analysis)
        pdf = composer.render(document)
    except RenderError as exc:
        console.print(f"[red]Render failed:[/red] {exc}")
        raise typer.Exit(code=1)

    target = output or Path(report_filename(request.submitter_name))
    target.write_bytes(pdf)

    table = Table(title="Report")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Submitter", request.submitter_name)
    table.add_row("Answers", str(len(request.answers)))
    table.add_row("Logo", "yes" if document.pages[0].images() else "no")
    table.add_row("Pages", str(document.page_count))
    table.add_row("Size", f"{len(pdf):,} bytes")
    table.add_row("Output", str(target))
    console.print(table)


@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", help="Bind address"),
    port: Optional[int] = typer.Option(None, help="Port (defaults to WELLNESS_API_PORT / PORT)"),
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on code changes"),
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    settings = AppSettings()
    bind_port = port or settings.api.port
    console.print(f"Backend rodando na porta {bind_port}")
    uvicorn.run("wellness_report.api.app:app", host=host, port=bind_port, reload=reload)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
