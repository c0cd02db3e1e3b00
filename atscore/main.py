"""
CLI Main - score a CV file for ATS compatibility.

Usage:
    atscore path/to/cv.pdf
    atscore cv.png --job-name "Data Engineer" --job-description "..."
"""

import asyncio
import json
import mimetypes
import sys
from pathlib import Path

import typer

from atscore.config.settings import Settings
from atscore.criteria.exceptions import CriteriaError
from atscore.extraction.exceptions import ExtractionFailedError
from atscore.logging.logger import Log
from atscore.processor.exceptions import InputValidationError
from atscore.processor.processor import build_processor
from atscore.processor.report_serializer import ReportSerializer

EXIT_INVALID_INPUT = 2
EXIT_EXTRACTION_FAILED = 3
EXIT_CONFIG_ERROR = 4

app = typer.Typer(
    name="atscore",
    help="Score a CV for Applicant Tracking System compatibility.",
    add_completion=False,
)


def guess_mime_type(path: Path) -> str:
    mime_type, _ = mimetypes.guess_type(path.name)
    return mime_type or "application/octet-stream"


@app.command()
def analyze(
    cv_path: Path = typer.Argument(
        ..., exists=True, dir_okay=False, readable=True, help="CV file (PDF, PNG, JPEG or TXT)"
    ),
    mime_type: str | None = typer.Option(
        None, "--mime-type", help="Declared MIME type; guessed from the extension if omitted"
    ),
    job_name: str | None = typer.Option(None, "--job-name", help="Target job title"),
    job_description: str | None = typer.Option(
        None, "--job-description", help="Target job description"
    ),
    include_text: bool = typer.Option(
        False, "--include-text", help="Include the extracted text in the report"
    ),
) -> None:
    """Analyze a CV and print the JSON report."""
    try:
        settings = Settings()
        Log.configure(settings.log_level, stream=sys.stderr)
        processor = build_processor(settings)
    except (ValueError, CriteriaError) as exc:
        typer.echo(f"Configuration error: {exc}", err=True)
        raise typer.Exit(EXIT_CONFIG_ERROR) from exc

    try:
        report = asyncio.run(
            processor.process(
                cv_path.read_bytes(),
                mime_type or guess_mime_type(cv_path),
                cv_path.name,
                job_name=job_name,
                job_description=job_description,
            )
        )
    except InputValidationError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(EXIT_INVALID_INPUT) from exc
    except ExtractionFailedError as exc:
        typer.echo(f"Error: {exc}. Try re-submitting a clearer scan.", err=True)
        raise typer.Exit(EXIT_EXTRACTION_FAILED) from exc

    payload = ReportSerializer(include_text=include_text).serialize(report)
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
