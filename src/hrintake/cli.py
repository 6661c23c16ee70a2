"""Typer CLI entrypoint for the intake pipeline."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, Optional

import typer

from .config import ConfigManager, build_app_config
from .container import IntakeContainer, create_container
from .db import init_models
from .errors import ConfigError
from .logging import configure_logging
from .pdf_utils import extract_markdown
from .pipeline import AuditLogger
from .schemas import InboundEmail, JobRequirements, ScoringInput

app = typer.Typer(help="Inbound applicant intake CLI.")


def _build_container(config: Optional[Path], log_level: str) -> IntakeContainer:
    configure_logging(log_level)
    settings: dict[str, Any] = {}
    try:
        if config:
            settings = ConfigManager(config.parent).load(config.name)
        app_config = build_app_config(settings)
    except ConfigError as exc:
        raise typer.BadParameter(str(exc), param_name="config") from exc
    return create_container(config=app_config)


def _load_email(path: Path) -> InboundEmail:
    return InboundEmail.model_validate_json(path.read_text(encoding="utf-8"))


def _read_resume(path: Path) -> str:
    if path.suffix.lower() == ".pdf":
        return extract_markdown(path)
    return path.read_text(encoding="utf-8")


def _echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))


@app.command("init-db")
def init_db(
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("INFO", help="Log level for structured logging."),
) -> None:
    """Create database tables."""
    container = _build_container(config, log_level)

    async def _run() -> None:
        engine = container.engine()
        try:
            await init_models(engine)
        finally:
            await engine.dispose()

    asyncio.run(_run())
    typer.echo("Database initialised.")


@app.command()
def classify(
    email: Path = typer.Argument(..., exists=True, readable=True, dir_okay=False, help="Inbound email JSON."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("INFO", help="Log level for structured logging."),
) -> None:
    """Classify an inbound email to a job posting."""
    container = _build_container(config, log_level)
    inbound = _load_email(email)

    async def _run():
        try:
            return await container.classifier().classify_email(inbound)
        finally:
            await container.engine().dispose()

    result = asyncio.run(_run())
    if result is None:
        typer.echo("Classification failed.", err=True)
        raise typer.Exit(code=1)
    _echo_json(result.summary())


@app.command()
def score(
    job: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Job requirements JSON."),
    resume: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Resume text or PDF."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("INFO", help="Log level for structured logging."),
) -> None:
    """Score a resume against job requirements."""
    container = _build_container(config, log_level)
    requirements = JobRequirements.model_validate_json(job.read_text(encoding="utf-8"))
    scoring_input = ScoringInput(job=requirements, cv_text=_read_resume(resume))

    result = asyncio.run(container.scoring_engine().score(scoring_input))
    _echo_json(result.model_dump(mode="json"))


@app.command()
def process(
    email: Path = typer.Argument(..., exists=True, readable=True, dir_okay=False, help="Inbound email JSON."),
    resume: Optional[Path] = typer.Option(
        None, exists=True, readable=True, dir_okay=False, help="Resume text or PDF; defaults to attachments."
    ),
    audit_log: Optional[Path] = typer.Option(None, dir_okay=False, help="Audit log output (JSONL)."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("INFO", help="Log level for structured logging."),
) -> None:
    """Run the full intake pipeline for one email."""
    container = _build_container(config, log_level)
    inbound = _load_email(email)
    resume_text = _read_resume(resume) if resume else None
    audit_logger = AuditLogger(audit_log) if audit_log else None

    async def _run():
        try:
            return await container.pipeline().process(
                inbound,
                resume_text=resume_text,
                audit_logger=audit_logger,
            )
        finally:
            await container.engine().dispose()

    outcome = asyncio.run(_run())
    if outcome is None:
        typer.echo("Classification failed.", err=True)
        raise typer.Exit(code=1)
    _echo_json(outcome.to_dict())


def main() -> None:
    app()


if __name__ == "__main__":
    main()
