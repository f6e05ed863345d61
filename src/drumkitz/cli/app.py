from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from drumkitz.audio import PcmAudio
from drumkitz.config import default_sweep_thresholds
from drumkitz.detection import detect_hits
from drumkitz.errors import DrumkitzError
from drumkitz.ingest import load_audio
from drumkitz.pipeline import HitExtractionPipeline, PipelineConfig

console = Console()
app = typer.Typer(help="Drum hit detection and sample extraction CLI")


@app.command()
def detect(
    audio_path: Path = typer.Argument(..., exists=True, readable=True),
    threshold: Optional[float] = typer.Option(None, "--threshold", "-t", help="RMS threshold"),
    config: Optional[Path] = typer.Option(None, help="Detector config override"),
) -> None:
    detector_config = PipelineConfig(threshold=threshold, config_path=config).resolve_detector_config()
    audio = _load_or_exit(audio_path)
    segments = detect_hits(audio, detector_config.threshold, detector_config.params)
    if not segments:
        console.print("No hits detected", style="yellow")
        return

    table = Table(title=f"{len(segments)} hits at threshold {detector_config.threshold:.3f}")
    table.add_column("#", justify="right")
    table.add_column("start (s)", justify="right")
    table.add_column("end (s)", justify="right")
    table.add_column("amplitude", justify="right")
    for idx, segment in enumerate(segments, start=1):
        table.add_row(
            str(idx),
            f"{segment.start:.4f}",
            f"{segment.end:.4f}",
            f"{segment.amplitude:.4f}",
        )
    console.print(table)


@app.command()
def extract(
    audio_path: Path = typer.Argument(..., exists=True, readable=True),
    threshold: Optional[float] = typer.Option(None, "--threshold", "-t", help="RMS threshold"),
    out_dir: Path = typer.Option(Path("out"), "--out", "-o", help="Output directory"),
    archive: bool = typer.Option(True, "--archive/--no-archive", help="Also write a zip of the samples"),
    config: Optional[Path] = typer.Option(None, help="Detector config override"),
) -> None:
    pipeline = HitExtractionPipeline(
        config=PipelineConfig(threshold=threshold, config_path=config)
    )
    try:
        result = pipeline.run(audio_path=audio_path, output_dir=out_dir, archive=archive)
    except DrumkitzError as exc:
        console.print(str(exc), style="red")
        raise typer.Exit(code=1) from exc
    if result.segments:
        console.print(f"Detected {len(result.segments)} hits", style="cyan")
    else:
        console.print("No hits detected", style="yellow")
    if result.clip_paths:
        console.print(f"Samples written to {result.clip_paths[0].parent}")
    if result.archive_path:
        console.print(f"Archive written to {result.archive_path}")
    if result.manifest_path:
        console.print(f"Manifest written to {result.manifest_path}")


@app.command()
def sweep(
    audio_path: Path = typer.Argument(..., exists=True, readable=True),
    threshold: List[float] = typer.Option(None, "--threshold", "-t", help="Thresholds to try"),
    steps: int = typer.Option(10, min=2, help="Grid size when no thresholds are given"),
    config: Optional[Path] = typer.Option(None, help="Detector config override"),
) -> None:
    detector_config = PipelineConfig(config_path=config).resolve_detector_config()
    audio = _load_or_exit(audio_path)
    thresholds = threshold or default_sweep_thresholds(steps)
    for value in sorted(thresholds):
        segments = detect_hits(audio, value, detector_config.params)
        typer.echo(f"threshold={value:.3f}: hits={len(segments)}")


def _load_or_exit(audio_path: Path) -> PcmAudio:
    try:
        return load_audio(audio_path)
    except DrumkitzError as exc:
        console.print(str(exc), style="red")
        raise typer.Exit(code=1) from exc


def run() -> None:
    app()
