from __future__ import annotations
import typer, json, asyncio, logging, time
from rich import print
from rich.logging import RichHandler
from rich.table import Table
from pathlib import Path
from typing import Optional
from pydantic import ValidationError
from .config import load_config, ExerciseConfig, PipelineConfig
from .errors import ConfigError
from .eye.contours import LandmarkFrame
from .exercise import patterns
from .exercise.session import ExerciseSession
from .pipeline import TrackingPipeline

app = typer.Typer(add_completion=False, help="lazyeyekit CLI (lek)")
logger = logging.getLogger("lazyeyekit")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v")):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format="%(message)s",
                        handlers=[RichHandler(show_path=False)])


def _config(path: Optional[str]) -> PipelineConfig:
    try:
        return load_config(path)
    except ConfigError as e:
        print(f"[red]{e}[/red]")
        raise typer.Exit(2)


def _exercise_cfg(cfg: PipelineConfig, kind: Optional[str], steps: Optional[int]):
    upd = {}
    if kind: upd["kind"] = kind
    if steps is not None: upd["steps"] = steps
    try:
        ex = ExerciseConfig.model_validate({**cfg.exercise.model_dump(), **upd})
        patterns.pattern_length(ex.kind)
    except (ValidationError, ValueError) as e:
        print(f"[red]{e}[/red]")
        raise typer.Exit(2)
    return ex


@app.command("patterns")
def show_patterns(kind: str = typer.Argument("saccades"), steps: int = typer.Option(10),
                  sub_mode: str = typer.Option("figure-eight")):
    """
    Print the target sequence an exercise would show.
    """
    try:
        rows = list(patterns.iter_targets(kind, steps, sub_mode))
    except ValueError as e:
        print(f"[red]{e}[/red]"); raise typer.Exit(2)
    table = Table(title=f"{kind} ({patterns.pattern_length(kind)} step loop)")
    for col in ("step", "start ms", "x %", "y %", "size", "color", "ms"):
        table.add_column(col)
    for step, t0, tgt in rows:
        table.add_row(str(step), str(t0), f"{tgt.x:.1f}", f"{tgt.y:.1f}", f"{tgt.size:g}", tgt.hex, str(tgt.duration_ms))
    print(table)


@app.command()
def replay(path: Path = typer.Argument(..., exists=True, dir_okay=False), config: Optional[str] = typer.Option(None),
           exercise: Optional[str] = typer.Option(None), steps: Optional[int] = typer.Option(None)):
    """
    Run recorded landmark frames (JSONL: width, height, pts|null, ts) through the pipeline.
    """
    cfg = _config(config)
    pipe = TrackingPipeline(cfg)
    session = ExerciseSession(_exercise_cfg(cfg, exercise, steps), cfg.gaze_buffer_size) if exercise else None
    with open(path, "r") as f:
        for n, line in enumerate(f, 1):
            if not line.strip(): continue
            rec = json.loads(line)
            ts = rec.get("ts")
            ts = float(ts) if ts is not None else n / cfg.fps
            now_ms = int(ts * 1000)
            frame = LandmarkFrame(rec["pts"], rec["width"], rec["height"]) if rec.get("pts") else None
            eye = pipe.tick(frame, ts)
            if session is not None:
                if not session.active: session.start(now_ms)
                session.tick(now_ms); session.record_gaze(eye, now_ms)
            out = {"frame": n, "eye": eye.model_dump(by_alias=True) if eye else None,
                   "lazyEye": pipe.status.model_dump(by_alias=True, mode="json")}
            typer.echo(json.dumps(out))
    if session is not None:
        print(session.finish(pipe.latest).model_dump(by_alias=True))


@app.command()
def run(camera: Optional[int] = 0, width: int = 1280, height: int = 720, config: Optional[str] = typer.Option(None),
        video: Optional[Path] = typer.Option(None, exists=True, dir_okay=False, help="read a recording instead of the camera"),
        fps: Optional[float] = typer.Option(None, help="sampling rate for blink normalization; default: camera-reported"),
        exercise: Optional[str] = typer.Option(None), steps: Optional[int] = typer.Option(None),
        timeout: float = typer.Option(0.1, help="seconds before a detection counts as a miss")):
    """
    Live tracking from a camera (or video file); prints JSONL signals, then the exercise result.
    """
    from .io.camera import frames
    from .eye.landmarks import FaceLandmarks
    from .runtime.scheduler import FrameScheduler, threaded

    cfg = _config(config)
    ex_cfg = _exercise_cfg(cfg, exercise, steps) if exercise else None
    source = FaceLandmarks()
    detector = threaded(source)

    async def producer():
        sched = None; session = None
        try:
            for f in frames(str(video) if video else camera, width, height):
                if sched is None:
                    pcfg = cfg.model_copy(update={"fps": fps or f.fps})
                    pipe = TrackingPipeline(pcfg)
                    logger.info("tracking at %.1f fps", pcfg.fps)
                    def emit(eye):
                        now_ms = int(time.time() * 1000)
                        if session is not None: session.record_gaze(eye, now_ms)
                        typer.echo(json.dumps({"eye": eye.model_dump(by_alias=True) if eye else None,
                                               "lazyEye": pipe.status.model_dump(by_alias=True, mode="json")}))
                    sched = FrameScheduler(detector, pipe, timeout_s=timeout, on_eye=emit)
                    if ex_cfg is not None:
                        session = ExerciseSession(ex_cfg, pcfg.gaze_buffer_size)
                        session.start(int(time.time() * 1000))
                sched.submit(f.image, f.ts)
                await asyncio.sleep(0)
                if session is not None:
                    now_ms = int(time.time() * 1000)
                    session.tick(now_ms)
                    if session.is_done(now_ms): break
        finally:
            if sched is not None:
                await sched.drain()
                logger.info("dropped %d frames, %d detection timeouts", sched.dropped, sched.timeouts)
            detector.close(); source.close()
        if session is not None:
            print(session.finish(sched.pipeline.latest).model_dump(by_alias=True))

    try:
        asyncio.run(producer())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    app()
