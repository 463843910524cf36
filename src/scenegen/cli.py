"""CLI entry point for the scene script generator."""

import json
import logging
import typer
from pathlib import Path
from typing import Optional
from enum import Enum

from . import __version__
from .config import config
from .errors import ValidationError
from .models import GenerationRequest, Script, ScriptOrigin

app = typer.Typer(
    name="scenegen",
    help="AI-powered scene script generator for short videos",
    no_args_is_help=True
)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"scenegen version {__version__}")
        raise typer.Exit()


class AspectRatio(str, Enum):
    """Supported output aspect ratios."""
    LANDSCAPE = "16:9"
    PORTRAIT = "9:16"


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit"
    )
) -> None:
    """Scene Script Generator - Turn a theme or script into video scenes."""
    pass


def _load_script(path: Path) -> Script:
    if not path.exists():
        typer.echo(f"❌ No script found at {path}")
        typer.echo("   Run 'scenegen generate' to create one")
        raise typer.Exit(1)
    try:
        return Script.from_yaml(path)
    except Exception as e:
        typer.echo(f"❌ Error loading script: {e}")
        raise typer.Exit(1)


def _save_script(script: Script, output: Path) -> None:
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        script.to_yaml(output)
        typer.echo(f"\n✅ Script saved: {output}")
    except OSError as e:
        typer.echo(f"❌ Error saving script: {e}")
        raise typer.Exit(1)


def _print_scenes(script: Script) -> None:
    origin = "fallback split" if script.is_fallback else "AI"
    typer.echo(f"\n📋 Summary:")
    if script.title:
        typer.echo(f"   Title: {script.title}")
    typer.echo(f"   Scenes: {len(script.scenes)} ({origin})")
    typer.echo(f"   Total duration: {script.total_duration:.1f}s")

    typer.echo(f"\n📽️  Scene breakdown:")
    for scene in script.scenes:
        typer.echo(
            f"   • {scene.index}: {scene.duration:.1f}s "
            f"[{scene.emotion.value}, {scene.transition.value}]"
        )
        subtitle = scene.subtitle_text
        typer.echo(f"     {subtitle[:70] + '...' if len(subtitle) > 70 else subtitle}")


def _capability():
    from .services import AnthropicClient

    try:
        config.validate_required()
        return AnthropicClient()
    except ValueError as e:
        typer.echo(f"❌ Configuration error: {e}")
        raise typer.Exit(1)


@app.command()
def generate(
    theme: str = typer.Argument(
        ...,
        help="Theme, transcript or idea for the video"
    ),
    duration: float = typer.Option(
        60.0,
        "--duration",
        "-d",
        help="Target duration in seconds",
        min=5,
        max=600
    ),
    scenes: Optional[int] = typer.Option(
        None,
        "--scenes",
        "-s",
        help="Exact number of scenes (derived from duration if not specified)",
        min=1
    ),
    style: Optional[str] = typer.Option(
        None,
        "--style",
        help="Style: educational, entertainment, news, storytelling, tutorial, or free text"
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        "-t",
        help="Seconds to wait for the model before falling back"
    ),
    output: Path = typer.Option(
        Path("script.yaml"),
        "--output",
        "-o",
        help="Output script file path"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    ),
) -> None:
    """Generate a scene script from a theme using AI."""
    from .agents import ScriptAgent

    setup_logging(verbose)
    typer.echo(f"🎬 Generating script: {theme[:70]}")
    typer.echo(f"   Target duration: {duration:g}s")

    try:
        request = GenerationRequest(
            source_text=theme,
            requested_scene_count=scenes,
            style=style or config.default_style,
            target_duration=duration,
        )
        agent = ScriptAgent(capability=_capability(), timeout=timeout)
        script = agent.run(request)
    except ValidationError as e:
        typer.echo(f"❌ Invalid request: {e}")
        raise typer.Exit(1)

    if script.is_fallback:
        typer.echo("⚠️  AI generation failed; scenes were split from the theme text")

    _save_script(script, output)
    _print_scenes(script)


@app.command()
def split(
    source: Path = typer.Argument(
        ...,
        help="Text file containing the script to split",
        exists=True,
        file_okay=True,
        dir_okay=False
    ),
    scenes: int = typer.Option(
        ...,
        "--scenes",
        "-s",
        help="Exact number of scenes",
        min=1
    ),
    style: Optional[str] = typer.Option(
        None,
        "--style",
        help="Style keyword for the image prompts"
    ),
    duration: float = typer.Option(
        60.0,
        "--duration",
        "-d",
        help="Target duration in seconds",
        min=5,
        max=600
    ),
    offline: bool = typer.Option(
        False,
        "--offline",
        help="Split on sentence boundaries without calling the model"
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        "-t",
        help="Seconds to wait for the model before falling back"
    ),
    output: Path = typer.Option(
        Path("script.yaml"),
        "--output",
        "-o",
        help="Output script file path"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    ),
) -> None:
    """Split an existing script into scenes."""
    from .agents import ScriptAgent, validate_request
    from .pipeline import split_by_sentence_boundary, vary_transitions

    setup_logging(verbose)
    text = source.read_text(encoding="utf-8")
    typer.echo(f"✂️  Splitting {source} into {scenes} scene(s)")

    try:
        request = GenerationRequest(
            source_text=text,
            requested_scene_count=scenes,
            style=style or "",
            target_duration=duration,
        )
        if offline:
            validate_request(request)
            script = Script(
                scenes=vary_transitions(split_by_sentence_boundary(text, scenes, duration)),
                generated_by=ScriptOrigin.FALLBACK,
            )
        else:
            script = ScriptAgent(capability=_capability(), timeout=timeout).split(request)
    except ValidationError as e:
        typer.echo(f"❌ Invalid request: {e}")
        raise typer.Exit(1)

    _save_script(script, output)
    _print_scenes(script)


@app.command()
def enhance(
    script_path: Path = typer.Argument(
        Path("script.yaml"),
        help="Path to script YAML file"
    ),
    theme: str = typer.Option(
        ...,
        "--theme",
        help="Overall theme of the video"
    ),
    aspect_ratio: AspectRatio = typer.Option(
        AspectRatio.LANDSCAPE,
        "--aspect-ratio",
        "-a",
        help="Output aspect ratio"
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        "-t",
        help="Seconds to wait for the model"
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output script file path (defaults to overwriting the input)"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    ),
) -> None:
    """Rewrite a script's image prompts with scene-aware detail."""
    from .agents import EnhancementInput, PromptEnhancementAgent

    setup_logging(verbose)
    script = _load_script(script_path)
    typer.echo(f"🎨 Enhancing {len(script.scenes)} image prompt(s)")

    agent = PromptEnhancementAgent(capability=_capability(), timeout=timeout)
    enhanced = agent.run(EnhancementInput(
        script=script,
        theme=theme,
        aspect_ratio=aspect_ratio.value,
    ))

    changed = sum(
        1 for before, after in zip(script.scenes, enhanced.scenes)
        if before.image_prompt != after.image_prompt
    )
    if changed == 0:
        typer.echo("⚠️  No prompts were enhanced; original prompts kept")

    _save_script(enhanced, output or script_path)
    typer.echo(f"   Enhanced: {changed}/{len(enhanced.scenes)}")


@app.command()
def status(
    script_path: Path = typer.Argument(
        Path("script.yaml"),
        help="Path to script YAML file"
    ),
) -> None:
    """Show script status."""
    script = _load_script(script_path)
    typer.echo(f"📁 Script: {script_path}")
    _print_scenes(script)


@app.command()
def export(
    script_path: Path = typer.Argument(
        Path("script.yaml"),
        help="Path to script YAML file"
    ),
    output: Path = typer.Option(
        Path("scenes.json"),
        "--output",
        "-o",
        help="Output JSON file path"
    ),
) -> None:
    """Export a script as renderer JSON."""
    script = _load_script(script_path)
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(
            json.dumps(script.to_wire(), ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
    except OSError as e:
        typer.echo(f"❌ Error writing {output}: {e}")
        raise typer.Exit(1)
    typer.echo(f"✅ Exported {len(script.scenes)} scene(s) to {output}")


if __name__ == "__main__":
    app()
