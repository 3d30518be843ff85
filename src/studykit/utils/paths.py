"""Workspace directory management for per-media output."""

from __future__ import annotations

import json
import re
from datetime import datetime, timezone
from pathlib import Path

from studykit.core.models import ProcessedData

KIT_FILENAME = "kit.json"


def slugify(text: str) -> str:
    """Convert text to a filesystem-safe slug."""
    text = text.lower().strip()
    text = re.sub(r"[^\w\s-]", "", text)
    text = re.sub(r"[\s_]+", "-", text)
    text = re.sub(r"-+", "-", text)
    return text[:80].strip("-")


def create_workspace(
    title: str,
    base_dir: Path = Path("./studykit_workspace"),
) -> Path:
    """Create a timestamped workspace directory for a media file.

    Structure: <base_dir>/<slug>/<YYYYMMDD_HHMMSS>/
    Groups multiple runs of the same source under one parent slug dir.
    """
    slug = slugify(title) or "untitled"
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    workspace = base_dir / slug / timestamp
    workspace.mkdir(parents=True, exist_ok=True)
    return workspace


def workspace_paths(workspace: Path, stem: str) -> dict:
    """Generate standard output paths for a workspace.

    Returns a dict with keys: kit, bilingual_vtt, mux_command.
    """
    return {
        "kit": workspace / KIT_FILENAME,
        "bilingual_vtt": workspace / f"{stem}_bilingual.vtt",
        "mux_command": workspace / "mux_command.txt",
    }


def save_kit(data: ProcessedData, path: Path, source: Path | None = None) -> Path:
    """Save a study kit as JSON, remembering the source media path."""
    payload = data.to_dict()
    if source is not None:
        payload["source"] = str(Path(source).resolve())
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    return path


def load_kit(path: Path) -> tuple[ProcessedData, Path | None]:
    """Load a study kit from a kit.json file or a workspace directory.

    Returns:
        Tuple of (kit, source media path if recorded).
    """
    path = Path(path)
    if path.is_dir():
        path = path / KIT_FILENAME
    if not path.is_file():
        raise FileNotFoundError(f"Study kit not found: {path}")
    payload = json.loads(path.read_text(encoding="utf-8"))
    source = payload.pop("source", None)
    return ProcessedData.from_dict(payload), Path(source) if source else None


def save_metadata(workspace: Path, **kwargs: object) -> Path:
    """Save processing metadata to the workspace.

    Creates a metadata.json with source info, processing parameters,
    output file inventory, and timing.
    """
    meta_path = workspace / "metadata.json"

    # Build file inventory from workspace contents
    files = {}
    for f in sorted(workspace.iterdir()):
        if f.name == "metadata.json" or f.name.startswith("."):
            continue
        files[f.name] = {
            "size_bytes": f.stat().st_size,
            "type": _classify_file(f.name),
        }

    data = {
        "created_at": datetime.now(timezone.utc).isoformat(),
        "files": files,
    }
    data.update({k: str(v) if isinstance(v, Path) else v for k, v in kwargs.items()})

    meta_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    return meta_path


def _classify_file(name: str) -> str:
    """Classify a workspace file by its name."""
    if name == KIT_FILENAME:
        return "study_kit"
    if name.endswith("_dub.wav"):
        return "dub_audio"
    if name == "mux_command.txt":
        return "mux_command"
    if name.endswith((".srt", ".vtt", ".ass")):
        return "subtitle"
    return "other"
