"""Sprite index tables built from texture-atlas XML descriptions."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Iterator
from pathlib import Path

IMAGES_DIR = "images"
GENERATED_DIR = "generated"
INDICES_FILE = "spritesheet_asset_indices.py"

HEADER = (
    "# Auto-generated sprite indices\n"
    "# Each constant represents the index of a sprite in the texture atlas\n\n"
)


def _normalise(name: str, suffix: str) -> str:
    return name.replace(suffix, "").replace("-", "_").replace(" ", "_")


def module_name(file_name: str) -> str:
    """Return the namespace name used for an atlas file such as ``sheet.xml``."""
    return _normalise(file_name, ".xml").lower()


def constant_name(sprite_name: str) -> str:
    """Return the constant name used for a sprite such as ``laserBlue01.png``."""
    return _normalise(sprite_name, ".png").upper()


def subtexture_names(xml_text: str) -> list[str]:
    """Return the names of the SubTexture entries of an atlas, in order."""
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as exc:
        raise ValueError(f"could not parse texture atlas: {exc}") from exc
    entries = root.findall("SubTexture")
    if not entries:
        raise ValueError("texture atlas has no SubTexture entries")
    names = []
    for entry in entries:
        name = entry.get("name")
        if name is None:
            raise ValueError("SubTexture entry without a name attribute")
        names.append(name)
    return names


def _atlas_files(images_dir: str | Path) -> list[Path]:
    directory = Path(images_dir)
    if not directory.is_dir():
        return []
    return sorted(
        path for path in directory.iterdir() if path.is_file() and path.suffix == ".xml"
    )


def _sheets(images_dir: str | Path) -> Iterator[tuple[Path, str, dict[str, int]]]:
    for path in _atlas_files(images_dir):
        names = subtexture_names(path.read_text(encoding="utf-8"))
        constants = {constant_name(name): index for index, name in enumerate(names)}
        yield path, module_name(path.name), constants


def spritesheet_indices(images_dir: str | Path) -> dict[str, dict[str, int]]:
    """Map each atlas in ``images_dir`` to its sprite constants and indices."""
    return {module: constants for _, module, constants in _sheets(images_dir)}


def render_indices(images_dir: str | Path) -> str:
    """Render the index tables of all atlases in ``images_dir`` as Python source."""
    parts = [HEADER]
    for path, module, constants in _sheets(images_dir):
        parts.append(f"# Indices for: {path.name!r}\n")
        parts.append(f"class {module}:\n")
        body = [f"    {name} = {index}\n" for name, index in constants.items()]
        parts.extend(body or ["    pass\n"])
        parts.append("\n\n")
    return "".join(parts)


def write_indices(assets_dir: str | Path) -> Path:
    """Write the generated index module under ``assets_dir`` and return its path."""
    assets = Path(assets_dir)
    out_dir = assets / GENERATED_DIR
    out_dir.mkdir(parents=True, exist_ok=True)
    target = out_dir / INDICES_FILE
    target.write_text(render_indices(assets / IMAGES_DIR), encoding="utf-8")
    return target