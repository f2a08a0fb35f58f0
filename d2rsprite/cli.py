"""
D2R Sprite Tool
Inspects, exports and re-imports Diablo II: Resurrected sprite files.

Usage:
    d2rsprite info path/to/file.sprite [more.sprite ...]
    d2rsprite export path/to/file.sprite [--frames] [--webp] [-o out/]
    d2rsprite export path/to/folder/ --scale 2
    d2rsprite import path/to/file.sprite edited.png [--no-backup]
    d2rsprite version
"""

import argparse
import os
import sys
from typing import Dict, List, Optional, Union

from tqdm import tqdm

from . import __version__
from .config import Config
from .sprite import Sprite
from .sprite_decoder import SpriteDecoder


# ============================================================================
# UTILITY FUNCTIONS
# ============================================================================

def expand_sprite_paths(paths: List[str]) -> List[str]:
    """
    Expand directories into the sprite files they contain.

    Args:
        paths: File and/or directory paths

    Returns:
        Sprite file paths, directories expanded in sorted order
    """
    expanded = []
    for path in paths:
        if os.path.isdir(path):
            for name in sorted(os.listdir(path)):
                if name.lower().endswith(Config.SPRITE_EXTENSION):
                    expanded.append(os.path.join(path, name))
        else:
            expanded.append(path)
    return expanded


def describe_sprite(sprite_path: str) -> str:
    """One-block text summary of a sprite header."""
    sprite = SpriteDecoder.decode_file(sprite_path)
    header = sprite.header
    lines = [
        f"{os.path.basename(sprite_path)}",
        f"  Magic:        {header.magic}",
        f"  Version:      {header.version}",
        f"  Strip size:   {header.total_width}x{header.frame_height}",
        f"  Frames:       {header.frames} (stored count {header.frame_count})",
        f"  Frame size:   {header.frame_width}x{header.frame_height}",
        f"  File size:    {len(sprite.data)} bytes (payload expects {header.payload_size})",
    ]
    return "\n".join(lines)


# ============================================================================
# EXPORT / IMPORT
# ============================================================================

def export_sprite(
    sprite_path: str,
    output_dir: str = None,
    frames: bool = False,
    webp: bool = False,
    scale: Union[int, float] = 1,
) -> List[str]:
    """
    Export a sprite to PNG (and optionally per-frame PNGs / animated WebP).

    A sprite with more frames than strip columns has 0 pixel wide frames;
    when per-frame or WebP output is requested for one, nothing is written
    and a ``[SKIP]`` line says why.

    Args:
        sprite_path: Path to the .sprite file
        output_dir: Directory for the outputs (default: next to the sprite)
        frames: Also write one PNG per frame
        webp: Also write an animated WebP of all frames
        scale: Optional scale factor

    Returns:
        Paths of the generated files, or empty list on failure
    """
    base_name = os.path.splitext(os.path.basename(sprite_path))[0]
    if output_dir is None:
        output_dir = os.path.dirname(os.path.abspath(sprite_path))

    try:
        sprite = SpriteDecoder.decode_file(sprite_path)
        if (frames or webp) and sprite.frame_width == 0:
            tqdm.write(
                f"  [SKIP] {os.path.basename(sprite_path)}: {sprite.total_frames} frames "
                f"do not fit a {sprite.width} pixel wide strip, no per-frame output"
            )
            return []

        os.makedirs(output_dir, exist_ok=True)

        outputs = []
        png_path = os.path.join(output_dir, f"{base_name}.png")
        sprite.save_to_png(png_path, scale=scale)
        outputs.append(png_path)

        if frames:
            frames_dir = os.path.join(output_dir, f"{base_name}_frames")
            outputs.extend(sprite.save_frames_to_png(frames_dir, base_name=base_name, scale=scale))

        if webp:
            webp_path = os.path.join(output_dir, f"{base_name}.webp")
            sprite.save_to_webp(webp_path, scale=scale)
            outputs.append(webp_path)

        tqdm.write(f"  [OK] {os.path.basename(sprite_path)} -> {os.path.basename(png_path)}")
        return outputs
    except (ValueError, OSError) as e:
        tqdm.write(f"  [ERROR] Export failed ({os.path.basename(sprite_path)}): {e}")
        return []


def export_sprites(
    sprite_paths: List[str],
    output_dir: str = None,
    frames: bool = False,
    webp: bool = False,
    scale: Union[int, float] = 1,
) -> Dict[str, List[str]]:
    """
    Export several sprites; see export_sprite.

    Returns:
        Generated files per sprite path (empty list where the export failed)
    """
    if not sprite_paths:
        print("No .sprite files to export.")
        return {}

    outputs: Dict[str, List[str]] = {}
    for path in tqdm(sprite_paths, desc="Exporting sprites", disable=len(sprite_paths) < 2):
        outputs[path] = export_sprite(
            path, output_dir=output_dir, frames=frames, webp=webp, scale=scale
        )

    exported = sum(1 for result in outputs.values() if result)
    print(f"[OK] Exported {exported}/{len(sprite_paths)} sprites")
    return outputs


def import_image(
    sprite_path: str,
    image_path: str,
    output_path: str = None,
    backup: bool = True,
) -> bool:
    """
    Replace the pixels of a sprite with an edited image.

    The original bytes are backed up to ``<sprite>.backup`` before the
    sprite is overwritten, unless ``backup`` is False or ``output_path``
    points elsewhere and does not exist yet.

    Args:
        sprite_path: Sprite to update
        image_path: Edited image, same size as the sprite strip
        output_path: Where to write the result (default: overwrite sprite_path)
        backup: Keep a copy of the file being replaced

    Returns:
        True on success
    """
    if output_path is None:
        output_path = sprite_path

    try:
        sprite = Sprite.from_file(sprite_path)
        updated = sprite.replace_image(image_path)
        backup_path = updated.save(output_path, backup=backup)
    except (ValueError, OSError) as e:
        print(f"[ERROR] Import failed: {e}")
        return False

    print(f"[OK] Sprite updated from {os.path.basename(image_path)} -> {output_path}")
    if backup_path:
        print(f"     Original backed up to: {os.path.basename(backup_path)}")
    return True


# ============================================================================
# COMMAND LINE
# ============================================================================

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="d2rsprite",
        description="Inspect, export and re-import D2R .sprite files",
    )
    sub = parser.add_subparsers(dest="command")

    info_p = sub.add_parser("info", help="Print header information")
    info_p.add_argument("sprites", nargs="+", metavar="SPRITE")

    export_p = sub.add_parser("export", help="Export sprites to PNG")
    export_p.add_argument("sprites", nargs="+", metavar="SPRITE",
                          help="Sprite files or folders containing them")
    export_p.add_argument("--output", "-o", metavar="DIR",
                          help="Output directory (default: next to each sprite)")
    export_p.add_argument("--frames", action="store_true",
                          help="Also write one PNG per frame")
    export_p.add_argument("--webp", action="store_true",
                          help="Also write an animated WebP preview")
    export_p.add_argument("--scale", type=float, default=1,
                          help="Scale factor (nearest neighbour)")

    import_p = sub.add_parser("import", help="Re-encode a sprite from an edited image")
    import_p.add_argument("sprite", metavar="SPRITE")
    import_p.add_argument("image", metavar="IMAGE")
    import_p.add_argument("--output", "-o", metavar="FILE",
                          help="Write to FILE instead of overwriting SPRITE")
    import_p.add_argument("--no-backup", action="store_true",
                          help="Do not keep a .backup copy of the replaced file")

    sub.add_parser("version", help="Print version and exit")

    return parser


def _cmd_info(args: argparse.Namespace) -> int:
    status = 0
    for path in expand_sprite_paths(args.sprites):
        try:
            print(describe_sprite(path))
        except (ValueError, OSError) as e:
            print(f"[ERROR] {path}: {e}")
            status = 1
    return status


def _cmd_export(args: argparse.Namespace) -> int:
    paths = expand_sprite_paths(args.sprites)
    scale = int(args.scale) if float(args.scale).is_integer() else args.scale
    outputs = export_sprites(
        paths,
        output_dir=args.output,
        frames=args.frames,
        webp=args.webp,
        scale=scale,
    )
    if not outputs or not all(outputs.values()):
        return 1
    return 0


def _cmd_import(args: argparse.Namespace) -> int:
    ok = import_image(
        args.sprite,
        args.image,
        output_path=args.output,
        backup=not args.no_backup,
    )
    return 0 if ok else 1


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command == "info":
        return _cmd_info(args)
    if args.command == "export":
        return _cmd_export(args)
    if args.command == "import":
        return _cmd_import(args)
    if args.command == "version":
        print(f"d2rsprite {__version__}")
        return 0

    parser.print_help()
    return 2


if __name__ == '__main__':
    sys.exit(main())
