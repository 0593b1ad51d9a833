"""
Command-line front end for the Level Editor.
"""

import argparse
import sys
from collections import Counter
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from .config import EditorConfig
from .document_io import export_filename
from .session import EditSession

console = Console()
err_console = Console(stderr=True)


def _open_session(args) -> EditSession:
    session = EditSession(EditorConfig.load_from_toml(args.config))
    if not session.load_path(args.file):
        err_console.print(f"[red]{session.status_message}[/red]")
        sys.exit(1)
    return session


def cmd_new(args) -> int:
    session = EditSession(EditorConfig.load_from_toml(args.config))
    path = args.output or export_filename(args.name)
    session.save_path(path, args.name)
    console.print(f"Created [bold]{args.name}[/bold] -> {path}")
    return 0


def cmd_info(args) -> int:
    session = _open_session(args)
    doc = session.document

    table = Table(title=f"{doc.name} ({doc.width}x{doc.height})")
    table.add_column("Layer")
    table.add_column("Count", justify="right")
    materials = Counter(f.material.value for f in doc.floors)
    for material, count in sorted(materials.items()):
        table.add_row(f"floor: {material}", str(count))
    for kind, count in session.objects.counts().items():
        table.add_row(kind.value, str(count))
    console.print(table)
    if doc.last_modified:
        console.print(f"Last modified: {doc.last_modified}")
    return 0


def cmd_paint(args) -> int:
    session = _open_session(args)
    session.select_tool("floor", args.material)
    session.place_at(args.x, args.y)
    session.save_path(args.file)
    console.print(f"Painted {args.material} at {session.terrain.cell_at(args.x, args.y)}")
    return 0


def cmd_erase(args) -> int:
    session = _open_session(args)
    if not session.erase_at(args.x, args.y):
        console.print("Nothing to erase.")
        return 0
    session.save_path(args.file)
    console.print(f"Erased at ({args.x}, {args.y})")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="level_editor")
    p.add_argument("--config", default="level_editor.toml", help="TOML config file")
    sub = p.add_subparsers(dest="command", required=True)

    new = sub.add_parser("new", help="Write a fresh level")
    new.add_argument("name")
    new.add_argument("-o", "--output")
    new.set_defaults(func=cmd_new)

    info = sub.add_parser("info", help="Summarise a level")
    info.add_argument("file")
    info.set_defaults(func=cmd_info)

    paint = sub.add_parser("paint", help="Paint one terrain cell")
    paint.add_argument("file")
    paint.add_argument("x", type=float)
    paint.add_argument("y", type=float)
    paint.add_argument("material")
    paint.set_defaults(func=cmd_paint)

    erase = sub.add_parser("erase", help="Erase terrain and objects at a point")
    erase.add_argument("file")
    erase.add_argument("x", type=float)
    erase.add_argument("y", type=float)
    erase.set_defaults(func=cmd_erase)
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except ValueError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        return 1
