"""Entry point for the termpick demo: browse a directory and pick a path."""

from __future__ import annotations

import argparse
import logging
import sys


def main() -> None:
    parser = argparse.ArgumentParser(description="termpick: browse a directory tree and pick a path")
    parser.add_argument("path", nargs="?", default=".", help="Directory to browse (default: .)")
    parser.add_argument("--hidden", action="store_true", help="Show hidden files")
    parser.add_argument("--files-only", action="store_true", help="Do not allow choosing folders")
    parser.add_argument("--log-level", default="warning", choices=["debug", "info", "warning", "error"])
    parser.add_argument("--log-file", default=None, help="Write logs here instead of stderr")
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        filename=args.log_file,
    )

    from pathlib import Path

    from termpick.items import FileSystemNode, TreeRoot
    from termpick.picker import Picker

    root_path = Path(args.path).expanduser().resolve()
    if not root_path.is_dir():
        parser.error(f"not a directory: {args.path}")

    root = FileSystemNode(root_path, show_hidden=args.hidden)
    picker = Picker()
    chosen = picker.tree_navigation(
        "Choose a path",
        TreeRoot(root.display_name, root.load_children()),
        allow_selecting_folders=not args.files_only,
    )
    if chosen is None:
        sys.exit(1)


if __name__ == "__main__":
    main()
