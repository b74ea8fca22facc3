from __future__ import annotations

import os
import sys
import argparse
from typing import Any, Dict, List

from mdclip.core.copy_orchestrator import CopyOrchestrator
from mdclip.core.host import LocalHost, StdoutHost
from mdclip.core.settings_manager import SettingsManager
from mdclip.errors import ConfigError
from mdclip.utils.logger import logger, setup_logger


class ConsoleNotifier:
    def __init__(self, stream=None):
        self.stream = stream

    def _emit(self, prefix: str, message: str) -> None:
        print(f"{prefix}{message}", file=self.stream or sys.stderr)

    def info(self, message: str) -> None:
        self._emit("", message)

    def warning(self, message: str) -> None:
        self._emit("Warning: ", message)

    def error(self, message: str) -> None:
        self._emit("Error: ", message)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="mdclip",
        description="Copy files and folders to the clipboard as Markdown",
    )
    p.add_argument("--workspace", "-w", action="append", default=[],
                   help="Workspace root for .gitignore and relative paths (repeatable, default: cwd)")
    p.add_argument("--no-gitignore", action="store_true", help="Do not honor .gitignore")
    p.add_argument("--exclude-dir", action="append", default=None,
                   help="Directory name to skip (repeatable, replaces the default set)")
    p.add_argument("--max-chars", type=int, help="Maximum characters of text content")
    p.add_argument("--max-files", type=int, help="Maximum number of files (folders are not counted)")
    p.add_argument("--relative", action="store_true", help="Use workspace-relative paths in headings")
    p.add_argument("--stdout", action="store_true", help="Print the Markdown instead of copying it")
    p.add_argument("--verbose", "-v", action="store_true", help="Log to stderr")

    sub = p.add_subparsers(dest="command", required=True)

    f = sub.add_parser("file", help="Copy one file")
    f.add_argument("path")

    t = sub.add_parser("tab", help="Copy the current editor tab (no .gitignore check)")
    t.add_argument("path", nargs="?", help="Path of the active document")

    ts = sub.add_parser("tabs", help="Copy all open tabs")
    ts.add_argument("paths", nargs="*")

    d = sub.add_parser("folder", help="Copy the files in a folder")
    d.add_argument("path")
    d.add_argument("--recursive", "-r", action="store_true", help="Descend into subfolders")
    return p


def _overrides(args: argparse.Namespace) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "maxCharacters": args.max_chars,
        "maxFiles": args.max_files,
        "excludeDirectories": args.exclude_dir,
    }
    if args.no_gitignore:
        out["useGitignore"] = False
    if args.relative:
        out["relativePaths"] = True
    return out


def main(argv: List[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    if args.verbose:
        setup_logger(console=True)

    roots = [os.path.abspath(w) for w in args.workspace] or [os.getcwd()]
    for r in roots:
        if not os.path.isdir(r):
            print(f"Workspace folder does not exist: {r}", file=sys.stderr)
            return 2

    settings = SettingsManager(roots[0])
    try:
        config = settings.load_config(_overrides(args))
    except ConfigError as e:
        print(f"Invalid settings: {e}", file=sys.stderr)
        return 2
    if settings.last_error:
        print(f"Warning: {settings.last_error}", file=sys.stderr)

    host = StdoutHost(roots) if args.stdout else LocalHost(roots)
    orchestrator = CopyOrchestrator(host, config, ConsoleNotifier())

    if args.command == "file":
        result = orchestrator.copy_file(args.path)
    elif args.command == "tab":
        result = orchestrator.copy_current_tab(args.path)
    elif args.command == "tabs":
        result = orchestrator.copy_all_open_tabs(args.paths)
    else:
        path = os.path.abspath(args.path)
        if not os.path.isdir(path):
            print(f"Folder does not exist: {path}", file=sys.stderr)
            return 2
        result = orchestrator.copy_folder(path, recursive=args.recursive)

    logger.info("Command %s finished: ok=%s", args.command, result.ok)
    return 0 if result.ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
