"""CLI entrypoints for docweaver commands."""

from __future__ import annotations

import argparse
import json
import sys
import threading
from pathlib import Path
from typing import Optional

from .config import ConfigError, load_config
from .logging import configure_logging
from .models import RunOutcome, RunStatus
from .orchestrator import Orchestrator
from .stores import DocumentationWriter

EXIT_CODES = {
    RunStatus.COMPLETED: 0,
    RunStatus.FAILED: 1,
    RunStatus.NO_WORKSPACE: 2,
    RunStatus.CANCELLED: 130,
}


def _add_verbosity_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    default: object = argparse.SUPPRESS if suppress_default else False
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=default,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=default,
        help="Only log warnings and errors.",
    )


def _add_path_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project root (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docweaver",
        description="Generate layered project documentation from per-file AI summaries.",
    )
    _add_verbosity_options(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write debug logs to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Summarize every file and assemble the project documentation.",
    )
    _add_verbosity_options(generate_parser, suppress_default=True)
    _add_path_argument(generate_parser)
    generate_parser.add_argument(
        "--no-save",
        action="store_true",
        help="Do not write the documentation folder, regardless of configuration.",
    )
    generate_parser.add_argument(
        "--print",
        dest="print_document",
        action="store_true",
        help="Print the assembled document to stdout.",
    )

    tree_parser = subparsers.add_parser(
        "tree",
        help="Print the filtered project structure as JSON.",
    )
    _add_verbosity_options(tree_parser, suppress_default=True)
    _add_path_argument(tree_parser)

    summary_parser = subparsers.add_parser(
        "summary",
        help="Show the saved summary for one file.",
    )
    _add_verbosity_options(summary_parser, suppress_default=True)
    summary_parser.add_argument("file", help="File path relative to the project root.")
    summary_parser.add_argument(
        "--root",
        default=".",
        help="Project root the summaries were generated for.",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service.",
    )
    _add_verbosity_options(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint for docweaver commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose), quiet=bool(args.quiet), log_file=args.log_file
    )

    if args.command == "generate":
        return _generate(args)
    if args.command == "tree":
        return _tree(parser, args)
    if args.command == "summary":
        return _summary(parser, args)
    if args.command == "serve":  # pragma: no cover - integration path
        from .service import run_service

        run_service(host=args.host, port=args.port)
        return 0
    parser.exit(1, "Unknown command\n")  # pragma: no cover - argparse enforces choices
    return 1


def _generate(args: argparse.Namespace) -> int:
    orchestrator = Orchestrator()
    save: Optional[bool] = False if args.no_save else None
    outcome = run_interruptible(orchestrator, args.path, save_to_file=save)
    _report(outcome, print_document=bool(args.print_document))
    return EXIT_CODES[outcome.status]


def run_interruptible(
    orchestrator: Orchestrator,
    path: str,
    *,
    save_to_file: Optional[bool] = None,
) -> RunOutcome:
    """Run in a worker thread so Ctrl-C becomes a cancellation request."""
    cancel_event = threading.Event()
    result: dict[str, RunOutcome] = {}
    errors: list[BaseException] = []

    def _worker() -> None:
        try:
            result["outcome"] = orchestrator.run(
                path, cancel_event=cancel_event, save_to_file=save_to_file
            )
        except BaseException as exc:  # re-raised on the calling thread
            errors.append(exc)

    worker = threading.Thread(target=_worker, name="docweaver-run")
    worker.start()
    while worker.is_alive():
        try:
            worker.join(timeout=0.2)
        except KeyboardInterrupt:
            print("Cancelling; waiting for in-flight summaries to finish...", file=sys.stderr)
            cancel_event.set()
    if errors:
        raise errors[0]
    return result["outcome"]


def _report(outcome: RunOutcome, *, print_document: bool) -> None:
    if outcome.status is RunStatus.COMPLETED:
        if print_document and outcome.document:
            print(outcome.document)
        if outcome.output_dir is not None:
            print(f"Documentation saved in {_relativize(outcome.output_dir)}")
        else:
            print(f"Documented {len(outcome.file_summaries)} file(s)")
    elif outcome.status is RunStatus.CANCELLED:
        print("Documentation generation cancelled.", file=sys.stderr)
    elif outcome.status is RunStatus.NO_WORKSPACE:
        print(f"No workspace folder found: {outcome.root}", file=sys.stderr)
    else:
        print(
            f"Error generating documentation: {outcome.error}\n"
            "Run with --verbose for more details.",
            file=sys.stderr,
        )


def _tree(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    try:
        tree = Orchestrator().refresh_tree(args.path)
    except (FileNotFoundError, NotADirectoryError) as exc:
        parser.exit(2, f"{exc}\n")
    except ConfigError as exc:
        parser.exit(1, f"docweaver tree failed: {exc}\n")
    print(json.dumps(tree.to_dict(), indent=2))
    return 0


def _summary(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    root = Path(args.root).expanduser().resolve()
    try:
        config = load_config(root)
    except ConfigError as exc:
        parser.exit(1, f"docweaver summary failed: {exc}\n")
    relative = Path(args.file).as_posix()
    summary = DocumentationWriter(root, config.output).read_summary(relative)
    if summary is None:
        parser.exit(1, f"No documentation available for {relative}\n")
    print(summary)
    return 0


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
