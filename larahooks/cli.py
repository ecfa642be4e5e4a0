"""CLI entrypoints for larahooks commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Optional, TextIO

from .config import ConfigError
from .hook_input import HookInputError, parse_hook_payload
from .logging import configure_logging, get_logger
from .models import StackLabel
from .orchestrator import Orchestrator, find_project_root
from .report import EXIT_OK, CheckReport, render_text

EXIT_USAGE = 1
HOOK_ACTIONS = ("lint", "test", "check")


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_root_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--root",
        default=None,
        help="Project root (defaults to the nearest directory with artisan, composer.json or package.json).",
    )


def _add_json_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print machine-readable JSON instead of text.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="larahooks",
        description="Stack-aware quality hooks for Laravel projects.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    detect_parser = subparsers.add_parser(
        "detect",
        help="Print the detected Laravel frontend stack.",
    )
    _add_verbose_option(detect_parser, suppress_default=True)
    _add_json_option(detect_parser)
    detect_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project root (defaults to current directory).",
    )
    detect_parser.add_argument(
        "--stack",
        default=None,
        help="Force a stack label instead of detecting it.",
    )

    check_parser = subparsers.add_parser(
        "check",
        help="Evaluate stack rules and test requirements for an edited file.",
    )
    _add_verbose_option(check_parser, suppress_default=True)
    _add_root_option(check_parser)
    _add_json_option(check_parser)
    check_parser.add_argument("file", help="Edited file to check.")

    lint_parser = subparsers.add_parser(
        "lint",
        help="Run the project's lint and format tools.",
    )
    _add_verbose_option(lint_parser, suppress_default=True)
    _add_root_option(lint_parser)
    lint_parser.add_argument(
        "--fast",
        action="store_true",
        help="Skip non-blocking steps.",
    )

    test_parser = subparsers.add_parser(
        "test",
        help="Run the tests triggered by an edited file.",
    )
    _add_verbose_option(test_parser, suppress_default=True)
    _add_root_option(test_parser)
    test_parser.add_argument("file", help="Edited file.")

    hook_parser = subparsers.add_parser(
        "hook",
        help="Handle an editor hook payload read from stdin.",
    )
    _add_verbose_option(hook_parser, suppress_default=True)
    hook_parser.add_argument("action", choices=HOOK_ACTIONS)

    return parser


def main(
    argv: list[str] | None = None,
    *,
    orchestrator: Orchestrator | None = None,
    stdin: TextIO | None = None,
) -> None:
    """CLI entrypoint for larahooks commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))
    logger = get_logger("cli")

    orchestrator = orchestrator or Orchestrator()

    try:
        if args.command == "detect":
            if args.stack and StackLabel.parse(args.stack) is None:
                parser.exit(EXIT_USAGE, f"Unknown stack label: {args.stack}\n")
            detection = orchestrator.detect(args.path, args.stack)
            if args.json:
                print(json.dumps(detection.to_dict(), indent=2))
            else:
                print(detection.label.value)
            return
        if args.command == "check":
            root = _resolve_root(args.root, args.file)
            report = orchestrator.run_check(root, _absolute(args.file))
            _finish(parser, report, as_json=bool(args.json))
        elif args.command == "lint":
            root = Path(args.root).expanduser().resolve() if args.root else find_project_root(Path.cwd())
            report = orchestrator.run_lint(root, fast=bool(args.fast))
            _finish(parser, report)
        elif args.command == "test":
            root = _resolve_root(args.root, args.file)
            report = orchestrator.run_tests(root, _absolute(args.file))
            _finish(parser, report)
        elif args.command == "hook":
            _run_hook(parser, orchestrator, args.action, stdin or sys.stdin)
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(EXIT_USAGE, "Unknown command\n")
    except ConfigError as exc:
        parser.exit(EXIT_USAGE, f"larahooks: {exc}\n")
    except (OSError, RuntimeError) as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        parser.exit(
            EXIT_USAGE,
            f"larahooks {args.command} failed: {exc}\nRun with --verbose for more details.\n",
        )


def _run_hook(
    parser: argparse.ArgumentParser,
    orchestrator: Orchestrator,
    action: str,
    stream: TextIO,
) -> None:
    logger = get_logger("cli")
    try:
        event = parse_hook_payload(stream.read())
    except HookInputError as exc:
        logger.debug("Ignoring hook payload: %s", exc)
        return
    if event is None:
        return

    file_path = _absolute(event.file_path)
    root = find_project_root(file_path)
    if action == "lint":
        report = orchestrator.run_lint(root, fast=True)
    elif action == "test":
        report = orchestrator.run_tests(root, file_path)
    else:
        report = orchestrator.run_check(root, file_path)
    # Hook output goes to stderr so the editor surfaces it to the agent.
    _finish(parser, report, stream=sys.stderr)


def _finish(
    parser: argparse.ArgumentParser,
    report: CheckReport,
    *,
    as_json: bool = False,
    stream: TextIO | None = None,
) -> None:
    out = stream or sys.stdout
    if as_json:
        out.write(json.dumps(report.to_dict(), indent=2) + "\n")
    else:
        out.write(render_text(report))
    if report.exit_code != EXIT_OK:
        parser.exit(report.exit_code)


def _absolute(path: str) -> Path:
    return Path(path).expanduser().resolve()


def _resolve_root(root: Optional[str], file_path: str) -> Path:
    if root:
        return Path(root).expanduser().resolve()
    return find_project_root(_absolute(file_path))


if __name__ == "__main__":
    main(sys.argv[1:])
