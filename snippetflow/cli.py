"""
snippetflow CLI: command-line interface for snippet analysis.
"""

import argparse
import json
import sys
from pathlib import Path

from loguru import logger

from snippetflow.analysis import CodeAnalyzer, analysis_result_to_dict, load_settings
from snippetflow.classify.profiles import DEFAULT_PROFILE_ID, profile_for_path, supported_profiles
from snippetflow.graph.mermaid import control_flow_graph_to_mermaid


def main(argv: list[str] | None = None) -> int:
    """
    Main CLI entry point.

    Returns:
        Exit code: 0 on success, 1 on errors, 130 on interrupt
    """
    parser = argparse.ArgumentParser(
        description="snippetflow: control-flow graphs and metrics for code snippets"
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    analyze_parser = subparsers.add_parser("analyze", help="Analyze a code snippet")
    analyze_parser.add_argument("path", help="Path to a source file, or - for stdin")
    analyze_parser.add_argument(
        "--language",
        help=(
            f"Language profile ({', '.join(supported_profiles())}); "
            "default: inferred from the file extension"
        ),
    )
    analyze_parser.add_argument(
        "--settings",
        help="Analysis settings YAML file path (default: built-in thresholds)",
    )
    analyze_parser.add_argument(
        "--format",
        choices=("json", "mermaid"),
        default="json",
        help="Output format (default: json)",
    )
    analyze_parser.add_argument(
        "--output",
        help="Output file path (default: print to stdout)",
    )
    analyze_parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug messages to stderr",
    )

    args = parser.parse_args(argv)

    if args.command == "analyze":
        _configure_logging(args.verbose)
        return _run_analyze(args.path, args.language, args.settings, args.format, args.output)
    else:
        parser.print_help()
        return 1


def _configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


def _run_analyze(
    path: str,
    language: str | None,
    settings: str | None,
    output_format: str,
    output: str | None,
) -> int:
    """
    Run the analyze command.

    Args:
        path: Source file path, or "-" to read stdin
        language: Optional profile id; inferred from the extension when None
        settings: Optional settings file path
        output_format: "json" or "mermaid"
        output: Optional output file path (None = stdout)

    Returns:
        Exit code: 0 on success, 1 on errors
    """
    try:
        if path == "-":
            text = sys.stdin.read()
        else:
            path_obj = Path(path)
            if not path_obj.is_file():
                print(f"Error: File does not exist: {path}", file=sys.stderr)
                return 1
            text = path_obj.read_text(encoding="utf-8")

        profile_id = language
        if profile_id is None and path != "-":
            profile_id = profile_for_path(path)
        if profile_id is None:
            profile_id = DEFAULT_PROFILE_ID

        analyzer = CodeAnalyzer(settings=load_settings(settings))
        result = analyzer.analyze(text, profile_id)

        if output_format == "mermaid":
            rendered = control_flow_graph_to_mermaid(result.graph)
        else:
            rendered = json.dumps(analysis_result_to_dict(result), indent=2, sort_keys=True)

        if output:
            Path(output).write_text(rendered, encoding="utf-8")
        else:
            print(rendered)

        return 0

    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
