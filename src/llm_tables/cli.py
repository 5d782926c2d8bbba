"""Command-line entry point.

Usage:
    llm-tables clean response.txt --format csv       # recover a table from a saved response
    cat response.txt | llm-tables clean              # ... or from stdin
    llm-tables ask "List US states by population as a | table" --table
    llm-tables ask "What does this image show?" --image chart.png
    llm-tables tokens "How many tokens is this?"
"""

import argparse
import logging
import sys

from llm_tables.llm.client import count_tokens, send_prompt
from llm_tables.llm.config import DEFAULT_PROVIDER, DEFAULT_SAFETY, PROVIDERS, SAFETY_THRESHOLDS
from llm_tables.tables.formatting import render_markdown, to_csv, to_json
from llm_tables.tables.patterns import DEFAULT_NEWLINE_MARKER, DEFAULT_ROW_SPLIT
from llm_tables.tables.pipeline import recover_table
from llm_tables.tables.schema import RecoveredTable, StructuralMismatchError

logger = logging.getLogger(__name__)

RENDERERS = {
    "markdown": render_markdown,
    "csv": to_csv,
    "json": to_json,
}


def _add_table_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--row-split", default=DEFAULT_ROW_SPLIT, help="Field separator between cells (default: '|')")
    parser.add_argument("--newline", default=DEFAULT_NEWLINE_MARKER, help="Row separator marker (default: the escaped text '\\n')")
    parser.add_argument("--format", choices=list(RENDERERS), default="markdown", help="Output format for the table (default: markdown)")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with clean / ask / tokens subcommands."""
    parser = argparse.ArgumentParser(prog="llm-tables", description="Send prompts to LLM APIs and recover tables from their responses")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    clean = sub.add_parser("clean", help="Recover a table from a saved response")
    clean.add_argument("file", nargs="?", help="Response file (default: read stdin)")
    _add_table_args(clean)

    ask = sub.add_parser("ask", help="Send a prompt and print the response")
    ask.add_argument("prompt", help="Text prompt")
    ask.add_argument("--image", help="Image file path or URL to send with the prompt")
    ask.add_argument("--document", help="Document file path to send with the prompt")
    ask.add_argument("--provider", choices=list(PROVIDERS), default=DEFAULT_PROVIDER, help=f"API provider (default: {DEFAULT_PROVIDER})")
    ask.add_argument("--model", help="Model name (default: the provider's default model)")
    ask.add_argument("--temperature", type=float, default=0.0, help="Sampling temperature (default: 0)")
    ask.add_argument("--safety", choices=SAFETY_THRESHOLDS, default=DEFAULT_SAFETY, help="Gemini safety threshold")
    ask.add_argument("--table", action="store_true", help="Recover a table from the response instead of printing it raw")
    _add_table_args(ask)

    tokens = sub.add_parser(
        "tokens",
        help="Estimate the tokens in a text prompt",
        description="Count prompt tokens locally with tiktoken. Counts for models tiktoken does not know (e.g. Gemini) are estimates.",
    )
    tokens.add_argument("prompt", help="Text prompt")
    tokens.add_argument("--model", help="Model name used to pick the tokenizer")

    return parser


def _print_table(text: str, args: argparse.Namespace) -> int:
    """Recover and print a table; return the process exit code."""
    try:
        table: RecoveredTable = recover_table(text, row_split=args.row_split, newline_marker=args.newline)
    except StructuralMismatchError as exc:
        logger.error("%s", exc)
        return 2

    if table.is_empty:
        logger.warning("No data rows survived cleaning; printing header only")
    print(RENDERERS[args.format](table))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Parse arguments and run the chosen subcommand."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(asctime)s %(levelname)s %(message)s")

    if args.command == "clean":
        if args.file:
            with open(args.file, "r", encoding="utf-8") as fopen:
                text = fopen.read()
        else:
            text = sys.stdin.read()
        return _print_table(text, args)

    if args.command == "ask":
        response = send_prompt(
            args.prompt,
            image=args.image,
            document=args.document,
            provider=args.provider,
            model=args.model,
            temperature=args.temperature,
            safety=args.safety,
        )
        if response is None:
            return 1
        if args.table:
            return _print_table(response, args)
        print(response)
        return 0

    print(count_tokens(args.prompt, model=args.model))
    return 0


if __name__ == "__main__":
    sys.exit(main())
