"""Command-line interface for Blathr."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

from rich.console import Console
from rich.table import Table

from blathr.core.config.loader import configure_logging_from, load_app_config, load_config
from blathr.core.config.models import AppConfig
from blathr.core.enums import SentenceType
from blathr.core.errors import BlathrError
from blathr.core.generator import GeneratedText, TextGenerator
from blathr.core.lexicon import IssueSeverity, load_lexicon, validate_lexicon
from blathr.core.utils.json import write_json
from blathr.core.utils.logging import configure_logging, get_logger

console = Console()
logger = logging.getLogger(__name__)


def _split_hints(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [hint.strip() for hint in raw.split(",") if hint.strip()]


def _load_settings(args: argparse.Namespace) -> AppConfig:
    """Load app config and set up logging; --log-level wins over the file."""
    app_config = load_app_config(Path(args.config) if args.config else None)
    configure_logging_from(app_config)
    if args.log_level:
        configure_logging(
            level=args.log_level,
            format_string=app_config.logging.format,
            filename=app_config.logging.filename,
            structured=app_config.logging.structured,
        )
    return app_config


def build_generator(args: argparse.Namespace) -> TextGenerator:
    """Create a TextGenerator from CLI arguments and the app config."""
    app_config = _load_settings(args)

    overrides = {}
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.trace:
        overrides["enable_trace"] = True
    config = app_config.generator.model_copy(update=overrides) if overrides else app_config.generator

    lexicon_path = args.lexicon or app_config.lexicon_path
    lexicon = load_lexicon(lexicon_path) if lexicon_path else None

    generator = TextGenerator(config=config, lexicon=lexicon)
    archetype = args.archetype or app_config.archetype
    if archetype:
        generator.set_archetype(archetype)

    get_logger(__name__, seed=generator.seed, archetype=generator.archetype).debug("Generator ready")
    return generator


def _emit(results: list[GeneratedText], args: argparse.Namespace) -> None:
    if args.out:
        write_json(args.out, [r.model_dump(mode="json") for r in results])
        console.print(f"[green]Wrote {len(results)} result(s) to {args.out}[/green]")
        return

    if args.json:
        payload = [r.model_dump(mode="json") for r in results]
        console.print_json(data=payload[0] if len(payload) == 1 else payload)
        return

    for result in results:
        console.print(result.text, markup=False, highlight=False, soft_wrap=True)
        if result.trace is not None:
            _print_trace(result)


def _print_trace(result: GeneratedText) -> None:
    table = Table(title=f"seed {result.meta.seed} / archetype {result.meta.archetype}")
    table.add_column("#", justify="right")
    table.add_column("Template")
    table.add_column("Retries", justify="right")
    table.add_column("Failed constraints")
    table.add_column("Lexicon tokens")

    index = 0
    for paragraph in result.trace.paragraphs:
        for sentence in paragraph.sentences:
            index += 1
            failed = [c.id for c in sentence.constraints_evaluated if not c.passed]
            lexicon_tokens = [f"{t.value} ({t.source})" for t in sentence.tokens if t.source != "default"]
            table.add_row(
                str(index),
                sentence.template.value,
                str(sentence.retry_count),
                ", ".join(failed) or "-",
                ", ".join(lexicon_tokens) or "-",
            )
    console.print(table)

    if result.trace.correlations_applied:
        console.print(f"Correlations: {', '.join(result.trace.correlations_applied)}", markup=False)
    failed_invariants = [i.id for i in result.trace.invariants_checked if not i.passed]
    if failed_invariants:
        console.print(f"[red]Invariants failed: {', '.join(failed_invariants)}[/red]")


# Commands


def cmd_sentence(args: argparse.Namespace) -> int:
    generator = build_generator(args)
    sentence_type = SentenceType(args.type) if args.type else None
    results = [
        generator.generate_sentence(
            type=sentence_type,
            hints=_split_hints(args.hints),
            min_words=args.min_words,
            max_words=args.max_words,
        )
        for _ in range(args.count)
    ]
    _emit(results, args)
    return 0


def cmd_paragraph(args: argparse.Namespace) -> int:
    generator = build_generator(args)
    results = [
        generator.generate_paragraph(sentences=args.sentences, hints=_split_hints(args.hints))
        for _ in range(args.count)
    ]
    _emit(results, args)
    return 0


def cmd_text(args: argparse.Namespace) -> int:
    generator = build_generator(args)
    results = [
        generator.generate_text_block(paragraphs=args.paragraphs, hints=_split_hints(args.hints))
        for _ in range(args.count)
    ]
    _emit(results, args)
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Validate a lexicon file and report errors and warnings."""
    if args.log_level:
        configure_logging(level=args.log_level)
    result = validate_lexicon(load_config(args.lexicon_file))

    if result.errors or result.warnings:
        table = Table(title=str(args.lexicon_file))
        table.add_column("Severity")
        table.add_column("Path")
        table.add_column("Message")
        for issue in [*result.errors, *result.warnings]:
            style = "red" if issue.severity == IssueSeverity.ERROR else "yellow"
            table.add_row(f"[{style}]{issue.severity.value}[/{style}]", issue.path or "<root>", issue.message)
        console.print(table)

    if not result.valid:
        console.print(f"[red]Invalid lexicon: {len(result.errors)} error(s)[/red]")
        return 1

    lexicon = result.lexicon
    console.print(
        f"[green]Valid lexicon[/green] {lexicon.id} "
        f"({len(lexicon.term_sets)} term sets, {len(lexicon.archetypes)} archetypes, "
        f"{len(result.warnings)} warning(s))"
    )
    return 0


def cmd_types(args: argparse.Namespace) -> int:
    """List sentence types with their effective weights."""
    generator = build_generator(args)
    weights = generator.config.sentence_type_weights
    total = weights.total

    table = Table(title=f"Sentence types (archetype {generator.archetype})")
    table.add_column("Type")
    table.add_column("Weight", justify="right")
    table.add_column("Share", justify="right")
    for sentence_type, weight in weights.as_pairs():
        share = f"{weight / total:.0%}" if total > 0 else "-"
        table.add_row(sentence_type.value, f"{weight:g}", share)
    console.print(table)
    return 0


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for CLI."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--seed", type=int, help="RNG seed (default: wall clock)")
    common.add_argument("--lexicon", help="Lexicon file (.json/.yaml)")
    common.add_argument("--archetype", help="Archetype defined by the lexicon")
    common.add_argument("--config", help="App config file (default: blathr.yaml if present)")
    common.add_argument("--trace", action="store_true", help="Include generation traces")
    common.add_argument("--json", action="store_true", help="Print results as JSON")
    common.add_argument("--out", help="Write results as JSON to this file")
    common.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override the configured log level",
    )

    p = argparse.ArgumentParser(
        prog="blathr",
        description="Blathr - seeded generator of grammatical nonsense",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    sentence = sub.add_parser("sentence", parents=[common], help="Generate sentences")
    sentence.add_argument("--count", type=int, default=1, help="Number of sentences (default: 1)")
    sentence.add_argument("--type", choices=[t.value for t in SentenceType], help="Sentence type")
    sentence.add_argument("--hints", help="Comma-separated tags to activate")
    sentence.add_argument("--min-words", type=int, help="Hard minimum word count")
    sentence.add_argument("--max-words", type=int, help="Hard maximum word count")
    sentence.set_defaults(func=cmd_sentence)

    paragraph = sub.add_parser("paragraph", parents=[common], help="Generate paragraphs")
    paragraph.add_argument("--count", type=int, default=1, help="Number of paragraphs (default: 1)")
    paragraph.add_argument("--sentences", type=int, help="Sentences per paragraph")
    paragraph.add_argument("--hints", help="Comma-separated tags to activate")
    paragraph.set_defaults(func=cmd_paragraph)

    text = sub.add_parser("text", parents=[common], help="Generate text blocks")
    text.add_argument("--count", type=int, default=1, help="Number of text blocks (default: 1)")
    text.add_argument("--paragraphs", type=int, help="Paragraphs per block")
    text.add_argument("--hints", help="Comma-separated tags to activate")
    text.set_defaults(func=cmd_text)

    validate = sub.add_parser("validate", help="Validate a lexicon file")
    validate.add_argument("lexicon_file", help="Lexicon file (.json/.yaml)")
    validate.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level",
    )
    validate.set_defaults(func=cmd_validate)

    types = sub.add_parser("types", parents=[common], help="List sentence types and weights")
    types.set_defaults(func=cmd_types)

    return p


def run(argv: list[str] | None = None) -> int:
    """Parse arguments and run a command, returning its exit code."""
    args = build_arg_parser().parse_args(argv)
    try:
        return args.func(args)
    except (BlathrError, FileNotFoundError, ValueError) as e:
        console.print(f"ERROR: {e}", style="red", markup=False, highlight=False)
        return 1


def main() -> None:
    """Main entry point for CLI."""
    sys.exit(run())
