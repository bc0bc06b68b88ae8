"""CLI entrypoint for the checksum-hint crossword generator."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Dict, List

from codeduku.core.constants import DEFAULT_DIFFICULTY_WEIGHTS
from codeduku.core.exceptions import ConfigurationError, DictionaryLoadError
from codeduku.data.dictionary import DictionaryConfig, WordDictionary
from codeduku.engine.generator import GeneratorConfig, PuzzleGenerator, PuzzleResult
from codeduku.utils.logger import configure_logging
from codeduku.utils.pretty import print_puzzle_stats


def parse_weights(text: str) -> Dict[str, float]:
    """Parse ``label=weight,label=weight`` into a weight table."""
    weights: Dict[str, float] = {}
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        label, sep, value = part.partition("=")
        if not sep:
            raise argparse.ArgumentTypeError(f"Expected label=weight, got '{part}'")
        try:
            weights[label.strip().lower()] = float(value)
        except ValueError:
            raise argparse.ArgumentTypeError(f"Invalid weight for '{label}': {value}") from None
    return weights


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate uniquely solvable checksum-hint crosswords",
    )
    parser.add_argument("--rows", type=int, default=20, help="Grid height in cells")
    parser.add_argument("--cols", type=int, default=20, help="Grid width in cells")
    parser.add_argument(
        "--words-file",
        type=Path,
        required=True,
        metavar="FILE",
        help="Word list, one entry per line (# comments and blank lines ignored)",
    )
    parser.add_argument("--num-words", type=int, default=22, help="Number of words to place")
    parser.add_argument("--num-hints", type=int, default=10, help="Number of initial hints")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument(
        "--weights",
        type=parse_weights,
        default=None,
        help="Difficulty weights, e.g. beginner=0.1,novice=0.3,... (must sum to 1.0)",
    )
    parser.add_argument(
        "--max-rounds",
        type=int,
        default=50,
        help="Maximum hints the solver may add while repairing uniqueness",
    )
    parser.add_argument(
        "--cross-check",
        action="store_true",
        help="Confirm a unique verdict with the CP-SAT model",
    )
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument(
        "--blank-output",
        type=Path,
        help="Optional path for the blank puzzle (hints only) as JSON",
    )
    parser.add_argument(
        "--print",
        dest="print_grid",
        action="store_true",
        help="Print the solution, blank puzzle and stats to stdout",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def build_payload(result: PuzzleResult) -> Dict[str, Any]:
    return {
        "unique": result.unique,
        "state": result.state.value,
        "seed": result.seed,
        "rounds": result.rounds,
        "warnings": result.warnings,
        "validation": result.validation_messages,
        "grid": result.grid.to_jsonable(),
        "blank_grid": result.blank_grid().to_jsonable(),
        "words": [
            {
                "word": placed.word,
                "start": [placed.row, placed.col],
                "orientation": placed.orientation.value,
                "phrase_index": placed.phrase_index,
            }
            for placed in result.words
        ],
        "hints": [
            {
                "position": [hint.row, hint.col],
                "class": hint.adjacency.value,
                "token": hint.token,
                "difficulty": hint.difficulty.value,
                "neighbors": [list(pos) for pos in hint.neighbors],
            }
            for hint in result.hints
        ],
    }


def main(argv: List[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        dictionary = WordDictionary.load(DictionaryConfig(path=args.words_file))
        config = GeneratorConfig(
            rows=args.rows,
            cols=args.cols,
            num_words=args.num_words,
            num_hints=args.num_hints,
            difficulty_weights=args.weights or dict(DEFAULT_DIFFICULTY_WEIGHTS),
            seed=args.seed,
            max_disambiguation_rounds=args.max_rounds,
            cross_check=args.cross_check,
        )
        generator = PuzzleGenerator(config, dictionary)
    except (ConfigurationError, DictionaryLoadError) as exc:
        parser.error(str(exc))

    result = generator.generate()

    if args.print_grid:
        print_puzzle_stats(result)

    output_text = json.dumps(build_payload(result), ensure_ascii=False, indent=2)
    if args.output:
        args.output.write_text(output_text, encoding="utf-8")
    elif not args.print_grid:
        print(output_text)

    if args.blank_output:
        blank = json.dumps(result.blank_grid().to_jsonable(), ensure_ascii=False, indent=2)
        args.blank_output.write_text(blank, encoding="utf-8")


if __name__ == "__main__":  # pragma: no cover
    main()
