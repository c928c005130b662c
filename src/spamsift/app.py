# =============================================================================
# SpamSift Command-Line Application
# =============================================================================
# Wires the pieces together:
#
#   config -> corpus loader -> train -> { evaluate | serve | classify }
#
# Commands:
#   spamsift evaluate   Train on a shuffled split and report test accuracy
#   spamsift serve      Train on the whole corpus, then serve POST /classify
#   spamsift classify   Train on the whole corpus and classify one message
#
# The model is trained once per process and kept only in memory.
# =============================================================================

import argparse
import logging
import sys
from pathlib import Path

from spamsift import __app_name__, __version__
from spamsift.config import Config, ConfigError, print_paths
from spamsift.core import LabeledExample
from spamsift.corpus import CorpusError, load_corpus, split_dataset
from spamsift.evaluation import classify_samples, evaluate
from spamsift.spam import ModelNotTrainedError, NaiveBayesClassifier

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


# =============================================================================
# Commands
# =============================================================================

def load_training_examples(config: Config) -> list[LabeledExample]:
    """
    Load the configured corpus.

    Raises:
        CorpusError: If no examples could be loaded.
    """
    examples = load_corpus(
        config.corpus.path,
        encoding=config.corpus.encoding,
        errors=config.corpus.encoding_errors,
    )
    if not examples:
        raise CorpusError(
            f"Dataset {config.corpus.path} could not be loaded. "
            "Please check the file path and format."
        )
    return examples


def build_classifier(config: Config) -> NaiveBayesClassifier:
    """Create an untrained classifier with the configured fallback behavior."""
    return NaiveBayesClassifier(
        strict=config.model.strict,
        prefer_observed_class=config.model.prefer_observed_class,
    )


def run_evaluate(config: Config, examples: list[LabeledExample]) -> int:
    """Train on one part of the corpus and measure accuracy on the rest."""
    training, test = split_dataset(
        examples,
        train_fraction=config.evaluation.train_fraction,
        seed=config.evaluation.seed,
    )

    classifier = build_classifier(config)
    model = classifier.train(training)

    print("--- Testing Model ---")
    for message, label in classify_samples(model):
        print(f'Email: "{message}"')
        print(f"Prediction: {label}\n")

    print("--- Evaluation on Test Set ---")
    print(evaluate(model, test).summary())
    return 0


def run_serve(config: Config, examples: list[LabeledExample]) -> int:
    """Train on the whole corpus and serve classification requests."""
    # Imported here so the other commands don't need Flask loaded
    from spamsift.server import serve

    classifier = build_classifier(config)
    classifier.train(examples)
    logger.info("Model training complete")

    serve(classifier.model, host=config.server.host, port=config.server.port)
    return 0


def run_classify(config: Config, examples: list[LabeledExample], text: str) -> int:
    """Train on the whole corpus and print the label for one message."""
    classifier = build_classifier(config)
    classifier.train(examples)
    print(classifier.predict(text))
    return 0


# =============================================================================
# CLI Entry Point
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        prog=__app_name__,
        description="SpamSift: Naive Bayes spam/ham classifier",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--paths",
        action="store_true",
        help="Print configuration paths and exit",
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="Path to config file (default: XDG config location)",
    )

    parser.add_argument(
        "--init-config",
        action="store_true",
        help="Write the effective configuration to the config file and exit",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode (verbose logging)",
    )

    parser.add_argument(
        "--corpus",
        help="Path to the training corpus (overrides config)",
    )

    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    evaluate_parser = commands.add_parser(
        "evaluate", help="Train on a random split and report test accuracy"
    )
    evaluate_parser.add_argument(
        "--train-fraction",
        type=float,
        help="Share of the corpus used for training (default: 0.8)",
    )
    evaluate_parser.add_argument(
        "--seed",
        type=int,
        help="Shuffle seed for a reproducible split",
    )

    serve_parser = commands.add_parser(
        "serve", help="Train on the whole corpus and serve POST /classify"
    )
    serve_parser.add_argument("--host", help="Interface to bind (default: 127.0.0.1)")
    serve_parser.add_argument("--port", type=int, help="Port to listen on (default: 8080)")

    classify_parser = commands.add_parser(
        "classify", help="Train on the whole corpus and classify one message"
    )
    classify_parser.add_argument("text", help="Message text to classify")

    return parser


def apply_overrides(config: Config, args: argparse.Namespace) -> None:
    """
    Copy command-line settings over the loaded configuration.

    Raises:
        ConfigError: If an override is out of range.
    """
    if args.corpus:
        config.corpus.path = args.corpus
    if getattr(args, "train_fraction", None) is not None:
        config.evaluation.train_fraction = args.train_fraction
    if getattr(args, "seed", None) is not None:
        config.evaluation.seed = args.seed
    if getattr(args, "host", None):
        config.server.host = args.host
    if getattr(args, "port", None) is not None:
        config.server.port = args.port
    config.validate()


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for SpamSift.

    This function:
        1. Parses command-line arguments
        2. Handles special flags (--paths, --version, --init-config)
        3. Loads configuration and the training corpus
        4. Runs the selected command

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(format=LOG_FORMAT, level=logging.DEBUG if args.debug else logging.INFO)

    # Handle --paths flag
    if args.paths:
        print_paths()
        return 0

    try:
        config = Config.load(args.config)
        apply_overrides(config, args)
    except ConfigError as e:
        logger.error(f"Config error: {e}")
        return 1

    if args.init_config:
        path = config.save(args.config)
        print(f"Wrote configuration to {path}")
        return 0

    if args.command is None:
        parser.print_help()
        return 1

    try:
        examples = load_training_examples(config)
        logger.info(f"Successfully loaded {len(examples)} emails")

        if args.command == "evaluate":
            return run_evaluate(config, examples)
        if args.command == "serve":
            return run_serve(config, examples)
        return run_classify(config, examples, args.text)
    except CorpusError as e:
        logger.error(str(e))
        return 1
    except ModelNotTrainedError as e:
        logger.error(f"Cannot classify: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
