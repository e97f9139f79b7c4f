"""Command-line interface for the spam filter.

Provides ``train``, ``classify`` and ``evaluate`` commands built on ``click``,
with ``rich`` output for tables, panels and log messages.

Usage::

    spam-filter classify data/ham data/spam data/test
    spam-filter train data/ham data/spam --model model.json
    spam-filter classify --model model.json data/test
    spam-filter evaluate data/ham data/spam data/test-ham data/test-spam
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import NoReturn, Optional

import click
from click.core import ParameterSource
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .classifier import NaiveBayesClassifier
from .errors import SpamFilterError
from .evaluation import EvaluationMetrics
from .models import ClassificationResult, Label, TrainedModel
from .sources import load_directory
from .tokenizer import Tokenizer

logger = logging.getLogger(__name__)

console = Console()

_DIR = click.Path(exists=True, file_okay=False, path_type=Path)

_LOG_LEVELS = {0: logging.WARNING, 1: logging.INFO}

# Failures reported as a one-line error instead of a traceback
_COMMAND_ERRORS = (SpamFilterError, OSError, ValueError)


def _configure_logging(verbosity: int) -> None:
    """Route library log records through rich on stderr."""
    level = _LOG_LEVELS.get(verbosity, logging.DEBUG)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _get_label_style(label: Label) -> str:
    return "bold red" if label is Label.SPAM else "green"


def _fail(exc: Exception) -> NoReturn:
    console.print(f"[bold red]Error:[/] {escape(str(exc))}", soft_wrap=True)
    sys.exit(1)


def _header_option(func):
    return click.option(
        "--skip-header/--no-skip-header", default=True, show_default=True,
        help="Discard the first token of every document (the 'Subject:' marker).",
    )(func)


def _source_options(func):
    func = click.option("--encoding", default="utf-8", show_default=True,
                        help="Text encoding of the document files.")(func)
    func = click.option("--pattern", default="*", show_default=True,
                        help="Glob selecting files inside each directory.")(func)
    return _header_option(func)


@click.group()
@click.version_option(package_name="spam-filter")
@click.option("--verbose", "-v", count=True, help="Increase log verbosity (-v, -vv).")
def main(verbose: int) -> None:
    """Naive Bayes ham/spam classifier.

    Learns which words show up in spam and ham emails and labels new
    emails accordingly.
    """
    _configure_logging(verbose)


@main.command()
@click.argument("ham_dir", type=_DIR)
@click.argument("spam_dir", type=_DIR)
@click.option("--model", "-m", "model_path", type=click.Path(dir_okay=False, path_type=Path),
              required=True, help="Where to write the trained model (JSON).")
@_source_options
def train(
    ham_dir: Path,
    spam_dir: Path,
    model_path: Path,
    pattern: str,
    encoding: str,
    skip_header: bool,
) -> None:
    """Train a model from directories of ham and spam emails.

    Example: spam-filter train data/ham data/spam --model model.json
    """
    classifier = NaiveBayesClassifier(tokenizer=Tokenizer(skip_header=skip_header))

    with console.status("[bold blue]Training...", spinner="dots"):
        try:
            model = classifier.train(
                load_directory(ham_dir, pattern, encoding),
                load_directory(spam_dir, pattern, encoding),
            )
            classifier.save(model_path)
        except _COMMAND_ERRORS as e:
            _fail(e)

    _render_model_summary(model)
    console.print(f"[dim]Model saved to {model_path}[/]")


@main.command()
@click.argument("dirs", nargs=-1, required=True, type=_DIR)
@click.option("--model", "-m", "model_path", envvar="SPAM_FILTER_MODEL",
              type=click.Path(exists=True, dir_okay=False, path_type=Path), default=None,
              help="Use a saved model instead of training (env: SPAM_FILTER_MODEL).")
@click.option("--output", "-o", type=click.Choice(["plain", "rich", "json"]), default="plain",
              help="Output format.")
@_source_options
def classify(
    dirs: tuple[Path, ...],
    model_path: Optional[Path],
    output: str,
    pattern: str,
    encoding: str,
    skip_header: bool,
) -> None:
    """Label every email in TEST_DIR as ham or spam.

    Pass HAM_DIR SPAM_DIR TEST_DIR to train first, or --model MODEL TEST_DIR
    to reuse a saved model.

    Example: spam-filter classify data/ham data/spam data/test
    """
    tokenizer = Tokenizer(skip_header=skip_header)

    # An explicit training corpus wins over a model named only in the environment
    source = click.get_current_context().get_parameter_source("model_path")
    if source is ParameterSource.ENVIRONMENT and len(dirs) == 3:
        logger.info("Ignoring SPAM_FILTER_MODEL; training from HAM_DIR and SPAM_DIR")
        model_path = None

    if model_path is not None:
        if len(dirs) != 1:
            raise click.UsageError("With --model, pass exactly one TEST_DIR.")
        test_dir = dirs[0]
    elif len(dirs) != 3:
        raise click.UsageError("Pass HAM_DIR SPAM_DIR TEST_DIR, or --model MODEL TEST_DIR.")
    else:
        test_dir = dirs[2]

    try:
        if model_path is not None:
            classifier = NaiveBayesClassifier.load(model_path, tokenizer=tokenizer)
        else:
            classifier = NaiveBayesClassifier(tokenizer=tokenizer)
            classifier.train(
                load_directory(dirs[0], pattern, encoding),
                load_directory(dirs[1], pattern, encoding),
            )
        results = classifier.classify(load_directory(test_dir, pattern, encoding))
    except _COMMAND_ERRORS as e:
        _fail(e)

    if output == "json":
        click.echo(json.dumps([r.to_dict() for r in results], indent=2))
    elif output == "rich":
        _render_results(results, test_dir.name)
    else:
        for name, label in results:
            click.echo(f"{name} {label}")


@main.command()
@click.argument("ham_dir", type=_DIR)
@click.argument("spam_dir", type=_DIR)
@click.argument("test_ham_dir", type=_DIR)
@click.argument("test_spam_dir", type=_DIR)
@click.option("--output", "-o", type=click.Choice(["rich", "json"]), default="rich",
              help="Output format.")
@_source_options
def evaluate(
    ham_dir: Path,
    spam_dir: Path,
    test_ham_dir: Path,
    test_spam_dir: Path,
    output: str,
    pattern: str,
    encoding: str,
    skip_header: bool,
) -> None:
    """Train, then measure accuracy on labeled held-out emails.

    Example: spam-filter evaluate data/ham data/spam data/test-ham data/test-spam
    """
    classifier = NaiveBayesClassifier(tokenizer=Tokenizer(skip_header=skip_header))

    try:
        classifier.train(
            load_directory(ham_dir, pattern, encoding),
            load_directory(spam_dir, pattern, encoding),
        )
        metrics = classifier.evaluate(
            load_directory(test_ham_dir, pattern, encoding),
            load_directory(test_spam_dir, pattern, encoding),
        )
    except _COMMAND_ERRORS as e:
        _fail(e)

    if output == "json":
        click.echo(json.dumps(metrics.to_dict(), indent=2))
    else:
        _render_metrics(metrics)


# ------------------------------------------------------------------
# Rich rendering helpers
# ------------------------------------------------------------------

def _render_model_summary(model: TrainedModel) -> None:
    console.print(Panel(
        f"Ham documents: {model.num_ham_docs}\n"
        f"Spam documents: {model.num_spam_docs}\n"
        f"Vocabulary: {model.vocabulary_size} tokens\n"
        f"P(ham) = {model.prior_ham:.3f} | P(spam) = {model.prior_spam:.3f}",
        title="Trained model",
        border_style="blue",
    ))


def _render_results(results: list[ClassificationResult], title: str) -> None:
    table = Table(title=f"Classification: {title}")
    table.add_column("#", justify="right", width=4)
    table.add_column("Document", style="cyan")
    table.add_column("Label", justify="center", width=6)
    table.add_column("log P(ham)", justify="right")
    table.add_column("log P(spam)", justify="right")

    for i, result in enumerate(results, 1):
        table.add_row(
            str(i),
            escape(result.name),
            f"[{_get_label_style(result.label)}]{result.label}[/]",
            f"{result.log_ham:.3f}",
            f"{result.log_spam:.3f}",
        )

    console.print(table)
    spam_count = sum(1 for r in results if r.is_spam)
    console.print(f"{spam_count} of {len(results)} documents labeled spam")


def _render_metrics(metrics: EvaluationMetrics) -> None:
    table = Table(title=f"Evaluation ({metrics.total} documents)")
    table.add_column("Class", style="cyan")
    table.add_column("Precision", justify="right")
    table.add_column("Recall", justify="right")
    table.add_column("F1", justify="right")
    table.add_column("Support", justify="right")

    for cls in sorted(metrics.per_class):
        m = metrics.per_class[cls]
        table.add_row(
            cls,
            f"{m['precision']:.4f}",
            f"{m['recall']:.4f}",
            f"{m['f1']:.4f}",
            str(metrics.support.get(cls, 0)),
        )

    console.print(table)
    console.print(
        f"Accuracy: [bold]{metrics.accuracy:.2%}[/] "
        f"(false positives: {metrics.false_positives}, "
        f"false negatives: {metrics.false_negatives})"
    )


if __name__ == "__main__":
    main()
