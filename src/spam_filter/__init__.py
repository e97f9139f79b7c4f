"""Spam Filter -- presence-only Naive Bayes ham/spam classification."""

__version__ = "0.1.0"

from .classifier import (
    NaiveBayesClassifier,
    classify,
    classify_tokens,
    decide,
    score,
    train,
)
from .errors import DegeneratePriorError, DocumentReadError, SpamFilterError
from .estimator import estimate, reconcile_vocabularies, smoothed_probability
from .evaluation import EvaluationMetrics, compute_metrics
from .models import ClassificationResult, Label, TrainedModel, load_model, save_model
from .sources import (
    DocumentSource,
    InMemoryDocument,
    TextFileDocument,
    TokenSetDocument,
    load_directory,
)
from .tokenizer import Tokenizer
from .vocabulary import count_document_frequencies, merge_counts

__all__ = [
    # Pipeline
    "NaiveBayesClassifier",
    "train",
    "classify",
    "classify_tokens",
    "score",
    "decide",
    # Models
    "Label",
    "TrainedModel",
    "ClassificationResult",
    "save_model",
    "load_model",
    # Documents and tokens
    "DocumentSource",
    "TextFileDocument",
    "InMemoryDocument",
    "TokenSetDocument",
    "load_directory",
    "Tokenizer",
    # Counting and estimation
    "count_document_frequencies",
    "merge_counts",
    "estimate",
    "reconcile_vocabularies",
    "smoothed_probability",
    # Evaluation
    "EvaluationMetrics",
    "compute_metrics",
    # Errors
    "SpamFilterError",
    "DocumentReadError",
    "DegeneratePriorError",
]
