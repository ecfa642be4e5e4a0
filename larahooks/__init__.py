"""Stack-aware quality hooks for Laravel projects."""

from .classifier import classify, classify_facts
from .dispatch import evaluate, rules_for, test_locations_for
from .models import Finding, ManifestFacts, Severity, SourceFile, StackLabel, TestLocationSet

__all__ = [
    "Finding",
    "ManifestFacts",
    "Severity",
    "SourceFile",
    "StackLabel",
    "TestLocationSet",
    "classify",
    "classify_facts",
    "evaluate",
    "rules_for",
    "test_locations_for",
]

__version__ = "0.1.0"
