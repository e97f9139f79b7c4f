"""Shared test fixtures for spam-filter tests."""

from __future__ import annotations

from pathlib import Path

import pytest

HAM_EMAILS = {
    "ham1.txt": "Subject: lunch meeting\nHi there , are we still on for lunch tomorrow ?\n",
    "ham2.txt": "Subject: project update\nThe report is attached . See you at the meeting .\n",
    "ham3.txt": "Subject: weekend plans\nHi , the hiking trip is still on for Saturday .\n",
}

SPAM_EMAILS = {
    "spam1.txt": "Subject: free money\nClaim your free money now ! Click here now !\n",
    "spam2.txt": "Subject: winner\nYou are a winner ! Free prize , act now !\n",
    "spam3.txt": "Subject: cheap loans\nCheap loans , free money , no credit check !\n",
}

TEST_EMAILS = {
    "a.txt": "Subject: hello\nfree money now !\n",
    "b.txt": "Subject: re: lunch\nsee you at the meeting for lunch\n",
}


def _write_dir(root: Path, name: str, files: dict[str, str]) -> Path:
    directory = root / name
    directory.mkdir()
    for filename, text in files.items():
        (directory / filename).write_text(text, encoding="utf-8")
    return directory


@pytest.fixture
def ham_dir(tmp_path: Path) -> Path:
    """Directory of ham training emails."""
    return _write_dir(tmp_path, "ham", HAM_EMAILS)


@pytest.fixture
def spam_dir(tmp_path: Path) -> Path:
    """Directory of spam training emails."""
    return _write_dir(tmp_path, "spam", SPAM_EMAILS)


@pytest.fixture
def test_dir(tmp_path: Path) -> Path:
    """Directory of unlabeled emails to classify."""
    return _write_dir(tmp_path, "test", TEST_EMAILS)


@pytest.fixture
def scenario_corpus() -> tuple[list[set[str]], list[set[str]]]:
    """One ham and one spam document given directly as token sets."""
    hams = [{"hi", "there", "free"}]
    spams = [{"free", "money", "now"}]
    return hams, spams
