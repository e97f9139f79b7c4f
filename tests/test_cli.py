"""Tests for the click command-line interface."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from spam_filter.cli import main
from spam_filter.models import load_model


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def _dirs(*paths: Path) -> list[str]:
    return [str(p) for p in paths]


class TestClassifyCommand:
    def test_plain_output(self, runner, ham_dir, spam_dir, test_dir):
        result = runner.invoke(main, ["classify", *_dirs(ham_dir, spam_dir, test_dir)])
        assert result.exit_code == 0, result.output
        assert result.output.splitlines() == ["a.txt spam", "b.txt ham"]

    def test_json_output(self, runner, ham_dir, spam_dir, test_dir):
        result = runner.invoke(
            main, ["classify", "--output", "json", *_dirs(ham_dir, spam_dir, test_dir)]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert [(d["name"], d["label"]) for d in data] == [("a.txt", "spam"), ("b.txt", "ham")]
        assert data[0]["log_spam"] > data[0]["log_ham"]

    def test_rich_output(self, runner, ham_dir, spam_dir, test_dir):
        result = runner.invoke(
            main, ["classify", "-o", "rich", *_dirs(ham_dir, spam_dir, test_dir)]
        )
        assert result.exit_code == 0, result.output
        assert "a.txt" in result.output
        assert "1 of 2 documents labeled spam" in result.output

    def test_with_saved_model(self, runner, ham_dir, spam_dir, test_dir, tmp_path):
        model_path = tmp_path / "model.json"
        trained = runner.invoke(main, ["train", *_dirs(ham_dir, spam_dir), "--model", str(model_path)])
        assert trained.exit_code == 0, trained.output

        result = runner.invoke(main, ["classify", "--model", str(model_path), str(test_dir)])
        assert result.exit_code == 0, result.output
        assert result.output.splitlines() == ["a.txt spam", "b.txt ham"]

    def test_model_from_environment(self, runner, ham_dir, spam_dir, test_dir, tmp_path):
        model_path = tmp_path / "model.json"
        runner.invoke(main, ["train", *_dirs(ham_dir, spam_dir), "-m", str(model_path)])

        result = runner.invoke(
            main, ["classify", str(test_dir)], env={"SPAM_FILTER_MODEL": str(model_path)}
        )
        assert result.exit_code == 0, result.output
        assert "a.txt spam" in result.output

    def test_environment_model_ignored_with_training_dirs(
        self, runner, ham_dir, spam_dir, test_dir, tmp_path
    ):
        model_path = tmp_path / "model.json"
        runner.invoke(main, ["train", *_dirs(ham_dir, spam_dir), "-m", str(model_path)])

        result = runner.invoke(
            main,
            ["classify", *_dirs(ham_dir, spam_dir, test_dir)],
            env={"SPAM_FILTER_MODEL": str(model_path)},
        )
        assert result.exit_code == 0, result.output
        assert result.output.splitlines() == ["a.txt spam", "b.txt ham"]

    def test_wrong_directory_count(self, runner, ham_dir, spam_dir):
        result = runner.invoke(main, ["classify", *_dirs(ham_dir, spam_dir)])
        assert result.exit_code == 2
        assert "HAM_DIR SPAM_DIR TEST_DIR" in result.output

    def test_model_with_extra_directories(self, runner, ham_dir, spam_dir, test_dir, tmp_path):
        model_path = tmp_path / "model.json"
        runner.invoke(main, ["train", *_dirs(ham_dir, spam_dir), "-m", str(model_path)])
        result = runner.invoke(
            main, ["classify", "-m", str(model_path), *_dirs(ham_dir, spam_dir, test_dir)]
        )
        assert result.exit_code == 2

    def test_missing_directory(self, runner, tmp_path):
        result = runner.invoke(main, ["classify", str(tmp_path / "nope")])
        assert result.exit_code == 2

    def test_empty_training_corpus(self, runner, tmp_path, test_dir):
        empty_ham = tmp_path / "empty_ham"
        empty_spam = tmp_path / "empty_spam"
        empty_ham.mkdir()
        empty_spam.mkdir()
        result = runner.invoke(main, ["classify", *_dirs(empty_ham, empty_spam, test_dir)])
        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "empty training corpus" in result.output

    def test_unreadable_document(self, runner, ham_dir, spam_dir, test_dir):
        (test_dir / "c.txt").write_bytes(b"Subject: \xff\xfe")
        result = runner.invoke(main, ["classify", *_dirs(ham_dir, spam_dir, test_dir)])
        assert result.exit_code == 1
        assert "c.txt" in result.output
        assert "b.txt ham" not in result.output

    def test_invalid_model_file(self, runner, test_dir, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text("{}", encoding="utf-8")
        result = runner.invoke(main, ["classify", "--model", str(bad), str(test_dir)])
        assert result.exit_code == 1
        assert "Unsupported model format" in result.output

    def test_malformed_model_file(self, runner, test_dir, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text(
            json.dumps({"version": "1.0", "ham_probs": [1], "spam_probs": {},
                        "prior_ham": 0.5, "prior_spam": 0.5}),
            encoding="utf-8",
        )
        result = runner.invoke(main, ["classify", "--model", str(bad), str(test_dir)])
        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "malformed" in result.output

    def test_pattern_option(self, runner, ham_dir, spam_dir, test_dir):
        (test_dir / "notes.md").write_text("Subject: free money", encoding="utf-8")
        result = runner.invoke(
            main, ["classify", "--pattern", "*.txt", *_dirs(ham_dir, spam_dir, test_dir)]
        )
        assert result.exit_code == 0, result.output
        assert "notes.md" not in result.output

    def test_no_skip_header(self, runner, tmp_path):
        ham = tmp_path / "h"
        spam = tmp_path / "s"
        test = tmp_path / "t"
        for d in (ham, spam, test):
            d.mkdir()
        (ham / "1").write_text("lunch", encoding="utf-8")
        (spam / "1").write_text("money", encoding="utf-8")
        (test / "x").write_text("money", encoding="utf-8")

        skipped = runner.invoke(main, ["classify", *_dirs(ham, spam, test)])
        kept = runner.invoke(main, ["classify", "--no-skip-header", *_dirs(ham, spam, test)])
        # With the header dropped every document is empty and the tie goes to ham
        assert skipped.output.strip() == "x ham"
        assert kept.output.strip() == "x spam"


class TestTrainCommand:
    def test_writes_model(self, runner, ham_dir, spam_dir, tmp_path):
        model_path = tmp_path / "out" / "model.json"
        result = runner.invoke(main, ["train", *_dirs(ham_dir, spam_dir), "--model", str(model_path)])
        assert result.exit_code == 0, result.output
        model = load_model(model_path)
        assert model.num_ham_docs == 3
        assert model.num_spam_docs == 3
        assert "Trained model" in result.output

    def test_model_option_required(self, runner, ham_dir, spam_dir):
        result = runner.invoke(main, ["train", *_dirs(ham_dir, spam_dir)])
        assert result.exit_code == 2

    def test_empty_corpus(self, runner, tmp_path):
        ham = tmp_path / "h"
        spam = tmp_path / "s"
        ham.mkdir()
        spam.mkdir()
        model_path = tmp_path / "model.json"
        result = runner.invoke(main, ["train", *_dirs(ham, spam), "-m", str(model_path)])
        assert result.exit_code == 1
        assert not model_path.exists()


class TestEvaluateCommand:
    def test_json_metrics(self, runner, ham_dir, spam_dir):
        result = runner.invoke(
            main, ["evaluate", "-o", "json", *_dirs(ham_dir, spam_dir, ham_dir, spam_dir)]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["accuracy"] == 1.0
        assert data["support"] == {"ham": 3, "spam": 3}

    def test_rich_metrics(self, runner, ham_dir, spam_dir):
        result = runner.invoke(main, ["evaluate", *_dirs(ham_dir, spam_dir, ham_dir, spam_dir)])
        assert result.exit_code == 0, result.output
        assert "Accuracy" in result.output


    def test_unreadable_document(self, runner, ham_dir, spam_dir, tmp_path):
        test_ham = tmp_path / "test_ham"
        test_ham.mkdir()
        (test_ham / "bad.txt").write_bytes(b"Subject: \xff\xfe")
        result = runner.invoke(
            main, ["evaluate", *_dirs(ham_dir, spam_dir, test_ham, spam_dir)]
        )
        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "bad.txt" in result.output


class TestVerbosity:
    def test_verbose_flag_accepted(self, runner, ham_dir, spam_dir, test_dir):
        result = runner.invoke(main, ["-vv", "classify", *_dirs(ham_dir, spam_dir, test_dir)])
        assert result.exit_code == 0
