"""
Unit tests for question bank loading and sampling.
"""
import json
import random
import tempfile
import unittest
from pathlib import Path

from kumoxi_quiz.config import BANK_DIR
from kumoxi_quiz.question_bank import load_question_bank, parse_questions, sample_questions
from tests.fixtures import make_questions


class TestLoadQuestionBank(unittest.TestCase):
    """Bank file parsing."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.dir = Path(self.temp_dir.name)

    def tearDown(self):
        self.temp_dir.cleanup()

    def _write(self, name: str, content: str) -> Path:
        path = self.dir / name
        path.write_text(content, encoding="utf-8")
        return path

    def test_missing_file_raises(self):
        with self.assertRaises(FileNotFoundError):
            load_question_bank(self.dir / "nope.json")

    def test_invalid_json_raises_value_error(self):
        path = self._write("bank.json", "{oops")
        with self.assertRaises(ValueError):
            load_question_bank(path)

    def test_wrong_shape_raises_value_error(self):
        path = self._write("bank.json", json.dumps({"quiz": []}))
        with self.assertRaises(ValueError):
            load_question_bank(path)

    def test_loads_questions_object(self):
        path = self._write(
            "bank.json",
            json.dumps({"questions": [
                {"question": "2+2?", "options": ["3", "4"], "answer": "4"},
                {"question": "Capital?", "options": ["Luanda", "Lobito"], "answer": "Luanda"},
            ]}),
        )

        bank = load_question_bank(path)

        self.assertEqual([q.text for q in bank], ["2+2?", "Capital?"])
        self.assertEqual(bank[0].options, ("3", "4"))
        self.assertEqual(bank[0].answer, "4")

    def test_loads_bare_list(self):
        path = self._write("bank.json", json.dumps([{"question": "q", "options": ["a", "b"], "answer": "a"}]))
        self.assertEqual(len(load_question_bank(path)), 1)

    def test_jsonl_skips_broken_lines(self):
        lines = [
            json.dumps({"question": "q1", "options": ["a", "b"], "answer": "a"}),
            "{broken",
            "",
            json.dumps({"question": "q2", "options": ["c", "d"], "answer": "d"}),
        ]
        path = self._write("bank.jsonl", "\n".join(lines))

        self.assertEqual([q.text for q in load_question_bank(path)], ["q1", "q2"])

    def test_invalid_records_are_skipped(self):
        records = [
            {"question": "ok", "options": ["a", "b"], "answer": "a"},
            {"question": "answer missing from options", "options": ["a", "b"], "answer": "c"},
            {"question": "one option", "options": ["a"], "answer": "a"},
            {"options": ["a", "b"], "answer": "a"},
            "not an object",
        ]
        self.assertEqual([q.text for q in parse_questions(records)], ["ok"])

    def test_shipped_bank_is_valid(self):
        bank = load_question_bank(BANK_DIR / "questions.json")

        self.assertGreaterEqual(len(bank), 7)
        for q in bank:
            self.assertIn(q.answer, q.options)


class TestSampleQuestions(unittest.TestCase):
    """Random subset selection."""

    def test_samples_without_replacement(self):
        bank = make_questions(20)
        picked = sample_questions(bank, 7, random.Random(1))

        self.assertEqual(len(picked), 7)
        self.assertEqual(len(set(picked)), 7)
        for q in picked:
            self.assertIn(q, bank)

    def test_small_bank_returns_all(self):
        bank = make_questions(4)
        picked = sample_questions(bank, 7, random.Random(1))
        self.assertEqual(sorted(picked, key=lambda q: q.text), sorted(bank, key=lambda q: q.text))

    def test_empty_bank_returns_empty(self):
        self.assertEqual(sample_questions([], 7), [])

    def test_does_not_reorder_bank(self):
        bank = make_questions(10)
        snapshot = list(bank)
        sample_questions(bank, 7, random.Random(3))
        self.assertEqual(bank, snapshot)

    def test_order_is_randomised(self):
        bank = make_questions(7)
        orders = {tuple(q.text for q in sample_questions(bank, 7, random.Random(seed))) for seed in range(20)}
        self.assertGreater(len(orders), 1)


if __name__ == "__main__":
    unittest.main()
