"""
question_bank.py
===========================

Loads the static question bank and draws the random subset for a session.

Accepted formats:
- JSON       : {"questions": [{"question", "options", "answer"}, ...]}
               (a bare top-level list is accepted as well)
- JSON Lines : one question object per line (*.jsonl)

Broken records are skipped, so a single bad entry never takes the bank down.
"""

from __future__ import annotations

import json
import logging
import random
from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence

from .models import Question

logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------
#  Loading
# ----------------------------------------------------------------------
def load_question_bank(path: Path) -> List[Question]:
    """
    Read the bank file and return its valid questions in file order.

    Raises FileNotFoundError when the file does not exist and ValueError
    when a JSON file cannot be parsed at all.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Question bank not found: {path}")

    if path.suffix == ".jsonl":
        records = list(_iter_jsonl(path))
    else:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in question bank {path}: {e}") from e
        records = _extract_records(data)

    questions = parse_questions(records)
    logger.info(f"Loaded {len(questions)} questions from {path}")
    return questions


def parse_questions(records: Iterable[Any]) -> List[Question]:
    """Convert raw records to Questions, skipping invalid ones."""
    questions: List[Question] = []
    for i, record in enumerate(records):
        try:
            questions.append(Question.from_dict(record))
        except ValueError as e:
            logger.warning(f"Skipping question {i}: {e}")
    return questions


def _iter_jsonl(path: Path) -> Iterable[Any]:
    with path.open("r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                yield json.loads(line)
            except json.JSONDecodeError:
                logger.warning(f"Skipping broken line {lineno} in {path}")


def _extract_records(data: Any) -> List[Any]:
    if isinstance(data, list):
        return data
    if isinstance(data, dict) and isinstance(data.get("questions"), list):
        return data["questions"]
    raise ValueError("Question bank must be a list or an object with a 'questions' list")


# ----------------------------------------------------------------------
#  Sampling
# ----------------------------------------------------------------------
def sample_questions(
    bank: Sequence[Question],
    count: int,
    rng: Optional[random.Random] = None,
) -> List[Question]:
    """
    Draw min(count, len(bank)) questions uniformly without replacement,
    in random order. An empty bank yields an empty list.
    """
    rng = rng or random.Random()
    k = max(0, min(count, len(bank)))
    return rng.sample(list(bank), k)
