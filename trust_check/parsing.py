"""Parser for the plain-text submission format.

The form posts one block per question::

    Q1: I share my real opinions in meetings
    Response: 4 - Agree
    Q2 (R): I keep concerns to myself
    Response: 2 - Disagree

``(R)`` marks a reverse-scored item. Questions that never appear are left
unanswered.
"""

from __future__ import annotations

import logging
import re

from pydantic import BaseModel, ConfigDict

from trust_check.errors import MalformedInputError
from trust_check.responses import ITEM_COUNT, LIKERT_MAX, LIKERT_MIN, AssessmentResponses, load_responses

logger = logging.getLogger(__name__)

_QUESTION_RE = re.compile(r"^Q(\d+)(\s*\(R\))?\s*:\s*(.*)$")
_RESPONSE_RE = re.compile(r"^Response:\s*(\d+)\s*-\s*(.*)$")


class ParsedAssessment(BaseModel):
    """Responses plus the question wording found in the text."""

    model_config = ConfigDict(frozen=True)

    responses: AssessmentResponses
    question_texts: tuple[str | None, ...]


def parse_assessment(text: str) -> ParsedAssessment:
    """Parse *text* into responses and question texts.

    Raises:
        MalformedInputError: Non-text input, a question number outside
            1..45, or a response outside 1..5.
    """
    if not isinstance(text, str):
        raise MalformedInputError("Invalid assessment data format")

    answers: list[int | None] = [None] * ITEM_COUNT
    reverse: list[bool] = [False] * ITEM_COUNT
    questions: list[str | None] = [None] * ITEM_COUNT
    current = -1

    for line_no, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()

        q_match = _QUESTION_RE.match(line)
        if q_match:
            number = int(q_match.group(1))
            if not 1 <= number <= ITEM_COUNT:
                raise MalformedInputError(
                    f"Line {line_no}: question number {number} is outside 1..{ITEM_COUNT}"
                )
            current = number - 1
            reverse[current] = bool(q_match.group(2))
            questions[current] = q_match.group(3).strip()
            continue

        r_match = _RESPONSE_RE.match(line)
        if r_match and current >= 0:
            value = int(r_match.group(1))
            if not LIKERT_MIN <= value <= LIKERT_MAX:
                raise MalformedInputError(
                    f"Line {line_no}: response {value} for Q{current + 1} is outside "
                    f"{LIKERT_MIN}..{LIKERT_MAX}"
                )
            answers[current] = value

    responses = load_responses([
        {"response": a, "reverse_scored": r} for a, r in zip(answers, reverse)
    ])
    logger.debug(
        "Parsed assessment: %d questions seen, %d answered",
        sum(1 for q in questions if q is not None),
        responses.answered_count,
    )
    return ParsedAssessment(responses=responses, question_texts=tuple(questions))


def parse_assessment_text(text: str) -> AssessmentResponses:
    return parse_assessment(text).responses
