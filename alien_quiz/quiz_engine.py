"""
Quiz engine core logic for the Alien: Earth character quiz.
Handles progression, per-character scoring, progress snapshots and results.
"""
import logging
import math
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from .catalog import Catalog, default_catalog
from .models import Answer, Character, CharacterScore, Question, QuizProgress, QuizResult
from .storage import StorageManager


logger = logging.getLogger(__name__)

PROGRESS_KEY = "progress"

# Accepted spellings of the index field in stored snapshots, preferred first
_INDEX_KEYS = ("currentQuestionIndex", "currentIndex", "currentIndexIndex")


class QuizState(Enum):
    """Enumeration of quiz session states."""
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


class QuizEngine:
    """
    Stateful quiz session: current position, answer slots, running scores.

    Answer slots form an ordered list. An index past the end of the list was
    never answered, a None slot was cleared by navigating back, and an Answer
    slot holds the recorded choice. Scores always equal the sum of the points
    of the Answers currently held in the slots.
    """

    def __init__(self, catalog: Optional[Catalog] = None, storage: Optional[StorageManager] = None):
        """
        Initialize the quiz engine.

        Args:
            catalog: Validated catalog; the built-in catalog is used when omitted
            storage: Persistence adapter; an in-memory one is used when omitted
        """
        self.catalog = catalog if catalog is not None else default_catalog()
        self.storage = storage if storage is not None else StorageManager()

        self._current_index = 0
        self._answers: List[Optional[Answer]] = []
        self._completed = False
        self._scores: Dict[str, int] = {c.id: 0 for c in self.catalog.characters}

    # --- State queries ---

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def completed(self) -> bool:
        return self._completed

    @property
    def state(self) -> QuizState:
        if self._completed:
            return QuizState.COMPLETED
        if self._current_index == 0 and not any(a is not None for a in self._answers):
            return QuizState.NOT_STARTED
        return QuizState.IN_PROGRESS

    @property
    def answers(self) -> List[Optional[Answer]]:
        """Copy of the answer slots."""
        return list(self._answers)

    @property
    def characters(self):
        return self.catalog.characters

    @property
    def question_count(self) -> int:
        return self.catalog.question_count

    def get_character_by_id(self, character_id: str) -> Optional[Character]:
        return self.catalog.get_character(character_id)

    def get_score(self, character_id: str) -> int:
        """Current score for a character; 0 for unknown ids."""
        return self._scores.get(character_id, 0)

    def get_scores(self) -> Dict[str, int]:
        """Copy of the running scores, keyed by character id."""
        return dict(self._scores)

    def get_current_question(self) -> Optional[Question]:
        if 0 <= self._current_index < self.catalog.question_count:
            return self.catalog.questions[self._current_index]
        return None

    def has_current_answer(self) -> bool:
        return self.get_current_answer() is not None

    def get_current_answer(self) -> Optional[Answer]:
        if self._current_index < len(self._answers):
            return self._answers[self._current_index]
        return None

    def get_progress(self) -> QuizProgress:
        total = self.catalog.question_count
        current = self._current_index + 1
        return QuizProgress(
            current=current,
            total=total,
            percentage=round_half_up(current / total * 100),
            completed=self._completed,
        )

    # --- Transitions ---

    def restart(self) -> None:
        """Return to the first question with no answers and zeroed scores."""
        self._current_index = 0
        self._answers = []
        self._completed = False
        for character_id in self._scores:
            self._scores[character_id] = 0
        logger.info("Quiz restarted")

    def answer_question(self, option_index: int) -> None:
        """
        Record the chosen option for the current question.

        Invalid input (out-of-range or non-integer index, no current question,
        quiz already completed) is ignored rather than raised.

        Args:
            option_index: Zero-based index into the current question's options
        """
        if self._completed:
            logger.debug(f"Ignoring answer {option_index!r}: quiz already completed")
            return

        question = self.get_current_question()
        if question is None:
            logger.debug(f"Ignoring answer {option_index!r}: no current question")
            return

        if (isinstance(option_index, bool) or not isinstance(option_index, int)
                or not 0 <= option_index < len(question.options)):
            logger.debug(
                f"Ignoring answer {option_index!r} for question {question.id}: "
                f"expected 0..{len(question.options) - 1}"
            )
            return

        # Changing an answer on the same visit replaces its contribution
        self._reverse_answer_at(self._current_index)

        option = question.options[option_index]
        answer = Answer(
            question_id=question.id,
            option_index=option_index,
            option_text=option.text,
            scores=dict(option.scores),
        )
        while len(self._answers) <= self._current_index:
            self._answers.append(None)
        self._answers[self._current_index] = answer
        self._apply_scores(answer.scores, 1)

        logger.debug(f"Question {question.id} answered with option {option_index}")
        self.save_progress()

    def next_question(self) -> bool:
        """
        Advance to the next question.

        Returns:
            True if there is another question, False if the quiz is now completed
        """
        if self._completed:
            return False

        if self._current_index < self.catalog.question_count - 1:
            self._current_index += 1
            return True

        self._completed = True
        logger.info("Quiz completed")
        return False

    def previous_question(self) -> bool:
        """
        Go back one question, withdrawing the answer at the current position.

        Returns:
            True if the position moved, False at the first question or once completed
        """
        if self._completed or self._current_index <= 0:
            return False

        self._reverse_answer_at(self._current_index)
        if self._current_index < len(self._answers):
            self._answers[self._current_index] = None
        self._current_index -= 1
        return True

    def _reverse_answer_at(self, index: int) -> None:
        if index < len(self._answers) and self._answers[index] is not None:
            self._apply_scores(self._answers[index].scores, -1)

    def _apply_scores(self, scores: Dict[str, int], sign: int) -> None:
        for character_id, points in scores.items():
            if character_id in self._scores:
                self._scores[character_id] += sign * points

    # --- Results ---

    def calculate_result(self) -> Optional[QuizResult]:
        """
        Compute the best match once the quiz is completed.

        Ties go to the character listed first in the catalog.

        Returns:
            QuizResult, or None if the quiz is not completed yet
        """
        if not self._completed:
            return None

        max_possible = self.catalog.question_count * self.catalog.max_score_per_question

        entries = [
            CharacterScore(
                character=character,
                score=self._scores[character.id],
                percentage=round_half_up(self._scores[character.id] / max_possible * 100),
            )
            for character in self.catalog.characters
        ]

        winner = entries[0]
        for entry in entries[1:]:
            if entry.score > winner.score:
                winner = entry

        return QuizResult(
            character=winner.character,
            compatibility_percentage=winner.percentage,
            all_scores=sorted(entries, key=lambda e: -e.score),
        )

    # --- Persistence ---

    def build_snapshot(self) -> Dict[str, Any]:
        """
        Serialisable snapshot of the session.

        The position is written under `currentQuestionIndex`; load_progress also
        reads `currentIndex` and `currentIndexIndex`.
        """
        return {
            'currentQuestionIndex': self._current_index,
            'userAnswers': [a.to_dict() if a is not None else None for a in self._answers],
            'characterScores': [
                {'id': c.id, 'score': self._scores[c.id]} for c in self.catalog.characters
            ],
            'timestamp': datetime.now(timezone.utc).isoformat(),
        }

    def save_progress(self) -> bool:
        """
        Persist the session snapshot.

        Returns:
            True if saved; False leaves the quiz fully usable without saved progress
        """
        saved = self.storage.save(PROGRESS_KEY, self.build_snapshot())
        if not saved:
            logger.warning("Quiz progress could not be saved; continuing without persistence")
        return saved

    def load_progress(self) -> bool:
        """
        Restore a previously saved session.

        Partial snapshots are applied best-effort: unknown character ids and
        malformed entries are skipped.

        Returns:
            True if usable progress was restored, False otherwise (state unchanged)
        """
        snapshot = self.storage.load(PROGRESS_KEY)
        if not isinstance(snapshot, dict):
            return False

        index = next((snapshot[k] for k in _INDEX_KEYS if k in snapshot), None)
        if isinstance(index, bool) or not isinstance(index, int):
            logger.warning("Saved progress has no usable question index; ignoring it")
            return False
        # The engine never stores a position past the last question
        if not 0 <= index < self.catalog.question_count:
            logger.warning(f"Saved progress index {index} is out of range; ignoring it")
            return False

        raw_answers = snapshot.get('userAnswers', [])
        if not isinstance(raw_answers, list):
            logger.warning("Saved progress answers are not a list; ignoring it")
            return False

        answers = [Answer.from_dict(item) if item is not None else None for item in raw_answers]
        answers = answers[:self.catalog.question_count]

        scores = {c.id: 0 for c in self.catalog.characters}
        raw_scores = snapshot.get('characterScores', [])
        if isinstance(raw_scores, list):
            for entry in raw_scores:
                if not isinstance(entry, dict):
                    continue
                character_id = entry.get('id')
                score = entry.get('score')
                if not isinstance(character_id, str):
                    continue
                if character_id in scores and isinstance(score, int) and not isinstance(score, bool):
                    scores[character_id] = score
                elif character_id not in scores:
                    logger.debug(f"Ignoring saved score for unknown character {character_id!r}")

        self._current_index = index
        self._answers = answers
        self._scores = scores
        self._completed = False
        logger.info(f"Restored quiz progress at question {index + 1}")
        return True

    def clear_progress(self) -> bool:
        """Remove any saved snapshot."""
        return self.storage.remove(PROGRESS_KEY)
