"""
Core data models for the Alien: Earth character quiz.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Character:
    """A character archetype the user can be matched against."""
    id: str
    name: str
    role: str
    description: str
    icon: str = ""
    traits: Dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class QuestionOption:
    """One selectable answer and the points it awards per character id."""
    text: str
    scores: Dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class Question:
    """Represents a single quiz question."""
    id: int
    text: str
    options: Tuple[QuestionOption, ...]
    image_ref: Optional[str] = None


@dataclass(frozen=True)
class Answer:
    """Snapshot of the option a user picked for a question."""
    question_id: int
    option_index: int
    option_text: str
    scores: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Serialise using the stored progress field names."""
        return {
            'questionId': self.question_id,
            'optionIndex': self.option_index,
            'optionText': self.option_text,
            'scores': dict(self.scores),
        }

    @classmethod
    def from_dict(cls, data: Any) -> Optional['Answer']:
        """
        Rebuild an answer from stored progress data.

        Returns:
            The Answer, or None if the entry is malformed
        """
        if not isinstance(data, dict):
            return None

        question_id = data.get('questionId')
        option_index = data.get('optionIndex')
        option_text = data.get('optionText', '')
        scores = data.get('scores', {})

        if not _is_int(question_id) or not _is_int(option_index):
            return None
        if not isinstance(option_text, str) or not isinstance(scores, dict):
            return None
        if not all(isinstance(k, str) and _is_int(v) for k, v in scores.items()):
            return None

        return cls(
            question_id=question_id,
            option_index=option_index,
            option_text=option_text,
            scores=dict(scores),
        )


@dataclass(frozen=True)
class CharacterScore:
    """A character's final score and compatibility percentage."""
    character: Character
    score: int
    percentage: int


@dataclass(frozen=True)
class QuizResult:
    """Outcome of a completed quiz."""
    character: Character
    compatibility_percentage: int
    all_scores: List[CharacterScore]


@dataclass(frozen=True)
class QuizProgress:
    """Position report consumed by the view."""
    current: int
    total: int
    percentage: int
    completed: bool


@dataclass
class AppSettings:
    """Runtime configuration for the quiz application."""
    storage_path: str = "./.alien_quiz/storage.json"
    storage_namespace: str = "alienQuiz_"
    catalog_file: Optional[str] = None
    resume_prompt: bool = True
    log_level: str = "INFO"
    log_directory: str = "./logs/"


def _is_int(value: Any) -> bool:
    # bool is an int subclass but never a valid index or point value
    return isinstance(value, int) and not isinstance(value, bool)
