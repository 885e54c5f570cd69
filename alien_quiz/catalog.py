"""
Catalog of characters and questions, plus JSON catalog file loading and validation.
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple, Union

from .catalog_data import DEFAULT_CATALOG, MAX_SCORE_PER_QUESTION
from .models import Character, Question, QuestionOption


class CatalogError(ValueError):
    """Raised when catalog data violates an integrity rule."""
    pass


class Catalog:
    """
    Immutable, validated reference data for a quiz.

    Validation runs once at construction and fails loudly: an invalid catalog
    is a programming or content error, not a runtime condition.
    """

    MIN_OPTIONS_PER_QUESTION = 2

    def __init__(
        self,
        characters: Iterable[Character],
        questions: Iterable[Question],
        max_score_per_question: int = MAX_SCORE_PER_QUESTION
    ):
        """
        Build and validate a catalog.

        Args:
            characters: Character archetypes in display (and tie-break) order
            questions: Questions in presentation order
            max_score_per_question: Highest points one answer can award a character

        Raises:
            CatalogError: If any integrity rule is violated
        """
        self._characters: Tuple[Character, ...] = tuple(characters)
        self._questions: Tuple[Question, ...] = tuple(questions)
        self._max_score_per_question = max_score_per_question
        self._by_id: Dict[str, Character] = {}

        self._validate()

    def _validate(self) -> None:
        if isinstance(self._max_score_per_question, bool) or not isinstance(self._max_score_per_question, int):
            raise CatalogError("maxScorePerQuestion must be an integer")
        if self._max_score_per_question < 1:
            raise CatalogError("maxScorePerQuestion must be at least 1")

        if not self._characters:
            raise CatalogError("Catalog must contain at least one character")

        for character in self._characters:
            if not isinstance(character.id, str) or not character.id:
                raise CatalogError(f"Character id must be a non-empty string, got {character.id!r}")
            if character.id in self._by_id:
                raise CatalogError(f"Duplicate character id: {character.id}")
            self._by_id[character.id] = character

        if not self._questions:
            raise CatalogError("Catalog must contain at least one question")

        for position, question in enumerate(self._questions, start=1):
            if question.id != position:
                raise CatalogError(
                    f"Question ids must be sequential from 1; expected {position}, got {question.id!r}"
                )

            if len(question.options) < self.MIN_OPTIONS_PER_QUESTION:
                raise CatalogError(
                    f"Question {question.id} has {len(question.options)} option(s); "
                    f"at least {self.MIN_OPTIONS_PER_QUESTION} are required"
                )

            for option_index, option in enumerate(question.options):
                for character_id, points in option.scores.items():
                    if character_id not in self._by_id:
                        raise CatalogError(
                            f"Question {question.id} option {option_index} scores unknown character '{character_id}'"
                        )
                    if isinstance(points, bool) or not isinstance(points, int) or points < 0:
                        raise CatalogError(
                            f"Question {question.id} option {option_index} has invalid points "
                            f"{points!r} for '{character_id}'"
                        )

    @property
    def characters(self) -> Tuple[Character, ...]:
        return self._characters

    @property
    def questions(self) -> Tuple[Question, ...]:
        return self._questions

    @property
    def question_count(self) -> int:
        return len(self._questions)

    @property
    def character_count(self) -> int:
        return len(self._characters)

    @property
    def max_score_per_question(self) -> int:
        return self._max_score_per_question

    def get_character(self, character_id: str) -> Optional[Character]:
        """Look up a character by id, or None if unknown."""
        return self._by_id.get(character_id)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Catalog':
        """
        Build a catalog from its JSON-shaped representation.

        Expected structure:
        {
            "maxScorePerQuestion": int,  # Optional, defaults to 3
            "characters": [
                {"id": str, "name": str, "role": str, "description": str,
                 "icon": str, "traits": {str: int}}
            ],
            "questions": [
                {"id": int, "text": str, "imageRef": str | null,
                 "options": [{"text": str, "scores": {str: int}}]}
            ]
        }

        Raises:
            CatalogError: If the structure is malformed or fails validation
        """
        try:
            characters = [
                Character(
                    id=item["id"],
                    name=item["name"],
                    role=item.get("role", ""),
                    description=item.get("description", ""),
                    icon=item.get("icon", ""),
                    traits=dict(item.get("traits", {})),
                )
                for item in data["characters"]
            ]
            questions = [
                Question(
                    id=item["id"],
                    text=item["text"],
                    image_ref=item.get("imageRef"),
                    options=tuple(
                        QuestionOption(text=option["text"], scores=dict(option["scores"]))
                        for option in item["options"]
                    ),
                )
                for item in data["questions"]
            ]
            max_score = data.get("maxScorePerQuestion", MAX_SCORE_PER_QUESTION)
        except (KeyError, TypeError, AttributeError, ValueError) as e:
            raise CatalogError(f"Malformed catalog data: {e!r}") from e

        return cls(characters, questions, max_score)


class CatalogLoader:
    """Loads quiz catalogs from JSON files."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def load_catalog_file(self, file_path: Union[str, Path]) -> Catalog:
        """
        Load and validate a catalog from a JSON file.

        Args:
            file_path: Path to the JSON catalog file

        Returns:
            The validated Catalog

        Raises:
            CatalogError: If the file is missing, unreadable, invalid JSON or an invalid catalog
        """
        path = Path(file_path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError as e:
            self.logger.error(f"Catalog file not found: {path}")
            raise CatalogError(f"Catalog file not found: {path}") from e
        except json.JSONDecodeError as e:
            self.logger.error(f"Invalid JSON in {path}: {e}")
            raise CatalogError(f"Invalid JSON in {path}: {e}") from e
        except OSError as e:
            self.logger.error(f"Failed to read catalog file {path}: {e}")
            raise CatalogError(f"Failed to read catalog file {path}: {e}") from e

        if not self.validate_catalog_structure(data):
            raise CatalogError(f"Invalid catalog structure in {path}")

        catalog = Catalog.from_dict(data)
        self.logger.info(
            f"Loaded catalog from {path}: {catalog.character_count} characters, "
            f"{catalog.question_count} questions"
        )
        return catalog

    def validate_catalog_structure(self, data: Any) -> bool:
        """
        Validate that JSON data has the shape of a catalog.

        Integrity rules (known character ids, option counts) are enforced by
        Catalog itself; this check only covers types and required fields.

        Returns:
            True if structure is valid, False otherwise
        """
        if not isinstance(data, dict):
            self.logger.error("Catalog data must be a JSON object")
            return False

        for key in ("characters", "questions"):
            if key not in data:
                self.logger.error(f"Catalog data must contain a '{key}' key")
                return False
            if not isinstance(data[key], list):
                self.logger.error(f"'{key}' value must be an array")
                return False

        for i, character in enumerate(data["characters"]):
            if not isinstance(character, dict):
                self.logger.error(f"Character {i} must be an object")
                return False
            for field_name in ("id", "name"):
                if not isinstance(character.get(field_name), str):
                    self.logger.error(f"Character {i} '{field_name}' field must be a string")
                    return False
            if "traits" in character and not isinstance(character["traits"], dict):
                self.logger.error(f"Character {i} 'traits' field must be an object")
                return False

        for i, question in enumerate(data["questions"]):
            if not isinstance(question, dict):
                self.logger.error(f"Question {i} must be an object")
                return False
            if not isinstance(question.get("text"), str):
                self.logger.error(f"Question {i} 'text' field must be a string")
                return False
            if "id" not in question:
                self.logger.error(f"Question {i} missing 'id' field")
                return False
            options = question.get("options")
            if not isinstance(options, list):
                self.logger.error(f"Question {i} 'options' field must be an array")
                return False
            for j, option in enumerate(options):
                if not isinstance(option, dict) or not isinstance(option.get("text"), str):
                    self.logger.error(f"Question {i} option {j} must be an object with a 'text' string")
                    return False
                if not isinstance(option.get("scores"), dict):
                    self.logger.error(f"Question {i} option {j} 'scores' field must be an object")
                    return False

        return True


def default_catalog() -> Catalog:
    """Build the built-in Alien: Earth catalog."""
    return Catalog.from_dict(DEFAULT_CATALOG)
