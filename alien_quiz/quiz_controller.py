"""
Terminal front-end for the quiz.
Drives a QuizEngine through its view contract and renders questions and results.
"""
import logging
from enum import Enum
from typing import Callable, Optional

from .models import QuizResult
from .quiz_engine import QuizEngine


class CommandOutcome(Enum):
    """Result of handling one line of user input."""
    CONTINUE = "continue"
    QUIT = "quit"
    COMPLETED = "completed"


class QuizController:
    """
    Presents the quiz in a terminal.

    The engine enforces nothing about navigation beyond its own state
    machine; the controller refuses to advance without an answer, as the
    original view did.
    """

    HELP_TEXT = (
        "Enter an option number to answer, "
        "[n] next, [p] previous, [c] characters, [c <number>] character details, [q] quit"
    )

    def __init__(
        self,
        engine: QuizEngine,
        input_func: Callable[[str], str] = input,
        output_func: Callable[[str], None] = print,
        resume_prompt: bool = True
    ):
        """
        Initialize the quiz controller.

        Args:
            engine: Quiz engine holding the session
            input_func: Reads one line of user input given a prompt
            output_func: Writes one block of text to the user
            resume_prompt: Offer to continue saved progress; False always starts fresh
        """
        self.logger = logging.getLogger(__name__)
        self.engine = engine
        self.input_func = input_func
        self.output_func = output_func
        self.resume_prompt = resume_prompt

    def start_quiz(self) -> bool:
        """
        Begin a session, offering to resume saved progress first.

        Returns:
            True if saved progress was resumed, False if a fresh quiz started
        """
        if self.resume_prompt and self.engine.load_progress() and self.engine.current_index > 0:
            if self._confirm("A quiz in progress was found. Continue where you left off?"):
                self.output_func("Quiz restored successfully!")
                self.logger.info("Resumed saved quiz progress")
                return True

        self.engine.restart()
        self.engine.clear_progress()
        return False

    def run(self) -> Optional[QuizResult]:
        """
        Run the quiz until the user quits or declines to play again.

        Returns:
            The QuizResult of the last completed quiz, or None if the user quit
        """
        self.output_func(self.describe_characters())
        self.start_quiz()
        last_result = None

        while True:
            self.render_question()
            try:
                command = self.input_func("> ")
            except EOFError:
                command = "q"

            outcome = self.handle_command(command)
            if outcome is CommandOutcome.QUIT:
                self.output_func("Goodbye! Your answers so far have been saved.")
                return None
            if outcome is CommandOutcome.COMPLETED:
                # A completed run must never resume as if mid-progress
                self.engine.clear_progress()
                last_result = self.engine.calculate_result()
                if last_result is not None:
                    self.output_func(self.format_result(last_result))
                    self.output_func(self.format_share_text(last_result))

                if not self._confirm("Play again?"):
                    return last_result
                self.engine.restart()
                self.logger.info("Quiz restarted from the result screen")

    def handle_command(self, command: str) -> CommandOutcome:
        """Apply one line of user input to the engine."""
        parts = (command or "").strip().split(maxsplit=1)
        command = parts[0].lower() if parts else ""
        argument = parts[1].strip() if len(parts) > 1 else ""
        question = self.engine.get_current_question()

        if command.isdigit():
            if question is None:
                return CommandOutcome.CONTINUE
            choice = int(command)
            if not 1 <= choice <= len(question.options):
                self.output_func(f"Choose a number between 1 and {len(question.options)}.")
                return CommandOutcome.CONTINUE
            self.engine.answer_question(choice - 1)
            self.output_func(f"Selected: {question.options[choice - 1].text}")
            return CommandOutcome.CONTINUE

        if command == "n":
            if not self.engine.has_current_answer():
                self.output_func("Choose an answer before continuing.")
                return CommandOutcome.CONTINUE
            if self.engine.next_question():
                return CommandOutcome.CONTINUE
            return CommandOutcome.COMPLETED

        if command == "p":
            if not self.engine.previous_question():
                self.output_func("You are already at the first question.")
            return CommandOutcome.CONTINUE

        if command == "c":
            if not argument:
                self.output_func(self.describe_characters())
            elif not self.show_character(self._resolve_character_id(argument)):
                self.output_func(f"Unknown character: {argument}")
            return CommandOutcome.CONTINUE

        if command == "q":
            return CommandOutcome.QUIT

        self.output_func(self.HELP_TEXT)
        return CommandOutcome.CONTINUE

    def render_question(self) -> None:
        """Show the current question, its options and the current selection."""
        question = self.engine.get_current_question()
        if question is None:
            return

        progress = self.engine.get_progress()
        answer = self.engine.get_current_answer()
        is_last = progress.current == progress.total

        lines = [
            "",
            f"Question {progress.current}/{progress.total} ({progress.percentage}%)",
            question.text,
        ]
        if question.image_ref:
            lines.append(f"[image: {question.image_ref}]")
        for index, option in enumerate(question.options):
            marker = "*" if answer is not None and answer.option_index == index else " "
            lines.append(f" {marker} {index + 1}. {option.text}")
        lines.append("[n] see result" if is_last else "[n] next question")

        self.output_func("\n".join(lines))

    def describe_characters(self) -> str:
        """Overview of every character, as shown before the quiz starts."""
        lines = ["Which Alien: Earth character are you?"]
        for number, character in enumerate(self.engine.characters, start=1):
            lines.append(f"• {number}. {character.name} - {character.role}")
        lines.append("Type c <number> to read about a character.")
        return "\n".join(lines)

    def _resolve_character_id(self, key: str) -> str:
        """Map a 1-based list number or a case-insensitive id to a character id."""
        characters = self.engine.characters
        if key.isdigit() and 1 <= int(key) <= len(characters):
            return characters[int(key) - 1].id
        for character in characters:
            if character.id.lower() == key.lower():
                return character.id
        return key

    def show_character(self, character_id: str) -> bool:
        """
        Print the details of one character.

        Returns:
            False if the id is unknown
        """
        character = self.engine.get_character_by_id(character_id)
        if character is None:
            return False
        self.output_func(f"{character.name} - {character.role}\n\n{character.description}")
        return True

    @staticmethod
    def format_result(result: QuizResult) -> str:
        """Render the best match followed by every character's score."""
        character = result.character
        lines = [
            "",
            f"You are: {character.name}",
            character.role,
            "",
            character.description,
            "",
            f"Compatibility: {result.compatibility_percentage}%",
            "",
            "All scores:",
        ]
        for entry in result.all_scores:
            lines.append(f"  {entry.character.name}: {entry.score} pts ({entry.percentage}%)")
        return "\n".join(lines)

    @staticmethod
    def format_share_text(result: QuizResult) -> str:
        return (
            f"I got {result.character.name} ({result.character.role}) with "
            f"{result.compatibility_percentage}% compatibility in the Alien: Earth quiz!"
        )

    def _confirm(self, question: str) -> bool:
        try:
            reply = self.input_func(f"{question} [y/n] ")
        except EOFError:
            return False
        return reply.strip().lower() in ("y", "yes")
