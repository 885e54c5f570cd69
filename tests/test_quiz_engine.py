"""
Unit tests for the QuizEngine class.
"""
import logging
import unittest
from unittest.mock import patch

from alien_quiz.catalog import default_catalog
from alien_quiz.models import Answer
from alien_quiz.quiz_engine import PROGRESS_KEY, QuizEngine, QuizState, round_half_up
from alien_quiz.storage import MemoryStore, StorageManager
from tests.test_fixtures import TestFixtures


class TestQuizEngineProgression(unittest.TestCase):
    """Test cases for navigation and the quiz state machine."""

    def setUp(self):
        """Set up test fixtures."""
        self.engine = TestFixtures.create_engine()
        logging.disable(logging.CRITICAL)

    def tearDown(self):
        logging.disable(logging.NOTSET)

    def test_initial_state(self):
        """A new engine starts at the first question with nothing answered."""
        self.assertEqual(self.engine.current_index, 0)
        self.assertFalse(self.engine.completed)
        self.assertEqual(self.engine.state, QuizState.NOT_STARTED)
        self.assertEqual(self.engine.get_current_question().id, 1)
        self.assertFalse(self.engine.has_current_answer())
        self.assertIsNone(self.engine.get_current_answer())
        self.assertEqual(self.engine.get_scores(), {"A": 0, "B": 0})

    def test_answer_records_snapshot_and_scores(self):
        """Answering stores the option snapshot and adds its points."""
        self.engine.answer_question(0)

        answer = self.engine.get_current_answer()
        self.assertEqual(answer, Answer(1, 0, "A-leaning", {"A": 3, "B": 1}))
        self.assertTrue(self.engine.has_current_answer())
        self.assertEqual(self.engine.get_scores(), {"A": 3, "B": 1})
        self.assertEqual(self.engine.state, QuizState.IN_PROGRESS)

    def test_reanswer_replaces_previous_contribution(self):
        """Answering A then B on the same visit equals answering only B."""
        self.engine.answer_question(0)
        self.engine.answer_question(1)
        self.assertEqual(self.engine.get_scores(), {"A": 0, "B": 3})

        fresh = TestFixtures.create_engine()
        fresh.answer_question(1)
        self.assertEqual(fresh.get_scores(), self.engine.get_scores())

    def test_reanswer_same_option_does_not_double_count(self):
        self.engine.answer_question(0)
        self.engine.answer_question(0)
        self.assertEqual(self.engine.get_scores(), {"A": 3, "B": 1})

    def test_invalid_answers_are_ignored(self):
        """Out-of-range and non-integer indices change nothing."""
        for bad in (-1, 2, 99, "0", 1.0, None, True):
            self.engine.answer_question(bad)

        self.assertFalse(self.engine.has_current_answer())
        self.assertEqual(self.engine.get_scores(), {"A": 0, "B": 0})
        self.assertIsNone(self.engine.storage.load(PROGRESS_KEY))

    def test_next_question_advances_then_completes(self):
        """next_question completes the quiz only on the last question."""
        self.engine.answer_question(0)
        self.assertTrue(self.engine.next_question())
        self.assertEqual(self.engine.current_index, 1)
        self.assertFalse(self.engine.completed)

        self.engine.answer_question(0)
        self.assertFalse(self.engine.next_question())
        self.assertTrue(self.engine.completed)
        self.assertEqual(self.engine.state, QuizState.COMPLETED)
        self.assertEqual(self.engine.current_index, 1)

    def test_next_question_without_answer_keeps_integrity(self):
        self.assertTrue(self.engine.next_question())
        self.assertEqual(self.engine.current_index, 1)
        self.assertEqual(self.engine.get_scores(), {"A": 0, "B": 0})

    def test_next_question_count_on_full_catalog(self):
        """Completion happens on exactly the question_count-th call."""
        engine = TestFixtures.create_engine(default_catalog())
        total = engine.question_count

        for call in range(1, total + 1):
            engine.answer_question(0)
            has_more = engine.next_question()
            if call < total:
                self.assertTrue(has_more)
                self.assertFalse(engine.completed)
            else:
                self.assertFalse(has_more)
                self.assertTrue(engine.completed)

    def test_operations_after_completion_are_ignored(self):
        self.engine.answer_question(0)
        self.engine.next_question()
        self.engine.answer_question(0)
        self.engine.next_question()
        scores = self.engine.get_scores()

        self.engine.answer_question(1)
        self.assertFalse(self.engine.next_question())
        self.assertFalse(self.engine.previous_question())

        self.assertEqual(self.engine.get_scores(), scores)
        self.assertEqual(self.engine.current_index, 1)
        self.assertTrue(self.engine.completed)

    def test_previous_question_at_start_changes_nothing(self):
        self.engine.answer_question(0)
        answers_before = self.engine.answers

        self.assertFalse(self.engine.previous_question())
        self.assertEqual(self.engine.current_index, 0)
        self.assertEqual(self.engine.answers, answers_before)
        self.assertEqual(self.engine.get_scores(), {"A": 3, "B": 1})

    def test_previous_question_reverses_current_answer(self):
        """Going back withdraws and clears the answer at the position left behind."""
        self.engine.answer_question(0)
        self.engine.next_question()
        self.engine.answer_question(0)
        self.assertEqual(self.engine.get_scores(), {"A": 4, "B": 4})

        self.assertTrue(self.engine.previous_question())
        self.assertEqual(self.engine.current_index, 0)
        self.assertEqual(self.engine.get_scores(), {"A": 3, "B": 1})
        self.assertIsNone(self.engine.answers[1])

        # The cleared slot reads as unanswered when revisited
        self.engine.next_question()
        self.assertFalse(self.engine.has_current_answer())

    def test_previous_question_without_answer_only_moves(self):
        self.engine.answer_question(0)
        self.engine.next_question()

        self.assertTrue(self.engine.previous_question())
        self.assertEqual(self.engine.get_scores(), {"A": 3, "B": 1})
        self.assertEqual(len(self.engine.answers), 1)

    def test_back_and_forth_never_leaks_scores(self):
        """Scores always equal the sum of the answers still held."""
        engine = TestFixtures.create_engine(TestFixtures.create_three_question_catalog())
        engine.answer_question(0)
        engine.next_question()
        engine.answer_question(1)
        engine.next_question()
        engine.answer_question(2)

        engine.previous_question()
        engine.previous_question()
        engine.next_question()
        engine.previous_question()

        expected = {"survivor": 0, "synthetic": 0, "hybrid": 0}
        for answer in engine.answers:
            if answer is not None:
                for character_id, points in answer.scores.items():
                    expected[character_id] += points

        self.assertEqual(engine.current_index, 0)
        self.assertEqual(engine.get_scores(), expected)
        self.assertEqual(expected, {"survivor": 3, "synthetic": 1, "hybrid": 2})

    def test_restart_resets_everything(self):
        self.engine.answer_question(0)
        self.engine.next_question()
        self.engine.answer_question(0)
        self.engine.next_question()

        self.engine.restart()

        self.assertEqual(self.engine.current_index, 0)
        self.assertEqual(self.engine.answers, [])
        self.assertFalse(self.engine.completed)
        self.assertEqual(self.engine.get_scores(), {"A": 0, "B": 0})
        self.assertEqual(self.engine.state, QuizState.NOT_STARTED)

    def test_get_current_question_out_of_range(self):
        self.engine._current_index = self.engine.question_count
        self.assertIsNone(self.engine.get_current_question())
        self.engine.answer_question(0)
        self.assertEqual(self.engine.get_scores(), {"A": 0, "B": 0})

    def test_get_progress(self):
        engine = TestFixtures.create_engine(TestFixtures.create_three_question_catalog())
        progress = engine.get_progress()
        self.assertEqual((progress.current, progress.total, progress.percentage), (1, 3, 33))
        self.assertFalse(progress.completed)

        engine.next_question()
        self.assertEqual(engine.get_progress().percentage, 67)

    def test_get_character_by_id(self):
        self.assertEqual(self.engine.get_character_by_id("B").name, "Beta")
        self.assertIsNone(self.engine.get_character_by_id("missing"))

    def test_get_scores_returns_copy(self):
        scores = self.engine.get_scores()
        scores["A"] = 100
        self.assertEqual(self.engine.get_score("A"), 0)
        self.assertEqual(self.engine.get_score("missing"), 0)


class TestQuizEngineResult(unittest.TestCase):
    """Test cases for result calculation."""

    def setUp(self):
        self.engine = TestFixtures.create_engine()

    def _complete(self, *choices):
        for choice in choices:
            self.engine.answer_question(choice)
            self.engine.next_question()

    def test_result_is_none_until_completed(self):
        self.assertIsNone(self.engine.calculate_result())
        self.engine.answer_question(0)
        self.engine.next_question()
        self.assertIsNone(self.engine.calculate_result())

    def test_tie_goes_to_first_character(self):
        """A and B tie at 4 points: A wins with round(4/6*100) = 67%."""
        self._complete(0, 0)

        result = self.engine.calculate_result()
        self.assertTrue(self.engine.completed)
        self.assertEqual(self.engine.get_scores(), {"A": 4, "B": 4})
        self.assertEqual(result.character.id, "A")
        self.assertEqual(result.compatibility_percentage, 67)
        self.assertEqual([e.character.id for e in result.all_scores], ["A", "B"])
        self.assertEqual([e.percentage for e in result.all_scores], [67, 67])

    def test_all_scores_sorted_descending(self):
        self._complete(1, 0)  # A = 0 + 1, B = 3 + 3

        result = self.engine.calculate_result()
        self.assertEqual(result.character.id, "B")
        self.assertEqual(result.compatibility_percentage, 100)
        self.assertEqual([(e.character.id, e.score) for e in result.all_scores], [("B", 6), ("A", 1)])
        self.assertEqual(result.all_scores[1].percentage, 17)

    def test_back_then_reanswer_counts_only_second_answer(self):
        """Answer Q1, move on, go back, answer Q1 differently: only the new answer counts."""
        self.engine.answer_question(0)
        self.engine.next_question()
        self.engine.previous_question()
        self.engine.answer_question(1)
        self.engine.next_question()
        self.engine.answer_question(0)
        self.engine.next_question()

        self.assertEqual(self.engine.get_scores(), {"A": 1, "B": 6})
        self.assertEqual(self.engine.calculate_result().character.id, "B")

    def test_stable_ordering_for_ties_below_winner(self):
        engine = TestFixtures.create_engine(TestFixtures.create_three_question_catalog())
        for choice in (0, 0, 0):
            engine.answer_question(choice)
            engine.next_question()

        result = engine.calculate_result()
        self.assertEqual(
            [(e.character.id, e.score) for e in result.all_scores],
            [("survivor", 9), ("hybrid", 6), ("synthetic", 3)]
        )
        self.assertEqual(result.compatibility_percentage, 100)

    def test_round_half_up(self):
        """Halves round up, unlike Python's round()."""
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(0.5), 1)
        self.assertEqual(round_half_up(66.666), 67)
        self.assertEqual(round_half_up(16.666), 17)
        self.assertEqual(round_half_up(12.4), 12)


class TestQuizEnginePersistence(unittest.TestCase):
    """Test cases for progress snapshots."""

    def setUp(self):
        self.store = MemoryStore()
        self.storage = StorageManager(self.store)
        self.engine = TestFixtures.create_engine(storage=self.storage)
        logging.disable(logging.CRITICAL)

    def tearDown(self):
        logging.disable(logging.NOTSET)

    def test_answer_saves_snapshot(self):
        self.engine.answer_question(0)

        snapshot = self.storage.load(PROGRESS_KEY)
        self.assertEqual(snapshot["currentQuestionIndex"], 0)
        self.assertEqual(snapshot["userAnswers"], [
            {"questionId": 1, "optionIndex": 0, "optionText": "A-leaning", "scores": {"A": 3, "B": 1}}
        ])
        self.assertEqual(snapshot["characterScores"], [{"id": "A", "score": 3}, {"id": "B", "score": 1}])
        self.assertIn("T", snapshot["timestamp"])
        self.assertIn("alienQuiz_progress", self.store.keys())

    def test_round_trip_into_fresh_engine(self):
        """A fresh engine restores index, answers and scores exactly."""
        engine = TestFixtures.create_engine(TestFixtures.create_three_question_catalog(), self.storage)
        engine.answer_question(0)
        engine.next_question()
        engine.answer_question(2)
        engine.next_question()
        engine.answer_question(1)
        engine.previous_question()
        engine.answer_question(1)

        fresh = TestFixtures.create_engine(TestFixtures.create_three_question_catalog(), self.storage)
        self.assertTrue(fresh.load_progress())

        self.assertEqual(fresh.current_index, engine.current_index)
        self.assertEqual(fresh.answers, engine.answers)
        self.assertEqual(fresh.get_scores(), engine.get_scores())
        self.assertFalse(fresh.completed)

    def test_load_without_progress(self):
        self.assertFalse(self.engine.load_progress())
        self.assertEqual(self.engine.current_index, 0)

    def test_load_ignores_unknown_ids_and_missing_scores(self):
        self.storage.save(PROGRESS_KEY, {
            "currentQuestionIndex": 1,
            "userAnswers": [{"questionId": 1, "optionIndex": 0, "optionText": "A-leaning",
                             "scores": {"A": 3, "B": 1}}],
            "characterScores": [{"id": "A", "score": 3}, {"id": "ghost", "score": 50}, "junk"],
        })

        self.assertTrue(self.engine.load_progress())
        self.assertEqual(self.engine.current_index, 1)
        self.assertEqual(self.engine.get_scores(), {"A": 3, "B": 0})

    def test_load_accepts_alternate_index_keys(self):
        for key in ("currentIndex", "currentIndexIndex"):
            self.storage.save(PROGRESS_KEY, {key: 1, "userAnswers": [], "characterScores": []})
            engine = TestFixtures.create_engine(storage=self.storage)
            self.assertTrue(engine.load_progress())
            self.assertEqual(engine.current_index, 1)

    def test_load_rejects_unusable_snapshots(self):
        """Snapshots without a usable index or answer list leave the engine untouched."""
        self.engine.answer_question(0)
        unusable = [
            {"userAnswers": []},
            {"currentQuestionIndex": "1", "userAnswers": []},
            {"currentQuestionIndex": 99, "userAnswers": []},
            {"currentQuestionIndex": -1, "userAnswers": []},
            {"currentQuestionIndex": 1, "userAnswers": "nope"},
            ["not", "a", "dict"],
        ]
        for snapshot in unusable:
            self.storage.save(PROGRESS_KEY, snapshot)
            self.assertFalse(self.engine.load_progress(), snapshot)
            self.assertEqual(self.engine.get_scores(), {"A": 3, "B": 1})
            self.assertTrue(self.engine.has_current_answer())

    def test_load_rejects_position_past_last_question(self):
        """An index equal to the question count has no question to resume on."""
        self.storage.save(PROGRESS_KEY, {
            "currentQuestionIndex": self.engine.question_count,
            "userAnswers": [],
            "characterScores": [{"id": "A", "score": 2}],
        })

        self.assertFalse(self.engine.load_progress())
        self.assertEqual(self.engine.current_index, 0)
        self.assertIsNotNone(self.engine.get_current_question())
        self.assertEqual(self.engine.get_progress().current, 1)

    def test_load_corrupt_json_is_absence(self):
        self.store.set_item("alienQuiz_progress", "{not json")
        self.assertFalse(self.engine.load_progress())

    def test_malformed_answer_entries_become_cleared_slots(self):
        self.storage.save(PROGRESS_KEY, {
            "currentQuestionIndex": 1,
            "userAnswers": [{"questionId": "one"}, None],
            "characterScores": [],
        })

        self.assertTrue(self.engine.load_progress())
        self.assertEqual(self.engine.answers, [None, None])
        self.assertFalse(self.engine.has_current_answer())

    def test_clear_progress(self):
        self.engine.answer_question(0)
        self.assertTrue(self.engine.clear_progress())
        self.assertIsNone(self.storage.load(PROGRESS_KEY))

    def test_storage_failure_does_not_break_quiz(self):
        """A full store reports failure but answering still works."""
        engine = TestFixtures.create_engine(storage=StorageManager(MemoryStore(quota_bytes=10)))
        engine.answer_question(0)

        self.assertEqual(engine.get_scores(), {"A": 3, "B": 1})
        self.assertFalse(engine.save_progress())

    def test_save_progress_reports_store_errors(self):
        with patch.object(self.store, 'set_item', side_effect=OSError("disk gone")):
            self.assertFalse(self.engine.save_progress())
        self.assertTrue(self.engine.save_progress())


class TestDefaultCatalogEngine(unittest.TestCase):
    """Sanity checks against the built-in catalog."""

    def test_default_engine_uses_builtin_catalog(self):
        engine = QuizEngine()
        self.assertEqual(engine.question_count, 10)
        self.assertEqual([c.id for c in engine.characters], ["survivor", "synthetic", "hybrid"])

    def test_all_first_options_pick_survivor(self):
        engine = QuizEngine()
        for _ in range(engine.question_count):
            engine.answer_question(0)
            engine.next_question()

        result = engine.calculate_result()
        self.assertEqual(result.character.id, "survivor")
        self.assertEqual(result.compatibility_percentage, 100)


if __name__ == '__main__':
    unittest.main()
