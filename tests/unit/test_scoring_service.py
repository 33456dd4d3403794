"""Unit tests for the trainable scorer."""

import random
from unittest.mock import Mock

import pytest

from thinklink.core.config import Settings
from thinklink.core.errors import StorageError
from thinklink.core.kv_store import InMemoryStore
from thinklink.core.lexicon import vocabulary
from thinklink.core.tokenizer import tokenize
from thinklink.data.training_samples import TRAINING_SAMPLES
from thinklink.domain.task import Priority, TaskType
from thinklink.domain.training import ExpectedOutput, WeightSnapshot
from thinklink.services.scoring_service import (
    TrainableScorer,
    bucket_priority,
    category_target,
    sigmoid,
)


def untrained_scorer(seed: int = 3, **config_overrides) -> TrainableScorer:
    """Scorer with random weights and no samples, so construction is instant."""
    config = Settings(weights_store_path=None, redis_url=None, **config_overrides)
    return TrainableScorer(InMemoryStore(), samples=(), rng=random.Random(seed), config=config)


@pytest.mark.unit
class TestHelpers:
    """Tests for module-level encoding helpers."""

    def test_sigmoid(self):
        """Test sigmoid midpoint and saturation without overflow."""
        assert sigmoid(0) == 0.5
        assert sigmoid(1000) == pytest.approx(1.0)
        assert sigmoid(-1000) == pytest.approx(0.0)
        assert sigmoid(2) == pytest.approx(1 - sigmoid(-2))

    def test_category_target(self):
        """Test ordinal category encoding, with unknown labels at -1."""
        assert category_target("work") == 0.0
        assert category_target("note") == pytest.approx(14 / 15)
        assert category_target("social") == pytest.approx(-1 / 15)

    @pytest.mark.parametrize(
        ("score", "expected"),
        [
            (0.95, Priority.HIGH),
            (0.71, Priority.HIGH),
            (0.7, Priority.MEDIUM),
            (0.41, Priority.MEDIUM),
            (0.4, Priority.LOW),
            (0.05, Priority.LOW),
        ],
    )
    def test_bucket_priority(self, score, expected):
        """Test strict thresholds at 0.7 and 0.4."""
        assert bucket_priority(score) == expected


@pytest.mark.unit
class TestWeights:
    """Tests for weight initialization and prediction."""

    def test_weights_cover_vocabulary_in_range(self):
        """Test every lexicon stem gets a weight in [-1, 1) in all maps."""
        snapshot = untrained_scorer().snapshot()
        for pairs in (snapshot.priority, snapshot.category, snapshot.type):
            assert [token for token, _ in pairs] == list(vocabulary())
            assert all(-1 <= weight < 1 for _, weight in pairs)

    def test_same_seed_same_weights(self):
        """Test initialization is reproducible from the seed."""
        assert untrained_scorer(seed=11).snapshot() == untrained_scorer(seed=11).snapshot()
        assert untrained_scorer(seed=11).snapshot() != untrained_scorer(seed=12).snapshot()

    def test_unknown_tokens_contribute_zero(self):
        """Test unseen tokens leave every sum at zero."""
        prediction = untrained_scorer().predict(["zzz", "qqq"])
        assert prediction.priority == 0.5
        assert prediction.category == 0.5
        assert prediction.type == 0.5

    def test_predict_is_pure(self, trained_scorer):
        """Test repeated predictions do not change weights."""
        tokens = tokenize("urgent client meeting tomorrow")
        before = trained_scorer.snapshot()
        assert trained_scorer.predict(tokens) == trained_scorer.predict(tokens)
        assert trained_scorer.snapshot() == before

    def test_outputs_in_open_unit_interval(self, trained_scorer):
        """Test trained predictions stay inside (0, 1)."""
        for text in ["urgent", "whenever someday", "buy milk", "", "important work meeting today"]:
            prediction = trained_scorer.predict_text(text)
            for value in (prediction.priority, prediction.category, prediction.type):
                assert 0 < value < 1


@pytest.mark.unit
class TestTrain:
    """Tests for single-sample online updates."""

    def test_moves_priority_toward_high(self):
        """Test a high label raises the priority score."""
        scorer = untrained_scorer()
        before = scorer.predict(["urgent"]).priority
        scorer.train("urgent", ExpectedOutput(priority=Priority.HIGH, category="work", type=TaskType.TASK))
        assert scorer.predict(["urgent"]).priority > before

    def test_moves_priority_toward_low(self):
        """Test a low label lowers the priority score."""
        scorer = untrained_scorer()
        before = scorer.predict(["later"]).priority
        scorer.train("later", ExpectedOutput(priority=Priority.LOW, category="work", type=TaskType.TASK))
        assert scorer.predict(["later"]).priority < before

    def test_update_size_counts_repeated_tokens(self):
        """Test each token occurrence applies learning_rate * error."""
        scorer = untrained_scorer(learning_rate=0.05)
        weight = dict(scorer.snapshot().priority)["urgent"]
        predicted = sigmoid(2 * weight)

        scorer.train("urgent urgent", ExpectedOutput(priority=Priority.HIGH, category="work", type=TaskType.TASK))

        expected = weight + 2 * 0.05 * (1.0 - predicted)
        assert dict(scorer.snapshot().priority)["urgent"] == pytest.approx(expected)

    def test_unknown_tokens_are_not_added(self):
        """Test training never creates new weight entries."""
        scorer = untrained_scorer()
        scorer.train("zebra urgent", ExpectedOutput(priority=Priority.HIGH, category="work", type=TaskType.TASK))
        assert "zebra" not in dict(scorer.snapshot().priority)

    def test_phrase_has_its_own_weight(self):
        """Test a multi-word entry is one feature and its parts carry no weight."""
        scorer = untrained_scorer()
        weights = dict(scorer.snapshot().priority)

        assert "not" not in weights
        assert scorer.predict(["not"]).priority == 0.5
        assert scorer.predict(tokenize("not urgent")).priority == pytest.approx(sigmoid(weights["not urgent"]))

    def test_phrase_training_leaves_parts_alone(self):
        """Test training on a phrase moves the phrase weight, not the single word inside it."""
        scorer = untrained_scorer()
        before = dict(scorer.snapshot().priority)

        scorer.train("not urgent", ExpectedOutput(priority=Priority.LOW, category="work", type=TaskType.TASK))

        after = dict(scorer.snapshot().priority)
        assert after["urgent"] == before["urgent"]
        assert after["not urgent"] < before["not urgent"]

    def test_train_is_deterministic(self):
        """Test identical weights and sample give identical results."""
        first, second = untrained_scorer(seed=5), untrained_scorer(seed=5)
        expected = ExpectedOutput(priority=Priority.MEDIUM, category="health", type=TaskType.EVENT)
        first.train("regular health checkup next week", expected)
        second.train("regular health checkup next week", expected)
        assert first.snapshot() == second.snapshot()


@pytest.mark.unit
class TestFit:
    """Tests for the training regime."""

    def test_runs_to_cap_between_checks(self, fast_settings):
        """Test no early stop happens before the first accuracy check."""
        scorer = TrainableScorer(InMemoryStore(), rng=random.Random(1), config=fast_settings)
        assert scorer.fit(epochs=5) == 5

    def test_stops_at_first_check_when_target_reached(self):
        """Test training stops at the check interval once accuracy suffices."""
        config = Settings(weights_store_path=None, redis_url=None, target_accuracy=0.0, max_training_epochs=300)
        scorer = TrainableScorer(InMemoryStore(), rng=random.Random(1), config=config)
        assert scorer.fit() == 10

    def test_training_stats(self, trained_scorer):
        """Test stats report the sample count and a bounded accuracy."""
        stats = trained_scorer.get_training_stats()
        assert stats.samples_count == len(TRAINING_SAMPLES)
        assert 0.0 <= stats.average_accuracy <= 1.0

    def test_no_samples_has_zero_accuracy(self):
        """Test an empty sample set reports zero accuracy."""
        stats = untrained_scorer().get_training_stats()
        assert stats.samples_count == 0
        assert stats.average_accuracy == 0.0


@pytest.mark.unit
class TestPersistence:
    """Tests for weight save/load behavior."""

    def test_construction_trains_and_saves(self, fast_settings):
        """Test an empty store gets a valid weight blob."""
        store = InMemoryStore()
        TrainableScorer(store, rng=random.Random(1), config=fast_settings)
        snapshot = WeightSnapshot.model_validate_json(store.get(fast_settings.weights_storage_key))
        assert len(snapshot.priority) == len(vocabulary())

    def test_round_trip_reproduces_predictions(self, fast_settings):
        """Test reloaded weights predict exactly like the saved ones."""
        store = InMemoryStore()
        original = TrainableScorer(store, rng=random.Random(1), config=fast_settings)
        reloaded = TrainableScorer(store, rng=random.Random(999), config=fast_settings)

        assert reloaded.snapshot() == original.snapshot()
        for text in ["urgent client meeting", "buy groceries whenever", "finish the finance report"]:
            assert reloaded.predict_text(text) == original.predict_text(text)

    def test_load_skips_training(self, fast_settings):
        """Test a stored blob is used without retraining."""
        store = InMemoryStore()
        TrainableScorer(store, rng=random.Random(1), config=fast_settings)
        blob = store.get(fast_settings.weights_storage_key)
        store.set = Mock(wraps=store.set)

        TrainableScorer(store, rng=random.Random(2), config=fast_settings)

        store.set.assert_not_called()
        assert store.get(fast_settings.weights_storage_key) == blob

    @pytest.mark.parametrize("blob", ["not json", '{"priority": 5}', "[]"])
    def test_corrupt_blob_falls_back_to_training(self, fast_settings, blob):
        """Test unreadable weights are replaced by freshly trained ones."""
        store = InMemoryStore()
        store.set(fast_settings.weights_storage_key, blob)

        scorer = TrainableScorer(store, rng=random.Random(1), config=fast_settings)

        saved = WeightSnapshot.model_validate_json(store.get(fast_settings.weights_storage_key))
        assert saved == scorer.snapshot()

    def test_storage_failures_are_not_fatal(self, fast_settings):
        """Test a failing store degrades to training in memory."""
        store = Mock()
        store.get.side_effect = StorageError("store down")
        store.set.side_effect = StorageError("store down")

        scorer = TrainableScorer(store, rng=random.Random(1), config=fast_settings)

        store.set.assert_called_once()
        assert 0 < scorer.predict_text("urgent").priority < 1

    def test_retrain_resets_and_saves(self, fast_settings):
        """Test retrain reinitializes weights and persists the result."""
        store = InMemoryStore()
        scorer = TrainableScorer(store, rng=random.Random(1), config=fast_settings)
        before = scorer.snapshot()

        assert scorer.retrain(epochs=1) == 1

        assert scorer.snapshot() != before
        saved = WeightSnapshot.model_validate_json(store.get(fast_settings.weights_storage_key))
        assert saved == scorer.snapshot()
