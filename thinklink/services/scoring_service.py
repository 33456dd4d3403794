"""Trainable per-token scorer for priority, category and type.

Three feature -> weight maps are kept, one per output. A forward pass sums the
weights of the input features (unknown ones contribute zero) and squashes each
sum with a sigmoid. A feature is a stemmed token, or a whole multi-word entry
such as "not urgent". Training nudges the weight of every known input feature
toward an encoded target with a fixed learning rate.

Weights are persisted as a single JSON blob in a key-value store. A missing or
corrupt blob is never an error: the scorer reinitializes and retrains.
"""

import logging
import math
import random
from collections.abc import Iterable, Sequence

from pydantic import ValidationError

from thinklink.core.config import Constants, Settings, settings
from thinklink.core.errors import StorageError
from thinklink.core.kv_store import KeyValueStore
from thinklink.core.lexicon import CATEGORIES, lexical_features, vocabulary
from thinklink.core.logging import log_with_context, span
from thinklink.core.tokenizer import tokenize
from thinklink.data.training_samples import TRAINING_SAMPLES
from thinklink.domain.task import Priority, TaskType
from thinklink.domain.training import (
    ExpectedOutput,
    ScorerPrediction,
    TrainingSample,
    TrainingStats,
    WeightSnapshot,
)


logger = logging.getLogger(__name__)

PRIORITY_TARGETS: dict[Priority, float] = {
    Priority.HIGH: 1.0,
    Priority.MEDIUM: 0.5,
    Priority.LOW: 0.0,
}

TYPE_TARGETS: dict[TaskType, float] = {
    TaskType.TASK: 1.0,
    TaskType.EVENT: 0.5,
    TaskType.NOTE: 0.0,
}


def sigmoid(x: float) -> float:
    """Logistic function, numerically safe for large magnitudes."""
    if x >= 0:
        return 1.0 / (1.0 + math.exp(-x))
    z = math.exp(x)
    return z / (1.0 + z)


def category_target(category: str) -> float:
    """Encode a category as its lexicon index over the category count.

    Labels outside the lexicon encode as -1 / count.
    """
    index = CATEGORIES.index(category) if category in CATEGORIES else -1
    return index / len(CATEGORIES)


def bucket_priority(score: float) -> Priority:
    """Map a sigmoid priority score to a priority level."""
    if score > Constants.NEURAL_HIGH_THRESHOLD:
        return Priority.HIGH
    if score > Constants.NEURAL_MEDIUM_THRESHOLD:
        return Priority.MEDIUM
    return Priority.LOW


class TrainableScorer:
    """Token-weight model owned by the command interpreter.

    On construction the scorer tries to load persisted weights; when none are
    usable it initializes random weights, trains on the sample set and saves.
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        samples: Iterable[TrainingSample] = TRAINING_SAMPLES,
        rng: random.Random | None = None,
        config: Settings = settings,
    ) -> None:
        """Initialize the scorer.

        Args:
            store: Durable key-value store for the weight blob
            samples: Fixed supervisory sample set
            rng: Random source for weight initialization
            config: Training hyperparameters and the storage key
        """
        self._store = store
        self._samples = tuple(samples)
        self._rng = rng or random.Random(config.random_seed)
        self._config = config
        self._weights: dict[str, dict[str, float]] = {"priority": {}, "category": {}, "type": {}}

        if self.load():
            logger.info("Loaded persisted weights from %s", config.weights_storage_key)
        else:
            self.retrain()

    @property
    def samples(self) -> tuple[TrainingSample, ...]:
        return self._samples

    def initialize_weights(self) -> None:
        """Reset every map to uniform random weights in [-1, 1) over the lexicon vocabulary."""
        for weights in self._weights.values():
            weights.clear()
        for feature in vocabulary():
            for weights in self._weights.values():
                weights[feature] = self._rng.random() * 2 - 1

    def predict(self, tokens: Sequence[str]) -> ScorerPrediction:
        """Score stemmed tokens. Pure with respect to the current weights."""
        return self._forward(lexical_features(tokens))

    def _forward(self, features: Sequence[str]) -> ScorerPrediction:
        sums = {
            name: sum(weights.get(feature, 0.0) for feature in features) for name, weights in self._weights.items()
        }
        return ScorerPrediction(
            priority=sigmoid(sums["priority"]),
            category=sigmoid(sums["category"]),
            type=sigmoid(sums["type"]),
        )

    def predict_text(self, text: str) -> ScorerPrediction:
        return self.predict(tokenize(text))

    def neural_priority(self, tokens: Sequence[str]) -> Priority:
        """Bucket the predicted priority score into a priority level."""
        return bucket_priority(self.predict(tokens).priority)

    def train(self, text: str, expected: ExpectedOutput) -> None:
        """Run one online update for a single labeled input.

        Every occurrence of a known feature moves that feature's weight by
        ``learning_rate * (target - predicted)``, using the prediction made
        before the update.

        Args:
            text: Raw input text
            expected: Expected labels for the input
        """
        self._update(tokenize(text), expected)

    def _update(self, tokens: Sequence[str], expected: ExpectedOutput) -> None:
        features = lexical_features(tokens)
        prediction = self._forward(features)
        errors = {
            "priority": PRIORITY_TARGETS[expected.priority] - prediction.priority,
            "category": category_target(expected.category) - prediction.category,
            "type": TYPE_TARGETS[expected.type] - prediction.type,
        }
        rate = self._config.learning_rate
        for feature in features:
            for name, weights in self._weights.items():
                if feature in weights:
                    weights[feature] += rate * errors[name]

    def accuracy(self) -> float:
        """Fraction of samples whose bucketed priority matches the label."""
        if not self._samples:
            return 0.0
        hits = sum(
            1
            for sample in self._samples
            if self.neural_priority(tokenize(sample.input)) == sample.expected_output.priority
        )
        return hits / len(self._samples)

    def fit(self, epochs: int | None = None) -> int:
        """Train over the full sample set until the accuracy target or the epoch cap.

        Accuracy is checked every ``accuracy_check_interval`` epochs.

        Args:
            epochs: Epoch cap (defaults to ``max_training_epochs``)

        Returns:
            Number of epochs actually run
        """
        with span("scoring_service.fit"):
            cap = epochs if epochs is not None else self._config.max_training_epochs
            interval = self._config.accuracy_check_interval
            tokenized = [(tokenize(sample.input), sample.expected_output) for sample in self._samples]
            accuracy = 0.0
            completed = 0
            for epoch in range(1, cap + 1):
                for tokens, expected in tokenized:
                    self._update(tokens, expected)
                completed = epoch
                if epoch % interval == 0:
                    accuracy = self.accuracy()
                    if accuracy >= self._config.target_accuracy:
                        break

            log_with_context(
                logger,
                "info",
                "Scorer training finished",
                epochs=completed,
                accuracy=accuracy,
                samples=len(self._samples),
            )
            return completed

    def retrain(self, epochs: int | None = None) -> int:
        """Reinitialize weights, train from scratch and persist the result.

        Returns:
            Number of epochs run
        """
        with span("scoring_service.retrain"):
            self.initialize_weights()
            completed = self.fit(epochs)
            self.save()
            return completed

    def get_training_stats(self) -> TrainingStats:
        return TrainingStats(samples_count=len(self._samples), average_accuracy=self.accuracy())

    def snapshot(self) -> WeightSnapshot:
        """Copy the weight maps into their serializable form."""
        return WeightSnapshot(
            priority=list(self._weights["priority"].items()),
            category=list(self._weights["category"].items()),
            type=list(self._weights["type"].items()),
        )

    def save(self) -> None:
        """Persist the weights. Storage failures are logged, not raised."""
        key = self._config.weights_storage_key
        try:
            self._store.set(key, self.snapshot().model_dump_json())
        except StorageError as e:
            logger.warning("Failed to persist scorer weights under %s: %s", key, e)
            return
        logger.debug("Persisted scorer weights under %s", key)

    def load(self) -> bool:
        """Replace the weights with the persisted blob.

        Returns:
            True if usable weights were loaded, False on a miss, a storage
            failure or a corrupt blob
        """
        key = self._config.weights_storage_key
        try:
            raw = self._store.get(key)
        except StorageError as e:
            logger.warning("Weight store unavailable, training from scratch: %s", e)
            return False

        if raw is None:
            logger.info("No persisted weights under %s", key)
            return False

        try:
            snapshot = WeightSnapshot.model_validate_json(raw)
        except ValidationError as e:
            logger.warning("Corrupt weight blob under %s, training from scratch: %s", key, e)
            return False

        self._weights = {
            "priority": dict(snapshot.priority),
            "category": dict(snapshot.category),
            "type": dict(snapshot.type),
        }
        return True
