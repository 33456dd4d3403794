"""Training data and trainable scorer models."""

from pydantic import BaseModel, Field

from thinklink.domain.task import Priority, TaskType


class ExpectedOutput(BaseModel, frozen=True):
    """Supervisory labels for one training sample."""

    priority: Priority
    category: str
    type: TaskType


class TrainingSample(BaseModel, frozen=True):
    """Input text paired with its expected classification."""

    input: str
    expected_output: ExpectedOutput


class ScorerPrediction(BaseModel):
    """Sigmoid-squashed scores of the trainable scorer, each in (0, 1)."""

    priority: float
    category: float
    type: float


class TrainingStats(BaseModel):
    """Priority agreement of the scorer against the fixed training set."""

    samples_count: int = Field(..., description="Number of training samples")
    average_accuracy: float = Field(..., description="Fraction of samples whose priority bucket matches")


class WeightSnapshot(BaseModel):
    """Serialized form of the three token weight maps, as ordered pairs."""

    priority: list[tuple[str, float]]
    category: list[tuple[str, float]]
    type: list[tuple[str, float]]
