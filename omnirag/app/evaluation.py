from __future__ import annotations

"""Evaluation dashboard figures."""

from dataclasses import dataclass
from typing import Literal

Trend = Literal["up", "down", "stable"]


@dataclass(frozen=True)
class EvaluationMetric:
    name: str
    value: float
    trend: Trend
    description: str


INITIAL_METRICS: tuple[EvaluationMetric, ...] = (
    EvaluationMetric(
        name="Faithfulness",
        value=0.92,
        trend="up",
        description="Accuracy of response against retrieved context.",
    ),
    EvaluationMetric(
        name="Answer Relevancy",
        value=0.88,
        trend="up",
        description="Relevance of the answer to the user query.",
    ),
    EvaluationMetric(
        name="Context Precision",
        value=0.76,
        trend="stable",
        description="Relevance of retrieved documents.",
    ),
    EvaluationMetric(
        name="User Satisfaction",
        value=4.5,
        trend="up",
        description="Average user feedback score (out of 5).",
    ),
)
