"""Candidate metrics and the fitness score used to pick the best arena."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

# flag_fairness value when a team flag could not be placed
MISSING_FLAG_PENALTY = 999


@dataclass
class CandidateMetrics:
    regions: int = 0
    collision_count: int = 0
    flag_fairness: int = MISSING_FLAG_PENALTY
    overall_fairness: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "regions": self.regions,
            "collisionCount": self.collision_count,
            "flagFairness": self.flag_fairness,
            "overallFairness": self.overall_fairness,
        }


def _decay(imbalance: float) -> float:
    return 1.0 if imbalance == 0 else 1.0 / (1.0 + imbalance)


def fitness_score(metrics: CandidateMetrics) -> float:
    """Sum of four [0, 1] components; higher is better.

    connectivity (exactly one region), collision points in range (1 or 2),
    team flag balance and neutral flag balance, each decaying as 1/(1+x).
    """
    connectivity = 1.0 if metrics.regions == 1 else 0.0
    collision = 1.0 if 1 <= metrics.collision_count <= 2 else 0.0
    return connectivity + collision + _decay(metrics.flag_fairness) + _decay(metrics.overall_fairness)


__all__ = ["MISSING_FLAG_PENALTY", "CandidateMetrics", "fitness_score"]
