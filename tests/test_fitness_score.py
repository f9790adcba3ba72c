import pytest

from levelforge.generation.fitness import MISSING_FLAG_PENALTY, CandidateMetrics, fitness_score


def _m(**kw):
    base = dict(regions=1, collision_count=1, flag_fairness=0, overall_fairness=0)
    base.update(kw)
    return CandidateMetrics(**base)


def test_perfect_candidate_scores_four():
    assert fitness_score(_m()) == pytest.approx(4.0)


def test_flag_fairness_decay_is_monotonic():
    scores = [fitness_score(_m(flag_fairness=f)) for f in range(0, 12)]
    assert scores == sorted(scores, reverse=True)
    assert fitness_score(_m(flag_fairness=1)) == pytest.approx(3.5)
    assert fitness_score(_m(flag_fairness=3)) == pytest.approx(3.25)


def test_connectivity_and_collision_components():
    assert fitness_score(_m(regions=2)) == pytest.approx(3.0)
    assert fitness_score(_m(collision_count=0)) == pytest.approx(3.0)
    assert fitness_score(_m(collision_count=2)) == pytest.approx(4.0)
    assert fitness_score(_m(collision_count=3)) == pytest.approx(3.0)


def test_missing_flag_penalty():
    score = fitness_score(_m(flag_fairness=MISSING_FLAG_PENALTY))
    assert score == pytest.approx(3.0 + 1.0 / (1 + MISSING_FLAG_PENALTY))


def test_metrics_wire_names():
    assert _m(overall_fairness=2).to_dict() == {
        "regions": 1,
        "collisionCount": 1,
        "flagFairness": 0,
        "overallFairness": 2,
    }
