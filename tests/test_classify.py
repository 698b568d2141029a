from aure.recs.classify import classify
from aure.recs.config import ScoringConfig


def test_bands():
    assert classify(0) == "suggested"
    assert classify(39.99) == "suggested"
    assert classify(40) == "good-match"
    assert classify(59.9) == "good-match"
    assert classify(60) == "strong-match"
    assert classify(79.99) == "strong-match"
    assert classify(80) == "perfect-match"
    assert classify(140) == "perfect-match"


def test_monotonic():
    order = ["suggested", "good-match", "strong-match", "perfect-match"]
    last = 0
    for tenth in range(0, 1500):
        rank = order.index(classify(tenth / 10))
        assert rank >= last
        last = rank


def test_custom_thresholds():
    strict = ScoringConfig(perfect_match=90.0)
    assert classify(85) == "perfect-match"
    assert classify(85, strict) == "strong-match"
