from itertools import product

from divegm.core.types import ATTRIBUTES
from divegm.domain.attributes import advantage_multiplier, beats


def test_no_attribute_beats_itself() -> None:
    for attribute in ATTRIBUTES:
        assert not beats(attribute, attribute)
        assert advantage_multiplier(attribute, attribute) == 1.0


def test_relation_between_distinct_attributes_is_exclusive() -> None:
    for first, second in product(ATTRIBUTES, repeat=2):
        if first == second:
            continue
        outcomes = [beats(first, second), beats(second, first)]
        assert outcomes.count(True) <= 1


def test_cycle_order() -> None:
    assert beats("Sever", "Stable")
    assert beats("Stable", "Flux")
    assert beats("Flux", "Precision")
    assert beats("Precision", "Sever")


def test_multipliers() -> None:
    assert advantage_multiplier("Sever", "Stable") == 1.5
    assert advantage_multiplier("Stable", "Sever") == 0.5
    assert advantage_multiplier("Sever", "Flux") == 1.0
    assert advantage_multiplier("Stable", "Precision") == 1.0
