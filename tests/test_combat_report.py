from divegm.domain.attack_resolution import resolve_attack
from divegm.domain.combat_report import format_attack_report
from divegm.domain.entities import Equipment
from tests.helpers.builders import ScriptedRNG, make_armor, make_character, make_core, make_enemy


def test_report_lists_rolls_damage_and_result() -> None:
    attacker = make_character(equipment=Equipment(ac_core=make_core("Sever")))
    defender = make_enemy(attribute="Stable")
    resolution = resolve_attack(attacker, defender, ScriptedRNG([6, 7, 8, 9, 1, 2, 3, 4, 5, 1]))

    report = format_attack_report(resolution)

    assert "[6, 7, 8, 9, 1, 2, 3, 4, 5, 1]" in report
    assert "4 successes" in report
    assert "Result: 13 HP damage" in report
    assert "Erosion" not in report


def test_report_marks_critical_and_broken_armor() -> None:
    attacker = make_character(equipment=Equipment(ac_core=make_core("Sever")))
    defender = make_enemy(attribute="Stable", av=1)
    resolution = resolve_attack(attacker, defender, ScriptedRNG([10, 10, 1, 1, 1, 1, 1, 1, 1, 1]))

    report = format_attack_report(resolution)

    assert "CRITICAL" in report
    assert "BROKEN" in report


def test_report_includes_erosion_for_character_defenders() -> None:
    defender = make_character(erosion=60, equipment=Equipment(armor=make_armor(shielding=50)))
    resolution = resolve_attack(make_enemy(radiation=10), defender, ScriptedRNG([1, 1, 1]))

    report = format_attack_report(resolution)

    assert "= 10 erosion" in report
