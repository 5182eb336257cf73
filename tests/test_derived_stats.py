from divegm.domain.derived_stats import compute_derived_stats, effective_stats
from divegm.domain.entities import ActiveStatusEffect, Equipment, Stats
from tests.helpers.builders import make_armor, make_character, make_core, make_item


def test_ac_core_modifiers_are_added_to_base_stats() -> None:
    core = make_core(modifiers=Stats(PHY=1, SYN=2))
    character = make_character(stats=Stats(PHY=3, AGI=2, MND=1, SYN=4), equipment=Equipment(ac_core=core))

    stats = effective_stats(character)

    assert (stats.PHY, stats.AGI, stats.MND, stats.SYN) == (4, 2, 1, 6)


def test_status_effect_modifiers_do_not_change_effective_stats() -> None:
    character = make_character(stats=Stats(PHY=3, AGI=3, MND=3, SYN=3))
    character.active_status_effects.append(ActiveStatusEffect(effect_id="focused", stacks=1, duration_left=2))

    assert effective_stats(character) == Stats(PHY=3, AGI=3, MND=3, SYN=3)


def test_armor_provides_av_and_sr() -> None:
    character = make_character(equipment=Equipment(armor=make_armor(defense=3, shielding=40)))

    derived = compute_derived_stats(character)

    assert derived.av == 3
    assert derived.sr == 40


def test_no_armor_means_zero_av_and_sr() -> None:
    derived = compute_derived_stats(make_character())

    assert derived.av == 0
    assert derived.sr == 0


def test_load_excludes_equipped_items_and_flags_overload() -> None:
    character = make_character(
        stats=Stats(PHY=1, AGI=2, MND=0, SYN=0),
        inventory=[make_item("a", weight=4), make_item("b", weight=4)],
        equipment=Equipment(armor=make_armor(defense=1)),
    )

    derived = compute_derived_stats(character)

    assert derived.max_load == 7
    assert derived.current_load == 8
    assert derived.is_overloaded
    assert derived.agility_penalty == -1


def test_load_at_capacity_is_not_overloaded() -> None:
    character = make_character(stats=Stats(PHY=1), inventory=[make_item("a", weight=7)])

    derived = compute_derived_stats(character)

    assert not derived.is_overloaded
    assert derived.agility_penalty == 0
    assert not derived.can_carry(1)
