from divegm.domain.defs import DamageOverTimeDef, StatusEffectDef
from divegm.domain.entities import ActiveStatusEffect
from divegm.domain.status_effects import stack_status_effect, tick_status_effects


def _make_effect(
    effect_id: str = "bleed",
    *,
    duration: int = 3,
    max_stacks: int = 2,
    target: str = "HP",
    value: int = 1,
    trigger: str = "EndTurn",
) -> StatusEffectDef:
    return StatusEffectDef(
        id=effect_id,
        name=effect_id.title(),
        type="Debuff",
        duration=duration,
        max_stacks=max_stacks,
        damage_over_time=DamageOverTimeDef(target=target, value=value, trigger=trigger),
    )


def test_first_application_adds_single_stack() -> None:
    effects, outcome = stack_status_effect([], _make_effect())

    assert outcome == "applied"
    assert effects == [ActiveStatusEffect(effect_id="bleed", stacks=1, duration_left=3)]


def test_reapplying_below_max_stacks_increments_and_refreshes() -> None:
    effect = _make_effect(max_stacks=3)
    effects, _ = stack_status_effect([], effect)
    effects[0].duration_left = 1

    effects, outcome = stack_status_effect(effects, effect)
    assert outcome == "stacked"
    assert (effects[0].stacks, effects[0].duration_left) == (2, 3)

    effects[0].duration_left = 1
    effects, outcome = stack_status_effect(effects, effect)
    assert outcome == "stacked"
    assert (effects[0].stacks, effects[0].duration_left) == (3, 3)


def test_reapplying_at_max_stacks_only_refreshes_duration() -> None:
    effect = _make_effect(max_stacks=1)
    existing = [ActiveStatusEffect(effect_id="bleed", stacks=1, duration_left=1)]

    effects, outcome = stack_status_effect(existing, effect)

    assert outcome == "refreshed"
    assert (effects[0].stacks, effects[0].duration_left) == (1, 3)
    assert existing[0].duration_left == 1


def test_end_turn_damage_scales_with_stacks_then_expires() -> None:
    effect = _make_effect(duration=1, value=2)
    effects = [ActiveStatusEffect(effect_id="bleed", stacks=2, duration_left=1)]

    remaining, tick = tick_status_effects(effects, {"bleed": effect}.get)

    assert remaining == []
    assert tick.hp_delta == -4
    assert tick.expired == ["bleed"]


def test_start_turn_damage_skips_expired_effects() -> None:
    effect = _make_effect(duration=1, trigger="StartTurn")
    expiring = [ActiveStatusEffect(effect_id="bleed", stacks=1, duration_left=1)]
    lasting = [ActiveStatusEffect(effect_id="bleed", stacks=1, duration_left=2)]

    _, expired_tick = tick_status_effects(expiring, {"bleed": effect}.get)
    remaining, lasting_tick = tick_status_effects(lasting, {"bleed": effect}.get)

    assert expired_tick.hp_delta == 0
    assert lasting_tick.hp_delta == -1
    assert remaining[0].duration_left == 1


def test_infinite_effects_never_count_down() -> None:
    effect = _make_effect("rot", duration=-1, target="Erosion", value=4)
    effects = [ActiveStatusEffect(effect_id="rot", stacks=3, duration_left=-1)]

    remaining, tick = tick_status_effects(effects, {"rot": effect}.get)

    assert remaining == effects
    assert tick.erosion_delta == 12
    assert not tick.expired


def test_unknown_effects_are_left_in_place() -> None:
    effects = [ActiveStatusEffect(effect_id="ghost", stacks=1, duration_left=1)]

    remaining, tick = tick_status_effects(effects, lambda effect_id: None)

    assert remaining == effects
    assert not tick.had_effect
