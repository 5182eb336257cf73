from divegm.domain.defs import NodeDef
from divegm.domain.entities import Equipment, Stats
from divegm.services.exploration_service import (
    DEFAULT_NODE_TYPE_WEIGHTS,
    ExplorationService,
    pick_node_type,
    pick_weighted_node,
)
from tests.helpers.builders import ScriptedRNG, make_campaign, make_character, make_core


def _make_node(node_id: str, weight: int) -> NodeDef:
    return NodeDef(id=node_id, type="Combat", description=node_id, weight=weight)


def test_pick_node_type_walks_cumulative_weights() -> None:
    weights = DEFAULT_NODE_TYPE_WEIGHTS["Shallows"]

    assert pick_node_type(weights, 0.0) == "Combat"
    assert pick_node_type(weights, 0.29) == "Combat"
    assert pick_node_type(weights, 0.31) == "Resource"
    assert pick_node_type(weights, 0.75) == "Event"
    assert pick_node_type(weights, 0.95) == "Safe"


def test_pick_node_type_normalizes_weights() -> None:
    assert pick_node_type({"Combat": 2, "Safe": 2}, 0.6) == "Safe"


def test_deep_sky_never_rolls_safe() -> None:
    weights = DEFAULT_NODE_TYPE_WEIGHTS["DeepSky"]

    assert pick_node_type(weights, 0.999) == "Event"


def test_pick_weighted_node() -> None:
    nodes = [_make_node("a", 10), _make_node("b", 30)]

    assert pick_weighted_node(nodes, 0.1).id == "a"
    assert pick_weighted_node(nodes, 0.5).id == "b"
    assert pick_weighted_node([], 0.5) is None


def test_generate_node_uses_registry_pools() -> None:
    campaign = make_campaign()
    campaign.set_node_weights("Shallows", {"Combat": 1.0})
    service = ExplorationService(campaign)

    node = service.generate_node()

    assert node.type == "Combat"
    assert node.node_def_id == "tunnel"
    assert node.description == "A collapsed tunnel."
    assert [enemy.enemy_id for enemy in node.enemies] == ["rat"]
    assert [item.template_id for item in node.loot] == ["scrap"]
    assert node.loot[0].id != "scrap"
    assert campaign.state.total_nodes_visited == 1
    assert campaign.state.logs[0].content == "Explored a new node: Combat - Shallows"


def test_generate_node_falls_back_without_registry_match() -> None:
    campaign = make_campaign()
    campaign.set_current_layer("RedForest")
    campaign.set_node_weights("RedForest", {"Safe": 1.0})

    node = ExplorationService(campaign).generate_node()

    assert node.type == "Safe"
    assert node.node_def_id is None
    assert node.description == "A Safe node in the RedForest. (Radiation level: medium)"
    assert node.enemies == [] and node.loot == []


def test_attribute_check_rolls_effective_stat() -> None:
    campaign = make_campaign(rng=ScriptedRNG([10, 10, 6, 1, 2, 3, 4]))
    character = make_character(
        stats=Stats(PHY=1, AGI=1, MND=1, SYN=5),
        equipment=Equipment(ac_core=make_core(modifiers=Stats(SYN=2))),
    )
    campaign.add_character(character)

    result = ExplorationService(campaign).attribute_check(character.id, "AC")

    assert result.roll.size == 7
    assert result.successes == 3
    assert result.is_critical
    assert campaign.state.logs[0].content.endswith("3 successes (critical!)")


def test_attribute_check_unknown_character() -> None:
    assert ExplorationService(make_campaign()).attribute_check("ghost", "PHY") is None
