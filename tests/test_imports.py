def test_import_divegm_package() -> None:
    import importlib

    module = importlib.import_module("divegm")
    assert module.__version__


def test_import_rng_no_side_effects() -> None:
    from divegm.core.rng import RNG

    rng = RNG(42)
    value = rng.randint(0, 1)
    assert value in (0, 1)


def test_services_expose_public_api() -> None:
    import divegm.services as services

    for name in ("CampaignService", "CombatService", "ExplorationService", "InventoryService", "SaveService"):
        assert hasattr(services, name)
