import pytest

from lootr.models.loot_models import Item, LootNode


@pytest.fixture
def stuffed():
    """
    ROOT: Staff
      weapons: Bat, Uzi
      equipment: Gloves, Boots
        leather: Jacket, Pads
          Scraps: ArmBand, Patch
    """
    loot = LootNode(items=[Item.a("Staff")])
    loot.add_branch("weapons", LootNode(items=[Item.a("Bat"), Item.an("Uzi")]))
    loot.add_branch("equipment", LootNode(items=[Item.a("Gloves"), Item.a("Boots")]))
    loot.branch("equipment").add_branch(
        "leather", LootNode(items=[Item.a("Jacket"), Item.a("Pads")])
    )
    loot.branch("equipment/leather").add_branch(
        "Scraps", LootNode(items=[Item.an("ArmBand"), Item.a("Patch")])
    )
    return loot


@pytest.fixture
def gear():
    """ROOT with weapons (Staff, Uzi) and armor (Boots, Socks)."""
    loot = LootNode()
    loot.add_branch("weapons", LootNode(items=[Item.a("Staff"), Item.an("Uzi")]))
    loot.add_branch("armor", LootNode(items=[Item.a("Boots"), Item.a("Socks")]))
    return loot
