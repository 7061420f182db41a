from delve.core.rng import Rng
from delve.items.generation import ItemGenerator
from delve.items.models import ItemKind, Rarity
from delve.world.entities import CharacterClass


def test_rarity_weights_shift_with_power():
    gen = ItemGenerator()
    assert gen.rarity_weights(1) == [80, 42, 18, 6, 2]
    assert gen.rarity_weights(5) == [80, 54, 34, 18, 10]


def test_roll_rarity_walks_cumulative_weights(stub_rng):
    gen = ItemGenerator()
    assert gen.roll_rarity(1, stub_rng([0])).rarity is Rarity.COMMON
    assert gen.roll_rarity(1, stub_rng([79])).rarity is Rarity.COMMON
    assert gen.roll_rarity(1, stub_rng([80])).rarity is Rarity.UNCOMMON
    assert gen.roll_rarity(1, stub_rng([146])).rarity is Rarity.LEGENDARY
    assert gen.roll_rarity(1, stub_rng([147])).rarity is Rarity.LEGENDARY


def test_plain_common_weapon(stub_rng):
    # rarity common, Blade, no prefix, no suffix, variance 1
    rng = stub_rng([0, 0, 99, 99, 1])
    item = ItemGenerator().generate_weapon_loot("w", 4, rng)

    assert item.kind is ItemKind.WEAPON
    assert item.name == "Blade"
    assert item.attack_bonus == 2 + 2 + 1
    assert item.crit_chance == 0 and item.lifesteal == 0
    assert item.value == 16 + 5 * 9
    assert item.rarity is Rarity.COMMON
    assert rng.exhausted


def test_uncommon_armor_with_affixes(stub_rng):
    # rarity uncommon, Carapace, prefix Stoneplate, suffix "of Sparks", variance 1
    rng = stub_rng([80, 4, 0, 2, 0, 3, 1])
    item = ItemGenerator().generate_armor_loot("a", 1, rng)

    assert item.kind is ItemKind.ARMOR
    assert item.name == "Fine Stoneplate Carapace of Sparks"
    assert item.defense_bonus == 3 + 1 + 1 + 1 + 2
    assert item.dodge_chance == 2
    assert item.thorns == 2 + 1
    # (14 + 8 * 8) * 1.25 = 97.5 rounds half up
    assert item.value == 98
    assert item.rarity is Rarity.UNCOMMON


def test_generated_gear_is_deterministic_and_valid():
    gen = ItemGenerator()
    for power in range(1, 8):
        a = gen.generate_weapon_loot(f"w{power}", power, Rng(power))
        b = gen.generate_weapon_loot(f"w{power}", power, Rng(power))
        assert a == b
        assert a.attack_bonus >= 1 and a.value >= 1

        armor = gen.generate_armor_loot(f"a{power}", power, Rng(power * 31))
        assert armor.defense_bonus >= 1 and armor.value >= 1
        assert armor.rarity is not None


def test_boss_relic_weapon(stub_rng):
    rng = stub_rng([0, 0, 99, 99, 1])
    relic = ItemGenerator().generate_boss_relic("r", ItemKind.WEAPON, 5, "Crypt Lord", rng)

    assert relic.name == "Relic Blade of Crypt Lord"
    assert relic.rarity is Rarity.LEGENDARY
    assert relic.attack_bonus == 5 + 3
    # 61 * 2.4 = 146.4
    assert relic.value == 146


def test_boss_relic_armor(stub_rng):
    rng = stub_rng([0, 0, 99, 99, 0])
    relic = ItemGenerator().generate_boss_relic("r", ItemKind.ARMOR, 5, "Ruin Warden", rng)

    assert relic.name == "Aegis of Ruin Warden"
    assert relic.kind is ItemKind.ARMOR
    assert relic.defense_bonus == 2 + 2
    assert relic.value == 72


def test_class_upgrade_weapon(stub_rng):
    item = ItemGenerator().generate_class_upgrade(CharacterClass.WARRIOR, ItemKind.WEAPON, "u", 2, stub_rng([0]))

    assert (item.name, item.attack_bonus, item.value) == ("Tempered Longsword +2", 5, 68)
    assert item.rarity is Rarity.COMMON


def test_class_upgrade_armor(stub_rng):
    item = ItemGenerator().generate_class_upgrade(CharacterClass.WARRIOR, ItemKind.ARMOR, "u", 2, stub_rng([0]))

    assert (item.name, item.defense_bonus, item.value) == ("Reinforced Plate +1", 3, 62)


def test_class_upgrade_carries_rarity(stub_rng):
    item = ItemGenerator().generate_class_upgrade(CharacterClass.MAGE, ItemKind.WEAPON, "u", 1, stub_rng([80]))

    assert item.name == "Fine Runed Staff +2"
    # (30 + 18) * 1.25
    assert (item.attack_bonus, item.value) == (5, 60)
    assert (item.crit_chance, item.lifesteal) == (2, 1)
