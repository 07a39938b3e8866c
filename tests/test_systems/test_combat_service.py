"""Tests for src/lore_stats/systems/combat.py."""
from __future__ import annotations

import random

import pytest

from lore_stats.config.messages import Messages
from lore_stats.models.combat import CombatResult, DamageOutcome
from lore_stats.models.item import PlayerHealth
from lore_stats.models.item_stats import ItemStats
from lore_stats.models.player_stats import EquipmentSlot, PlayerStats
from lore_stats.models.stat import StatKind
from lore_stats.systems.combat import CombatService


@pytest.fixture
def combat(cache, settings, metrics) -> CombatService:
    return CombatService(cache, settings, Messages(), random.Random(7), metrics)


def equip(cache, player_id: str, **values: float) -> PlayerStats:
    stats = PlayerStats(player_id, {
        EquipmentSlot.MAIN_HAND: ItemStats.from_mapping({StatKind(k): v for k, v in values.items()}),
    })
    cache.put(stats)
    return stats


def result(outcome: DamageOutcome) -> CombatResult:
    return CombatResult(outcome, PlayerStats.empty("att"), PlayerStats.empty("vic"))


class Inbox:
    def __init__(self):
        self.sent: list[tuple[str, str]] = []

    def __call__(self, player_id: str, text: str) -> None:
        self.sent.append((player_id, text))


class TestCalculate:
    def test_uses_cached_totals(self, combat, cache, metrics):
        equip(cache, "att", damage=100)
        res = combat.calculate("att", "vic", 10)
        assert res.final_damage == 60
        assert res.attacker.player_id == "att"
        assert res.victim.total.is_empty()
        assert metrics.count("combat_calc") == 1

    def test_unknown_players_use_base_damage(self, combat):
        assert combat.calculate("x", "y", 7).final_damage == 7

    def test_critical(self, combat, cache):
        equip(cache, "att", damage=100, critchance=100, critdamage=100)
        res = combat.calculate("att", "vic", 10)
        assert res.critical
        assert res.final_damage == 110

    def test_dodge(self, combat, cache):
        equip(cache, "att", damage=100)
        equip(cache, "vic", dodge=100)
        assert combat.calculate("att", "vic", 10).dodged


class TestApplyResult:
    def test_dodge_notifies_both(self, combat):
        inbox = Inbox()
        healed = combat.apply_result(result(DamageOutcome.dodge()), PlayerHealth(), inbox)
        assert healed == 0
        assert [pid for pid, _ in inbox.sent] == ["vic", "att"]

    def test_critical_message(self, combat):
        inbox = Inbox()
        combat.apply_result(result(DamageOutcome(final_damage=110, critical=True, critical_bonus=50)), None, inbox)
        assert inbox.sent == [("att", "§e치명타! §f+50")]

    def test_lifesteal_heals_attacker(self, combat):
        inbox = Inbox()
        health = PlayerHealth(max_health=20, health=10)
        healed = combat.apply_result(result(DamageOutcome(final_damage=60, lifesteal=6)), health, inbox)
        assert healed == 6
        assert health.health == 16
        assert inbox.sent == [("att", "§4피흡수 §f+6")]

    def test_lifesteal_capped_at_max(self, combat):
        health = PlayerHealth(max_health=20, health=18)
        healed = combat.apply_result(result(DamageOutcome(final_damage=60, lifesteal=6)), health)
        assert healed == 2
        assert health.health == 20

    def test_full_health_no_message(self, combat):
        inbox = Inbox()
        health = PlayerHealth(max_health=20, health=20)
        assert combat.apply_result(result(DamageOutcome(final_damage=60, lifesteal=6)), health, inbox) == 0
        assert inbox.sent == []

    def test_plain_hit_is_silent(self, combat):
        inbox = Inbox()
        combat.apply_result(result(DamageOutcome(final_damage=5)), PlayerHealth(), inbox)
        assert inbox.sent == []
