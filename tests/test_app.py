"""Tests for src/lore_stats/app.py."""
from __future__ import annotations

from lore_stats.app import LoreStatsApp, Runtime
from lore_stats.models.item import EquipmentSnapshot, Item, PlayerHealth
from lore_stats.models.item_stats import ItemStats
from lore_stats.models.player_stats import EquipmentSlot, PlayerStats
from lore_stats.models.stat import StatKind


def write(path, text: str):
    path.write_text(text, encoding="utf-8")
    return path


class TestRuntime:
    def test_default_runtime(self):
        runtime = LoreStatsApp().runtime
        assert isinstance(runtime, Runtime)
        assert runtime.settings.update_interval == 10
        assert runtime.weapons.is_weapon("DIAMOND_SWORD")
        assert runtime.aggregation.item_lore is runtime.item_lore
        assert runtime.item_lore.editor is runtime.editor

    def test_services_share_cache_and_metrics(self):
        lore_app = LoreStatsApp()
        runtime = lore_app.runtime
        assert runtime.aggregation.cache is lore_app.cache
        assert runtime.combat.cache is lore_app.cache
        assert runtime.combat.metrics is lore_app.metrics

    def test_config_drives_template(self, tmp_path):
        path = write(tmp_path / "config.toml", '[lore.separator]\nenabled = false\n\n[lore.format]\ndamage = "DMG {value}"\n')
        runtime = LoreStatsApp(config_path=path).runtime
        assert runtime.editor.generate(ItemStats.of(StatKind.ATTACK, 3)) == ["DMG 3"]


class TestReload:
    def test_reload_swaps_runtime(self, tmp_path):
        path = write(tmp_path / "config.toml", "[stats.dodge]\nmax = 80\n")
        lore_app = LoreStatsApp(config_path=path)
        old = lore_app.runtime

        write(path, "[stats.dodge]\nmax = 40\n")
        assert lore_app.reload()
        assert lore_app.runtime is not old
        assert lore_app.runtime.settings.max_stat(StatKind.DODGE) == 40
        assert old.settings.max_stat(StatKind.DODGE) == 80

    def test_reload_clears_cache(self):
        lore_app = LoreStatsApp()
        lore_app.cache.put(PlayerStats.empty("p1"))
        assert lore_app.reload()
        assert len(lore_app.cache) == 0

    def test_bad_file_keeps_previous(self, tmp_path, caplog):
        path = write(tmp_path / "config.toml", "[settings]\ndebug = true\n")
        lore_app = LoreStatsApp(config_path=path)
        old = lore_app.runtime
        lore_app.cache.put(PlayerStats.empty("p1"))

        write(path, "[settings\n")
        assert not lore_app.reload()
        assert lore_app.runtime is old
        assert "p1" in lore_app.cache
        assert "Reload failed" in caplog.text

    def test_reload_recomputes_online_players(self, tmp_path):
        path = write(tmp_path / "config.toml", "[stats.dodge]\nmax = 80\n")
        lore_app = LoreStatsApp(config_path=path)
        boots = Item(item_type="DIAMOND_BOOTS", lore=lore_app.runtime.editor.generate(ItemStats.of(StatKind.DODGE, 90)))
        online = [(EquipmentSnapshot(player_id="p1", items={EquipmentSlot.BOOTS: boots}), PlayerHealth())]
        lore_app.runtime.aggregation.recompute_and_publish(*online[0])
        assert lore_app.cache.get("p1").total.dodge == 80

        write(path, "[stats.dodge]\nmax = 40\n")
        assert lore_app.reload(lambda: online)
        assert lore_app.cache.get("p1").total.dodge == 40

    def test_reload_failure_for_one_player_continues(self, monkeypatch, caplog):
        lore_app = LoreStatsApp()
        online = [
            (EquipmentSnapshot(player_id="p1"), None),
            (EquipmentSnapshot(player_id="p2"), None),
        ]
        real_build = lore_app._build

        def build():
            runtime = real_build()
            real = runtime.aggregation.recompute_and_publish

            def flaky(snapshot, health=None):
                if snapshot.player_id == "p1":
                    raise RuntimeError("bad item")
                return real(snapshot, health)

            monkeypatch.setattr(runtime.aggregation, "recompute_and_publish", flaky)
            return runtime

        monkeypatch.setattr(lore_app, "_build", build)
        assert lore_app.reload(lambda: online)
        assert "p1" not in lore_app.cache
        assert "p2" in lore_app.cache
        assert "bad item" in caplog.text

    def test_unreadable_config_keeps_previous(self, tmp_path, caplog):
        path = write(tmp_path / "config.toml", "[stats.dodge]\nmax = 80\n")
        lore_app = LoreStatsApp(config_path=path)
        old = lore_app.runtime

        path.unlink()
        path.mkdir()
        assert not lore_app.reload()
        assert lore_app.runtime is old
        assert "Cannot read config file" in caplog.text

    def test_unreadable_messages_keep_previous(self, tmp_path):
        messages = write(tmp_path / "messages.toml", 'prefix = "&a> "\n')
        lore_app = LoreStatsApp(messages_path=messages)
        old = lore_app.runtime
        messages.unlink()
        messages.mkdir()
        assert not lore_app.reload()
        assert lore_app.runtime is old

    def test_bad_messages_keep_previous(self, tmp_path):
        messages = write(tmp_path / "messages.toml", 'prefix = "&a> "\n')
        lore_app = LoreStatsApp(messages_path=messages)
        old = lore_app.runtime
        write(messages, "prefix = \n")
        assert not lore_app.reload()
        assert lore_app.runtime is old

    def test_shutdown_clears_cache(self):
        lore_app = LoreStatsApp()
        lore_app.cache.put(PlayerStats.empty("p1"))
        lore_app.shutdown()
        assert len(lore_app.cache) == 0
