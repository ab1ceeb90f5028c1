"""
Tests for KB parsing, multi-file loading and corpus construction.
Run with: python -m pytest tests/test_knowledge.py -v
"""

import json

from blox_coach.corpus import build_corpus
from blox_coach.knowledge import KnowledgeBase, load_kb, load_kb_file, parse_kb


def _write(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


# ─────────────────────────────────────────────────────────────
# parse_kb
# ─────────────────────────────────────────────────────────────

class TestParseKb:

    def test_non_dict_is_empty(self):
        assert parse_kb(["nope"]).is_empty()
        assert parse_kb(None).is_empty()

    def test_missing_keys_default(self):
        kb = parse_kb({"combos": [{"title": "Solo"}]})
        assert kb.combos[0].inputs == []
        assert kb.combos[0].notes == []
        assert kb.counters == []
        assert kb.guides == {}

    def test_malformed_entries_coerced(self):
        kb = parse_kb({
            "combos": [{"title": 5, "inputs": "Z"}, "junk"],
            "counters": "nope",
            "builds": [{"notes": ["a", None, {"x": 1}, "b"]}],
        })
        assert len(kb.combos) == 1
        assert kb.combos[0].title == "5"
        assert kb.combos[0].inputs == ["Z"]
        assert kb.counters == []
        assert kb.builds[0].notes == ["a", "b"]

    def test_guides_lowercased_and_joined(self):
        kb = parse_kb({"guides": {"Theory": ["line one", "line two"], "empty": ""}})
        assert kb.theory == "line one\nline two"
        assert "empty" not in kb.guides

    def test_about_and_fundamentals(self):
        kb = parse_kb({"about": "hi", "fundamentals": ["a", "b"]})
        assert kb.about == "hi"
        assert kb.fundamentals == "a\nb"
        assert not kb.is_empty()


# ─────────────────────────────────────────────────────────────
# load_kb
# ─────────────────────────────────────────────────────────────

class TestLoadKb:

    def test_single_file(self, tmp_path, kb_data):
        kb = load_kb_file(_write(tmp_path / "kb.json", kb_data))
        assert len(kb.combos) == 2

    def test_merge_concatenates_lists(self, tmp_path):
        a = _write(tmp_path / "combos.json", {"combos": [{"title": "A"}]})
        b = _write(tmp_path / "more.json", {"combos": [{"title": "B"}], "counters": [{"enemy": "Ice"}]})
        kb = load_kb([a, b])
        assert [c.title for c in kb.combos] == ["A", "B"]
        assert kb.counters[0].enemy == "Ice"

    def test_merge_guides_later_wins(self, tmp_path):
        a = _write(tmp_path / "core.json", {"guides": {"theory": "old", "ken": "k"}})
        b = _write(tmp_path / "guides.json", {"guides": {"theory": "new"}})
        kb = load_kb([a, b])
        assert kb.guides == {"theory": "new", "ken": "k"}

    def test_lenient_skips_missing(self, tmp_path):
        a = _write(tmp_path / "core.json", {"combos": [{"title": "A"}]})
        kb = load_kb([a, str(tmp_path / "missing.json")])
        assert len(kb.combos) == 1

    def test_lenient_skips_broken_json(self, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text("{not json", encoding="utf-8")
        a = _write(tmp_path / "core.json", {"combos": [{"title": "A"}]})
        kb = load_kb([str(bad), a])
        assert len(kb.combos) == 1

    def test_strict_discards_all(self, tmp_path):
        a = _write(tmp_path / "core.json", {"combos": [{"title": "A"}]})
        kb = load_kb([a, str(tmp_path / "missing.json")], strict=True)
        assert kb.is_empty()

    def test_no_paths(self):
        assert load_kb([]).is_empty()
        assert load_kb(None).is_empty()


# ─────────────────────────────────────────────────────────────
# build_corpus
# ─────────────────────────────────────────────────────────────

class TestBuildCorpus:

    def test_empty_kb(self):
        assert build_corpus(KnowledgeBase()) == []

    def test_tags(self, kb):
        tags = [b.tag for b in build_corpus(kb)]
        assert tags.count("combo") == 2
        assert "counter" in tags
        assert "build" in tags
        assert "theory" in tags
        assert "guide" in tags

    def test_combo_body(self, kb):
        block = build_corpus(kb)[0]
        assert block.title == "Ice Godhuman"
        assert block.body == "Ice V → Ice C → GH Z | ground route"

    def test_keys_are_normalized(self, kb):
        for block in build_corpus(kb):
            assert block.key == block.key.lower()
            assert "  " not in block.key
            assert "→" not in block.key

    def test_tag_is_searchable(self, kb):
        build = [b for b in build_corpus(kb) if b.tag == "build"][0]
        assert build.key.startswith("build ")

    def test_counter_without_enemy(self):
        blocks = build_corpus(parse_kb({"counters": [{"tips": ["x"]}]}))
        assert blocks[0].title == "vs ?"

    def test_counter_use_listed(self, kb):
        counter = [b for b in build_corpus(kb) if b.tag == "counter"][0]
        assert counter.title == "vs Leopard"
        assert "Use: Cyborg V4" in counter.body

    def test_races_playstyles_fruits(self):
        kb = parse_kb({
            "races": [{"name": "Cyborg V4", "v4": "Aftershock"}],
            "playstyles": [{"name": "Passive", "summary": "bait"}],
            "fruits": [{"name": "Portal", "moves": ["Z"]}],
        })
        assert [b.tag for b in build_corpus(kb)] == ["race", "playstyle", "fruit"]
