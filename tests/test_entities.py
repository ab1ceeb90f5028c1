"""
Tests for the alias lexicon and entity detection.
Run with: python -m pytest tests/test_entities.py -v
"""

import pytest

from blox_coach.entities import detect_entities, first_entity_in
from blox_coach.lexicon import ALIAS_INDEX, LEXICON, AliasEntry, build_alias_index


# ─────────────────────────────────────────────────────────────
# lexicon
# ─────────────────────────────────────────────────────────────

class TestLexicon:

    def test_every_alias_has_one_canonical(self):
        aliases = [a for a, _ in ALIAS_INDEX]
        assert len(aliases) == len(set(aliases))

    def test_aliases_are_lowercase(self):
        for entry in LEXICON:
            for alias in entry.aliases:
                assert alias == alias.lower()

    def test_conflicting_alias_rejected(self):
        entries = [
            AliasEntry("ice", "fruit", ("ice",)),
            AliasEntry("blizzard", "fruit", ("ice", "blizzard")),
        ]
        with pytest.raises(ValueError):
            build_alias_index(entries)


# ─────────────────────────────────────────────────────────────
# detect_entities
# ─────────────────────────────────────────────────────────────

class TestDetectEntities:

    def test_single_fruit(self):
        assert detect_entities("counter dough") == ["dough"]

    def test_alias_maps_to_canonical(self):
        assert detect_entities("how do i beat gh") == ["godhuman"]

    def test_case_insensitive(self):
        assert detect_entities("COUNTER DOUGH") == ["dough"]

    def test_punctuation_is_a_boundary(self):
        assert detect_entities("counter dough?") == ["dough"]

    def test_embedded_alias_does_not_match(self):
        assert detect_entities("i was sanding my desk") == []

    def test_no_partial_prefix_match(self):
        assert detect_entities("icebergs everywhere") == []

    def test_duplicate_aliases_collapse(self):
        assert detect_entities("dough doh doe") == ["dough"]

    def test_lexicon_order_not_input_order(self):
        # "ice" is declared before "dough"
        assert detect_entities("dough into ice") == ["ice", "dough"]

    def test_longer_alias_wins_over_contained_alias(self):
        assert detect_entities("dragon trident combo") == ["dragon trident"]

    def test_venom_bow_is_not_venom(self):
        assert detect_entities("venom bow venom bow") == ["venom bow"]

    def test_multiword_race_alias(self):
        assert detect_entities("vs cyborg v4") == ["cyborg v4"]

    def test_hyphenated_alias(self):
        assert detect_entities("e-claw route") == ["electric claw"]

    def test_empty_text(self):
        assert detect_entities("") == []

    def test_first_entity_in(self):
        assert first_entity_in("portal and sand") == "portal"
        assert first_entity_in("nothing here") is None
