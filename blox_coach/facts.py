# facts.py
"""Canned coaching content: per-entity facts, short/long snippets, prompts."""

from __future__ import annotations

from typing import Dict, Optional, Tuple

ELABORATE_HINT_COUNTER = "  (say **elaborate** for the full plan)"
ELABORATE_HINT_USAGE = "  (say **elaborate** to dive deeper)"
ELABORATE_HINT_KENTRICK = "  (say **elaborate** for advanced timing)"
ELABORATE_HINT_PLAYSTYLE = "  (say **elaborate** for drills & switches)"
ELABORATE_HINT_KB = "\nSay **elaborate** for more."


# ---------------------------------------------------------------------------
# Per-entity tables
# ---------------------------------------------------------------------------

COUNTERS: Dict[str, str] = {
    "buddha": "🙏 Vs Buddha — stay out of M1 range; poke from distance; use vertical movement; punish Z endlag; don’t chase.",
    "dough": "🍩 Vs Dough — fight airborne; many routes are ground-based. Cyborg V4 Aftershock can break strings; punish C/V endlag.",
    "ice": "❄️ Vs Ice — avoid ground trades; stay in air; punish missed V/Z with a fast starter (Trident X / GH Z).",
    "portal": "🌀 Vs Portal — don’t chase teleports; hold your starter for Rift recovery; punish missed V trap.",
    "kitsune": "🦊 Vs Kitsune — deny rushdowns with spacing; punish after X/air dashes; keep a quick stun ready.",
    "sand": "🏜️ Vs Sand — sidestep C/V lines; punish after V endlag; don’t stand still in sand trails.",
    "dragon": "🐲 Vs Dragon — respect C wind-up; pre-position diagonally; punish after C or X whiff.",
    "gas": "☁️ Vs Gas — avoid standing in gas zones; poke from range; punish when they re-enter.",
    "bomb": "💣 Vs Bomb — don’t sit in primed zones; bait C, punish the recovery.",
    "gravity": "🪐 Vs Gravity — don’t wait for meteor impact; dash pre-landing and punish Z endlag.",
    "blizzard": "🌨️ Vs Blizzard — don’t tank the AoE; play edges and punish recovery.",
    "venom": "☠️ Vs Venom — don’t overstay in clouds; reset and punish post-form cooldown.",
    "dark": "🌑 Vs Dark — don’t get grabbed; keep lateral movement; punish missed pull.",
    "quake": "🌊 Vs Quake — play above wave lines; punish quake gaps.",
    "rumble": "⚡ Vs Rumble — avoid long stuns by spacing; punish after big AoE.",
}

# Races, styles and weapons asked about as "vs X".
COUNTERS_META: Dict[str, str] = {
    "cyborg v4": "🤖 Vs Cyborg V4 — don’t commit during Aftershock; disengage during overheat; punish right after the effect ends or when they whiff a re-engage.",
    "angel v4": "😇 Vs Angel V4 — deny their sustain by burst-punishing after heals; force cooldowns then go in.",
    "draco v4": "🐉 Vs Draco V4 — respect roar/debuff; stay mobile; punish after roar window.",
    "ghoul v4": "🧛 Vs Ghoul V4 — don’t feed lifesteal; kite and burst in short windows.",
    "rabbit v4": "🐇 Vs Rabbit V4 — don’t try to race speed; bait the dash then punish recovery.",
    "godhuman": "👐 Vs Godhuman — don’t eat the Z opener; sidestep → punish; watch X armor frames.",
    "sanguine art": "🩸 Vs Sanguine — avoid vertical juggles; punish after aerial strings.",
    "cursed dual katana": "🗡️ Vs CDK — don’t get clipped by fast slashes; keep spacing; punish endlag after Z/X chains.",
    "spikey trident": "🪝 Vs Spikey Trident — don’t stand in pull line; jump/strafe; punish whiffed X.",
    "shark anchor": "⚓ Vs Shark Anchor — avoid close AoE; punish after Z/X when they commit.",
}

USAGE: Dict[str, str] = {
    "portal": "Portal usage — mobility > chase. Use Z to set up Anchor/Sanguine, V for traps, and rifts to appear behind for clean starters.",
    "dough": "Dough usage — set ground strings with V/C/X, but protect your endlag; mix in air movement to avoid predictable routes.",
    "ice": "Ice usage — use V as the safe trap, convert to Z; avoid ground mirror trades; keep vertical control.",
    "buddha": "Buddha usage — it’s beginner friendly for M1 pressure, but higher-level PvP will out-range you; learn to bait & punish.",
    "kitsune": "Kitsune usage — leverage speed to overwhelm; keep a reliable starter ready and avoid over-committing.",
    "cyborg v4": "Cyborg V4 usage — Aftershock to break pressure; don’t waste it; pair with a fast stun and capitalize during windows.",
}

BUILDS: Dict[str, str] = {
    "fruit main": "Fruit Main: Max Fruit + Melee + Defense. Styles: Godhuman or Sanguine. Swords: Trident/Anchor for starters. Accessories: mobility/dodges.",
    "sword main": "Sword Main: Max Sword + Melee + Defense. Fruit for stun (Portal/Ice/Rumble). CDK/Anchor/Trident core.",
    "gun main": "Gun Main: Needs reliable stuns (Dark/Ice/Rumble). Weapons: Acidum Rifle/Kabucha/Serpent Bow. Play at range, punish on stun.",
}
DEFAULT_BUILD = "fruit main"

CYBORG_FREE_TIP = (
    "Cyborg V4 tips — Save **Aftershock** to break pressure mid-string. Don’t waste it neutral. "
    "Pair with a fast starter (Trident X / GH Z) and punish right as their endlag opens. "
    "If they mirror Cyborg, disengage during their effect and re-engage after it ends."
)

# Entities with a tailored free-form tip: canonical -> (text, topic)
FREE_TIPS: Dict[str, Tuple[str, str]] = {
    "cyborg v4": (CYBORG_FREE_TIP, "usage"),
}


def counter_fact(entity: Optional[str]) -> Optional[str]:
    if not entity:
        return None
    return COUNTERS.get(entity) or COUNTERS_META.get(entity)


# ---------------------------------------------------------------------------
# Topic snippets
# ---------------------------------------------------------------------------

KENTRICK_SHORT = "\n".join([
    "⚡ Ken Tricking:",
    "1) Instinct OFF.",
    "2) Toggle ON as multi-hit/stun starts.",
    "3) Toggle OFF instantly to save dodges.",
    "4) Punish endlag (e.g., GH Z → C → X).",
])

KENTRICK_LONG = "\n".join([
    "⚡ Ken Tricking — Advanced",
    "• Time toggles vs Dough V / Dragon C / Ice V / Rumble AoE.",
    "• Single heavy hit: toggle ON right before contact; if late, reset.",
    "• Punish: dash-cancel in → Trident X or GH Z → C → X.",
    "• Anti-Ken: Cyborg V4 Aftershock breaks loops; bait toggles.",
    "• Drills: 10 rounds survive Dough V/C; 10 vs Ice V→punish Z.",
])

PLAYSTYLE_SHORT = "\n".join([
    "🔥 Passive vs Aggressive:",
    "• Aggressive: rushdown, break Ken, punish endlag fast.",
    "• Passive: bait, hold spacing, counter on whiff.",
])

PLAYSTYLE_LONG = "\n".join([
    "🧩 Passive vs Aggressive — Deep Dive",
    "• Aggressive starters: Trident X / GH Z / Anchor Z.",
    "• Passive tools: range pokes, air-camping vs ground fruits.",
    "• Switch tempo after a big whiff; that wins high-bounty rounds.",
    "• Drills: 10 aggro-only, 10 passive-only; review 1 mistake/round.",
])

PORTAL_COMBO = "Portal Z → Shark Anchor Z → Sanguine Z → C → X"
PORTAL_COMBO_REPLY = (
    f"🌀 Portal combo: {PORTAL_COMBO}\n"
    "Tip: keep camera level after Anchor Z. Say **elaborate** for more routes."
)

GENERIC_COMBOS = "\n".join([
    "⚔️ Try these:",
    "• Sand C → Sand V → Anchor Z → Anchor X → Sanguine Z → C → X",
    "• Ice V → (unawakened) Ice C → Ice Z → GH X → GH Z → GH C",
    "Say your fruit for tailored routes or say **elaborate**.",
])

PORTAL_COMBOS_LONG = "\n".join([
    "🌀 Portal — Extended Routes",
    "• Z → Anchor Z → Sanguine Z → C → X (mobile-friendly core).",
    "• Z → Anchor Z → Anchor X → GH Z → GH C (ground punish alt).",
    "• Use rifts to appear behind; don’t chase. Keep camera level after Anchor Z.",
    "Drill: 20 reps hitting Sanguine after Anchor without drops.",
])

COMBOS_LONG = "\n".join([
    "⚔️ Combo Pack — Extended",
    "• Sand C → Sand V → Anchor Z → Anchor X → Sanguine Z → C → X",
    "• Ice V → (unawakened) Ice C → Ice Z → GH X → GH Z → GH C",
    "• DT X → Dough V → Dough X → Dough C → EClaw C → EClaw X",
    "Notes: respect endlag; don’t over-extend if finisher is down.",
])

COUNTER_DEEP_NOTES = "\n".join([
    "Deep notes:",
    "• Track cooldowns & dodges.",
    "• Punish after whiffs, not mid-armor.",
    "• Control verticality against ground-focused kits.",
])

COUNTERS_LONG = "\n".join([
    "🛡️ Counter Plan — General",
    "• Learn their starter and its range; stay just outside it.",
    "• Bait the big move, then punish the endlag with your fastest stun.",
    "• Fight in the air against ground-heavy kits; on the ground against air campers.",
    "• Keep Instinct for Ken Tricking the string, not for neutral.",
    "Name the fruit/race/style (e.g., “counter dough”) for a tailored plan.",
])

USAGE_DEEP_NOTES = "\n".join([
    "Deep notes:",
    "• Open with your safest starter; save the big move for confirmed stuns.",
    "• Mix air and ground routes so they can’t pre-Ken.",
    "• Drill one route until it never drops before adding a second.",
])

USAGE_LONG = "\n".join([
    "🎮 Using a Kit — General",
    "• Find the one move that stuns reliably and build every route off it.",
    "• Know your endlag: never finish a string where they can punish you.",
    "• Pair the kit with a fast sword/style starter for openers.",
    "Tell me the fruit/race (e.g., “how to use portal”) for specifics.",
])

BUILDS_LONG = "\n\n".join([
    "🏗️ Builds — Full Breakdown",
    BUILDS["fruit main"],
    BUILDS["sword main"],
    BUILDS["gun main"],
    "Rule of thumb: max your main damage stat, then Melee for style access, then Defense.",
])

ASK_ELABORATE_TOPIC = (
    "Elaborate on what? Ask for **counters**, **combos**, **Ken Tricking**, "
    "**builds**, or **playstyle** first and I’ll go deep."
)

ASK_COUNTER_TARGET = "Who you fighting? (fruit/race/style/weapon)"
ASK_USAGE_TARGET = "Tell me what you want to use (fruit/race/style/weapon) and I’ll coach it."


def mention_prompt(entity: str) -> str:
    return (
        f"You mentioned **{entity}** — want **counters**, **combos**, or **how to use** it? "
        f"Say “counter {entity}”, “{entity} combo”, or “how to use {entity}”."
    )


# ---------------------------------------------------------------------------
# Randomised variants
# ---------------------------------------------------------------------------

GREETINGS: Tuple[str, ...] = (
    "Yo! What do you wanna grind: combos, counters, Ken Tricking, or builds?",
    "Hey! Say your fruit or who you’re fighting and I’ll tailor it.",
    "Wsp! Want counter tips, combo routes, or playstyle drills?",
)

FREE_PROMPTS: Tuple[str, ...] = (
    "Bet — ask me to **counter** someone, drop a **combo** request, or say **Ken Tricking** for defense tech.",
    "Say your **fruit** or your **opponent** and I’ll tailor a plan.",
    "We can cook a build, routes, or matchup plan — your call.",
)

KB_ONLY_REFUSAL = "I don’t have notes on that yet. Ask about counters, combos, builds, or Ken Tricking."
GENERATION_FAILED = "Sorry — the coach model hit an error. Try again in a bit."
GENERATION_TIMED_OUT = "Sorry — the coach model timed out. Try again or ask a shorter question."
EMPTY_INPUT = "Say something — a fruit, an opponent, or a topic like combos or builds."
