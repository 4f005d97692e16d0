"""
Static English -> Hebrew tables for PokeAPI identifiers.

Based on official Israeli Pokemon terminology (pocketmonsters.co.il and the
Hebrew anime dub). Built at import time and never mutated.
"""

from __future__ import annotations

from typing import Iterable, Mapping

TYPE_HE: Mapping[str, str] = {
    "normal": "נורמלי",
    "fire": "אש",
    "water": "מים",
    "grass": "עשב",
    "electric": "חשמל",
    "ice": "קרח",
    "fighting": "לוחם",
    "poison": "רעל",
    "ground": "אדמה",
    "flying": "מעופף",
    "psychic": "על-חושי",
    "bug": "חרק",
    "rock": "סלע",
    "ghost": "רפאים",
    "dragon": "דרקון",
    "dark": "אופל",
    "steel": "מתכת",
    "fairy": "פיה",
    "stellar": "כוכבי",
    "unknown": "לא ידוע",
}

STAT_HE: Mapping[str, str] = {
    "hp": "נקודות חיים",
    "attack": "התקפה",
    "defense": "הגנה",
    "special-attack": "התקפה מיוחדת",
    "special-defense": "הגנה מיוחדת",
    "speed": "מהירות",
}

COLOR_HE: Mapping[str, str] = {
    "black": "שחור",
    "blue": "כחול",
    "brown": "חום",
    "gray": "אפור",
    "green": "ירוק",
    "pink": "ורוד",
    "purple": "סגול",
    "red": "אדום",
    "white": "לבן",
    "yellow": "צהוב",
}

SHAPE_HE: Mapping[str, str] = {
    "ball": "כדור",
    "squiggle": "פיתול",
    "fish": "דג",
    "arms": "זרועות",
    "blob": "אמורפי",
    "upright": "זקוף",
    "legs": "רגליים",
    "quadruped": "ארבע רגליים",
    "wings": "כנפיים",
    "tentacles": "זרועונים",
    "heads": "ראשים",
    "humanoid": "דמוי אדם",
    "bug-wings": "כנפי חרק",
    "armor": "שריון",
}

HABITAT_HE: Mapping[str, str] = {
    "cave": "מערה",
    "forest": "יער",
    "grassland": "מרעה",
    "mountain": "הר",
    "rare": "נדיר",
    "rough-terrain": "שטח סלעי",
    "sea": "ים",
    "urban": "עירוני",
    "waters-edge": "חוף מים",
}

GROWTH_RATE_HE: Mapping[str, str] = {
    "slow": "איטי",
    "medium": "בינוני",
    "fast": "מהיר",
    "medium-slow": "בינוני-איטי",
    "slow-then-very-fast": "איטי ואז מהיר מאוד",
    "fast-then-very-slow": "מהיר ואז איטי מאוד",
}

GENERATION_HE: Mapping[str, str] = {
    "generation-i": "דור ראשון",
    "generation-ii": "דור שני",
    "generation-iii": "דור שלישי",
    "generation-iv": "דור רביעי",
    "generation-v": "דור חמישי",
    "generation-vi": "דור שישי",
    "generation-vii": "דור שביעי",
    "generation-viii": "דור שמיני",
    "generation-ix": "דור תשיעי",
}

REGION_HE: Mapping[str, str] = {
    "kanto": "קאנטו",
    "johto": "ג'וטו",
    "hoenn": "הואן",
    "sinnoh": "סינו",
    "unova": "יונובה",
    "kalos": "קאלוס",
    "alola": "אלולה",
    "galar": "גאלאר",
    "paldea": "פלדאה",
}

ABILITY_HE: Mapping[str, str] = {
    "overgrow": "צמיחת יתר",
    "blaze": "להבה",
    "torrent": "זרם",
    "shield-dust": "אבקת מגן",
    "run-away": "בריחה",
    "shed-skin": "החלפת עור",
    "compound-eyes": "עיניים מורכבות",
    "swarm": "נחיל",
    "keen-eye": "עין חדה",
    "tangled-feet": "רגליים סבוכות",
    "big-pecks": "חזה גדול",
    "guts": "אומץ",
    "hustle": "מרץ",
    "sniper": "צלף",
    "intimidate": "הפחדה",
    "static": "חשמל סטטי",
    "lightning-rod": "מוליך ברקים",
    "sand-veil": "מסך חול",
    "sand-rush": "דהירת חול",
    "poison-point": "קוץ רעל",
    "rivalry": "יריבות",
    "sheer-force": "כוח גס",
    "cute-charm": "קסם חמוד",
    "magic-guard": "מגן קסם",
    "friend-guard": "מגן ידיד",
    "unaware": "חוסר מודעות",
    "flash-fire": "הצתה",
    "drought": "בצורת",
    "chlorophyll": "כלורופיל",
    "effect-spore": "נבג אפקט",
    "dry-skin": "עור יבש",
    "damp": "לחות",
    "swift-swim": "שחייה מהירה",
    "rain-dish": "מנת גשם",
    "water-absorb": "ספיגת מים",
    "sand-stream": "סופת חול",
    "snow-warning": "אזהרת שלג",
    "levitate": "ריחוף",
    "synchronize": "סנכרון",
    "inner-focus": "ריכוז פנימי",
    "early-bird": "ציפור מוקדמת",
    "flame-body": "גוף להבה",
    "sturdy": "עמיד",
    "rock-head": "ראש סלע",
    "pressure": "לחץ",
    "natural-cure": "ריפוי טבעי",
    "serene-grace": "חסד שליו",
    "speed-boost": "תאוצת מהירות",
    "battle-armor": "שריון קרב",
    "shell-armor": "שריון קונכייה",
    "clear-body": "גוף נקי",
    "thick-fat": "שומן עבה",
    "huge-power": "כוח עצום",
    "pure-power": "כוח טהור",
    "truant": "עצלן",
    "wonder-guard": "מגן פלא",
    "shadow-tag": "תג צל",
    "immunity": "חסינות",
    "adaptability": "הסתגלות",
    "skill-link": "קישור מיומנות",
    "vital-spirit": "רוח חיות",
    "poison-heal": "ריפוי רעל",
    "marvel-scale": "קשקש פלא",
    "multiscale": "רב-קשקשים",
    "insomnia": "נדודי שינה",
    "trace": "עקיבה",
    "download": "הורדה",
    "iron-fist": "אגרוף ברזל",
    "mold-breaker": "שובר תבנית",
    "rough-skin": "עור מחוספס",
    "solar-power": "כוח שמש",
    "technician": "טכנאי",
    "super-luck": "מזל-על",
    "prankster": "שובב",
    "defiant": "מתריס",
    "justified": "מוצדק",
    "sand-force": "כוח חול",
    "iron-barbs": "קוצי ברזל",
    "magic-bounce": "קפיצת קסם",
    "ice-body": "גוף קרח",
    "snow-cloak": "מעטה שלג",
    "moody": "מזג משתנה",
    "overcoat": "מעיל עליון",
    "regenerator": "מתחדש",
    "analytic": "אנליטי",
    "strong-jaw": "לסת חזקה",
    "refrigerate": "קירור",
    "pixilate": "פייה",
    "aerilate": "מעופפ",
    "dark-aura": "הילת אופל",
    "fairy-aura": "הילת פיה",
    "protean": "פרוטאן",
    "fur-coat": "מעיל פרווה",
    "tough-claws": "טפרים חזקים",
    "beast-boost": "תאוצת חיה",
    "soul-heart": "לב נשמה",
    "electric-surge": "גל חשמל",
    "psychic-surge": "גל על-חושי",
    "grassy-surge": "גל עשב",
    "misty-surge": "גל ערפל",
    "libero": "חופשי",
}

EVO_TRIGGER_HE: Mapping[str, str] = {
    "level-up": "עליית רמה",
    "trade": "החלפה",
    "use-item": "שימוש בפריט",
    "shed": "השלכה",
    "spin": "סיבוב",
    "tower-of-darkness": "מגדל החושך",
    "tower-of-waters": "מגדל המים",
    "three-critical-hits": "שלוש מכות קריטיות",
    "take-damage": "ספיגת נזק",
    "agile-style-move": "מהלך זריז",
    "strong-style-move": "מהלך חזק",
    "recoil-damage": "נזק חוזר",
    "other": "אחר",
}


def translate(table: Mapping[str, str], key: str | None) -> str | None:
    """
    Hebrew value for `key`, or None when the key is empty or unknown.
    """
    if not key:
        return None
    return table.get(key)


def translate_all(table: Mapping[str, str], keys: Iterable[str] | None) -> list[str]:
    """
    Translate each key, keeping the English key where no translation exists.
    """
    return [table.get(key, key) for key in keys or ()]
