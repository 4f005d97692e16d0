"""
Hebrew Pokemon names.

Lookup order for a PokeAPI name:
1) the dynamic dictionary scraped from pocketmonsters.co.il (loaded lazily,
   once per process)
2) a small built-in table
3) None

The dictionary is an explicit object rather than module state so routes can
receive it through a FastAPI dependency and tests can swap in a pre-populated
or empty instance.
"""

from __future__ import annotations

import logging
import re
import unicodedata
from typing import Awaitable, Callable, Mapping

from core.http import FANOUT_ERRORS

logger = logging.getLogger(__name__)

# A real dictionary page yields ~1000 names; fewer means the markup changed.
MIN_DICTIONARY_NAMES = 100

HEBREW_CHARS_RE = re.compile(r"[\u0590-\u05FF]")

NameLoader = Callable[[], Awaitable[Mapping[str, str]]]

# Fallback for the best-known names while the dictionary is unavailable.
BUILTIN_NAMES_HE: Mapping[str, str] = {
    "bulbasaur": "בולבסאור",
    "ivysaur": "אייביסאור",
    "venusaur": "ונוסאור",
    "charmander": "צ'רמנדר",
    "charmeleon": "צ'רמיליון",
    "charizard": "צ'ריזארד",
    "squirtle": "סקווירטל",
    "wartortle": "וורטורטל",
    "blastoise": "בלסטויס",
    "pikachu": "פיקאצ'ו",
    "raichu": "רייצ'ו",
    "jigglypuff": "ג'יגליפאף",
    "meowth": "מיאות'",
    "psyduck": "פסיידאק",
    "gengar": "גנגר",
    "magikarp": "מג'יקארפ",
    "gyarados": "גאראדוס",
    "eevee": "איבי",
    "snorlax": "סנורלקס",
    "dragonite": "דרגונייט",
    "mewtwo": "מיוטו",
    "mew": "מיו",
    "togepi": "טוגפי",
    "lucario": "לוקריו",
}


def is_hebrew(text: str | None) -> bool:
    return bool(text) and HEBREW_CHARS_RE.search(text) is not None


def normalize_name_for_api(english_name: str) -> str:
    """
    Dictionary-site spelling -> PokeAPI name.

    "Nidoran F" -> "nidoran-f", "Mr.Mime" -> "mr-mime",
    "Farfetch'd" -> "farfetchd", "Flabébé" -> "flabebe"
    """
    name = (english_name or "").strip().lower()
    name = name.replace(".", "-")
    name = re.sub(r"['’‘]", "", name)
    name = re.sub(r"\s+", "-", name)
    name = unicodedata.normalize("NFKD", name)
    name = "".join(ch for ch in name if not unicodedata.combining(ch))
    name = re.sub(r"-+", "-", name)
    return name.strip("-")


class HebrewNameDictionary:
    """
    PokeAPI name -> Hebrew name, loaded once from an external source.

    A load either replaces the whole mapping or leaves it untouched, so
    concurrent readers see the before or after state, never a partial one.
    A failed or suspiciously small load leaves `loaded` False and the next
    `ensure_loaded()` retries.
    """

    def __init__(
        self,
        loader: NameLoader | None = None,
        *,
        min_names: int = MIN_DICTIONARY_NAMES,
    ) -> None:
        self._loader = loader
        self._names: Mapping[str, str] = {}
        self.min_names = min_names
        self.loaded = False

    @classmethod
    def preloaded(cls, names: Mapping[str, str]) -> "HebrewNameDictionary":
        dictionary = cls()
        dictionary._names = dict(names)
        dictionary.loaded = True
        return dictionary

    @property
    def names(self) -> Mapping[str, str]:
        return self._names

    def get(self, key: str | None) -> str | None:
        if not key:
            return None
        return self._names.get(key)

    def __len__(self) -> int:
        return len(self._names)

    async def ensure_loaded(self) -> Mapping[str, str]:
        if self.loaded or self._loader is None:
            return self._names

        try:
            names = await self._loader()
        except FANOUT_ERRORS as exc:
            logger.error("hebrew_names_load_failed error=%s", exc)
            return self._names

        if len(names) <= self.min_names:
            logger.warning("hebrew_names_too_few count=%s", len(names))
            return self._names

        self._names = dict(names)
        self.loaded = True
        logger.info("hebrew_names_loaded count=%s", len(self._names))
        return self._names


class NameNormalizer:
    def __init__(
        self,
        dictionary: HebrewNameDictionary,
        builtin: Mapping[str, str] = BUILTIN_NAMES_HE,
    ) -> None:
        self.dictionary = dictionary
        self.builtin = builtin

    def hebrew_name(self, api_name: str | None) -> str | None:
        if not api_name:
            return None
        return self.dictionary.get(api_name) or self.builtin.get(api_name)

    def english_key(self, hebrew_name: str) -> str | None:
        """
        Reverse lookup: exact Hebrew name -> PokeAPI name.
        """
        target = (hebrew_name or "").strip()
        if not target:
            return None
        for table in (self.dictionary.names, self.builtin):
            for api_name, he_name in table.items():
                if he_name == target:
                    return api_name
        return None

    def hebrew_contains(self, api_name: str, fragment: str) -> bool:
        he_name = self.hebrew_name(api_name)
        return bool(he_name) and fragment in he_name
