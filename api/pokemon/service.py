"""
Pokemon service: PokeAPI data with Hebrew names and Pokedex text layered on top.

PokeAPI responses never change, so they are cached for 24h keyed by URL.
Hebrew names come from a `HebrewNameDictionary` that the caller passes in;
Hebrew Pokedex pages are cached the same way, including "no page" results.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from urllib.parse import quote

from core import http
from core.cache import TimedCache, fetch_cached
from core.pagination import page

from . import formatting, scraping
from .names import HebrewNameDictionary, NameNormalizer, is_hebrew

logger = logging.getLogger(__name__)

POKE_BASE = "https://pokeapi.co/api/v2"
NAME_DICTIONARY_URL = f"{scraping.POCKETMONSTERS_BASE}/?p=7428"

SOURCE = "PokeAPI (pokeapi.co)"
SOURCE_WITH_HEBREW = "PokeAPI (pokeapi.co) + pocketmonsters.co.il"

POKE_TIMEOUT_S = 15.0
POKEDEX_TIMEOUT_S = 12.0
DICTIONARY_TIMEOUT_S = 20.0
CACHE_TTL_S = 24 * 60 * 60

# Highest national dex number PokeAPI serves species for.
SEARCH_SPECIES_LIMIT = 1025

SCRAPER_HEADERS = {"User-Agent": "Mozilla/5.0 (compatible; PokemonAPI/1.0)"}

poke_cache = TimedCache(CACHE_TTL_S, name="pokeapi")
pokedex_cache = TimedCache(CACHE_TTL_S, name="hebrew_pokedex")

FAILED_TO_LOAD = "Failed to load"


async def poke_get(url: str) -> Any:
    async def _fetch() -> Any:
        return await http.get_json(url, timeout_s=POKE_TIMEOUT_S)

    return await fetch_cached(poke_cache, url, _fetch)


async def load_name_dictionary() -> dict[str, str]:
    html = await http.get_text(NAME_DICTIONARY_URL, headers=SCRAPER_HEADERS, timeout_s=DICTIONARY_TIMEOUT_S)
    return scraping.parse_name_dictionary(html)


# One dictionary per process; the app lifespan starts loading it in the background.
name_dictionary = HebrewNameDictionary(load_name_dictionary)


async def _hebrew_pokedex_uncached(padded_id: str) -> dict[str, Any] | None:
    tag_html = await http.get_text(
        f"{scraping.POCKETMONSTERS_BASE}/?tag={padded_id}",
        headers=SCRAPER_HEADERS,
        timeout_s=POKEDEX_TIMEOUT_S,
    )
    post_url = scraping.find_pokedex_post_url(tag_html, padded_id)
    if post_url is None:
        return None
    post_html = await http.get_text(post_url, headers=SCRAPER_HEADERS, timeout_s=POKEDEX_TIMEOUT_S)
    return scraping.parse_pokedex_post(post_html)


async def hebrew_pokedex(pokemon_id: int) -> dict[str, Any] | None:
    """
    Hebrew descriptions, species and trivia for a Pokedex number, or None.

    Never raises for upstream problems: the detail route treats this as optional.
    """
    padded_id = str(pokemon_id).zfill(4)
    try:
        return await fetch_cached(pokedex_cache, padded_id, lambda: _hebrew_pokedex_uncached(padded_id))
    except http.UpstreamError as exc:
        logger.warning("hebrew_pokedex_failed id=%s error=%s", pokemon_id, exc)
        return None


def _resource_url(kind: str, key: str | int) -> str:
    return f"{POKE_BASE}/{kind}/{quote(str(key), safe='')}"


async def _summary(pokemon_url: str, species_url: str, normalizer: NameNormalizer) -> dict[str, Any]:
    pokemon, species = await asyncio.gather(poke_get(pokemon_url), poke_get(species_url))
    return formatting.build_summary(pokemon, species, normalizer)


def _failed(name: str | None, **extra: Any) -> dict[str, Any]:
    return {"name": name, **extra, "error": FAILED_TO_LOAD}


async def list_pokemon(*, limit: int, offset: int, normalizer: NameNormalizer) -> tuple[int, list[dict]]:
    listing = await poke_get(f"{POKE_BASE}/pokemon?limit={limit}&offset={offset}")

    async def _load(entry: dict) -> dict:
        return await _summary(entry["url"], _resource_url("pokemon-species", entry["name"]), normalizer)

    results = listing.get("results") or []
    pokemon = await http.gather_best_effort(
        results,
        _load,
        lambda entry, _exc: _failed(entry.get("name")),
    )
    return listing.get("count") or len(results), pokemon


async def resolve_query(query: str, normalizer: NameNormalizer) -> str | None:
    """
    PokeAPI key for a user query: Hebrew names go through the dictionary,
    anything else is lowercased. None when a Hebrew name is unknown.
    """
    query = query.strip()
    if not is_hebrew(query):
        return query.lower()
    await normalizer.dictionary.ensure_loaded()
    return normalizer.english_key(query)


async def pokemon_detail(key: str, normalizer: NameNormalizer) -> dict[str, Any]:
    pokemon, species = await asyncio.gather(
        poke_get(_resource_url("pokemon", key)),
        poke_get(_resource_url("pokemon-species", key)),
    )
    full = formatting.build_full(pokemon, species, normalizer)
    return formatting.apply_hebrew_pokedex(full, await hebrew_pokedex(pokemon["id"]))


async def list_types() -> list[dict]:
    listing = await poke_get(f"{POKE_BASE}/type")

    async def _load(entry: dict) -> dict:
        return formatting.build_type(await poke_get(entry["url"]))

    return await http.gather_best_effort(
        listing.get("results") or [],
        _load,
        lambda entry, _exc: _failed(entry.get("name")),
    )


async def pokemon_by_type(
    type_name: str,
    *,
    limit: int,
    offset: int,
    normalizer: NameNormalizer,
) -> tuple[dict, list[dict]]:
    type_data = await poke_get(_resource_url("type", type_name))
    window = page(type_data.get("pokemon") or [], offset=offset, limit=limit)

    async def _load(entry: dict) -> dict:
        pokemon = await poke_get(entry["pokemon"]["url"])
        species = await poke_get(_resource_url("pokemon-species", pokemon["name"]))
        return formatting.build_summary(pokemon, species, normalizer)

    pokemon = await http.gather_best_effort(
        window,
        _load,
        lambda entry, _exc: _failed((entry.get("pokemon") or {}).get("name")),
    )
    return type_data, pokemon


def _species_by_id(species_refs: list[dict]) -> list[dict[str, Any]]:
    refs = [{"name": s["name"], "id": formatting.id_from_url(s["url"])} for s in species_refs]
    return sorted(refs, key=lambda ref: ref["id"] or 0)


async def pokemon_by_generation(
    generation: str,
    *,
    limit: int,
    offset: int,
    normalizer: NameNormalizer,
) -> tuple[dict, list[dict]]:
    gen_data = await poke_get(_resource_url("generation", generation))
    window = page(_species_by_id(gen_data.get("pokemon_species") or []), offset=offset, limit=limit)

    async def _load(ref: dict) -> dict:
        return await _summary(
            _resource_url("pokemon", ref["id"]),
            _resource_url("pokemon-species", ref["id"]),
            normalizer,
        )

    pokemon = await http.gather_best_effort(
        window,
        _load,
        lambda ref, _exc: _failed(ref["name"], id=ref["id"]),
    )
    return gen_data, pokemon


async def _evolution_name_he(link: dict, normalizer: NameNormalizer) -> str | None:
    species = link.get("species") or {}
    name_he = normalizer.hebrew_name(species.get("name"))
    if name_he or not species.get("url"):
        return name_he
    try:
        species_data = await poke_get(species["url"])
    except http.UpstreamError as exc:
        logger.info("evolution_species_failed species=%s error=%s", species.get("name"), exc)
        return None
    return formatting.localized_name(species_data.get("names"), "he")


async def _walk_chain(link: dict | None, normalizer: NameNormalizer) -> dict[str, Any] | None:
    if not link:
        return None
    name_he, children = await asyncio.gather(
        _evolution_name_he(link, normalizer),
        asyncio.gather(*(_walk_chain(child, normalizer) for child in link.get("evolves_to") or [])),
    )
    return formatting.evolution_node(link, name_hebrew=name_he, children=list(children))


async def evolution_chain(key: str, normalizer: NameNormalizer) -> dict[str, Any] | list:
    """
    Nested evolution tree for a species; an empty list when it has no chain.
    """
    species = await poke_get(_resource_url("pokemon-species", key))
    chain_url = (species.get("evolution_chain") or {}).get("url")
    if not chain_url:
        return []
    chain_data = await poke_get(chain_url)
    return await _walk_chain(chain_data.get("chain"), normalizer)


def match_species(
    species: list[dict],
    query: str,
    normalizer: NameNormalizer,
) -> tuple[str, list[dict]]:
    """
    Filter species refs by a partial name.

    Hebrew queries match Hebrew names only. English queries match API names
    first, then species whose Hebrew name contains the raw query.
    """
    query = query.strip()
    if is_hebrew(query):
        return "hebrew", [s for s in species if normalizer.hebrew_contains(s["name"], query)]

    lowered = query.lower()
    by_name = [s for s in species if lowered in s["name"]]
    by_hebrew = [
        s for s in species if lowered not in s["name"] and normalizer.hebrew_contains(s["name"], query)
    ]
    return "english", by_name + by_hebrew


async def search_pokemon(query: str, *, limit: int, normalizer: NameNormalizer) -> tuple[str, list[dict]]:
    await normalizer.dictionary.ensure_loaded()
    all_species = await poke_get(f"{POKE_BASE}/pokemon-species?limit={SEARCH_SPECIES_LIMIT}")
    language, matched = match_species(all_species.get("results") or [], query, normalizer)

    async def _load(entry: dict) -> dict:
        return await _summary(
            _resource_url("pokemon", formatting.id_from_url(entry["url"])),
            entry["url"],
            normalizer,
        )

    pokemon = await http.gather_best_effort(
        matched[:limit],
        _load,
        lambda entry, _exc: _failed(entry.get("name")),
    )
    return language, pokemon
