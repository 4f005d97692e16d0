"""
Shape PokeAPI payloads into the compact English + Hebrew records we serve.
"""

from __future__ import annotations

from typing import Any

from . import translations as tr
from .names import NameNormalizer

OFFICIAL_ARTWORK_URL = (
    "https://raw.githubusercontent.com/PokeAPI/sprites/master/sprites/pokemon/other/official-artwork/{id}.png"
)


def id_from_url(url: str | None) -> int | None:
    """
    PokeAPI resource urls end in the numeric id: ".../pokemon-species/25/".
    """
    if not url:
        return None
    tail = url.rstrip("/").rsplit("/", 1)[-1]
    return int(tail) if tail.isdigit() else None


def localized_name(names: list[dict] | None, lang: str) -> str | None:
    for entry in names or []:
        if (entry.get("language") or {}).get("name") == lang:
            return entry.get("name") or None
    return None


def flavor_text(entries: list[dict] | None, lang: str) -> str | None:
    for entry in entries or []:
        if (entry.get("language") or {}).get("name") == lang:
            text = entry.get("flavor_text") or ""
            text = text.replace("\n", " ").replace("\f", " ").replace("\r", " ").strip()
            return text or None
    return None


def genus(genera: list[dict] | None, lang: str) -> str | None:
    for entry in genera or []:
        if (entry.get("language") or {}).get("name") == lang:
            return entry.get("genus") or None
    return None


def _name_of(resource: dict | None) -> str | None:
    return (resource or {}).get("name") or None


def hebrew_name(species: dict, api_name: str, normalizer: NameNormalizer) -> str | None:
    # PokeAPI has no Hebrew names today; prefer them if they ever appear.
    return localized_name(species.get("names"), "he") or normalizer.hebrew_name(api_name)


def build_images(sprites: dict | None) -> dict[str, str | None]:
    sprites = sprites or {}
    other = sprites.get("other") or {}
    artwork = other.get("official-artwork") or {}
    dream_world = other.get("dream_world") or {}
    home = other.get("home") or {}
    return {
        "front": sprites.get("front_default"),
        "back": sprites.get("back_default"),
        "frontShiny": sprites.get("front_shiny"),
        "backShiny": sprites.get("back_shiny"),
        "officialArtwork": artwork.get("front_default"),
        "officialArtworkShiny": artwork.get("front_shiny"),
        "dreamWorld": dream_world.get("front_default"),
        "homeRender": home.get("front_default"),
        "homeRenderShiny": home.get("front_shiny"),
    }


def physical(pokemon: dict) -> tuple[float | None, float | None]:
    """
    PokeAPI reports decimetres and hectograms; return (metres, kilograms).
    """
    height = pokemon.get("height")
    weight = pokemon.get("weight")
    return (
        height / 10 if height is not None else None,
        weight / 10 if weight is not None else None,
    )


def _type_names(pokemon: dict) -> list[str]:
    return [t["type"]["name"] for t in pokemon.get("types") or []]


def build_summary(pokemon: dict, species: dict, normalizer: NameNormalizer) -> dict[str, Any]:
    """
    Compact record for list endpoints (no moves).
    """
    height_m, weight_kg = physical(pokemon)
    generation = _name_of(species.get("generation"))
    type_names = _type_names(pokemon)
    sprites = pokemon.get("sprites") or {}
    artwork = ((sprites.get("other") or {}).get("official-artwork") or {}).get("front_default")

    return {
        "id": pokemon["id"],
        "name": pokemon["name"],
        "nameEnglish": localized_name(species.get("names"), "en") or pokemon["name"],
        "nameHebrew": hebrew_name(species, pokemon["name"], normalizer),
        "types": type_names,
        "typesHebrew": tr.translate_all(tr.TYPE_HE, type_names),
        "generation": generation,
        "generationHebrew": tr.translate(tr.GENERATION_HE, generation),
        "isLegendary": species.get("is_legendary"),
        "isMythical": species.get("is_mythical"),
        "heightM": height_m,
        "weightKg": weight_kg,
        "image": artwork or sprites.get("front_default"),
        "sprite": sprites.get("front_default"),
    }


def build_full(pokemon: dict, species: dict, normalizer: NameNormalizer) -> dict[str, Any]:
    height_m, weight_kg = physical(pokemon)
    generation = _name_of(species.get("generation"))
    color = _name_of(species.get("color"))
    shape = _name_of(species.get("shape"))
    habitat = _name_of(species.get("habitat"))
    growth_rate = _name_of(species.get("growth_rate"))
    type_names = _type_names(pokemon)

    return {
        "id": pokemon["id"],
        "name": pokemon["name"],
        "nameEnglish": localized_name(species.get("names"), "en") or pokemon["name"],
        "nameHebrew": hebrew_name(species, pokemon["name"], normalizer),
        "nameJapanese": localized_name(species.get("names"), "ja"),
        "genus": genus(species.get("genera"), "en"),
        "genusHebrew": genus(species.get("genera"), "he"),
        "description": flavor_text(species.get("flavor_text_entries"), "en"),
        "descriptionHebrew": flavor_text(species.get("flavor_text_entries"), "he"),
        "generation": generation,
        "generationHebrew": tr.translate(tr.GENERATION_HE, generation),
        "types": type_names,
        "typesHebrew": tr.translate_all(tr.TYPE_HE, type_names),
        "abilities": [
            {
                "name": a["ability"]["name"],
                "nameHebrew": tr.translate(tr.ABILITY_HE, a["ability"]["name"]),
                "isHidden": a.get("is_hidden", False),
            }
            for a in pokemon.get("abilities") or []
        ],
        "stats": {
            s["stat"]["name"]: {
                "nameHebrew": tr.translate(tr.STAT_HE, s["stat"]["name"]),
                "base": s.get("base_stat"),
                "effort": s.get("effort"),
            }
            for s in pokemon.get("stats") or []
        },
        "heightM": height_m,
        "weightKg": weight_kg,
        "baseExperience": pokemon.get("base_experience"),
        "images": build_images(pokemon.get("sprites")),
        "color": color,
        "colorHebrew": tr.translate(tr.COLOR_HE, color),
        "shape": shape,
        "shapeHebrew": tr.translate(tr.SHAPE_HE, shape),
        "habitat": habitat,
        "habitatHebrew": tr.translate(tr.HABITAT_HE, habitat),
        "growthRate": growth_rate,
        "growthRateHebrew": tr.translate(tr.GROWTH_RATE_HE, growth_rate),
        "captureRate": species.get("capture_rate"),
        "baseHappiness": species.get("base_happiness"),
        "isBaby": species.get("is_baby"),
        "isLegendary": species.get("is_legendary"),
        "isMythical": species.get("is_mythical"),
        "evolutionChainUrl": (species.get("evolution_chain") or {}).get("url"),
        "moves": [m["move"]["name"] for m in pokemon.get("moves") or []],
        "heldItems": [h["item"]["name"] for h in pokemon.get("held_items") or []],
    }


def apply_hebrew_pokedex(full: dict[str, Any], pokedex: dict[str, Any] | None) -> dict[str, Any]:
    """
    Attach scraped Hebrew Pokedex data and fill Hebrew description/genus gaps.
    """
    if not pokedex:
        return full
    enriched = {**full, "hebrewPokedex": pokedex}
    if not enriched.get("descriptionHebrew") and pokedex.get("descriptions"):
        enriched["descriptionHebrew"] = pokedex["descriptions"][0]["text"]
    if pokedex.get("species"):
        enriched["genusHebrew"] = pokedex["species"]
    return enriched


def type_relations(damage_relations: dict | None) -> dict[str, list[dict[str, str | None]]]:
    relations = damage_relations or {}

    def _side(key: str) -> list[dict[str, str | None]]:
        return [
            {"name": t["name"], "nameHebrew": tr.translate(tr.TYPE_HE, t["name"])}
            for t in relations.get(key) or []
        ]

    return {
        "doubleDamageTo": _side("double_damage_to"),
        "doubleDamageFrom": _side("double_damage_from"),
        "halfDamageTo": _side("half_damage_to"),
        "halfDamageFrom": _side("half_damage_from"),
        "noDamageTo": _side("no_damage_to"),
        "noDamageFrom": _side("no_damage_from"),
    }


def build_type(type_data: dict) -> dict[str, Any]:
    name = type_data["name"]
    return {
        "id": type_data.get("id"),
        "name": name,
        "nameEnglish": localized_name(type_data.get("names"), "en") or name,
        "nameHebrew": localized_name(type_data.get("names"), "he") or tr.translate(tr.TYPE_HE, name),
        "nameJapanese": localized_name(type_data.get("names"), "ja"),
        "pokemonCount": len(type_data.get("pokemon") or []),
        "damageRelations": type_relations(type_data.get("damage_relations")),
    }


def evolution_node(
    link: dict,
    *,
    name_hebrew: str | None,
    children: list[dict[str, Any]],
) -> dict[str, Any]:
    species = link.get("species") or {}
    species_id = id_from_url(species.get("url"))
    details = (link.get("evolution_details") or [{}])[0] or {}
    trigger = _name_of(details.get("trigger"))
    return {
        "name": species.get("name"),
        "nameHebrew": name_hebrew,
        "id": species_id,
        "image": OFFICIAL_ARTWORK_URL.format(id=species_id) if species_id else None,
        "trigger": trigger,
        "triggerHebrew": tr.translate(tr.EVO_TRIGGER_HE, trigger),
        "minLevel": details.get("min_level") or None,
        "item": _name_of(details.get("item")),
        "evolvesTo": children,
    }
