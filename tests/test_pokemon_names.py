"""Tests for Hebrew Pokemon name resolution and the pocketmonsters.co.il parsers."""

import pytest

from core.http import UpstreamError
from pokemon import scraping
from pokemon.names import (
    BUILTIN_NAMES_HE,
    HebrewNameDictionary,
    NameNormalizer,
    is_hebrew,
    normalize_name_for_api,
)


def _many_names(count):
    return {f"mon-{i}": f"פוקימון {i}" for i in range(count)}


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Nidoran F", "nidoran-f"),
        ("Mr.Mime", "mr-mime"),
        ("Farfetch'd", "farfetchd"),
        ("Flabébé", "flabebe"),
        ("  Pikachu ", "pikachu"),
    ],
)
def test_normalize_name_for_api(raw, expected):
    assert normalize_name_for_api(raw) == expected


def test_is_hebrew():
    assert is_hebrew("פיקאצ'ו")
    assert not is_hebrew("pikachu")
    assert not is_hebrew("")


def test_dynamic_dictionary_beats_builtin():
    dictionary = HebrewNameDictionary.preloaded({"pikachu": "פיקצ'ו מהאתר"})
    normalizer = NameNormalizer(dictionary)
    assert normalizer.hebrew_name("pikachu") == "פיקצ'ו מהאתר"
    assert normalizer.hebrew_name("mew") == BUILTIN_NAMES_HE["mew"]
    assert normalizer.hebrew_name("missingno") is None


def test_empty_dictionary_falls_back_to_builtin():
    normalizer = NameNormalizer(HebrewNameDictionary())
    assert normalizer.hebrew_name("eevee") == "איבי"
    assert normalizer.english_key("איבי") == "eevee"
    assert normalizer.english_key("לא קיים") is None


def test_hebrew_contains():
    normalizer = NameNormalizer(HebrewNameDictionary())
    assert normalizer.hebrew_contains("pikachu", "פיקא")
    assert not normalizer.hebrew_contains("missingno", "פיקא")


@pytest.mark.asyncio
async def test_ensure_loaded_replaces_mapping_once():
    calls = []

    async def loader():
        calls.append(1)
        return _many_names(150)

    dictionary = HebrewNameDictionary(loader)
    await dictionary.ensure_loaded()
    await dictionary.ensure_loaded()

    assert dictionary.loaded
    assert len(dictionary) == 150
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_too_few_names_are_rejected_and_retried():
    calls = []

    async def loader():
        calls.append(1)
        return _many_names(5)

    dictionary = HebrewNameDictionary(loader)
    await dictionary.ensure_loaded()
    await dictionary.ensure_loaded()

    assert not dictionary.loaded
    assert len(dictionary) == 0
    assert len(calls) == 2


@pytest.mark.asyncio
async def test_failed_load_leaves_builtin_lookups_working():
    async def loader():
        raise UpstreamError("down", url="https://pocketmonsters.co.il/?p=7428")

    dictionary = HebrewNameDictionary(loader)
    await dictionary.ensure_loaded()

    assert not dictionary.loaded
    assert NameNormalizer(dictionary).hebrew_name("pikachu") == BUILTIN_NAMES_HE["pikachu"]


def test_parse_name_dictionary():
    html = """
    <table>
      <tr><th>#</th><th>שם</th><th>English</th></tr>
      <tr><td>025</td><td>פיקאצ'ו</td><td>Pikachu</td><td><img></td></tr>
      <tr><td>122</td><td>מר. מיים</td><td>Mr.Mime</td><td></td></tr>
      <tr><td>x</td><td>שורה שבורה</td><td>Broken</td></tr>
    </table>
    """
    assert scraping.parse_name_dictionary(html) == {"pikachu": "פיקאצ'ו", "mr-mime": "מר. מיים"}


def test_find_pokedex_post_url():
    html = """
    <a href="/?p=1">פוסט אחר 0025</a>
    <a href="/?p=999">פוקידע 0025 - פיקאצ'ו</a>
    """
    assert scraping.find_pokedex_post_url(html, "0025") == "https://pocketmonsters.co.il/?p=999"
    assert scraping.find_pokedex_post_url(html, "0026") is None


POKEDEX_POST = """
<html><body>
  <table><tr><th>סוג</th><th>זן</th></tr><tr><td>חשמל</td><td>פוקימון עכבר</td></tr></table>
  <h3>תיאורי פוקידע</h3>
  <table>
    <tr><td>אדום</td><td>תיאור ראשון</td></tr>
    <tr><td>כחול</td><td>תיאור שני</td></tr>
  </table>
  <h3>פרטי טריוויה</h3>
  <ul><li>עובדה אחת</li><li>עובדה שתיים</li></ul>
</body></html>
"""


def test_parse_pokedex_post():
    result = scraping.parse_pokedex_post(POKEDEX_POST)
    assert result["descriptions"] == [
        {"game": "אדום", "text": "תיאור ראשון"},
        {"game": "כחול", "text": "תיאור שני"},
    ]
    assert result["species"] == "פוקימון עכבר"
    assert result["trivia"] == ["עובדה אחת", "עובדה שתיים"]


def test_pokedex_post_without_content_is_none():
    assert scraping.parse_pokedex_post("<html><body><p>אין כאן כלום</p></body></html>") is None
