"""
Static joke categories for yo-yoo.co.il.

`param` is the value the site expects in `?cat=`; it differs from the display
name for a few categories.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Category:
    slug: str
    he: str
    param: str


CATEGORIES: tuple[Category, ...] = (
    Category("animals", "בעלי חיים", "בעלי חיים"),
    Category("politics", "פוליטיקה", "פוליטיקה"),
    Category("ethnic", "עדות", "עדות"),
    Category("blondes", "בלונדיניות", "בלונדיניות"),
    Category("yo-mama", "אמא שלך", "אמאשך"),
    Category("corny", "קרש", "קרש"),
    Category("dark-humor", "הומור שחור", "הומור שחור"),
    Category("edgy", "שונות", "שונות"),
    Category("school", "בית ספר", "בית ספר"),
    Category("dad", "אבא", "אבא"),
    Category("love", "אהבה", "אהבה"),
    Category("crazy", "משוגעים", "משוגעים"),
    Category("doctors", "רופאים", "רופאים"),
    Category("grandma", "סבתא", "סבתא"),
    Category("holidays", "חגים", "חגים"),
    Category("witty", "שנונות", "שנונות"),
    Category("kids", "ילדים", "ילדים"),
    Category("army", "צבא", "צבא"),
    Category("elderly", "זקנים", "זקנים"),
    Category("clean", "נקיות", "נקיות"),
    Category("math", "מתמטיקה", "מתמטיקה"),
    Category("football", "כדורגל", "כדורגל"),
    Category("names", "בדיחות שמות", "בדיחות שמות"),
    Category("dwarfs", "גמדים", "גמדים"),
    Category("summer", "לחופש", "לחופש"),
    Category("corona", "קורונה", "קורונה"),
)

_BY_SLUG = {c.slug: c for c in CATEGORIES}
_BY_PARAM = {c.param: c for c in CATEGORIES}


def find_category(slug: str) -> Category | None:
    return _BY_SLUG.get((slug or "").strip().lower())


def category_for_param(param: str | None) -> Category | None:
    if not param:
        return None
    return _BY_PARAM.get(param.strip())
