"""
Books of the Hebrew Bible (Tanakh), by section.

`ref` is the Sefaria reference name, `chapters` the chapter count.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Book:
    ref: str
    he: str
    chapters: int


@dataclass(frozen=True)
class Section:
    name: str
    he: str
    books: tuple[Book, ...]


TANAKH: tuple[Section, ...] = (
    Section(
        "Torah",
        "תורה",
        (
            Book("Genesis", "בראשית", 50),
            Book("Exodus", "שמות", 40),
            Book("Leviticus", "ויקרא", 27),
            Book("Numbers", "במדבר", 36),
            Book("Deuteronomy", "דברים", 34),
        ),
    ),
    Section(
        "Prophets",
        "נביאים",
        (
            Book("Joshua", "יהושע", 24),
            Book("Judges", "שופטים", 21),
            Book("I Samuel", "שמואל א", 31),
            Book("II Samuel", "שמואל ב", 24),
            Book("I Kings", "מלכים א", 22),
            Book("II Kings", "מלכים ב", 25),
            Book("Isaiah", "ישעיהו", 66),
            Book("Jeremiah", "ירמיהו", 52),
            Book("Ezekiel", "יחזקאל", 48),
            Book("Hosea", "הושע", 14),
            Book("Joel", "יואל", 4),
            Book("Amos", "עמוס", 9),
            Book("Obadiah", "עובדיה", 1),
            Book("Jonah", "יונה", 4),
            Book("Micah", "מיכה", 7),
            Book("Nahum", "נחום", 3),
            Book("Habakkuk", "חבקוק", 3),
            Book("Zephaniah", "צפניה", 3),
            Book("Haggai", "חגי", 2),
            Book("Zechariah", "זכריה", 14),
            Book("Malachi", "מלאכי", 3),
        ),
    ),
    Section(
        "Writings",
        "כתובים",
        (
            Book("Psalms", "תהלים", 150),
            Book("Proverbs", "משלי", 31),
            Book("Job", "איוב", 42),
            Book("Song of Songs", "שיר השירים", 8),
            Book("Ruth", "רות", 4),
            Book("Lamentations", "איכה", 5),
            Book("Ecclesiastes", "קהלת", 12),
            Book("Esther", "אסתר", 10),
            Book("Daniel", "דניאל", 12),
            Book("Ezra", "עזרא", 10),
            Book("Nehemiah", "נחמיה", 13),
            Book("I Chronicles", "דברי הימים א", 29),
            Book("II Chronicles", "דברי הימים ב", 36),
        ),
    ),
)

ALL_BOOKS: tuple[Book, ...] = tuple(book for section in TANAKH for book in section.books)


def find_book(query: str | None) -> Book | None:
    """
    Exact English name (any case), then exact Hebrew name, then the first
    English name containing the query.
    """
    if not query or not query.strip():
        return None
    raw = query.strip()
    lowered = raw.lower()

    for book in ALL_BOOKS:
        if book.ref.lower() == lowered:
            return book
    for book in ALL_BOOKS:
        if book.he == raw:
            return book
    for book in ALL_BOOKS:
        if lowered in book.ref.lower():
            return book
    return None
