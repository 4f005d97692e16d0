from __future__ import annotations

from fastapi import Depends

from . import service
from .names import HebrewNameDictionary, NameNormalizer


def get_name_dictionary() -> HebrewNameDictionary:
    return service.name_dictionary


def get_normalizer(dictionary: HebrewNameDictionary = Depends(get_name_dictionary)) -> NameNormalizer:
    return NameNormalizer(dictionary)
