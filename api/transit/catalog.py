"""
Israel Rail stations and bus operators.

Station ids are the ones the rail.co.il API uses. Operator refs are the
GTFS/SIRI `operator_ref` numbers; Open Bus returns Hebrew agency names only.
"""

from __future__ import annotations

from typing import Mapping

TRAIN_STATIONS: Mapping[str, str] = {
    "3700": "Tel Aviv-Savidor Center",
    "3500": "Hertsliya",
    "3400": "Bet Yehoshua",
    "3300": "Netanya",
    "3310": "Netanya-Sapir",
    "3100": "Hadera-West",
    "2800": "Binyamina",
    "2820": "Caesarea-Pardes Hana",
    "2500": "Atlit",
    "2200": "Haifa-Bat Galim",
    "2100": "Haifa Center-HaShmona",
    "2300": "Haifa-Hof HaKarmel",
    "1300": "Hutsot HaMifrats",
    "1220": "HaMifrats Central Station",
    "700": "Kiryat Hayim",
    "1400": "Kiryat Motzkin",
    "1500": "Ako",
    "1600": "Nahariya",
    "1820": "Ahihud",
    "1840": "Karmiel",
    "1240": "Yokneam-Kfar Yehoshua",
    "1250": "Migdal HaEmek-Kfar Barukh",
    "1260": "Afula R.Eitan",
    "1280": "Beit Shean",
    "8700": "Kfar Sava-Nordau",
    "8800": "Rosh HaAyin-North",
    "9200": "Hod HaSharon-Sokolov",
    "2940": "Raanana West",
    "2960": "Raanana South",
    "4100": "Bnei Brak",
    "4170": "Petah Tikva-Kiryat Arye",
    "4250": "Petah Tikva-Segula",
    "3600": "Tel Aviv-University",
    "4600": "Tel Aviv-HaShalom",
    "4900": "Tel Aviv-HaHagana",
    "4800": "Kfar Habad",
    "5000": "Lod",
    "5150": "Lod-Gane Aviv",
    "5010": "Ramla",
    "5200": "Rehovot",
    "5300": "Beer Yaakov",
    "5410": "Yavne-East",
    "9000": "Yavne-West",
    "5800": "Ashdod-Ad Halom",
    "5900": "Ashkelon",
    "9100": "Rishon LeTsiyon-HaRishonim",
    "9800": "Rishon LeTsiyon-Moshe Dayan",
    "4640": "Holon Junction",
    "4660": "Holon-Wolfson",
    "4680": "Bat Yam-Yoseftal",
    "4690": "Bat Yam-Komemiyut",
    "6300": "Bet Shemesh",
    "6500": "Jerusalem-Biblical Zoo",
    "680": "Jerusalem-Yitzhak Navon",
    "6700": "Jerusalem-Malha",
    "6900": "Mazkeret Batya",
    "6150": "Kiryat Malakhi-Yoav",
    "7000": "Kiryat Gat",
    "7300": "Beer Sheva-North/University",
    "7320": "Beer Sheva-Center",
    "8550": "Lehavim-Rahat",
    "7500": "Dimona",
    "9600": "Sderot",
    "9650": "Netivot",
    "9700": "Ofakim",
    "300": "Paate Modiin",
    "400": "Modiin-Center",
    "8600": "Ben Gurion Airport",
}

_STATION_BY_NAME = {name.lower(): station_id for station_id, name in TRAIN_STATIONS.items()}

BUS_OPERATORS: Mapping[int, str] = {
    2: "Nateev Express",
    3: "Egged",
    4: "Egged Taavura",
    5: "Dan",
    6: "N.T.A. (NTA Metropolitan)",
    7: "Kavim Mivtzait",
    8: "G.B. Tours",
    10: "Nazareth Transport & Tourism",
    14: "Golan Regional Transport",
    15: "Metropoline",
    16: "Superbus",
    18: "Kavim",
    20: "Carmelit",
    21: "CityPass (Jerusalem Light Rail)",
    23: "Galim",
    24: "Nazareth Unbs",
    25: "Afikim",
    31: "Dan South",
    32: "Dan Beer Sheva",
    33: "Dan Bney Darom",
    34: "Tnufa",
    35: "Dan North Beersheba",
    37: "Electra Afikim",
    38: "Extra Metropoline",
    42: "TelAviv-Ramat Gan NTA Line",
    44: "TelAviv-Bnei-Brak-Petah-Tikva NTA Line",
    45: "TelAviv-Bat Yam NTA Line",
    47: "TelAviv-Tel-Aviv NTA Line",
    49: "TelAviv-Herzliya-Bnei-Brak-Petah-Tikva NTA Line",
    50: "TelAviv-Holon NTA Line",
    51: "TelAviv-Kiryat-Ono NTA Line",
    91: "Rail - Israel Railways",
    93: "Rail - Israel Railways North",
    97: "Afikim Mivtzait",
    98: "Light Rail Lines 4-5",
}


def find_station_id(query: str | None) -> str | None:
    """
    Station id by id, exact name (any case), or the first name containing the query.
    """
    if not query or not query.strip():
        return None
    value = query.strip()
    if value in TRAIN_STATIONS:
        return value

    lowered = value.lower()
    if lowered in _STATION_BY_NAME:
        return _STATION_BY_NAME[lowered]
    for station_id, name in TRAIN_STATIONS.items():
        if lowered in name.lower():
            return station_id
    return None


def station_name(station_id: object) -> str:
    """
    English name for a station id, or the id itself when unknown.
    """
    key = str(station_id)
    return TRAIN_STATIONS.get(key, key)


def operator_name(operator_ref: int | str | None, fallback: str | None = None) -> str | None:
    try:
        return BUS_OPERATORS.get(int(operator_ref), fallback)
    except (TypeError, ValueError):
        return fallback
