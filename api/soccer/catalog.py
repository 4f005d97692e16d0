from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class League:
    slug: str
    name: str
    country: str


# Slugs are ESPN's league ids.
LEAGUES: tuple[League, ...] = (
    League("eng.1", "English Premier League", "England"),
    League("esp.1", "La Liga", "Spain"),
    League("ger.1", "Bundesliga", "Germany"),
    League("ita.1", "Serie A", "Italy"),
    League("fra.1", "Ligue 1", "France"),
    League("ned.1", "Eredivisie", "Netherlands"),
    League("por.1", "Primeira Liga", "Portugal"),
    League("tur.1", "Süper Lig", "Turkey"),
    League("sco.1", "Scottish Premiership", "Scotland"),
    League("bel.1", "Belgian Pro League", "Belgium"),
    League("usa.1", "MLS", "USA"),
    League("bra.1", "Brasileirão", "Brazil"),
    League("arg.1", "Liga Profesional", "Argentina"),
    League("mex.1", "Liga MX", "Mexico"),
    League("uefa.champions", "UEFA Champions League", "Europe"),
    League("uefa.europa", "UEFA Europa League", "Europe"),
    League("uefa.europa.conf", "UEFA Conference League", "Europe"),
    League("eng.fa", "FA Cup", "England"),
    League("eng.league_cup", "EFL Cup", "England"),
    League("esp.copa_del_rey", "Copa del Rey", "Spain"),
    League("global.world_cup", "FIFA World Cup", "International"),
    League("global.world_cup_qual.uefa", "World Cup Qualifiers (UEFA)", "International"),
    League("uefa.euro", "UEFA Euro", "Europe"),
    League("conmebol.america", "Copa America", "South America"),
    League("eng.2", "EFL Championship", "England"),
    League("esp.2", "La Liga 2", "Spain"),
    League("ger.2", "2. Bundesliga", "Germany"),
    League("ita.2", "Serie B", "Italy"),
    League("fra.2", "Ligue 2", "France"),
)

_BY_SLUG = {league.slug: league for league in LEAGUES}


def find_league(slug: str) -> League | None:
    return _BY_SLUG.get(slug)
