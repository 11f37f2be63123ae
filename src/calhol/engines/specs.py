from __future__ import annotations

from typing import Dict, Tuple

from ..core.types import (
    EasterRule,
    FixedRule,
    HolidayRule,
    LunarRule,
    NthWeekdayRule,
    ObservedRule,
    RelativeRule,
)
from ..core.time import SUNDAY, MONDAY, THURSDAY, SATURDAY


def _fixed(id: str, name: str, month: int, day: int, **kw) -> HolidayRule:
    return HolidayRule(id=id, name=name, payload=FixedRule(month, day), **kw)


def _nth(id: str, name: str, month: int, weekday: int, nth: int, **kw) -> HolidayRule:
    return HolidayRule(id=id, name=name, payload=NthWeekdayRule(month, weekday, nth), **kw)


def _easter(id: str, name: str, offset: int, method: str = "western", **kw) -> HolidayRule:
    return HolidayRule(id=id, name=name, payload=EasterRule(offset, method), **kw)


def _lunar(id: str, name: str, calendar: str, month: int, day: int, **kw) -> HolidayRule:
    return HolidayRule(id=id, name=name, payload=LunarRule(calendar, month, day), **kw)


def _relative(id: str, name: str, target: str, offset: int, **kw) -> HolidayRule:
    return HolidayRule(id=id, name=name, payload=RelativeRule(target, offset), **kw)


# ============================================================
# OBSERVANCE POLICIES
# ============================================================

SAT_SUN = frozenset({SATURDAY, SUNDAY})

# US federal: Saturday -> Friday, Sunday -> Monday
US_FEDERAL = ObservedRule(policy="nearest-weekday", weekend_days=SAT_SUN)


# ============================================================
# RULE SETS
# ============================================================

US_RULES: Tuple[HolidayRule, ...] = (
    _fixed("new-years-day", "New Year's Day", 1, 1, observed_rule=US_FEDERAL),
    _nth("martin-luther-king-day", "Martin Luther King Jr. Day", 1, MONDAY, 3),
    _nth("presidents-day", "Presidents' Day", 2, MONDAY, 3),
    _nth("memorial-day", "Memorial Day", 5, MONDAY, -1),
    _fixed("juneteenth", "Juneteenth", 6, 19, observed_rule=US_FEDERAL),
    _fixed("independence-day", "Independence Day", 7, 4, observed_rule=US_FEDERAL),
    _nth("labor-day", "Labor Day", 9, MONDAY, 1),
    _nth("columbus-day", "Columbus Day", 10, MONDAY, 2),
    _fixed("veterans-day", "Veterans Day", 11, 11, observed_rule=US_FEDERAL),
    _nth("thanksgiving", "Thanksgiving", 11, THURSDAY, 4),
    _relative("black-friday", "Black Friday", "thanksgiving", 1, active=False),
    _fixed("christmas-day", "Christmas Day", 12, 25, observed_rule=US_FEDERAL),
)

DE_RULES: Tuple[HolidayRule, ...] = (
    _fixed("neujahr", "New Year's Day", 1, 1),
    _fixed("heilige-drei-koenige", "Epiphany", 1, 6, regions=("BW", "BY", "ST")),
    _easter("karfreitag", "Good Friday", -2),
    _easter("ostermontag", "Easter Monday", 1),
    _fixed("tag-der-arbeit", "Labour Day", 5, 1),
    _easter("christi-himmelfahrt", "Ascension Day", 39),
    _easter("pfingstmontag", "Whit Monday", 50),
    _easter("fronleichnam", "Corpus Christi", 60, regions=("BW", "BY", "HE", "NW", "RP", "SL")),
    _fixed("tag-der-deutschen-einheit", "German Unity Day", 10, 3),
    _fixed("reformationstag", "Reformation Day", 10, 31,
           regions=("BB", "HB", "HH", "MV", "NI", "SH", "SN", "ST", "TH")),
    _fixed("erster-weihnachtstag", "Christmas Day", 12, 25),
    _fixed("zweiter-weihnachtstag", "St. Stephen's Day", 12, 26),
)

FR_RULES: Tuple[HolidayRule, ...] = (
    _fixed("jour-de-l-an", "New Year's Day", 1, 1),
    _easter("lundi-de-paques", "Easter Monday", 1),
    _fixed("fete-du-travail", "Labour Day", 5, 1),
    _fixed("victoire-1945", "Victory in Europe Day", 5, 8),
    _easter("ascension", "Ascension Day", 39),
    _easter("lundi-de-pentecote", "Whit Monday", 50),
    _fixed("fete-nationale", "Bastille Day", 7, 14),
    _fixed("assomption", "Assumption of Mary", 8, 15),
    _fixed("toussaint", "All Saints' Day", 11, 1),
    _fixed("armistice", "Armistice Day", 11, 11),
    _fixed("noel", "Christmas Day", 12, 25),
)

TR_RULES: Tuple[HolidayRule, ...] = (
    _fixed("new-years-day", "New Year's Day", 1, 1),
    _fixed("national-sovereignty-day", "National Sovereignty and Children's Day", 4, 23),
    _fixed("labor-day", "Labour and Solidarity Day", 5, 1),
    _fixed("ataturk-commemoration-day", "Commemoration of Atatürk, Youth and Sports Day", 5, 19),
    _fixed("democracy-day", "Democracy and National Unity Day", 7, 15),
    _fixed("victory-day", "Victory Day", 8, 30),
    _fixed("republic-day", "Republic Day", 10, 29),
    _lunar("ramazan-bayrami", "Ramadan Feast", "islamic", 10, 1, duration=3),
    _relative("ramazan-bayrami-arifesi", "Ramadan Feast Eve", "ramazan-bayrami", -1),
    _lunar("kurban-bayrami", "Sacrifice Feast", "islamic", 12, 10, duration=4),
    _relative("kurban-bayrami-arifesi", "Sacrifice Feast Eve", "kurban-bayrami", -1),
)

CN_RULES: Tuple[HolidayRule, ...] = (
    _fixed("new-years-day", "New Year's Day", 1, 1),
    _relative("spring-festival-eve", "Spring Festival Eve", "spring-festival", -1),
    _lunar("spring-festival", "Spring Festival", "chinese", 1, 1, duration=3),
    _lunar("lantern-festival", "Lantern Festival", "chinese", 1, 15, active=False),
    # Qingming follows a solar term; April 5 is the usual date
    _fixed("qingming", "Qingming Festival", 4, 5),
    _fixed("labour-day", "Labour Day", 5, 1),
    _lunar("dragon-boat", "Dragon Boat Festival", "chinese", 5, 5),
    _lunar("mid-autumn", "Mid-Autumn Festival", "chinese", 8, 15),
    _lunar("double-ninth", "Double Ninth Festival", "chinese", 9, 9, active=False),
    _fixed("national-day", "National Day", 10, 1, duration=3),
)

IL_RULES: Tuple[HolidayRule, ...] = (
    _lunar("pesach", "Passover", "hebrew", 1, 15),
    _relative("pesach-vii", "Seventh Day of Passover", "pesach", 6),
    _lunar("shavuot", "Shavuot", "hebrew", 3, 6),
    _lunar("rosh-hashanah", "Rosh Hashanah", "hebrew", 7, 1, duration=2),
    _lunar("yom-kippur", "Yom Kippur", "hebrew", 7, 10),
    _lunar("sukkot", "Sukkot", "hebrew", 7, 15),
    _relative("shemini-atzeret", "Shemini Atzeret", "sukkot", 7),
    _lunar("hanukkah", "Hanukkah", "hebrew", 9, 25, duration=8, active=False),
)

IR_RULES: Tuple[HolidayRule, ...] = (
    _lunar("nowruz", "Nowruz", "persian", 1, 1, duration=4),
    _lunar("islamic-republic-day", "Islamic Republic Day", "persian", 1, 12),
    _lunar("sizdah-bedar", "Nature Day", "persian", 1, 13),
    _lunar("khomeini-death", "Death of Khomeini", "persian", 3, 14),
    _lunar("khordad-uprising", "15 Khordad Uprising", "persian", 3, 15),
    _lunar("revolution-day", "Islamic Revolution Day", "persian", 11, 22),
    _lunar("oil-nationalization", "Oil Nationalization Day", "persian", 12, 29),
    _lunar("tasua", "Tasua", "islamic", 1, 9),
    _lunar("ashura", "Ashura", "islamic", 1, 10),
    _lunar("eid-al-fitr", "Eid al-Fitr", "islamic", 10, 1, duration=2),
    _lunar("eid-al-adha", "Eid al-Adha", "islamic", 12, 10),
)


ALL_RULESETS: Dict[str, Tuple[HolidayRule, ...]] = {
    "us": US_RULES,
    "de": DE_RULES,
    "fr": FR_RULES,
    "tr": TR_RULES,
    "cn": CN_RULES,
    "il": IL_RULES,
    "ir": IR_RULES,
}

