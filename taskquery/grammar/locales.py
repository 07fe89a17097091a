# taskquery/grammar/locales.py
"""
Date-phrase vocabulary per locale.

Every locale shares the same date grammar shape (see builder.py); a locale
only supplies words and a few regexes. A slot left empty simply switches off
the grammar alternatives that need it (e.g. French has no prefix "next", it
says "lundi prochain", so it fills `next_after` instead).

Phrases are matched case-insensitively. Spaces inside a phrase match any run
of whitespace.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


class UnsupportedLocaleError(ValueError):
    """Raised before parsing when a locale has no date vocabulary."""
    pass


@dataclass(frozen=True)
class DateVocabulary:
    code: str
    relative_days: Tuple[str, ...]
    weekdays: Tuple[str, ...]
    months: Tuple[str, ...]
    units: Tuple[str, ...]
    every: Tuple[str, ...]
    next: Tuple[str, ...] = ()
    next_after: Tuple[str, ...] = ()
    period_words: Tuple[str, ...] = ()
    at: Tuple[str, ...] = ()
    in_: Tuple[str, ...] = ()
    later: Tuple[str, ...] = ()
    of: Tuple[str, ...] = ()
    time_words: Tuple[str, ...] = ()
    clock: Optional[str] = None
    hour: Optional[str] = r"\d{1,2}(?:[:.]\d{2})?"
    day_of_month: Optional[str] = r"\d{1,2}"
    numeric_date: Optional[str] = r"\d{4}-\d{1,2}-\d{1,2}|\d{1,2}[./-]\d{1,2}(?:[./-]\d{2,4})?"
    year: Optional[str] = r"\d{4}"
    number: Optional[str] = r"\d{1,3}"
    # False for scripts written without spaces between words
    spaced: bool = True


def _numbered(suffix: str, prefix: str = "", upto: int = 12) -> Tuple[str, ...]:
    return tuple(f"{prefix}{n}{suffix}" for n in range(1, upto + 1))


_CJK_NUMERALS = ("一", "二", "三", "四", "五", "六", "七", "八", "九", "十", "十一", "十二")


EN = DateVocabulary(
    code="en",
    relative_days=("today", "tonight", "tomorrow", "tmrw", "yesterday", "day after tomorrow",
                   "this weekend", "next weekend", "end of week", "end of month"),
    weekdays=("monday", "mon", "tuesday", "tue", "tues", "wednesday", "wed", "thursday", "thu",
              "thur", "thurs", "friday", "fri", "saturday", "sat", "sunday"),
    months=("january", "jan", "february", "feb", "march", "mar", "april", "apr", "may", "june",
            "jun", "july", "jul", "august", "aug", "september", "sep", "sept", "october", "oct",
            "november", "nov", "december", "dec"),
    units=("day", "days", "week", "weeks", "month", "months", "year", "years"),
    every=("every other", "every", "each"),
    next=("next", "this"),
    period_words=("weekday", "weekdays", "workday", "workdays", "weekend", "morning", "afternoon", "evening"),
    at=("at",),
    in_=("in",),
    later=("from now", "later"),
    time_words=("noon", "midnight", "morning", "afternoon", "evening", "night"),
    clock=r"\d{1,2}(?::\d{2})?\s?(?:am|pm)|\d{1,2}:\d{2}",
    day_of_month=r"\d{1,2}(?:st|nd|rd|th)?",
)

DE = DateVocabulary(
    code="de",
    relative_days=("heute", "morgen", "übermorgen", "gestern", "heute abend", "dieses wochenende"),
    weekdays=("montag", "dienstag", "mittwoch", "donnerstag", "freitag", "samstag", "sonnabend", "sonntag"),
    months=("januar", "jan", "februar", "feb", "märz", "mrz", "april", "apr", "mai", "juni", "jun",
            "juli", "jul", "august", "aug", "september", "sep", "sept", "oktober", "okt",
            "november", "nov", "dezember", "dez"),
    units=("tag", "tage", "tagen", "woche", "wochen", "monat", "monate", "monaten", "jahr", "jahre", "jahren"),
    every=("jeden", "jede", "jedes", "jeder", "alle"),
    next=("nächsten", "nächste", "nächster", "nächstes", "kommenden", "kommende", "diesen", "diese"),
    period_words=("werktag", "werktage", "wochenende", "morgen", "abend"),
    at=("um",),
    in_=("in",),
    time_words=("mittag", "mitternacht", "morgens", "vormittag", "nachmittag", "abend", "abends"),
    clock=r"\d{1,2}(?::\d{2})?\s?uhr|\d{1,2}:\d{2}",
    day_of_month=r"\d{1,2}\.",
)

FR = DateVocabulary(
    code="fr",
    relative_days=("aujourd'hui", "demain", "après-demain", "hier", "ce soir", "ce week-end"),
    # plurals for "tous les lundis"
    weekdays=("lundi", "mardi", "mercredi", "jeudi", "vendredi", "samedi", "dimanche",
              "lundis", "mardis", "mercredis", "jeudis", "vendredis", "samedis", "dimanches"),
    months=("janvier", "janv", "février", "févr", "mars", "avril", "avr", "mai", "juin", "juillet",
            "juil", "août", "septembre", "sept", "octobre", "oct", "novembre", "nov", "décembre", "déc"),
    units=("jour", "jours", "semaine", "semaines", "mois", "an", "ans", "année", "années"),
    every=("chaque", "tous les", "toutes les"),
    next_after=("prochain", "prochaine"),
    period_words=("jour ouvrable", "jours ouvrables", "week-end", "matin", "soir"),
    at=("à",),
    in_=("dans",),
    time_words=("midi", "minuit", "matin", "après-midi", "soir"),
    clock=r"\d{1,2}\s?h(?:\s?\d{2})?|\d{1,2}:\d{2}",
    day_of_month=r"\d{1,2}(?:er)?",
)

ES = DateVocabulary(
    code="es",
    relative_days=("hoy", "mañana", "pasado mañana", "ayer", "esta noche", "este fin de semana"),
    weekdays=("lunes", "martes", "miércoles", "miercoles", "jueves", "viernes", "sábado", "sabado", "domingo"),
    months=("enero", "febrero", "marzo", "abril", "mayo", "junio", "julio", "agosto", "septiembre",
            "setiembre", "octubre", "noviembre", "diciembre"),
    units=("día", "días", "dia", "dias", "semana", "semanas", "mes", "meses", "año", "años"),
    every=("cada", "todos los", "todas las"),
    next=("el próximo", "la próxima", "próximo", "próxima", "proximo", "proxima"),
    next_after=("que viene",),
    period_words=("día laborable", "días laborables", "fin de semana"),
    at=("a las", "a la"),
    in_=("dentro de", "en"),
    of=("de",),
    time_words=("mediodía", "medianoche", "tarde", "noche"),
    clock=r"\d{1,2}(?::\d{2})?\s?(?:am|pm|h)|\d{1,2}:\d{2}",
)

IT = DateVocabulary(
    code="it",
    relative_days=("oggi", "domani", "dopodomani", "ieri", "stasera", "stanotte", "questo weekend"),
    weekdays=("lunedì", "lunedi", "martedì", "martedi", "mercoledì", "mercoledi", "giovedì", "giovedi",
              "venerdì", "venerdi", "sabato", "domenica"),
    months=("gennaio", "febbraio", "marzo", "aprile", "maggio", "giugno", "luglio", "agosto",
            "settembre", "ottobre", "novembre", "dicembre"),
    units=("giorno", "giorni", "settimana", "settimane", "mese", "mesi", "anno", "anni"),
    every=("ogni", "tutti i", "tutte le"),
    next=("prossimo", "prossima"),
    next_after=("prossimo", "prossima"),
    period_words=("giorno lavorativo", "giorni lavorativi", "weekend"),
    at=("alle", "all'", "a"),
    in_=("tra", "fra"),
    time_words=("mezzogiorno", "mezzanotte", "mattina", "pomeriggio", "sera"),
    clock=r"\d{1,2}:\d{2}",
)

NL = DateVocabulary(
    code="nl",
    relative_days=("vandaag", "morgen", "overmorgen", "gisteren", "vanavond", "dit weekend"),
    weekdays=("maandag", "dinsdag", "woensdag", "donderdag", "vrijdag", "zaterdag", "zondag"),
    months=("januari", "jan", "februari", "feb", "maart", "mrt", "april", "apr", "mei", "juni", "jun",
            "juli", "jul", "augustus", "aug", "september", "sep", "oktober", "okt", "november", "nov",
            "december", "dec"),
    units=("dag", "dagen", "week", "weken", "maand", "maanden", "jaar", "jaren"),
    every=("elke", "iedere", "om de"),
    next=("volgende", "komende", "deze"),
    period_words=("werkdag", "werkdagen", "weekend", "ochtend", "avond"),
    at=("om",),
    in_=("over", "binnen"),
    time_words=("middag", "middernacht", "ochtend", "avond", "'s ochtends", "'s middags", "'s avonds"),
    clock=r"\d{1,2}(?::\d{2})?\s?uur|\d{1,2}:\d{2}",
)

PL = DateVocabulary(
    code="pl",
    relative_days=("dzisiaj", "dziś", "jutro", "pojutrze", "wczoraj", "dziś wieczorem"),
    weekdays=("poniedziałek", "poniedzialek", "wtorek", "środa", "środę", "sroda", "srode", "czwartek",
              "piątek", "piatek", "sobota", "sobotę", "sobote", "niedziela", "niedzielę", "niedziele"),
    months=("styczeń", "stycznia", "luty", "lutego", "marzec", "marca", "kwiecień", "kwietnia", "maj",
            "maja", "czerwiec", "czerwca", "lipiec", "lipca", "sierpień", "sierpnia", "wrzesień",
            "września", "październik", "października", "listopad", "listopada", "grudzień", "grudnia"),
    units=("dzień", "dni", "tydzień", "tygodnie", "tygodni", "miesiąc", "miesiące", "miesięcy", "rok", "lata", "lat"),
    every=("co", "każdy", "każdą", "każde"),
    next=("w przyszły", "w przyszłą", "w przyszłe", "następny", "następna", "następne", "przyszły", "przyszłą"),
    period_words=("dzień roboczy", "dni robocze", "weekend", "rano", "wieczór"),
    at=("o",),
    in_=("za",),
    time_words=("południe", "północ", "rano", "popołudniu", "wieczorem"),
    clock=r"\d{1,2}:\d{2}",
)

PT = DateVocabulary(
    code="pt",
    relative_days=("hoje", "amanhã", "amanha", "depois de amanhã", "ontem", "esta noite", "este fim de semana"),
    weekdays=("segunda-feira", "segunda", "terça-feira", "terça", "terca", "quarta-feira", "quarta",
              "quinta-feira", "quinta", "sexta-feira", "sexta", "sábado", "sabado", "domingo"),
    months=("janeiro", "fevereiro", "março", "marco", "abril", "maio", "junho", "julho", "agosto",
            "setembro", "outubro", "novembro", "dezembro"),
    units=("dia", "dias", "semana", "semanas", "mês", "mes", "meses", "ano", "anos"),
    every=("todos os", "todas as", "todo", "toda", "cada"),
    next=("próximo", "próxima", "proximo", "proxima"),
    next_after=("que vem",),
    period_words=("dia útil", "dias úteis", "fim de semana"),
    at=("às", "as", "à", "ao"),
    in_=("daqui a", "em"),
    of=("de",),
    time_words=("meio-dia", "meia-noite", "manhã", "tarde", "noite"),
    clock=r"\d{1,2}h(?:\d{2})?|\d{1,2}:\d{2}",
)

RU = DateVocabulary(
    code="ru",
    relative_days=("сегодня", "завтра", "послезавтра", "вчера", "сегодня вечером", "на выходных"),
    weekdays=("понедельник", "вторник", "среда", "среду", "четверг", "пятница", "пятницу",
              "суббота", "субботу", "воскресенье"),
    months=("январь", "января", "февраль", "февраля", "март", "марта", "апрель", "апреля", "май", "мая",
            "июнь", "июня", "июль", "июля", "август", "августа", "сентябрь", "сентября", "октябрь",
            "октября", "ноябрь", "ноября", "декабрь", "декабря"),
    units=("день", "дня", "дней", "неделя", "недели", "неделю", "недель", "месяц", "месяца", "месяцев",
           "год", "года", "лет"),
    every=("каждый", "каждую", "каждое", "каждые"),
    next=("в следующий", "в следующую", "в следующее", "следующий", "следующую", "следующее"),
    period_words=("рабочий день", "рабочие дни", "выходные", "утро", "вечер"),
    at=("в",),
    in_=("через",),
    time_words=("полдень", "полночь", "утром", "днём", "днем", "вечером", "ночью"),
    clock=r"\d{1,2}:\d{2}",
)

SV = DateVocabulary(
    code="sv",
    relative_days=("idag", "i dag", "imorgon", "i morgon", "övermorgon", "i övermorgon", "igår", "i går",
                   "ikväll", "i kväll", "i helgen"),
    weekdays=("måndag", "tisdag", "onsdag", "torsdag", "fredag", "lördag", "söndag"),
    months=("januari", "jan", "februari", "feb", "mars", "mar", "april", "apr", "maj", "juni", "jun",
            "juli", "jul", "augusti", "aug", "september", "sep", "oktober", "okt", "november", "nov",
            "december", "dec"),
    units=("dag", "dagar", "vecka", "veckor", "månad", "månader", "år"),
    every=("varannan", "varje", "var"),
    next=("nästa", "kommande"),
    period_words=("vardag", "vardagar", "helg"),
    at=("klockan", "kl.", "kl"),
    in_=("om",),
    time_words=("lunch", "midnatt", "förmiddag", "eftermiddag", "kväll"),
    clock=r"\d{1,2}(?::\d{2}|\.\d{2})",
)

DA = DateVocabulary(
    code="da",
    relative_days=("idag", "i dag", "imorgen", "i morgen", "overmorgen", "i overmorgen", "igår", "i går",
                   "i aften", "i weekenden"),
    weekdays=("mandag", "tirsdag", "onsdag", "torsdag", "fredag", "lørdag", "søndag"),
    months=("januar", "jan", "februar", "feb", "marts", "mar", "april", "apr", "maj", "juni", "jun",
            "juli", "jul", "august", "aug", "september", "sep", "oktober", "okt", "november", "nov",
            "december", "dec"),
    units=("dag", "dage", "uge", "uger", "måned", "måneder", "år"),
    every=("hver anden", "hver", "hvert"),
    next=("næste", "kommende"),
    period_words=("hverdag", "hverdage", "weekend"),
    at=("klokken", "kl.", "kl"),
    in_=("om",),
    time_words=("middag", "midnat", "formiddag", "eftermiddag", "aften"),
    clock=r"\d{1,2}(?::\d{2}|\.\d{2})",
)

JA = DateVocabulary(
    code="ja",
    relative_days=("今日", "きょう", "明日", "あした", "あす", "明後日", "あさって", "昨日", "今夜", "今晩",
                   "今週末", "来週", "再来週", "来月", "来年"),
    weekdays=("月曜日", "月曜", "火曜日", "火曜", "水曜日", "水曜", "木曜日", "木曜", "金曜日", "金曜",
              "土曜日", "土曜", "日曜日", "日曜"),
    months=_numbered("月"),
    units=("週間", "ヶ月", "か月", "カ月", "日", "週", "月", "年"),
    every=("毎",),
    next=("来週の", "今週の", "次の"),
    period_words=("平日", "週末", "朝", "晩"),
    at=("の",),
    later=("後",),
    time_words=("正午", "真夜中", "朝", "昼", "夕方", "夜"),
    clock=r"(?:午前|午後)?\d{1,2}時(?:\d{1,2}分|半)?|\d{1,2}:\d{2}",
    hour=None,
    day_of_month=r"\d{1,2}日",
    spaced=False,
)

ZH = DateVocabulary(
    code="zh",
    relative_days=("今天", "明天", "后天", "後天", "昨天", "今晚", "明晚", "这周末", "這週末", "下周", "下週",
                   "下个月", "下個月", "明年"),
    weekdays=tuple(f"{prefix}{day}" for prefix in ("星期", "周", "週", "礼拜", "禮拜")
                   for day in ("一", "二", "三", "四", "五", "六", "日", "天")),
    months=tuple(f"{n}月" for n in _CJK_NUMERALS) + _numbered("月"),
    units=("个月", "個月", "星期", "天", "周", "週", "月", "年"),
    every=("每个", "每個", "每"),
    next=("下个", "下個", "下"),
    period_words=("工作日", "周末", "週末", "早上", "晚上"),
    later=("之后", "之後", "后", "後"),
    time_words=("中午", "午夜", "早上", "上午", "下午", "晚上"),
    clock=r"(?:上午|下午|早上|晚上|中午)?\d{1,2}(?:点|點)(?:\d{1,2}分?|半)?|\d{1,2}:\d{2}",
    hour=None,
    day_of_month=r"\d{1,2}(?:日|号|號)",
    spaced=False,
)

KO = DateVocabulary(
    code="ko",
    relative_days=("오늘", "내일", "모레", "어제", "오늘 밤", "오늘밤", "이번 주말", "다음 주", "다음주",
                   "다음 달", "내년"),
    weekdays=("월요일", "화요일", "수요일", "목요일", "금요일", "토요일", "일요일"),
    months=_numbered("월"),
    units=("주일", "개월", "일", "주", "달", "년"),
    every=("매",),
    next=("다음", "이번"),
    period_words=("평일", "주말", "아침", "저녁"),
    later=("후", "뒤"),
    time_words=("정오", "자정", "아침", "점심", "저녁", "밤"),
    clock=r"(?:(?:오전|오후)\s?)?\d{1,2}시(?:\s?\d{1,2}분|\s?반)?|\d{1,2}:\d{2}",
    hour=None,
    day_of_month=r"\d{1,2}일",
    spaced=False,
)


LOCALES: Dict[str, DateVocabulary] = {
    v.code: v for v in (DA, DE, EN, ES, FR, IT, JA, KO, NL, PL, PT, RU, SV, ZH)
}


def supported_locales() -> List[str]:
    return sorted(LOCALES)


def get_vocabulary(locale: str) -> DateVocabulary:
    try:
        return LOCALES[locale]
    except (KeyError, TypeError):
        raise UnsupportedLocaleError(
            f"Unsupported locale {locale!r}; expected one of {', '.join(supported_locales())}"
        ) from None
