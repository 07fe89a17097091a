import unittest
import sys
import os
import time
import logging

# Add project root
sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

# --- LOGGING SETUP ---
logging.basicConfig(level=logging.CRITICAL)  # Silence internal logs during tests

from lark import Token, Tree

from taskquery.grammar import UnsupportedLocaleError
from taskquery.parser.engine import ForestReader, QueryParser, normalize_value
from taskquery.schemas.token import QueryToken, TokenKind


def shape(sequence):
    return [(token.kind, str(token)) for token in sequence]


# ==================================================================================
# 1. TOKENIZATION OF MARKERS
# ==================================================================================
class TestMarkers(unittest.TestCase):
    """
    Labels, projects and priorities are recognized only in marker form.
    """

    @classmethod
    def setUpClass(cls):
        cls.parser = QueryParser("en")

    def best(self, text):
        return shape(self.parser.parse(text)[0])

    def test_labels(self):
        self.assertEqual(
            self.best("buy milk @home @errand"),
            [("content", "buy milk "), ("label", "home"), ("content", " "), ("label", "errand")],
        )

    def test_label_requires_leading_whitespace(self):
        self.assertEqual(self.best("mail me@example.org"), [("content", "mail me@example.org")])

    def test_project_single_word(self):
        self.assertEqual(self.best("review #Work"), [("content", "review "), ("project", "Work")])

    def test_project_bracketed(self):
        self.assertEqual(
            self.best("#[Big Project] plan it"),
            [("project", "Big Project"), ("content", " plan it")],
        )

    def test_unterminated_bracket_is_content(self):
        self.assertEqual(self.best("#[unterminated name"), [("content", "#[unterminated name")])

    def test_priority_levels(self):
        for level in "1234":
            with self.subTest(level=level):
                self.assertEqual(self.best(f"!!{level}"), [("priority", level)])

    def test_invalid_priority_is_content(self):
        for text in ("!!5", "!!0", "!!12", "!1"):
            with self.subTest(text=text):
                self.assertEqual(self.best(text), [("content", text)])

    def test_marker_offsets(self):
        label = self.parser.parse("buy milk @home")[0][1]
        self.assertEqual((label.start_pos, label.end_pos), (9, 14))
        self.assertEqual(label, "home")


# ==================================================================================
# 2. DATE PHRASES
# ==================================================================================
class TestDatePhrases(unittest.TestCase):
    """
    The longest date phrase wins over shorter readings of the same words.
    """

    @classmethod
    def setUpClass(cls):
        cls.parser = QueryParser("en")

    def due(self, text):
        return [str(t) for t in self.parser.parse(text)[0] if t.kind == TokenKind.DATE]

    def test_relative_day(self):
        self.assertEqual(self.due("buy milk tomorrow"), ["tomorrow"])

    def test_day_and_time_form_one_phrase(self):
        self.assertEqual(self.due("call mom tomorrow at 5pm"), ["tomorrow at 5pm"])

    def test_time_before_day(self):
        self.assertEqual(self.due("dinner 7pm tomorrow"), ["7pm tomorrow"])

    def test_next_weekday(self):
        self.assertEqual(self.due("submit report next friday"), ["next friday"])

    def test_recurrence(self):
        self.assertEqual(self.due("water plants every other day"), ["every other day"])
        self.assertEqual(self.due("standup every monday at 9am"), ["every monday at 9am"])
        self.assertEqual(self.due("backup every 2 weeks"), ["every 2 weeks"])

    def test_offset(self):
        self.assertEqual(self.due("pay rent in 3 days"), ["in 3 days"])

    def test_calendar_dates(self):
        self.assertEqual(self.due("meeting on jan 15"), ["jan 15"])
        self.assertEqual(self.due("dentist 2024-03-15"), ["2024-03-15"])

    def test_case_insensitive(self):
        self.assertEqual(self.due("Buy milk TOMORROW"), ["TOMORROW"])

    def test_words_inside_other_words_are_content(self):
        self.assertEqual(self.due("todays news"), [])
        self.assertEqual(self.due("put cat in box"), [])

    def test_weekly_recurrence_with_unit_and_weekday(self):
        self.assertEqual(self.due("standup every week monday"), ["every week monday"])

    def test_date_offsets_cover_literal_span(self):
        date = self.parser.parse("call mom tomorrow at 5pm")[0][-1]
        self.assertEqual((date.start_pos, date.end_pos), (9, 24))


# ==================================================================================
# 3. CANDIDATES, ORDERING AND TOTALITY
# ==================================================================================
class TestCandidates(unittest.TestCase):

    def setUp(self):
        self.parser = QueryParser("en")

    def test_first_candidate_recognizes_most(self):
        candidates = self.parser.parse("buy milk tomorrow")
        self.assertEqual(shape(candidates[0]), [("content", "buy milk "), ("date", "tomorrow")])
        self.assertIn([("content", "buy milk tomorrow")], [shape(c) for c in candidates])

    def test_candidates_are_distinct(self):
        candidates = self.parser.parse("call mom tomorrow at 5pm @home")
        signatures = [tuple(t.signature() for t in c) for c in candidates]
        self.assertEqual(len(signatures), len(set(signatures)))
        self.assertGreater(len(candidates), 1)

    def test_candidate_limit(self):
        parser = QueryParser("en", max_candidates=1)
        self.assertEqual(len(parser.parse("call mom tomorrow at 5pm")), 1)

    def test_iter_parses_is_lazy(self):
        first = next(self.parser.iter_parses("buy milk tomorrow"))
        self.assertEqual(shape(first)[-1], ("date", "tomorrow"))

    def test_deterministic(self):
        text = "Submit report !!2 #Work @office next friday"
        runs = [[shape(c) for c in QueryParser("en").parse(text)] for _ in range(3)]
        self.assertEqual(runs[0], runs[1])
        self.assertEqual(runs[1], runs[2])

    def test_empty_text(self):
        self.assertEqual([shape(c) for c in self.parser.parse("")], [[("content", "")]])

    def test_whitespace_only(self):
        self.assertEqual(shape(self.parser.parse("   ")[0]), [("content", "   ")])

    def test_overlong_query_degrades(self):
        parser = QueryParser("en", max_query_length=10)
        text = "tomorrow @home"
        with self.assertLogs("taskquery.parser.engine", level="WARNING"):
            candidates = parser.parse(text)
        self.assertEqual([shape(c) for c in candidates], [[("content", text)]])

    def test_non_string_rejected(self):
        with self.assertRaises(TypeError):
            self.parser.parse(42)

    def test_bad_settings_rejected(self):
        with self.assertRaises(ValueError):
            QueryParser("en", max_candidates=0)
        with self.assertRaises(ValueError):
            QueryParser("en", max_query_length=0)

    def test_unknown_locale(self):
        with self.assertRaises(UnsupportedLocaleError):
            QueryParser("xx")


# ==================================================================================
# 4. LOCALES
# ==================================================================================
class TestLocales(unittest.TestCase):
    """
    Date words are only recognized in the parser's own locale.
    """

    def due(self, locale, text):
        return [str(t) for t in QueryParser(locale).parse(text)[0] if t.kind == TokenKind.DATE]

    def test_locale_isolation(self):
        self.assertEqual(self.due("ja", "tomorrow"), [])
        self.assertEqual(self.due("de", "buy milk tomorrow"), [])
        self.assertEqual(self.due("en", "Milch kaufen morgen"), [])

    def test_german(self):
        self.assertEqual(self.due("de", "Milch kaufen morgen"), ["morgen"])
        self.assertEqual(self.due("de", "Bericht schreiben nächsten Montag"), ["nächsten Montag"])

    def test_french_postfix_next(self):
        self.assertEqual(self.due("fr", "rendre le livre lundi prochain"), ["lundi prochain"])

    def test_french_plural_weekday_recurrence(self):
        self.assertEqual(self.due("fr", "réunion tous les lundis"), ["tous les lundis"])
        self.assertEqual(self.due("fr", "réunion tous les lundis à 9h"), ["tous les lundis à 9h"])

    def test_spanish_day_and_time(self):
        self.assertEqual(self.due("es", "llamar a mamá mañana a las 5pm"), ["mañana a las 5pm"])

    def test_japanese_without_spaces(self):
        candidates = QueryParser("ja").parse("牛乳を買う 明日")
        self.assertEqual(shape(candidates[0]), [("content", "牛乳を買う "), ("date", "明日")])

    def test_weekly_recurrence_stays_one_phrase(self):
        # "every week" + weekday must not split into two dates
        self.assertEqual(self.due("ja", "毎週月曜日 会議"), ["毎週月曜日"])
        self.assertEqual(self.due("ja", "毎週月曜日 9時 会議"), ["毎週月曜日 9時"])
        self.assertEqual(self.due("ko", "매주 월요일 회의"), ["매주 월요일"])
        self.assertEqual(self.due("ko", "매주 월요일 오전 9시 회의"), ["매주 월요일 오전 9시"])
        self.assertEqual(self.due("zh", "每周 星期一 开会"), ["每周 星期一"])
        self.assertEqual(self.due("zh", "每周一 开会"), ["每周一"])

    def test_markers_are_locale_independent(self):
        best = QueryParser("ru").parse("купить молоко @дом !!1")[0]
        self.assertEqual([t.kind for t in best], ["content", "label", "content", "priority"])
        self.assertEqual(best[1], "дом")


# ==================================================================================
# 5. SCALING
# ==================================================================================
class TestScaling(unittest.TestCase):
    """
    Parse time grows with the number of pieces, not with their combinations.
    """

    def timed(self, locale, text):
        parser = QueryParser(locale)
        started = time.monotonic()
        candidates = parser.parse(text)
        return time.monotonic() - started, candidates

    def test_marker_dense_query(self):
        text = "@a " * 160
        self.assertLessEqual(len(text), QueryParser("en").max_query_length)
        elapsed, candidates = self.timed("en", text)
        self.assertLess(elapsed, 5.0)
        self.assertEqual(sum(1 for t in candidates[0] if t.kind == TokenKind.LABEL), 160)

    def test_date_dense_query(self):
        text = "call mom tomorrow at 5pm @home !!2 " * 13
        elapsed, candidates = self.timed("en", text)
        self.assertLess(elapsed, 5.0)
        self.assertEqual(sum(1 for t in candidates[0] if t.kind == TokenKind.DATE), 13)

    def test_unspaced_query(self):
        text = "会議明日" * 120
        elapsed, candidates = self.timed("ja", text)
        self.assertLess(elapsed, 5.0)
        self.assertEqual(sum(1 for t in candidates[0] if t.kind == TokenKind.DATE), 120)


# ==================================================================================
# 6. FOREST READING
# ==================================================================================
class TestForestReader(unittest.TestCase):
    """
    Hand-built forests: candidates follow (content chars, markers and dates).
    """

    def tok(self, kind, value, pos):
        return Token(kind, value, start_pos=pos)

    def content(self, text, start, end):
        return Tree("content", [self.tok("TEXT", text[start:end], start)])

    def element(self, kind, terminal, value, pos):
        return Tree("element", [Tree(kind, [self.tok(terminal, value, pos)])])

    def test_ambiguity_sorted_by_score(self):
        text = "a @b"
        all_content = Tree("start", [Tree("chain", [self.content(text, 0, 4)])])
        with_label = Tree("start", [Tree("chain", [
            Tree("chain", [self.content(text, 0, 2)]),
            self.element("label", "LABEL", "@b", 2),
        ])])
        forest = Tree("_ambig", [all_content, with_label])

        candidates = list(ForestReader(text).candidates(forest, limit=5))
        self.assertEqual(shape(candidates[0]), [("content", "a "), ("label", "b")])
        self.assertEqual(shape(candidates[1]), [("content", "a @b")])

    def test_ties_keep_derivation_order(self):
        text = "xy"
        first = Tree("start", [Tree("chain", [self.element("date", "A", "xy", 0)])])
        second = Tree("start", [Tree("chain", [self.element("label", "B", "xy", 0)])])
        reader = ForestReader(text)
        candidates = list(reader.candidates(Tree("_ambig", [first, second]), limit=5))
        self.assertEqual([c[0].kind for c in candidates], ["date", "label"])

    def test_duplicates_dropped(self):
        text = "xy"
        same = Tree("start", [Tree("chain", [self.content(text, 0, 2)])])
        again = Tree("start", [Tree("chain", [self.content(text, 0, 2)])])
        candidates = list(ForestReader(text).candidates(Tree("_ambig", [same, again]), limit=5))
        self.assertEqual(len(candidates), 1)

    def test_adjacent_content_merged(self):
        text = "ab cd"
        forest = Tree("start", [Tree("chain", [
            Tree("chain", [self.content(text, 0, 3)]),
            self.content(text, 3, 5),
        ])])
        (only,) = ForestReader(text).candidates(forest, limit=5)
        self.assertEqual(shape(only), [("content", "ab cd")])
        self.assertEqual((only[0].start_pos, only[0].end_pos), (0, 5))

    def test_pieces_in_derivation_order(self):
        text = "a @b"
        forest = Tree("start", [Tree("chain", [
            Tree("chain", [self.content(text, 0, 2)]),
            self.element("label", "LABEL", "@b", 2),
        ])])
        pieces = ForestReader(text).pieces(forest)
        self.assertEqual([(p.start, p.end, p.token.kind) for p in pieces],
                         [(0, 2, "content"), (2, 4, "label")])
        self.assertEqual([p.score for p in pieces], [(2, 0), (0, 1)])

    def test_normalize_value(self):
        self.assertEqual(normalize_value("label", "@home"), "home")
        self.assertEqual(normalize_value("project", "#[ Big Project ]"), "Big Project")
        self.assertEqual(normalize_value("project", "#Work"), "Work")
        self.assertEqual(normalize_value("priority", "!!3"), "3")
        self.assertEqual(normalize_value("date", "next friday"), "next friday")

    def test_query_token_equality(self):
        token = QueryToken.of("label", "home", 3)
        self.assertEqual(token, "home")
        self.assertEqual(token.kind, "label")
        self.assertEqual(token.end_pos, 7)
        self.assertNotEqual(token, QueryToken.of("project", "home", 3))


if __name__ == "__main__":
    unittest.main(verbosity=2)
