import re
import unittest

from regforge.input_base.input_matcher import InputMatcher


class TestInputMatcher(unittest.TestCase):
    def test_matches_wholly_by_default(self) -> None:
        matcher = InputMatcher(r"\d+")
        self.assertIsNotNone(matcher.match("42"))
        self.assertIsNone(matcher.match("42a"))

        partial = InputMatcher(r"\d+", match_wholly=False)
        self.assertIsNotNone(partial.match("x42a"))

    def test_blanks_are_ignored_by_default(self) -> None:
        matcher = InputMatcher(r"(\d+):(\d+)")
        result = matcher.match(" 7 :\t4 ")
        self.assertIsNotNone(result)
        self.assertEqual(("7", "4"), result.captures)

        strict = InputMatcher(r"(\d+):(\d+)", ignore_blanks=False)
        self.assertIsNone(strict.match(" 7 : 4"))

    def test_index_reports_which_pattern_matched(self) -> None:
        seq = InputMatcher([r"(\d+):(\d+)", r"(\d+)"])
        self.assertEqual(0, seq.match("7:4").index)
        self.assertEqual(1, seq.match("7").index)

        named = InputMatcher({"range": r"(\d+):(\d+)", "single": re.compile(r"(\d+)")})
        self.assertEqual("single", named.match("3").index)

    def test_converter_result_is_exposed_as_data(self) -> None:
        matcher = InputMatcher(r"(?P<msb>\d+):(?P<lsb>\d+)", lambda m: (int(m["msb"]), int(m["lsb"])))
        result = matcher.match("15:8")
        self.assertEqual((15, 8), result.data)
        self.assertEqual({"msb": "15", "lsb": "8"}, result.named_captures)

    def test_non_string_values_are_matched_as_text(self) -> None:
        self.assertIsNotNone(InputMatcher(r"\d+").match(12))
        self.assertIsNone(InputMatcher(r"\d+").match(None))


if __name__ == "__main__":
    unittest.main()
