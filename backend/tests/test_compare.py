import unittest

from backend.simi.models.compare import Operator, compare


class TestOperator(unittest.TestCase):
    def test_parse_known_operators(self) -> None:
        for raw in ["===", "!==", "==", "!=", ">", ">=", "<", "<="]:
            self.assertIsInstance(Operator.parse(raw), Operator)

    def test_parse_rejects_code(self) -> None:
        self.assertIsNone(Operator.parse("== 1 or True or"))
        self.assertIsNone(Operator.parse("<>"))
        self.assertIsNone(Operator.parse(None))


class TestCompare(unittest.TestCase):
    def test_loose_equality_numeric_strings(self) -> None:
        self.assertTrue(compare("==", "3", 3))
        self.assertTrue(compare("==", "1e3", "1000"))
        self.assertFalse(compare("==", "abc", "ABC"))
        self.assertTrue(compare("!=", "abc", "ABC"))

    def test_loose_equality_null(self) -> None:
        self.assertTrue(compare("==", None, ""))
        self.assertTrue(compare("==", None, 0))
        self.assertFalse(compare("==", None, "0"))

    def test_strict_equality_checks_type(self) -> None:
        self.assertFalse(compare("===", "3", 3))
        self.assertTrue(compare("===", 3, 3))
        self.assertFalse(compare("===", 1, True))
        self.assertTrue(compare("!==", 1, 1.0))

    def test_loose_equality_uses_string_truthiness(self) -> None:
        self.assertTrue(compare("==", "0", False))
        self.assertTrue(compare("!=", "0", True))
        self.assertTrue(compare("==", "", False))
        self.assertTrue(compare("==", "1", True))
        self.assertFalse(compare("==", "0.0", False))

    def test_ordering(self) -> None:
        self.assertTrue(compare(">", "10", "9"))
        self.assertTrue(compare(">", "b", "a"))
        self.assertTrue(compare("<=", 2, 2))
        self.assertTrue(compare("<", None, "a"))

    def test_incomparable_ordering_is_false(self) -> None:
        self.assertFalse(compare(">", 5, "abc"))
        self.assertFalse(compare("<", {"a": 1}, [1]))

    def test_unknown_operator_raises(self) -> None:
        with self.assertRaises(ValueError):
            compare("=~", 1, 1)


if __name__ == "__main__":
    unittest.main()
