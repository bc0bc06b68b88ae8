import tempfile
import unittest
from pathlib import Path

from codeduku.core.exceptions import DictionaryLoadError
from codeduku.data.dictionary import DictionaryConfig, WordDictionary
from codeduku.data.normalization import clean_word


class NormalizationTests(unittest.TestCase):
    def test_strips_diacritics_and_keeps_case(self) -> None:
        self.assertEqual(clean_word("Jürgen Mäkelä"), "JurgenMakela")
        self.assertEqual(clean_word("Crème-brûlée"), "Cremebrulee")

    def test_extra_folds(self) -> None:
        self.assertEqual(clean_word("Straße"), "Strasse")
        self.assertEqual(clean_word("Øresund"), "Oresund")

    def test_digits_survive(self) -> None:
        self.assertEqual(clean_word("R2-D2"), "R2D2")

    def test_empty_input(self) -> None:
        self.assertEqual(clean_word(""), "")
        self.assertEqual(clean_word("!?"), "")


class WordDictionaryTests(unittest.TestCase):
    def test_order_defines_phrase_index(self) -> None:
        dictionary = WordDictionary(["cat", "car", "Mäh", "cap"])
        self.assertEqual(dictionary.words, ["cat", "car", "Mah", "cap"])
        self.assertEqual(dictionary.index_of("cap"), 3)
        self.assertEqual(dictionary[1], "car")

    def test_duplicates_keep_first_occurrence(self) -> None:
        dictionary = WordDictionary(["tea", "eat", "tea", "téa"])
        self.assertEqual(dictionary.words, ["tea", "eat"])

    def test_case_variants_are_distinct_words(self) -> None:
        dictionary = WordDictionary(["Rome", "rome"])
        self.assertEqual(len(dictionary), 2)

    def test_length_index(self) -> None:
        dictionary = WordDictionary(["ab", "cat", "do", "car", "sheep"])
        self.assertEqual(dictionary.indices_of_length(3), [1, 3])
        self.assertEqual(dictionary.words_of_length(2), ["ab", "do"])
        self.assertEqual(dictionary.indices_of_length(9), [])
        self.assertEqual(dictionary.max_word_length(), 5)

    def test_length_filters(self) -> None:
        dictionary = WordDictionary(["a", "ab", "abcdef"], min_length=2, max_length=4)
        self.assertEqual(dictionary.words, ["ab"])

    def test_unknown_word_raises_key_error(self) -> None:
        dictionary = WordDictionary(["cat"])
        self.assertNotIn("dog", dictionary)
        with self.assertRaises(KeyError):
            dictionary.index_of("dog")


class DictionaryLoadTests(unittest.TestCase):
    def test_load_skips_comments_and_blank_lines(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "words.txt"
            path.write_text("# animals\ncat\n\n  dog  \nx\ncat\nÆther\n", encoding="utf-8")
            dictionary = WordDictionary.load(DictionaryConfig(path=path))
        self.assertEqual(dictionary.words, ["cat", "dog", "AEther"])

    def test_missing_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(DictionaryLoadError):
                WordDictionary.load(DictionaryConfig(path=Path(tmp) / "missing.txt"))

    def test_undecodable_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "words.txt"
            path.write_bytes(b"\xff\xfe\xfa")
            with self.assertRaises(DictionaryLoadError):
                WordDictionary.load(DictionaryConfig(path=path, encoding="utf-8"))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
