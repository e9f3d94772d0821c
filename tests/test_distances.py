# tests/test_distances.py
import pytest

from fuzzscore.scoring.base import ConfigurationError, common_prefix, qgrams, reorder, split_words
from fuzzscore.scoring.distance import DamerauLevenshtein, Hamming, Levenshtein
from fuzzscore.scoring.jaro import Jaro
from fuzzscore.scoring.qgram import Cosine, Jaccard, Overlap, QGram, SorensenDice
from fuzzscore.scoring.ratcliff import RatcliffObershelp, matching_blocks


class TestHelpers:
    """Fonctions utilitaires sur les séquences."""

    def test_reorder_puts_shorter_first(self):
        assert reorder("abc", "ab") == ("ab", "abc")
        assert reorder("ab", "abc") == ("ab", "abc")

    def test_reorder_keeps_order_on_ties(self):
        assert reorder("cd", "ab") == ("cd", "ab")

    def test_common_prefix(self):
        assert common_prefix("martha", "marhta") == 3
        assert common_prefix("abc", "xbc") == 0
        assert common_prefix("", "abc") == 0
        assert common_prefix("abc", "abc") == 3

    def test_qgrams(self):
        assert list(qgrams("abcd", 2)) == ["ab", "bc", "cd"]
        assert list(qgrams("abcd", 4)) == ["abcd"]
        assert list(qgrams("a", 2)) == []

    def test_qgrams_is_restartable(self):
        assert list(qgrams("abc", 2)) == list(qgrams("abc", 2))

    def test_qgrams_rejects_non_positive_size(self):
        with pytest.raises(ValueError):
            list(qgrams("abc", 0))

    def test_split_words(self):
        assert split_words("  New  York\tMets ") == ["New", "York", "Mets"]
        with pytest.raises(TypeError):
            split_words(["New", "York"])


class TestEditDistances:
    """Hamming, Levenshtein, Damerau-Levenshtein."""

    def test_levenshtein(self):
        assert Levenshtein().evaluate("kitten", "sitting") == 3
        assert Levenshtein().evaluate("New York", "New York") == 0
        assert Levenshtein().evaluate("", "abc") == 3

    def test_levenshtein_bound(self):
        # Au-delà de la borne : n'importe quelle valeur >= borne
        assert Levenshtein().evaluate("kitten", "sitting", 1) >= 1
        assert Levenshtein().evaluate("kitten", "sitting", 3) == 3

    def test_levenshtein_on_lists(self):
        assert Levenshtein().evaluate(["a", "b", "c"], ["a", "c"]) == 1

    def test_damerau_levenshtein_counts_transpositions_once(self):
        assert DamerauLevenshtein().evaluate("ca", "ac") == 1
        assert Levenshtein().evaluate("ca", "ac") == 2
        assert DamerauLevenshtein().evaluate("kitten", "sitting") == 3

    def test_damerau_levenshtein_bound(self):
        assert DamerauLevenshtein().evaluate("kitten", "sitting", 1) >= 1
        assert DamerauLevenshtein().evaluate("a", "abcdef", 2) >= 2
        assert DamerauLevenshtein().evaluate("abcd", "abdc", 1) == 1

    def test_hamming(self):
        assert Hamming().evaluate("karolin", "kathrin") == 3
        assert Hamming().evaluate("abc", "abcde") == 2

    def test_edit_distances_are_not_normalized(self):
        assert not Levenshtein().is_normalized
        assert not DamerauLevenshtein().is_normalized
        assert not Hamming().is_normalized


class TestQGramDistances:
    """Distances q-grammes sur ("abc", "abd") : {ab, bc} contre {ab, bd}."""

    def test_qgram_counts(self):
        assert QGram(2).evaluate("abc", "abd") == 2
        assert QGram(2).evaluate("abab", "ab") == 2

    def test_set_based_distances(self):
        assert Jaccard(2).evaluate("abc", "abd") == pytest.approx(2 / 3)
        assert SorensenDice(2).evaluate("abc", "abd") == pytest.approx(0.5)
        assert Overlap(2).evaluate("abc", "abd") == pytest.approx(0.5)
        assert Cosine(2).evaluate("abc", "abd") == pytest.approx(0.5)

    def test_identical_strings(self):
        for metric in (Cosine(2), Jaccard(2), SorensenDice(2), Overlap(2), QGram(2)):
            assert metric.evaluate("New York", "New York") == 0

    def test_empty_profiles(self):
        assert Jaccard(3).evaluate("ab", "ab") == 0.0
        assert Jaccard(3).evaluate("ab", "abcd") == 1.0

    def test_invalid_q(self):
        with pytest.raises(ConfigurationError):
            QGram(0)

    def test_default_q(self):
        assert Jaccard().q == 2


class TestOtherDistances:
    """Jaro et Ratcliff/Obershelp."""

    def test_jaro(self):
        assert Jaro().evaluate("MARTHA", "MARHTA") == pytest.approx(1 - 0.944444, abs=1e-6)
        assert Jaro().evaluate("", "") == 0.0
        assert Jaro().is_normalized

    def test_matching_blocks(self):
        assert matching_blocks("abxcd", "abcd") == [(0, 0, 2), (3, 2, 2)]
        assert matching_blocks("abc", "xyz") == []

    def test_ratcliff_obershelp(self):
        dist = RatcliffObershelp().evaluate(
            "New York Mets vs Atlanta Braves", "Atlanta Braves vs New York Mets"
        )
        assert dist == pytest.approx(0.5483870967741935)
        assert RatcliffObershelp().evaluate("", "") == 0.0
        assert RatcliffObershelp().is_normalized
