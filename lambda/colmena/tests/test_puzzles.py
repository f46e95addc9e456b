import json
from unittest.mock import patch

import pytest
from unidecode import unidecode

from colmena.errors import BadPuzzle, TooFewWords, TooManyWords
from colmena.model import Puzzle
from colmena.normalize import normalize
from colmena.pool import WordPool
from colmena.puzzles import generate_from_letters


def test_includes_fitting_words_and_excludes_others(pool):
    puzzle = generate_from_letters("acdegor", pool=pool)
    words = puzzle.words
    assert "cargo" in words
    assert "perro" not in words
    # right letters but no center
    assert "cedro" not in words
    assert len(words) == 34


def test_every_word_respects_the_letters(pool):
    puzzle = generate_from_letters("acdegor", pool=pool)
    letters = set(puzzle.letters)
    for word in puzzle.words:
        stripped = normalize(word)
        assert puzzle.center in stripped
        assert set(stripped) <= letters
    assert 25 <= len(puzzle.words) <= 100


def test_accent_variants_share_a_bucket(pool):
    puzzle = generate_from_letters("acdegor", pool=pool)
    assert puzzle.word_index["cargo"] == frozenset({"cargo", "cargó"})
    assert puzzle.word_index["acorde"] == frozenset({"acorde", "acordé"})
    assert puzzle.lemma_index["cargar"] == frozenset({"cargar", "cargó"})
    assert puzzle.lemma_index["acogedor"] == frozenset({"acogedor", "acogedora"})


def test_pangrams(pool):
    puzzle = generate_from_letters("acdegor", pool=pool)
    assert puzzle.pangrams == ("acogedor", "acogedora")


def test_center_is_first_letter(pool):
    puzzle = generate_from_letters("gacdeor", pool=pool, min_words=1)
    assert puzzle.center == "g"
    assert "coger" in puzzle.words
    assert "cedro" not in puzzle.words
    assert len(puzzle.words) == 14


def test_letters_are_normalized(pool):
    assert generate_from_letters("ÁCDEGOR", pool=pool).letters == tuple("acdegor")


@pytest.mark.parametrize("letters", ["acdego", "acdegorr", "aacdego", "acdeg1r", ["a", "c", "d", "e", "g", "o", "rr"]])
def test_rejects_bad_letters(pool, letters):
    with pytest.raises(ValueError):
        generate_from_letters(letters, pool=pool)


def test_too_few_words(pool):
    with pytest.raises(TooFewWords) as info:
        generate_from_letters("pabcdeg", pool=pool)
    assert isinstance(info.value, BadPuzzle)
    assert info.value.count == 2  # papa, papá
    assert info.value.kind == "TooFewWords"


def test_too_many_words(pool):
    with pytest.raises(TooManyWords) as info:
        generate_from_letters("acdegor", pool=pool, max_words=30)
    assert info.value.count == 34


def test_bounds_are_inclusive(pool):
    assert len(generate_from_letters("acdegor", pool=pool, min_words=34, max_words=34).words) == 34


def test_empty_pool():
    with pytest.raises(TooFewWords):
        generate_from_letters("acdegor", pool=WordPool((), ()))


def test_check_guess(pool):
    puzzle = generate_from_letters("acdegor", pool=pool)
    assert puzzle.check("CARGO").forms == ("cargo", "cargó")
    assert puzzle.check("cargó").accepted
    assert puzzle.check("car").reason == "too_short"
    assert puzzle.check("cedro").reason == "missing_center"
    assert puzzle.check("carda").reason == "not_in_list"


def test_hints(pool):
    hints = generate_from_letters("acdegor", pool=pool).hints()
    assert hints["pangrams"] == 2
    assert sum(sum(v.values()) for v in hints["lengths"].values()) == 34
    assert sum(hints["starts"].values()) == 34
    assert hints["lengths"]["g"] == {5: 4}
    assert hints["starts"]["ca"] == 9


def test_serialization_is_stable(pool):
    puzzle = generate_from_letters("acdegor", pool=pool)
    data = puzzle.to_dict()
    assert data["letters"] == list("acdegor")
    assert data["word_index"]["cargo"] == ["cargo", "cargó"]
    assert Puzzle.from_dict(json.loads(json.dumps(data))) == puzzle
    again = generate_from_letters("acdegor", pool=WordPool(tuple(reversed(pool.words)), pool.pangrams))
    assert json.dumps(again.to_dict()) == json.dumps(data)


@pytest.mark.parametrize("letters", ["acdegor", "racdego", "gacdeor", "ocdegar", "pabcdeg"])
def test_matches_a_plain_scan_of_the_pool(pool, letters):
    puzzle = generate_from_letters(letters, pool=pool, min_words=0, max_words=1000)
    expected = {
        word for word, _ in pool.words
        if letters[0] in normalize(word) and set(normalize(word)) <= set(letters)
    }
    assert puzzle.words == expected
    assert set(puzzle.pangrams) == {w for w in expected if len(set(normalize(w))) == 7}


def test_pool_indexes_words_by_letters(pool):
    assert set(pool.by_letters[frozenset("cargo")]) == {("cargo", "cargo"), ("cargó", "cargar")}
    assert sum(len(v) for v in pool.by_letters.values()) == len(pool.words)


def test_generation_does_not_rescan_the_pool(pool):
    big = WordPool.from_iterables(list(pool.words) + [(f"zumo{i}", "zumo") for i in range(5000)],
                                  pool.pangrams)
    with patch("colmena.normalize.unidecode", wraps=unidecode) as spy:
        puzzle = generate_from_letters("acdegor", pool=big)
    assert len(puzzle.words) == 34
    # the 7 letters plus the accent buckets of the kept words, nothing per pool word
    assert spy.call_count == 7 + 34
