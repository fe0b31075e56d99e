import pytest

from lyricquiz.analysis.sampling import (
    build_choices,
    eligible_songs,
    make_rng,
    pick_distractors,
    pick_random_guess,
    question_indices,
)
from lyricquiz.util.errors import EmptyCorpusError, InsufficientDistractorsError

from conftest import make_song


def test_question_lines_are_adjacent_and_distinct(twenty_line_corpus):
    rng = make_rng(3)
    for _ in range(50):
        q = pick_random_guess(twenty_line_corpus, rng)
        assert q.song.lines[q.line_index] == q.shown_line
        assert q.song.lines[q.line_index + 1] == q.answer
        assert q.shown_line != q.answer
        assert q.shown_line and q.answer


def test_same_seed_same_question(twenty_line_corpus):
    a = pick_random_guess(twenty_line_corpus, make_rng(42))
    b = pick_random_guess(twenty_line_corpus, make_rng(42))
    assert (a.song.title, a.line_index) == (b.song.title, b.line_index)


def test_single_line_songs_cannot_produce_questions():
    songs = [make_song(["only line"], title="A"), make_song(["another only line"], title="B")]
    with pytest.raises(EmptyCorpusError):
        pick_random_guess(songs, make_rng(0))


def test_empty_corpus_raises():
    with pytest.raises(EmptyCorpusError):
        pick_random_guess([], make_rng(0))


def test_repeated_lines_are_not_question_pairs():
    chant = make_song(["la la", "la la", "la la"])
    assert question_indices(chant) == []
    assert eligible_songs([chant]) == []

    song = make_song(["la la", "la la", "and then"])
    assert question_indices(song) == [1]
    q = pick_random_guess([chant, song], make_rng(1))
    assert q.answer == "and then"


def test_distractors_are_distinct_and_exclude_answer(twenty_line_corpus):
    answer = "FIRST song line 3"
    picked = pick_distractors(answer, twenty_line_corpus, make_rng(7), count=16)
    keys = [line.casefold() for line in picked]
    assert len(picked) == 16
    assert len(set(keys)) == 16
    assert answer.casefold() not in keys


def test_case_variants_count_as_duplicates():
    song = make_song(["Hello there", "hello there", "HELLO THERE", "goodbye", "again"])
    picked = pick_distractors("again", [song], make_rng(5), count=2)
    assert sorted(line.casefold() for line in picked) == ["goodbye", "hello there"]


def test_small_corpus_cannot_supply_distractors():
    song = make_song(["one", "two", "three"])
    with pytest.raises(InsufficientDistractorsError):
        pick_distractors("one", [song], make_rng(0), count=16)


def test_no_lines_at_all():
    with pytest.raises(InsufficientDistractorsError):
        pick_distractors("one", [], make_rng(0), count=1)


def test_zero_distractors():
    assert pick_distractors("one", [], make_rng(0), count=0) == []


def test_choices_contain_answer_once(twenty_line_corpus):
    rng = make_rng(11)
    q = pick_random_guess(twenty_line_corpus, rng)
    choices = build_choices(q, twenty_line_corpus, rng, count=16)
    assert len(choices) == 17
    assert choices.count(q.answer) == 1
