import pytest

from app.services.recommendation.profile import (
    TasteProfileBuilder,
    build_taste_profile,
    compute_genre_weights,
    compute_rating_preference,
    compute_year_preference,
)
from app.services.recommendation.history import HistoryStore

ACTION, SCIFI, DRAMA, HORROR, COMEDY = 28, 878, 18, 27, 35


def test_genre_weights_rank_shared_genre_first(make_movie):
    liked = [
        make_movie(1, [ACTION, SCIFI], vote_average=8.7),
        make_movie(2, [ACTION], vote_average=8.0),
    ]

    weights = compute_genre_weights(liked)

    assert weights[ACTION] == pytest.approx(1.0)
    # (0.5 * 0.87) / (1.0 * 0.835)
    assert weights[SCIFI] == pytest.approx(0.435 / 0.835)
    assert weights[ACTION] >= weights[SCIFI]


def test_genre_weights_are_normalized(make_movie):
    liked = [
        make_movie(1, [DRAMA, COMEDY], vote_average=6.0),
        make_movie(2, [DRAMA], vote_average=9.0),
        make_movie(3, [HORROR], vote_average=4.0),
        make_movie(4, [COMEDY, HORROR], vote_average=None),
    ]

    weights = compute_genre_weights(liked)

    assert max(weights.values()) == pytest.approx(1.0)
    assert all(0.0 <= w <= 1.0 for w in weights.values())


def test_genre_weights_empty_without_likes():
    assert compute_genre_weights([]) == {}


def test_genre_weights_fall_back_to_frequency_when_unrated(make_movie):
    liked = [
        make_movie(1, [DRAMA, COMEDY], vote_average=None),
        make_movie(2, [DRAMA], vote_average=None),
    ]

    weights = compute_genre_weights(liked)

    assert weights == {DRAMA: 1.0, COMEDY: 0.5}


def test_duplicate_genre_on_one_movie_counts_once(make_movie):
    liked = [make_movie(1, [DRAMA, DRAMA], vote_average=8.0), make_movie(2, [COMEDY], vote_average=8.0)]

    weights = compute_genre_weights(liked)

    assert weights[DRAMA] == pytest.approx(weights[COMEDY])


def test_avoided_genres_are_share_of_dislikes(make_movie):
    disliked = [
        make_movie(10, [HORROR]),
        make_movie(11, [HORROR, COMEDY]),
        make_movie(12, [DRAMA]),
        make_movie(13, [HORROR]),
    ]

    profile = build_taste_profile([], disliked, current_year=2024)

    assert profile.avoided_genres[HORROR] == pytest.approx(0.75)
    assert profile.avoided_genres[COMEDY] == pytest.approx(0.25)
    assert profile.avoided_genres[DRAMA] == pytest.approx(0.25)
    assert profile.avoided_movie_ids == [10, 11, 12, 13]


def test_year_preference_defaults_without_likes():
    pref = compute_year_preference([], current_year=2024)

    assert pref.preferred_start_year == 2000
    assert pref.preferred_end_year == 2024
    assert pref.weight == 1.0


def test_year_preference_defaults_when_no_date_parses(make_movie):
    liked = [make_movie(1, release_date=None), make_movie(2, release_date="soon")]

    pref = compute_year_preference(liked, current_year=2024)

    assert (pref.preferred_start_year, pref.preferred_end_year) == (2000, 2024)


def test_year_preference_centers_on_average_year(make_movie):
    liked = [
        make_movie(1, release_date="2010-03-01"),
        make_movie(2, release_date="2020-11-20"),
        make_movie(3, release_date="not a date"),
    ]

    pref = compute_year_preference(liked, current_year=2024)

    assert pref.preferred_start_year == 2010
    assert pref.preferred_end_year == 2020


def test_year_preference_uses_minimum_range(make_movie):
    liked = [make_movie(1, release_date="2010-01-01"), make_movie(2, release_date="2011-01-01")]

    pref = compute_year_preference(liked, current_year=2024)

    # avg 2010 (truncated), range max(5, 1) = 5, half 2
    assert pref.preferred_start_year == 2008
    assert pref.preferred_end_year == 2012


def test_year_preference_truncates_average_before_half_range(make_movie):
    dates = ["2000-01-01", "2000-06-01", "2000-12-01", "2001-01-01"]
    liked = [make_movie(i, release_date=d) for i, d in enumerate(dates, start=1)]

    pref = compute_year_preference(liked, current_year=2024)

    # avg 2000.25 -> 2000, so the window starts at 1998 rather than 1997.75
    assert (pref.preferred_start_year, pref.preferred_end_year) == (1998, 2002)


def test_year_preference_clamped_to_current_year_and_1900(make_movie):
    recent = compute_year_preference(
        [make_movie(1, release_date="2023-01-01"), make_movie(2, release_date="2024-01-01")],
        current_year=2024,
    )
    assert recent.preferred_end_year == 2024

    old = compute_year_preference(
        [make_movie(1, release_date="1895-01-01"), make_movie(2, release_date="1899-01-01")],
        current_year=2024,
    )
    assert old.preferred_start_year == 1900


def test_rating_preference_is_lowest_like_minus_one(make_movie):
    liked = [make_movie(1, vote_average=8.7), make_movie(2, vote_average=8.0)]

    pref = compute_rating_preference(liked)

    assert pref.min_rating == pytest.approx(7.0)
    assert pref.preferred_rating == 10.0


def test_rating_preference_floor(make_movie):
    assert compute_rating_preference([make_movie(1, vote_average=5.5)]).min_rating == 5.0
    # an unrated like counts as 0
    liked = [make_movie(1, vote_average=9.0), make_movie(2, vote_average=None)]
    assert compute_rating_preference(liked).min_rating == 5.0


def test_build_profile_is_pure(make_movie):
    liked = [make_movie(1, [ACTION], vote_average=8.0), make_movie(2, [DRAMA], vote_average=7.0)]
    disliked = [make_movie(3, [HORROR])]

    first = build_taste_profile(liked, disliked, current_year=2024)
    second = build_taste_profile(liked, disliked, current_year=2024)

    assert first == second


class _StaticHistory(HistoryStore):
    def __init__(self, liked, disliked):
        self.liked = liked
        self.disliked = disliked

    def get_liked(self, user_id):
        return self.liked

    def get_disliked(self, user_id):
        return self.disliked

    def count_liked(self, user_id):
        return len(self.liked)

    def count_disliked(self, user_id):
        return len(self.disliked)


def test_builder_reads_history(make_movie):
    history = _StaticHistory(
        [make_movie(1, [ACTION], vote_average=8.0), make_movie(2, [ACTION], vote_average=6.0)],
        [make_movie(9, [HORROR])],
    )

    profile = TasteProfileBuilder(history).build_profile(user_id=1, current_year=2024)

    assert profile.genre_weights == {ACTION: 1.0}
    assert profile.avoided_genres == {HORROR: 1.0}
    assert profile.avoided_movie_ids == [9]
    assert profile.rating_preference.min_rating == 5.0
