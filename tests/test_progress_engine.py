import math
from datetime import date, timedelta

from app.progress import (
    ACHIEVEMENTS,
    ProfileState,
    ResultSample,
    apply_result,
    compute_aggregates,
    evaluate_unlocks,
    level_for_xp,
    next_streak,
    xp_for_level,
)

DAY1 = date(2026, 3, 1)


def sample(reps, day=DAY1, duration=60):
    return ResultSample(repetitions=reps, duration_seconds=duration, day=day)


def test_xp_is_ten_per_repetition():
    delta = apply_result(ProfileState(), [], sample(7), DAY1)

    assert delta.xp_gained == 70
    assert delta.profile.xp == 70


def test_apply_result_does_not_mutate_input_profile():
    profile = ProfileState(xp=50, unlocked_achievements=["first_blood"])

    apply_result(profile, [sample(5)], sample(20), DAY1)

    assert profile.xp == 50
    assert profile.unlocked_achievements == ["first_blood"]


def test_level_formula_boundaries():
    assert level_for_xp(0) == 1
    assert level_for_xp(99) == 1
    assert level_for_xp(100) == 2
    assert level_for_xp(399) == 2
    assert level_for_xp(400) == 3
    assert level_for_xp(900) == 4
    assert xp_for_level(1) == 0
    assert xp_for_level(3) == 400


def test_level_up_reported_only_when_level_increases():
    first = apply_result(ProfileState(), [], sample(5), DAY1)
    assert first.new_level == 1
    assert first.level_up is False

    second = apply_result(first.profile, [sample(5)], sample(5), DAY1)
    assert second.profile.xp == 100
    assert second.new_level == 2
    assert second.level_up is True


def test_level_invariant_holds_after_every_update():
    profile = ProfileState()
    history = []
    for i, reps in enumerate([0, 1, 9, 3, 40, 17, 0, 120, 55, 2, 300]):
        day = DAY1 + timedelta(days=i // 2)
        delta = apply_result(profile, history, sample(reps, day), day)
        profile = delta.profile
        history.append(sample(reps, day))

        assert profile.level == math.floor(math.sqrt(profile.xp / 100)) + 1
        assert delta.new_level == profile.level


def test_streak_starts_at_one_for_first_session():
    assert next_streak(0, None, DAY1) == (1, DAY1)


def test_streak_same_day_unchanged():
    assert next_streak(3, DAY1, DAY1) == (3, DAY1)


def test_streak_continues_on_next_day():
    profile = ProfileState(current_streak=3, last_active_date=DAY1)

    delta = apply_result(profile, [], sample(1, DAY1 + timedelta(days=1)), DAY1 + timedelta(days=1))

    assert delta.profile.current_streak == 4
    assert delta.profile.last_active_date == DAY1 + timedelta(days=1)


def test_streak_resets_after_gap():
    profile = ProfileState(current_streak=3, last_active_date=DAY1)
    day4 = DAY1 + timedelta(days=3)

    delta = apply_result(profile, [], sample(1, day4), day4)

    assert delta.profile.current_streak == 1
    assert delta.profile.last_active_date == day4


def test_backdated_result_leaves_streak_untouched():
    profile = ProfileState(xp=0, current_streak=4, last_active_date=DAY1)
    earlier = DAY1 - timedelta(days=2)

    delta = apply_result(profile, [], sample(3, earlier), earlier)

    assert delta.profile.current_streak == 4
    assert delta.profile.last_active_date == DAY1
    assert delta.xp_gained == 30


def test_best_session_keeps_maximum():
    profile = ProfileState(best_session_repetitions=25)

    assert apply_result(profile, [], sample(10), DAY1).profile.best_session_repetitions == 25
    assert apply_result(profile, [], sample(40), DAY1).profile.best_session_repetitions == 40


def test_aggregates_count_today_only_for_daily_values():
    results = [sample(5, DAY1 - timedelta(days=1)), sample(10), sample(15)]

    aggregates = compute_aggregates(results, DAY1, best_session_repetitions=15, current_streak=2)

    assert aggregates.total_repetitions_all_time == 30
    assert aggregates.repetitions_today == 25
    assert aggregates.sessions_today == 2


def test_first_session_unlocks_first_blood():
    delta = apply_result(ProfileState(), [], sample(1), DAY1)

    assert [a.id for a in delta.newly_unlocked] == ["first_blood"]
    assert delta.profile.unlocked_achievements == ["first_blood"]


def test_century_club_unlocks_when_total_reaches_one_hundred():
    profile = ProfileState(
        xp=990,
        level=level_for_xp(990),
        unlocked_achievements=["first_blood"],
        current_streak=1,
        last_active_date=DAY1 - timedelta(days=5),
        best_session_repetitions=9,
    )
    past = [sample(9, DAY1 - timedelta(days=d)) for d in range(1, 12)]
    assert sum(r.repetitions for r in past) == 99

    delta = apply_result(profile, past, sample(1), DAY1)

    assert [a.id for a in delta.newly_unlocked] == ["century_club"]
    assert "first_blood" in delta.profile.unlocked_achievements


def test_unlocks_are_reported_in_catalog_order():
    profile = ProfileState(current_streak=4, last_active_date=DAY1 - timedelta(days=1))

    delta = apply_result(profile, [], sample(100), DAY1)

    catalog_order = [a.id for a in ACHIEVEMENTS]
    ids = [a.id for a in delta.newly_unlocked]
    assert ids == sorted(ids, key=catalog_order.index)
    assert ids == ["first_blood", "century_club", "iron_streak", "daily_grind", "tier_beginner"]


def test_tier_intermediate_needs_three_sessions_today():
    past = [sample(500, DAY1 - timedelta(days=1)), sample(30), sample(30)]
    profile = ProfileState(best_session_repetitions=500, current_streak=2, last_active_date=DAY1)

    delta = apply_result(profile, past, sample(5), DAY1)

    assert "tier_intermediate" in [a.id for a in delta.newly_unlocked]


def test_unlock_pass_is_idempotent_on_replay():
    delta = apply_result(ProfileState(), [], sample(25), DAY1)
    updated = delta.profile
    aggregates = compute_aggregates(
        [sample(25)], DAY1,
        best_session_repetitions=updated.best_session_repetitions,
        current_streak=updated.current_streak,
    )
    before = list(updated.unlocked_achievements)

    assert evaluate_unlocks(updated, aggregates) == []
    assert updated.unlocked_achievements == before


def test_unlocked_achievements_never_shrink():
    profile = ProfileState(unlocked_achievements=["consistency_hero"])

    delta = apply_result(profile, [], sample(1), DAY1)

    assert "consistency_hero" in delta.profile.unlocked_achievements
