from datetime import datetime, timedelta, timezone

import pytest

from ligitabl.domain.cooldown import SwapCooldown, format_remaining
from ligitabl.domain.errors import DomainValidationError

T0 = datetime(2025, 12, 28, 12, 0, tzinfo=timezone.utc)
DAY = timedelta(hours=24)


@pytest.mark.parametrize("now", [T0, T0 - timedelta(days=365), T0 + timedelta(days=365)])
def test_initial_state_can_always_swap(now):
    assert SwapCooldown.initial().can_swap(now)


def test_first_submission_marks_initial_without_counting_a_swap():
    cooldown = SwapCooldown.initial().record_swap(T0)
    assert cooldown.initial_prediction_made
    assert cooldown.swap_count == 0
    assert cooldown.last_swap_at == T0


def test_bonus_swap_available_immediately_after_initial_prediction():
    cooldown = SwapCooldown.initial().record_swap(T0)
    assert cooldown.first_swap_bonus_available
    assert cooldown.can_swap(T0)


def test_after_bonus_swap_cooldown_applies_for_24_hours():
    cooldown = SwapCooldown.initial().record_swap(T0).record_swap(T0)
    assert cooldown.swap_count == 1
    assert not cooldown.can_swap(T0 + DAY - timedelta(seconds=1))
    assert cooldown.can_swap(T0 + DAY)
    assert cooldown.next_swap_at() == T0 + DAY


def test_each_later_swap_increments_and_restarts_window():
    first = SwapCooldown.initial().record_swap(T0).record_swap(T0)
    later = T0 + DAY
    second = first.record_swap(later)
    assert second.swap_count == 2
    assert second.last_swap_at == later
    assert not second.can_swap(later + timedelta(hours=1))


def test_record_swap_returns_new_value():
    cooldown = SwapCooldown.initial()
    cooldown.record_swap(T0)
    assert not cooldown.initial_prediction_made


def test_reset_returns_to_initial_state_keeping_window():
    window = timedelta(minutes=2)
    used = SwapCooldown.initial(window).record_swap(T0).record_swap(T0)
    reset = used.reset()
    assert reset == SwapCooldown.initial(window)
    assert reset.can_swap(T0)


def test_negative_swap_count_is_rejected():
    with pytest.raises(DomainValidationError):
        SwapCooldown(swap_count=-1)


def test_remaining_time():
    cooldown = SwapCooldown.initial().record_swap(T0).record_swap(T0)
    assert cooldown.remaining(T0 + timedelta(hours=20)) == timedelta(hours=4)
    assert cooldown.remaining(T0 + DAY) == timedelta(0)


@pytest.mark.parametrize("delta, expected", [
    (timedelta(hours=5, minutes=10), "5h"),
    (timedelta(hours=2), "2h"),
    (timedelta(hours=1, minutes=30), "1h 30m"),
    (timedelta(hours=1), "1h"),
    (timedelta(minutes=45), "45m"),
    (timedelta(seconds=30), "1m"),
])
def test_format_remaining(delta, expected):
    assert format_remaining(delta) == expected


def test_status_messages_follow_the_state():
    initial = SwapCooldown.initial()
    assert initial.status_message(T0).startswith("Make your initial prediction!")

    bonus = initial.record_swap(T0)
    assert bonus.status_message(T0) == "You can make your first swap without waiting 24 hours"

    used = bonus.record_swap(T0)
    assert used.status_message(T0 + timedelta(hours=22, minutes=30)) == (
        "Cooldown active. You've submitted changes for this period. Next change in 1h 30m."
    )
    assert used.status_message(T0 + DAY) == "You can make changes now!"

    again = used.record_swap(T0 + DAY)
    assert "already submitted changes" in again.status_message(T0 + DAY)


def test_demo_window_message():
    bonus = SwapCooldown.initial(timedelta(minutes=2)).record_swap(T0)
    assert bonus.status_message(T0) == "You can make your first swap without waiting 2 minutes"
