# ligitabl/domain/cooldown.py
from dataclasses import dataclass, replace
from datetime import datetime, timedelta

from ligitabl.domain.errors import DomainValidationError

DEFAULT_COOLDOWN_WINDOW = timedelta(hours=24)


@dataclass(frozen=True)
class SwapCooldown:
    """Estado que controla cada cuánto puede un usuario cambiar su predicción.

    - Sin predicción inicial: cambios ilimitados.
    - Tras la inicial (swap_count == 0): un swap extra sin esperar (bonus).
    - A partir de ahí: hay que esperar `window` desde el último swap.
    """
    last_swap_at: datetime | None = None
    initial_prediction_made: bool = False
    swap_count: int = 0
    window: timedelta = DEFAULT_COOLDOWN_WINDOW

    def __post_init__(self):
        if self.swap_count < 0:
            raise DomainValidationError(f"Swap count cannot be negative: {self.swap_count}")

    @classmethod
    def initial(cls, window: timedelta = DEFAULT_COOLDOWN_WINDOW) -> "SwapCooldown":
        return cls(window=window)

    @property
    def first_swap_bonus_available(self) -> bool:
        return self.initial_prediction_made and self.swap_count == 0

    def can_swap(self, now: datetime) -> bool:
        if not self.initial_prediction_made:
            return True
        if self.swap_count == 0 or self.last_swap_at is None:
            return True
        return now - self.last_swap_at >= self.window

    def is_on_cooldown(self, now: datetime) -> bool:
        return not self.can_swap(now)

    def next_swap_at(self) -> datetime | None:
        if self.first_swap_bonus_available or not self.initial_prediction_made:
            return None
        if self.last_swap_at is None:
            return None
        return self.last_swap_at + self.window

    def remaining(self, now: datetime) -> timedelta:
        if self.can_swap(now):
            return timedelta(0)
        return self.next_swap_at() - now

    def record_swap(self, now: datetime) -> "SwapCooldown":
        # La primera llamada marca la predicción inicial; las siguientes cuentan como swaps
        swap_count = self.swap_count + 1 if self.initial_prediction_made else self.swap_count
        return replace(
            self, last_swap_at=now, initial_prediction_made=True, swap_count=swap_count
        )

    def reset(self) -> "SwapCooldown":
        return SwapCooldown.initial(self.window)

    def status_message(self, now: datetime) -> str:
        if not self.initial_prediction_made:
            return "Make your initial prediction! You can make unlimited changes before submitting."
        if self.first_swap_bonus_available:
            return f"You can make your first swap without waiting {format_window(self.window)}"
        if self.can_swap(now):
            return "You can make changes now!"

        time_left = format_remaining(self.remaining(now))
        if self.swap_count == 1:
            return (
                "Cooldown active. You've submitted changes for this period. "
                f"Next change in {time_left}."
            )
        return (
            "Cooldown active. You've already submitted changes for this period. "
            f"Next change in {time_left}."
        )


def format_remaining(delta: timedelta) -> str:
    """'2h', '1h 30m', '45m' o '1m'."""
    total_seconds = max(int(delta.total_seconds()), 0)
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60

    if hours >= 2:
        return f"{hours}h"
    if hours == 1:
        return f"1h {minutes}m" if minutes > 0 else "1h"
    if minutes <= 1:
        return "1m"
    return f"{minutes}m"


def format_window(window: timedelta) -> str:
    total_minutes = int(window.total_seconds() // 60)
    if total_minutes % 60 == 0:
        hours = total_minutes // 60
        return f"{hours} hour" if hours == 1 else f"{hours} hours"
    return f"{total_minutes} minute" if total_minutes == 1 else f"{total_minutes} minutes"
