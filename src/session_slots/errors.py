"""Error hierarchy for the slot engine.

Only caller configuration errors raise. A day with no capacity (closed,
window shorter than one cycle, fully booked) is an ordinary result, never
an exception.

All errors derive from ValueError so boundary code that already handles
ValueError from the loaders treats them the same way:

    try:
        settings = settings_from_payload(response)
    except ValueError as e:
        ...
"""


class SchedulingError(ValueError):
    """Base exception for all engine configuration errors."""

    pass


class InvalidTimeFormat(SchedulingError):
    """A time-of-day string is not a valid 24-hour 'HH:MM'.

    Never treated as midnight.
    """

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(
            f"Invalid time of day {value!r}: expected 'HH:MM' with "
            f"hours 00-23 and minutes 00-59"
        )


class InvalidPolicy(SchedulingError):
    """Session duration <= 0, cleaning buffer < 0, or cycle length <= 0."""

    pass


class InvalidResourceConfig(SchedulingError):
    """Resource count < 1 or stagger interval < 0."""

    pass


class InvalidOverride(SchedulingError):
    """An admin day update that cannot be saved as requested.

    Examples: Bookable day without open/close times, or operating hours
    shorter than one session + cleaning cycle.
    """

    pass
