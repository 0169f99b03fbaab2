"""Per-build schedule options."""

from dataclasses import dataclass, field
from datetime import tzinfo
from zoneinfo import ZoneInfo

from festgrid.config import settings
from festgrid.services.screening_times import DEFAULT_START_TIME
from festgrid.services.venues import DEFAULT_VENUE, FUZZY_THRESHOLD, VenueCode, normalise_venue
from festgrid.utils.timecalc import DEFAULT_DURATION_MINUTES


@dataclass(frozen=True)
class ScheduleOptions:
    """
    Immutable knobs for one schedule build.

    Passed explicitly from the caller into every stage so that no stage
    reads global configuration while a build is running.
    """

    timezone: tzinfo = field(default_factory=lambda: ZoneInfo("Asia/Bangkok"))
    default_venue: VenueCode = DEFAULT_VENUE
    venue_fuzzy_threshold: int = FUZZY_THRESHOLD
    default_start_time: str = DEFAULT_START_TIME
    default_duration: int = DEFAULT_DURATION_MINUTES

    # Emit a placeholder screening for films that carry no screening dates at all.
    fallback_synthesis: bool = True

    @classmethod
    def from_settings(cls) -> "ScheduleOptions":
        """Snapshot the current application settings."""
        return cls(
            timezone=ZoneInfo(settings.festival_timezone),
            default_venue=normalise_venue(settings.default_venue),
            venue_fuzzy_threshold=settings.venue_fuzzy_threshold,
            default_start_time=settings.default_start_time,
            default_duration=settings.default_duration_minutes,
            fallback_synthesis=settings.fallback_synthesis_enabled,
        )

    def venue(self, raw: str | None) -> VenueCode:
        return normalise_venue(raw, self.default_venue, self.venue_fuzzy_threshold)
