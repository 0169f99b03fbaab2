"""Conversion of activities into schedule items."""

from festgrid.schemas.activity import Activity
from festgrid.schemas.schedule import ScheduleCategory, ScheduleItem
from festgrid.services.options import ScheduleOptions
from festgrid.utils.timecalc import duration_minutes, normalise_time

# First matching rule wins
CATEGORY_RULES: list[tuple[frozenset[str], ScheduleCategory]] = [
    (frozenset({"workshop", "masterclass"}), "workshop"),
    (frozenset({"networking"}), "networking"),
    (frozenset({"ceremony", "awards"}), "ceremony"),
    (frozenset({"panel", "talk"}), "panel"),
]
DEFAULT_CATEGORY: ScheduleCategory = "special"


def infer_category(tags: list[str]) -> ScheduleCategory:
    """Schedule category from an activity's tags (case-insensitive)."""
    tag_set = {tag.strip().lower() for tag in tags}
    for rule_tags, category in CATEGORY_RULES:
        if tag_set & rule_tags:
            return category
    return DEFAULT_CATEGORY


def adapt_activity(activity: Activity, options: ScheduleOptions | None = None) -> ScheduleItem:
    """
    Convert an Activity into a ScheduleItem.

    Valid times are zero-padded, malformed ones are passed through and the
    duration falls back to the default. The activity image is used verbatim.
    """
    options = options or ScheduleOptions()

    # Zero-pad valid times so lexical ordering matches chronological ordering
    start_time = normalise_time(activity.start_time) or activity.start_time
    end_time = normalise_time(activity.end_time) or activity.end_time

    return ScheduleItem(
        id=activity.id,
        title=activity.name,
        type="activity",
        category=infer_category(activity.tags),
        date=activity.event_date,
        start_time=start_time,
        end_time=end_time,
        venue=options.venue(activity.venue_name),
        duration=duration_minutes(start_time, end_time, default=options.default_duration),
        description=activity.short_description,
        image=activity.image,
        speakers=list(activity.speakers) or None,
        organizers=list(activity.organizers) or None,
        tags=list(activity.tags),
        max_participants=activity.max_participants,
        registration_required=activity.need_submission,
        registered_participants=activity.registered_participants,
        views=activity.views,
        status=activity.status,
        is_public=activity.is_public,
    )
