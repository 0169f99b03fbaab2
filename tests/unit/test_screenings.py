"""Unit tests for screening extraction."""

from datetime import date, datetime, timezone

from festgrid.schemas.film import FilmRecord
from festgrid.services.options import ScheduleOptions
from festgrid.services.screenings import extract_screenings
from festgrid.services.venues import VenueCode

FESTIVAL_DAY = date(2025, 9, 26)


def make_film(**fields) -> FilmRecord:
    return FilmRecord.from_document(fields.pop("id", "film-1"), {"title": "Monsoon", **fields})


class TestExtractScreenings:
    def test_matching_slot(self) -> None:
        film = make_film(screeningDate1="2025-09-26", startTime1="14:00", duration=90, venue="IMAX")

        screenings = extract_screenings(film, FESTIVAL_DAY)

        assert len(screenings) == 1
        screening = screenings[0]
        assert screening.slot_number == 1
        assert screening.screening_date == FESTIVAL_DAY
        assert (screening.start_time, screening.end_time) == ("14:00", "15:30")
        assert screening.venue == VenueCode.MAJOR_IMAX
        assert not screening.synthesized
        assert screening.film_id == "film-1"
        assert screening.film_title == "Monsoon"

    def test_only_second_slot_matches(self) -> None:
        film = make_film(screeningDate1="2025-09-25", screeningDate2="2025-09-26T20:15:00")

        screenings = extract_screenings(film, FESTIVAL_DAY)

        assert [s.slot_number for s in screenings] == [2]
        assert screenings[0].start_time == "20:15"
        assert screenings[0].end_time == "22:15"

    def test_both_slots_on_the_same_day(self) -> None:
        film = make_film(
            screeningDate1="2025-09-26", startTime1="10:00",
            screeningDate2="2025-09-26", startTime2="16:00",
        )

        screenings = extract_screenings(film, FESTIVAL_DAY)

        assert [s.slot_number for s in screenings] == [1, 2]

    def test_dates_on_other_days_yield_nothing(self) -> None:
        film = make_film(screeningDate1="2025-09-24", screeningDate2="2025-09-25")
        assert extract_screenings(film, FESTIVAL_DAY) == []

    def test_aware_timestamp_uses_festival_day(self) -> None:
        # 18:30 UTC on the 25th is 01:30 on the 26th in Bangkok
        film = make_film(
            screenings=[{"date": datetime(2025, 9, 25, 18, 30, tzinfo=timezone.utc)}]
        )

        screenings = extract_screenings(film, FESTIVAL_DAY)

        assert len(screenings) == 1
        assert screenings[0].start_time == "01:30"

    def test_slot_venue_overrides_film_venue(self) -> None:
        film = make_film(
            venue="market",
            screenings=[{"date": "2025-09-26", "time": "11:00", "venue": "anusarn"}],
        )
        assert extract_screenings(film, FESTIVAL_DAY)[0].venue == VenueCode.ANUSARN


class TestFallbackSynthesis:
    def test_film_without_slots_gets_one_placeholder(self) -> None:
        film = make_film()

        screenings = extract_screenings(film, FESTIVAL_DAY)

        assert len(screenings) == 1
        screening = screenings[0]
        assert screening.synthesized
        assert screening.slot_number == 1
        assert screening.screening_date == FESTIVAL_DAY
        assert (screening.start_time, screening.end_time) == ("19:00", "21:00")
        assert screening.venue == VenueCode.STAGE_ZONE

    def test_placeholder_uses_dedicated_times(self) -> None:
        film = make_film(startTime1="15:00", duration=100, theatre="expoZone")

        screening = extract_screenings(film, FESTIVAL_DAY)[0]

        assert screening.synthesized
        assert (screening.start_time, screening.end_time) == ("15:00", "16:40")
        assert screening.venue == VenueCode.EXPO_ZONE

    def test_placeholder_uses_dedicated_end_time(self) -> None:
        film = make_film(startTime2="9:00", endTime2="10:15")

        screening = extract_screenings(film, FESTIVAL_DAY)[0]

        assert (screening.start_time, screening.end_time) == ("09:00", "10:15")

    def test_unreadable_date_prevents_placeholder(self) -> None:
        film = make_film(screeningDate1="TBA")
        assert extract_screenings(film, FESTIVAL_DAY) == []

    def test_disabled_by_option(self) -> None:
        film = make_film()
        options = ScheduleOptions(fallback_synthesis=False)
        assert extract_screenings(film, FESTIVAL_DAY, options) == []

    def test_custom_defaults(self) -> None:
        film = make_film()
        options = ScheduleOptions(
            default_start_time="18:00",
            default_duration=60,
            default_venue=VenueCode.MARKET,
        )

        screening = extract_screenings(film, FESTIVAL_DAY, options)[0]

        assert (screening.start_time, screening.end_time) == ("18:00", "19:00")
        assert screening.venue == VenueCode.MARKET


def test_legacy_time_without_date_does_not_place_film_on_other_days() -> None:
    film = make_film(startTime1="14:00", screenings=[{"date": "2025-09-27", "time": "14:00"}])

    assert extract_screenings(film, FESTIVAL_DAY) == []

    screening = extract_screenings(film, date(2025, 9, 27))[0]
    assert not screening.synthesized
    assert screening.start_time == "14:00"
