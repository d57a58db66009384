"""Tests for the slideshow playback session."""

import random

import pytest

from photo_stories.app.device import DeviceType
from photo_stories.app.services.slideshow import (
    PlaybackPhase,
    SlideshowSession,
    select_music_pool,
)
from photo_stories.core.models import BackgroundMusic, Trip
from photo_stories.core.timeline import InvalidDurationError


@pytest.fixture
def trip(sample_trip_data):
    return Trip.from_dict(sample_trip_data)


@pytest.fixture
def musical_trip(sample_trip_data):
    sample_trip_data["backgroundMusic"] = {"enabled": True, "volume": 0.5}
    return Trip.from_dict(sample_trip_data)


def play(session: SlideshowSession) -> SlideshowSession:
    session.start()
    if session.phase != PlaybackPhase.PLAYING:
        session.toggle()
    return session


class TestSelectMusicPool:
    """Tests for select_music_pool."""

    def test_disabled(self, tracks):
        assert select_music_pool(BackgroundMusic(enabled=False), tracks) == []

    def test_preferred_track(self, tracks):
        pool = select_music_pool(BackgroundMusic(enabled=True, track_id="wallpaper"), tracks)

        assert [t.id for t in pool] == ["wallpaper"]

    def test_unknown_track_uses_whole_pool(self, tracks):
        pool = select_music_pool(BackgroundMusic(enabled=True, track_id="polka"), tracks)

        assert pool == tracks

    def test_no_preference_uses_whole_pool(self, tracks):
        assert select_music_pool(BackgroundMusic(enabled=True), tracks) == tracks


class TestSessionSetup:
    def test_negative_duration(self, trip):
        trip.total_duration = -1

        with pytest.raises(InvalidDurationError):
            SlideshowSession(trip)

    def test_even_timeline(self, trip):
        session = SlideshowSession(trip)

        assert [w.start for w in session.timeline.values()] == [0, 5, 10, 15]

    def test_no_music_means_empty_playlist(self, trip, tracks):
        session = SlideshowSession(trip, tracks)

        assert session.playlist == []
        assert session.current_track is None

    def test_playlist_covers_trip(self, musical_trip, tracks):
        session = SlideshowSession(musical_trip, tracks, rng=random.Random(4))

        assert sum(t.duration for t in session.playlist) >= musical_trip.total_duration
        assert session.volume == 0.5
        assert session.current_track.track_index == 0

    def test_volume_falls_back_to_default(self, musical_trip, tracks):
        musical_trip.background_music.volume = None

        assert SlideshowSession(musical_trip, tracks).volume == 0.3
        assert SlideshowSession(musical_trip, tracks, default_volume=0.8).volume == 0.8

    def test_trip_volume_overrides_default(self, musical_trip, tracks):
        session = SlideshowSession(musical_trip, tracks, default_volume=0.8)

        assert session.volume == 0.5

    def test_preferred_track_playlist(self, musical_trip, tracks):
        musical_trip.background_music.track_id = "carefree"

        session = SlideshowSession(musical_trip, tracks)

        assert {t.id for t in session.playlist} == {"carefree"}

    def test_empty_trip(self, trip):
        trip.photos = []
        session = SlideshowSession(trip)

        assert not session.has_photos
        assert session.current_photo is None
        assert session.progress == 0.0


class TestStart:
    """Tests for the start of playback per device type."""

    def test_tv_counts_down(self, trip):
        session = SlideshowSession(trip, device_type=DeviceType.TV, countdown_seconds=3)

        assert session.start() == PlaybackPhase.COUNTDOWN
        assert session.countdown_remaining == 3

    @pytest.mark.parametrize("device", [DeviceType.TABLET, DeviceType.MOBILE])
    def test_other_devices_start_paused(self, trip, device):
        session = SlideshowSession(trip, device_type=device)

        assert session.start() == PlaybackPhase.PAUSED
        assert not session.is_playing

    def test_tv_without_countdown(self, trip):
        session = SlideshowSession(trip, device_type=DeviceType.TV, countdown_seconds=0)

        assert session.start() == PlaybackPhase.PAUSED

    def test_start_twice_is_noop(self, trip):
        session = SlideshowSession(trip, device_type=DeviceType.TV)
        session.start()
        session.countdown_tick()

        assert session.start() == PlaybackPhase.COUNTDOWN
        assert session.countdown_remaining == 4


class TestCountdown:
    def test_plays_when_countdown_reaches_zero(self, trip):
        session = SlideshowSession(trip, device_type=DeviceType.TV, countdown_seconds=2)
        session.start()

        assert session.countdown_tick() == PlaybackPhase.COUNTDOWN
        assert session.countdown_tick() == PlaybackPhase.PLAYING
        assert session.current_time == 0

    def test_cancel_leaves_paused(self, trip):
        session = SlideshowSession(trip, device_type=DeviceType.TV)
        session.start()

        assert session.cancel_countdown() == PlaybackPhase.PAUSED
        assert session.countdown_tick() == PlaybackPhase.PAUSED

    def test_toggle_skips_countdown(self, trip):
        session = SlideshowSession(trip, device_type=DeviceType.TV)
        session.start()

        assert session.toggle() == PlaybackPhase.PLAYING
        assert session.countdown_remaining == 0


class TestTick:
    """Tests for the playback clock."""

    def test_tick_advances_only_while_playing(self, trip):
        session = SlideshowSession(trip)
        session.start()

        session.tick()
        assert session.current_time == 0

        session.toggle()
        session.tick()
        assert session.current_time == 0.1

    def test_ticks_accumulate_without_drift(self, trip):
        session = play(SlideshowSession(trip))

        for _ in range(50):
            session.tick()

        assert session.current_time == 5.0
        assert session.current_index == 1
        assert session.current_photo.id == "photo-002"

    def test_end_rewinds_and_pauses(self, trip):
        session = play(SlideshowSession(trip))
        session.current_time = 19.9

        assert session.tick() == PlaybackPhase.PLAYING
        assert session.current_time == 20.0
        assert session.current_index == 3

        assert session.tick() == PlaybackPhase.PAUSED
        assert session.current_time == 0.0

    def test_zero_duration_rewinds_on_first_tick(self, trip):
        trip.total_duration = 0
        session = play(SlideshowSession(trip))

        assert session.tick() == PlaybackPhase.PAUSED
        assert session.current_time == 0.0


class TestNavigation:
    """Tests for next/previous."""

    def test_next_and_previous(self, trip):
        session = SlideshowSession(trip)

        session.next()
        assert session.current_time == 5
        session.next()
        assert session.current_index == 2
        session.previous()
        assert session.current_time == 5

    def test_clamps_at_ends(self, trip):
        session = SlideshowSession(trip)

        session.previous()
        assert session.current_index == 0

        for _ in range(10):
            session.next()
        assert session.current_index == 3
        assert session.current_time == 15

    def test_previous_from_middle_of_photo(self, trip):
        session = SlideshowSession(trip)
        session.current_time = 12.3

        session.previous()

        assert session.current_time == 5

    def test_navigation_keeps_phase(self, trip):
        session = play(SlideshowSession(trip))

        session.next()

        assert session.is_playing


class TestDisplay:
    def test_progress_and_label(self, trip):
        session = SlideshowSession(trip)
        session.current_time = 5.5

        assert session.progress == 50.0
        assert session.position_label == "Photo 2 of 4 · 0:14 remaining"

    def test_upcoming_photos(self, trip):
        session = SlideshowSession(trip)
        session.next()

        assert [p.id for p in session.upcoming_photos(2)] == ["photo-002", "photo-003"]
        assert len(session.upcoming_photos(20)) == 3

    def test_stop_resets(self, trip):
        session = play(SlideshowSession(trip))
        session.next()

        session.stop()

        assert session.phase == PlaybackPhase.IDLE
        assert session.current_time == 0
