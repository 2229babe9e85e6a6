from datetime import timedelta

from src.application.commands import BookingDraft, Caller


def caller_for(user) -> Caller:
    return Caller(id=user.id, role=user.role)


def auth(user) -> dict:
    return {"X-User-Id": user.id}


def make_draft(world, start_offset_hours=1.0, duration_hours=2.0, **overrides) -> BookingDraft:
    start = world.event_start + timedelta(hours=start_offset_hours)
    end = start + timedelta(hours=duration_hours)
    values = dict(
        artist_id=world.artist.id,
        event_id=world.event.id,
        start_time=start,
        end_time=end,
        set_duration=int(duration_hours * 60),
        amount=500,
        special_requirements="Two vocal mics",
    )
    values.update(overrides)
    return BookingDraft(**values)
