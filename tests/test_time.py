import pytest

from capnz.core.code_tables import category_label, event_icon, event_label
from capnz.core.time import format_local, parse_cap_datetime, to_iso_z


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("2025-10-21T09:00:00+13:00", "2025-10-20T20:00:00.000Z"),
        ("2025-10-21T09:00:00Z", "2025-10-21T09:00:00.000Z"),
        ("2025-10-21T09:00:00.123456+00:00", "2025-10-21T09:00:00.123Z"),
        # naive is UTC
        ("2025-10-21T09:00:00", "2025-10-21T09:00:00.000Z"),
    ],
)
def test_to_iso_z(raw, expected):
    assert to_iso_z(raw) == expected


@pytest.mark.parametrize("raw", ["", "   ", "21/10/2025", "tomorrow"])
def test_bad_datetime_raises(raw):
    with pytest.raises(ValueError):
        parse_cap_datetime(raw)


def test_format_local_nz_summer():
    assert format_local("2025-10-21T09:00:00+13:00", "Pacific/Auckland") == "21/10/2025, 9:00:00 am"
    assert format_local("2025-10-21T00:30:05Z", "Pacific/Auckland") == "21/10/2025, 1:30:05 pm"


def test_format_local_midnight_is_twelve_am():
    assert format_local("2025-10-22T00:00:00+13:00", "Pacific/Auckland") == "22/10/2025, 12:00:00 am"


def test_labels_fall_back_to_code():
    assert category_label("Geo") == "Geophysical (including landslide)"
    assert event_label("tsunami") == "Tsunami"
    assert event_label("volcano") == "volcano"
    assert event_label("") == "Unknown"


def test_fire_category_overrides_event_icon():
    assert event_icon("strongWind", "Fire").endswith("Incidents/INC.35.Fire.png")
    assert event_icon("strongWind", "Met").endswith("NH.04.StrongWind.png")
