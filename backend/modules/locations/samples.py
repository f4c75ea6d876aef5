"""
Built-in sample locations.

Shown to a tenant before any widget placement is selected, and to editor
previews of placements that have no locations yet. Never stored.
"""

from .models import BusinessHours, Location, LocationCategory


def _every_day(hours: str) -> BusinessHours:
    return BusinessHours(mon=hours, tue=hours, wed=hours, thu=hours, fri=hours, sat=hours, sun=hours)


SAMPLE_LOCATIONS: tuple[Location, ...] = (
    Location(
        id="default-1",
        name="Disneyland",
        address="1313 Disneyland Dr, Anaheim, CA 92802, USA",
        category=LocationCategory.OTHER,
        latitude=33.8121,
        longitude=-117.9190,
        phone="+1 714-781-4636",
        website="https://disneyland.disney.go.com",
        business_hours=_every_day("8:00 AM - 12:00 AM"),
    ),
    Location(
        id="default-2",
        name="Eiffel Tower",
        address="Champ de Mars, 5 Avenue Anatole France, 75007 Paris, France",
        category=LocationCategory.OTHER,
        latitude=48.8584,
        longitude=2.2945,
        phone="+33 892 70 12 39",
        website="https://www.toureiffel.paris",
        business_hours=_every_day("9:30 AM - 11:45 PM"),
    ),
    Location(
        id="default-3",
        name="Santiago Bernabéu Stadium",
        address="Av. de Concha Espina, 1, 28036 Madrid, Spain",
        category=LocationCategory.OTHER,
        latitude=40.4531,
        longitude=-3.6883,
        phone="+34 913 98 43 00",
        website="https://www.realmadrid.com/estadio-santiago-bernabeu",
        business_hours=_every_day("10:00 AM - 7:00 PM"),
    ),
    Location(
        id="default-4",
        name="Statue of Liberty",
        address="Liberty Island, New York, NY 10004, USA",
        category=LocationCategory.OTHER,
        latitude=40.6892,
        longitude=-74.0445,
        phone="+1 212-363-3200",
        website="https://www.nps.gov/stli",
        business_hours=_every_day("9:00 AM - 5:00 PM"),
    ),
    Location(
        id="default-5",
        name="Jerusalem Old City",
        address="Old City, Jerusalem, Israel",
        category=LocationCategory.OTHER,
        latitude=31.7767,
        longitude=35.2345,
        website="https://www.jerusalem.com",
        business_hours=_every_day("Open 24 hours"),
    ),
)


def sample_locations() -> list[Location]:
    """Fresh copies of the sample dataset."""
    return [location.model_copy(deep=True) for location in SAMPLE_LOCATIONS]
