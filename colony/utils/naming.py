"""Planet naming and identifier helpers."""

import re

from .rng import GameRNG

# Planet name pool; numbered suffixes are added once it runs out
PLANET_NAMES = [
    "New Terra",
    "Kepler Prime",
    "Vesta",
    "Arcturus",
    "Tau Ceti",
    "Helion",
    "Draconis",
    "Nova Aurelia",
    "Cygnus Reach",
    "Orpheus",
    "Hadley's Rest",
    "Ixion",
    "Meridian",
    "Calypso",
    "Talos",
    "Ember",
    "Zephyria",
    "Obsidian Gate",
    "Lyra",
    "Pallas",
    "Khepri",
    "Solace",
    "Ganymede Deep",
    "Thule",
    "Nereid",
    "Boreas",
    "Carina",
    "Sable",
    "Vanguard",
    "Elysium",
]


def name_to_id(name: str) -> str:
    """Turn a display name into a stable lowercase slug.

    Examples:
        >>> name_to_id("New Terra")
        'new-terra'
        >>> name_to_id("Hadley's Rest")
        'hadleys-rest'
    """
    slug = re.sub(r"[^a-z0-9\s-]", "", name.lower())
    slug = re.sub(r"[\s_-]+", "-", slug).strip("-")
    return slug


def generate_planet_names(count: int, rng: GameRNG) -> list[str]:
    """Pick count unique planet names in random order.

    Args:
        count: Number of names needed
        rng: Seeded RNG

    Returns:
        List of distinct display names
    """
    names = list(PLANET_NAMES)
    rng.shuffle(names)
    extra = 2
    while len(names) < count:
        names.extend(f"{base} {extra}" for base in PLANET_NAMES)
        extra += 1
    return names[:count]
