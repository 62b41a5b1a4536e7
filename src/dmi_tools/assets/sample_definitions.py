"""Sample icon descriptions used for demos and placeholder sheets."""

from __future__ import annotations

from typing import Optional

from dmi_tools.parser import Metadata, parse


# Description text per sample icon (delays in deciseconds)
SAMPLE_DESCRIPTIONS: dict[str, str] = {
    # A door: duplicate "open" states, a four-direction animation and a
    # rewinding eight-direction animation.
    "door": """\
# BEGIN DMI
version = 4.0
\twidth = 32
\theight = 32
state = "open"
\tdirs = 1
\tframes = 1
state = "open"
\tdirs = 4
\tframes = 1
state = "opening"
\tdirs = 4
\tframes = 2
\tdelay = 1.2,1
\tloop = 1
state = "spin"
\tdirs = 8
\tframes = 3
\tdelay = 1,1,2
\trewind = 1
state = "closed"
\tdirs = 1
\tframes = 1
\thotspot = 16,16,1
# END DMI
""",
    # A mob with movement states sharing names with the still states.
    "mob": """\
# BEGIN DMI
version = 4.0
\twidth = 16
\theight = 16
state = "walk"
\tdirs = 4
\tframes = 1
state = "walk"
\tdirs = 4
\tframes = 2
\tdelay = 2,2
\tmovement = 1
state = "dead"
\tdirs = 1
\tframes = 1
# END DMI
""",
}


def get_sample_description(name: str) -> Optional[str]:
    """Get a sample's description text.

    Args:
        name: The sample name.

    Returns:
        The description, or None if no such sample exists.
    """
    return SAMPLE_DESCRIPTIONS.get(name)


def create_sample_metadata(name: str) -> Optional[Metadata]:
    """Parse a sample description."""
    description = get_sample_description(name)
    if description is None:
        return None
    return parse(description)


def create_all_samples() -> dict[str, Metadata]:
    """Parse every sample.

    Returns:
        Dictionary of sample name to Metadata.
    """
    return {name: parse(text) for name, text in SAMPLE_DESCRIPTIONS.items()}
