"""
Size profiles for workflow graph rendering.
"compact" is used for grid/list previews (workflow cards), "normal" for detail views.
"""

from typing import Dict, Union

from pydantic import BaseModel, ConfigDict, Field


class ConfigProfile(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    node_width: int = Field(alias="nodeWidth", gt=0)
    node_height: int = Field(alias="nodeHeight", gt=0)
    font_size: int = Field(alias="fontSize", gt=2)
    icon_size: int = Field(alias="iconSize", gt=0)
    # Horizontal gap between siblings in a layer
    spacing_x: int = Field(alias="spacingX", ge=0)
    # Vertical gap between layers
    spacing_y: int = Field(alias="spacingY", ge=0)


COMPACT = ConfigProfile(
    name="compact", node_width=80, node_height=40, font_size=10, icon_size=12, spacing_x=30, spacing_y=20
)
NORMAL = ConfigProfile(
    name="normal", node_width=140, node_height=60, font_size=12, icon_size=16, spacing_x=50, spacing_y=30
)

PROFILES: Dict[str, ConfigProfile] = {"compact": COMPACT, "normal": NORMAL}

# Older dashboard builds ask for "small"
PROFILE_ALIASES = {"small": "compact"}

DEFAULT_PROFILE = "normal"


def get_profile(size: Union[str, ConfigProfile, None] = None) -> ConfigProfile:
    """Resolve a profile by name. A ConfigProfile passes through unchanged."""
    if isinstance(size, ConfigProfile):
        return size
    key = (size or DEFAULT_PROFILE).strip().lower()
    key = PROFILE_ALIASES.get(key, key)
    if key not in PROFILES:
        raise ValueError(f"Unknown size profile: {size!r} (expected one of {', '.join(PROFILES)})")
    return PROFILES[key]
