"""Public API surface for vs_core."""

from vs_core.engine import (
    EMPTY_SELECTION_MESSAGE,
    PROPAGATION_MODES,
    Badge,
    PropagationMode,
    SelectionEngine,
    VisibleRow,
)
from vs_core.loader import (
    build_tree,
    default_catalog,
    default_rows,
    flatten_tree,
    load_items,
    parse_items,
)
from vs_core.matching import effective_required_skills, match_volunteers
from vs_core.models import (
    Item,
    ProfileRecord,
    ProjectRecord,
    Role,
    SkillsetRow,
    VolunteerMatch,
)
from vs_core.tree import MAX_DEPTH, PATH_SEPARATOR, TreeIndex, walk

__all__ = [
    "Badge",
    "EMPTY_SELECTION_MESSAGE",
    "Item",
    "MAX_DEPTH",
    "PATH_SEPARATOR",
    "PROPAGATION_MODES",
    "ProfileRecord",
    "ProjectRecord",
    "PropagationMode",
    "Role",
    "SelectionEngine",
    "SkillsetRow",
    "TreeIndex",
    "VisibleRow",
    "VolunteerMatch",
    "build_tree",
    "default_catalog",
    "default_rows",
    "effective_required_skills",
    "flatten_tree",
    "load_items",
    "match_volunteers",
    "parse_items",
    "walk",
]
