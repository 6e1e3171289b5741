# app/models/enums.py
from enum import Enum

class InteractionType(str, Enum):
    """Enumeration for the kinds of assistance a user can request."""
    CODE_REVIEW = "code_review"
    ROADMAP = "roadmap"
    HINT = "hint"
    DEBUG_HELP = "debug_help"
