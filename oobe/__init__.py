"""First-boot setup wizard (OOBE).

Core design goals:
- One configuration-application core shared by every front end
- Strictly ordered, single-shot system mutation
- Character-level validation before anything reaches the system
- Centralized logging (secrets never logged)
"""

__all__ = []
