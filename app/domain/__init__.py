"""
Domain layer containing core business logic and domain services.

Submodules:
- studio: Session composition and control (participants, stage, overlays, destinations, session).
- utils: Domain-specific utilities (ID generation, time formatting).
"""
