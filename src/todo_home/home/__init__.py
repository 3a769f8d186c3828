"""
Home surface subsystem.

Components:
- view.py: view-model dataclasses + pure composer (home view, forms)
- actions.py: typed actions + parse_action() boundary
- handlers.py: TaskHome, the CRUD state machine
- render.py: plain-text rendering used by the console and Matrix surfaces
- delivery.py: pushes a HomeOutcome into a HomeSurface
"""
