"""
Task subsystem.

Components:
- task_models.py: data structures (Task, FilterMode, TaskBucket)
- task_store.py: SQLite-backed storage scoped by owner
- classifier.py: overdue / upcoming / inbox predicates
- filter_state.py: per-user filter selection (process lifetime)
- errors.py: error taxonomy shared by store, handlers and connectors
"""
