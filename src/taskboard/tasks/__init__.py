"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStatus, TaskPriority, FilterMode)
- task_engine.py: pure filter/search derivation and list mutators
- task_store.py: JSON persistence of the task list in a key/value store
- notifier.py: polling scan for overdue pending tasks
"""
