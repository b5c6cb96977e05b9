"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskFilter) and id generation
- task_store.py: TaskStore, the owner of the list and its durable mirror
- task_api.py: small high-level helpers used by the console commands
"""
