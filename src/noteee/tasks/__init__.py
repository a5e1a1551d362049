"""
Task subsystem.

Components:
- task_models.py: data structures (TaskRecord, TaskDraft, Priority, Category) + wire codec
- task_store.py: authoritative in-memory collection with write-through persistence
- task_query.py: stateless filtering/search over a collection
"""
