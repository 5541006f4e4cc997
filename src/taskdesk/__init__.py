"""
taskdesk: a task list with a REST backend and an async console client.

Components:
- tasks/: Task record + SQLite TaskStore
- api/: FastAPI router and app factory (/api/tasks)
- client/: httpx TaskClient returning outcome values instead of raising
- views/: immutable view state, reducers, screen controllers, text rendering
- connectors/ + cli/: console loop, slash commands, entrypoints
"""

__version__ = "0.1.0"
