"""Command handlers.

Each handler gathers a context through the effects capability, asks a
planner for a Plan, and either prints it (``--dry-run``) or executes it.
Handlers return the process exit code.
"""
