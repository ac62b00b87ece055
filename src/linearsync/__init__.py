"""linearsync - keep a tasks.md checklist in step with Linear issues."""

__version__ = "0.1.0"
