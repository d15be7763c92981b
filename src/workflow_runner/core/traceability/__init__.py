"""Persistência do event log estruturado de uma run."""

from .event_log import save_event_log

__all__ = ["save_event_log"]
