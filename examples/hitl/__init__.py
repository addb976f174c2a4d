"""
Human-in-the-loop example.

Keeps a per-session conversation log on disk and cooks a budgeted context
from a system directive and the conversation history.
"""
