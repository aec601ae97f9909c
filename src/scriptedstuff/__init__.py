"""ScriptedStuff: a file-backed markdown blog."""

__version__ = "0.1.0"
