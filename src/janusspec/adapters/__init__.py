"""Concrete implementations of the engine's collaborator interfaces."""
