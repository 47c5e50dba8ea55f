"""Presentation and input collaborators for the engine."""
