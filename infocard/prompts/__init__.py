"""Versioned prompt files and loaders."""
