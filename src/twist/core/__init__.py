"""Core types, constants, configuration and exceptions."""
