"""Kernel – errors, outcome types and time primitives shared by every layer."""
