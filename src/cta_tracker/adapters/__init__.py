"""Adapters (infrastructure implementations)."""
