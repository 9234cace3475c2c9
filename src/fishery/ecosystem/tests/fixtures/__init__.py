"""Helpers that build small deterministic grids and scenarios for the tests."""
