"""Realized plans: types, merging, regeneration, rollback and validation."""
