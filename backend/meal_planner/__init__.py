"""Meal planner backend."""
