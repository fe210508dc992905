"""Persisted weekly plan models."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field

from .meals import Meal


class Plan(BaseModel):
    """One plan per (user, week), stored in the Supabase ``plans`` table."""

    id: str
    user_id: str
    week_start: date  # Monday of the week
    meals: list[Meal] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class SavePlanRequest(BaseModel):
    """Request to save the meals of a week."""
    meals: list[Meal]


class PlanResponse(BaseModel):
    """A single plan lookup. ``plan`` is null when nothing is saved yet."""
    plan: Optional[Plan] = None


class PlanListResponse(BaseModel):
    """All saved plans for a user, newest week first."""
    plans: list[Plan] = Field(default_factory=list)
