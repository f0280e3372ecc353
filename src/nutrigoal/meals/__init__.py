"""Meal logging models and daily aggregation."""

from nutrigoal.meals.models import DailyMealSummary, Meal, MealType

__all__ = ["DailyMealSummary", "Meal", "MealType"]
