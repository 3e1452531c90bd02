"""NutriPlan API."""
