"""Booker: spaced-repetition planner for language-learning study items."""
