"""Prompt Recommender backend: embedding-ranked prompt suggestions with Gemini explanations."""
