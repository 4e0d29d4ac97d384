"""Supabase JWT authentication dependencies."""
