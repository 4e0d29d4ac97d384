"""
FastAPI routers for all API endpoints.

- health.py: GET /health (public)
- recommendations.py: POST /api/recommend, GET /api/recommendations/history
"""
