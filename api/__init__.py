"""
FastAPI backend for the Soccer Scoreboard.

Provides REST API endpoints for:
- Current scoreboard with live implied probabilities
- Manual refresh
- Health monitoring
"""
