"""
IGOT Training Tracker
SQLAlchemy database instance shared by all models.

Usage:
    from igot_tracker.models import db
"""

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()
