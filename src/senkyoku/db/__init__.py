"""Async SQLAlchemy persistence for district counts."""
