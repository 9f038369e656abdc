"""Questionnaire business logic: scoring, handlers and data access helpers."""
