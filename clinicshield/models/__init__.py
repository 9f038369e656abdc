"""Pydantic models and enumerations for the DSPT questionnaire service."""
