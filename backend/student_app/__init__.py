"""Application package for the student CRUD backend.

This package exposes the service, repository and model modules used by
the FastAPI application in `main`. Individual modules contain the
concrete implementations and documentation.
"""
