"""Deuce data models — Pydantic schemas for match state and records."""

from deuce.models.match import *
from deuce.models.record import *
