"""Listening progress exceptions."""

from src.shared.exceptions import NotFoundException


class ProgressNotFound(NotFoundException):
    def __init__(self):
        super().__init__(detail="Listening progress not found")
