"""
Project Models for Portfolio
============================

Project records as written by the content sync and read by the board.
"""

from typing import List
from pydantic import BaseModel, Field

DEFAULT_IMAGE = "images/default.jpg"


class ProjectRecord(BaseModel):
    """One entry of projects.json."""
    id: str
    title: str
    tags: List[str] = Field(default_factory=list)
    description: str = ""
    date: str = ""
    github: str = "#"
    image: str = DEFAULT_IMAGE
    content: str = ""
