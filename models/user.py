"""
models/user.py
--------------
Domain model for LightBnB users (guests and owners).
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class User:
    """A registered user. The password is stored as given by the caller."""
    name: str
    email: str
    password: str
    id: Optional[int] = None

    @classmethod
    def from_row(cls, row: dict) -> "User":
        return cls(id=row["id"], name=row["name"], email=row["email"], password=row["password"])

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"
