"""Shared fixtures: a small user model mirroring typical row objects."""
from dataclasses import dataclass
from enum import Enum

import pytest


class Role(Enum):
    ADMIN = "admin"
    USER = "user"


@dataclass(frozen=True)
class User:
    name: str
    age: int
    role: Role


SAMPLE = [
    User("John", 20, Role.ADMIN),
    User("Jane", 21, Role.USER),
    User("Jim", 22, Role.ADMIN),
]


@pytest.fixture
def users():
    return list(SAMPLE)


@pytest.fixture
def user_dicts():
    return [{"name": u.name, "age": u.age, "role": u.role.value} for u in SAMPLE]
