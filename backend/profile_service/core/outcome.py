"""Outcome — tagged result type returned by validation and user operations.

Invariants:
    - Every operation returns exactly one of Ok(value) or Err(error)
    - Err always wraps an HttpError; unexpected exceptions are never wrapped
    - Callers branch with `match`, never with isinstance chains on raw values

Design Decisions:
    - Errors as return values: the failure path has the same shape as the success
      path, and only the HTTP boundary turns an Err into a response
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from profile_service.core.errors import HttpError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    error: HttpError


Outcome = Union[Ok[T], Err]
