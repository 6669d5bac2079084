from typing import Any, Union
from pydantic import BaseModel

# Outcome of a single external read. Callers branch on the type instead of
# catching collaborator exceptions.

class Ok(BaseModel):
    value: Any = None

class Err(BaseModel):
    reason: str

ReadResult = Union[Ok, Err]
