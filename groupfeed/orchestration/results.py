"""
Step Outcomes

Two-variant result returned by every pipeline step and by the pipeline:
Ok(value) to advance, Err(FailureDescriptor) to halt.
"""

from dataclasses import asdict, dataclass, field, is_dataclass
from enum import Enum
from typing import Any, Dict, Generic, Tuple, TypeVar, Union

T = TypeVar("T")

# Failure messages
URL_UNRESOLVED = "URL could not be resolved"
URL_NOT_SUPPLIED = "URL not supplied"
URL_NOT_GROUP_PAGE = "URL not recognized as a group page"
GROUP_ALREADY_EXISTS = "Group already exists"
FACEBOOK_DETAILS_NOT_FOUND = "Facebook details could not be found"


class FailureClass(str, Enum):
    """How a failure maps onto a client response"""

    BAD_REQUEST = "bad_request"
    UNPROCESSABLE = "cannot_process"


HTTP_STATUS_CODES = {
    FailureClass.BAD_REQUEST: 400,
    FailureClass.UNPROCESSABLE: 422,
}


@dataclass(frozen=True)
class FailureDescriptor:
    classification: FailureClass
    message: str

    @property
    def status_code(self) -> int:
        return HTTP_STATUS_CODES[self.classification]


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T
    ok: bool = field(default=True, init=False)


@dataclass(frozen=True)
class Err:
    failure: FailureDescriptor
    ok: bool = field(default=False, init=False)


Outcome = Union[Ok[T], Err]


def bad_request(message: str) -> Err:
    return Err(FailureDescriptor(FailureClass.BAD_REQUEST, message))


def unprocessable(message: str) -> Err:
    return Err(FailureDescriptor(FailureClass.UNPROCESSABLE, message))


def to_http_response(outcome: Outcome) -> Tuple[int, Dict[str, Any]]:
    """
    Map an outcome to (status code, JSON body) for an HTTP hosting layer

    Success bodies carry the group record; failures carry the message.
    """
    if isinstance(outcome, Err):
        return outcome.failure.status_code, {"message": outcome.failure.message}

    value = outcome.value
    if is_dataclass(value):
        body = {
            name: (v.isoformat() if hasattr(v, "isoformat") else v)
            for name, v in asdict(value).items()
        }
    else:
        body = {"result": value}
    return 201, body
