"""Message protocol between the host page and the rendering context.

Inbound messages (document → host) are validated at the boundary into a
tagged union keyed on the wire field ``type``. Anything that does not validate
is ignored by the caller rather than half-applied.

Wire formats:
    {"type": "VIZ_READY", "payload": {"stepInfo": {"current": 0, "total": N}}}
    {"type": "STEP_UPDATE", "payload": {"current": i, "total": N,
                                        "explanation": "..."}}
    {"type": "VIZ_COMMAND", "command": "play"}   # host → document (widget bridge)
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

READY_TYPE = "VIZ_READY"
STEP_UPDATE_TYPE = "STEP_UPDATE"
COMMAND_TYPE = "VIZ_COMMAND"


class MessageKind(str, Enum):
    """Kinds of inbound messages."""

    READY = "ready"
    STEP_CHANGED = "step_changed"


class Command(str, Enum):
    """Entry points the generated document exposes."""

    PLAY = "play"
    PAUSE = "pause"
    NEXT_STEP = "nextStep"
    PREV_STEP = "prevStep"
    RESTART = "restart"


class StepInfo(BaseModel):
    """Step position reported with VIZ_READY."""

    current: int = Field(default=0, ge=0)
    total: int = Field(ge=0)


class ReadyPayload(BaseModel):
    """Payload of VIZ_READY."""

    model_config = ConfigDict(populate_by_name=True)

    step_info: StepInfo = Field(alias="stepInfo")


class StepUpdatePayload(BaseModel):
    """Payload of STEP_UPDATE."""

    current: int = Field(ge=0)
    total: int = Field(ge=0)
    explanation: str = ""


class ReadyMessage(BaseModel):
    """The document finished initializing."""

    model_config = ConfigDict(frozen=True)

    type: Literal["VIZ_READY"]
    payload: ReadyPayload

    @property
    def kind(self) -> MessageKind:
        return MessageKind.READY

    @property
    def total_steps(self) -> int:
        return self.payload.step_info.total


class StepChangedMessage(BaseModel):
    """The document moved to another step."""

    model_config = ConfigDict(frozen=True)

    type: Literal["STEP_UPDATE"]
    payload: StepUpdatePayload

    @property
    def kind(self) -> MessageKind:
        return MessageKind.STEP_CHANGED

    @property
    def current_step_index(self) -> int:
        return self.payload.current

    @property
    def total_steps(self) -> int:
        return self.payload.total

    @property
    def explanation(self) -> str:
        return self.payload.explanation


Message = Annotated[
    Union[ReadyMessage, StepChangedMessage], Field(discriminator="type")
]

_MESSAGE_ADAPTER: TypeAdapter[Message] = TypeAdapter(Message)
_KNOWN_TYPES = {READY_TYPE, STEP_UPDATE_TYPE}


def parse_message(data: Any) -> Optional[Message]:
    """Validate raw message data into a typed message.

    Returns None for anything unrecognized or malformed.
    """
    if not isinstance(data, dict):
        logger.debug(f"Ignoring non-object message: {data!r}")
        return None
    msg_type = data.get("type")
    if not isinstance(msg_type, str) or msg_type not in _KNOWN_TYPES:
        logger.debug(f"Ignoring message with unrecognized type: {msg_type!r}")
        return None
    try:
        return _MESSAGE_ADAPTER.validate_python(data)
    except PydanticValidationError as e:
        logger.warning(f"Ignoring malformed {msg_type} message: {e.errors()}")
        return None
