from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

class EventSource(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: str = "user"
    user_id: Optional[str] = Field(None, alias="userId")
    group_id: Optional[str] = Field(None, alias="groupId")
    room_id: Optional[str] = Field(None, alias="roomId")

class EventMessage(BaseModel):
    id: Optional[str] = None
    type: str
    text: Optional[str] = None

class WebhookEvent(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: str
    reply_token: Optional[str] = Field(None, alias="replyToken")
    source: EventSource = Field(default_factory=EventSource)
    message: Optional[EventMessage] = None
    timestamp: Optional[int] = None

class PushRequest(BaseModel):
    uid: Optional[str] = None
    message: Optional[str] = None

class UserProfile(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId")
    display_name: str = Field("", alias="displayName")
    picture_url: Optional[str] = Field(None, alias="pictureUrl")
    status_message: str = Field("", alias="statusMessage")
