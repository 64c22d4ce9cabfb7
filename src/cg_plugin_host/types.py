"""Shared plugin protocol types.

Same shapes the client library uses. Field names are snake_case in Python and
camelCase on the wire; models accept either spelling and dump aliases with
``model_dump(by_alias=True)``.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiResponse(WireModel, Generic[T]):
    data: T
    success: bool
    error: Optional[str] = None


class SocialAccount(WireModel):
    username: str


class UserInfoResponsePayload(WireModel):
    id: str
    name: str
    email: Optional[str] = None
    roles: List[str]
    twitter: Optional[SocialAccount] = None
    lukso: Optional[SocialAccount] = None
    farcaster: Optional[SocialAccount] = None


class AssignmentRules(WireModel):
    type: str
    requirements: Any = None


class CommunityRole(WireModel):
    id: str
    title: str
    description: Optional[str] = None
    assignment_rules: Optional[AssignmentRules] = None


class CommunityInfoResponsePayload(WireModel):
    id: str
    title: str
    description: Optional[str] = None
    roles: List[CommunityRole]


class Friend(WireModel):
    id: str
    name: str
    image_url: str


class UserFriendsResponsePayload(WireModel):
    friends: List[Friend]


class IrcCredentials(WireModel):
    success: bool
    irc_username: str
    irc_password: str
    network_name: str


class MessageType(str, Enum):
    """postMessage types exchanged between plugin iframe and host."""

    API_REQUEST = "api_request"
    API_RESPONSE = "api_response"
    INIT = "init"
    ERROR = "error"


class HostMessage(WireModel):
    type: MessageType
    iframe_uid: str
    request_id: str
    method: Optional[str] = None
    params: Any = None
    data: Any = None
    error: Optional[str] = None
    # signature over the signed request, see CgPluginLibHost.sign_request
    signature: Optional[str] = None


class PluginConfig(WireModel):
    iframe_uid: str
    sign_endpoint: str
    public_key: str


__all__ = [
    "ApiResponse",
    "UserInfoResponsePayload",
    "CommunityInfoResponsePayload",
    "UserFriendsResponsePayload",
    "IrcCredentials",
    "MessageType",
    "HostMessage",
    "PluginConfig",
]
