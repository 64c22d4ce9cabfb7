import cg_plugin_host
from cg_plugin_host import (
    ApiResponse,
    CommunityInfoResponsePayload,
    HostMessage,
    IrcCredentials,
    MessageType,
    PluginConfig,
    UserFriendsResponsePayload,
    UserInfoResponsePayload,
)


def test_default_export_is_host_class():
    assert cg_plugin_host.default is cg_plugin_host.CgPluginLibHost


def test_host_message_wire_names():
    msg = HostMessage.model_validate({
        "type": "api_request",
        "iframeUid": "frame-1",
        "requestId": "req1",
        "method": "getUserInfo",
        "signature": "c2ln",
    })
    assert msg.type is MessageType.API_REQUEST
    assert msg.iframe_uid == "frame-1"
    dumped = msg.model_dump(by_alias=True, exclude_none=True)
    assert dumped == {
        "type": "api_request",
        "iframeUid": "frame-1",
        "requestId": "req1",
        "method": "getUserInfo",
        "signature": "c2ln",
    }


def test_api_response_wraps_user_info():
    resp = ApiResponse[UserInfoResponsePayload].model_validate({
        "success": True,
        "data": {"id": "u1", "name": "Ada", "roles": ["r1"], "twitter": {"username": "ada"}},
    })
    assert resp.data.twitter.username == "ada"
    assert resp.data.email is None
    assert resp.error is None


def test_community_and_friends_payloads():
    community = CommunityInfoResponsePayload.model_validate({
        "id": "c1",
        "title": "Guild",
        "roles": [{"id": "r1", "title": "Member", "assignmentRules": {"type": "free"}}],
    })
    assert community.roles[0].assignment_rules.type == "free"
    friends = UserFriendsResponsePayload.model_validate(
        {"friends": [{"id": "f1", "name": "Bo", "imageUrl": "https://example.org/bo.png"}]}
    )
    assert friends.friends[0].image_url.endswith("bo.png")


def test_snake_case_population():
    creds = IrcCredentials(success=True, irc_username="u", irc_password="p", network_name="net")
    assert creds.model_dump(by_alias=True)["ircUsername"] == "u"
    cfg = PluginConfig(iframe_uid="f", sign_endpoint="/api/sign", public_key="MFkw")
    assert cfg.model_dump(by_alias=True) == {"iframeUid": "f", "signEndpoint": "/api/sign", "publicKey": "MFkw"}
