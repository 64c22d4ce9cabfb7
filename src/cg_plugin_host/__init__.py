"""Drop-in replacement for Common Ground's plugin host library.

Server-side request signing for plugins that authenticate requests to the
host application::

    from cg_plugin_host import CgPluginLibHost

    host = await CgPluginLibHost.initialize(private_key, public_key)
    signed = await host.sign_request(request_data)
"""

from .host import CgPluginLibHost, SignRequestResult
from .crypto.alg_registry import AlgorithmTag
from .errors import GenerationError, HostLibError, KeyImportError, SigningError
from .types import (
    ApiResponse,
    CommunityInfoResponsePayload,
    HostMessage,
    IrcCredentials,
    MessageType,
    PluginConfig,
    UserFriendsResponsePayload,
    UserInfoResponsePayload,
)

# Some plugins import the class as the package's default export
default = CgPluginLibHost

__version__ = "1.0.2"
__all__ = [
    "CgPluginLibHost",
    "SignRequestResult",
    "AlgorithmTag",
    "HostLibError",
    "KeyImportError",
    "SigningError",
    "GenerationError",
    "ApiResponse",
    "UserInfoResponsePayload",
    "CommunityInfoResponsePayload",
    "UserFriendsResponsePayload",
    "IrcCredentials",
    "MessageType",
    "HostMessage",
    "PluginConfig",
    "default",
]
