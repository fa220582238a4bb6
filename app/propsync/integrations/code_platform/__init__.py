"""Code platform (repository file API) integration."""

from propsync.integrations.code_platform.client import (
    CodePlatformClient,
    FormatError,
    decode_file_content,
    encode_file_content,
)

__all__ = [
    "CodePlatformClient",
    "FormatError",
    "decode_file_content",
    "encode_file_content",
]
