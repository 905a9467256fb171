"""Raw form configuration.

RawFormConfig is a frozen dataclass — immutable after creation, passed
explicitly to ``Message.to_raw`` instead of read from module globals.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RawFormConfig:
    """Options for exporting a message to its raw form. Immutable after creation.

    Override what you need::

        config = RawFormConfig(payload_encoding="latin-1")
        raw = message.to_raw(config=config)
    """

    # Codec applied to ``str`` payloads when normalizing to bytes
    payload_encoding: str = "utf-8"
    encoding_errors: str = "strict"


DEFAULT_CONFIG = RawFormConfig()
