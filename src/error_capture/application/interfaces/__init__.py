from .ports import EnvironmentSnapshot, KeyValueStorage, RemoteSink

__all__ = [
    "EnvironmentSnapshot",
    "KeyValueStorage",
    "RemoteSink",
]
