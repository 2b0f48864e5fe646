"""logsleuth — Rule-based diagnosis of Minecraft logs and crash reports."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("logsleuth")
except PackageNotFoundError:
    __version__ = "0.0.0.dev0"
