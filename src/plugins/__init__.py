"""
Plugin activation for the record pipeline
"""

from .activation import (
    PluginActivationError,
    PluginActivator,
    PluginDescriptor,
    is_plugin_compatible,
)

__all__ = [
    "PluginActivationError",
    "PluginActivator",
    "PluginDescriptor",
    "is_plugin_compatible",
]
