"""
Plugin activation gate
Approves or rejects plugins based on the pipeline version they declare
"""

from dataclasses import dataclass
from typing import Optional

from config.logging import get_logger
from config.settings import pipeline_config
from src.versioning import (
    MalformedVersionError,
    PipelineVersion,
    current_version,
)

logger = get_logger("plugins.activation")


class PluginActivationError(Exception):
    """Raised when a plugin cannot be activated"""

    def __init__(
        self,
        message: str,
        plugin_name: str = "",
        declared_version: str = "",
        host_version: str = "",
    ):
        super().__init__(message)
        self.plugin_name = plugin_name
        self.declared_version = declared_version
        self.host_version = host_version


@dataclass(frozen=True)
class PluginDescriptor:
    """Identity of a plugin and the pipeline version it was built against"""

    plugin_id: str
    plugin_name: str
    pipeline_version: str


def is_plugin_compatible(
    declared_version: str, host_version: Optional[PipelineVersion] = None
) -> bool:
    """
    Check a plugin's declared version against the host version

    Args:
        declared_version: Version text the plugin declares
        host_version: Version of the running pipeline (defaults to current)

    Raises:
        MalformedVersionError: If the declared version is not valid
    """
    host = host_version or current_version()
    return PipelineVersion.parse(declared_version).compatible_with(host)


class PluginActivator:
    """
    Gates plugin activation on version compatibility

    With enforcement off, incompatible plugins are activated with a warning.
    Malformed versions are always rejected.
    """

    def __init__(
        self,
        host_version: Optional[PipelineVersion] = None,
        enforce: Optional[bool] = None,
    ):
        self.host_version = host_version or current_version()
        self.enforce = (
            pipeline_config.enforce_plugin_versions if enforce is None else enforce
        )

    def activate(self, descriptor: PluginDescriptor) -> PluginDescriptor:
        """
        Approve a plugin for activation

        Returns:
            The descriptor, when the plugin may run

        Raises:
            PluginActivationError: If the plugin is rejected
        """
        try:
            compatible = is_plugin_compatible(
                descriptor.pipeline_version, self.host_version
            )
        except MalformedVersionError as e:
            logger.error(
                "Rejected plugin %s: %s", descriptor.plugin_name, str(e)
            )
            raise PluginActivationError(
                f"Plugin {descriptor.plugin_name} declares a malformed version",
                descriptor.plugin_name,
                str(descriptor.pipeline_version),
                str(self.host_version),
            ) from e

        if compatible:
            logger.info(
                "Activated plugin %s (version %s, host %s)",
                descriptor.plugin_name,
                descriptor.pipeline_version,
                self.host_version,
            )
            return descriptor

        if not self.enforce:
            logger.warning(
                "Plugin %s version %s is incompatible with host %s, activating anyway",
                descriptor.plugin_name,
                descriptor.pipeline_version,
                self.host_version,
            )
            return descriptor

        logger.error(
            "Rejected plugin %s: version %s is incompatible with host %s",
            descriptor.plugin_name,
            descriptor.pipeline_version,
            self.host_version,
        )
        raise PluginActivationError(
            f"Plugin {descriptor.plugin_name} version {descriptor.pipeline_version} "
            f"is incompatible with pipeline version {self.host_version}",
            descriptor.plugin_name,
            descriptor.pipeline_version,
            str(self.host_version),
        )
