"""Settings configuration"""

import os
from typing import Dict
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class PipelineConfig:
    """Record pipeline configuration"""

    def __init__(self):
        self.pipeline_name = os.getenv("PIPELINE_NAME", "telemetry-pipeline")

        # Plugin activation
        self.enforce_plugin_versions = (
            os.getenv("ENFORCE_PLUGIN_VERSIONS", "true").lower() == "true"
        )

        # Dead-letter routing
        self.dead_letter_enabled = (
            os.getenv("DEAD_LETTER_ENABLED", "true").lower() == "true"
        )

        # Field mappings, e.g. "speed:double,gear:integer"
        self.field_mappings = self._get_field_mappings()

    def _get_field_mappings(self) -> Dict[str, str]:
        """Parse declared field types from the environment"""

        mappings = {}
        raw = os.getenv("FIELD_MAPPINGS", "")
        for entry in raw.split(","):
            entry = entry.strip()
            if not entry:
                continue
            field_name, _, type_name = entry.partition(":")
            if not type_name:
                raise ValueError(f"Invalid field mapping entry: '{entry}'")
            mappings[field_name.strip()] = type_name.strip()
        return mappings


# Global config instance
pipeline_config = PipelineConfig()
