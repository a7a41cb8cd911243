"""
Loading of dexec settings from the environment and .env files.
"""
import os
from typing import Dict, Mapping, Optional

from dotenv import dotenv_values
from pydantic import ValidationError

from ..errors import ConfigurationError
from ..MODELS.settings import DexecSettings

ENV_PREFIX = "DEXEC_"


class EnvironmentManager:
    """
    Merges a .env file with the process environment and builds DexecSettings.
    """
    def __init__(self, base_dir: str = ".", env_file: str = ".env"):
        """
        Initializes the environment manager.

        :param base_dir: The directory the .env file is resolved against.
        :param env_file: Name of the .env file.
        """
        self.base_dir = base_dir
        self.env_file = env_file

    def get_merged_environment(self, environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        """
        Returns the .env file values overridden by the process environment.

        :param environ: Environment to use instead of ``os.environ``.
        """
        merged: Dict[str, str] = {}
        file_path = os.path.join(self.base_dir, self.env_file)
        if os.path.exists(file_path):
            for key, value in dotenv_values(file_path).items():
                if value is not None:
                    merged[key] = value

        merged.update(os.environ if environ is None else environ)
        return merged

    def load_settings(self, environ: Optional[Mapping[str, str]] = None) -> DexecSettings:
        """
        Builds settings from ``DEXEC_*`` variables.

        :raises ConfigurationError: If a variable has an invalid value.
        """
        values = {
            key[len(ENV_PREFIX):].lower(): value
            for key, value in self.get_merged_environment(environ).items()
            if key.startswith(ENV_PREFIX)
        }
        fields = {key: value for key, value in values.items() if key in DexecSettings.model_fields}
        try:
            return DexecSettings(**fields)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid dexec settings: {e}") from e
