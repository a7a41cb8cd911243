# Copyright 2024 Michael Maillet, Damien Davison, Sacha Davison
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Exceptions raised while resolving and running a dexec invocation.
"""
from typing import Optional


class DexecError(Exception):
    """Base class for all dexec failures."""


class InvalidFilename(DexecError):
    """Raised when a filename carries no extension-bearing dot."""

    def __init__(self, filename: str):
        self.filename = filename
        super().__init__(f"Cannot determine language of '{filename}': no file extension")


class UnmappedExtension(DexecError):
    """Raised when an extension has no known dexec image."""

    def __init__(self, extension: str):
        self.extension = extension
        if extension:
            message = f"No dexec image for extension '{extension}'"
        else:
            message = "No dexec image for a file without extension"
        super().__init__(message)


class NoSourceFiles(DexecError):
    """Raised when an invocation is requested without any source file."""

    def __init__(self):
        super().__init__("At least one source file is required")


class PullError(DexecError):
    """Raised when an image could not be pulled."""

    def __init__(self, image: str, returncode: Optional[int] = None):
        self.image = image
        self.returncode = returncode
        message = f"Failed to pull image {image}"
        if returncode is not None:
            message += f" (exit code {returncode})"
        super().__init__(message)


class ConfigurationError(DexecError):
    """Raised when dexec settings are invalid."""
