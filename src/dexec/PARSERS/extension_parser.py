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
Extraction of the language extension from a source filename.
"""
import logging
import re

from ..errors import InvalidFilename

logger = logging.getLogger(__name__)

# name.ext:ro -> ext
_PERMISSION_PATTERN = re.compile(r".*\.(.*):.*")
# name.ext -> ext
_FILENAME_PATTERN = re.compile(r".*\.(.*)")


def extract_file_extension(filename: str) -> str:
    """
    Returns the extension of a filename, i.e. everything after the last dot.

    A trailing mount permission (``main.py:ro``) is not part of the
    extension. A filename ending in a dot yields an empty extension.

    Args:
        filename (str): Source filename, optionally with a permission suffix.

    Returns:
        str: The extension token.

    Raises:
        InvalidFilename: If the filename has no dot.
    """
    match = _PERMISSION_PATTERN.search(filename)
    if match is None:
        match = _FILENAME_PATTERN.search(filename)
    if match is None:
        raise InvalidFilename(filename)

    extension = match.group(1)
    logger.debug("Extension of %s is %r", filename, extension)
    return extension
