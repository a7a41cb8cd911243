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
Mapping from source file extensions to dexec Docker images.
"""
from types import MappingProxyType
from typing import Mapping, Optional

from ..errors import UnmappedExtension

IMAGE_NAMESPACE = "dexec"

_EXTENSION_IMAGES = {
    "c": "c",
    "clj": "clojure",
    "coffee": "coffee",
    "cpp": "cpp",
    "cs": "csharp",
    "d": "d",
    "erl": "erlang",
    "fs": "fsharp",
    "go": "go",
    "groovy": "groovy",
    "hs": "haskell",
    "java": "java",
    "lisp": "lisp",
    "js": "node",
    "m": "objc",
    "ml": "ocaml",
    "pl": "perl",
    "php": "php",
    "py": "python",
    "rkt": "racket",
    "rb": "ruby",
    "rs": "rust",
    "scala": "scala",
    "sh": "bash",
}

# Read-only view; the table never changes at runtime.
EXTENSION_IMAGES: Mapping[str, str] = MappingProxyType(_EXTENSION_IMAGES)


def lookup_image(extension: str) -> Optional[str]:
    """
    Returns the image identifier for an extension, or None if unmapped.

    Lookup is exact: no case folding, no partial matches.
    """
    return EXTENSION_IMAGES.get(extension)


def resolve_image(extension: str) -> str:
    """
    Returns the image identifier for an extension.

    Raises:
        UnmappedExtension: If no image exists for the extension.
    """
    image = lookup_image(extension)
    if image is None:
        raise UnmappedExtension(extension)
    return image


def image_reference(image: str) -> str:
    """Full Docker reference for an image identifier, e.g. ``dexec/python``."""
    return f"{IMAGE_NAMESPACE}/{image}"
