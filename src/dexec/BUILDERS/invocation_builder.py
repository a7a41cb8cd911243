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
Assembly of a dexec container invocation from parsed command-line options.
"""
import logging
import os
from typing import List, Optional

from ..errors import NoSourceFiles, UnmappedExtension
from ..MODELS.invocation import InvocationPlan, MountDescriptor
from ..MODELS.options import OptionSet, OptionType
from ..PARSERS.extension_parser import extract_file_extension
from ..PARSERS.path_spec_parser import PathSpecParser
from ..REGISTRY.image_lookup import image_reference, resolve_image

logger = logging.getLogger(__name__)

BUILD_ROOT = "/tmp/dexec/build"
BUILD_ARG_FLAG = "-b"
ARG_FLAG = "-a"


class InvocationBuilder:
    """
    Builds an InvocationPlan for the dexec image matching the first source.

    The builder does no I/O apart from resolving the working directory to an
    absolute path. It either returns a complete plan or raises.
    """

    def __init__(self, build_root: str = BUILD_ROOT):
        """
        Initializes the builder.

        :param build_root: Directory inside the container that sources are mounted under.
        """
        self.build_root = build_root
        self.parser = PathSpecParser()

    def build(self, options: OptionSet) -> InvocationPlan:
        """
        Resolves the image from the first source file and builds the plan.

        :param options: Parsed options.
        :return: The invocation plan.
        :raises NoSourceFiles: If no source file was given.
        :raises InvalidFilename: If the first source has no extension.
        :raises UnmappedExtension: If the extension has no image.
        """
        sources = self._values(options, OptionType.SOURCE)
        if not sources:
            raise NoSourceFiles()

        extension = extract_file_extension(sources[0])
        image = resolve_image(extension)
        logger.debug("Resolved %s to image %s", sources[0], image)
        return self.build_for_image(image, options, extension)

    def build_for_image(self, image: Optional[str], options: OptionSet,
                        extension: Optional[str] = None) -> InvocationPlan:
        """
        Builds the plan for an already resolved image.

        :param image: Image identifier, e.g. ``python``.
        :param options: Parsed options.
        :param extension: Extension the image was resolved from, reported when no image is given.
            Defaults to the extension of the first source.
        :return: The invocation plan.
        """
        if not image:
            if extension is None:
                sources = self._values(options, OptionType.SOURCE)
                extension = extract_file_extension(sources[0]) if sources else ""
            raise UnmappedExtension(extension)

        working_dir = self.resolve_working_dir(options)
        sources = self._values(options, OptionType.SOURCE)
        includes = self._values(options, OptionType.INCLUDE)

        mounts = [self.mount_for(working_dir, entry) for entry in sources + includes]
        entrypoint_args = self.entrypoint_args(options)

        plan = InvocationPlan(
            image=image,
            image_reference=image_reference(image),
            working_dir=working_dir,
            mounts=mounts,
            entrypoint_args=entrypoint_args,
            pull_first=bool(self._values(options, OptionType.UPDATE_FLAG)),
        )
        logger.debug("Built invocation plan: %s", plan)
        return plan

    def resolve_working_dir(self, options: OptionSet) -> str:
        """
        Returns the absolute directory that sources are resolved against.
        """
        target_dirs = self._values(options, OptionType.TARGET_DIR)
        path = target_dirs[0] if target_dirs else "."
        return os.path.abspath(path)

    def mount_for(self, working_dir: str, entry: str) -> MountDescriptor:
        """
        Creates the mount for one source or include entry.

        The container side keeps the raw entry so that a ``:ro``/``:rw``
        suffix ends up as docker's mount option.
        """
        spec = self.parser.parse(entry)
        return MountDescriptor(
            basename=spec.basename,
            host_path=f"{working_dir}/{spec.basename}",
            container_path=f"{self.build_root}/{spec.raw}",
            permission=spec.permission,
        )

    def entrypoint_args(self, options: OptionSet) -> List[str]:
        """
        Returns source basenames, then flagged build args, then flagged run args.
        """
        args = [self.parser.parse(source).basename
                for source in self._values(options, OptionType.SOURCE)]
        args += self._with_flag(self._values(options, OptionType.BUILD_ARG), BUILD_ARG_FLAG)
        args += self._with_flag(self._values(options, OptionType.ARG), ARG_FLAG)
        return args

    @staticmethod
    def _with_flag(values: List[str], flag: str) -> List[str]:
        flagged = []
        for value in values:
            flagged.extend([flag, value])
        return flagged

    @staticmethod
    def _values(options: OptionSet, kind: OptionType) -> List[str]:
        return list(options.get(kind, []))
