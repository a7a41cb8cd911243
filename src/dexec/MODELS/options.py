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
Option kinds produced by the command line and consumed by the invocation builder.
"""
from enum import Enum
from typing import Dict, List


class OptionType(str, Enum):
    """
    Kinds of options dexec understands.
    """
    SOURCE = "source"
    INCLUDE = "include"
    BUILD_ARG = "build_arg"
    ARG = "arg"
    TARGET_DIR = "target_dir"
    UPDATE_FLAG = "update"
    HELP_FLAG = "help"
    VERSION_FLAG = "version"


# Each option kind maps to the ordered values given for it. Flags are
# present when their list is non-empty.
OptionSet = Dict[OptionType, List[str]]
