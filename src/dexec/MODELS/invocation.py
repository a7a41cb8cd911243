"""
Models describing a resolved dexec container invocation.
"""
from typing import List
from pydantic import BaseModel


class PathSpec(BaseModel):
    """
    A source or include entry split into its name and mount permission.
    """
    raw: str
    basename: str
    permission: str = ""  # "ro", "rw" or empty


class MountDescriptor(BaseModel):
    """
    Binds a host file or directory into the container build root.
    """
    basename: str
    host_path: str
    container_path: str
    permission: str = ""

    @property
    def volume_spec(self) -> str:
        """Value for docker's ``-v`` option."""
        return f"{self.host_path}:{self.container_path}"


class InvocationPlan(BaseModel):
    """
    Everything needed to launch one dexec container.
    """
    image: str
    image_reference: str
    working_dir: str
    mounts: List[MountDescriptor] = []
    entrypoint_args: List[str] = []
    pull_first: bool = False

    @property
    def docker_args(self) -> List[str]:
        """Volume arguments for ``docker run``, in mount order."""
        args = []
        for mount in self.mounts:
            args.extend(["-v", mount.volume_spec])
        return args
